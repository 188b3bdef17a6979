"""
FastAPI application for the similarity and prompting demo.
"""

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import logging

from ..core.config import VERSION, debug_enabled, get_chunk_store, llm_enabled, validate_config
from ..core.errors import SimilarityError
from ..util.logging import logger
from .schemas import HealthResponse
from .similarity import router as similarity_router
from .prompting import router as prompting_router
from .prompts import router as prompts_router
from .documents import router as documents_router
from .llm import router as llm_router

# Initialize the FastAPI application
app = FastAPI(
    title="Prompt Lab API",
    version=VERSION,
    description="Vector similarity ranking and adaptive prompt construction",
    docs_url="/docs" if debug_enabled() else None,
    redoc_url="/redoc" if debug_enabled() else None
)

# Add CORS middleware to allow frontend connections
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for issue in validate_config():
    logger.warning(f"Configuration issue: {issue}")


@app.get("/health", response_model=HealthResponse)
def health_check_endpoint():
    """Check system health."""
    stats = get_chunk_store().stats()
    return HealthResponse(
        status="healthy",
        version=VERSION,
        llm_enabled=llm_enabled(),
        documents=stats["total_documents"],
        chunks=stats["total_chunks"],
    )


app.include_router(similarity_router, prefix="/similarity", tags=["similarity"])
app.include_router(prompting_router, prefix="/prompting", tags=["prompting"])
app.include_router(prompts_router, prefix="/prompts", tags=["prompts"])
app.include_router(documents_router, prefix="/documents", tags=["documents"])
app.include_router(llm_router, prefix="/llm", tags=["llm"])


@app.exception_handler(SimilarityError)
async def similarity_exception_handler(request, exc):
    """Invalid vectors or method names are client errors."""
    logger.warning(f"Similarity request rejected: {exc}")
    return JSONResponse(
        status_code=400,
        content={"error": "Similarity calculation failed", "details": str(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Handle all unhandled exceptions."""
    logging.error(f"Unhandled exception: {exc}")
    content = {"detail": "Internal server error"}
    if debug_enabled():
        content["debug"] = str(exc)
    return JSONResponse(
        status_code=500,
        content=content,
    )
