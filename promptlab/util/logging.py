"""
Structured logging for similarity queries, prompt generation and model calls.
"""

import logging
from typing import Any, Dict, List


def sanitize_text(text: Any, limit: int = 50) -> Any:
    """Truncate free text before it reaches the logs."""
    if isinstance(text, str) and len(text) > limit:
        return text[:limit] + "..."
    return text


class StructuredLogger:
    """Structured logger for similarity, prompting and generation operations."""

    def __init__(self, name: str = "promptlab"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_similarity_query(self, method: str, item_count: int, top_k: int, duration_ms: float, failed_items: int = 0):
        """Log a ranking run over a batch of items."""
        details = {
            "method": method,
            "item_count": item_count,
            "top_k": top_k,
            "duration_ms": round(duration_ms, 3),
        }
        if failed_items:
            details["failed_items"] = failed_items
            self.log_operation("similarity.rank", "partial", details, level=logging.WARNING)
            return

        self.log_operation("similarity.rank", "success", details)

    def log_ranking_item_error(self, index: int, method: str, error: str):
        """Log a single item that could not be scored."""
        self.log_operation(
            "similarity.item",
            "failed",
            {"index": index, "method": method, "error": sanitize_text(error, 100)},
            level=logging.WARNING,
        )

    def log_prompt_generated(self, strategy: str, question_type: str, expertise_level: str, adaptations: List[str], prompt_length: int):
        """Log an adaptive prompt build."""
        details = {
            "strategy": strategy,
            "question_type": question_type,
            "expertise_level": expertise_level,
            "adaptations": adaptations,
            "prompt_length": prompt_length,
        }
        self.log_operation("prompt.generated", "success", details)

    def log_prompt_fallback(self, question: Any, error: Exception):
        """Log a fallback prompt substitution."""
        details = {
            "question": sanitize_text(question),
            "error_type": type(error).__name__,
            "error": sanitize_text(str(error), 100),
        }
        self.log_operation("prompt.fallback", "degraded", details, level=logging.WARNING)

    def log_template_prompt(self, technique: str, details: Dict[str, Any] = None):
        """Log a non-adaptive template prompt."""
        log_details = {"technique": technique}
        if details:
            log_details.update(details)
        self.log_operation("prompt.template", "success", log_details)

    def log_document_ingested(self, document_id: str, title: str, chunk_count: int, dimension: int):
        """Log a document split into embedded chunks."""
        details = {
            "document_id": document_id,
            "title": sanitize_text(title),
            "chunk_count": chunk_count,
            "dimension": dimension,
        }
        self.log_operation("documents.ingest", "success", details)

    def log_llm_call(self, model: str, prompt_length: int, duration_ms: int, status: str = "success", error: str = None):
        """Log a generation call."""
        details = {"model": model, "prompt_length": prompt_length, "duration_ms": duration_ms}
        if error:
            details["error"] = sanitize_text(error, 100)
        level = logging.INFO if status == "success" else logging.ERROR
        self.log_operation("llm.generate", status, details, level=level)

    def log_structured_response(self, schema_type: str, status: str, tokens: int, error: str = None):
        """Log a JSON-mode generation checked against a schema."""
        details = {"schema_type": schema_type, "tokens": tokens}
        if error:
            details["error"] = sanitize_text(error, 100)
        level = logging.INFO if status == "success" else logging.WARNING
        self.log_operation("llm.structured", status, details, level=level)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()
