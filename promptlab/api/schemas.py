"""
Request and response models for the similarity and prompting API.
Field names are camelCase to match the JSON the demo frontend sends.
"""

from pydantic import BaseModel, field_validator
from typing import Optional, List, Dict, Any

from ..core.config import DEFAULT_SIMILARITY_METHOD, DEFAULT_TOP_K

VALID_LEVELS = ['beginner', 'intermediate', 'expert']


class HealthResponse(BaseModel):
    status: str
    version: str
    llm_enabled: bool
    documents: int
    chunks: int


# Similarity

class SimilarityTestRequest(BaseModel):
    vectorA: List[Any] = [1, 2, 3, 4, 5]
    vectorB: List[Any] = [2, 3, 4, 5, 6]
    method: str = DEFAULT_SIMILARITY_METHOD


class RankItem(BaseModel):
    embedding: List[Any]
    metadata: Optional[Any] = None


class RankRequest(BaseModel):
    queryEmbedding: List[Any]
    items: List[RankItem]
    method: str = DEFAULT_SIMILARITY_METHOD
    topK: int = DEFAULT_TOP_K


class SimilaritySearchRequest(BaseModel):
    query: Optional[str] = None
    method: str = DEFAULT_SIMILARITY_METHOD
    topK: int = DEFAULT_TOP_K
    documentId: Optional[str] = None


class SimilarityCompareRequest(BaseModel):
    """Either a text query (ranked over stored chunks) or an explicit embedding plus items."""
    query: Optional[str] = None
    queryEmbedding: Optional[List[Any]] = None
    items: Optional[List[RankItem]] = None
    topK: int = 3


# Template prompting

class TemplatePromptRequest(BaseModel):
    question: Optional[str] = None
    context: Optional[str] = None
    domain: str = 'general'
    numExamples: int = 3
    includeExamples: bool = True

    @field_validator('numExamples')
    @classmethod
    def num_examples_must_be_positive(cls, v):
        if v <= 0:
            raise ValueError('numExamples must be positive')
        return v


class AdaptiveTemplateRequest(BaseModel):
    question: Optional[str] = None
    context: Optional[str] = None
    userLevel: str = 'intermediate'
    questionType: str = 'factual'


# Dynamic prompting

class UserProfileModel(BaseModel):
    expertiseLevel: Optional[str] = None
    preferredFormat: Optional[str] = None

    @field_validator('expertiseLevel')
    @classmethod
    def level_must_be_valid(cls, v):
        if v is not None and v not in VALID_LEVELS:
            raise ValueError(f'expertiseLevel must be one of: {VALID_LEVELS}')
        return v


class DynamicPromptRequest(BaseModel):
    question: Optional[str] = None
    context: Optional[str] = None
    userProfile: Optional[UserProfileModel] = None
    documentMetadata: Optional[Dict[str, Any]] = None
    previousInteractions: Optional[List[Dict[str, Any]]] = None

    def profile_dict(self) -> Dict[str, Any]:
        if self.userProfile is None:
            return {}
        return self.userProfile.model_dump(exclude_none=True)


class AnalyzeQuestionRequest(BaseModel):
    question: Optional[str] = None


class EvaluateRequest(BaseModel):
    responses: List[str]
    goldStandard: str

    @field_validator('goldStandard')
    @classmethod
    def gold_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('goldStandard cannot be empty')
        return v


# Documents

class DocumentCreateRequest(BaseModel):
    title: str
    content: str
    metadata: Optional[Dict[str, Any]] = None

    @field_validator('title')
    @classmethod
    def title_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('title cannot be empty')
        return v

    @field_validator('content')
    @classmethod
    def content_must_not_be_empty(cls, v):
        if not v.strip():
            raise ValueError('content cannot be empty')
        return v


class DocumentSummary(BaseModel):
    id: str
    title: str
    totalChunks: int
    contentLength: int
    createdAt: str


class DocumentQueryRequest(BaseModel):
    question: Optional[str] = None
    documentId: Optional[str] = None
    method: str = DEFAULT_SIMILARITY_METHOD
    topK: int = DEFAULT_TOP_K
    userProfile: Optional[UserProfileModel] = None
    generate: bool = False


# Generation

class GenerateRequest(BaseModel):
    question: Optional[str] = None
    context: Optional[str] = None
    userProfile: Optional[UserProfileModel] = None
    options: Optional[Dict[str, Any]] = None


# Structured output
# Field names follow the snake_case JSON of the structured-output endpoints.

class StructuredRequest(BaseModel):
    prompt: Optional[str] = None
    schema_type: str = 'qa_response'


class AnalyzeDocumentTextRequest(BaseModel):
    text: Optional[str] = None


class StructuredEvaluateRequest(BaseModel):
    question: Optional[str] = None
    expected_answer: Optional[str] = None
    actual_answer: Optional[str] = None


class CompareTextsRequest(BaseModel):
    text1: Optional[str] = None
    text2: Optional[str] = None
    method: str = 'semantic'


class StructuredDemoRequest(BaseModel):
    question: str = 'What is artificial intelligence?'


class EmbeddingDemoRequest(BaseModel):
    text: Optional[str] = None
