"""
Prompt engine scope only. Do not implement beyond this file's responsibilities.
Value types produced by the classifiers and consumed by prompt construction.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

QUESTION_TYPES = ("factual", "analytical", "comparative", "procedural", "creative")
COMPLEXITY_LEVELS = ("low", "medium", "high")
EXPERTISE_LEVELS = ("beginner", "intermediate", "expert")
CONTEXT_PROCESSING_MODES = ("raw", "summarized", "highlighted", "structured")
OUTPUT_FORMATS = ("structured", "detailed", "concise", "stepwise")


@dataclass(frozen=True)
class QuestionAnalysis:
    type: str  # factual|analytical|comparative|procedural|creative
    complexity: str  # low|medium|high
    confidence: float
    length: int
    word_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "complexity": self.complexity,
            "confidence": self.confidence,
            "length": self.length,
            "wordCount": self.word_count,
        }


@dataclass(frozen=True)
class ContextAnalysis:
    domain: str  # general|technical|academic|caller-supplied
    technical_level: str  # low|medium|high
    needs_special_handling: bool
    content_type: str
    length: int
    word_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "technicalLevel": self.technical_level,
            "needsSpecialHandling": self.needs_special_handling,
            "contentType": self.content_type,
            "length": self.length,
            "wordCount": self.word_count,
        }


@dataclass(frozen=True)
class PromptStrategy:
    """Named prompt configuration chosen from question and context analysis."""
    key: str
    name: str
    system_prompt: str
    use_examples: bool
    require_citations: bool
    context_processing: str  # raw|summarized|highlighted|structured


@dataclass(frozen=True)
class Example:
    context: str
    question: str
    answer: str
    reasoning: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.reasoning is None:
            data.pop("reasoning")
        return data


@dataclass
class UserProfile:
    expertise_level: Optional[str] = None
    preferred_format: Optional[str] = None


@dataclass
class BuiltPrompt:
    text: str
    adaptations: List[str] = field(default_factory=list)


@dataclass
class PromptResult:
    """Final adaptive prompt plus observability metadata."""
    prompt: str
    metadata: Dict[str, Any]

    @property
    def strategy(self) -> str:
        return self.metadata.get("strategy", "")

    @property
    def adaptations(self) -> List[str]:
        return self.metadata.get("adaptations", [])


@dataclass
class AdaptivePrompt:
    strategy: str
    prompt: str
