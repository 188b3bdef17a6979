"""
Prompt engine scope only. Do not implement beyond this file's responsibilities.
Vocabulary-count heuristics for the domain of a retrieval context.
"""

import re
from typing import Any, Dict, Optional

from .types import ContextAnalysis

TECHNICAL_INDICATORS = re.compile(r"(algorithm|function|variable|parameter|method|class|object)", re.IGNORECASE)
ACADEMIC_INDICATORS = re.compile(r"(research|study|analysis|hypothesis|methodology|findings)", re.IGNORECASE)

TECHNICAL_THRESHOLD = 5
ACADEMIC_THRESHOLD = 3


class ContextAnalyzer:
    """Infers domain and technical level of a context. Stateless."""

    def analyze(self, context: str, metadata: Optional[Dict[str, Any]] = None) -> ContextAnalysis:
        """
        Analyze a context passage.

        Technical vocabulary is counted first, academic second; when both
        thresholds are crossed the academic domain wins. Caller metadata
        ``domain`` and ``type`` override whatever was inferred.
        """
        metadata = metadata or {}

        domain = "general"
        technical_level = "medium"
        needs_special_handling = False
        content_type = "text"

        if len(TECHNICAL_INDICATORS.findall(context)) > TECHNICAL_THRESHOLD:
            technical_level = "high"
            domain = "technical"
            needs_special_handling = True

        if len(ACADEMIC_INDICATORS.findall(context)) > ACADEMIC_THRESHOLD:
            domain = "academic"
            needs_special_handling = True

        if metadata.get("type"):
            content_type = metadata["type"]

        if metadata.get("domain"):
            domain = metadata["domain"]

        return ContextAnalysis(
            domain=domain,
            technical_level=technical_level,
            needs_special_handling=needs_special_handling,
            content_type=content_type,
            length=len(context),
            word_count=len(context.split()),
        )
