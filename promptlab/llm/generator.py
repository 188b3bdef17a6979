"""
Answer generation with a local Ollama model.
Errors are captured into the result instead of being raised.
"""

import ollama
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ..core.config import LLM_TEMPERATURE, OLLAMA_MODEL
from ..util.logging import logger


@dataclass
class GenerationResult:
    """Output of one generation call."""
    content: str
    """Generated text (empty on error)"""

    model_used: str
    """Ollama model name"""

    processing_time_ms: int = 0
    """Wall-clock time spent in the model call"""

    error: Optional[str] = None
    """Error description when the call failed"""

    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "modelUsed": self.model_used,
            "processingTimeMs": self.processing_time_ms,
            "error": self.error,
        }


class OllamaGenerator:
    """
    Sends a finished prompt to a local Ollama model as a single user message.
    """

    def __init__(self, model_name: str = OLLAMA_MODEL, temperature: float = LLM_TEMPERATURE):
        self.model_name = model_name
        self.temperature = temperature

    def generate(self, prompt: str, options: Optional[Dict[str, Any]] = None,
                 response_format: Optional[str] = None) -> GenerationResult:
        """
        Generate a completion for the prompt.

        Args:
            prompt: Fully assembled prompt text
            options: Extra Ollama sampling options merged over the defaults
            response_format: Ollama output format, e.g. "json"; plain text when None

        Returns:
            GenerationResult; ``error`` is set when the model call failed
        """
        call_options = {'temperature': self.temperature, 'top_p': 0.9}
        if options:
            call_options.update(options)

        chat_kwargs = {}
        if response_format:
            chat_kwargs['format'] = response_format

        start_time = datetime.now()
        try:
            response = ollama.chat(
                model=self.model_name,
                messages=[{'role': 'user', 'content': prompt}],
                options=call_options,
                **chat_kwargs
            )
        except ollama.ResponseError as e:
            return self._error_result(f"Ollama model error: {str(e)}", prompt, start_time)
        except Exception as e:
            return self._error_result(f"Generation failed: {str(e)}", prompt, start_time)

        processing_time = int((datetime.now() - start_time).total_seconds() * 1000)
        content = response.get('message', {}).get('content', '') or ''

        logger.log_llm_call(self.model_name, len(prompt), processing_time)

        return GenerationResult(
            content=content,
            model_used=self.model_name,
            processing_time_ms=processing_time,
            metadata={
                'timestamp': datetime.now().isoformat(),
                'prompt_length': len(prompt),
                'response_length': len(content),
            }
        )

    def _error_result(self, error_msg: str, prompt: str, start_time: datetime) -> GenerationResult:
        processing_time = int((datetime.now() - start_time).total_seconds() * 1000)
        logger.log_llm_call(self.model_name, len(prompt), processing_time, status="error", error=error_msg)
        return GenerationResult(
            content="",
            model_used=self.model_name,
            processing_time_ms=processing_time,
            error=error_msg,
            metadata={'timestamp': datetime.now().isoformat(), 'error_occurred': True}
        )


def check_ollama_health(model_name: str = OLLAMA_MODEL) -> bool:
    """Check if Ollama is reachable and the model is pulled."""
    try:
        models = ollama.list()
        model_names = [model.get('model') or model.get('name') for model in models.get('models', [])]
        return model_name in model_names
    except Exception:
        return False
