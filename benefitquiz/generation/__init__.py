"""Remote question generation."""

from .client import QuestionGenerator, build_generation_prompt, extract_json_payload
from .normalize import normalize_remote_questions

__all__ = [
    "QuestionGenerator",
    "build_generation_prompt",
    "extract_json_payload",
    "normalize_remote_questions",
]
