"""Common Ground conversation-question recommendation engine."""

from .engine import generate_questions, refresh_questions
from .models import (
    DepthTier,
    GeneratedQuestion,
    QuestionRequest,
    RecommendationResult,
    SituationTag,
)

__all__ = [
    "generate_questions",
    "refresh_questions",
    "DepthTier",
    "SituationTag",
    "GeneratedQuestion",
    "QuestionRequest",
    "RecommendationResult",
]
