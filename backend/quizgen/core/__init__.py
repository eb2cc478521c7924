# backend/quizgen/core/__init__.py
"""
Core package for the quiz backend.
Only exposes schemas for request/response models.
"""

from .schemas import (
    QuestionsRequest,
    QuizResultRequest,
    ChatRequest,
    QuestionsResponse,
    MessageResponse,
    StatusResponse,
    ChatResponse,
)

__all__ = [
    "QuestionsRequest",
    "QuizResultRequest",
    "ChatRequest",
    "QuestionsResponse",
    "MessageResponse",
    "StatusResponse",
    "ChatResponse",
]
