"""
Request dependencies. The process-wide collaborators live on app.state;
routes receive them through Depends() so tests can swap them out.
"""
from fastapi import Request
from openai import AsyncOpenAI

from quizgen.core.config import Settings
from quizgen.core.errors import PersistenceError
from quizgen.core.openai_qg import QuestionGenerator
from quizgen.core.results import ResultStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_openai_client(request: Request) -> AsyncOpenAI:
    return request.app.state.openai_client


def get_question_generator(request: Request) -> QuestionGenerator:
    return request.app.state.generator


def get_result_store(request: Request) -> ResultStore:
    """The store is created in the lifespan; before that there is nothing to write to."""
    store = getattr(request.app.state, "results", None)
    if store is None:
        raise PersistenceError("Error al guardar el resultado")
    return store
