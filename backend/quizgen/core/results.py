# backend/quizgen/core/results.py

import logging
from typing import Any, Dict, List

from pydantic import ValidationError as SchemaValidationError
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from .errors import PersistenceError, ValidationError
from .schemas import QuizResult

logger = logging.getLogger("quiz.results")

DEFAULT_DATABASE = "chat-gpt-app"
COLLECTION = "quizresults"
SERVER_SELECTION_TIMEOUT_MS = 5000

# ------------------------------------------------------------
# Connection
# ------------------------------------------------------------
def configure_mongo(uri: str) -> AsyncMongoClient:
    """Create the MongoDB client. Nothing is contacted until the first operation."""
    return AsyncMongoClient(uri, serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS)


def results_collection(client: AsyncMongoClient):
    return client.get_default_database(DEFAULT_DATABASE)[COLLECTION]


async def check_connection(client: AsyncMongoClient) -> bool:
    """Ping the server and log the outcome. Never raises on connection errors."""
    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        logger.error(f"Error de conexión a MongoDB: {e}")
        return False
    logger.info("MongoDB conectado")
    return True

# ------------------------------------------------------------
# Store
# ------------------------------------------------------------
def _validation_message(exc: SchemaValidationError) -> str:
    if any(err["loc"][:1] == ("name",) for err in exc.errors()):
        return "Por favor, proporciona un nombre."
    return "Las preguntas no tienen un formato válido."


class ResultStore:
    """Save-only repository for QuizResult documents."""

    def __init__(self, collection):
        self.collection = collection

    async def save_result(self, name: str | None, questions: List[Dict[str, Any]]) -> str:
        try:
            result = QuizResult(name=name, questions=questions)
        except SchemaValidationError as e:
            logger.warning(f"Rejected quiz result: {e.errors()}")
            raise ValidationError(_validation_message(e)) from e

        try:
            inserted = await self.collection.insert_one(result.to_document())
        except PyMongoError as e:
            raise PersistenceError("Error al guardar el resultado") from e

        result_id = str(inserted.inserted_id)
        logger.info(f"Saved quiz result id={result_id} name={result.name!r} questions={len(result.questions)}")
        return result_id
