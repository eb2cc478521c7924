# backend/quizgen/app.py

import sys, asyncio, logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.status import HTTP_422_UNPROCESSABLE_CONTENT
from openai import AsyncOpenAI
from dotenv import load_dotenv

from quizgen.chat_routes import router as chat_router
from quizgen.core.config import Settings, load_settings
from quizgen.core.errors import ConfigError, PersistenceError, QuizError, ValidationError
from quizgen.core.openai_qg import QuestionGenerator, configure_openai
from quizgen.core.results import ResultStore, check_connection, configure_mongo, results_collection
from quizgen.core.schemas import (
    MessageResponse,
    QuestionsRequest,
    QuestionsResponse,
    QuizResultRequest,
    StatusResponse,
)
from quizgen.deps import get_question_generator, get_result_store, get_settings

# ------------------------------------------------------------
# Setup
# ------------------------------------------------------------
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("quiz")

# Middleware to log requests
class LogRequestMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        logger.info(f"Incoming {request.method} {request.url.path}")
        if logger.isEnabledFor(logging.DEBUG):
            try:
                body = await request.body()
                logger.debug(f"body={body.decode('utf-8')}")
            except Exception:
                logger.warning("Could not read request body")
        return await call_next(request)

# ------------------------------------------------------------
# Lifespan
# ------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    mongo = None
    ping_task = None
    if app.state.results is None:
        mongo = configure_mongo(app.state.settings.mongodb_uri)
        app.state.results = ResultStore(results_collection(mongo))
        # The listener starts whether or not MongoDB answers.
        ping_task = asyncio.create_task(check_connection(mongo))

    yield

    if ping_task is not None and not ping_task.done():
        ping_task.cancel()
    if mongo is not None:
        await mongo.close()
    if app.state.owns_openai_client:
        await app.state.openai_client.close()

# ------------------------------------------------------------
# Application factory
# ------------------------------------------------------------
def create_app(
    settings: Settings | None = None,
    *,
    openai_client: AsyncOpenAI | None = None,
    results_store: ResultStore | None = None,
) -> FastAPI:
    settings = settings or load_settings()
    logger.setLevel(settings.log_level)

    app = FastAPI(title="Quiz Generator API", lifespan=lifespan)

    app.state.settings = settings
    app.state.owns_openai_client = openai_client is None
    app.state.openai_client = openai_client or configure_openai(settings.openai_api_key)
    app.state.generator = QuestionGenerator(app.state.openai_client, model_name=settings.openai_model)
    app.state.results = results_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(LogRequestMiddleware)

    _register_exception_handlers(app)
    _register_routes(app)
    app.include_router(chat_router)  # /api/chat
    return app

# ------------------------------------------------------------
# Exception handlers
# ------------------------------------------------------------
def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(QuizError)
    async def quiz_exception_handler(request: Request, exc: QuizError):
        if exc.status_code >= 500:
            logger.error(
                f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.__cause__!r}",
                exc_info=exc.__cause__ or exc,
            )
        else:
            logger.info(f"{type(exc).__name__}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.error(f"Validation error: {exc.errors()}")
        return JSONResponse(
            status_code=HTTP_422_UNPROCESSABLE_CONTENT,
            content={"error": "Solicitud no válida.", "detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Algo salió mal!"})

# ------------------------------------------------------------
# Routes
# ------------------------------------------------------------
def _register_routes(app: FastAPI) -> None:
    @app.get("/", response_model=StatusResponse)
    async def root():
        return {
            "message": "API de ChatGPT funcionando correctamente",
            "status": "OpenAI configurado",
        }

    @app.post("/api/questions", response_model=QuestionsResponse)
    async def questions_route(
        req: QuestionsRequest | None = None,
        generator: QuestionGenerator = Depends(get_question_generator),
    ):
        req = req or QuestionsRequest()  # no body behaves like {}
        questions = await generator.generate_questions(req.topic)
        return {"questions": questions}

    @app.post("/api/quiz-result", response_model=MessageResponse)
    async def quiz_result_route(
        req: QuizResultRequest | None = None,
        store: ResultStore = Depends(get_result_store),
        settings: Settings = Depends(get_settings),
    ):
        req = req or QuizResultRequest()
        try:
            await store.save_result(req.name, req.questions)
        except ValidationError as e:
            if settings.missing_name_status == 400:
                raise
            raise PersistenceError("Error al guardar el resultado") from e
        return {"message": "Resultado guardado correctamente"}

# ------------------------------------------------------------
# Entry point
# ------------------------------------------------------------
def main() -> None:
    load_dotenv()
    try:
        settings = load_settings()
    except ConfigError as e:
        logger.critical(f"Error: {e}")
        sys.exit(1)

    app = create_app(settings)
    logger.info(f"Servidor corriendo en el puerto {settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
