# backend/quizgen/chat_routes.py

import logging

from fastapi import APIRouter, Depends
from openai import AsyncOpenAI

from quizgen.core.config import Settings
from quizgen.core.errors import UpstreamError, ValidationError
from quizgen.core.schemas import ChatRequest, ChatResponse
from quizgen.deps import get_openai_client, get_settings

logger = logging.getLogger("quiz.chat")

router = APIRouter(prefix="/api/chat", tags=["chat"])

CHAT_SYSTEM_PROMPT = (
    "Eres un asistente amable que ayuda a estudiantes a repasar para sus cuestionarios.\n"
    "Responde en el idioma del usuario, de forma breve y clara."
)


@router.post("", response_model=ChatResponse)
async def chat(
    req: ChatRequest,
    client: AsyncOpenAI = Depends(get_openai_client),
    settings: Settings = Depends(get_settings),
):
    if not req.message:
        raise ValidationError("Por favor, proporciona un mensaje.")

    messages = [{"role": "system", "content": CHAT_SYSTEM_PROMPT}]
    messages += [m.model_dump() for m in req.history]
    messages.append({"role": "user", "content": req.message})

    try:
        resp = await client.chat.completions.create(
            model=settings.openai_model,
            messages=messages,
        )
        reply = resp.choices[0].message.content or ""
    except Exception as e:
        raise UpstreamError("Hubo un problema al procesar el mensaje.") from e

    logger.debug(f"Chat reply with {len(req.history)} history messages")
    return {"reply": reply}
