# backend/quizgen/core/openai_qg.py

import json, logging, re
from typing import Any, Callable, Dict, List

from openai import AsyncOpenAI

from .config import DEFAULT_OPENAI_MODEL
from .errors import ConfigError, UpstreamError, ValidationError

logger = logging.getLogger("quiz.qg")

Extractor = Callable[[str], List[Any]]

# ------------------------------------------------------------
# Client
# ------------------------------------------------------------
def configure_openai(api_key: str) -> AsyncOpenAI:
    """Create the AsyncOpenAI client shared by the whole process."""
    if not api_key:
        raise ConfigError("OPENAI_API_KEY missing.")
    client = AsyncOpenAI(api_key=api_key)
    logger.info("OpenAI async client configured.")
    return client

# ------------------------------------------------------------
# Prompt template
# ------------------------------------------------------------
QUESTION_COUNT = 5
MAX_TOKENS = 600
TEMPERATURE = 0.7

QG_PROMPT_TEMPLATE = (
    'Genera {count} preguntas de opción múltiple sobre "{topic}". '
    "Para cada pregunta, da 1 respuesta correcta y 3 incorrectas. "
    'Formato JSON: [{{"question":"...","correctAnswer":"...",'
    '"incorrectAnswers":["...","...","..."]}}]'
)

# ------------------------------------------------------------
# JSON extraction
# ------------------------------------------------------------
_JSON_ARRAY_RE = re.compile(r"\[.*\]", re.DOTALL)

def extract_json_array(text: str) -> List[Any]:
    """
    Pull the JSON array out of free text.

    Takes the span from the first "[" to the last "]" and parses it. Anything
    that does not come out as a list yields [] instead of raising: nested
    prose brackets, several arrays or single-quoted JSON all degrade to an
    empty result.
    """
    match = _JSON_ARRAY_RE.search(text or "")
    if not match:
        logger.warning(f"No JSON array in model output: {(text or '')[:200]!r}")
        return []

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        logger.warning(f"Could not parse JSON array from model output: {e}")
        return []

    if not isinstance(data, list):
        return []
    return data

# ------------------------------------------------------------
# Generator
# ------------------------------------------------------------
class QuestionGenerator:
    def __init__(
        self,
        client: AsyncOpenAI,
        model_name: str = DEFAULT_OPENAI_MODEL,
        extractor: Extractor = extract_json_array,
    ):
        self.client = client
        self.model_name = model_name
        self.extractor = extractor

    def build_prompt(self, topic: str) -> str:
        return QG_PROMPT_TEMPLATE.format(count=QUESTION_COUNT, topic=topic)

    async def generate_questions(self, topic: str | None) -> List[Dict[str, Any]]:
        if not topic:
            raise ValidationError("Por favor, proporciona un tema.")

        try:
            completion = await self.client.chat.completions.create(
                model=self.model_name,
                messages=[{"role": "user", "content": self.build_prompt(topic)}],
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
            )
            raw = completion.choices[0].message.content or ""
        except Exception as e:
            raise UpstreamError("Hubo un problema al generar las preguntas.") from e

        questions = self.extractor(raw)
        logger.info(f"Generated {len(questions)} questions for topic={topic!r}")
        return questions
