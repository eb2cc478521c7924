from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# ------------------------------------------------------------
# Request models
# ------------------------------------------------------------
class QuestionsRequest(BaseModel):
    topic: Optional[str] = None          # checked by the generator, 400 when missing

    @field_validator("topic", mode="before")
    @classmethod
    def _number_as_text(cls, v: Any) -> Any:
        # {"topic": 1914} asks about 1914; booleans and containers are still rejected
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class QuizResultRequest(BaseModel):
    name: Optional[str] = None           # required by QuizResult, see Settings.missing_name_status
    questions: List[Dict[str, Any]] = []


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    message: Optional[str] = None
    history: List[ChatMessage] = []


# ------------------------------------------------------------
# Response models
# ------------------------------------------------------------
class QuestionsResponse(BaseModel):
    # passed through as parsed from the model output:
    # [{"question", "correctAnswer", "incorrectAnswers": [3 x str]}]
    questions: List[Any]


class MessageResponse(BaseModel):
    message: str


class StatusResponse(BaseModel):
    message: str
    status: str


class ChatResponse(BaseModel):
    reply: str


# ------------------------------------------------------------
# Stored documents
# ------------------------------------------------------------
class QuizQuestion(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    question: Optional[str] = None
    correct_answer: Optional[str] = None
    user_answer: Optional[str] = None    # absent until the user answers
    is_correct: Optional[bool] = None


class QuizResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(min_length=1)
    questions: List[QuizQuestion] = []
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_document(self) -> Dict[str, Any]:
        """camelCase dict for insert_one; unset optional fields are left out."""
        return self.model_dump(by_alias=True, exclude_none=True)
