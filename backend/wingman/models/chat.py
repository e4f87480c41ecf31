from pydantic import BaseModel, ConfigDict, Field
from typing import Literal


class ConversationMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Body shared by the coach and reply endpoints.

    Required fields are optional here so the handlers can answer with the
    API's own 400 error shape instead of a validation error.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str | None = None
    personality: str | None = None
    context: str | None = None
    api_key: str | None = Field(default=None, alias="apiKey")
    model: str | None = None
    conversation_history: list[ConversationMessage] = Field(
        default_factory=list, alias="conversationHistory"
    )
    conversation_id: str | None = Field(default=None, alias="conversationId")

    def missing_required(self) -> bool:
        return not (self.message and self.personality and self.api_key)


class CoachResponse(BaseModel):
    id: str
    response: str
    model: str
    timestamp: str


class ReplyResponse(BaseModel):
    id: str
    reply: str
    model: str
    timestamp: str


class ApiError(BaseModel):
    error: str
