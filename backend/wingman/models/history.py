from pydantic import BaseModel, ConfigDict, Field
from typing import Literal

from wingman.models.chat import ConversationMessage


class ConversationHistory(BaseModel):
    """The JSON document stored in a single history cookie."""

    model_config = ConfigDict(populate_by_name=True)

    conversation_id: str = Field(alias="conversationId")
    messages: list[ConversationMessage] = Field(default_factory=list)
    timestamp: str


class HistoryLookup(BaseModel):
    status: Literal["found", "missing", "corrupt"]
    messages: list[ConversationMessage] = Field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.status == "found"


class HistoryOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    conversation_id: str = Field(serialization_alias="conversationId")
    status: Literal["found", "missing", "corrupt"]
    messages: list[ConversationMessage]


class SaveHistoryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    conversation_id: str = Field(alias="conversationId")
    messages: list[ConversationMessage] = Field(default_factory=list)
