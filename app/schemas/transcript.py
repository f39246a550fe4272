from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class TranscriptSummary(BaseModel):
    """One record of the upstream transcript list.

    Only the two fields the relay reads are typed; everything else is kept
    so the record can be returned verbatim.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    # Upstream does not guarantee string ids; compared and echoed as-is.
    sessionID: Any = None
    id: Any = Field(default=None, alias="_id")

    def to_upstream(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


# --- Raw transcript events -------------------------------------------------
# Each recognized event shape is one variant keyed on `type`. Anything that
# fails to validate against the union is not a message.


class _MessageBody(BaseModel):
    message: str = Field(min_length=1)


class _MessagePayload(BaseModel):
    payload: _MessageBody


class _QueryBody(BaseModel):
    query: str = Field(min_length=1)


class _IntentPayload(BaseModel):
    type: Literal["intent"]
    payload: _QueryBody


class TextEvent(BaseModel):
    type: Literal["text"]
    payload: _MessagePayload
    startTime: datetime


class IntentRequestEvent(BaseModel):
    type: Literal["request"]
    payload: _IntentPayload
    startTime: datetime


class UserInputEvent(BaseModel):
    type: Literal["user-input"]
    payload: _MessagePayload
    startTime: datetime


TranscriptEvent = Annotated[
    Union[TextEvent, IntentRequestEvent, UserInputEvent],
    Field(discriminator="type"),
]


# --- Classified messages ---------------------------------------------------


class Speaker(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"

    @property
    def label(self) -> str:
        return "You" if self is Speaker.USER else "Assistant"


class Message(BaseModel):
    speaker: Speaker
    text: str
    timestamp: datetime  # timezone-aware

    @property
    def display_time(self) -> str:
        """Timestamp in the server's local timezone, e.g. 'Jan 05, 2025, 02:30 PM'."""
        return self.timestamp.astimezone().strftime("%b %d, %Y, %I:%M %p")
