from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError

from app.core.logger import get_logger
from app.schemas.transcript import (
    IntentRequestEvent,
    Message,
    Speaker,
    TextEvent,
    TranscriptEvent,
    UserInputEvent,
)

log = get_logger(__name__)

_event_adapter: TypeAdapter = TypeAdapter(TranscriptEvent)


def _as_utc(ts: datetime) -> datetime:
    # Naive timestamps are assumed to be UTC so that all messages compare.
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def parse_event(raw: Any) -> Optional[Message]:
    """Classify one raw transcript event, or return None if it is not a message."""
    try:
        event = _event_adapter.validate_python(raw)
    except ValidationError:
        return None

    if isinstance(event, TextEvent):
        speaker, text = Speaker.ASSISTANT, event.payload.payload.message
    elif isinstance(event, IntentRequestEvent):
        speaker, text = Speaker.USER, event.payload.payload.query
    elif isinstance(event, UserInputEvent):
        speaker, text = Speaker.USER, event.payload.payload.message
    else:  # pragma: no cover
        return None
    return Message(speaker=speaker, text=text, timestamp=_as_utc(event.startTime))


def build_transcript(events: Iterable[Any]) -> List[Message]:
    """Turn a raw event log into chat messages ordered by time.

    Unrecognized events are dropped. The sort is stable, so messages with the
    same timestamp keep their original order.
    """
    messages = [m for m in (parse_event(e) for e in events) if m is not None]
    messages.sort(key=lambda m: m.timestamp)
    log.info("Classified %d messages", len(messages))
    return messages
