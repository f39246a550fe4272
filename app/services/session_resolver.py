from __future__ import annotations

from typing import Any, Dict, Iterable, List

from app.core.config import get_settings
from app.schemas.transcript import TranscriptSummary

# Project ids whose transcripts are viewed under a different project in the
# Voiceflow creator UI. Only this one pair is known.
PROJECT_ID_ALIASES: Dict[str, str] = {
    "678e0f128a8526a7fdf491cd": "678e0f128a8526a7fdf491ce",
}


class TranscriptNotFound(LookupError):
    def __init__(self, session_id: str, available_sessions: List[Any]) -> None:
        super().__init__(f"No transcript found for session {session_id!r}")
        self.session_id = session_id
        self.available_sessions = available_sessions


def parse_transcripts(records: Iterable[Any]) -> List[TranscriptSummary]:
    return [TranscriptSummary.model_validate(r) for r in records if isinstance(r, dict)]


def find_transcript(transcripts: List[TranscriptSummary], session_id: str) -> TranscriptSummary:
    """Return the first transcript whose sessionID equals `session_id` exactly.

    Raises TranscriptNotFound with every available session id otherwise.
    """
    for transcript in transcripts:
        if transcript.sessionID == session_id:
            return transcript
    raise TranscriptNotFound(session_id, [t.sessionID for t in transcripts])


def link_project_id(project_id: str) -> str:
    return PROJECT_ID_ALIASES.get(project_id, project_id)


def build_transcript_url(project_id: str, transcript_id: Any) -> str:
    base = get_settings().VOICEFLOW_CREATOR_URL.rstrip("/")
    segment = "" if transcript_id is None else transcript_id
    return f"{base}/project/{link_project_id(project_id)}/transcripts/{segment}"
