from enum import Enum
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import HTMLResponse, PlainTextResponse

from app.core.logger import get_logger
from app.schemas.transcript import TranscriptSummary
from app.services.session_resolver import (
    TranscriptNotFound,
    build_transcript_url,
    find_transcript,
    parse_transcripts,
)
from app.services.transcript_builder import build_transcript
from app.services.transcript_renderer import (
    render_fallback_page,
    render_missing_session_page,
    render_not_found_page,
    render_transcript_page,
)
from app.services.voiceflow_client import UpstreamError, VoiceflowClient, get_voiceflow_client

router = APIRouter()
log = get_logger(__name__)

NO_SESSION_ERROR = "No session ID was provided"
NOT_FOUND_ERROR = "No transcript found with the provided session ID"

_TRUE_VALUES = {"true", "1", "yes", "on"}


class TranscriptFormat(str, Enum):
    JSON = "json"
    TEXT = "text"
    HTML = "html"


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUE_VALUES


def select_format(string: Optional[str], html: Optional[str]) -> TranscriptFormat:
    """`html` wins over `string`, which wins over the JSON default."""
    if _flag(html):
        return TranscriptFormat.HTML
    if _flag(string):
        return TranscriptFormat.TEXT
    return TranscriptFormat.JSON


async def _render_conversation(
    client: VoiceflowClient, api_key: str, project_id: str, transcript: TranscriptSummary, url: str
) -> HTMLResponse:
    try:
        events = await client.get_transcript_events(api_key, project_id, str(transcript.id or ""))
    except UpstreamError as e:
        log.warning("Transcript detail unavailable for %s, serving link only: %s", transcript.id, e.message)
        return HTMLResponse(render_fallback_page(url))
    messages = build_transcript(events)
    return HTMLResponse(render_transcript_page(messages, url))


@router.get("/transcript-url")
async def get_transcript_url(
    apiKey: Optional[str] = Query(None),
    projectId: Optional[str] = Query(None),
    sessionId: Optional[str] = Query(None),
    string: Optional[str] = Query(None, description="Return the transcript URL as plain text"),
    html: Optional[str] = Query(None, description="Return an HTML view of the conversation"),
):
    """
    Look up the Voiceflow transcript for a session and return its creator URL.

    Formats:
    - default: JSON `{transcriptUrl, transcriptData}`
    - `string=true`: the URL as text/plain
    - `html=true`: a rendered chat view of the conversation
    """
    fmt = select_format(string, html)

    if not apiKey:
        raise HTTPException(status_code=400, detail="API key is required")
    if not projectId:
        raise HTTPException(status_code=400, detail="Project ID is required")

    # Reported as a 200 so conversational front-ends can show it as-is
    if not sessionId:
        if fmt is TranscriptFormat.HTML:
            return HTMLResponse(render_missing_session_page())
        if fmt is TranscriptFormat.TEXT:
            return PlainTextResponse(NO_SESSION_ERROR)
        return {
            "success": False,
            "error": NO_SESSION_ERROR,
            "message": "A session ID is required to look up a conversation transcript.",
        }

    client = get_voiceflow_client()
    try:
        records = await client.list_transcripts(apiKey, projectId)
    except UpstreamError as e:
        log.error("Error getting transcript URL: %s", e.message)
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to get transcript URL", "details": e.details},
        )

    try:
        transcript = find_transcript(parse_transcripts(records), sessionId)
    except TranscriptNotFound as e:
        log.info("Session %s not found in project %s", sessionId, projectId)
        if fmt is TranscriptFormat.HTML:
            return HTMLResponse(render_not_found_page(sessionId, projectId))
        if fmt is TranscriptFormat.TEXT:
            return PlainTextResponse(NOT_FOUND_ERROR, status_code=404)
        raise HTTPException(
            status_code=404,
            detail={"error": NOT_FOUND_ERROR, "availableSessions": e.available_sessions},
        )

    url = build_transcript_url(projectId, transcript.id)

    if fmt is TranscriptFormat.TEXT:
        return PlainTextResponse(url)
    if fmt is TranscriptFormat.HTML:
        return await _render_conversation(client, apiKey, projectId, transcript, url)
    return {"transcriptUrl": url, "transcriptData": transcript.to_upstream()}
