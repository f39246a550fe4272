"""
Voiceflow client wrapper (async, httpx) for the three upstream calls the relay
makes: knowledge-base query, transcript list, and transcript detail.

The caller's API key is forwarded verbatim as the Authorization header; the
relay holds no credentials of its own. Endpoints, query settings and the
timeout come from app.core.config.get_settings.
"""

from __future__ import annotations

from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Any, Dict, List, Optional

import httpx

from app.core.config import get_settings
from app.core.logger import get_logger

log = get_logger(__name__)


class UpstreamError(Exception):
    """A Voiceflow call failed (transport error, non-2xx, or unexpected body).

    `details` holds the upstream error body when there is one, otherwise the
    error message.
    """

    def __init__(self, message: str, details: Any = None, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details if details is not None else message
        self.status_code = status_code


def _error_details(exc: httpx.HTTPError) -> Any:
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            return exc.response.json()
        except ValueError:
            return exc.response.text or str(exc)
    return str(exc) or exc.__class__.__name__


def _no_cookie_jar() -> CookieJar:
    # The client is shared by every caller; nothing set by one response may
    # be replayed on another caller's request.
    return CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))


class VoiceflowClient:
    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = get_settings()
        self._timeout = timeout if timeout is not None else self._settings.UPSTREAM_TIMEOUT
        self._transport = transport
        self._aclient: Optional[httpx.AsyncClient] = None

    def _get_async_client(self) -> httpx.AsyncClient:
        if self._aclient is None:
            self._aclient = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                cookies=_no_cookie_jar(),
            )
        return self._aclient

    @property
    def http(self) -> httpx.AsyncClient:
        """The underlying pooled client, shared with best-effort page fetches."""
        return self._get_async_client()

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            client = self._get_async_client()
            resp = await client.request(method, url, **kwargs)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as e:
            status = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
            log.exception("Voiceflow %s %s failed: %s", method, url, e)
            raise UpstreamError(str(e) or "Voiceflow request failed", _error_details(e), status) from e
        except ValueError as e:
            log.exception("Voiceflow %s %s returned a non-JSON body", method, url)
            raise UpstreamError("Voiceflow returned a non-JSON body") from e

    async def query_knowledge_base(self, api_key: str, utterance: str) -> Dict[str, Any]:
        """Ask the knowledge base a question.

        Args:
            api_key: Caller's Voiceflow API key.
            utterance: The user's last utterance; sent wrapped in braces.

        Returns:
            The upstream JSON object (with `chunks` and `output`).
        """
        payload = {
            "question": f"{{{utterance}}}",
            "settings": {
                "model": self._settings.KB_MODEL,
                "temperature": self._settings.KB_TEMPERATURE,
            },
            "chunkLimit": self._settings.KB_CHUNK_LIMIT,
        }
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": api_key,
        }
        data = await self._request("POST", self._settings.VOICEFLOW_KB_QUERY_URL, json=payload, headers=headers)
        if not isinstance(data, dict):
            raise UpstreamError("Unexpected knowledge base response", data)
        return data

    async def list_transcripts(self, api_key: str, project_id: str) -> List[Dict[str, Any]]:
        url = f"{self._settings.VOICEFLOW_TRANSCRIPTS_URL}/{project_id}"
        headers = {"Accept": "application/json", "Authorization": api_key}
        data = await self._request("GET", url, headers=headers)
        if not isinstance(data, list):
            raise UpstreamError("Unexpected transcript list response", data)
        return data

    async def get_transcript_events(self, api_key: str, project_id: str, transcript_id: str) -> List[Any]:
        """Fetch the raw event log of one transcript.

        Accepts either a bare list or an object wrapping the list in `turns`.
        """
        url = f"{self._settings.VOICEFLOW_TRANSCRIPTS_URL}/{project_id}/{transcript_id}"
        headers = {"Accept": "application/json", "Authorization": api_key}
        data = await self._request("GET", url, headers=headers)
        if isinstance(data, dict) and isinstance(data.get("turns"), list):
            data = data["turns"]
        if not isinstance(data, list):
            raise UpstreamError("Unexpected transcript detail response", data)
        return data

    async def aclose(self) -> None:
        if self._aclient is not None:
            await self._aclient.aclose()
            self._aclient = None


_client: Optional[VoiceflowClient] = None


def get_voiceflow_client() -> VoiceflowClient:
    global _client
    if _client is None:
        _client = VoiceflowClient()
    return _client
