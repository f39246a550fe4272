from __future__ import annotations

import asyncio
import re
from typing import Optional

import httpx

from app.core.config import get_settings
from app.core.logger import get_logger

log = get_logger(__name__)

DEFAULT_TITLE = "Untitled"

_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)


def extract_title(body: str) -> Optional[str]:
    """Return the trimmed text of the first <title> element, if any."""
    match = _TITLE_RE.search(body or "")
    if not match:
        return None
    title = match.group(1).strip()
    return title or None


async def _get_title(client: httpx.AsyncClient, url: str) -> str:
    settings = get_settings()
    resp = await client.get(
        url,
        headers={"User-Agent": settings.TITLE_USER_AGENT},
        timeout=settings.TITLE_TIMEOUT,
        follow_redirects=True,
    )
    resp.raise_for_status()
    return extract_title(resp.text) or DEFAULT_TITLE


async def _fetch_title(client: httpx.AsyncClient, url: str) -> str:
    # Deadline for the whole fetch; httpx timeouts only bound each phase.
    try:
        return await asyncio.wait_for(_get_title(client, url), timeout=get_settings().TITLE_TIMEOUT)
    except Exception as e:
        log.warning("Failed to fetch title for %s: %r", url, e)
        return DEFAULT_TITLE


async def resolve_title(url: Optional[str], client: Optional[httpx.AsyncClient] = None) -> str:
    """Fetch `url` and return its page title, or "Untitled".

    Never raises: timeouts, network errors, non-2xx responses and bodies
    without a title all fall back to the default label. An empty URL
    returns the default without any request.
    """
    if not url:
        return DEFAULT_TITLE
    if client is not None:
        return await _fetch_title(client, url)
    async with httpx.AsyncClient() as own_client:
        return await _fetch_title(own_client, url)
