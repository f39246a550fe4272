"""
Knowledge result formatting: turns the chunks of a knowledge-base answer into
a numbered list of unique source pages.

Titles are resolved one page at a time, in list order, so numbering always
follows the order the chunks were returned in.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

import httpx

from app.core.logger import get_logger
from app.schemas.knowledge import KnowledgeChunk, UniqueSource
from app.services.title_resolver import resolve_title

log = get_logger(__name__)

NO_RESULTS_MESSAGE = "Sorry, I couldn't find any matching pages."


def unique_sources(chunks: Iterable[KnowledgeChunk]) -> List[UniqueSource]:
    """Deduplicate chunks by source URL; first occurrence wins, empty URLs are dropped."""
    seen = set()
    out: List[UniqueSource] = []
    for chunk in chunks:
        url = chunk.sourceUrl
        if not url or url in seen:
            continue
        seen.add(url)
        out.append(UniqueSource(url=url, originalChunk=chunk))
    return out


async def format_knowledge_results(
    chunks: Iterable[KnowledgeChunk], client: Optional[httpx.AsyncClient] = None
) -> str:
    sources = unique_sources(chunks)
    if not sources:
        return NO_RESULTS_MESSAGE

    entries: List[str] = []
    for i, source in enumerate(sources, start=1):
        title = await resolve_title(source.url, client=client)
        entries.append(f"{i}. {title}\n   {source.url}")

    log.info("Formatted %d unique knowledge sources", len(entries))
    return "\n\n".join(entries)
