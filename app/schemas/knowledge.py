from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class KnowledgeQueryRequest(BaseModel):
    """Body of POST /api/knowledge-query.

    Both fields are optional at the schema level so that a missing value
    gets a field-specific 400 rather than a generic 422.
    """

    apiKey: Optional[str] = None
    lastUtterance: Optional[str] = None


class KnowledgeChunk(BaseModel):
    sourceName: str = ""
    sourceUrl: str = ""

    @classmethod
    def from_upstream(cls, chunk: Any) -> "KnowledgeChunk":
        """Read `source.name` / `source.url` from a raw upstream chunk."""
        source = chunk.get("source") if isinstance(chunk, dict) else None
        if not isinstance(source, dict):
            return cls()
        return cls(
            sourceName=str(source.get("name") or ""),
            sourceUrl=str(source.get("url") or ""),
        )


class UniqueSource(BaseModel):
    url: str
    originalChunk: KnowledgeChunk


class KnowledgeQueryResponse(BaseModel):
    answer: str
    rawResponse: Dict[str, Any]
    output: Optional[Any] = None


def chunks_from_response(data: Dict[str, Any]) -> List[KnowledgeChunk]:
    chunks = data.get("chunks") or []
    if not isinstance(chunks, list):
        return []
    return [KnowledgeChunk.from_upstream(c) for c in chunks]
