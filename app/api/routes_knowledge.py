from typing import Optional

from fastapi import APIRouter, HTTPException

from app.core.logger import get_logger
from app.schemas.knowledge import KnowledgeQueryRequest, KnowledgeQueryResponse, chunks_from_response
from app.services.knowledge_formatter import format_knowledge_results
from app.services.voiceflow_client import UpstreamError, get_voiceflow_client

router = APIRouter()
log = get_logger(__name__)


@router.post("/knowledge-query", response_model=KnowledgeQueryResponse)
async def knowledge_query(body: Optional[KnowledgeQueryRequest] = None):
    """
    Ask the Voiceflow knowledge base a question and return a numbered list
    of the unique source pages it answered from, plus the raw upstream payload.
    """
    body = body or KnowledgeQueryRequest()
    if not body.apiKey:
        raise HTTPException(status_code=400, detail="API key is required")
    if not body.lastUtterance:
        raise HTTPException(status_code=400, detail="Last utterance is required")

    client = get_voiceflow_client()
    try:
        data = await client.query_knowledge_base(body.apiKey, body.lastUtterance)
    except UpstreamError as e:
        log.error("Error querying Voiceflow KB: %s", e.message)
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to query Voiceflow knowledge base", "details": e.details},
        )

    answer = await format_knowledge_results(chunks_from_response(data), client=client.http)
    return KnowledgeQueryResponse(answer=answer, rawResponse=data, output=data.get("output"))
