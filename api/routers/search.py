# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-15
# Description: search router
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_search_service
from api.schemas.search import CitationModel, SearchHit, SearchRequest, SearchResponse
from retrieval.types import SearchOptions
from services.ScriptSearchService import ScriptSearchService
from utility.errors import ScriptSearchError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=SearchResponse, response_model_exclude_none=True)
async def post_search(
    req: SearchRequest,
    svc: ScriptSearchService = Depends(get_search_service),
) -> SearchResponse:
    logger.info(
        "POST /search (start) query_len=%d episodes=%s top_k=%d",
        len(req.query),
        req.episode_ids,
        req.top_k,
    )

    try:
        options = SearchOptions(
            episode_ids=req.episode_ids,
            metadata_filters=req.metadata_filters,
            speaker=req.speaker,
            top_k=req.top_k,
            min_score=req.min_score,
            max_candidates=req.max_candidates,
        )
        out = await svc.search_with_citations(req.query, options)
    except ScriptSearchError as e:
        status = 503 if e.retryable else (422 if e.code == "VALIDATION_ERROR" else 500)
        logger.error("POST /search failed (%s, retryable=%s): %s", e.code, e.retryable, e.message)
        raise HTTPException(status_code=status, detail=e.to_dict())

    hits = [SearchHit(**r.to_dict()) for r in out["results"]]
    grouped = None
    if req.group_by_episode:
        grouped = {
            episode_id: [SearchHit(**r.to_dict()) for r in group]
            for episode_id, group in svc.group_results_by_episode(out["results"]).items()
        }

    logger.info("POST /search (done) results=%d", len(hits))
    return SearchResponse(
        query=req.query,
        result_count=len(hits),
        results=hits,
        citations=[CitationModel(**c.to_dict()) for c in out["citations"]],
        grouped=grouped,
    )
