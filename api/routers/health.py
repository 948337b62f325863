# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-15
# Updated: 2026-10-17
# Description: health.py
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_search_service
from api.schemas.health import HealthResponse, ReadinessResponse
from services.ScriptSearchService import ScriptSearchService
from utility.errors import ServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok", message="Script search API running")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(svc: ScriptSearchService = Depends(get_search_service)) -> ReadinessResponse:
    """Lists at most one stored record to prove the knowledge-base container is reachable."""
    logger.info("GET /health/ready (start)")
    store = svc.record_store
    try:
        keys = [key async for key in store.list_candidate_keys(limit=1)]
    except ServiceError as e:
        logger.error("GET /health/ready failed: %s", e.message)
        raise HTTPException(status_code=503, detail=e.to_dict())

    logger.info("GET /health/ready (done) sample_key=%s", keys[0] if keys else None)
    return ReadinessResponse(
        status="ok",
        storage_reachable=True,
        key_prefix=store.root,
        sample_key=keys[0] if keys else None,
    )
