# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-15
# Description: api/schemas/search.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

import settings


class SearchRequest(BaseModel):
    # empty queries are passed through to the embedding provider unchanged
    query: str

    # Scope controls
    episode_ids: Optional[List[str]] = None
    metadata_filters: Optional[Dict[str, Any]] = None
    speaker: Optional[str] = None

    # Ranking controls
    top_k: int = Field(settings.SEARCH_DEFAULTS["top_k"], ge=1, le=100)
    min_score: float = Field(settings.SEARCH_DEFAULTS["min_score"], ge=-1.0, le=1.0)
    max_candidates: Optional[int] = Field(settings.SEARCH_DEFAULTS["max_candidates"] or None, ge=1)

    group_by_episode: bool = False


class SearchHit(BaseModel):
    id: str
    episode_id: str
    episode_name: str
    chapter_id: str
    message_id: int
    speaker: Optional[str] = None
    text_eng: str
    text_jpn: Optional[str] = None
    score: float
    metadata: Dict[str, Any] = Field(default_factory=dict)


class CitationModel(BaseModel):
    episode_id: str
    episode_name: str
    chapter_id: str
    message_id: int
    speaker: Optional[str] = None
    text_eng: str
    text_jpn: Optional[str] = None


class SearchResponse(BaseModel):
    query: str
    result_count: int
    results: List[SearchHit]
    citations: List[CitationModel]
    grouped: Optional[Dict[str, List[SearchHit]]] = None
