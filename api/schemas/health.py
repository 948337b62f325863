# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-15
# Description: health.py
# -----------------------------------------------------------------------------
from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    message: str


class ReadinessResponse(BaseModel):
    status: str
    storage_reachable: bool
    key_prefix: str
    sample_key: Optional[str] = None
