# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-12
# Updated: 2026-10-16
# Description: settings.py
# -----------------------------------------------------------------------------
import os
from typing import Any, Dict


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


# -----------------------------------------------------------------------------
# Storage layout
# -----------------------------------------------------------------------------
# Records live at {KEY_PREFIX}{episodeId}/{chapterId}/{recordId}.json
KEY_PREFIX = _env("SCRIPT_KEY_PREFIX", "embeddings/")
if KEY_PREFIX and not KEY_PREFIX.endswith("/"):
    KEY_PREFIX = f"{KEY_PREFIX}/"


# -----------------------------------------------------------------------------
# Embeddings
# -----------------------------------------------------------------------------
# 0 disables the query-vector dimensionality check
EMBEDDING_DIMENSION = _env_int("SCRIPT_EMBEDDING_DIMENSION", 1536)

OPENAI_API_VERSION = _env("SCRIPT_OPENAI_API_VERSION", "2024-10-21")

NORMALIZE_QUERY_EMBEDDINGS = _env_bool("SCRIPT_NORMALIZE_QUERY_EMBEDDINGS", True)


# -----------------------------------------------------------------------------
# semantic_search() defaults (env-controlled)
# -----------------------------------------------------------------------------
SEARCH_DEFAULTS: Dict[str, Any] = {
    "top_k": _env_int("SCRIPT_DEFAULT_TOP_K", 10),
    "min_score": _env_float("SCRIPT_DEFAULT_MIN_SCORE", 0.7),
    # caps how many stored records a single query may load; 0 means no cap
    "max_candidates": _env_int("SCRIPT_MAX_CANDIDATES", 3000),
}

# Max in-flight record fetches per query
FETCH_CONCURRENCY = _env_int("SCRIPT_FETCH_CONCURRENCY", 16)


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if not KEY_PREFIX:
    raise RuntimeError("KEY_PREFIX resolved to empty value")

if SEARCH_DEFAULTS["top_k"] < 1:
    raise RuntimeError("SCRIPT_DEFAULT_TOP_K must be >= 1")

if not -1.0 <= SEARCH_DEFAULTS["min_score"] <= 1.0:
    raise RuntimeError("SCRIPT_DEFAULT_MIN_SCORE must be within [-1, 1]")

if SEARCH_DEFAULTS["max_candidates"] < 0:
    raise RuntimeError("SCRIPT_MAX_CANDIDATES must be >= 0")

if FETCH_CONCURRENCY < 1:
    raise RuntimeError("SCRIPT_FETCH_CONCURRENCY must be >= 1")

if EMBEDDING_DIMENSION < 0:
    raise RuntimeError("SCRIPT_EMBEDDING_DIMENSION must be >= 0")
