# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-15
# Description: dependencies.py
# -----------------------------------------------------------------------------
from functools import lru_cache

from api.AppContainer import AppContainer
from services.ScriptSearchService import ScriptSearchService


@lru_cache
def get_app_container() -> AppContainer:
    # built on first request so importing the app does not need credentials
    return AppContainer()


def get_search_service() -> ScriptSearchService:
    # use the singleton service from the container
    return get_app_container().search_service
