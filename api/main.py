# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-10-15
# Description: main.py
# -----------------------------------------------------------------------------
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.dependencies import get_app_container
from api.routers import health, search
from utility.logging_utils import get_logger

logger = get_logger("api")


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info("Script search API starting")
    yield
    # only close clients that were actually created
    if get_app_container.cache_info().currsize:
        logger.info("Closing storage and embedding clients")
        await get_app_container().close()
    logger.info("Script search API stopped")


logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
app = FastAPI(title="Script Search API", lifespan=lifespan)
app.include_router(health.router)
app.include_router(search.router)
