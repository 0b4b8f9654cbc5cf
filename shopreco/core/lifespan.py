# shopreco/core/lifespan.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from shopreco.db import mongo, redis as r
from shopreco.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # --- Startup ---
    # Mongo is required: catalog and interactions live there
    try:
        await mongo.connect()
    except Exception as e:
        logger.error("Mongo connection failed: %s", e)
        raise

    # Redis is optional (explanation cache)
    if settings.REDIS_URL:
        await r.connect()
    else:
        logger.warning("No REDIS_URL provided, explanation cache disabled")

    if not settings.OPENAI_API_KEY:
        logger.warning("No OPENAI_API_KEY provided, templated explanations only")

    # Application runs
    yield

    # --- Shutdown ---
    await r.disconnect()
    await mongo.disconnect()
    logger.info("Shutdown complete")
