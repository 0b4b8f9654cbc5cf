from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from shopreco.core.config import get_settings
from shopreco.core.lifespan import lifespan
from shopreco.core.logging import configure_logging
from shopreco.api.v1.routers.health import router as health_router
from shopreco.api.v1.routers.products import router as products_router
from shopreco.api.v1.routers.recommendations import router as recommendations_router
from shopreco.api.v1.routers.interactions import router as interactions_router
from shopreco.domain.errors import RetrievalError

import logging

settings = get_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# ------- CORS -------
# ALLOWED_ORIGINS is a CSV, e.g. "https://shop.example.com,http://localhost:5173"
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins or ["*"],
    allow_credentials=False,                        # keep False so "*" stays valid
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)

# ------- Errors -------
@app.exception_handler(RetrievalError)
async def retrieval_error_handler(request: Request, exc: RetrievalError):
    logger.error("Retrieval error path=%s store=%s err=%s", request.url.path, exc.store, exc)
    return JSONResponse(status_code=503, content={"error": str(exc)})

# ------- Routes -------
app.include_router(health_router, prefix=settings.api_prefix)
app.include_router(products_router, prefix=settings.api_prefix)          # catalog passthrough
app.include_router(recommendations_router, prefix=settings.api_prefix)   # ranked + explained
app.include_router(interactions_router, prefix=settings.api_prefix)      # record / reset
