# shopreco/api/v1/routers/recommendations.py
from fastapi import APIRouter, Depends, Query
from typing import List, Optional
import time
import logging

from shopreco.core.config import get_settings
from shopreco.api.deps import explanation_service, interaction_repo, product_repo, scoring_engine
from shopreco.api.v1.schemas.reco import RecommendationOut
from shopreco.domain.services.recommendation_svc import get_recommendations_svc

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recommendations"])
MAX_LIMIT = get_settings().reco_max_limit

@router.get("/recommendations/{user_id}", response_model=List[RecommendationOut])
async def get_recommendations(
    user_id: str,
    limit: Optional[int] = Query(None, ge=1, le=MAX_LIMIT, description="Max recommendations (default from settings)"),
    products = Depends(product_repo),
    interactions = Depends(interaction_repo),
    engine = Depends(scoring_engine),
    explainer = Depends(explanation_service),
):
    """
    Ranked products the user has not interacted with yet, each with a rationale.
    Catalog/interaction store failures surface as 503 (see main.py handler).
    """
    logger.info("Request: recommendations user_id=%s limit=%s", user_id, limit)
    start_time = time.perf_counter()

    items = await get_recommendations_svc(
        user_id=user_id,
        product_repo=products,
        interaction_repo=interactions,
        engine=engine,
        explainer=explainer,
        limit=limit,
    )

    logger.info(
        "Response: recommendations user_id=%s count=%s elapsed_time=%.4fs",
        user_id, len(items), time.perf_counter() - start_time,
    )
    return items
