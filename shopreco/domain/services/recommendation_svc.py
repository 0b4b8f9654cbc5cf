import logging
import time
from typing import Any, Dict, List, Optional

from shopreco.domain.repositories.interaction_repo import InteractionRepo
from shopreco.domain.repositories.product_repo import ProductRepo
from shopreco.domain.services.explanation_svc import ExplanationService
from shopreco.domain.services.scoring_svc import ScoringEngine

logger = logging.getLogger(__name__)


async def get_recommendations_svc(
    *,
    user_id: str,
    product_repo: ProductRepo,
    interaction_repo: InteractionRepo,
    engine: ScoringEngine,
    explainer: ExplanationService,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Fetch catalog + history, rank, then explain each ranked item.
    RetrievalError from either store propagates: no partial results.
    """
    t0 = time.perf_counter()
    logger.info("recommend start user_id=%s limit=%s", user_id, limit)

    catalog = await product_repo.list_all()
    interactions = await interaction_repo.list_for_user(user_id)
    logger.info("recommend loaded catalog=%s interactions=%s", len(catalog), len(interactions))

    ranked = engine.recommend(user_id, catalog, interactions, limit)
    explanations = await explainer.explain_all(ranked, interactions)

    items = [
        {**sp.model_dump(), "explanation": text}
        for sp, text in zip(ranked, explanations)
    ]
    logger.info("recommend done user_id=%s items=%s total_time=%.3fs", user_id, len(items), time.perf_counter() - t0)
    return items
