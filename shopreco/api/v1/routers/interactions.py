# shopreco/api/v1/routers/interactions.py
from fastapi import APIRouter, Depends

from shopreco.api.deps import interaction_repo, product_repo
from shopreco.api.v1.schemas.reco import InteractionIn, InteractionOut, ResetOut
from shopreco.domain.models.interaction import InteractionType

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interactions", tags=["interactions"])

@router.post("", response_model=InteractionOut)
async def add_interaction(body: InteractionIn, repo = Depends(interaction_repo), products = Depends(product_repo)):
    """
    Record one view/cart/purchase event; the server assigns the timestamp.
    The product id is stored the way the catalog spells it ("3" -> 3); ids the
    catalog does not know are kept as sent.
    """
    product = await products.get_by_id(body.product_id)
    product_id = product.id if product is not None else body.product_id
    if product is None:
        logger.warning("Interaction for unknown product user_id=%s product_id=%s", body.user_id, body.product_id)

    created = await repo.add(body.user_id, product_id, InteractionType(body.interaction_type))
    logger.info(
        "Interaction recorded user_id=%s product_id=%s type=%s",
        created.user_id, created.product_id, created.interaction_type.value,
    )
    return InteractionOut(
        user_id=created.user_id,
        product_id=created.product_id,
        interaction_type=created.interaction_type.value,
        timestamp=created.timestamp,
    )

@router.delete("/user/{user_id}", response_model=ResetOut)
async def reset_interactions(user_id: str, repo = Depends(interaction_repo)):
    """Delete the whole history of a user. Idempotent."""
    deleted = await repo.delete_for_user(user_id)
    logger.info("Interactions reset user_id=%s deleted=%s", user_id, deleted)
    return ResetOut(message="All interactions reset successfully", deleted=deleted)
