# shopreco/domain/repositories/interaction_repo.py

from __future__ import annotations
from datetime import datetime, timezone
from typing import List
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from shopreco.domain.errors import RetrievalError
from shopreco.domain.models.interaction import Interaction, InteractionType
from shopreco.domain.models.product import ProductId

logger = logging.getLogger(__name__)

class InteractionRepo:
    """
    Interaction store backed by the append-only 'user_interactions' collection.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "user_interactions"):
        self.col = db[collection_name]

    async def list_for_user(self, user_id: str) -> List[Interaction]:
        try:
            docs = await self.col.find({"user_id": user_id}, {"_id": 0}).to_list(length=None)
        except PyMongoError as e:
            logger.error("interactions find failed user_id=%s: %s", user_id, e)
            raise RetrievalError("interactions", str(e)) from e
        interactions: List[Interaction] = []
        for doc in docs:
            try:
                interactions.append(Interaction.model_validate(doc))
            except ValidationError as e:
                logger.warning("interactions skip malformed doc user_id=%s err=%s", user_id, e.errors()[:1])
        return interactions

    async def add(self, user_id: str, product_id: ProductId, interaction_type: InteractionType) -> Interaction:
        """Insert one event; the timestamp is assigned here, not by the client."""
        interaction = Interaction(
            user_id=user_id,
            product_id=product_id,
            interaction_type=interaction_type,
            timestamp=datetime.now(timezone.utc),
        )
        try:
            await self.col.insert_one(interaction.model_dump(mode="json"))
        except PyMongoError as e:
            logger.error("interactions insert failed user_id=%s: %s", user_id, e)
            raise RetrievalError("interactions", str(e)) from e
        return interaction

    async def delete_for_user(self, user_id: str) -> int:
        """Remove every event of a user. Returns how many were deleted (0 is fine)."""
        try:
            res = await self.col.delete_many({"user_id": user_id})
        except PyMongoError as e:
            logger.error("interactions delete failed user_id=%s: %s", user_id, e)
            raise RetrievalError("interactions", str(e)) from e
        return res.deleted_count
