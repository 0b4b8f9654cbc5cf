# shopreco/domain/repositories/product_repo.py

from __future__ import annotations
from typing import Optional, List
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import ValidationError
from pymongo.errors import PyMongoError

from shopreco.domain.errors import RetrievalError
from shopreco.domain.models.product import Product, ProductId, product_key

logger = logging.getLogger(__name__)

class ProductRepo:
    """
    Catalog store backed by the 'products' collection.
    Documents carry: id, name, category, price, description, popularity.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "products"):
        self.col = db[collection_name]

    async def list_all(self) -> List[Product]:
        """Full catalog in natural order. Malformed documents are skipped."""
        try:
            docs = await self.col.find({}, {"_id": 0}).to_list(length=None)
        except PyMongoError as e:
            logger.error("catalog find failed: %s", e)
            raise RetrievalError("catalog", str(e)) from e

        products: List[Product] = []
        for doc in docs:
            try:
                products.append(Product.model_validate(doc))
            except ValidationError as e:
                logger.warning("catalog skip malformed product id=%s err=%s", doc.get("id"), e.errors()[:1])
        return products

    async def get_by_id(self, product_id: ProductId) -> Optional[Product]:
        """Path params arrive as strings: "42" also matches a numeric id 42."""
        variants: list = [product_id]
        key = product_key(product_id)
        if key != product_id:
            variants.append(key)
        try:
            doc = await self.col.find_one({"id": {"$in": variants}}, {"_id": 0})
        except PyMongoError as e:
            logger.error("catalog find_one failed id=%s: %s", product_id, e)
            raise RetrievalError("catalog", str(e)) from e
        return Product.model_validate(doc) if doc else None
