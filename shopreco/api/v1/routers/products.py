# shopreco/api/v1/routers/products.py

from fastapi import APIRouter, Depends, HTTPException
from typing import List

from shopreco.api.deps import product_repo
from shopreco.api.v1.schemas.reco import ProductOut

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])

@router.get("", response_model=List[ProductOut])
async def list_products(repo = Depends(product_repo)):
    """Whole catalog, most popular first (ties keep store order)."""
    products = await repo.list_all()
    products = sorted(products, key=lambda p: p.popularity or 0, reverse=True)
    logger.info("Response: list_products count=%s", len(products))
    return [p.model_dump() for p in products]

@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: str, repo = Depends(product_repo)):
    product = await repo.get_by_id(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product.model_dump()
