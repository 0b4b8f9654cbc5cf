from pydantic import BaseModel, Field
from typing import Optional, Union

ProductId = Union[int, str]


def product_key(product_id):
    """
    Comparison key for product ids: a digit string and the matching int are the
    same product ("3" == 3). Anything else compares as is.
    """
    if isinstance(product_id, str):
        raw = product_id.strip()
        if raw.lstrip("-").isdigit():
            return int(raw)
    return product_id


class Product(BaseModel):
    id: ProductId
    name: str
    category: str
    price: float = Field(ge=0)
    description: Optional[str] = None
    popularity: Optional[float] = Field(default=0, ge=0)

    model_config = {"frozen": True}  # read-only catalog snapshot

class ScoredProduct(Product):
    """A catalog product plus the score computed for one request."""
    score: float
