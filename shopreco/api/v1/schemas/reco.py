# shopreco/api/v1/schemas/reco.py
from datetime import datetime
from pydantic import BaseModel, computed_field
from typing import Literal, Optional

from shopreco.domain.models.product import ProductId

# Presentation only: the engine never sees icons
CATEGORY_ICONS = {
    "Electronics": "💻",
    "Audio": "🎧",
    "Accessories": "🔌",
    "Furniture": "🪑",
    "Smart Home": "🏠",
    "Gaming": "🎮",
}
DEFAULT_ICON = "📦"

def category_icon(category: Optional[str]) -> str:
    return CATEGORY_ICONS.get(category or "", DEFAULT_ICON)


class ProductOut(BaseModel):
    id: ProductId
    name: str
    category: str
    price: float
    description: Optional[str] = None
    popularity: Optional[float] = 0

    @computed_field
    @property
    def icon(self) -> str:
        return category_icon(self.category)

class RecommendationOut(ProductOut):
    score: float
    explanation: str


class InteractionIn(BaseModel):
    user_id: str
    product_id: ProductId
    interaction_type: Literal["view", "cart", "purchase"]

class InteractionOut(BaseModel):
    user_id: str
    product_id: Optional[ProductId] = None
    interaction_type: str
    timestamp: Optional[datetime] = None

class ResetOut(BaseModel):
    message: str
    deleted: int
