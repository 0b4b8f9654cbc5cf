from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, TypeAdapter, ValidationError, field_validator

from shopreco.domain.models.product import ProductId

_datetime = TypeAdapter(datetime)


class InteractionType(str, Enum):
    VIEW = "view"
    CART = "cart"
    PURCHASE = "purchase"
    # Anything else read back from the store; weighs nothing when scoring
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value) -> "InteractionType":
        """Exact match only: "Purchase" or " view" are UNKNOWN."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class Interaction(BaseModel):
    """
    A stored user event. Reads are lenient: an unrecognized interaction_type
    becomes UNKNOWN, and a missing or unusable product_id or timestamp is kept
    as None.
    """
    user_id: str
    product_id: Optional[ProductId] = None
    interaction_type: InteractionType = InteractionType.UNKNOWN
    timestamp: Optional[datetime] = None

    model_config = {"frozen": True}

    @field_validator("user_id", mode="before")
    @classmethod
    def _user_id_as_str(cls, v):
        return str(v)

    @field_validator("product_id", mode="before")
    @classmethod
    def _usable_product_id(cls, v):
        if isinstance(v, bool):
            return None
        if isinstance(v, float):
            # Mongo doubles written by other clients
            return int(v) if v.is_integer() else None
        if isinstance(v, (int, str)):
            return v
        return None

    @field_validator("interaction_type", mode="before")
    @classmethod
    def _coerce_type(cls, v):
        return InteractionType.parse(v)

    @field_validator("timestamp", mode="before")
    @classmethod
    def _lenient_timestamp(cls, v):
        if v is None:
            return None
        try:
            return _datetime.validate_python(v)
        except ValidationError:
            return None
