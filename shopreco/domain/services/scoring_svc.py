# shopreco/domain/services/scoring_svc.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence
import logging
import time

from shopreco.core.config import Settings
from shopreco.domain.models.interaction import Interaction, InteractionType
from shopreco.domain.models.product import Product, ScoredProduct, product_key
from shopreco.domain.services.constants import (
    AFFINITY_WEIGHT,
    CART_WEIGHT,
    DEFAULT_LIMIT,
    POPULARITY_DIVISOR,
    PURCHASE_WEIGHT,
    VIEW_WEIGHT,
)

logger = logging.getLogger(__name__)


def _default_interaction_weights() -> Dict[InteractionType, float]:
    return {
        InteractionType.PURCHASE: PURCHASE_WEIGHT,
        InteractionType.CART: CART_WEIGHT,
        InteractionType.VIEW: VIEW_WEIGHT,
    }


@dataclass(frozen=True)
class ScoringWeights:
    """
    Weight table for the warm-path score.
    Interaction types missing from `interaction` (UNKNOWN included) weigh 0.
    """
    affinity: float = AFFINITY_WEIGHT
    popularity_divisor: float = POPULARITY_DIVISOR
    interaction: Mapping[InteractionType, float] = field(default_factory=_default_interaction_weights)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScoringWeights":
        return cls(
            affinity=settings.score_affinity_weight,
            popularity_divisor=settings.score_popularity_divisor,
            interaction={
                InteractionType.PURCHASE: settings.score_purchase_weight,
                InteractionType.CART: settings.score_cart_weight,
                InteractionType.VIEW: settings.score_view_weight,
            },
        )

    def for_type(self, kind: InteractionType) -> float:
        return self.interaction.get(kind, 0.0)


def _popularity(product: Product) -> float:
    return float(product.popularity or 0)


class ScoringEngine:
    """
    Ranks catalog products for one user from that user's interaction history.

    Pure computation over the supplied snapshot: no I/O, no caching, no state
    kept between calls. Identical inputs give identical ordered output.
    """

    def __init__(self, weights: Optional[ScoringWeights] = None, default_limit: int = DEFAULT_LIMIT):
        self.weights = weights or ScoringWeights()
        self.default_limit = default_limit

    def recommend(
        self,
        user_id: str,
        catalog: Sequence[Product],
        interactions: Sequence[Interaction],
        limit: Optional[int] = None,
    ) -> List[ScoredProduct]:
        """
        Return up to `limit` products the user has not interacted with, best first.

        Cold start (no interactions) ranks the whole catalog by popularity.
        Ties keep catalog order on both paths (sorted() is stable).
        """
        t0 = time.perf_counter()
        limit = self.default_limit if limit is None else limit
        if limit <= 0 or not catalog:
            logger.debug("scoring skip user_id=%s limit=%s catalog=%s", user_id, limit, len(catalog))
            return []

        if not interactions:
            ranked = self._cold_start(catalog)
            path = "cold"
        else:
            ranked = self._warm(catalog, interactions)
            path = "warm"

        result = ranked[:limit]
        logger.info(
            "scoring done user_id=%s path=%s catalog=%s interactions=%s candidates=%s returned=%s time=%.4fs",
            user_id, path, len(catalog), len(interactions), len(ranked), len(result), time.perf_counter() - t0,
        )
        return result

    def _cold_start(self, catalog: Sequence[Product]) -> List[ScoredProduct]:
        ordered = sorted(catalog, key=_popularity, reverse=True)
        return [self._scored(p, _popularity(p) / self.weights.popularity_divisor) for p in ordered]

    def _warm(self, catalog: Sequence[Product], interactions: Sequence[Interaction]) -> List[ScoredProduct]:
        # First occurrence wins if the catalog repeats an id
        by_id: Dict[object, Product] = {}
        for p in catalog:
            by_id.setdefault(product_key(p.id), p)

        seen = {product_key(i.product_id) for i in interactions}
        affinity_categories = {by_id[pid].category for pid in seen if pid in by_id}

        # Weights per category, kept in interaction order so every candidate
        # adds them one by one in the same sequence
        category_weights: Dict[str, List[float]] = {}
        for i in interactions:
            interacted = by_id.get(product_key(i.product_id))
            if interacted is not None:
                category_weights.setdefault(interacted.category, []).append(
                    self.weights.for_type(i.interaction_type)
                )

        scored = []
        for p in catalog:
            if product_key(p.id) in seen:
                continue
            score = 0.0
            if p.category in affinity_categories:
                score += self.weights.affinity
            score += _popularity(p) / self.weights.popularity_divisor
            for w in category_weights.get(p.category, ()):
                score += w
            scored.append(self._scored(p, score))

        return sorted(scored, key=lambda sp: sp.score, reverse=True)

    @staticmethod
    def _scored(product: Product, score: float) -> ScoredProduct:
        return ScoredProduct(**product.model_dump(), score=score)
