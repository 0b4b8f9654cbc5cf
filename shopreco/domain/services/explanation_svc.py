# shopreco/domain/services/explanation_svc.py

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from time import monotonic as _now
import asyncio
import logging

from openai import AsyncOpenAI

from shopreco.domain.errors import ExplanationError
from shopreco.domain.models.interaction import Interaction
from shopreco.domain.models.product import Product
from shopreco.domain.repositories.explanation_cache_repo import ExplanationCacheRepo
from shopreco.domain.services.prompts import (
    fallback_explanation,
    interaction_summary,
    system_prompt,
    user_task,
)

logger = logging.getLogger(__name__)

# =============================================================================
#                               GENERATORS
# =============================================================================

class ExplanationGenerator(ABC):
    """Produces rationale text for one recommended product."""

    model: str = "unknown"
    cacheable: bool = True

    @abstractmethod
    async def generate(self, product: Product, summary: str) -> str:
        """Return explanation text or raise ExplanationError."""
        ...


class TemplateExplanationGenerator(ExplanationGenerator):
    """Used when no LLM is configured: always the deterministic template."""

    model = "template"
    cacheable = False

    async def generate(self, product: Product, summary: str) -> str:
        return fallback_explanation(product)


class OpenAIExplanationGenerator(ExplanationGenerator):
    """Explanation generator using the OpenAI chat completions API."""

    def __init__(self, api_key: str, model: str, *, timeout_s: int = 15, max_tokens: int = 120) -> None:
        self._client = AsyncOpenAI(api_key=api_key)
        self.model = model
        self._timeout_s = timeout_s
        self._max_tokens = max_tokens

    async def generate(self, product: Product, summary: str) -> str:
        messages = [
            {"role": "system", "content": system_prompt()},
            {"role": "user", "content": user_task(product, summary)},
        ]
        t0 = _now()
        try:
            resp = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self._max_tokens,
                temperature=0.7,
                timeout=self._timeout_s,
            )
        except Exception as e:
            raise ExplanationError(f"OpenAI call failed for product_id={product.id}: {e}") from e

        text = (resp.choices[0].message.content or "").strip()
        logger.info("LLM explanation model=%s product_id=%s chars=%s duration=%.3fs",
                    self.model, product.id, len(text), _now() - t0)
        if not text:
            raise ExplanationError(f"Empty explanation for product_id={product.id}")
        return text

# =============================================================================
#                               PUBLIC API
# =============================================================================

class ExplanationService:
    """
    Attaches a rationale to each ranked product.
    Runs strictly after ranking; failures degrade to the template text.
    """

    def __init__(
        self,
        generator: ExplanationGenerator,
        cache: Optional[ExplanationCacheRepo] = None,
        cache_ttl: int = 3600,
    ) -> None:
        self.generator = generator
        self.cache = cache if generator.cacheable else None
        self.cache_ttl = cache_ttl

    async def explain(self, product: Product, summary: str) -> str:
        key = None
        if self.cache is not None:
            key = self.cache.key(product.id, summary, self.generator.model)
            cached = await self.cache.get(key)
            if cached:
                logger.debug("explanation cache_hit product_id=%s", product.id)
                return cached

        try:
            text = await self.generator.generate(product, summary)
        except Exception as e:
            # Fail-open: the recommendation is still returned
            logger.warning("explanation fallback product_id=%s err=%s", product.id, e)
            return fallback_explanation(product)

        if key is not None:
            await self.cache.set(key, text, self.cache_ttl)
        return text

    async def explain_all(
        self,
        products: Sequence[Product],
        interactions: Sequence[Interaction],
    ) -> List[str]:
        """One concurrent call per product; results come back in input order."""
        if not products:
            return []
        summary = interaction_summary(interactions)
        t0 = _now()
        texts = await asyncio.gather(*(self.explain(p, summary) for p in products))
        logger.info("explanations done items=%s time=%.3fs", len(texts), _now() - t0)
        return list(texts)
