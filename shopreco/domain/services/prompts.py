from collections import Counter
from typing import Sequence

from shopreco.domain.models.interaction import Interaction, InteractionType
from shopreco.domain.models.product import Product
from shopreco.domain.services.constants import MINIMAL_ACTIVITY_SUMMARY, NO_HISTORY_SUMMARY


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def interaction_summary(interactions: Sequence[Interaction]) -> str:
    """Compact count of the user's history by type, e.g. 'Viewed 3 products, Purchased 1 item'."""
    if not interactions:
        return NO_HISTORY_SUMMARY

    counts = Counter(i.interaction_type for i in interactions)
    parts = []
    if counts[InteractionType.VIEW]:
        parts.append(f"Viewed {_plural(counts[InteractionType.VIEW], 'product')}")
    if counts[InteractionType.PURCHASE]:
        parts.append(f"Purchased {_plural(counts[InteractionType.PURCHASE], 'item')}")
    if counts[InteractionType.CART]:
        parts.append(f"Added {_plural(counts[InteractionType.CART], 'item')} to cart")

    return ", ".join(parts) or MINIMAL_ACTIVITY_SUMMARY


def fallback_explanation(product: Product) -> str:
    """Deterministic text used whenever the generator cannot answer."""
    return (
        f"Based on your interest in {product.category} products, we think you'll love this "
        f"{product.name}. It's highly rated and offers great value at ${product.price:.2f}."
    )


def system_prompt() -> str:
    return "You are an e-commerce recommendation assistant. Reply with plain text only."


def user_task(product: Product, summary: str) -> str:
    return (
        "Generate a brief, compelling explanation (2-3 sentences) for why we're "
        "recommending this product to the user.\n\n"
        "Product Details:\n"
        f"- Name: {product.name}\n"
        f"- Category: {product.category}\n"
        f"- Price: ${product.price:.2f}\n"
        f"- Description: {(product.description or '')[:400]}\n\n"
        "User's Recent Activity:\n"
        f"{summary}\n\n"
        "RULES:\n"
        "- Personalized and friendly, connect the product to the user's interests\n"
        "- Focus on benefits\n"
        "- Under 50 words"
    )
