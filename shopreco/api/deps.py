# shopreco/api/deps.py
from fastapi import Depends
from shopreco.core.config import Settings, get_settings
from shopreco.db.mongo import get_db
from shopreco.db.redis import get_redis
from shopreco.domain.repositories.explanation_cache_repo import ExplanationCacheRepo
from shopreco.domain.repositories.interaction_repo import InteractionRepo
from shopreco.domain.repositories.product_repo import ProductRepo
from shopreco.domain.services.explanation_svc import (
    ExplanationService,
    OpenAIExplanationGenerator,
    TemplateExplanationGenerator,
)
from shopreco.domain.services.scoring_svc import ScoringEngine, ScoringWeights

# Dependency for injecting the MongoDB database into endpoints/services
def mongo_db():
    return get_db()

# Dependency for injecting the Redis client (None when not configured)
def redis_dep():
    return get_redis()

def product_repo(db = Depends(mongo_db)) -> ProductRepo:
    return ProductRepo(db)

def interaction_repo(db = Depends(mongo_db)) -> InteractionRepo:
    return InteractionRepo(db)

# A fresh engine per request: weights come from settings, no shared state
def scoring_engine(settings: Settings = Depends(get_settings)) -> ScoringEngine:
    return ScoringEngine(
        weights=ScoringWeights.from_settings(settings),
        default_limit=settings.reco_default_limit,
    )

def explanation_service(
    settings: Settings = Depends(get_settings),
    redis = Depends(redis_dep),
) -> ExplanationService:
    if settings.OPENAI_API_KEY:
        generator = OpenAIExplanationGenerator(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_EXPLANATION_MODEL,
            timeout_s=settings.openai_timeout_s,
            max_tokens=settings.explanation_max_tokens,
        )
    else:
        generator = TemplateExplanationGenerator()
    cache = ExplanationCacheRepo(redis) if redis is not None else None
    return ExplanationService(generator, cache=cache, cache_ttl=settings.explanation_cache_ttl)
