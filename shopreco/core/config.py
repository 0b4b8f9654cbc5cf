from functools import lru_cache
from typing import Literal, Optional
import os
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "production"]

def _env_file_for(app_env: EnvName) -> str:
    return ".env.development" if app_env == "development" else ".env.production"

class Settings(BaseSettings):

    # Core
    APP_ENV: EnvName = "development"
    APP_NAME: str = "ShopReco"
    DEBUG: bool = False
    GIT_SHA: str = "unknown"
    LOG_LEVEL: str = "INFO"                     # ignored when DEBUG is on

    # CORS (CSV list of origins)
    ALLOWED_ORIGINS: str = ""

    # Mongo
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "shopreco"
    MONGO_TLS: bool = False

    # Redis (optional, explanation cache only)
    REDIS_URL: Optional[str] = None

    # OpenAI (optional, fallback explanations are used without a key)
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_EXPLANATION_MODEL: str = "gpt-4o-mini"
    openai_timeout_s: int = 15                  # seconds
    explanation_max_tokens: int = 120

    # Cache config
    explanation_cache_ttl: int = 6 * 3600       # 6 hours

    # Recommendations
    reco_default_limit: int = 5
    reco_max_limit: int = 50

    # API
    api_prefix: str = "/api"

    # Scoring weights
    score_affinity_weight: float = 2.0
    score_popularity_divisor: float = 100.0
    score_purchase_weight: float = 0.5
    score_cart_weight: float = 0.3
    score_view_weight: float = 0.1

    # pydantic-settings config will be set dynamically in the factory below
    model_config = SettingsConfigDict(env_file=None, case_sensitive=True)

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

@lru_cache
def get_settings() -> Settings:
    """
    Factory that chooses the right .env file based on APP_ENV.
    Cache makes it cheap to inject via FastAPI dependencies.
    """
    app_env: EnvName = os.getenv("APP_ENV", "development")  # earliest switch
    env_file = _env_file_for(app_env)
    return Settings(
                _env_file=env_file,  # load .env.development or .env.production
                _env_file_encoding="utf-8"
    )
