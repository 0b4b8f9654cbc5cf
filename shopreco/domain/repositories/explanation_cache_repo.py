from typing import Optional
import hashlib
import json
import logging

logger = logging.getLogger(__name__)

def _h(product_id, summary: str, model: str) -> str:
    """
    Short hash of the inputs that shape an explanation.
    Same product + same interaction summary + same model -> same key.
    """
    s = json.dumps({"p": product_id, "s": summary, "m": model}, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha1(s.encode()).hexdigest()[:12]

class ExplanationCacheRepo:
    """
    Best-effort Redis cache for generated explanation text.
    Every Redis error is logged and treated as a miss; scores are never cached.
    """
    def __init__(self, redis, key_prefix: str = "expl"):
        self.cache = redis
        self.prefix = key_prefix

    def key(self, product_id, summary: str, model: str) -> str:
        return f"{self.prefix}:{product_id}:{_h(product_id, summary, model)}"

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self.cache.get(key)
        except Exception as e:
            logger.warning("explanation cache get error key=%s err=%s", key, e)
            return None

    async def set(self, key: str, text: str, ttl: int) -> None:
        try:
            await self.cache.set(key, text, ex=ttl)
        except Exception as e:
            logger.warning("explanation cache set error key=%s err=%s", key, e)
