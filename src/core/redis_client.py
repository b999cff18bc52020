"""Connection to the Redis instance holding revoked bearer tokens."""

import redis
from django.conf import settings

_client: redis.Redis | None = None


def get_redis_client() -> redis.Redis:
    """Lazily connect to ``REDIS_URL``; every token check reuses the same pool.

    Responses are decoded to ``str`` so denylist values compare as text.
    """
    global _client
    if _client is None:
        _client = redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)
    return _client


__all__ = ["get_redis_client"]
