"""
Cache client for the Creator platform.

A single cache client is built on first use and reused for the life of
the process. When the remote cache cannot be set up (missing url/token,
invalid configuration, client library error) a no-op client with the same
interface is used instead and ``enabled`` is ``False``. Only construction
is guarded: once a live client exists, errors from its operations reach
the caller.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

import redis.asyncio as redis

from .config import BaseConfig, get_base_config
from .errors import ConfigurationError
from .logging import get_logger

FALLBACK_PING = "fallback"
PONG = "PONG"


class CacheClient(ABC):
    """Capability interface shared by the live and fallback clients."""

    enabled: bool

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the value stored under ``key`` or ``None``."""

    @abstractmethod
    async def set(self, key: str, value: Any, ex: Optional[int] = None) -> Optional[Any]:
        """Store ``value`` under ``key``, expiring after ``ex`` seconds when given."""

    @abstractmethod
    async def increment(self, key: str, amount: int) -> int:
        """Add ``amount`` to the integer at ``key`` and return the result."""

    @abstractmethod
    async def ping(self) -> str:
        """Liveness check."""


class RedisCacheClient(CacheClient):
    """Live client delegating to ``redis.asyncio``."""

    enabled = True

    def __init__(self, client: redis.Redis):
        self._redis = client

    @classmethod
    def from_config(cls, config: BaseConfig) -> "RedisCacheClient":
        """Build a client from settings. Does not contact the server."""
        if not config.cache_url or not config.cache_token:
            raise ConfigurationError("Cache url and token are required")

        client = redis.from_url(
            config.cache_url,
            password=config.cache_token,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=config.cache_connect_timeout,
            socket_timeout=config.cache_socket_timeout,
        )
        return cls(client)

    async def get(self, key: str) -> Optional[Any]:
        return await self._redis.get(key)

    async def set(self, key: str, value: Any, ex: Optional[int] = None) -> Optional[Any]:
        return await self._redis.set(key, value, ex=ex)

    async def increment(self, key: str, amount: int) -> int:
        return await self._redis.incrby(key, amount)

    async def ping(self) -> str:
        await self._redis.ping()
        return PONG


class FallbackCacheClient(CacheClient):
    """No-op client used when the remote cache is unavailable."""

    enabled = False

    async def get(self, key: str) -> Optional[Any]:
        return None

    async def set(self, key: str, value: Any, ex: Optional[int] = None) -> Optional[Any]:
        return None

    async def increment(self, key: str, amount: int) -> int:
        return 0

    async def ping(self) -> str:
        return FALLBACK_PING


def build_cache_client(
    config_loader: Callable[[], BaseConfig] = get_base_config,
    logger=None,
) -> CacheClient:
    """Build a live client, or the fallback client if that fails. Never raises."""
    logger = logger or get_logger("creator_shared.cache")
    try:
        return RedisCacheClient.from_config(config_loader())
    except Exception as e:
        logger.warning("Cache fallback active", error=str(e))
        return FallbackCacheClient()


class CacheClientProvider:
    """Owns the memoized cache client for an application."""

    def __init__(
        self,
        config_loader: Callable[[], BaseConfig] = get_base_config,
        logger=None,
    ):
        self.config_loader = config_loader
        self.logger = logger or get_logger("creator_shared.cache")
        self._client: Optional[CacheClient] = None

    def get_client(self) -> CacheClient:
        """Return the shared client, building it on first call.

        Not locked: concurrent first calls may each build a client, and
        whichever is assigned last is kept.
        """
        if self._client is not None:
            return self._client

        self._client = build_cache_client(self.config_loader, self.logger)
        return self._client

    def reset(self) -> None:
        """Forget the memoized client (tests only)."""
        self._client = None


_default_provider = CacheClientProvider()


def get_cache_client() -> CacheClient:
    """Return the process-wide cache client."""
    return _default_provider.get_client()
