"""
Unit tests for the shared cache client and its fallback.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from creator_shared.cache import (
    CacheClientProvider,
    FallbackCacheClient,
    RedisCacheClient,
    build_cache_client,
    get_cache_client,
)
from creator_shared.config import BaseConfig
from creator_shared.errors import ConfigurationError


def make_config(**overrides) -> BaseConfig:
    values = {"cache_url": "redis://localhost:6379/0", "cache_token": "secret"}
    values.update(overrides)
    return BaseConfig(**values)


class TestFallbackCacheClient:
    """Fallback client behaviour."""

    @pytest.fixture
    def client(self):
        return FallbackCacheClient()

    def test_disabled(self, client):
        assert client.enabled is False

    @pytest.mark.asyncio
    async def test_get_returns_none(self, client):
        assert await client.get("any-key") is None

    @pytest.mark.asyncio
    async def test_set_returns_none(self, client):
        assert await client.set("key", "value", ex=30) is None

    @pytest.mark.asyncio
    async def test_increment_returns_zero(self, client):
        assert await client.increment("counter", 5) == 0

    @pytest.mark.asyncio
    async def test_ping_returns_fallback(self, client):
        assert await client.ping() == "fallback"


class TestRedisCacheClient:
    """Live client delegation."""

    @pytest.fixture
    def redis_mock(self):
        mock = MagicMock()
        mock.get = AsyncMock(return_value="cached")
        mock.set = AsyncMock(return_value=True)
        mock.incrby = AsyncMock(return_value=7)
        mock.ping = AsyncMock(return_value=True)
        return mock

    @pytest.fixture
    def client(self, redis_mock):
        return RedisCacheClient(redis_mock)

    def test_enabled(self, client):
        assert client.enabled is True

    @pytest.mark.asyncio
    async def test_get_delegates(self, client, redis_mock):
        assert await client.get("profile:1") == "cached"
        redis_mock.get.assert_awaited_once_with("profile:1")

    @pytest.mark.asyncio
    async def test_set_passes_expiry(self, client, redis_mock):
        value = {"a": 1}
        assert await client.set("key", value, ex=60) is True
        redis_mock.set.assert_awaited_once_with("key", value, ex=60)
        assert value == {"a": 1}

    @pytest.mark.asyncio
    async def test_set_without_expiry(self, client, redis_mock):
        await client.set("key", "v")
        redis_mock.set.assert_awaited_once_with("key", "v", ex=None)

    @pytest.mark.asyncio
    async def test_increment_delegates(self, client, redis_mock):
        assert await client.increment("hits", 3) == 7
        redis_mock.incrby.assert_awaited_once_with("hits", 3)

    @pytest.mark.asyncio
    async def test_ping(self, client, redis_mock):
        assert await client.ping() == "PONG"
        redis_mock.ping.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_runtime_errors_propagate(self, client, redis_mock):
        redis_mock.get.side_effect = ConnectionError("connection reset")
        with pytest.raises(ConnectionError):
            await client.get("key")

    def test_from_config_requires_url_and_token(self):
        with pytest.raises(ConfigurationError):
            RedisCacheClient.from_config(make_config(cache_url=None))
        with pytest.raises(ConfigurationError):
            RedisCacheClient.from_config(make_config(cache_token=""))

    def test_from_config_passes_credentials(self):
        with patch("creator_shared.cache.redis.from_url") as mock_from_url:
            RedisCacheClient.from_config(make_config(cache_socket_timeout=2))

        args, kwargs = mock_from_url.call_args
        assert args == ("redis://localhost:6379/0",)
        assert kwargs["password"] == "secret"
        assert kwargs["socket_timeout"] == 2
        assert kwargs["decode_responses"] is True


class TestBuildCacheClient:
    """Construction with fallback."""

    def test_live_client_when_configured(self):
        logger = MagicMock()
        client = build_cache_client(make_config, logger)

        assert isinstance(client, RedisCacheClient)
        assert client.enabled is True
        logger.warning.assert_not_called()

    def test_fallback_when_token_missing(self):
        logger = MagicMock()
        client = build_cache_client(lambda: make_config(cache_token=None), logger)

        assert isinstance(client, FallbackCacheClient)
        assert client.enabled is False
        logger.warning.assert_called_once_with(
            "Cache fallback active", error="Cache url and token are required"
        )

    def test_fallback_when_url_invalid(self):
        logger = MagicMock()
        client = build_cache_client(lambda: make_config(cache_url="ftp://cache.example"), logger)

        assert client.enabled is False
        logger.warning.assert_called_once()
        assert isinstance(logger.warning.call_args.kwargs["error"], str)

    def test_fallback_when_config_loader_fails(self):
        logger = MagicMock()

        def broken_loader():
            raise ConfigurationError("Invalid environment configuration: env: bad")

        client = build_cache_client(broken_loader, logger)

        assert client.enabled is False
        logger.warning.assert_called_once_with(
            "Cache fallback active", error="Invalid environment configuration: env: bad"
        )

    def test_fallback_when_client_library_raises(self):
        logger = MagicMock()
        with patch("creator_shared.cache.redis.from_url", side_effect=RuntimeError("boom")):
            client = build_cache_client(make_config, logger)

        assert client.enabled is False
        logger.warning.assert_called_once_with("Cache fallback active", error="boom")


class TestCacheClientProvider:
    """Memoization of the shared client."""

    def test_same_instance_returned(self):
        provider = CacheClientProvider(config_loader=make_config, logger=MagicMock())

        first = provider.get_client()
        second = provider.get_client()

        assert first is second
        assert first.enabled is True

    def test_construction_attempted_once(self):
        loader = MagicMock(return_value=make_config())
        provider = CacheClientProvider(config_loader=loader, logger=MagicMock())

        provider.get_client()
        provider.get_client()

        loader.assert_called_once()

    @pytest.mark.asyncio
    async def test_fallback_is_memoized_with_single_warning(self):
        logger = MagicMock()
        provider = CacheClientProvider(
            config_loader=lambda: make_config(cache_url=None), logger=logger
        )

        client = provider.get_client()
        assert provider.get_client() is client

        assert client.enabled is False
        assert await client.ping() == "fallback"
        assert await client.get("k") is None
        assert await client.set("k", "v") is None
        assert await client.increment("k", 4) == 0
        logger.warning.assert_called_once()

    def test_fallback_never_upgraded(self):
        configs = [make_config(cache_url=None), make_config()]
        provider = CacheClientProvider(config_loader=lambda: configs.pop(0), logger=MagicMock())

        first = provider.get_client()
        assert provider.get_client() is first
        assert first.enabled is False

    def test_reset_rebuilds(self):
        provider = CacheClientProvider(config_loader=make_config, logger=MagicMock())
        first = provider.get_client()
        provider.reset()
        assert provider.get_client() is not first


def test_get_cache_client_uses_default_provider(monkeypatch):
    provider = CacheClientProvider(config_loader=make_config, logger=MagicMock())
    monkeypatch.setattr("creator_shared.cache._default_provider", provider)

    client = get_cache_client()

    assert client is get_cache_client()
    assert client is provider.get_client()
