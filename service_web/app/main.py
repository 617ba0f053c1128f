"""
Web service for the Creator platform.

Owns the process-wide cache client and reports its state on the health
endpoint.
"""

from typing import Any, Dict, Optional

from creator_shared.base_service import BaseService
from creator_shared.cache import CacheClientProvider
from creator_shared.config import ServiceConfig
from creator_shared.request_context import RequestContext


class WebService(BaseService):
    """Creator web backend service."""

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        cache_provider: Optional[CacheClientProvider] = None,
    ):
        super().__init__("web", 8000, config)

        self.cache_provider = cache_provider or CacheClientProvider(
            config_loader=lambda: self.config,
        )
        self.app.state.cache_provider = self.cache_provider

        self._setup_web_routes()

    def _setup_web_routes(self):
        """Set up web service routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": self.service_name,
                "message": "Creator platform - Web Service",
                "version": "1.0.0",
                "capabilities": ["health", "cache", "rbac"],
            }

    async def _check_dependencies(self, context: RequestContext) -> Dict[str, Any]:
        """Report cache status as ok, fallback or error, and whether Sentry is configured."""
        return {
            "cache": await self._check_cache(context),
            "sentry": bool(self.config.sentry_dsn),
        }

    async def _check_cache(self, context: RequestContext) -> str:
        cache = self.cache_provider.get_client()

        if not cache.enabled:
            self.logger.warning(
                "Cache fallback active",
                request_id=context.request_id,
                tenant_id=context.tenant_id
            )
            return "fallback"

        try:
            await cache.ping()
        except Exception as e:
            self.logger.error(
                "Cache ping failed",
                request_id=context.request_id,
                tenant_id=context.tenant_id,
                error=str(e)
            )
            return "error"

        return "ok"


def create_app():
    """Create web service application."""
    service = WebService()
    return service.app


if __name__ == "__main__":
    service = WebService()
    service.run()
