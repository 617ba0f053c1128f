"""
Base service class for Creator platform services.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import time

from .config import ServiceConfig, get_config
from .logging import configure_logging, get_logger, set_request_id, set_user_context, clear_context
from .errors import AppError, ErrorResponse
from .telemetry import configure_sentry, report_exception, tag_request
from .request_context import (
    REQUEST_ID_HEADER,
    TENANT_ID_HEADER,
    RequestContext,
    get_request_context,
    resolve_request_id,
)


class BaseService:
    """Base service class with common functionality."""

    def __init__(self, service_name: str, port: int, config: Optional[ServiceConfig] = None):
        self.service_name = service_name
        self.port = port
        self.config = config or get_config(service_name, port)
        self.logger = get_logger(service_name)
        self._start_time = time.time()

        # Configure logging
        configure_logging(service_name, self.config.log_level)

        # Configure error reporting if a DSN is set
        self.sentry_enabled = configure_sentry(
            self.config.sentry_dsn,
            self.config.env,
            self.config.sentry_traces_sample_rate,
        )

        # Create FastAPI app
        self.app = self._create_app()

        # Set up middleware
        self._setup_middleware()

        # Set up routes
        self._setup_routes()

    def _create_app(self) -> FastAPI:
        """Create FastAPI application."""
        return FastAPI(
            title=f"{self.service_name.title()} Service",
            description=f"Creator platform - {self.service_name.title()} Service",
            version="1.0.0",
            docs_url="/docs" if self.config.env == "development" else None,
            redoc_url="/redoc" if self.config.env == "development" else None,
        )

    def _setup_middleware(self):
        """Set up middleware."""

        # CORS middleware
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"] if self.config.env == "development" else [],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        # Request context middleware
        @self.app.middleware("http")
        async def bind_request_context(request: Request, call_next):
            start_time = time.time()

            request_id = set_request_id(resolve_request_id(request.headers))
            tenant_id = request.headers.get(TENANT_ID_HEADER)
            set_user_context(tenant_id=tenant_id)
            request.state.request_id = request_id
            request.state.tenant_id = tenant_id

            if self.sentry_enabled:
                tag_request(request_id, tenant_id)

            try:
                try:
                    response = await call_next(request)
                except Exception as exc:
                    self.logger.error("Unhandled exception", error=str(exc), exc_info=True)
                    if self.sentry_enabled:
                        report_exception(exc)
                    response = JSONResponse(
                        status_code=500,
                        content=ErrorResponse(
                            request_id=request_id,
                            code="INTERNAL_ERROR",
                            message="Internal server error",
                        ).model_dump()
                    )

                duration = time.time() - start_time
                self.logger.info(
                    "HTTP request",
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    duration_ms=round(duration * 1000, 2)
                )
            finally:
                clear_context()

            response.headers[REQUEST_ID_HEADER] = request_id
            if tenant_id:
                response.headers[TENANT_ID_HEADER] = tenant_id
            return response

    def _setup_routes(self):
        """Set up common routes."""

        @self.app.get("/api/health")
        async def health_check(request: Request):
            """Health check endpoint."""
            context = get_request_context(request)
            try:
                dependencies = await self._check_dependencies(context)
            except Exception as e:
                self.logger.error("Health check failed", error=str(e))
                return JSONResponse(
                    status_code=503,
                    content={
                        "data": {"service": self.service_name, "status": "error", "error": str(e)},
                        "meta": {"request_id": context.request_id}
                    }
                )

            return {
                "data": {
                    "service": self.service_name,
                    "status": "ok",
                    "env": self.config.env,
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                    "uptime_seconds": self._get_uptime(),
                    "services": dependencies,
                    "version": "1.0.0",
                },
                "meta": {"request_id": context.request_id}
            }

        # Error handlers
        @self.app.exception_handler(AppError)
        async def app_error_handler(request: Request, exc: AppError):
            """Handle AppError."""
            self.logger.error(
                "Application error",
                code=exc.code,
                error=exc.message,
                details=exc.details
            )
            return JSONResponse(
                status_code=exc.status_code,
                content=exc.to_response().model_dump()
            )

    async def _check_dependencies(self, context: RequestContext) -> Dict[str, Any]:
        """Check service dependencies. Override in subclasses."""
        return {}

    def _get_uptime(self) -> float:
        """Get service uptime in seconds."""
        return time.time() - self._start_time

    def run(self):
        """Run the service."""
        import uvicorn
        uvicorn.run(
            self.app,
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level.lower()
        )
