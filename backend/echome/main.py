import logging
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import api_router
from .core.config import Settings, get_settings
from .core.errors import catch_unexpected_errors, register_exception_handlers
from .core.logging import configure_logging
from .core.responses import AsciiJSONResponse
from .services.echo_service import EchoService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application from an explicit settings object.

    Args:
        settings: Configuration to use, defaults to the cached process settings

    Returns:
        Configured FastAPI app with CORS, request logging, error handlers and routes
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        description="Echo API: returns your message with a server prefix and timestamp",
        default_response_class=AsciiJSONResponse,
    )
    app.state.settings = settings
    app.state.echo_service = EchoService(settings)

    # innermost first: unexpected faults become 500s before CORS headers are added
    app.middleware("http")(catch_unexpected_errors)

    if settings.LOG_REQUESTS:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            logger.info(">>> %s %s", request.method, request.url.path)
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                "<<< %s %s status=%s (%.1f ms)",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )
            return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)
    return app


app = create_app()


if __name__ == "__main__":
	uvicorn.run("echome.main:app", port=8000, host="0.0.0.0", log_level="info", reload=True, workers=1)
