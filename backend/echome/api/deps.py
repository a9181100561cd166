"""
Dependency injection for FastAPI routes.
"""
from typing import Any

from fastapi import Request

from ..core.config import Settings
from ..services.body_parser import parse_json_body
from ..services.echo_service import EchoService


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def get_echo_service(request: Request) -> EchoService:
    """Return the EchoService built by the application factory."""
    return request.app.state.echo_service


async def get_json_body(request: Request) -> Any:
    """
    Parse the request body as JSON.

    Returns:
        Parsed object or array, `{}` for empty or non-JSON bodies

    Raises:
        BodyParseError: If the body is malformed, which ends in a 500
    """
    settings = get_settings_from_app(request)
    raw = await request.body()
    return parse_json_body(
        raw,
        request.headers.get("content-type"),
        max_bytes=settings.MAX_BODY_BYTES,
    )
