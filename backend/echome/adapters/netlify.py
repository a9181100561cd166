"""
Serverless entrypoint for Netlify Functions (AWS Lambda proxy events).

The adapter turns an invocation event into a call to the body parser and
EchoService and turns the outcome back into a proxy response dict. It does
not go through FastAPI, so the echo logic stays the same on both hosts.

Expected event shape:
{
    "httpMethod": "POST",
    "path": "/.netlify/functions/server/v1/echo",
    "headers": {"content-type": "application/json"},
    "body": "{\"message\": \"Hello\"}",
    "isBase64Encoded": false
}
"""
from __future__ import annotations

import base64
import json
import logging
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional, Protocol

from ..core.config import Settings, get_settings
from ..core.errors import (
    SERVER_ERROR_MESSAGE,
    EchoValidationError,
    error_payload,
)
from ..core.logging import configure_logging
from ..services.body_parser import parse_json_body
from ..services.echo_service import EchoService

logger = logging.getLogger(__name__)


class PlatformAdapter(Protocol):
    """Maps a hosting platform's native invocation event to a response."""

    def handle(self, event: Mapping[str, Any]) -> Dict[str, Any]:
        ...


class NetlifyFunctionAdapter:
    """PlatformAdapter for Netlify / AWS Lambda proxy integration events."""

    def __init__(self, service: Optional[EchoService] = None, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.service = service or EchoService(self.settings)

    @property
    def echo_path(self) -> str:
        return f"{self.settings.API_V1_PREFIX.rstrip('/')}/echo"

    def _cors_headers(self, origin: Optional[str], preflight: bool = False) -> Dict[str, str]:
        origins = self.settings.CORS_ALLOW_ORIGINS
        allow_all = "*" in origins
        credentials = self.settings.CORS_ALLOW_CREDENTIALS

        headers: Dict[str, str] = {}
        if allow_all and not credentials:
            headers["Access-Control-Allow-Origin"] = "*"
        elif origin and (allow_all or origin in origins):
            # a specific origin is reflected, never a list or a wildcard with credentials
            headers["Access-Control-Allow-Origin"] = origin
            headers["Vary"] = "Origin"
            if credentials:
                headers["Access-Control-Allow-Credentials"] = "true"
        else:
            return headers

        if preflight:
            headers["Access-Control-Allow-Methods"] = ", ".join(self.settings.CORS_ALLOW_METHODS)
            headers["Access-Control-Allow-Headers"] = ", ".join(self.settings.CORS_ALLOW_HEADERS)
        return headers

    def _respond(
        self,
        status_code: int,
        payload: Optional[Dict[str, Any]] = None,
        origin: Optional[str] = None,
        preflight: bool = False,
    ) -> Dict[str, Any]:
        headers = self._cors_headers(origin, preflight=preflight)
        body = ""
        if payload is not None:
            headers["Content-Type"] = "application/json"
            body = json.dumps(payload)
        return {"statusCode": status_code, "headers": headers, "body": body}

    def _route_path(self, path: str) -> str:
        base = f"/.netlify/functions/{self.settings.NETLIFY_FUNCTION_NAME}"
        if path == base or path.startswith(base + "/"):
            path = path[len(base):]
        return path.rstrip("/") or "/"

    @staticmethod
    def _header(headers: Mapping[str, Any], name: str) -> Optional[str]:
        for key, value in headers.items():
            if key.lower() == name:
                return value
        return None

    @staticmethod
    def _raw_body(event: Mapping[str, Any]) -> bytes:
        body = event.get("body") or ""
        if event.get("isBase64Encoded"):
            return base64.b64decode(body)
        return body.encode("utf-8") if isinstance(body, str) else bytes(body)

    def handle(self, event: Mapping[str, Any]) -> Dict[str, Any]:
        method = str(event.get("httpMethod") or "").upper()
        path = self._route_path(str(event.get("path") or "/"))
        headers = event.get("headers") or {}
        origin = self._header(headers, "origin")
        logger.info("Received %s %s", method, path)

        if method == "OPTIONS":
            return self._respond(204, origin=origin, preflight=True)
        if path != self.echo_path:
            return self._respond(404, {"detail": "Not Found"}, origin=origin)
        if method != "POST":
            return self._respond(405, {"detail": "Method Not Allowed"}, origin=origin)

        try:
            body = parse_json_body(
                self._raw_body(event),
                self._header(headers, "content-type"),
                max_bytes=self.settings.MAX_BODY_BYTES,
            )
            result = self.service.process(body)
        except EchoValidationError as exc:
            return self._respond(exc.status_code, error_payload(exc.message), origin=origin)
        except Exception as exc:
            logger.error("An unhandled server error occurred: %s", exc, exc_info=exc)
            return self._respond(500, error_payload(SERVER_ERROR_MESSAGE), origin=origin)

        return self._respond(200, result.model_dump(), origin=origin)


@lru_cache()
def get_adapter() -> NetlifyFunctionAdapter:
    settings = get_settings()
    configure_logging(settings)
    return NetlifyFunctionAdapter(settings=settings)


def handler(event: Mapping[str, Any], context: Any = None) -> Dict[str, Any]:
    """Netlify Functions entry point."""
    return get_adapter().handle(event)
