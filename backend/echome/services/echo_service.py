"""
Service that validates echo requests and builds echo responses.
Has no knowledge of HTTP; the API router and the serverless adapter both call it.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from pydantic import ValidationError

from ..core.config import Settings, get_settings
from ..core.errors import EchoValidationError
from ..schemas.echo import EchoRequest, EchoResponse

logger = logging.getLogger(__name__)

ECHO_PREFIX = "Server says: "

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Render `moment` as UTC ISO-8601 with milliseconds, e.g. 2024-01-01T12:00:00.000Z."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_echoed_message(message: str, timestamp: str) -> str:
    return f'{ECHO_PREFIX}"{message}" at {timestamp}'


class EchoService:
    """
    Validates the `message` field of a parsed body and echoes it back.
    """

    def __init__(self, settings: Optional[Settings] = None, clock: Clock = utc_now):
        """
        Initialize the echo service.

        Args:
            settings: Service configuration, defaults to the cached process settings
            clock: Source of the current time
        """
        self.settings = settings or get_settings()
        self.clock = clock

    def _loggable(self, message: Any) -> str:
        if self.settings.LOG_MESSAGE_CONTENT:
            return repr(message)
        if isinstance(message, str):
            return f"<{len(message)} chars>"
        return f"<{type(message).__name__}>"

    def validate(self, body: Any) -> EchoRequest:
        """
        Extract a usable message from a parsed request body.

        Args:
            body: Parsed JSON body, any shape

        Returns:
            EchoRequest with the message exactly as sent

        Raises:
            EchoValidationError: If `message` is missing, not a string, or blank
        """
        try:
            request = EchoRequest.model_validate(body)
        except ValidationError:
            received = body.get("message") if isinstance(body, dict) else None
            logger.warning(
                "Validation error: message field is required and cannot be empty (received %s)",
                self._loggable(received),
            )
            raise EchoValidationError() from None

        # trimming is only used for the emptiness check, never for the echo
        if not request.message.strip():
            logger.warning(
                "Validation error: message field is required and cannot be empty (received %s)",
                self._loggable(request.message),
            )
            raise EchoValidationError()

        return request

    def transform(self, request: EchoRequest) -> EchoResponse:
        timestamp = format_timestamp(self.clock())
        echoed = build_echoed_message(request.message, timestamp)

        logger.info(
            "Successfully processed message: %s. Echoed: %s",
            self._loggable(request.message),
            self._loggable(echoed),
        )
        return EchoResponse(
            original_message=request.message,
            echoed_message=echoed,
            timestamp=timestamp,
        )

    def process(self, body: Any) -> EchoResponse:
        return self.transform(self.validate(body))
