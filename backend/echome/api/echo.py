"""
API endpoint for echoing a message back with a server timestamp.
"""
import logging
from typing import Any

from fastapi import APIRouter, Depends

from ..core.responses import AsciiJSONResponse
from ..schemas.echo import EchoResponse, ErrorResponse
from ..services.echo_service import EchoService
from .deps import get_echo_service, get_json_body

logger = logging.getLogger(__name__)

router = APIRouter(tags=["echo"])


@router.post(
    "/echo",
    response_model=EchoResponse,
    response_class=AsciiJSONResponse,
    summary="Echo message",
    description="Echo a message back prefixed by the server and stamped with the processing time",
    responses={
        400: {"model": ErrorResponse, "description": "Missing, non-string or blank message"},
        500: {"model": ErrorResponse, "description": "Unexpected server error"},
    },
)
async def echo(
    body: Any = Depends(get_json_body),
    service: EchoService = Depends(get_echo_service),
) -> AsciiJSONResponse:
    """
    Validate the `message` field and return it with a server-side prefix and timestamp.

    The payload is rendered directly so any JSON string the client sent,
    including unpaired surrogates, is echoed back as an escaped JSON string.

    Raises:
        EchoValidationError: Rendered as a 400 by the registered exception handler
    """
    result = service.process(body)
    return AsciiJSONResponse(content=result.model_dump())
