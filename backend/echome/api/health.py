from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health_check(request: Request) -> HealthResponse:
    """Report that the echo service is up, with the project name and API version it runs."""
    return HealthResponse(
        status="ok",
        service=request.app.state.settings.PROJECT_NAME,
        version=request.app.version,
    )
