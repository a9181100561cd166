from fastapi import APIRouter
from . import echo, health

# prefix is applied by the app factory from Settings.API_V1_PREFIX
api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(echo.router)
