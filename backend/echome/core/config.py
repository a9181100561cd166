from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List

class Settings(BaseSettings):
    PROJECT_NAME: str = "EchoMe Backend"
    API_V1_PREFIX: str = "/v1"

    # CORS: every origin is allowed unless the deployment narrows it
    CORS_ALLOW_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_METHODS: List[str] = ["*"]
    CORS_ALLOW_HEADERS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_REQUESTS: bool = True
    LOG_MESSAGE_CONTENT: bool = True  # False logs message lengths only

    # JSON body parser limit, in bytes
    MAX_BODY_BYTES: int = 100 * 1024

    # Netlify serves functions under /.netlify/functions/<name>
    NETLIFY_FUNCTION_NAME: str = "server"

    class Config:
        env_file = ".env"
        case_sensitive = False

@lru_cache()
def get_settings() -> Settings:
    return Settings()
