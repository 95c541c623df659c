from functools import lru_cache
from pathlib import Path
from typing import List
from urllib.parse import urlparse
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=str(ENV_FILE), case_sensitive=False)

    APP_NAME: str = "Visitor Desk"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    API_V1_PREFIX: str = "/api/v1"
    BACKEND_HOST: str = "0.0.0.0"
    BACKEND_PORT: int = 8000

    DATABASE_URL: str = "sqlite:///./visitdesk.db"

    JWT_SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    JWT_REFRESH_TOKEN_EXPIRE_DAYS: int = 14

    CORS_ORIGINS: str = (
        "http://localhost:5173,"
        "http://127.0.0.1:5173,"
        "http://localhost:8080"
    )
    CORS_ALLOW_ORIGIN_REGEX: str | None = None

    SOCKET_PATH: str = "/socket.io"
    DASHBOARD_NAMESPACE: str = "/realtime/dashboard"

    VISITOR_ID_PREFIX: str = "VIS"
    VISITOR_ID_SUFFIX_LENGTH: int = 9
    QR_IMAGE_WIDTH: int = 300
    QR_IMAGE_MARGIN: int = 2
    RECENT_CHECK_INS_LIMIT: int = 10

    # Empty disables the bootstrap admin signup endpoint.
    ADMIN_SIGNUP_KEY: str = ""

    @property
    def cors_origins(self) -> List[str]:
        origins: list[str] = []
        for raw in self.CORS_ORIGINS.split(","):
            value = raw.strip()
            if not value:
                continue
            parsed = urlparse(value)
            if parsed.scheme and parsed.netloc:
                value = f"{parsed.scheme}://{parsed.netloc}"
            origins.append(value.rstrip("/"))
        return origins


@lru_cache
def get_settings() -> Settings:
    return Settings()
