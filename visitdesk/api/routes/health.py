from fastapi import APIRouter

from visitdesk.core.config import get_settings

router = APIRouter()
settings = get_settings()


@router.get("/health")
def health():
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
    }
