from datetime import datetime, timezone

from fastapi import APIRouter, Request

from ..config import settings
from ..limiter import limiter

router = APIRouter(tags=["health"])


@router.get("/health")
@limiter.limit(settings.rate_limit_read)
def health(request: Request):
    return {
        "ok": True,
        "env": settings.app_env,
        "storage": settings.storage_backend,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
