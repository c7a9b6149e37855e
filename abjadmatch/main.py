from contextlib import asynccontextmanager
import json
import logging
import time
from uuid import uuid4

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from .config import settings
from .errors import (
    AbjadMatchError,
    app_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from .limiter import limiter
from .routers import compat, elements, health
from .storage import build_store


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    force=True,
)
logger = logging.getLogger("abjadmatch.api")


def _truncate(text: str, limit: int | None = None) -> str:
    limit = limit or settings.request_log_body_limit
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... [truncated]"


def _body_preview(raw: bytes, content_type: str) -> str:
    if not raw:
        return "-"
    if "application/json" in content_type:
        try:
            parsed = json.loads(raw.decode("utf-8"))
            return _truncate(json.dumps(parsed, ensure_ascii=False, separators=(",", ":")))
        except ValueError:
            return _truncate(raw.decode("utf-8", errors="replace"))
    return f"<{len(raw)} bytes; {content_type or 'unknown'}>"


class ApiAuditMiddleware(BaseHTTPMiddleware):
    """One log line per request with timing and short body previews."""

    async def dispatch(self, request, call_next):
        request_id = uuid4().hex[:8]
        started_at = time.perf_counter()

        request_content_type = request.headers.get("content-type", "")
        content_length = int(request.headers.get("content-length", 0) or 0)
        # Only buffer request body for logging if small enough
        if content_length <= 102400:  # 100 KB
            request_body = await request.body()
        else:
            request_body = b""
        request_preview = _body_preview(request_body, request_content_type)

        method = request.method
        path = request.url.path
        query = request.url.query
        full_path = f"{path}?{query}" if query else path

        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started_at) * 1000
            logger.exception(
                "API %s %s | status=500 | t=%.1fms | req=%s | req_id=%s",
                method,
                full_path,
                elapsed_ms,
                request_preview,
                request_id,
            )
            raise

        response_content_type = response.headers.get("content-type", "")
        response_body = b""
        async for chunk in response.body_iterator:
            response_body += chunk
        response_preview = _body_preview(response_body, response_content_type)

        elapsed_ms = (time.perf_counter() - started_at) * 1000
        logger.info(
            "API %s %s | status=%s | t=%.1fms | req=%s | resp=%s | req_id=%s",
            method,
            full_path,
            response.status_code,
            elapsed_ms,
            request_preview,
            response_preview,
            request_id,
        )

        headers = {k: v for k, v in response.headers.items() if k.lower() != "content-length"}
        headers["X-Request-Id"] = request_id
        return Response(
            content=response_body,
            status_code=response.status_code,
            headers=headers,
            media_type=response.media_type,
        )


logging.getLogger("uvicorn.access").disabled = True
logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.store = build_store(settings)
    logger.info("Abjad compatibility API started | env=%s", settings.app_env)
    yield


app = FastAPI(title="Abjad Compatibility API", version="1.0.0", lifespan=lifespan)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(AbjadMatchError, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.add_middleware(SlowAPIMiddleware)
app.add_middleware(ApiAuditMiddleware)

if settings.cors_origins():
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

app.include_router(health.router)
app.include_router(elements.router)
app.include_router(compat.router)


def run() -> None:
    import uvicorn

    uvicorn.run("abjadmatch.main:app", host=settings.api_host, port=settings.api_port)
