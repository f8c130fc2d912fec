"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1 import router as v1_router
from app.core.config import settings
from app.core.logging_config import configure_logging

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

TRACE_ID_HEADER = "X-Trace-Id"

app = FastAPI(
    title="Gatekeep API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
    expose_headers=[TRACE_ID_HEADER],
)


@app.middleware("http")
async def trace_requests(request: Request, call_next):
    """Tag each request with a trace id and log it."""
    trace_id = str(uuid.uuid4())
    request.state.trace_id = trace_id
    logger.info("%s %s - trace_id=%s", request.method, request.url.path, trace_id)
    response = await call_next(request)
    response.headers[TRACE_ID_HEADER] = trace_id
    return response


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors; only non-prod responses include the error message."""
    trace_id = getattr(request.state, "trace_id", None)
    logger.exception("Unhandled error on %s %s (trace_id=%s)", request.method, request.url.path, trace_id)
    content: dict[str, str] = {"detail": "Internal Server Error"}
    if settings.APP_ENV != "prod":
        content["error"] = str(exc)
    # Runs outside trace_requests, so the header has to be set here too.
    headers = {TRACE_ID_HEADER: trace_id} if trace_id else None
    return JSONResponse(status_code=500, content=content, headers=headers)


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Gatekeep API"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
