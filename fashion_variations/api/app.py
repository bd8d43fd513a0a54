import logging  # standard logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from fashion_variations.api.variations.provider import provider_configured
from fashion_variations.config import (
    CORS_ORIGINS,
    DEFAULT_PING_MESSAGE,
    PLACEHOLDER_IMAGE_PATH,
    PLACEHOLDER_IMAGE_URL,
)
from fashion_variations.exceptions import UploadRejectedError
from fashion_variations.logging_setup import setup_logging

# Ensure logging is configured when the app module is imported (e.g., under uvicorn)
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if provider_configured():
        logging.info("Application startup: OpenAI provider configured.")
    else:
        logging.warning("Application startup: OPENAI_API_KEY not set, running in demo mode.")
    yield
    logging.info("Application shutdown.")


app = FastAPI(title="Fashion Variations", lifespan=lifespan)


class ProcessRequestMiddleware(BaseHTTPMiddleware):
    """Tags every request with an id and logs its outcome and duration."""

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
        logging.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms} ms)",
            extra={"request_id": request_id},
        )
        response.headers["X-Request-Id"] = request_id
        return response


app.add_middleware(ProcessRequestMiddleware)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(UploadRejectedError)
async def upload_rejected_handler(request: Request, exc: UploadRejectedError):
    logging.warning(f"Upload rejected on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


class MessageResponse(BaseModel):
    message: str


class HealthCheckResult(BaseModel):
    status: str
    message: Optional[str] = None


class OverallHealthStatus(BaseModel):
    status: str
    checks: Dict[str, HealthCheckResult]


@app.get("/api/ping", response_model=MessageResponse, tags=["Misc"])
async def ping():
    return MessageResponse(message=os.getenv("PING_MESSAGE", DEFAULT_PING_MESSAGE))


@app.get("/api/demo", response_model=MessageResponse, tags=["Misc"])
async def demo():
    return MessageResponse(message="Hello from the fashion variations server")


@app.get(PLACEHOLDER_IMAGE_URL, include_in_schema=False)
async def placeholder_image():
    return FileResponse(PLACEHOLDER_IMAGE_PATH, media_type="image/svg+xml")


@app.get("/health", response_model=OverallHealthStatus, tags=["Health"])
async def health_check():
    all_checks = {
        "application": HealthCheckResult(status="ok", message="Application is running"),
        "provider": check_provider_health(),
    }

    overall_status = "ok"
    if any(check.status == "unavailable" for check in all_checks.values()):
        overall_status = "unavailable"
    elif any(check.status == "degraded" for check in all_checks.values()):
        overall_status = "degraded"

    return OverallHealthStatus(status=overall_status, checks=all_checks)


def check_provider_health() -> HealthCheckResult:
    logging.debug("Checking OpenAI provider configuration.")
    if provider_configured():
        return HealthCheckResult(status="ok", message="OpenAI API key is configured")
    logging.warning("OpenAI API key not found, demo mode active.")
    return HealthCheckResult(status="degraded", message="OpenAI API key not configured, demo mode active")
