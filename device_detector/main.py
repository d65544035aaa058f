"""
Device Detector — request origin classification.
Main application entry point.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from device_detector.api.detector import router as detector_router
from device_detector.middleware.security import SecurityHeadersMiddleware
from device_detector.config import get_settings

import structlog

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.dev.ConsoleRenderer() if get_settings().debug else structlog.processors.JSONRenderer(),
    ],
)

logger = structlog.get_logger()

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "device_detector_starting",
        environment=settings.environment,
        tor_detection=settings.enable_tor_detection,
        robot_detection=settings.enable_robot_detection,
    )
    yield
    logger.info("device_detector_shutting_down")


app = FastAPI(
    title=get_settings().app_name,
    description="Browser, platform, device, robot and Tor classification from request metadata.",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs" if get_settings().debug else None,
    redoc_url="/redoc" if get_settings().debug else None,
    openapi_url="/openapi.json" if get_settings().debug else None,
)

app.add_middleware(SecurityHeadersMiddleware)

# --- Routes ---
if get_settings().environment != "production":
    app.include_router(detector_router)


@app.get("/health")
async def health():
    return {"status": "ok", "service": "device-detector", "version": VERSION}
