"""
Diagnostic endpoint — shows what the detector makes of the calling client.

Mounted only outside production (see main.py).
"""

from functools import lru_cache

from fastapi import APIRouter, Depends, Request

from device_detector.config import get_settings
from device_detector.core.detector import DeviceDetector
from device_detector.core.tor import TorExitNodeCache

import structlog

logger = structlog.get_logger()
router = APIRouter(prefix="/device-detector", tags=["device-detector"])

ECHOED_HEADERS = ("User-Agent", "Sec-CH-UA", "Sec-CH-UA-Platform", "X-Real-IP")


@lru_cache
def get_detector() -> DeviceDetector:
    """Process-wide detector; the Tor cache inside it is shared by all requests."""
    settings = get_settings()
    return DeviceDetector(settings, TorExitNodeCache.from_settings(settings))


@router.get("/test")
async def detection_test(request: Request, detector: DeviceDetector = Depends(get_detector)):
    result = await detector.detect(request)
    logger.info(
        "device_detection_test",
        ip=result.ip,
        browser=result.browser.name,
        device_type=result.device_type,
        is_robot=result.is_robot,
    )
    return {
        "success": True,
        "data": result.as_dict(),
        "headers": {name: request.headers.get(name) for name in ECHOED_HEADERS},
    }
