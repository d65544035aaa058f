"""
Detection orchestrator.

Runs every field classifier over one request and assembles a single
immutable ClassificationResult. The result is memoized on the request
object, so repeated lookups during one request/response cycle classify
only once.

Order of checks:
  1. Tor exit-node membership (the only step that may await the network)
  2. Robot identity
  3. Browser + version (Sec-CH-UA, then User-Agent)
  4. Platform (Sec-CH-UA-Platform, then User-Agent)
  5. Device type / brand / model
"""

from dataclasses import dataclass, field

from fastapi import Request

from device_detector.config import Settings
from device_detector.core.classifiers import (
    BrowserInfo,
    DeviceInfo,
    UNKNOWN_PLATFORM,
    classify_browser,
    classify_device,
    classify_platform,
    classify_robot,
)
from device_detector.core.tor import TorExitNodeCache

STATE_KEY = "device_detection"


@dataclass(frozen=True)
class ClassificationResult:
    browser: BrowserInfo = field(default_factory=BrowserInfo)
    platform: str = UNKNOWN_PLATFORM
    device: DeviceInfo = field(default_factory=DeviceInfo)
    is_robot: bool = False
    robot_name: str | None = None
    is_tor: bool = False
    ip: str = ""

    @property
    def device_type(self) -> str:
        return self.device.type.value

    @property
    def is_mobile(self) -> bool:
        return self.device.is_mobile

    @property
    def is_tablet(self) -> bool:
        return self.device.is_tablet

    @property
    def is_desktop(self) -> bool:
        return self.device.is_desktop

    def as_dict(self) -> dict:
        """Flat JSON-compatible record."""
        return {
            "browser": self.browser.name,
            "browser_version": self.browser.version,
            "platform": self.platform,
            "device_type": self.device_type,
            "device_brand": self.device.brand,
            "device_model": self.device.model,
            "is_mobile": self.device.is_mobile,
            "is_tablet": self.device.is_tablet,
            "is_desktop": self.device.is_desktop,
            "is_robot": self.is_robot,
            "is_tor": self.is_tor,
            "robot_name": self.robot_name,
            "ip": self.ip,
        }


def client_ip(request: Request) -> str:
    """X-Real-IP if the proxy set it, else the transport peer."""
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else "unknown"


class DeviceDetector:
    def __init__(self, settings: Settings, tor_cache: TorExitNodeCache):
        self.settings = settings
        self.tor_cache = tor_cache

    async def classify(
        self,
        user_agent: str | None,
        ip: str,
        sec_ch_ua: str | None = "",
        sec_ch_ua_platform: str | None = "",
    ) -> ClassificationResult:
        """Classify raw request metadata. Never raises."""
        ua = (user_agent or "").lower()

        is_tor = self.settings.enable_tor_detection and await self.tor_cache.is_tor_exit(ip)
        robot = classify_robot(ua, enabled=self.settings.enable_robot_detection)
        browser = classify_browser(ua, sec_ch_ua or "")
        platform = classify_platform(ua, sec_ch_ua_platform or "")
        device = classify_device(ua)

        return ClassificationResult(
            browser=browser,
            platform=platform,
            device=device,
            is_robot=robot.is_robot,
            robot_name=robot.name,
            is_tor=is_tor,
            ip=ip,
        )

    async def detect(self, request: Request) -> ClassificationResult:
        cached = getattr(request.state, STATE_KEY, None)
        if cached is not None:
            return cached

        result = await self.classify(
            user_agent=request.headers.get("user-agent", ""),
            ip=client_ip(request),
            sec_ch_ua=request.headers.get("sec-ch-ua", ""),
            sec_ch_ua_platform=request.headers.get("sec-ch-ua-platform", ""),
        )
        setattr(request.state, STATE_KEY, result)
        return result

    # --- Single-field accessors ---

    async def get_browser(self, request: Request) -> str:
        return (await self.detect(request)).browser.name

    async def get_platform(self, request: Request) -> str:
        return (await self.detect(request)).platform

    async def get_device_type(self, request: Request) -> str:
        return (await self.detect(request)).device_type

    async def is_mobile(self, request: Request) -> bool:
        return (await self.detect(request)).is_mobile

    async def is_tablet(self, request: Request) -> bool:
        return (await self.detect(request)).is_tablet

    async def is_desktop(self, request: Request) -> bool:
        return (await self.detect(request)).is_desktop

    async def is_robot(self, request: Request) -> bool:
        return (await self.detect(request)).is_robot

    async def is_tor(self, request: Request) -> bool:
        return (await self.detect(request)).is_tor
