"""
Field classifiers — one pure function per result field.

Each classifier takes the lower-cased User-Agent (and, where relevant, a
client-hint header) and returns a well-defined default when nothing matches.
No classifier raises on empty or malformed input.
"""

from dataclasses import dataclass
from enum import Enum

from device_detector.core.rules import (
    BRAND_RULES,
    BROWSER_PATTERNS,
    MOBILE_PATTERN,
    PLATFORM_PATTERNS,
    ROBOT_PATTERNS,
    TABLET_PATTERN,
    VERSION_PATTERNS,
    hint_token,
)

UNKNOWN_BROWSER = "Unknown"
UNKNOWN_PLATFORM = "Unknown OS"


class DeviceType(str, Enum):
    MOBILE = "mobile"
    TABLET = "tablet"
    DESKTOP = "desktop"


@dataclass(frozen=True)
class RobotInfo:
    is_robot: bool = False
    name: str | None = None


@dataclass(frozen=True)
class BrowserInfo:
    name: str = UNKNOWN_BROWSER
    version: str = ""


@dataclass(frozen=True)
class DeviceInfo:
    """Device composite.

    ``type`` applies tablet > mobile > desktop precedence, while the raw
    ``is_mobile`` / ``is_tablet`` flags are reported as matched, so both can
    be True for the same user agent.
    """
    type: DeviceType = DeviceType.DESKTOP
    brand: str | None = None
    model: str | None = None
    is_mobile: bool = False
    is_tablet: bool = False
    is_desktop: bool = True


# --- Robot ---

def classify_robot(user_agent: str, enabled: bool = True) -> RobotInfo:
    if not enabled or not user_agent:
        return RobotInfo()

    for name, pattern in ROBOT_PATTERNS:
        if pattern.search(user_agent):
            return RobotInfo(is_robot=True, name=name)

    return RobotInfo()


# --- Browser ---

def extract_version(user_agent: str, browser: str) -> str:
    """Version token for ``browser``, or "" when it has no version rule."""
    pattern = VERSION_PATTERNS.get(browser)
    if pattern is None:
        return ""
    match = pattern.search(user_agent)
    return match.group(1) if match else ""


def classify_browser(user_agent: str, sec_ch_ua: str = "") -> BrowserInfo:
    """Identify the browser, preferring the Sec-CH-UA client hint.

    The hint is checked by substring containment against each pattern's
    plain token; when it yields nothing the same ordered table is matched
    as regexes against the User-Agent. The version always comes from the
    User-Agent.
    """
    hint = (sec_ch_ua or "").lower()
    if hint:
        for name, patterns in BROWSER_PATTERNS:
            if any(hint_token(p) in hint for p in patterns):
                return BrowserInfo(name=name, version=extract_version(user_agent, name))

    for name, patterns in BROWSER_PATTERNS:
        if any(p.search(user_agent) for p in patterns):
            return BrowserInfo(name=name, version=extract_version(user_agent, name))

    return BrowserInfo()


# --- Platform ---

def classify_platform(user_agent: str, sec_ch_ua_platform: str = "") -> str:
    hinted = (sec_ch_ua_platform or "").strip('"')
    if hinted:
        return hinted

    for name, pattern in PLATFORM_PATTERNS:
        if pattern.search(user_agent):
            return name

    return UNKNOWN_PLATFORM


# --- Device ---

def detect_brand_model(user_agent: str) -> tuple[str | None, str | None]:
    """Walk the brand cascade; first brand whose detector matches wins."""
    for rule in BRAND_RULES:
        if not rule.detect.search(user_agent):
            continue
        for pattern, fmt in rule.models:
            match = pattern.search(user_agent)
            if match:
                return rule.brand, fmt(match)
        return rule.brand, rule.default_model

    return None, None


def classify_device(user_agent: str) -> DeviceInfo:
    is_mobile = bool(MOBILE_PATTERN.search(user_agent))
    is_tablet = bool(TABLET_PATTERN.search(user_agent))

    if is_tablet:
        device_type = DeviceType.TABLET
    elif is_mobile:
        device_type = DeviceType.MOBILE
    else:
        device_type = DeviceType.DESKTOP

    brand, model = None, None
    if is_mobile or is_tablet:
        brand, model = detect_brand_model(user_agent)

    return DeviceInfo(
        type=device_type,
        brand=brand,
        model=model,
        is_mobile=is_mobile,
        is_tablet=is_tablet,
        is_desktop=not is_mobile and not is_tablet,
    )
