"""
Rule tables for device detection.

Every table is an ordered sequence and is scanned first-match-wins.
Order is significant: later entries are broader fallbacks for earlier ones
(e.g. Brave / Edge / Opera / Vivaldi must be tried before generic Chrome,
and Windows 11 before Windows 10).

All patterns are matched against the lower-cased User-Agent.
"""

import re
from dataclasses import dataclass
from typing import Callable


def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


# --- Robots: (name, pattern) ---
ROBOT_PATTERNS: list[tuple[str, re.Pattern]] = [
    (name, _compile(p)) for name, p in [
        ("Googlebot", r"googlebot"),
        ("Bingbot", r"bingbot"),
        ("Slurp", r"slurp"),
        ("DuckDuckBot", r"duckduckbot"),
        ("Baiduspider", r"baiduspider"),
        ("YandexBot", r"yandexbot"),
        ("Sogou", r"sogou"),
        ("Exabot", r"exabot"),
        ("facebot", r"facebot"),
        ("ia_archiver", r"ia_archiver"),
        ("Facebookbot", r"facebookexternalhit"),
        ("Twitterbot", r"twitterbot"),
        ("LinkedInBot", r"linkedinbot"),
        ("WhatsApp", r"whatsapp"),
        ("Telegram", r"telegrambot"),
        ("Discordbot", r"discordbot"),
        ("Slackbot", r"slackbot"),
        ("Applebot", r"applebot"),
        ("AhrefsBot", r"ahrefsbot"),
        ("SemrushBot", r"semrushbot"),
        ("MJ12bot", r"mj12bot"),
        ("DotBot", r"dotbot"),
        ("Screaming Frog", r"screaming frog"),
        ("SEOkicks", r"seokicks"),
    ]
]


# --- Browsers: (name, patterns) ---
# Chromium derivatives first, then the engines they impersonate.
BROWSER_PATTERNS: list[tuple[str, tuple[re.Pattern, ...]]] = [
    (name, tuple(_compile(p) for p in patterns)) for name, patterns in [
        ("Brave", [r"brave"]),
        ("Kahf", [r"kahf"]),
        ("Microsoft Edge", [r"edg/", r"edge/"]),
        ("Opera GX", [r"oprgx"]),
        ("Opera", [r"opr/", r"opera"]),
        ("Vivaldi", [r"vivaldi"]),
        ("Samsung Internet", [r"samsungbrowser"]),
        ("UC Browser", [r"ucbrowser"]),
        ("Google Chrome", [r"chrome"]),
        ("Safari", [r"safari"]),
        ("Firefox", [r"firefox"]),
        ("Internet Explorer", [r"msie|trident"]),
        ("Tor Browser", [r"tor"]),
        ("Chromium", [r"chromium"]),
    ]
]


def hint_token(pattern: re.Pattern) -> str:
    """Plain substring used to match a browser pattern against Sec-CH-UA."""
    return pattern.pattern.replace("\\", "").replace("/", "").lower()


# --- Version extraction: browser name -> pattern with one capture group ---
VERSION_PATTERNS: dict[str, re.Pattern] = {
    name: _compile(p) for name, p in [
        ("Kahf", r"kahf/([0-9.]+)"),
        ("Google Chrome", r"chrome/([0-9.]+)"),
        ("Firefox", r"firefox/([0-9.]+)"),
        ("Safari", r"version/([0-9.]+)"),
        ("Microsoft Edge", r"edg/([0-9.]+)"),
        ("Opera", r"opr/([0-9.]+)"),
        ("Samsung Internet", r"samsungbrowser/([0-9.]+)"),
        ("Brave", r"chrome/([0-9.]+)"),  # Brave reports Chrome's version
        ("Vivaldi", r"vivaldi/([0-9.]+)"),
    ]
}


# --- Platforms: (name, pattern) ---
PLATFORM_PATTERNS: list[tuple[str, re.Pattern]] = [
    (name, _compile(p)) for name, p in [
        ("Windows 11", r"windows nt 10\.0.*; win64.*; x64.*; (rv|edge|edg)"),
        ("Windows 10", r"windows nt 10"),
        ("Windows 8.1", r"windows nt 6\.3"),
        ("Windows 8", r"windows nt 6\.2"),
        ("Windows 7", r"windows nt 6\.1"),
        ("Windows Vista", r"windows nt 6\.0"),
        ("Windows XP", r"windows nt 5\.1"),
        ("iOS (iPhone)", r"iphone"),
        ("iOS (iPad)", r"ipad"),
        ("iPadOS", r"macintosh.*ipad"),
        ("Android", r"android"),
        ("macOS", r"macintosh|mac os x"),
        ("Ubuntu", r"ubuntu"),
        ("Linux", r"linux"),
        ("Chrome OS", r"cros"),
        ("BlackBerry", r"blackberry"),
        ("Windows Phone", r"windows phone"),
    ]
]


# --- Device type signals ---
# "mobile/<build>" is the WebKit build token iPads send too.
MOBILE_PATTERN = _compile(r"mobile(?!/)|android|iphone|ipod|blackberry|iemobile|opera mini")
TABLET_PATTERN = _compile(r"tablet|ipad|playbook|silk|kindle")


# --- Brand / model cascade ---

def _ucfirst(value: str) -> str:
    return value[:1].upper() + value[1:]


@dataclass(frozen=True)
class BrandRule:
    """One step of the brand cascade.

    ``detect`` decides the brand; ``models`` are tried in order and the first
    hit is formatted into the model string. ``default_model`` is used when the
    brand matched but no model pattern did.
    """
    brand: str
    detect: re.Pattern
    models: tuple[tuple[re.Pattern, Callable[[re.Match], str]], ...] = ()
    default_model: str | None = None


BRAND_RULES: list[BrandRule] = [
    BrandRule(
        "Apple", _compile(r"iphone"),
        ((_compile(r"iphone\s*([0-9]+[,.]?[0-9]*)"),
          lambda m: "iPhone " + m.group(1).replace(",", ".")),),
        default_model="iPhone",
    ),
    BrandRule("Apple", _compile(r"ipad"), default_model="iPad"),
    BrandRule(
        "Samsung", _compile(r"samsung|sm-|galaxy"),
        ((_compile(r"sm-([a-z0-9]+)"), lambda m: "SM-" + m.group(1).upper()),
         (_compile(r"galaxy\s*([a-z0-9\s]+)"), lambda m: "Galaxy " + m.group(1).strip())),
    ),
    BrandRule(
        "Xiaomi", _compile(r"xiaomi|redmi|mi\s|pocophone"),
        ((_compile(r"(redmi|mi|pocophone)\s*([a-z0-9\s]+)"),
          lambda m: _ucfirst(m.group(1)) + " " + m.group(2).strip()),),
    ),
    BrandRule(
        "Huawei", _compile(r"huawei|honor"),
        ((_compile(r"(huawei|honor)[\s-]([a-z0-9\s]+)"),
          lambda m: _ucfirst(m.group(1)) + " " + m.group(2).strip()),),
    ),
    BrandRule(
        "OnePlus", _compile(r"oneplus"),
        ((_compile(r"oneplus\s*([a-z0-9]+)"), lambda m: "OnePlus " + m.group(1)),),
    ),
    BrandRule(
        "Oppo", _compile(r"oppo"),
        ((_compile(r"oppo\s*([a-z0-9]+)"), lambda m: "Oppo " + m.group(1)),),
    ),
    BrandRule(
        "Vivo", _compile(r"vivo"),
        ((_compile(r"vivo\s*([a-z0-9]+)"), lambda m: "Vivo " + m.group(1)),),
    ),
    BrandRule(
        "Google", _compile(r"pixel"),
        ((_compile(r"pixel\s*([0-9a-z\s]+)"), lambda m: "Pixel " + m.group(1).strip()),),
        default_model="Pixel",
    ),
    BrandRule(
        "Motorola", _compile(r"motorola|moto"),
        ((_compile(r"moto\s*([a-z0-9\s]+)"), lambda m: "Moto " + m.group(1).strip()),),
    ),
    BrandRule(
        "Nokia", _compile(r"nokia"),
        ((_compile(r"nokia\s*([0-9.]+)"), lambda m: "Nokia " + m.group(1)),),
    ),
    BrandRule(
        "LG", _compile(r"lg[\s-]"),
        ((_compile(r"lg[\s-]([a-z0-9]+)"), lambda m: "LG " + m.group(1).upper()),),
    ),
    BrandRule(
        "Sony", _compile(r"sony"),
        ((_compile(r"sony\s*([a-z0-9\s]+)"), lambda m: "Sony " + m.group(1).strip()),),
    ),
    BrandRule(
        "HTC", _compile(r"htc"),
        ((_compile(r"htc\s*([a-z0-9\s]+)"), lambda m: "HTC " + m.group(1).strip()),),
    ),
]
