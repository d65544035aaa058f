"""Tests for the individual field classifiers."""

import pytest

from device_detector.core.classifiers import (
    BrowserInfo,
    DeviceType,
    classify_browser,
    classify_device,
    classify_platform,
    classify_robot,
    detect_brand_model,
    extract_version,
)
from device_detector.core.rules import BROWSER_PATTERNS, ROBOT_PATTERNS, hint_token


CHROME_WINDOWS_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
).lower()

EDGE_WINDOWS_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36 Edg/120.0.2210.91"
).lower()

OPERA_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36 OPR/106.0.0.0"
).lower()

FIREFOX_UA = "Mozilla/5.0 (X11; Ubuntu; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0".lower()

SAFARI_MAC_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Safari/605.1.15"
).lower()

IPHONE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
).lower()

IPAD_UA = (
    "Mozilla/5.0 (iPad; CPU OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1"
).lower()

SAMSUNG_UA = (
    "Mozilla/5.0 (Linux; Android 13; SM-S918B) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36"
).lower()

SAMSUNG_BROWSER_UA = (
    "Mozilla/5.0 (Linux; Android 13; SM-A546B) AppleWebKit/537.36 (KHTML, like Gecko) "
    "SamsungBrowser/23.0 Chrome/115.0.0.0 Mobile Safari/537.36"
).lower()

KINDLE_UA = (
    "Mozilla/5.0 (Linux; Android 9; KFMAWI) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Silk/90.2.1 like Chrome/90.0.4430.210 Mobile Safari/537.36"
).lower()

IE11_UA = "Mozilla/5.0 (Windows NT 6.1; WOW64; Trident/7.0; rv:11.0) like Gecko".lower()

GOOGLEBOT_UA = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)".lower()


class TestRobotClassifier:
    @pytest.mark.parametrize("ua,name", [
        (GOOGLEBOT_UA, "Googlebot"),
        ("mozilla/5.0 (compatible; bingbot/2.0; +http://www.bing.com/bingbot.htm)", "Bingbot"),
        ("facebookexternalhit/1.1 (+http://www.facebook.com/externalhit_uatext.php)", "Facebookbot"),
        ("twitterbot/1.0", "Twitterbot"),
        ("telegrambot (like twitterbot)", "Twitterbot"),
        ("mozilla/5.0 (compatible; ahrefsbot/7.0; +http://ahrefs.com/robot/)", "AhrefsBot"),
        ("screaming frog seo spider/19.0", "Screaming Frog"),
        ("whatsapp/2.23.20.0", "WhatsApp"),
    ])
    def test_known_robots(self, ua, name):
        robot = classify_robot(ua)
        assert robot.is_robot is True
        assert robot.name == name

    def test_real_browser_is_not_robot(self):
        robot = classify_robot(CHROME_WINDOWS_UA)
        assert robot.is_robot is False
        assert robot.name is None

    def test_empty_user_agent(self):
        assert classify_robot("").is_robot is False

    def test_disabled_never_flags(self):
        robot = classify_robot(GOOGLEBOT_UA, enabled=False)
        assert robot.is_robot is False
        assert robot.name is None

    def test_table_has_unique_names(self):
        names = [name for name, _ in ROBOT_PATTERNS]
        assert len(names) == len(set(names)) == 24


class TestBrowserClassifier:
    @pytest.mark.parametrize("ua,name,version", [
        (CHROME_WINDOWS_UA, "Google Chrome", "120.0.0.0"),
        (EDGE_WINDOWS_UA, "Microsoft Edge", "120.0.2210.91"),
        (OPERA_UA, "Opera", "106.0.0.0"),
        (FIREFOX_UA, "Firefox", "121.0"),
        (SAFARI_MAC_UA, "Safari", "17.1"),
        (IPHONE_UA, "Safari", "17.0"),
        (SAMSUNG_BROWSER_UA, "Samsung Internet", "23.0"),
        (IE11_UA, "Internet Explorer", ""),
    ])
    def test_user_agent_fallback(self, ua, name, version):
        assert classify_browser(ua) == BrowserInfo(name=name, version=version)

    def test_unknown_when_nothing_matches(self):
        assert classify_browser("") == BrowserInfo(name="Unknown", version="")
        assert classify_browser("curl/8.4.0") == BrowserInfo(name="Unknown", version="")

    def test_brave_hint_beats_chrome_user_agent(self):
        hint = '"Not_A Brand";v="8", "Chromium";v="120", "Brave";v="120"'
        browser = classify_browser(CHROME_WINDOWS_UA, hint)
        assert browser.name == "Brave"
        assert browser.version == "120.0.0.0"

    def test_edge_hint(self):
        hint = '"Not_A Brand";v="8", "Chromium";v="120", "Microsoft Edge";v="120"'
        assert classify_browser(EDGE_WINDOWS_UA, hint).name == "Microsoft Edge"

    def test_chrome_hint(self):
        hint = '"Not_A Brand";v="8", "Chromium";v="120", "Google Chrome";v="120"'
        assert classify_browser(CHROME_WINDOWS_UA, hint) == BrowserInfo("Google Chrome", "120.0.0.0")

    def test_opera_hint(self):
        hint = '"Opera";v="106", "Not:A-Brand";v="99", "Chromium";v="120"'
        assert classify_browser(OPERA_UA, hint) == BrowserInfo("Opera", "106.0.0.0")

    def test_unrecognized_hint_falls_back_to_user_agent(self):
        hint = '"Not_A Brand";v="99"'
        assert classify_browser(FIREFOX_UA, hint).name == "Firefox"

    def test_browser_without_version_rule(self):
        assert extract_version("mozilla/5.0 oprgx", "Opera GX") == ""
        assert extract_version(CHROME_WINDOWS_UA, "UC Browser") == ""

    def test_brave_reuses_chrome_version(self):
        assert extract_version(CHROME_WINDOWS_UA, "Brave") == "120.0.0.0"

    def test_chromium_derivatives_precede_chrome(self):
        order = [name for name, _ in BROWSER_PATTERNS]
        chrome = order.index("Google Chrome")
        for name in ("Brave", "Microsoft Edge", "Opera", "Vivaldi", "Samsung Internet", "UC Browser"):
            assert order.index(name) < chrome

    def test_hint_token_strips_slashes(self):
        tokens = {name: [hint_token(p) for p in patterns] for name, patterns in BROWSER_PATTERNS}
        assert tokens["Microsoft Edge"] == ["edg", "edge"]
        assert tokens["Opera"] == ["opr", "opera"]


class TestPlatformClassifier:
    @pytest.mark.parametrize("ua,platform", [
        (CHROME_WINDOWS_UA, "Windows 10"),
        (IE11_UA, "Windows 7"),
        ("mozilla/5.0 (windows nt 6.3; win64; x64)", "Windows 8.1"),
        ("mozilla/4.0 (compatible; msie 8.0; windows nt 5.1)", "Windows XP"),
        (IPHONE_UA, "iOS (iPhone)"),
        (IPAD_UA, "iOS (iPad)"),
        (SAMSUNG_UA, "Android"),
        (SAFARI_MAC_UA, "macOS"),
        (FIREFOX_UA, "Ubuntu"),
        ("mozilla/5.0 (x11; linux x86_64) gecko/20100101 firefox/121.0", "Linux"),
        ("mozilla/5.0 (x11; cros x86_64 14541.0.0) chrome/120.0.0.0", "Chrome OS"),
    ])
    def test_user_agent_platforms(self, ua, platform):
        assert classify_platform(ua) == platform

    def test_hint_takes_precedence(self):
        assert classify_platform(CHROME_WINDOWS_UA, '"macOS"') == "macOS"

    def test_hint_quotes_trimmed(self):
        assert classify_platform("", '"Linux"') == "Linux"

    def test_empty_hint_falls_back(self):
        assert classify_platform(SAMSUNG_UA, "") == "Android"
        assert classify_platform(SAMSUNG_UA, '""') == "Android"

    def test_unknown(self):
        assert classify_platform("") == "Unknown OS"
        assert classify_platform("curl/8.4.0") == "Unknown OS"


class TestDeviceClassifier:
    def test_desktop(self):
        device = classify_device(CHROME_WINDOWS_UA)
        assert device.type is DeviceType.DESKTOP
        assert device.is_desktop is True
        assert device.brand is None
        assert device.model is None

    def test_iphone(self):
        device = classify_device(IPHONE_UA)
        assert device.type is DeviceType.MOBILE
        assert device.is_mobile is True
        assert device.is_tablet is False
        assert device.brand == "Apple"
        assert device.model.startswith("iPhone")

    def test_ipad(self):
        device = classify_device(IPAD_UA)
        assert device.type is DeviceType.TABLET
        assert device.is_tablet is True
        assert device.is_mobile is False
        assert device.brand == "Apple"
        assert device.model == "iPad"

    def test_samsung(self):
        device = classify_device(SAMSUNG_UA)
        assert device.type is DeviceType.MOBILE
        assert device.brand == "Samsung"
        assert device.model == "SM-S918B"

    def test_tablet_wins_but_mobile_flag_kept(self):
        device = classify_device(KINDLE_UA)
        assert device.type is DeviceType.TABLET
        assert device.is_tablet is True
        assert device.is_mobile is True
        assert device.is_desktop is False

    @pytest.mark.parametrize("ua", [
        CHROME_WINDOWS_UA, IPHONE_UA, IPAD_UA, SAMSUNG_UA, KINDLE_UA, GOOGLEBOT_UA, "",
    ])
    def test_desktop_iff_no_mobility_signal(self, ua):
        device = classify_device(ua)
        assert (device.type is DeviceType.DESKTOP) == (not device.is_mobile and not device.is_tablet)
        assert device.is_desktop == (not device.is_mobile and not device.is_tablet)

    def test_empty_user_agent_is_desktop(self):
        assert classify_device("").type is DeviceType.DESKTOP


class TestBrandCascade:
    @pytest.mark.parametrize("ua,brand,model", [
        ("mozilla/5.0 (linux; android 13; redmi note 12 pro) applewebkit/537.36", "Xiaomi", "Redmi note 12 pro"),
        ("mozilla/5.0 (linux; android 14; pixel 8 pro) applewebkit/537.36", "Google", "Pixel 8 pro"),
        ("mozilla/5.0 (linux; android 10; lg-h870) applewebkit/537.36", "LG", "LG H870"),
        ("mozilla/5.0 (linux; android 12; oneplus9) applewebkit/537.36", "OnePlus", "OnePlus 9"),
        ("mozilla/5.0 (linux; android 12; samsung galaxy s21) applewebkit/537.36", "Samsung", "Galaxy s21"),
        ("mozilla/5.0 (iphone14,2; u; cpu iphone os 15_0 like mac os x)", "Apple", "iPhone 14.2"),
    ])
    def test_brand_and_model(self, ua, brand, model):
        assert detect_brand_model(ua) == (brand, model)

    def test_brand_without_model(self):
        assert detect_brand_model("mozilla/5.0 (linux; android 12; huawei)") == ("Huawei", None)

    def test_iphone_falls_back_to_literal_model(self):
        assert detect_brand_model(IPHONE_UA) == ("Apple", "iPhone")

    def test_no_brand(self):
        assert detect_brand_model("mozilla/5.0 (linux; android 12; kfmawi)") == (None, None)

    def test_desktop_never_gets_brand(self):
        device = classify_device("mozilla/5.0 (windows nt 10.0) samsung")
        assert device.brand is None
        assert device.model is None
