"""
Device Detector configuration.
All tunables come from environment variables (prefix DEVICE_DETECTOR_).
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # --- App ---
    app_name: str = "Device Detector"
    debug: bool = False
    environment: str = "development"  # diagnostic route is hidden in "production"

    # --- Tor detection ---
    enable_tor_detection: bool = True
    tor_cache_duration: int = 3600  # 1 hour
    tor_exit_node_url: str = "https://check.torproject.org/exit-addresses"
    tor_fetch_timeout: float = 10.0
    tor_retry_after: int = 60  # back-off after a failed fetch

    # --- Robot detection ---
    enable_robot_detection: bool = True

    model_config = {"env_prefix": "DEVICE_DETECTOR_", "env_file": ".env"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
