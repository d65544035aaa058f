"""Pytest configuration."""

import os

# Ensure test environment
os.environ.setdefault("DEVICE_DETECTOR_ENVIRONMENT", "test")
os.environ.setdefault("DEVICE_DETECTOR_DEBUG", "true")
os.environ.setdefault("DEVICE_DETECTOR_TOR_EXIT_NODE_URL", "https://tor.invalid/exit-addresses")
