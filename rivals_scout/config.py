"""
Runtime settings for the scout service.

Values come from environment variables; the defaults reproduce the reference
scraping behaviour (12 readiness attempts, 5 second poll interval).
"""

import os
from pathlib import Path
from typing import List, Optional


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name, "").strip()
    return Path(raw) if raw else None


# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"

# Browser / scraping
HEADLESS = _env_bool("SCOUT_HEADLESS", True)
MAX_ATTEMPTS = int(os.getenv("SCOUT_MAX_ATTEMPTS", "12"))
POLL_INTERVAL_SECONDS = float(os.getenv("SCOUT_POLL_INTERVAL_SECONDS", "5.0"))
INITIAL_DELAY_SECONDS = float(os.getenv("SCOUT_INITIAL_DELAY_SECONDS", "5.0"))
CONSENT_TIMEOUT_MS = int(os.getenv("SCOUT_CONSENT_TIMEOUT_MS", "5000"))
NAVIGATION_TIMEOUT_MS = int(os.getenv("SCOUT_NAVIGATION_TIMEOUT_MS", "30000"))
ENCODE_HANDLES = _env_bool("SCOUT_ENCODE_HANDLES", True)
SCREENSHOT_DIR = _env_path("SCOUT_SCREENSHOT_DIR")

# OCR
OCR_LANGUAGE = os.getenv("OCR_LANGUAGE", "eng")
TESSERACT_CMD = os.getenv("TESSERACT_CMD", "").strip() or None

# API
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "3000"))
CORS_ORIGINS = _env_list("CORS_ORIGINS", "*")
