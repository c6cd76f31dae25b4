"""Centralised settings for the shascan pipeline.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

The pipeline never reads the module-level ``settings`` behind the caller's
back: every entry point accepts an explicit :class:`Settings` and only falls
back to the singleton when none is given.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DEFAULT_TARGET_URL = (
    "https://www.opentable.com/landmark/restaurants-near-times-square-manhattan"
)

_DEFAULT_BROWSER_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/138.0.0.0 Safari/537.36"
)


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Target application
    # ------------------------------------------------------------------
    target_url: str = field(
        default_factory=lambda: os.environ.get("SHASCAN_TARGET_URL", _DEFAULT_TARGET_URL)
    )
    asset_origin: str = field(
        default_factory=lambda: os.environ.get(
            "SHASCAN_ASSET_ORIGIN", "https://www.opentable.com"
        )
    )

    # ------------------------------------------------------------------
    # Output / debugging
    # ------------------------------------------------------------------
    output_path: Path = field(
        default_factory=lambda: Path(
            os.environ.get("SHASCAN_OUTPUT_PATH", "secrets/secrets.json")
        )
    )
    debug: bool = field(default_factory=lambda: _env_flag("SHASCAN_DEBUG"))
    debug_html_path: Path = field(
        default_factory=lambda: Path(
            os.environ.get("SHASCAN_DEBUG_HTML_PATH", "debug-page.html")
        )
    )

    # ------------------------------------------------------------------
    # Asset fetching
    # ------------------------------------------------------------------
    fetch_mode: str = field(
        default_factory=lambda: os.environ.get("SHASCAN_FETCH_MODE", "sequential")
    )
    fetch_concurrency: int = field(
        default_factory=lambda: int(os.environ.get("SHASCAN_FETCH_CONCURRENCY", "4"))
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SHASCAN_REQUEST_TIMEOUT", "15.0"))
    )
    fetch_max_attempts: int = field(
        default_factory=lambda: int(os.environ.get("SHASCAN_FETCH_MAX_ATTEMPTS", "3"))
    )
    retry_backoff_factor: float = field(
        default_factory=lambda: float(
            os.environ.get("SHASCAN_RETRY_BACKOFF_FACTOR", "1.0")
        )
    )
    fetch_delay_min: float = field(
        default_factory=lambda: float(os.environ.get("SHASCAN_FETCH_DELAY_MIN", "2.0"))
    )
    fetch_delay_max: float = field(
        default_factory=lambda: float(os.environ.get("SHASCAN_FETCH_DELAY_MAX", "4.0"))
    )

    # ------------------------------------------------------------------
    # Headless browser (root page)
    # ------------------------------------------------------------------
    browser_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SHASCAN_BROWSER_TIMEOUT", "30.0"))
    )
    browser_settle_min: float = field(
        default_factory=lambda: float(
            os.environ.get("SHASCAN_BROWSER_SETTLE_MIN", "2.0")
        )
    )
    browser_settle_max: float = field(
        default_factory=lambda: float(
            os.environ.get("SHASCAN_BROWSER_SETTLE_MAX", "3.0")
        )
    )
    browser_user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "SHASCAN_BROWSER_USER_AGENT", _DEFAULT_BROWSER_UA
        )
    )
    viewport_width: int = 1920
    viewport_height: int = 1080
    short_html_threshold: int = field(
        default_factory=lambda: int(
            os.environ.get("SHASCAN_SHORT_HTML_THRESHOLD", "1000")
        )
    )
    chromium_path: str | None = field(
        default_factory=lambda: os.environ.get("CHROMIUM_PATH") or None
    )


# Module-level singleton, import this everywhere:
#   from shascan.config import settings
settings = Settings()
