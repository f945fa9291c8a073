"""Centralised settings for the newsletter reader.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

VERSION = "1.0.0"


def _split_names(raw: str) -> tuple[str, ...]:
    return tuple(name.strip() for name in raw.split(",") if name.strip())


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Feed / network
    # ------------------------------------------------------------------
    feed_url: str = field(
        default_factory=lambda: os.environ.get(
            "NEWSLETTER_FEED_URL", "https://lucandjeremi.substack.com/feed"
        )
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "NEWSLETTER_USER_AGENT", f"newsletter-reader/{VERSION}"
        )
    )

    # ------------------------------------------------------------------
    # Presentation
    # ------------------------------------------------------------------
    speakers: tuple[str, ...] = field(
        default_factory=lambda: _split_names(
            os.environ.get("DIALOGUE_SPEAKERS", "Jeremi,Luca")
        )
    )
    max_width: int = field(
        default_factory=lambda: int(os.environ.get("NEWSLETTER_MAX_WIDTH", "80"))
    )
    color_enabled: bool = field(
        default_factory=lambda: "NO_COLOR" not in os.environ
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "WARNING")
    )


# Module-level singleton; import this everywhere:
#   from newsletter.config import settings
settings = Settings()
