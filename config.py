"""
config.py – Centralised configuration loaded from environment variables.
"""

import os
import sys
from dotenv import load_dotenv

from models import Credentials

load_dotenv()

DEFAULT_BASE_URL = "https://d3s5nxhwblsjbi.cloudfront.net/api"
DEFAULT_USERNAME = "petya1"
DEFAULT_PASSWORD = "petyapetya1"


class Settings:
    """Validated, read-only application settings."""

    # ── Story API ───────────────────────────────────────────
    BASE_URL: str = os.getenv("STORY_API_BASE_URL", DEFAULT_BASE_URL).rstrip("/")

    # ── Login identity ──────────────────────────────────────
    USERNAME: str = os.getenv("STORY_API_USERNAME", DEFAULT_USERNAME)
    PASSWORD: str = os.getenv("STORY_API_PASSWORD", DEFAULT_PASSWORD)

    @classmethod
    def credentials(cls) -> Credentials:
        """Return the fixed login identity for this run."""
        return Credentials(username=cls.USERNAME, password=cls.PASSWORD)

    @classmethod
    def validate(cls) -> None:
        """Halt early if required values are missing."""
        missing: list[str] = []
        if not cls.BASE_URL:
            missing.append("STORY_API_BASE_URL")
        if not cls.USERNAME:
            missing.append("STORY_API_USERNAME")
        if not cls.PASSWORD:
            missing.append("STORY_API_PASSWORD")

        if cls.BASE_URL and not cls.BASE_URL.startswith(("http://", "https://")):
            sys.exit(
                f"[ERROR] STORY_API_BASE_URL='{cls.BASE_URL}' is not an http(s) URL."
            )

        if missing:
            sys.exit(
                f"[ERROR] Missing required environment variables: {', '.join(missing)}\n"
                "  → Copy .env.example to .env and fill in all values."
            )
