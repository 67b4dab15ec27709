"""
Pagecraft configuration -- all environment variables in one place.

Read from environment at runtime. Never hardcode secrets. Only the CLI
composition root reads the token; the kernel gets it injected.
"""

from __future__ import annotations

import os

DEFAULT_API_URL = "http://localhost:8000/api"


class Settings:
    """Application settings from environment variables."""

    # Content service
    API_URL: str = os.environ.get("PAGECRAFT_API_URL", DEFAULT_API_URL).rstrip("/")
    TOKEN: str = os.environ.get("PAGECRAFT_TOKEN", "")

    # HTTP
    TIMEOUT: float = float(os.environ.get("PAGECRAFT_TIMEOUT", "30"))
    MAX_RETRIES: int = int(os.environ.get("PAGECRAFT_MAX_RETRIES", "1"))

    # Preview
    PREVIEW_TITLE: str = os.environ.get("PAGECRAFT_PREVIEW_TITLE", "Landing Page Preview")

    def validate(self) -> list[str]:
        """Return a list of problems; empty means the settings are usable."""
        problems: list[str] = []
        if not self.API_URL.startswith(("http://", "https://")):
            problems.append(f"PAGECRAFT_API_URL must be an http(s) URL, got {self.API_URL!r}")
        if self.TIMEOUT <= 0:
            problems.append("PAGECRAFT_TIMEOUT must be positive")
        if self.MAX_RETRIES < 0:
            problems.append("PAGECRAFT_MAX_RETRIES must not be negative")
        return problems


# Singleton instance
settings = Settings()
