"""Landing page wire models for the content service."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class LandingEnvelope(BaseModel):
    """
    What GET /landing/... returns.

    The service answers either with a record wrapping the page,
    {"id": 7, "uuid": "...", "data": {...page...}}, or with the page object
    itself. page() returns the page in both cases.
    """

    model_config = {"extra": "allow"}

    data: dict[str, Any] | None = None

    def page(self) -> dict[str, Any]:
        if self.data is not None:
            return self.data
        return dict(self.model_extra or {})


class SaveRequest(BaseModel):
    """What the client sends to POST /landing/.../update. Always the full page."""

    model_config = {"extra": "forbid"}

    data: dict[str, Any]


class SaveResponse(BaseModel):
    """What the update endpoint returns. A 2xx without success=true is not a save."""

    model_config = {"extra": "allow"}

    success: bool = False
    message: str | None = None
