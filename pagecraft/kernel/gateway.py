"""
Pagecraft Kernel -- Persistence Gateway

The load/save contract the document model talks to. Implement with
HttpGateway (pagecraft.services.http_gateway) for production, or
MemoryGateway for tests and offline use.

Save always carries the full page, never a diff, so repeating a save is safe.
"""

from __future__ import annotations

import copy
from typing import Any

from pagecraft.kernel.types import Document

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class GatewayError(Exception):
    """Base class for persistence errors."""


class LoadFailure(GatewayError):
    """Page could not be loaded from any endpoint (network, server, or parse error)."""


class NotFound(LoadFailure):
    """Neither identifier resolves to a page."""


class AuthPending(GatewayError):
    """Credentials are not available yet. Retry the load once they are."""


class SaveFailure(GatewayError):
    """Save was rejected or never reached the server."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


# ---------------------------------------------------------------------------
# Gateway protocol
# ---------------------------------------------------------------------------


class PersistenceGateway:
    """Abstract load/save interface."""

    async def load(self, identifier: str) -> Document:
        """
        Fetch a page. Raises AuthPending, NotFound, or LoadFailure.
        Implementations resolve the identifier against the stable endpoint
        first and the legacy one second.
        """
        raise NotImplementedError

    async def save(self, identifier: str, payload: dict[str, Any]) -> None:
        """Persist the full reconciled page. Raises SaveFailure."""
        raise NotImplementedError

    async def close(self) -> None:
        """Release connections. Default: nothing to release."""
        return None


class MemoryGateway(PersistenceGateway):
    """In-memory gateway for testing."""

    def __init__(self, pages: dict[str, dict[str, Any]] | None = None) -> None:
        self.pages: dict[str, dict[str, Any]] = copy.deepcopy(pages or {})
        self.saved: list[tuple[str, dict[str, Any]]] = []
        self.authenticated = True
        self.fail_saves = False

    async def load(self, identifier: str) -> Document:
        if not self.authenticated:
            raise AuthPending(identifier)
        page = self.pages.get(identifier)
        if page is None:
            raise NotFound(identifier)
        return Document.from_dict(copy.deepcopy(page))

    async def save(self, identifier: str, payload: dict[str, Any]) -> None:
        if self.fail_saves:
            raise SaveFailure(f"Save rejected for {identifier}", status_code=500)
        self.pages[identifier] = copy.deepcopy(payload)
        self.saved.append((identifier, copy.deepcopy(payload)))
