"""
HTTP persistence gateway for the landing page content service.

Each page is reachable under two identifiers' endpoints:
  GET  {api}/landing/uuid/{id}          stable identifier, tried first
  GET  {api}/landing/{id}               legacy identifier, fallback
  POST {api}/landing/uuid/{id}/update   same order for saves
  POST {api}/landing/{id}/update

The bearer credential is injected at construction; nothing here reads
shared client storage.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError

from pagecraft.kernel.gateway import AuthPending, LoadFailure, NotFound, PersistenceGateway, SaveFailure
from pagecraft.kernel.types import Document
from pagecraft.models.landing import LandingEnvelope, SaveRequest, SaveResponse

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], str | None]


class HttpGateway(PersistenceGateway):
    """Loads and saves landing pages over HTTP with identifier fallback."""

    def __init__(
        self,
        api_url: str,
        token: str | None = None,
        *,
        token_provider: TokenProvider | None = None,
        timeout: float = 30.0,
        max_retries: int = 1,
        retry_delay: float = 0.5,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Args:
            api_url: Base URL of the content API, e.g. https://shop.example/api
            token: Static bearer credential
            token_provider: Called before every request; wins over `token`.
                Lets a caller hand in credentials that arrive later.
            max_retries: Retries per endpoint on transport errors
            client: Pre-built client (tests pass one with a MockTransport)
        """
        self.api_url = api_url.rstrip("/")
        self._token = token
        self._token_provider = token_provider
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> HttpGateway:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # -- load --

    async def load(self, identifier: str) -> Document:
        if not self._current_token():
            raise AuthPending(identifier)

        errors: list[str] = []
        not_found = 0
        paths = self._page_paths(identifier)
        for path in paths:
            try:
                res = await self._request("GET", path)
            except httpx.HTTPError as e:
                logger.warning("http_gateway: GET %s failed: %s", path, e)
                errors.append(f"GET {path}: {e}")
                continue

            if res.status_code == 401:
                raise AuthPending(identifier)
            if res.status_code == 404:
                not_found += 1
                logger.info("http_gateway: %s not found at %s", identifier, path)
                continue
            if not res.is_success:
                logger.warning("http_gateway: GET %s returned %d", path, res.status_code)
                errors.append(f"GET {path}: HTTP {res.status_code}")
                continue

            return self._parse_page(res, path)

        if not_found == len(paths):
            raise NotFound(identifier)
        raise LoadFailure("; ".join(errors) or f"Could not load {identifier}")

    # -- save --

    async def save(self, identifier: str, payload: dict[str, Any]) -> None:
        body = SaveRequest(data=payload).model_dump()
        last_error: SaveFailure | None = None

        for path in self._page_paths(identifier):
            path = f"{path}/update"
            try:
                res = await self._request("POST", path, json=body)
            except httpx.HTTPError as e:
                logger.warning("http_gateway: POST %s failed: %s", path, e)
                last_error = SaveFailure(f"POST {path}: {e}")
                continue

            if not res.is_success:
                logger.warning("http_gateway: POST %s returned %d", path, res.status_code)
                last_error = SaveFailure(f"POST {path}: HTTP {res.status_code}", status_code=res.status_code)
                continue

            # The page was found; a refusal here is final, not a reason to try the legacy endpoint
            result = self._parse_save(res, path)
            if not result.success:
                raise SaveFailure(result.message or "Server did not confirm the save", status_code=res.status_code)
            return

        raise last_error or SaveFailure(f"Could not save {identifier}")

    # -- internals --

    def _page_paths(self, identifier: str) -> list[str]:
        return [f"/landing/uuid/{identifier}", f"/landing/{identifier}"]

    def _current_token(self) -> str | None:
        if self._token_provider is not None:
            return self._token_provider()
        return self._token

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self._current_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send one request, retrying transport errors with exponential backoff."""
        url = f"{self.api_url}{path}"
        for attempt in range(self.max_retries + 1):
            try:
                return await self._client.request(method, url, headers=self._headers(), **kwargs)
            except httpx.TransportError as e:
                if attempt >= self.max_retries:
                    raise
                wait_time = self.retry_delay * 2**attempt
                logger.warning(
                    "http_gateway: %s %s error (attempt %d), retrying in %.1fs: %s",
                    method, path, attempt + 1, wait_time, e,
                )
                await asyncio.sleep(wait_time)
        raise AssertionError("unreachable")

    @staticmethod
    def _parse_page(res: httpx.Response, path: str) -> Document:
        try:
            envelope = LandingEnvelope.model_validate(res.json())
        except (ValueError, ValidationError) as e:
            raise LoadFailure(f"GET {path}: unreadable page body: {e}") from e
        try:
            return Document.from_dict(envelope.page())
        except (TypeError, AttributeError, ValueError) as e:
            raise LoadFailure(f"GET {path}: malformed page: {e}") from e

    @staticmethod
    def _parse_save(res: httpx.Response, path: str) -> SaveResponse:
        try:
            return SaveResponse.model_validate(res.json())
        except (ValueError, ValidationError) as e:
            raise SaveFailure(f"POST {path}: unreadable response: {e}", status_code=res.status_code) from e
