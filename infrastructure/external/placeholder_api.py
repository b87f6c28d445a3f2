from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from config import settings
from schemas.naming import DEFAULT_NAMING_POLICY, JsonNamingPolicy

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """Base class for failures talking to the upstream JSON API."""


class UpstreamUnavailableError(UpstreamError):
    """The upstream could not be reached or the transport failed mid-request."""


class UpstreamStatusError(UpstreamError):
    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"Response status code does not indicate success: {status_code} ({url})")
        self.status_code = status_code
        self.url = url


class UpstreamPayloadError(UpstreamError):
    """The upstream answered with a body that is not the expected JSON shape."""


class PlaceholderApiClient:
    """Pass-through client for the public JSON test API.

    A single ``httpx.AsyncClient`` is shared by every request; the client is
    owned by this object and released by :meth:`aclose`.
    """

    def __init__(
        self,
        *,
        base_url: str = settings.UPSTREAM_BASE_URL,
        timeout: Optional[float] = settings.UPSTREAM_TIMEOUT_SECONDS,
        naming_policy: JsonNamingPolicy = DEFAULT_NAMING_POLICY,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        base_url = base_url.rstrip("/")
        self._naming_policy = naming_policy
        if http_client is None:
            client_kwargs: dict[str, Any] = {"base_url": base_url}
            if timeout is not None:
                client_kwargs["timeout"] = timeout
            http_client = httpx.AsyncClient(**client_kwargs)
        self._http = http_client

    async def fetch_collection(self, resource_path: str) -> list[dict[str, Any]]:
        payload = await self._request("GET", self._path(resource_path))
        if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
            raise UpstreamPayloadError(f"Expected a JSON array of objects from {resource_path}")
        return payload

    async def fetch_one(self, resource_path: str, resource_id: int) -> dict[str, Any]:
        payload = await self._request("GET", f"{self._path(resource_path)}/{resource_id}")
        return self._expect_object(payload, resource_path)

    async def create_one(self, resource_path: str, body: Mapping[str, Any]) -> dict[str, Any]:
        payload = await self._request(
            "POST",
            self._path(resource_path),
            json=self._naming_policy.apply(dict(body)),
        )
        return self._expect_object(payload, resource_path)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("Upstream %s %s failed: %s", method, path, exc)
            raise UpstreamUnavailableError(f"Upstream request {method} {path} failed: {exc}") from exc

        if not response.is_success:
            raise UpstreamStatusError(response.status_code, str(response.request.url))

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamPayloadError(f"Upstream returned malformed JSON for {path}") from exc

        return self._naming_policy.apply(payload)

    @staticmethod
    def _path(resource_path: str) -> str:
        return "/" + resource_path.strip("/")

    @staticmethod
    def _expect_object(payload: Any, resource_path: str) -> dict[str, Any]:
        if not isinstance(payload, dict):
            raise UpstreamPayloadError(f"Expected a JSON object from {resource_path}")
        return payload
