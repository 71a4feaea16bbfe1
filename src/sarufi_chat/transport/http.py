"""
REST HTTP client for the Sarufi API.

Every request carries the API key as a bearer token. Transport failures,
HTTP error statuses and undecodable bodies are all raised as GatewayError.
"""

import logging
from typing import Any, Optional

import httpx

from sarufi_chat.errors import AuthError, GatewayError

DEFAULT_BASE_URL = "https://api.sarufi.io"
DEFAULT_TIMEOUT_S = 30.0

logger = logging.getLogger(__name__)


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"User-Agent": "sarufi-chat/0.1.0", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def set_token(self, token: str) -> None:
        self._token = token

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        """Prefer the API's own ``detail``/``message`` field over the raw body."""
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            for key in ("detail", "message"):
                if isinstance(body.get(key), str):
                    return f"HTTP {resp.status_code}: {body[key]}"
        return f"HTTP {resp.status_code}: {resp.text[:200]}"

    def _check(self, resp: httpx.Response) -> Any:
        if resp.status_code in (401, 403):
            raise AuthError(self._error_message(resp), details={"status_code": resp.status_code})
        if resp.status_code >= 400:
            raise GatewayError(self._error_message(resp), details={"status_code": resp.status_code})
        try:
            return resp.json()
        except ValueError as e:
            raise GatewayError(f"Invalid JSON from {resp.request.url.path}: {e}")

    async def _request(self, method: str, path: str, body: Optional[dict[str, Any]] = None) -> Any:
        logger.debug("%s %s", method, path)
        try:
            resp = await self._client.request(method, path, json=body, headers=self._auth_headers())
        except httpx.HTTPError as e:
            reason = f"{type(e).__name__}: {e}" if str(e) else type(e).__name__
            logger.warning("%s %s failed: %s", method, path, reason)
            raise GatewayError(f"Request to {path} failed: {reason}")
        return self._check(resp)

    async def get(self, path: str) -> Any:
        return await self._request("GET", path)

    async def post(self, path: str, body: Optional[dict[str, Any]] = None) -> Any:
        return await self._request("POST", path, body)

    async def close(self) -> None:
        await self._client.aclose()
