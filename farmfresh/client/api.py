# farmfresh/client/api.py
import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """The request never produced a response (connection refused, timeout, ...)."""


class ApiError(Exception):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class Unauthorized(ApiError):
    """401: the session is missing or expired."""


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        detail = body.get("detail", body.get("message"))
        # FastAPI validation errors are a list of {loc, msg, type}
        if isinstance(detail, list) and detail:
            first = detail[0]
            return first.get("msg", str(first)) if isinstance(first, dict) else str(first)
        if detail:
            return str(detail)
    return response.reason_phrase


class ApiClient:
    """Thin JSON wrapper over an httpx.AsyncClient.

    The underlying client keeps the session cookie, so every request is sent
    with the caller's credentials. Nothing is retried; failures surface as
    TransportError, ApiError or Unauthorized.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:8000", http: Optional[httpx.AsyncClient] = None):
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(base_url=base_url)

    async def request(self, method: str, path: str, json: Any = None, params: Optional[dict] = None) -> Any:
        try:
            response = await self.http.request(method, path, json=json, params=params)
        except httpx.RequestError as e:
            logger.error("%s %s failed: %s", method, path, e)
            raise TransportError(str(e)) from e

        if response.status_code >= 400:
            message = _error_message(response)
            logger.debug("%s %s -> %s %s", method, path, response.status_code, message)
            if response.status_code == 401:
                raise Unauthorized(response.status_code, message)
            raise ApiError(response.status_code, message)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            # e.g. an HTML page from a proxy in front of the API
            logger.warning("%s %s returned a non-JSON body: %s", method, path, e)
            raise ApiError(response.status_code, "Invalid JSON response") from e

    async def get(self, path: str, params: Optional[dict] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()
