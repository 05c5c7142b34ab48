"""Async HTTP client for the control-plane API."""

import json
import logging
from typing import Any

import httpx

from kgsync.config import AppConfig
from kgsync.errors import TransportFailure

logger = logging.getLogger(__name__)


def extract_error_message(response: httpx.Response) -> str:
    """Build a human-readable message from a non-success reply.

    FastAPI puts errors under ``detail`` as a string, a list of validation
    entries, or an object. Other services use ``message`` or ``errors``.

    Args:
        response: The failed HTTP response.

    Returns:
        The best available message, or ``HTTP Error: <status>``.
    """
    message = f"HTTP Error: {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return message
    if not isinstance(body, dict):
        return message

    detail = body.get("detail")
    if detail:
        if isinstance(detail, str):
            return detail
        if isinstance(detail, list):
            return ", ".join(
                str(e.get("msg") or e.get("message") or json.dumps(e))
                if isinstance(e, dict)
                else str(e)
                for e in detail
            )
        return json.dumps(detail)
    if body.get("message"):
        return str(body["message"])
    if body.get("errors"):
        return json.dumps(body["errors"])
    return message


def _json_body(data: Any) -> dict[str, Any]:
    # None is sent as a literal JSON null rather than an empty body
    return {
        "content": json.dumps(data),
        "headers": {"Content-Type": "application/json"},
    }


class ApiClient:
    """Thin wrapper over ``httpx.AsyncClient`` with API-key authentication.

    Every transport error and non-2xx reply is raised as TransportFailure,
    so callers deal with a single failure type. The base URL and the auth
    headers are applied per request, so an injected client is used as-is
    and never reconfigured.

    Args:
        base_url: Root URL of the control plane.
        api_key: Value of the ``x-api-key`` header, if any.
        timeout_sec: Transport-level timeout for a client built here.
        http_client: Pre-built client to use instead of creating one.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout_sec: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.headers = {"Accept": "application/json"}
        if api_key:
            self.headers["x-api-key"] = api_key
        self._http = http_client or httpx.AsyncClient(timeout=timeout_sec)

    @classmethod
    def from_config(cls, config: AppConfig) -> "ApiClient":
        return cls(
            base_url=config.api.base_url,
            api_key=config.api_key,
            timeout_sec=config.api.timeout_sec,
        )

    async def request(self, method: str, endpoint: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            TransportFailure: On network errors, non-2xx replies, or a body
                that is not JSON.
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        headers = {**self.headers, **kwargs.pop("headers", {})}
        try:
            response = await self._http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error("API request failed: %s %s: %s", method, endpoint, e)
            raise TransportFailure(f"Request failed: {e}") from e

        if not response.is_success:
            message = extract_error_message(response)
            logger.error(
                "API request failed: %s %s -> %d %s",
                method,
                endpoint,
                response.status_code,
                message,
            )
            raise TransportFailure(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error("API returned non-JSON body: %s %s", method, endpoint)
            raise TransportFailure(
                "Malformed response from server", status_code=response.status_code
            ) from e

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", endpoint, params=params)

    async def post(self, endpoint: str, data: Any = None) -> Any:
        return await self.request("POST", endpoint, **_json_body(data))

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
