# This module wraps the backend tool proxy: one authenticated HTTP call per request.
# Date: 2026-10-19
# Version: 0.1.0

import httpx
from typing import Any, Dict, Optional

from assistant.core.config import get_settings
from assistant.core.errors import BackendError
from assistant.utils.logger import console


def clean_query_params(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Drops every None value before a query string is built. The backend treats an
    absent parameter differently from one explicitly set to an empty string, and
    httpx would otherwise encode None as "".
    """
    if not params:
        return {}
    return {key: value for key, value in params.items() if value is not None}


class BackendClient:
    """
    Async client for the backend tool proxy.

    Every call carries the shared-secret x-api-key header; the secret is only ever
    held server-side and is never logged. A fresh httpx.AsyncClient is opened per
    call, so the client itself holds no connection state between requests.
    """

    def __init__(self, base_url: str, api_key: str, timeout: float = 30.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "BackendClient":
        settings = get_settings()
        return cls(
            base_url=settings.BACKEND_API_URL,
            api_key=settings.BACKEND_API_KEY,
            timeout=settings.BACKEND_TIMEOUT_SECONDS,
        )

    def _headers(self, session_id: Optional[str]) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "x-api-key": self._api_key,
        }
        if session_id:
            headers["x-session-id"] = session_id
        return headers

    async def request(self, method: str, path: str,
                      params: Optional[Dict[str, Any]] = None,
                      json: Optional[Dict[str, Any]] = None,
                      session_id: Optional[str] = None) -> Any:
        """
        Performs one call and returns the decoded JSON body.
        Raises BackendError on a non-success status; transport failures and
        timeouts surface as httpx.HTTPError.
        """
        method = method.upper()
        query = clean_query_params(params) if method == "GET" else None
        body = json if method != "GET" else None

        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            request = client.build_request(
                method, path, params=query, json=body, headers=self._headers(session_id)
            )
            console.info(f"Calling backend: {method} {request.url}")
            response = await client.send(request)

        if response.is_error:
            console.error(f"Backend error {response.status_code} for {method} {path}: {response.text}")
            raise BackendError(response.status_code, response.reason_phrase, response.text)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None,
                  session_id: Optional[str] = None) -> Any:
        return await self.request("GET", path, params=params, session_id=session_id)

    async def post(self, path: str, json: Optional[Dict[str, Any]] = None,
                   session_id: Optional[str] = None) -> Any:
        return await self.request("POST", path, json=json, session_id=session_id)

    async def try_request(self, method: str, path: str, **kwargs) -> Optional[Any]:
        """
        Best-effort variant of request() for optional side data.
        Returns None when the call fails; the caller decides how to proceed without it.
        """
        try:
            return await self.request(method, path, **kwargs)
        except (BackendError, httpx.HTTPError) as e:
            console.warning(f"Optional backend call {method} {path} failed: {e}")
            return None


backend_client = BackendClient.from_settings()
