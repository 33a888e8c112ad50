"""HTTP transport for the dispatcher API"""

from typing import Any

import httpx


class DispatcherAPIError(Exception):
    """The dispatcher was unreachable or answered with an error envelope"""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        code: str | None = None,
        request_id: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.request_id = request_id


class APIClient:
    """
    Thin httpx wrapper that unwraps the dispatcher's response envelope.

    Success: {"ok": true, "data": {...}, "request_id": ...}
    Failure: {"ok": false, "error": {"message", "code", "details"}, "request_id": ...}
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        transport: httpx.BaseTransport | None = None,
    ):
        self.client = httpx.Client(
            base_url=f"{base_url.rstrip('/')}/v1", timeout=timeout, transport=transport
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.client.close()

    def get(self, path: str) -> dict[str, Any]:
        return self._request("GET", path)

    def post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", path, json=payload)

    def _request(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise DispatcherAPIError(f"Connection failed: {e}") from e
        return unwrap_envelope(response)


def unwrap_envelope(response: httpx.Response) -> dict[str, Any]:
    """Return the envelope's data, or raise with its error details"""
    try:
        envelope = response.json()
    except ValueError:
        raise DispatcherAPIError(
            f"Invalid JSON response ({response.status_code})",
            status_code=response.status_code,
        ) from None

    if not isinstance(envelope, dict) or "ok" not in envelope:
        raise DispatcherAPIError(
            f"Unexpected response ({response.status_code})",
            status_code=response.status_code,
        )

    if envelope["ok"] and response.is_success:
        return envelope.get("data") or {}

    error = envelope.get("error") or {}
    raise DispatcherAPIError(
        f"API Error {response.status_code}: {error.get('message', 'Request failed')}",
        status_code=response.status_code,
        code=error.get("code"),
        request_id=envelope.get("request_id"),
    )
