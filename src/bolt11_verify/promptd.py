"""HTTP client for submitting prompts to a promptd server."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from bolt11_verify.exceptions import PromptRequestError

log = logging.getLogger(__name__)

RUN_PATH = "/v1/run"


def build_run_body(
    prompt: str,
    *,
    session_id: str | None = None,
    auto_approve: bool | None = None,
    dry_run: bool | None = None,
    max_steps: int | None = None,
) -> dict[str, Any]:
    """Build the JSON body for /v1/run, including only supplied options."""
    if not prompt or not prompt.strip():
        raise ValueError("prompt is required")

    body: dict[str, Any] = {"prompt": prompt}
    if session_id and session_id.strip():
        body["session_id"] = session_id.strip()
    if auto_approve is not None:
        body["auto_approve"] = auto_approve
    if dry_run is not None:
        body["dry_run"] = dry_run
    if max_steps is not None:
        body["max_steps"] = max_steps
    return body


def _headers(auth_token: str | None) -> dict[str, str]:
    headers = {"Content-Type": "application/json; charset=utf-8"}
    if auth_token:
        headers["Authorization"] = f"Bearer {auth_token}"
    return headers


def _parse_response(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as e:
        raise PromptRequestError(
            f"Invalid JSON response: {response.text[:200]}", response.status_code
        ) from e

    if response.status_code >= 400:
        message = data.get("error") if isinstance(data, dict) else None
        raise PromptRequestError(
            message or f"HTTP {response.status_code}", response.status_code
        )
    return data


class PromptClient:
    """Synchronous promptd client.

    Usage:
        client = PromptClient("http://127.0.0.1:9333")
        result = client.run("Show SC-Bridge info")
    """

    def __init__(
        self,
        base_url: str,
        auth_token: str | None = None,
        **httpx_kwargs: Any,
    ):
        """
        Args:
            base_url: promptd base URL.
            auth_token: Bearer token, if the server requires one.
            **httpx_kwargs: Additional kwargs passed to httpx.Client.
        """
        self._base_url = base_url.rstrip("/")
        self._auth_token = auth_token
        self._httpx_kwargs = {"timeout": 60.0, **httpx_kwargs}

    def run(self, prompt: str, **options: Any) -> dict[str, Any]:
        """Submit a prompt and return the decoded JSON response."""
        body = build_run_body(prompt, **options)
        url = f"{self._base_url}{RUN_PATH}"
        log.info("POST %s", url)

        with httpx.Client(**self._httpx_kwargs) as client:
            try:
                response = client.post(url, json=body, headers=_headers(self._auth_token))
            except httpx.HTTPError as e:
                raise PromptRequestError(f"promptd connection error: {e}") from e

        return _parse_response(response)


class AsyncPromptClient:
    """Async promptd client.

    Usage:
        async with AsyncPromptClient("http://127.0.0.1:9333") as client:
            result = await client.run("Show SC-Bridge info")
    """

    def __init__(
        self,
        base_url: str,
        auth_token: str | None = None,
        **httpx_kwargs: Any,
    ):
        self._base_url = base_url.rstrip("/")
        self._auth_token = auth_token
        self._httpx_kwargs = {"timeout": 60.0, **httpx_kwargs}
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> AsyncPromptClient:
        self._client = httpx.AsyncClient(**self._httpx_kwargs)
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(**self._httpx_kwargs)
        return self._client

    async def run(self, prompt: str, **options: Any) -> dict[str, Any]:
        """Submit a prompt and return the decoded JSON response."""
        body = build_run_body(prompt, **options)
        url = f"{self._base_url}{RUN_PATH}"
        log.info("POST %s", url)

        client = self._ensure_client()
        try:
            response = await client.post(url, json=body, headers=_headers(self._auth_token))
        except httpx.HTTPError as e:
            raise PromptRequestError(f"promptd connection error: {e}") from e

        return _parse_response(response)

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
