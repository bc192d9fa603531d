"""Streaming HTTP fetch bounded by a total deadline."""

import time
from typing import Any

import httpx


def fetch_with_deadline(
    method: str,
    url: str,
    *,
    timeout_s: float,
    http_client: httpx.Client | None = None,
    **kwargs: Any,
) -> bytes:
    """
    Send one request and read its whole body within ``timeout_s`` seconds.

    httpx timeouts cover each connect/read step separately, so the body is
    streamed and the wall clock is checked after the headers and between chunks.

    Args:
        method: HTTP method
        url: Request URL
        timeout_s: Total time allowed for the request, body included
        http_client: Optional pre-built client; a temporary one is used otherwise
        **kwargs: Passed through to ``httpx.Client.stream`` (params, json, ...)

    Returns:
        The raw response body

    Raises:
        httpx.TimeoutException: If the deadline passes or a single step times out
        httpx.HTTPStatusError: For 4xx/5xx responses
    """
    if http_client is None:
        with httpx.Client(timeout=timeout_s) as client:
            return fetch_with_deadline(method, url, timeout_s=timeout_s, http_client=client, **kwargs)

    deadline = time.monotonic() + timeout_s

    def check_deadline(request: httpx.Request) -> None:
        if time.monotonic() > deadline:
            raise httpx.ReadTimeout(
                f"{method} {url} exceeded total timeout of {timeout_s}s", request=request
            )

    with http_client.stream(method, url, timeout=timeout_s, **kwargs) as response:
        check_deadline(response.request)
        response.raise_for_status()
        chunks = []
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            check_deadline(response.request)
        return b"".join(chunks)
