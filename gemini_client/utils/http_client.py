"""HTTP client utilities."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx


@asynccontextmanager
async def stream_request(
    method: str,
    url: httpx.URL,
    headers: dict[str, str],
    json_data: dict | None = None,
    *,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[httpx.Response]:
    """Open a streaming HTTP request; the body is left unread."""
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        async with client.stream(
            method,
            url,
            headers=headers,
            json=json_data,
        ) as response:
            yield response


async def post_request(
    url: httpx.URL,
    headers: dict[str, str],
    json_data: dict | None = None,
    *,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """Make a POST request."""
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        response = await client.post(url, headers=headers, json=json_data)
        return response
