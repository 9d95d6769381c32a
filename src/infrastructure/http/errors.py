"""
Translation of httpx failures into the domain FetchError taxonomy.

Every httpx-based adapter sends its requests through request_json() so
status classification (429 -> rate limited, 404 -> not found) lives in a
single place.
"""

from typing import Any

import httpx

from src.domain.errors import (
    FetchError,
    MalformedPayloadError,
    NotFoundError,
    ProviderNotConfiguredError,
    RateLimitedError,
    TransientFetchError,
)


def error_for_status(response: httpx.Response, resource: str) -> FetchError:
    status = response.status_code
    if status == 429:
        return RateLimitedError(f"{resource}: rate limited (HTTP 429)")
    if status == 404:
        return NotFoundError(f"{resource}: not found (HTTP 404)")
    if status in (401, 403):
        return ProviderNotConfiguredError(f"{resource}: credentials rejected (HTTP {status})")
    return TransientFetchError(f"{resource}: HTTP {status}")


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    resource: str,
    **kwargs: Any,
) -> Any:
    """Send a request and return the decoded JSON body.

    Raises:
        RateLimitedError, NotFoundError, TransientFetchError: on HTTP or
            transport failures.
        MalformedPayloadError: if the body is not valid JSON.
    """
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.TransportError as exc:
        raise TransientFetchError(f"{resource}: {exc.__class__.__name__}: {exc}") from exc

    if response.is_error:
        raise error_for_status(response, resource)

    try:
        return response.json()
    except ValueError as exc:
        raise MalformedPayloadError(f"{resource}: response is not valid JSON") from exc
