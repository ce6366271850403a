"""
TeePublic Seller Portal Client

Sends built requests over httpx and reshapes response bodies into
output objects. Authentication is the pre-captured session cookie carried
in the request headers; there is no retry or rate limiting here.
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from integrations.base import RequestDescriptor
from integrations.errors import TransportError

logger = structlog.get_logger()

NO_RESPONSE_BODY = {"success": True, "message": "No response body"}


class TeePublicClient:
    """Client for TeePublic seller portal requests."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None):
        # An injected transport replaces both the network and proxy routing.
        self.transport = transport

    def _client_kwargs(self, request: RequestDescriptor) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"follow_redirects": True}
        if self.transport is not None:
            kwargs["transport"] = self.transport
        elif request.proxy is not None:
            kwargs["proxy"] = request.proxy.url
        return kwargs

    async def send(self, request: RequestDescriptor) -> Any:
        """
        Issue the request and return the decoded body.

        Empty bodies decode to None and non-JSON bodies to their text.
        Raises TransportError on network failures and non-2xx statuses.
        """
        kwargs: dict[str, Any] = {
            "headers": request.headers,
            "params": request.query or None,
        }
        if request.has_body:
            kwargs["json"] = request.body

        try:
            async with httpx.AsyncClient(**self._client_kwargs(request)) as client:
                response = await client.request(request.method, request.url, **kwargs)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise TransportError(
                f"HTTP {status} for {request.method} {request.url}: {exc.response.text[:200]}",
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Request failed for {request.method} {request.url}: {exc}") from exc

        logger.debug(
            "teepublic.response.received",
            method=request.method,
            url=request.url,
            status_code=response.status_code,
        )
        return decode_body(response)


def decode_body(response: httpx.Response) -> Any:
    if not response.content.strip():
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def unwrap_response(response: Any, raw_output: bool = False) -> Any:
    """Prefer the `data` field unless raw output was requested."""
    if raw_output:
        return response

    data = response.get("data") if isinstance(response, dict) else None
    if data is None:
        data = response
    if data is None or data == "":
        return dict(NO_RESPONSE_BODY)
    return data


def shape_result(data: Any) -> dict[str, Any]:
    """Every output is an object: lists become {"items": [...]}."""
    if isinstance(data, list):
        return {"items": data}
    if isinstance(data, dict):
        return data
    if data is None or data == "":
        return {}
    return {"data": data}
