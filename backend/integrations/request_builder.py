"""
Request Builder: item parameters → RequestDescriptor.

Resolution order for the path:
  1. customEndpoint, used verbatim (leading "/" added when missing)
  2. resource base path (list)
  3. resource base path + "/" + identifier (get / sync)
"""

from __future__ import annotations

import json
from typing import Any

from integrations.base import (
    BASE_PATHS,
    IDENTIFIED_OPERATIONS,
    METHODS,
    ItemParameters,
    Operation,
    RequestDescriptor,
    TeePublicCredentials,
)
from integrations.errors import ConfigurationError, InvalidPayloadError, MissingIdentifierError
from integrations.proxy import ProxyConfig, parse_proxy

USER_AGENT = "teepublic-connector"


def build_request(credentials: TeePublicCredentials, params: ItemParameters) -> RequestDescriptor:
    """Build the outbound request for one item."""
    base_url = (credentials.base_url or "").removesuffix("/")
    if not base_url:
        raise ConfigurationError("Base URL is required in TeePublic credentials.")

    endpoint = resolve_endpoint(params)

    headers = {
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
    }
    if credentials.session_cookie:
        headers["Cookie"] = credentials.session_cookie

    return RequestDescriptor(
        method=resolve_method(params.operation),
        url=f"{base_url}{endpoint}",
        headers=headers,
        proxy=resolve_proxy(credentials),
        query=resolve_query(params),
        body=resolve_body(params),
    )


def resolve_endpoint(params: ItemParameters) -> str:
    custom = params.custom_endpoint
    if custom:
        return custom if custom.startswith("/") else f"/{custom}"

    base_path = BASE_PATHS[params.resource]
    if params.operation not in IDENTIFIED_OPERATIONS:
        return base_path

    target_id = params.identifier
    if not target_id:
        raise MissingIdentifierError("The selected operation requires an ID, but none was provided.")
    return f"{base_path}/{target_id}"


def resolve_method(operation: Operation) -> str:
    return METHODS[operation]


def resolve_query(params: ItemParameters) -> dict[str, str]:
    """Query filters for list calls; empty keys are dropped, last value wins."""
    if params.operation is not Operation.LIST:
        return {}

    qs: dict[str, str] = {}
    for entry in params.query_parameters:
        if entry.key:
            qs[entry.key] = entry.value
    return qs


def resolve_body(params: ItemParameters) -> Any:
    if params.operation is not Operation.SYNC:
        return None

    payload = params.payload
    if payload is None:
        return {}
    if isinstance(payload, str):
        if not payload.strip():
            return {}
        try:
            return json.loads(payload)
        except json.JSONDecodeError as exc:
            raise InvalidPayloadError(f"Payload is not valid JSON: {exc.msg}") from exc
    return payload


def resolve_proxy(credentials: TeePublicCredentials) -> ProxyConfig | None:
    if not credentials.proxy:
        return None
    return parse_proxy(credentials.proxy)
