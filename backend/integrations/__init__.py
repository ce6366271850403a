"""
Integration adapters package.

Declarative adapter for the TeePublic seller portal:
  - orders   (list / get / sync)
  - designs  (list / get / sync)
  - payouts  (list / get / sync)

Usage:
    from integrations.base import ItemParameters, TeePublicCredentials
    from integrations.request_builder import build_request

    request = build_request(
        TeePublicCredentials(session_cookie="_session=..."),
        ItemParameters(resource="orders", operation="get", orderId="1234"),
    )
    body = await TeePublicClient().send(request)
"""

from integrations.base import (
    BatchResult,
    ItemParameters,
    Operation,
    OutputRecord,
    RequestDescriptor,
    Resource,
    TeePublicCredentials,
    describe_operations,
)
from integrations.errors import (
    ConfigurationError,
    InvalidParametersError,
    InvalidPayloadError,
    InvalidProxyError,
    MissingIdentifierError,
    TeePublicError,
    TransportError,
)
from integrations.proxy import ProxyAuth, ProxyConfig, parse_proxy
from integrations.request_builder import build_request
from integrations.teepublic import TeePublicClient, shape_result, unwrap_response

__all__ = [
    "Resource",
    "Operation",
    "ItemParameters",
    "TeePublicCredentials",
    "RequestDescriptor",
    "OutputRecord",
    "BatchResult",
    "describe_operations",
    "TeePublicError",
    "ConfigurationError",
    "InvalidParametersError",
    "MissingIdentifierError",
    "InvalidPayloadError",
    "InvalidProxyError",
    "TransportError",
    "ProxyAuth",
    "ProxyConfig",
    "parse_proxy",
    "build_request",
    "TeePublicClient",
    "unwrap_response",
    "shape_result",
]
