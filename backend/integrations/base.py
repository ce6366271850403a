"""
TeePublic Adapter — Data Model

Resources and operations form a closed set. Everything that depends on
them (default paths, identifier fields, HTTP methods) is looked up from the
tables below so request building never branches on free-form strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.config import DEFAULT_TEEPUBLIC_BASE_URL, Settings
from integrations.errors import InvalidParametersError
from integrations.proxy import ProxyConfig

# ── Resources and operations ──────────────────────────────────────────────


class Resource(str, Enum):
    """Remote entity categories exposed by the seller portal."""

    ORDERS = "orders"
    DESIGNS = "designs"
    PAYOUTS = "payouts"


class Operation(str, Enum):
    """Actions that can be requested against a resource."""

    LIST = "list"
    GET = "get"
    SYNC = "sync"  # create-or-update via JSON payload


BASE_PATHS: dict[Resource, str] = {
    Resource.ORDERS: "/api/seller/orders",
    Resource.DESIGNS: "/api/seller/designs",
    Resource.PAYOUTS: "/api/seller/payouts",
}

ID_PARAMETERS: dict[Resource, str] = {
    Resource.ORDERS: "order_id",
    Resource.DESIGNS: "design_id",
    Resource.PAYOUTS: "payout_id",
}

METHODS: dict[Operation, str] = {
    Operation.LIST: "GET",
    Operation.GET: "GET",
    Operation.SYNC: "POST",
}

OPERATION_DESCRIPTIONS: dict[Operation, str] = {
    Operation.LIST: "List records with pagination and filters",
    Operation.GET: "Retrieve a single record by ID",
    Operation.SYNC: "Create or update data by sending JSON payloads to TeePublic",
}

IDENTIFIED_OPERATIONS = frozenset({Operation.GET, Operation.SYNC})


def describe_operations() -> list[dict[str, Any]]:
    """Catalog of every resource × operation pair and what it needs."""
    catalog = []
    for resource in Resource:
        for operation in Operation:
            catalog.append(
                {
                    "resource": resource.value,
                    "operation": operation.value,
                    "method": METHODS[operation],
                    "path": BASE_PATHS[resource]
                    + ("/{id}" if operation in IDENTIFIED_OPERATIONS else ""),
                    "identifier": ID_PARAMETERS[resource] if operation in IDENTIFIED_OPERATIONS else None,
                    "payload": operation is Operation.SYNC,
                    "query_parameters": operation is Operation.LIST,
                    "description": OPERATION_DESCRIPTIONS[operation],
                }
            )
    return catalog


# ── Credentials ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TeePublicCredentials:
    """Seller portal access, fixed for the duration of one batch."""

    base_url: str = DEFAULT_TEEPUBLIC_BASE_URL
    session_cookie: str | None = field(default=None, repr=False)
    proxy: str | None = field(default=None, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TeePublicCredentials":
        return cls(
            base_url=settings.teepublic_base_url,
            session_cookie=settings.teepublic_session_cookie or None,
            proxy=settings.teepublic_proxy or None,
        )


# ── Per-item parameters ───────────────────────────────────────────────────


class QueryParameter(BaseModel):
    key: str = ""
    value: str = ""

    @field_validator("key", "value", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)


class ItemParameters(BaseModel):
    """
    Typed request configuration for one input item.

    The identifier fields, payload, query filters and custom endpoint are
    all optional here; which of them matter is decided by the resource and
    operation when the request is built.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    resource: Resource = Resource.ORDERS
    operation: Operation = Operation.LIST
    order_id: str = Field(default="", alias="orderId")
    design_id: str = Field(default="", alias="designId")
    payout_id: str = Field(default="", alias="payoutId")
    payload: Any = None
    query_parameters: list[QueryParameter] = Field(default_factory=list, alias="queryParameters")
    custom_endpoint: str = Field(default="", alias="customEndpoint")
    raw_output: bool = Field(default=False, alias="rawOutput")

    @field_validator("order_id", "design_id", "payout_id", "custom_endpoint", mode="before")
    @classmethod
    def _blank_when_missing(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("query_parameters", mode="before")
    @classmethod
    def _unwrap_collection(cls, value: Any) -> Any:
        # Also accepts the collection shape {"parameter": [{key, value}, ...]}
        if value is None:
            return []
        if isinstance(value, dict):
            return value.get("parameter") or []
        return value

    @property
    def identifier(self) -> str:
        return getattr(self, ID_PARAMETERS[self.resource])

    @classmethod
    def parse(cls, raw: Any) -> "ItemParameters":
        """Validate raw item parameters, raising InvalidParametersError."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or 'item'}: {err['msg']}" for err in exc.errors()
            )
            raise InvalidParametersError(f"Invalid item parameters: {problems}") from exc


# ── Request / result containers ───────────────────────────────────────────


@dataclass(frozen=True)
class RequestDescriptor:
    """Fully specified outbound HTTP request for one item."""

    method: str
    url: str
    headers: dict[str, str]
    query: dict[str, str] = field(default_factory=dict)
    body: Any = None
    proxy: ProxyConfig | None = None

    @property
    def has_body(self) -> bool:
        return self.method == "POST"


@dataclass
class OutputRecord:
    """One output object, tagged with the index of the item it came from."""

    json: dict[str, Any]
    item_index: int

    def to_dict(self) -> dict[str, Any]:
        return {"json": self.json, "item_index": self.item_index}


@dataclass
class BatchResult:
    """
    Outcome of a batch run.

    Either every item produced a record, or the batch stopped at
    `failed_index` with `error` and `records` is empty.
    """

    records: list[OutputRecord] = field(default_factory=list)
    error: Exception | None = None
    failed_index: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> list[OutputRecord]:
        if self.error is not None:
            raise self.error
        return self.records
