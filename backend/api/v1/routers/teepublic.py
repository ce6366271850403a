"""
TeePublic Router — run item batches against the seller portal.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from api.deps import get_credentials, get_teepublic_client
from core.config import get_settings
from integrations.base import TeePublicCredentials, describe_operations
from integrations.errors import TeePublicError, TransportError
from integrations.teepublic import TeePublicClient
from workers.sync import run_teepublic_batch

router = APIRouter(prefix="/api/v1/teepublic", tags=["teepublic"])


# ─── Schemas ────────────────────────────────────────────────────────────────


class ExecuteRequest(BaseModel):
    items: list[Any] = Field(default_factory=list)
    continue_on_fail: bool | None = None


class RecordResponse(BaseModel):
    json_: dict[str, Any] = Field(alias="json")
    item_index: int

    model_config = {"populate_by_name": True}


class ExecuteResponse(BaseModel):
    records: list[RecordResponse]


# ─── Endpoints ──────────────────────────────────────────────────────────────


@router.get("/operations")
async def list_operations():
    """Every resource/operation pair with its method, path and inputs."""
    return describe_operations()


@router.post("/execute", response_model=ExecuteResponse, response_model_by_alias=True)
async def execute_batch(
    body: ExecuteRequest,
    credentials: TeePublicCredentials = Depends(get_credentials),
    client: TeePublicClient = Depends(get_teepublic_client),
):
    """Run each item in order; the first failure stops the batch unless continue_on_fail."""
    continue_on_fail = body.continue_on_fail
    if continue_on_fail is None:
        continue_on_fail = get_settings().teepublic_continue_on_fail

    result = await run_teepublic_batch(
        body.items,
        credentials,
        continue_on_fail=continue_on_fail,
        client=client,
    )

    if not result.ok:
        if not isinstance(result.error, TeePublicError):
            raise result.error
        status_code = 502 if isinstance(result.error, TransportError) else 422
        raise HTTPException(
            status_code=status_code,
            detail={"error": str(result.error), "item_index": result.failed_index},
        )

    return {"records": [record.to_dict() for record in result.records]}
