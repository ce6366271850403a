"""
TeePublic batch worker, one HTTP request per input item.

Items are processed strictly in order and each request is awaited before
the next one is built. The failure policy is chosen by the caller:
  - continue_on_fail=True: a failed item yields {"error": message} and the loop moves on
  - continue_on_fail=False: the first failure stops the batch; no records are returned
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog

from integrations.base import BatchResult, ItemParameters, OutputRecord, TeePublicCredentials
from integrations.request_builder import build_request
from integrations.teepublic import TeePublicClient, shape_result, unwrap_response

logger = structlog.get_logger()


async def process_item(
    raw_params: Any,
    credentials: TeePublicCredentials,
    client: TeePublicClient,
) -> dict[str, Any]:
    """Validate, build, send and unwrap a single item."""
    params = ItemParameters.parse(raw_params)
    request = build_request(credentials, params)
    response = await client.send(request)
    return shape_result(unwrap_response(response, raw_output=params.raw_output))


async def run_teepublic_batch(
    items: Iterable[Any],
    credentials: TeePublicCredentials,
    *,
    continue_on_fail: bool = False,
    client: TeePublicClient | None = None,
) -> BatchResult:
    """Run every item against the seller portal and collect output records."""
    client = client or TeePublicClient()
    records: list[OutputRecord] = []
    failures = 0
    items = list(items)

    logger.info(
        "teepublic.batch.started",
        items=len(items),
        continue_on_fail=continue_on_fail,
        base_url=credentials.base_url,
    )

    for index, raw_params in enumerate(items):
        try:
            result = await process_item(raw_params, credentials, client)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "teepublic.item.failed",
                item_index=index,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            if continue_on_fail:
                failures += 1
                records.append(OutputRecord(json={"error": str(exc)}, item_index=index))
                continue
            logger.error("teepublic.batch.aborted", item_index=index, error=str(exc))
            return BatchResult(error=exc, failed_index=index)

        records.append(OutputRecord(json=result, item_index=index))

    logger.info(
        "teepublic.batch.completed",
        records=len(records),
        failed=failures,
    )
    return BatchResult(records=records)
