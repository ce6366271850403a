#!/usr/bin/env python3
"""Run a batch of TeePublic item requests from a JSON file.

The file holds a list of item parameter objects, e.g.
  [{"resource": "orders", "operation": "list",
    "queryParameters": [{"key": "status", "value": "pending"}]}]

Credentials come from TEEPUBLIC_BASE_URL / TEEPUBLIC_SESSION_COOKIE / TEEPUBLIC_PROXY.

Examples:
  python backend/scripts/run_teepublic_batch.py items.json
  python backend/scripts/run_teepublic_batch.py items.json --continue-on-fail --pretty
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from pathlib import Path
from typing import Any

# Add backend/ to path when run as a script.
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import get_settings
from integrations.base import TeePublicCredentials
from workers.sync import run_teepublic_batch


def _load_items(path: Path) -> list[Any]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = [payload]
    if not isinstance(payload, list):
        raise ValueError("Items file must contain a JSON object or a list of objects")
    return payload


async def _run(items: list[Any], *, continue_on_fail: bool) -> tuple[bool, dict[str, Any]]:
    credentials = TeePublicCredentials.from_settings(get_settings())
    result = await run_teepublic_batch(items, credentials, continue_on_fail=continue_on_fail)
    if not result.ok:
        return False, {
            "status": "failed",
            "error": str(result.error),
            "error_type": type(result.error).__name__,
            "item_index": result.failed_index,
        }
    return True, {
        "status": "success",
        "records": [record.to_dict() for record in result.records],
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Run TeePublic item requests from a JSON file")
    parser.add_argument("items_file", type=Path, help="JSON file with item parameters")
    parser.add_argument(
        "--continue-on-fail",
        action="store_true",
        default=None,
        help="Record per-item errors instead of stopping at the first failure",
    )
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    args = parser.parse_args()

    try:
        items = _load_items(args.items_file)
        continue_on_fail = args.continue_on_fail
        if continue_on_fail is None:
            continue_on_fail = get_settings().teepublic_continue_on_fail
        ok, summary = asyncio.run(_run(items, continue_on_fail=bool(continue_on_fail)))
    except (OSError, ValueError) as exc:
        ok, summary = False, {"status": "failed", "error": str(exc)}

    if args.pretty:
        print(json.dumps(summary, indent=2, sort_keys=True))
    else:
        print(json.dumps(summary))

    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
