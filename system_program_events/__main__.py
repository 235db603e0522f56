"""
Extract System Program events from a getBlock JSON result.

Reads a JSON-RPC getBlock result (transactionDetails="full",
encoding="json", maxSupportedTransactionVersion=0) from a file or stdin,
accepting either the bare result or the full {"result": ...} envelope,
and prints the block's events as JSON on stdout.

Usage:
  python -m system_program_events block.json
  curl ... | python -m system_program_events --diagnostics --indent 2
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from system_program_events.config import get_settings
from system_program_events.core.exceptions import SystemProgramEventsError
from system_program_events.events_logging import get_logger
from system_program_events.solana_block import normalize_block
from system_program_events.system_program import parse_block

logger = get_logger(__name__)


def _load_payload(path: str) -> Any:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _unwrap(payload: Any) -> Any:
    """Return the getBlock result from a JSON-RPC envelope, or the payload itself."""
    if isinstance(payload, dict) and "result" in payload and "transactions" not in payload:
        return payload["result"]
    return payload


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Extract System Program events from a getBlock JSON result")
    ap.add_argument("block", nargs="?", default="-", help="Path to getBlock JSON (default: stdin)")
    ap.add_argument("--slot", type=int, default=None, help="Slot of the block (getBlock results omit it)")
    ap.add_argument("--program-id", type=str, default=None, help="Target program id (default: TARGET_PROGRAM_ID)")
    ap.add_argument("--indent", type=int, default=None, help="Indent JSON output")
    ap.add_argument("--diagnostics", action="store_true", help="Include skipped-item diagnostics in output")
    args = ap.parse_args(argv)

    try:
        payload = _unwrap(_load_payload(args.block))
        block = normalize_block(payload, slot=args.slot)
        target = args.program_id or get_settings().target_program_id
        result = parse_block(block, target)
    except (OSError, ValueError, SystemProgramEventsError) as e:
        logger.error("block_extraction_failed", source=args.block, error=str(e))
        print(f"[system_program_events] ERROR: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(include_diagnostics=args.diagnostics), indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
