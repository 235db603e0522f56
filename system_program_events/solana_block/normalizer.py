"""
Block normalizer — JSON-RPC getBlock / getTransaction payloads to models.

Accepts the ``encoding="json"`` (and jsonParsed account key) shapes:
resolves each transaction's account table (static keys, then
meta.loadedAddresses writable + readonly) and flattens top-level and
inner instructions into one execution-ordered stream. Purely structural;
no instruction decoding happens here.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any

import base58
from solders.pubkey import Pubkey

from system_program_events.core.exceptions import InvalidBlockPayloadError
from system_program_events.events_logging import get_logger
from system_program_events.solana_block.models import (
    AccountTable,
    Block,
    CompiledInstruction,
    ConfirmedTransaction,
)

logger = get_logger(__name__)


def _get_message_and_meta(raw: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any] | None]:
    """Return (transaction.message, meta) from a getTransaction-style item."""
    tx_obj = raw.get("transaction")
    if not isinstance(tx_obj, dict):
        raise InvalidBlockPayloadError("Transaction payload has no 'transaction' object (use encoding='json')")
    message = tx_obj.get("message")
    if not isinstance(message, dict):
        raise InvalidBlockPayloadError("Transaction payload has no 'transaction.message' object")
    meta = raw.get("meta")
    if not isinstance(meta, dict):
        meta = None
    return message, meta


def _get_account_keys(message: dict[str, Any], meta: dict[str, Any] | None) -> list[str]:
    """
    Resolve accountKeys to base58 strings (handles json vs jsonParsed).
    For versioned transactions, appends meta.loadedAddresses (writable, then readonly).
    """
    out: list[str] = []
    for k in message.get("accountKeys") or []:
        if isinstance(k, str):
            out.append(k)
        elif isinstance(k, dict) and isinstance(k.get("pubkey"), str):
            out.append(k["pubkey"])
        else:
            raise InvalidBlockPayloadError(f"Unsupported account key entry: {k!r}")
    loaded = (meta or {}).get("loadedAddresses") or {}
    for role in ("writable", "readonly"):
        out.extend(loaded.get(role) or [])
    return out


def _build_account_table(keys: list[str]) -> AccountTable:
    try:
        return AccountTable.from_strings(keys)
    except (TypeError, ValueError) as e:
        raise InvalidBlockPayloadError(f"Invalid account key in payload: {e}") from e


def _as_int(value: Any, field: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidBlockPayloadError(f"{field} is not an integer: {value!r}") from e


def _decode_instruction_data(data: Any) -> bytes:
    """Instruction data is base58 text in the json encoding; bytes pass through."""
    if data is None:
        return b""
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, str):
        try:
            return base58.b58decode(data)
        except ValueError as e:
            raise InvalidBlockPayloadError(f"Instruction data is not valid base58: {e}") from e
    raise InvalidBlockPayloadError(f"Unsupported instruction data type: {type(data).__name__}")


def _to_instruction(ix: dict[str, Any], default_stack_height: int | None) -> CompiledInstruction:
    if "programIdIndex" not in ix:
        # jsonParsed instructions carry programId strings, not indices
        raise InvalidBlockPayloadError("Instruction has no programIdIndex (use encoding='json')")
    stack_height = ix.get("stackHeight")
    return CompiledInstruction(
        program_id_index=_as_int(ix["programIdIndex"], "programIdIndex"),
        accounts=tuple(_as_int(a, "account index") for a in ix.get("accounts") or []),
        data=_decode_instruction_data(ix.get("data")),
        stack_height=_as_int(stack_height, "stackHeight") if stack_height is not None else default_stack_height,
    )


def flatten_instructions(
    instructions: list[dict[str, Any]],
    inner_instructions: list[dict[str, Any]] | None = None,
) -> tuple[CompiledInstruction, ...]:
    """
    Interleave top-level and inner instructions in execution order.

    Top-level instruction i is followed by the instructions of every
    innerInstructions entry with index == i, in recorded order.
    """
    inner_by_parent: defaultdict[int, list[dict[str, Any]]] = defaultdict(list)
    for block in inner_instructions or []:
        parent = _as_int(block.get("index", -1), "innerInstructions index")
        inner_by_parent[parent].extend(block.get("instructions") or [])

    flattened: list[CompiledInstruction] = []
    for i, ix in enumerate(instructions):
        flattened.append(_to_instruction(ix, 1))
        for inner_ix in inner_by_parent.get(i, []):
            flattened.append(_to_instruction(inner_ix, None))
    return tuple(flattened)


def normalize_transaction(raw: dict[str, Any]) -> ConfirmedTransaction:
    """
    Normalize one getTransaction-style item (also a getBlock transactions[] entry).

    Raises:
        InvalidBlockPayloadError: payload lacks a message, has bad keys or data.
    """
    message, meta = _get_message_and_meta(raw)
    signatures = raw["transaction"].get("signatures") or []
    signature = signatures[0] if signatures else ""

    table = _build_account_table(_get_account_keys(message, meta))
    instructions = flatten_instructions(
        message.get("instructions") or [],
        (meta or {}).get("innerInstructions"),
    )
    return ConfirmedTransaction(
        signature=signature,
        account_table=table,
        instructions=instructions,
        err=(meta or {}).get("err"),
    )


def normalize_block(raw: dict[str, Any], slot: int | None = None) -> Block:
    """
    Normalize a getBlock result (transactionDetails="full", encoding="json").

    ``slot`` is taken from the argument when given (getBlock results do not
    echo it), else from a ``slot`` key if present.
    """
    if not isinstance(raw, dict):
        raise InvalidBlockPayloadError("Block payload must be a JSON object")
    transactions = tuple(normalize_transaction(tx) for tx in raw.get("transactions") or [])
    if slot is None and raw.get("slot") is not None:
        slot = _as_int(raw["slot"], "slot")
    parent_slot = raw.get("parentSlot")
    block_time = raw.get("blockTime")
    logger.debug("block_normalized", slot=slot, transactions=len(transactions))
    return Block(
        slot=slot,
        blockhash=raw.get("blockhash"),
        transactions=transactions,
        parent_slot=_as_int(parent_slot, "parentSlot") if parent_slot is not None else None,
        block_time=_as_int(block_time, "blockTime") if block_time is not None else None,
    )
