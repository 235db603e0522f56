"""
Data models for the block input boundary.

Immutable views over one confirmed block: the per-transaction account
table (static keys plus address-lookup-table expansion, already resolved)
and the flattened, execution-ordered instruction stream. The extraction
engine only reads these; it never mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from solders.pubkey import Pubkey

from system_program_events.core.exceptions import AccountIndexOutOfRangeError


@dataclass(frozen=True)
class AccountTable:
    """
    Ordered account keys of one transaction.

    Index order is the message's static keys followed by loaded writable
    and then loaded readonly addresses, as instruction account indices
    expect.
    """

    keys: tuple[Pubkey, ...]

    @classmethod
    def from_strings(cls, keys: list[str]) -> "AccountTable":
        return cls(keys=tuple(Pubkey.from_string(k) for k in keys))

    def get(self, index: int) -> Pubkey:
        """Return the key at ``index``; raise AccountIndexOutOfRangeError when absent."""
        if not 0 <= index < len(self.keys):
            raise AccountIndexOutOfRangeError(index, len(self.keys))
        return self.keys[index]

    def __len__(self) -> int:
        return len(self.keys)


@dataclass(frozen=True)
class CompiledInstruction:
    """One entry of the flattened instruction stream."""

    program_id_index: int
    accounts: tuple[int, ...]
    data: bytes
    stack_height: int | None = None
    """1 for top-level instructions, >1 for inner (CPI) instructions; None if unknown."""


@dataclass(frozen=True)
class ConfirmedTransaction:
    signature: str
    account_table: AccountTable
    instructions: tuple[CompiledInstruction, ...]
    """Top-level and inner instructions interleaved in execution order."""
    err: Any = None  # None if success; RPC error object if failed

    @property
    def failed(self) -> bool:
        return self.err is not None


@dataclass(frozen=True)
class Block:
    slot: int | None
    blockhash: str | None
    transactions: tuple[ConfirmedTransaction, ...] = field(default_factory=tuple)
    parent_slot: int | None = None
    block_time: int | None = None  # Unix timestamp; None if not available
