"""
Solana block input boundary.

Immutable block/transaction/instruction models and the normalizer that
builds them from JSON-RPC getBlock payloads.
"""

from system_program_events.solana_block.models import (
    AccountTable,
    Block,
    CompiledInstruction,
    ConfirmedTransaction,
)
from system_program_events.solana_block.normalizer import (
    flatten_instructions,
    normalize_block,
    normalize_transaction,
)

__all__ = [
    "AccountTable",
    "Block",
    "CompiledInstruction",
    "ConfirmedTransaction",
    "flatten_instructions",
    "normalize_block",
    "normalize_transaction",
]
