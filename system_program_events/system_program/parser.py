"""
Block driver — confirmed blocks to System Program events.

Walks each transaction's flattened instruction stream, filters out failed
transactions and instructions owned by other programs, and runs
decode -> resolve -> assemble on the rest. Decode/resolve failures are
instruction-local: they are logged, recorded as a Diagnostic, and only
that instruction is skipped. Transactions without events are omitted from
the block output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from solders.pubkey import Pubkey

from system_program_events.config import get_settings
from system_program_events.core.exceptions import (
    DecodeError,
    FailedTransactionSkipError,
    ProgramMismatchError,
    ResolveError,
    SystemProgramEventsError,
)
from system_program_events.events_logging import bind_transaction, get_logger
from system_program_events.solana_block.models import (
    AccountTable,
    Block,
    CompiledInstruction,
    ConfirmedTransaction,
)
from system_program_events.system_program.accounts import ResolvedAccounts, resolve
from system_program_events.system_program.events import SystemProgramEvent, assemble
from system_program_events.system_program.instructions import SystemInstruction, decode

logger = get_logger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """Why a transaction or instruction produced no event."""

    code: str
    message: str
    signature: str
    transaction_index: int | None = None
    instruction_index: int | None = None

    @classmethod
    def from_error(
        cls,
        error: SystemProgramEventsError,
        signature: str,
        transaction_index: int | None = None,
        instruction_index: int | None = None,
    ) -> "Diagnostic":
        return cls(
            code=error.code,
            message=error.message,
            signature=signature,
            transaction_index=transaction_index,
            instruction_index=instruction_index,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "signature": self.signature,
            "transaction_index": self.transaction_index,
            "instruction_index": self.instruction_index,
        }


@dataclass(frozen=True)
class TransactionEvents:
    signature: str
    transaction_index: int
    events: list[SystemProgramEvent]

    def to_dict(self) -> dict[str, Any]:
        return {
            "signature": self.signature,
            "transaction_index": self.transaction_index,
            "events": [e.to_dict() for e in self.events],
        }


@dataclass(frozen=True)
class BlockEvents:
    """Block-level result: one entry per transaction with at least one event."""

    transactions: list[TransactionEvents] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def to_dict(self, *, include_diagnostics: bool = False) -> dict[str, Any]:
        out: dict[str, Any] = {"transactions": [t.to_dict() for t in self.transactions]}
        if include_diagnostics:
            out["diagnostics"] = [d.to_dict() for d in self.diagnostics]
        return out


def _target_program(target_program: Pubkey | str | None) -> Pubkey:
    if target_program is None:
        return get_settings().target_program
    if isinstance(target_program, str):
        return Pubkey.from_string(target_program)
    return target_program


def parse_instruction(
    instruction: CompiledInstruction,
    table: AccountTable,
    target_program: Pubkey,
) -> tuple[SystemInstruction, ResolvedAccounts]:
    """
    Decode one instruction and resolve its accounts.

    Raises:
        ProgramMismatchError: the instruction is not owned by ``target_program``.
        DecodeError: instruction data does not match the layout.
        ResolveError: accounts missing or out of range.
    """
    program_id = table.get(instruction.program_id_index)
    if program_id != target_program:
        raise ProgramMismatchError(str(program_id), str(target_program))
    decoded = decode(instruction.data)
    accounts = resolve(decoded, instruction.accounts, table)
    return decoded, accounts


def parse_transaction(
    transaction: ConfirmedTransaction,
    target_program: Pubkey | str | None = None,
    transaction_index: int | None = None,
) -> tuple[list[SystemProgramEvent], list[Diagnostic]]:
    """
    Extract events from one transaction, in flattened-stream order.

    Returns:
        (events, diagnostics); diagnostics hold one entry per skipped
        target-program instruction.

    Raises:
        FailedTransactionSkipError: the transaction failed on chain.
    """
    if transaction.failed:
        raise FailedTransactionSkipError(transaction.signature)

    target = _target_program(target_program)
    log = bind_transaction(transaction.signature, transaction_index)
    table = transaction.account_table
    events: list[SystemProgramEvent] = []
    diagnostics: list[Diagnostic] = []

    for i, instruction in enumerate(transaction.instructions):
        try:
            decoded, accounts = parse_instruction(instruction, table, target)
        except ProgramMismatchError:
            continue
        except (DecodeError, ResolveError) as e:
            log.warning("instruction_skipped", instruction_index=i, code=e.code, error=e.message)
            diagnostics.append(Diagnostic.from_error(e, transaction.signature, transaction_index, i))
            continue
        events.append(assemble(decoded, accounts, i))

    return events, diagnostics


def parse_block(block: Block, target_program: Pubkey | str | None = None) -> BlockEvents:
    """
    Extract System Program events from every transaction of a block.

    Never raises for malformed instructions or failed transactions; both
    are reported in BlockEvents.diagnostics.
    """
    target = _target_program(target_program)
    transactions: list[TransactionEvents] = []
    diagnostics: list[Diagnostic] = []

    for i, transaction in enumerate(block.transactions):
        try:
            events, tx_diagnostics = parse_transaction(transaction, target, i)
        except FailedTransactionSkipError as e:
            logger.debug("transaction_skipped", signature=transaction.signature, transaction_index=i, code=e.code)
            diagnostics.append(Diagnostic.from_error(e, transaction.signature, i))
            continue
        diagnostics.extend(tx_diagnostics)
        if events:
            transactions.append(
                TransactionEvents(signature=transaction.signature, transaction_index=i, events=events)
            )

    logger.debug(
        "block_parsed",
        slot=block.slot,
        transactions=len(block.transactions),
        transactions_with_events=len(transactions),
        skipped=len(diagnostics),
    )
    return BlockEvents(transactions=transactions, diagnostics=diagnostics)


def system_program_events(block: Block) -> BlockEvents:
    """Block handler: System Program events for the configured target program."""
    return parse_block(block)
