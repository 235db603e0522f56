"""
System Program instruction decoding and event extraction.

- instructions: binary layout decoder (data bytes -> typed variant)
- accounts: account role resolver (account indices -> named accounts)
- events: event records and the assembler combining both
- parser: transaction filter and block driver
"""

from system_program_events.system_program.accounts import resolve
from system_program_events.system_program.events import SystemProgramEvent, assemble
from system_program_events.system_program.instructions import SystemInstruction, decode
from system_program_events.system_program.parser import (
    BlockEvents,
    Diagnostic,
    TransactionEvents,
    parse_block,
    parse_instruction,
    parse_transaction,
    system_program_events,
)

__all__ = [
    "BlockEvents",
    "Diagnostic",
    "SystemInstruction",
    "SystemProgramEvent",
    "TransactionEvents",
    "assemble",
    "decode",
    "parse_block",
    "parse_instruction",
    "parse_transaction",
    "resolve",
    "system_program_events",
]
