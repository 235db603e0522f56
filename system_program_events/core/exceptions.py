"""
Application-level exceptions.

Every exception carries a stable snake_case ``code`` used in diagnostics
and log lines, plus the context attributes needed to explain the failure.

Hierarchy:
- DecodeError: instruction data does not match the binary layout.
- ResolveError: account-index list cannot be mapped to roles.
- SkipError: pre-filters; the decoder/resolver are never invoked.
- InvalidBlockPayloadError: malformed JSON-RPC block/transaction payload.
- ConfigurationError: invalid settings.
"""

from __future__ import annotations


class SystemProgramEventsError(Exception):
    """Base class for all errors raised by system_program_events."""

    code = "system_program_events_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class DecodeError(SystemProgramEventsError):
    """Instruction data could not be decoded."""

    code = "decode_error"


class UnknownDiscriminantError(DecodeError):
    code = "unknown_discriminant"

    def __init__(self, discriminant: int) -> None:
        super().__init__(f"Unknown System Program instruction discriminant: {discriminant}")
        self.discriminant = discriminant


class TruncatedDataError(DecodeError):
    code = "truncated_data"

    def __init__(self, field: str, needed: int, available: int) -> None:
        super().__init__(
            f"Truncated instruction data reading {field}: need {needed} bytes, {available} available"
        )
        self.field = field
        self.needed = needed
        self.available = available


class InvalidSeedEncodingError(DecodeError):
    code = "invalid_seed_encoding"

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Seed field {field} is not valid UTF-8: {reason}")
        self.field = field
        self.reason = reason


class ResolveError(SystemProgramEventsError):
    """Instruction accounts could not be resolved to named roles."""

    code = "resolve_error"


class AccountArityMismatchError(ResolveError):
    code = "account_arity_mismatch"

    def __init__(self, instruction: str, expected: int, actual: int) -> None:
        super().__init__(
            f"{instruction} requires at least {expected} accounts, got {actual}"
        )
        self.instruction = instruction
        self.expected = expected
        self.actual = actual


class AccountIndexOutOfRangeError(ResolveError):
    code = "account_index_out_of_range"

    def __init__(self, index: int, table_size: int) -> None:
        super().__init__(f"Account index {index} out of range for table of {table_size} keys")
        self.index = index
        self.table_size = table_size


class SkipError(SystemProgramEventsError):
    """Input intentionally not processed."""

    code = "skip"


class ProgramMismatchError(SkipError):
    code = "program_mismatch"

    def __init__(self, program_id: str, target_program_id: str) -> None:
        super().__init__(f"Instruction program {program_id} is not the target program {target_program_id}")
        self.program_id = program_id
        self.target_program_id = target_program_id


class FailedTransactionSkipError(SkipError):
    code = "failed_transaction_skip"

    def __init__(self, signature: str) -> None:
        super().__init__(f"Cannot parse failed transaction {signature}")
        self.signature = signature


class InvalidBlockPayloadError(SystemProgramEventsError):
    """JSON-RPC block or transaction payload does not have the expected shape."""

    code = "invalid_block_payload"


class ConfigurationError(SystemProgramEventsError):
    code = "configuration_error"
