"""
Core utilities — the exception hierarchy shared by the decoder, resolver,
block driver and block source.
"""

from system_program_events.core.exceptions import (
    AccountArityMismatchError,
    AccountIndexOutOfRangeError,
    ConfigurationError,
    DecodeError,
    FailedTransactionSkipError,
    InvalidBlockPayloadError,
    InvalidSeedEncodingError,
    ProgramMismatchError,
    ResolveError,
    SkipError,
    SystemProgramEventsError,
    TruncatedDataError,
    UnknownDiscriminantError,
)

__all__ = [
    "AccountArityMismatchError",
    "AccountIndexOutOfRangeError",
    "ConfigurationError",
    "DecodeError",
    "FailedTransactionSkipError",
    "InvalidBlockPayloadError",
    "InvalidSeedEncodingError",
    "ProgramMismatchError",
    "ResolveError",
    "SkipError",
    "SystemProgramEventsError",
    "TruncatedDataError",
    "UnknownDiscriminantError",
]
