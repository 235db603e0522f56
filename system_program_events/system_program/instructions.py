"""
System Program instruction decoder — raw instruction data to typed variants.

Layout (bincode): a little-endian u32 discriminant selects the variant,
followed by the variant's fields in declared order with no padding.
Integers are little-endian u64, keys are raw 32 bytes, seeds are a u64
length prefix followed by that many UTF-8 bytes. Trailing bytes after the
last field are ignored, as the on-chain deserializer does.

Variants carry only data-derived fields; account positions are resolved
separately (see accounts.py).
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar, Union

from solders.pubkey import Pubkey

from system_program_events.constants import PUBKEY_LENGTH
from system_program_events.core.exceptions import (
    InvalidSeedEncodingError,
    TruncatedDataError,
    UnknownDiscriminantError,
)

DISCRIMINANT_LEN = 4
_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")


class _Reader:
    """Forward-only cursor over instruction data; every read is bounds-checked."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def _take(self, field: str, size: int) -> bytes:
        if size > self.remaining:
            raise TruncatedDataError(field, size, self.remaining)
        chunk = self._data[self._offset : self._offset + size]
        self._offset += size
        return chunk

    def u32(self, field: str) -> int:
        return _U32.unpack(self._take(field, _U32.size))[0]

    def u64(self, field: str) -> int:
        return _U64.unpack(self._take(field, _U64.size))[0]

    def pubkey(self, field: str) -> Pubkey:
        return Pubkey.from_bytes(self._take(field, PUBKEY_LENGTH))

    def seed(self, field: str) -> str:
        length = self.u64(f"{field}.len")
        raw = self._take(field, length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidSeedEncodingError(field, str(e)) from e


@dataclass(frozen=True)
class CreateAccount:
    discriminant: ClassVar[int] = 0
    lamports: int
    space: int
    owner: Pubkey

    @classmethod
    def read(cls, r: _Reader) -> "CreateAccount":
        return cls(lamports=r.u64("lamports"), space=r.u64("space"), owner=r.pubkey("owner"))


@dataclass(frozen=True)
class Assign:
    discriminant: ClassVar[int] = 1
    owner: Pubkey

    @classmethod
    def read(cls, r: _Reader) -> "Assign":
        return cls(owner=r.pubkey("owner"))


@dataclass(frozen=True)
class Transfer:
    discriminant: ClassVar[int] = 2
    lamports: int

    @classmethod
    def read(cls, r: _Reader) -> "Transfer":
        return cls(lamports=r.u64("lamports"))


@dataclass(frozen=True)
class CreateAccountWithSeed:
    discriminant: ClassVar[int] = 3
    base: Pubkey
    seed: str
    lamports: int
    space: int
    owner: Pubkey

    @classmethod
    def read(cls, r: _Reader) -> "CreateAccountWithSeed":
        return cls(
            base=r.pubkey("base"),
            seed=r.seed("seed"),
            lamports=r.u64("lamports"),
            space=r.u64("space"),
            owner=r.pubkey("owner"),
        )


@dataclass(frozen=True)
class AdvanceNonceAccount:
    discriminant: ClassVar[int] = 4

    @classmethod
    def read(cls, r: _Reader) -> "AdvanceNonceAccount":
        return cls()


@dataclass(frozen=True)
class WithdrawNonceAccount:
    discriminant: ClassVar[int] = 5
    lamports: int

    @classmethod
    def read(cls, r: _Reader) -> "WithdrawNonceAccount":
        return cls(lamports=r.u64("lamports"))


@dataclass(frozen=True)
class InitializeNonceAccount:
    discriminant: ClassVar[int] = 6
    authority: Pubkey

    @classmethod
    def read(cls, r: _Reader) -> "InitializeNonceAccount":
        return cls(authority=r.pubkey("authority"))


@dataclass(frozen=True)
class AuthorizeNonceAccount:
    discriminant: ClassVar[int] = 7
    new_authority: Pubkey

    @classmethod
    def read(cls, r: _Reader) -> "AuthorizeNonceAccount":
        return cls(new_authority=r.pubkey("new_authority"))


@dataclass(frozen=True)
class Allocate:
    discriminant: ClassVar[int] = 8
    space: int

    @classmethod
    def read(cls, r: _Reader) -> "Allocate":
        return cls(space=r.u64("space"))


@dataclass(frozen=True)
class AllocateWithSeed:
    discriminant: ClassVar[int] = 9
    base: Pubkey
    seed: str
    space: int
    owner: Pubkey

    @classmethod
    def read(cls, r: _Reader) -> "AllocateWithSeed":
        return cls(base=r.pubkey("base"), seed=r.seed("seed"), space=r.u64("space"), owner=r.pubkey("owner"))


@dataclass(frozen=True)
class AssignWithSeed:
    discriminant: ClassVar[int] = 10
    base: Pubkey
    seed: str
    owner: Pubkey

    @classmethod
    def read(cls, r: _Reader) -> "AssignWithSeed":
        return cls(base=r.pubkey("base"), seed=r.seed("seed"), owner=r.pubkey("owner"))


@dataclass(frozen=True)
class TransferWithSeed:
    discriminant: ClassVar[int] = 11
    lamports: int
    from_seed: str
    from_owner: Pubkey

    @classmethod
    def read(cls, r: _Reader) -> "TransferWithSeed":
        return cls(lamports=r.u64("lamports"), from_seed=r.seed("from_seed"), from_owner=r.pubkey("from_owner"))


@dataclass(frozen=True)
class UpgradeNonceAccount:
    discriminant: ClassVar[int] = 12

    @classmethod
    def read(cls, r: _Reader) -> "UpgradeNonceAccount":
        return cls()


SystemInstruction = Union[
    CreateAccount,
    Assign,
    Transfer,
    CreateAccountWithSeed,
    AdvanceNonceAccount,
    WithdrawNonceAccount,
    InitializeNonceAccount,
    AuthorizeNonceAccount,
    Allocate,
    AllocateWithSeed,
    AssignWithSeed,
    TransferWithSeed,
    UpgradeNonceAccount,
]

# Discriminant -> variant class, in on-chain enum order.
INSTRUCTION_VARIANTS: dict[int, type] = {
    cls.discriminant: cls
    for cls in (
        CreateAccount,
        Assign,
        Transfer,
        CreateAccountWithSeed,
        AdvanceNonceAccount,
        WithdrawNonceAccount,
        InitializeNonceAccount,
        AuthorizeNonceAccount,
        Allocate,
        AllocateWithSeed,
        AssignWithSeed,
        TransferWithSeed,
        UpgradeNonceAccount,
    )
}


def decode(data: bytes) -> SystemInstruction:
    """
    Decode System Program instruction data into its typed variant.

    Args:
        data: Raw instruction data bytes.

    Returns:
        One of the 13 variant dataclasses.

    Raises:
        TruncatedDataError: data ends before a fixed-width field or a seed body.
        UnknownDiscriminantError: discriminant outside 0..12.
        InvalidSeedEncodingError: a seed is not valid UTF-8.
    """
    reader = _Reader(bytes(data))
    discriminant = reader.u32("discriminant")
    variant = INSTRUCTION_VARIANTS.get(discriminant)
    if variant is None:
        raise UnknownDiscriminantError(discriminant)
    return variant.read(reader)
