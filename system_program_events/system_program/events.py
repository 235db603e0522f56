"""
System Program event records and the assembler that builds them.

One event shape per instruction variant. Account fields are base58
strings, whether they came from account positions (resolver) or from
instruction data (decoder); lamports/space are unsigned 64-bit ints.

Seed rendering follows the established output format: the seed of
CreateAccountWithSeed is emitted as plain text, while the seeds of
AllocateWithSeed, AssignWithSeed and TransferWithSeed are emitted as the
base58 encoding of their UTF-8 bytes.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Callable, ClassVar, Union

import base58
from solders.pubkey import Pubkey

from system_program_events.system_program.accounts import ResolvedAccounts
from system_program_events.system_program.instructions import (
    AdvanceNonceAccount,
    Allocate,
    AllocateWithSeed,
    Assign,
    AssignWithSeed,
    AuthorizeNonceAccount,
    CreateAccount,
    CreateAccountWithSeed,
    InitializeNonceAccount,
    SystemInstruction,
    Transfer,
    TransferWithSeed,
    UpgradeNonceAccount,
    WithdrawNonceAccount,
)


class _Event:
    key: ClassVar[str]
    """snake_case name of the event in serialized output."""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)  # type: ignore[call-overload]


@dataclass(frozen=True)
class CreateAccountEvent(_Event):
    key: ClassVar[str] = "create_account"
    funding_account: str
    new_account: str
    lamports: int
    owner: str
    space: int


@dataclass(frozen=True)
class AssignEvent(_Event):
    key: ClassVar[str] = "assign"
    assigned_account: str
    owner: str


@dataclass(frozen=True)
class TransferEvent(_Event):
    key: ClassVar[str] = "transfer"
    funding_account: str
    recipient_account: str
    lamports: int


@dataclass(frozen=True)
class CreateAccountWithSeedEvent(_Event):
    key: ClassVar[str] = "create_account_with_seed"
    funding_account: str
    created_account: str
    base_account: str
    seed: str
    lamports: int
    space: int
    owner: str


@dataclass(frozen=True)
class AdvanceNonceAccountEvent(_Event):
    key: ClassVar[str] = "advance_nonce_account"
    nonce_account: str
    nonce_authority: str


@dataclass(frozen=True)
class WithdrawNonceAccountEvent(_Event):
    key: ClassVar[str] = "withdraw_nonce_account"
    nonce_account: str
    recipient_account: str
    nonce_authority: str
    lamports: int


@dataclass(frozen=True)
class InitializeNonceAccountEvent(_Event):
    key: ClassVar[str] = "initialize_nonce_account"
    nonce_account: str
    nonce_authority: str


@dataclass(frozen=True)
class AuthorizeNonceAccountEvent(_Event):
    key: ClassVar[str] = "authorize_nonce_account"
    nonce_account: str
    nonce_authority: str
    new_nonce_authority: str


@dataclass(frozen=True)
class AllocateEvent(_Event):
    key: ClassVar[str] = "allocate"
    account: str
    space: int


@dataclass(frozen=True)
class AllocateWithSeedEvent(_Event):
    key: ClassVar[str] = "allocate_with_seed"
    allocated_account: str
    base_account: str
    seed: str
    owner: str
    space: int


@dataclass(frozen=True)
class AssignWithSeedEvent(_Event):
    key: ClassVar[str] = "assign_with_seed"
    assigned_account: str
    base_account: str
    owner: str
    seed: str


@dataclass(frozen=True)
class TransferWithSeedEvent(_Event):
    key: ClassVar[str] = "transfer_with_seed"
    funding_account: str
    base_account: str
    recipient_account: str
    from_owner: str
    from_seed: str
    lamports: int


@dataclass(frozen=True)
class UpgradeNonceAccountEvent(_Event):
    key: ClassVar[str] = "upgrade_nonce_account"
    nonce_account: str


Event = Union[
    CreateAccountEvent,
    AssignEvent,
    TransferEvent,
    CreateAccountWithSeedEvent,
    AdvanceNonceAccountEvent,
    WithdrawNonceAccountEvent,
    InitializeNonceAccountEvent,
    AuthorizeNonceAccountEvent,
    AllocateEvent,
    AllocateWithSeedEvent,
    AssignWithSeedEvent,
    TransferWithSeedEvent,
    UpgradeNonceAccountEvent,
]


@dataclass(frozen=True)
class SystemProgramEvent:
    """An event tagged with its position in the transaction's flattened instruction stream."""

    instruction_index: int
    event: Event

    def to_dict(self) -> dict[str, Any]:
        return {"instruction_index": self.instruction_index, self.event.key: self.event.to_dict()}


def _key(pubkey: Pubkey) -> str:
    return str(pubkey)


def _b58_seed(seed: str) -> str:
    return base58.b58encode(seed.encode("utf-8")).decode("ascii")


def _create_account(ix: CreateAccount, accounts: ResolvedAccounts) -> CreateAccountEvent:
    return CreateAccountEvent(
        funding_account=_key(accounts["funding_account"]),
        new_account=_key(accounts["new_account"]),
        lamports=ix.lamports,
        owner=_key(ix.owner),
        space=ix.space,
    )


def _assign(ix: Assign, accounts: ResolvedAccounts) -> AssignEvent:
    return AssignEvent(assigned_account=_key(accounts["assigned_account"]), owner=_key(ix.owner))


def _transfer(ix: Transfer, accounts: ResolvedAccounts) -> TransferEvent:
    return TransferEvent(
        funding_account=_key(accounts["funding_account"]),
        recipient_account=_key(accounts["recipient_account"]),
        lamports=ix.lamports,
    )


def _create_account_with_seed(ix: CreateAccountWithSeed, accounts: ResolvedAccounts) -> CreateAccountWithSeedEvent:
    return CreateAccountWithSeedEvent(
        funding_account=_key(accounts["funding_account"]),
        created_account=_key(accounts["created_account"]),
        base_account=_key(ix.base),
        seed=ix.seed,
        lamports=ix.lamports,
        space=ix.space,
        owner=_key(ix.owner),
    )


def _advance_nonce_account(ix: AdvanceNonceAccount, accounts: ResolvedAccounts) -> AdvanceNonceAccountEvent:
    return AdvanceNonceAccountEvent(
        nonce_account=_key(accounts["nonce_account"]),
        nonce_authority=_key(accounts["nonce_authority"]),
    )


def _withdraw_nonce_account(ix: WithdrawNonceAccount, accounts: ResolvedAccounts) -> WithdrawNonceAccountEvent:
    return WithdrawNonceAccountEvent(
        nonce_account=_key(accounts["nonce_account"]),
        recipient_account=_key(accounts["recipient_account"]),
        nonce_authority=_key(accounts["nonce_authority"]),
        lamports=ix.lamports,
    )


def _initialize_nonce_account(ix: InitializeNonceAccount, accounts: ResolvedAccounts) -> InitializeNonceAccountEvent:
    return InitializeNonceAccountEvent(
        nonce_account=_key(accounts["nonce_account"]),
        nonce_authority=_key(ix.authority),
    )


def _authorize_nonce_account(ix: AuthorizeNonceAccount, accounts: ResolvedAccounts) -> AuthorizeNonceAccountEvent:
    return AuthorizeNonceAccountEvent(
        nonce_account=_key(accounts["nonce_account"]),
        nonce_authority=_key(accounts["nonce_authority"]),
        new_nonce_authority=_key(ix.new_authority),
    )


def _allocate(ix: Allocate, accounts: ResolvedAccounts) -> AllocateEvent:
    return AllocateEvent(account=_key(accounts["account"]), space=ix.space)


def _allocate_with_seed(ix: AllocateWithSeed, accounts: ResolvedAccounts) -> AllocateWithSeedEvent:
    return AllocateWithSeedEvent(
        allocated_account=_key(accounts["allocated_account"]),
        base_account=_key(ix.base),
        seed=_b58_seed(ix.seed),
        owner=_key(ix.owner),
        space=ix.space,
    )


def _assign_with_seed(ix: AssignWithSeed, accounts: ResolvedAccounts) -> AssignWithSeedEvent:
    return AssignWithSeedEvent(
        assigned_account=_key(accounts["assigned_account"]),
        base_account=_key(ix.base),
        owner=_key(ix.owner),
        seed=_b58_seed(ix.seed),
    )


def _transfer_with_seed(ix: TransferWithSeed, accounts: ResolvedAccounts) -> TransferWithSeedEvent:
    return TransferWithSeedEvent(
        funding_account=_key(accounts["funding_account"]),
        base_account=_key(accounts["base_account"]),
        recipient_account=_key(accounts["recipient_account"]),
        from_owner=_key(ix.from_owner),
        from_seed=_b58_seed(ix.from_seed),
        lamports=ix.lamports,
    )


def _upgrade_nonce_account(ix: UpgradeNonceAccount, accounts: ResolvedAccounts) -> UpgradeNonceAccountEvent:
    return UpgradeNonceAccountEvent(nonce_account=_key(accounts["nonce_account"]))


_ASSEMBLERS: dict[type, Callable[[Any, ResolvedAccounts], Event]] = {
    CreateAccount: _create_account,
    Assign: _assign,
    Transfer: _transfer,
    CreateAccountWithSeed: _create_account_with_seed,
    AdvanceNonceAccount: _advance_nonce_account,
    WithdrawNonceAccount: _withdraw_nonce_account,
    InitializeNonceAccount: _initialize_nonce_account,
    AuthorizeNonceAccount: _authorize_nonce_account,
    Allocate: _allocate,
    AllocateWithSeed: _allocate_with_seed,
    AssignWithSeed: _assign_with_seed,
    TransferWithSeed: _transfer_with_seed,
    UpgradeNonceAccount: _upgrade_nonce_account,
}


def assemble(decoded: SystemInstruction, accounts: ResolvedAccounts, instruction_index: int) -> SystemProgramEvent:
    """Merge decoded data fields and resolved accounts into the variant's event, tagged with its position."""
    event = _ASSEMBLERS[type(decoded)](decoded, accounts)
    return SystemProgramEvent(instruction_index=instruction_index, event=event)
