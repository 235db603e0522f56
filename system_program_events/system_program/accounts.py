"""
Account role resolver — positional account indices to named accounts.

Every System Program instruction has a fixed, protocol-defined account
order. ACCOUNT_ROLES enumerates the positions reported in events for each
variant; MIN_ACCOUNTS is the number of accounts the instruction must
carry, which also counts the sysvar positions that are never reported
(recent blockhashes at 1 for AdvanceNonceAccount; recent blockhashes at 2
and rent at 3 for WithdrawNonceAccount).
"""

from __future__ import annotations

from typing import Mapping, Sequence

from solders.pubkey import Pubkey

from system_program_events.core.exceptions import AccountArityMismatchError
from system_program_events.solana_block.models import AccountTable
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

ResolvedAccounts = Mapping[str, Pubkey]

ACCOUNT_ROLES: dict[type, tuple[tuple[int, str], ...]] = {
    CreateAccount: ((0, "funding_account"), (1, "new_account")),
    Assign: ((0, "assigned_account"),),
    Transfer: ((0, "funding_account"), (1, "recipient_account")),
    CreateAccountWithSeed: ((0, "funding_account"), (1, "created_account")),
    AdvanceNonceAccount: ((0, "nonce_account"), (2, "nonce_authority")),
    WithdrawNonceAccount: ((0, "nonce_account"), (1, "recipient_account"), (4, "nonce_authority")),
    InitializeNonceAccount: ((0, "nonce_account"),),
    AuthorizeNonceAccount: ((0, "nonce_account"), (1, "nonce_authority")),
    Allocate: ((0, "account"),),
    AllocateWithSeed: ((0, "allocated_account"),),
    AssignWithSeed: ((0, "assigned_account"),),
    TransferWithSeed: ((0, "funding_account"), (1, "base_account"), (2, "recipient_account")),
    UpgradeNonceAccount: ((0, "nonce_account"),),
}

MIN_ACCOUNTS: dict[type, int] = {
    variant: max(position for position, _ in roles) + 1 for variant, roles in ACCOUNT_ROLES.items()
}


def resolve(
    variant: type | SystemInstruction,
    account_indices: Sequence[int],
    table: AccountTable,
) -> ResolvedAccounts:
    """
    Map an instruction's account-index list to its named roles.

    Args:
        variant: Decoded instruction (or its class) selecting the role layout.
        account_indices: Instruction account indices into ``table``.
        table: The transaction's account table.

    Returns:
        Role name -> account key, for the roles reported in events.

    Raises:
        AccountArityMismatchError: fewer accounts than the variant requires.
        AccountIndexOutOfRangeError: a referenced index is outside ``table``.
    """
    variant_cls = variant if isinstance(variant, type) else type(variant)
    roles = ACCOUNT_ROLES[variant_cls]
    expected = MIN_ACCOUNTS[variant_cls]
    if len(account_indices) < expected:
        raise AccountArityMismatchError(variant_cls.__name__, expected, len(account_indices))
    return {role: table.get(account_indices[position]) for position, role in roles}
