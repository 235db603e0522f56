"""
Tests for the account role resolver (accounts.resolve) and AccountTable.get.
"""

from __future__ import annotations

import pytest
from solders.pubkey import Pubkey

from system_program_events.core.exceptions import (
    AccountArityMismatchError,
    AccountIndexOutOfRangeError,
    ResolveError,
)
from system_program_events.solana_block.models import AccountTable
from system_program_events.system_program.accounts import ACCOUNT_ROLES, MIN_ACCOUNTS, resolve
from system_program_events.system_program.instructions import (
    INSTRUCTION_VARIANTS,
    AdvanceNonceAccount,
    Allocate,
    AllocateWithSeed,
    Assign,
    AssignWithSeed,
    AuthorizeNonceAccount,
    CreateAccount,
    CreateAccountWithSeed,
    InitializeNonceAccount,
    Transfer,
    TransferWithSeed,
    UpgradeNonceAccount,
    WithdrawNonceAccount,
)

KEYS = [Pubkey.from_bytes(bytes([n + 1]) * 32) for n in range(8)]
TABLE = AccountTable(keys=tuple(KEYS))

# Account indices are the identity over the table, so position p resolves to KEYS[p].
EXPECTED_ROLES = {
    CreateAccount: {"funding_account": 0, "new_account": 1},
    Assign: {"assigned_account": 0},
    Transfer: {"funding_account": 0, "recipient_account": 1},
    CreateAccountWithSeed: {"funding_account": 0, "created_account": 1},
    AdvanceNonceAccount: {"nonce_account": 0, "nonce_authority": 2},
    WithdrawNonceAccount: {"nonce_account": 0, "recipient_account": 1, "nonce_authority": 4},
    InitializeNonceAccount: {"nonce_account": 0},
    AuthorizeNonceAccount: {"nonce_account": 0, "nonce_authority": 1},
    Allocate: {"account": 0},
    AllocateWithSeed: {"allocated_account": 0},
    AssignWithSeed: {"assigned_account": 0},
    TransferWithSeed: {"funding_account": 0, "base_account": 1, "recipient_account": 2},
    UpgradeNonceAccount: {"nonce_account": 0},
}


def test_every_variant_has_roles():
    assert set(ACCOUNT_ROLES) == set(INSTRUCTION_VARIANTS.values())


@pytest.mark.parametrize("variant", list(EXPECTED_ROLES), ids=lambda v: v.__name__)
def test_role_mapping(variant):
    """Each variant maps protocol positions to its named roles."""
    accounts = resolve(variant, list(range(8)), TABLE)
    assert accounts == {role: KEYS[pos] for role, pos in EXPECTED_ROLES[variant].items()}


def test_minimum_arity_counts_sysvar_positions():
    assert MIN_ACCOUNTS[AdvanceNonceAccount] == 3
    assert MIN_ACCOUNTS[WithdrawNonceAccount] == 5
    assert MIN_ACCOUNTS[TransferWithSeed] == 3
    assert MIN_ACCOUNTS[Assign] == 1


def test_resolve_accepts_instance():
    """resolve() takes the decoded instruction as well as its class."""
    accounts = resolve(Transfer(lamports=5), [3, 4], TABLE)
    assert accounts == {"funding_account": KEYS[3], "recipient_account": KEYS[4]}


def test_indices_are_looked_up_through_table():
    accounts = resolve(CreateAccount, [5, 2], TABLE)
    assert accounts["funding_account"] == KEYS[5]
    assert accounts["new_account"] == KEYS[2]


def test_one_account_for_two_account_variant_is_arity_mismatch():
    with pytest.raises(AccountArityMismatchError) as exc:
        resolve(Transfer, [0], TABLE)
    assert exc.value.expected == 2
    assert exc.value.actual == 1
    assert exc.value.instruction == "Transfer"
    assert exc.value.code == "account_arity_mismatch"


def test_withdraw_nonce_needs_five_accounts():
    with pytest.raises(AccountArityMismatchError):
        resolve(WithdrawNonceAccount, [0, 1, 2, 3], TABLE)


def test_empty_accounts_is_arity_mismatch():
    with pytest.raises(AccountArityMismatchError):
        resolve(UpgradeNonceAccount, [], TABLE)


def test_index_beyond_table_is_out_of_range():
    with pytest.raises(AccountIndexOutOfRangeError) as exc:
        resolve(Transfer, [0, len(KEYS)], TABLE)
    assert exc.value.index == len(KEYS)
    assert exc.value.table_size == len(KEYS)
    assert exc.value.code == "account_index_out_of_range"


def test_ignored_sysvar_position_is_not_looked_up():
    """AdvanceNonceAccount never reads position 1, so a bad index there is tolerated."""
    accounts = resolve(AdvanceNonceAccount, [0, 99, 2], TABLE)
    assert accounts == {"nonce_account": KEYS[0], "nonce_authority": KEYS[2]}


def test_extra_accounts_are_ignored():
    accounts = resolve(Assign, [1, 2, 3], TABLE)
    assert accounts == {"assigned_account": KEYS[1]}


def test_resolve_errors_share_base_class():
    for indices in ([], [0, 50]):
        with pytest.raises(ResolveError):
            resolve(Transfer, indices, TABLE)


def test_account_table_get():
    assert TABLE.get(0) == KEYS[0]
    assert len(TABLE) == 8
    with pytest.raises(AccountIndexOutOfRangeError):
        TABLE.get(8)
    with pytest.raises(AccountIndexOutOfRangeError):
        TABLE.get(-1)


def test_account_table_from_strings():
    table = AccountTable.from_strings([str(k) for k in KEYS[:2]])
    assert table.keys == (KEYS[0], KEYS[1])
