import pytest

from accounts import (
    SYSTEM_PROGRAM_ID,
    AccountMeta,
    Bank,
    Instruction,
    rent_exempt_minimum,
)
from errors import (
    AccountAlreadyInitializedError,
    IncorrectAccountError,
    InsufficientFundsError,
    MalformedDataError,
)

OWNER = bytes([9]) * 32
PAYER = bytes([1]) * 32
NEW = bytes([2]) * 32
FAILING_PROGRAM = bytes([3]) * 32


class CreateThenFail:
    """Creates the account it is given, then fails."""

    def process_instruction(self, bank, accounts, data):
        payer, new = accounts
        bank.create_rent_exempt_account(payer, new, 10, OWNER)
        new.data[0] = 1
        raise MalformedDataError("fail after mutating")


def test_rent_exempt_minimum():
    assert rent_exempt_minimum(64) == (128 + 64) * 3480 * 2


def test_create_and_close():
    bank = Bank()
    payer = bank.airdrop(PAYER, 10**8)
    payer.is_signer = True
    new = bank.get_or_default(NEW)
    bank.create_rent_exempt_account(payer, new, 64, OWNER)
    assert new.owner == OWNER
    assert new.data == bytearray(64)
    assert new.lamports == rent_exempt_minimum(64)
    assert payer.lamports == 10**8 - rent_exempt_minimum(64)

    with pytest.raises(AccountAlreadyInitializedError):
        bank.create_rent_exempt_account(payer, new, 64, OWNER)

    bank.close_account(payer, new)
    assert new.lamports == 0
    assert new.owner == SYSTEM_PROGRAM_ID
    assert len(new.data) == 0
    assert payer.lamports == 10**8


def test_create_prefunded_account_only_tops_up():
    bank = Bank()
    payer = bank.airdrop(PAYER, 10**8)
    payer.is_signer = True
    new = bank.airdrop(NEW, 1000)
    bank.create_rent_exempt_account(payer, new, 64, OWNER)
    assert new.lamports == rent_exempt_minimum(64)
    assert payer.lamports == 10**8 - rent_exempt_minimum(64) + 1000


def test_create_insufficient_funds():
    bank = Bank()
    payer = bank.airdrop(PAYER, 10)
    payer.is_signer = True
    with pytest.raises(InsufficientFundsError):
        bank.create_rent_exempt_account(payer, bank.get_or_default(NEW), 64, OWNER)


def test_create_payer_must_sign():
    bank = Bank()
    payer = bank.airdrop(PAYER, 10**8)
    with pytest.raises(IncorrectAccountError):
        bank.create_rent_exempt_account(payer, bank.get_or_default(NEW), 64, OWNER)


def test_failed_instruction_changes_nothing():
    bank = Bank()
    bank.airdrop(PAYER, 10**8)
    bank.add_program(FAILING_PROGRAM, CreateThenFail())
    ix = Instruction(
        FAILING_PROGRAM,
        [AccountMeta(PAYER, is_signer=True, is_writable=True), AccountMeta(NEW, is_writable=True)],
        b"",
    )
    with pytest.raises(MalformedDataError):
        bank.process_instruction(ix)
    assert bank.get(PAYER).lamports == 10**8
    assert not bank.get(PAYER).is_signer
    assert bank.get(NEW) is None


def test_unknown_program():
    with pytest.raises(IncorrectAccountError):
        Bank().process_instruction(Instruction(FAILING_PROGRAM, [], b""))
