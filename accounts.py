"""
In-process model of the host's account facility: accounts, the system
program's create/close operations, and all-or-nothing instruction
processing.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol

from errors import (
    AccountAlreadyInitializedError,
    IncorrectAccountError,
    InsufficientFundsError,
)

logger = logging.getLogger(__name__)

PUBKEY_BYTES = 32
SYSTEM_PROGRAM_ID = bytes(PUBKEY_BYTES)

# Default rent parameters
ACCOUNT_STORAGE_OVERHEAD = 128
LAMPORTS_PER_BYTE_YEAR = 3480
EXEMPTION_THRESHOLD_YEARS = 2


def rent_exempt_minimum(space: int) -> int:
    return (ACCOUNT_STORAGE_OVERHEAD + space) * LAMPORTS_PER_BYTE_YEAR * EXEMPTION_THRESHOLD_YEARS


@dataclass
class Account:
    key: bytes
    lamports: int = 0
    data: bytearray = field(default_factory=bytearray)
    owner: bytes = SYSTEM_PROGRAM_ID
    is_signer: bool = False
    is_writable: bool = False

    def is_uninitialized(self) -> bool:
        return self.owner == SYSTEM_PROGRAM_ID and len(self.data) == 0


@dataclass(frozen=True)
class AccountMeta:
    pubkey: bytes
    is_signer: bool = False
    is_writable: bool = False


@dataclass(frozen=True)
class Instruction:
    program_id: bytes
    accounts: List[AccountMeta]
    data: bytes


class Program(Protocol):
    def process_instruction(self, bank: "Bank", accounts: List[Account], data: bytes) -> None:
        ...


@dataclass
class Bank:
    """Holds every account and runs instructions against them."""

    _accounts: Dict[bytes, Account] = field(default_factory=dict)
    _programs: Dict[bytes, Program] = field(default_factory=dict)

    def get(self, key: bytes) -> Optional[Account]:
        return self._accounts.get(key)

    def get_or_default(self, key: bytes) -> Account:
        """An account that was never funded reads as empty and system owned."""
        if key not in self._accounts:
            self._accounts[key] = Account(key=key)
        return self._accounts[key]

    def airdrop(self, key: bytes, lamports: int) -> Account:
        account = self.get_or_default(key)
        account.lamports += lamports
        return account

    def add_program(self, program_id: bytes, program: Program) -> None:
        self._programs[program_id] = program

    def create_rent_exempt_account(
        self, payer: Account, new_account: Account, space: int, owner: bytes
    ) -> None:
        """Funds `new_account` to rent exemption from `payer`, allocates
        `space` zeroed bytes and assigns it to `owner`."""
        if not new_account.is_uninitialized():
            raise AccountAlreadyInitializedError(f"account {new_account.key.hex()} already in use")
        if not payer.is_signer:
            raise IncorrectAccountError("payer must sign")
        required = max(rent_exempt_minimum(space) - new_account.lamports, 0)
        if payer.lamports < required:
            raise InsufficientFundsError(
                f"payer has {payer.lamports} lamports, {required} required"
            )
        payer.lamports -= required
        new_account.lamports += required
        new_account.data = bytearray(space)
        new_account.owner = owner
        logger.debug("created account %s with %d bytes", new_account.key.hex(), space)

    def close_account(self, refund_to: Account, account: Account) -> None:
        """Moves every lamport to `refund_to`, empties the data and hands
        the account back to the system program."""
        if refund_to is not account:
            refund_to.lamports += account.lamports
            account.lamports = 0
        account.data = bytearray()
        account.owner = SYSTEM_PROGRAM_ID
        logger.debug("closed account %s", account.key.hex())

    def process_instruction(self, ix: Instruction) -> None:
        """Runs `ix`. If the program fails, every account is restored to
        what it was before the call."""
        program = self._programs.get(ix.program_id)
        if program is None:
            raise IncorrectAccountError(f"unknown program {ix.program_id.hex()}")
        snapshot = copy.deepcopy(self._accounts)
        accounts = []
        for meta in ix.accounts:
            account = self.get_or_default(meta.pubkey)
            account.is_signer = meta.is_signer
            account.is_writable = meta.is_writable
            accounts.append(account)
        try:
            program.process_instruction(self, accounts, ix.data)
        except Exception:
            self._accounts = snapshot
            raise
        finally:
            for account in accounts:
                account.is_signer = False
                account.is_writable = False
