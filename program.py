"""
Demonstration on-chain program for a single consume set.

Instruction data:

Init (discriminator 0)
    - [0]       0
    - [1..129]  uncompressed G2 commitment of the initial member set

Consume (discriminator 1)
    - [0]       1
    - [1..65]   compressed G2 proof point (pi)
    - [65]      n_elems
    - [66..]    n_elems elements, packed. Each has length
                (len(ix_data) - 66) / n_elems

The commitment account holds exactly the compressed commitment and
nothing else.
"""

import logging
from contextlib import contextmanager
from typing import Iterable, List, Optional, Union

from accounts import SYSTEM_PROGRAM_ID, Account, AccountMeta, Bank, Instruction
from alt_bn128 import AltBn128, default_host
from commitment import KCSCCompressed, KCSCUncompressed
from config import ConsumeSetConfig, setup_logging
from consts import G2, G2_COMPRESSED
from errors import (
    IncorrectAccountError,
    InvalidDegreeError,
    KCSError,
    MalformedDataError,
    ProgramError,
    TooManyRootsError,
)
from hash_to_field import ByteBuf, hash_to_fr, sha256
from verifier import VerificationKey

logger = logging.getLogger(__name__)

PROGRAM_ID = sha256(b"kzg-general-test")
KCSC_ID = sha256(b"kcsc" + PROGRAM_ID)

INIT = 0
CONSUME = 1

INIT_IX_LEN = 1 + G2
CONSUME_PROOF_START = 1
CONSUME_N_ELEMS_IDX = CONSUME_PROOF_START + G2_COMPRESSED
CONSUME_ELEMS_START = CONSUME_N_ELEMS_IDX + 1

# Custom error codes
COMPRESS_FAILED = 69
PROOF_DECOMPRESS_FAILED = 70
POLY_FROM_ROOTS_FAILED = 71
EVAL_POLY_FAILED = 72
CONSUME_FAILED = 73

MAX_PROOFS_PER_IX = 3

# You only need to store powers up to (1 + how many roots you wish to verify
# in one instruction) on-chain.
# tau = 2, only for testing. tau must be a discarded secret for actual use.
PWRS_OF_TAU_G1_COMPRESSED = [
    bytes(31) + bytes([1]),
    bytes([
        3, 6, 68, 231, 46, 19, 26, 2, 155, 133, 4, 91, 104, 24, 21, 133, 217, 120, 22, 169, 22,
        135, 28, 168, 211, 194, 8, 193, 109, 135, 207, 211,
    ]),
    bytes([
        6, 167, 182, 74, 248, 244, 20, 188, 190, 239, 69, 91, 29, 165, 32, 140, 155, 89, 43, 131,
        238, 101, 153, 130, 76, 170, 109, 46, 233, 20, 26, 118,
    ]),
    bytes([
        136, 177, 213, 29, 35, 72, 12, 16, 244, 114, 245, 233, 59, 156, 254, 168, 130, 56, 193, 33,
        254, 21, 90, 247, 4, 57, 55, 136, 44, 48, 106, 99,
    ]),
]


def default_config() -> ConsumeSetConfig:
    return ConsumeSetConfig(MAX_PROOFS_PER_IX, PWRS_OF_TAU_G1_COMPRESSED)


@contextmanager
def _custom_error(code: int):
    try:
        yield
    except KCSError as e:
        logger.error("%s", e)
        raise ProgramError(code, str(e)) from e


def init_ix(
    payer: bytes,
    commitment_uncompressed: bytes,
    kcsc: bytes = KCSC_ID,
    program_id: bytes = PROGRAM_ID,
) -> Instruction:
    commitment_uncompressed = bytes(commitment_uncompressed)
    if len(commitment_uncompressed) != G2:
        raise MalformedDataError(f"commitment: expected {G2} bytes")
    return Instruction(
        program_id,
        [
            AccountMeta(payer, is_signer=True, is_writable=True),
            AccountMeta(kcsc, is_writable=True),
            AccountMeta(SYSTEM_PROGRAM_ID),
        ],
        bytes([INIT]) + commitment_uncompressed,
    )


def consume_ix(
    proof_compressed: bytes,
    items: Iterable[Union[bytes, ByteBuf]],
    kcsc: bytes = KCSC_ID,
    refund_to: Optional[bytes] = None,
    program_id: bytes = PROGRAM_ID,
) -> Instruction:
    """Items are packed back to back, so they must all have the same length.

    `refund_to` receives the rent if this consume empties the set. Without
    it the lamports stay in the closed, system-owned commitment account and
    only whoever controls that address can move them.
    """
    elems = [x.data if isinstance(x, ByteBuf) else bytes(x) for x in items]
    if len({len(e) for e in elems}) > 1:
        raise MalformedDataError("elements must all have the same length")
    data = bytes([CONSUME]) + bytes(proof_compressed) + bytes([len(elems)]) + b"".join(elems)
    metas = [AccountMeta(kcsc, is_writable=True)]
    if refund_to is not None:
        metas.append(AccountMeta(refund_to, is_writable=True))
    return Instruction(program_id, metas, data)


class KcsProgram:
    def __init__(
        self,
        config: Optional[ConsumeSetConfig] = None,
        program_id: bytes = PROGRAM_ID,
        kcsc_id: bytes = KCSC_ID,
        host: Optional[AltBn128] = None,
    ):
        self.config = config or default_config()
        self.program_id = program_id
        self.kcsc_id = kcsc_id
        self.host = host or default_host()
        self.hasher = self.config.hasher
        self.vk = VerificationKey.from_compressed(
            self.config.pwrs_of_tau_g1_compressed,
            max_elems=self.config.max_elems_per_call,
            reject_duplicate_roots=self.config.reject_duplicate_roots,
            host=self.host,
        )

    @classmethod
    def from_config_file(cls, path: str, host: Optional[AltBn128] = None) -> "KcsProgram":
        """Loads a JSON `ConsumeSetConfig` and configures logging from it."""
        config = ConsumeSetConfig.from_json_file(path)
        setup_logging(config.log)
        return cls(config, host=host)

    def process_instruction(self, bank: Bank, accounts: List[Account], ix_data: bytes) -> None:
        try:
            if len(ix_data) == 0:
                raise MalformedDataError("empty instruction data")
            discm = ix_data[0]
            if discm == INIT:
                self.process_init(bank, accounts, ix_data)
            elif discm == CONSUME:
                self.process_consume(bank, accounts, ix_data)
            else:
                raise MalformedDataError(f"unknown discriminator {discm}")
        except KCSError as e:
            logger.error("%s", e)
            raise ProgramError(e.code, str(e)) from e

    def _check_kcsc(self, kcsc: Account) -> None:
        if kcsc.key != self.kcsc_id:
            raise IncorrectAccountError("Wrong kcsc account")
        if not kcsc.is_writable:
            raise IncorrectAccountError("kcsc account must be writable")

    def process_init(self, bank: Bank, accounts: List[Account], ix_data: bytes) -> None:
        if len(ix_data) != INIT_IX_LEN:
            raise MalformedDataError(f"init: expected {INIT_IX_LEN} bytes, got {len(ix_data)}")
        if len(accounts) < 2:
            raise IncorrectAccountError("init: expected payer and kcsc accounts")
        payer, kcsc = accounts[0], accounts[1]
        self._check_kcsc(kcsc)

        with _custom_error(COMPRESS_FAILED):
            compressed = KCSCUncompressed(ix_data[1:]).compress(self.host)

        bank.create_rent_exempt_account(payer, kcsc, G2_COMPRESSED, self.program_id)
        kcsc.data[:] = compressed.data
        logger.info("initialized consume set %s", kcsc.key.hex())

    def process_consume(self, bank: Bank, accounts: List[Account], ix_data: bytes) -> None:
        if len(accounts) < 1:
            raise IncorrectAccountError("consume: missing kcsc account")
        kcsc = accounts[0]
        refund_to = accounts[1] if len(accounts) > 1 else kcsc
        self._check_kcsc(kcsc)
        if kcsc.owner != self.program_id or len(kcsc.data) != G2_COMPRESSED:
            raise IncorrectAccountError("kcsc account not initialized")
        if refund_to is not kcsc and not refund_to.is_writable:
            raise IncorrectAccountError("refund account must be writable")

        if len(ix_data) < CONSUME_ELEMS_START:
            raise MalformedDataError(
                f"consume: expected at least {CONSUME_ELEMS_START} bytes, got {len(ix_data)}"
            )

        with _custom_error(PROOF_DECOMPRESS_FAILED):
            pi = self.host.g2_decompress(ix_data[CONSUME_PROOF_START:CONSUME_N_ELEMS_IDX])

        n_elems = ix_data[CONSUME_N_ELEMS_IDX]
        if n_elems == 0:
            raise InvalidDegreeError("n_elems must be at least 1")
        if n_elems > self.config.max_elems_per_call:
            raise TooManyRootsError(
                f"at most {self.config.max_elems_per_call} elements per instruction, got {n_elems}"
            )
        elems_data = ix_data[CONSUME_ELEMS_START:]
        if len(elems_data) % n_elems != 0:
            raise MalformedDataError("ix_data.len() % n_elems not 0")
        elem_len = len(elems_data) // n_elems

        logger.info("n_elems: %d. elem_len: %d", n_elems, elem_len)

        roots = [
            hash_to_fr(elems_data[i * elem_len : (i + 1) * elem_len], self.hasher)
            for i in range(n_elems)
        ]
        with _custom_error(POLY_FROM_ROOTS_FAILED):
            coeffs = self.vk.vanishing_poly(roots)

        with _custom_error(EVAL_POLY_FAILED):
            z_tau_g1 = self.vk.z_tau_g1(coeffs, self.host)

        kcscu = KCSCCompressed(kcsc.data).decompress(self.host)

        with _custom_error(CONSUME_FAILED):
            kcscu.consume_poly(pi, z_tau_g1, self.host)

        if kcscu.is_empty():
            bank.close_account(refund_to, kcsc)
            logger.info("consume set %s is empty, closed", kcsc.key.hex())
            return

        with _custom_error(COMPRESS_FAILED):
            kcsc.data[:] = kcscu.compress(self.host).data
