import logging

import pytest

from accounts import Bank
from alt_bn128 import PyEccAltBn128
from hash_to_field import ByteBuf, item_to_fr
from powers_of_tau import PowersOfTau
from program import PROGRAM_ID, KcsProgram

PAYER = bytes([7]) * 32
REFUND = bytes([8]) * 32

# tau = 2 for tests. Must be a discarded secret for actual use
TAU = 2


@pytest.fixture(scope="session")
def host():
    return PyEccAltBn128()


@pytest.fixture(scope="session")
def pwrs_of_tau():
    return PowersOfTau.insecure_from_tau(TAU, 4, 6)


@pytest.fixture(scope="session")
def program(host):
    return KcsProgram(host=host)


@pytest.fixture
def bank(program):
    bank = Bank()
    bank.airdrop(PAYER, 10**9)
    bank.add_program(PROGRAM_ID, program)
    return bank


@pytest.fixture(scope="session")
def items():
    return [ByteBuf(bytes([i]) * 40) for i in range(5)]


@pytest.fixture(scope="session")
def roots(items):
    return [item_to_fr(x) for x in items]


@pytest.fixture
def root_logger():
    """The root logger, with its handlers and level put back afterwards."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
