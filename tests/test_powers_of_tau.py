import py_ecc.optimized_bn128 as b

from conv import g2_to_be
from powers_of_tau import PowersOfTau
from program import PWRS_OF_TAU_G1_COMPRESSED, default_config


def _same_points(lhs, rhs):
    return len(lhs) == len(rhs) and all(b.eq(p, q) for p, q in zip(lhs, rhs))


def test_insecure_from_tau(pwrs_of_tau):
    assert len(pwrs_of_tau.g1) == 4
    assert len(pwrs_of_tau.g2) == 6
    assert b.eq(pwrs_of_tau.g1[0], b.G1)
    assert b.eq(pwrs_of_tau.g1[3], b.multiply(b.G1, 8))
    assert b.eq(pwrs_of_tau.g2[2], b.multiply(b.G2, 4))


def test_default_config_is_tau_2(pwrs_of_tau):
    assert default_config().pwrs_of_tau_g1_compressed == pwrs_of_tau.g1_compressed()


def test_g1_compressed(pwrs_of_tau):
    restored = PowersOfTau.from_g1_compressed(pwrs_of_tau.g1_compressed(), pwrs_of_tau.g2)
    assert _same_points(restored.g1, pwrs_of_tau.g1)
    assert restored.g2 == pwrs_of_tau.g2


def test_g1_uncompressed(pwrs_of_tau):
    restored = PowersOfTau.from_g1_uncompressed(pwrs_of_tau.g1_uncompressed())
    assert _same_points(restored.g1, pwrs_of_tau.g1)
    assert restored.g2 == []
    assert restored.g1_compressed() == PWRS_OF_TAU_G1_COMPRESSED


def test_g2_compressed(pwrs_of_tau):
    compressed = pwrs_of_tau.g2_compressed()
    assert all(len(c) == 64 for c in compressed)
    restored = PowersOfTau.from_g2_compressed(compressed, pwrs_of_tau.g1)
    assert _same_points(restored.g2, pwrs_of_tau.g2)
    assert restored.g1 == pwrs_of_tau.g1
    assert [g2_to_be(p) for p in restored.g2] == [g2_to_be(p) for p in pwrs_of_tau.g2]
