import py_ecc.optimized_bn128 as b
import pytest

from alt_bn128 import default_host
from consts import G1_GEN_AFFINE_UNCOMPRESSED_BE, Q_BE
from conv import g1_to_be, g2_to_be
from curve import Scalar
from errors import InvalidCurveDataError
from ops import G1Add, G1G2Pairing, G1G2PairingEqCheck, G1ScalarMul, negate_g1_be

TWO_G1 = g1_to_be(b.double(b.G1))
THREE_G1 = g1_to_be(b.multiply(b.G1, 3))
TWO_G2 = g2_to_be(b.double(b.G2))


def test_g1_add(host):
    res = G1Add().with_lhs(G1_GEN_AFFINE_UNCOMPRESSED_BE).with_rhs(TWO_G1).exec(host)
    assert res == THREE_G1


def test_g1_add_infinity_is_identity(host):
    assert G1Add().with_lhs(TWO_G1).exec(host) == TWO_G1


def test_g1_scalar_mul(host):
    assert G1ScalarMul().with_g1_gen().with_fr(Scalar(3)).exec(host) == THREE_G1
    assert G1ScalarMul().with_g1_pt(TWO_G1).with_fr(Scalar(0)).exec(host) == bytes(64)


def test_wrong_input_length(host):
    with pytest.raises(InvalidCurveDataError):
        host.g1_add(bytes(127))
    with pytest.raises(InvalidCurveDataError):
        host.pairing_product_equals_one(bytes(191))
    with pytest.raises(InvalidCurveDataError):
        G1Add().with_lhs(bytes(63))


def test_invalid_point(host):
    bad = (1).to_bytes(32, "big") + (3).to_bytes(32, "big")
    with pytest.raises(InvalidCurveDataError):
        G1Add().with_lhs(bad).exec(host)


def test_negate_g1():
    q = int.from_bytes(Q_BE, "big")
    neg = negate_g1_be(G1_GEN_AFFINE_UNCOMPRESSED_BE)
    assert neg == (1).to_bytes(32, "big") + (q - 2).to_bytes(32, "big")
    assert neg == g1_to_be(b.neg(b.G1))
    assert negate_g1_be(bytes(64)) == bytes(64)


def test_negate_g1_rejects_out_of_field():
    with pytest.raises(InvalidCurveDataError):
        negate_g1_be(bytes(32) + b"\xff" * 32)


def test_pairing_eq_check(host):
    check = G1G2PairingEqCheck().with_g1a_g1_gen().with_g2a(TWO_G2).with_g2b_gen()
    assert check.with_g1b(TWO_G1).exec(host)
    assert not check.with_g1b(THREE_G1).exec(host)


def test_pairing_bilinear(host):
    lhs = G1G2Pairing().with_g1_pt(TWO_G1).with_g2_gen().exec(host)
    rhs = G1G2Pairing().with_g1_gen().with_g2_pt(TWO_G2).exec(host)
    assert len(lhs) == 384
    assert lhs == rhs


def test_default_host_is_shared():
    assert default_host() is default_host()
