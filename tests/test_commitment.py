import py_ecc.optimized_bn128 as b
import pytest

from commitment import KCSCCompressed, KCSCUncompressed, compress_commitment
from consts import G2_GEN_AFFINE_COMPRESSED_BE, G2_GEN_AFFINE_UNCOMPRESSED_BE
from conv import g1_to_be, g2_to_be
from errors import InvalidProofError, MalformedDataError
from prover import gen_commitment


def test_empty():
    assert KCSCUncompressed.empty().data == G2_GEN_AFFINE_UNCOMPRESSED_BE
    assert KCSCCompressed.empty().data == G2_GEN_AFFINE_COMPRESSED_BE
    assert KCSCUncompressed.empty().is_empty()
    assert KCSCCompressed.empty().is_empty()
    assert not KCSCUncompressed.from_point(b.double(b.G2)).is_empty()


def test_empty_set_commitment(pwrs_of_tau, host):
    c = gen_commitment([], pwrs_of_tau.g2)
    assert KCSCUncompressed.from_point(c).data == G2_GEN_AFFINE_UNCOMPRESSED_BE
    assert compress_commitment(c, host).data == G2_GEN_AFFINE_COMPRESSED_BE


def test_sizes():
    with pytest.raises(MalformedDataError):
        KCSCCompressed(bytes(63))
    with pytest.raises(MalformedDataError):
        KCSCUncompressed(bytes(129))


def test_compress_decompress(pwrs_of_tau, host):
    u = KCSCUncompressed.from_point(pwrs_of_tau.g2[2])
    c = u.compress(host)
    assert c.decompress(host) == u
    assert b.eq(u.to_point(), pwrs_of_tau.g2[2])


def test_consume_poly(host):
    # C = 6G2 = (2 * 3)G2, z(tau) = 2, proof = 3G2
    c = KCSCUncompressed.from_point(b.multiply(b.G2, 6))
    proof = g2_to_be(b.multiply(b.G2, 3))
    bad_z = g1_to_be(b.multiply(b.G1, 4))
    with pytest.raises(InvalidProofError):
        c.consume_poly(proof, bad_z, host)
    assert c == KCSCUncompressed.from_point(b.multiply(b.G2, 6))

    c.consume_poly(proof, g1_to_be(b.double(b.G1)), host)
    assert c.data == proof


def test_expected_pairing(host):
    c = KCSCUncompressed.empty()
    assert c.expected_pairing(host) == host.pairing(g1_to_be(b.G1) + G2_GEN_AFFINE_UNCOMPRESSED_BE)
