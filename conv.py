"""
Conversion between curve/field types and the big-endian byte forms the
alt_bn128 host operates on.

Uncompressed forms are x | y. G2 coordinates are written imaginary limb
first (c1 | c0). Compressed forms keep only x and put two flag bits in the
top of byte 0: 0x80 if y is the larger of its two roots, 0x40 for the point
at infinity. The point at infinity is also accepted and produced as all
zero bytes, like the host does.
"""

import py_ecc.optimized_bn128 as b

from consts import FQ, FR, G1, G1_COMPRESSED, G2, G2_COMPRESSED
from curve import (
    G1Point,
    G2Point,
    Scalar,
    fq2_is_larger,
    fq2_ints,
    fq2_sqrt,
    fq_int,
    fq_is_larger,
    fq_sqrt,
    in_subgroup,
    to_affine,
)
from errors import CompressionError, DeserializationError

FLAG_Y_IS_LARGER = 0x80
FLAG_INFINITY = 0x40
FLAGS_MASK = FLAG_Y_IS_LARGER | FLAG_INFINITY


def _check_len(be: bytes, n: int, what: str, err=DeserializationError):
    if len(be) != n:
        raise err(f"{what}: expected {n} bytes, got {len(be)}")


def _fq_from_be(be: bytes, err=DeserializationError) -> int:
    v = int.from_bytes(be, "big")
    if v >= b.field_modulus:
        raise err("coordinate not in base field")
    return v


def fr_to_be(fr) -> bytes:
    """32-byte big-endian form of a scalar, the form the host expects."""
    return (fq_int(fr) % b.curve_order).to_bytes(FR, "big")


def be_to_fr(be: bytes) -> Scalar:
    """Inverse of `fr_to_be`.

    Values >= the scalar field order are rejected rather than reduced, so
    every accepted input has exactly one canonical encoding.
    """
    _check_len(be, FR, "Fr")
    v = int.from_bytes(be, "big")
    if v >= b.curve_order:
        raise DeserializationError("scalar not in Fr")
    return Scalar(v)


def g1_to_be(pt: G1Point) -> bytes:
    aff = to_affine(pt)
    if aff is None:
        return bytes(G1)
    x, y = aff
    return fq_int(x).to_bytes(FQ, "big") + fq_int(y).to_bytes(FQ, "big")


def be_to_g1(be: bytes) -> G1Point:
    _check_len(be, G1, "G1")
    if not any(be):
        return b.Z1
    x = _fq_from_be(be[:FQ])
    y = _fq_from_be(be[FQ:])
    pt = (b.FQ(x), b.FQ(y), b.FQ.one())
    if not b.is_on_curve(pt, b.b):
        raise DeserializationError("G1 point not on curve")
    return pt


def _fq2_to_be(x: b.FQ2) -> bytes:
    c0, c1 = fq2_ints(x)
    return c1.to_bytes(FQ, "big") + c0.to_bytes(FQ, "big")


def _fq2_from_be(be: bytes, err=DeserializationError) -> b.FQ2:
    c1 = _fq_from_be(be[:FQ], err)
    c0 = _fq_from_be(be[FQ:], err)
    return b.FQ2([c0, c1])


def g2_to_be(pt: G2Point) -> bytes:
    aff = to_affine(pt)
    if aff is None:
        return bytes(G2)
    x, y = aff
    return _fq2_to_be(x) + _fq2_to_be(y)


def be_to_g2(be: bytes) -> G2Point:
    _check_len(be, G2, "G2")
    if not any(be):
        return b.Z2
    x = _fq2_from_be(be[: 2 * FQ])
    y = _fq2_from_be(be[2 * FQ :])
    pt = (x, y, b.FQ2.one())
    if not b.is_on_curve(pt, b.b2):
        raise DeserializationError("G2 point not on curve")
    if not in_subgroup(pt):
        raise DeserializationError("G2 point not in subgroup")
    return pt


def _split_flags(be: bytes) -> tuple[int, bytes]:
    flags = be[0] & FLAGS_MASK
    return flags, bytes([be[0] & ~FLAGS_MASK & 0xFF]) + be[1:]


def g1_to_be_compressed(pt: G1Point) -> bytes:
    aff = to_affine(pt)
    if aff is None:
        return bytes(G1_COMPRESSED)
    x, y = aff
    res = bytearray(fq_int(x).to_bytes(FQ, "big"))
    if fq_is_larger(fq_int(y)):
        res[0] |= FLAG_Y_IS_LARGER
    return bytes(res)


def be_compressed_to_g1(be: bytes) -> G1Point:
    _check_len(be, G1_COMPRESSED, "compressed G1", CompressionError)
    flags, x_be = _split_flags(be)
    if flags == FLAG_INFINITY or not any(be):
        if any(x_be):
            raise CompressionError("infinity flag with nonzero x")
        return b.Z1
    if flags & FLAG_INFINITY:
        raise CompressionError("invalid flags")
    x = _fq_from_be(x_be, CompressionError)
    y = fq_sqrt((x * x * x + fq_int(b.b)) % b.field_modulus)
    if y is None:
        raise CompressionError("x is not on G1")
    if fq_is_larger(y) != bool(flags & FLAG_Y_IS_LARGER):
        y = (b.field_modulus - y) % b.field_modulus
    return (b.FQ(x), b.FQ(y), b.FQ.one())


def g2_to_be_compressed(pt: G2Point) -> bytes:
    aff = to_affine(pt)
    if aff is None:
        return bytes(G2_COMPRESSED)
    x, y = aff
    res = bytearray(_fq2_to_be(x))
    if fq2_is_larger(y):
        res[0] |= FLAG_Y_IS_LARGER
    return bytes(res)


def be_compressed_to_g2(be: bytes) -> G2Point:
    _check_len(be, G2_COMPRESSED, "compressed G2", CompressionError)
    flags, x_be = _split_flags(be)
    if flags == FLAG_INFINITY or not any(be):
        if any(x_be):
            raise CompressionError("infinity flag with nonzero x")
        return b.Z2
    if flags & FLAG_INFINITY:
        raise CompressionError("invalid flags")
    x = _fq2_from_be(x_be, CompressionError)
    y = fq2_sqrt(x * x * x + b.b2)
    if y is None:
        raise CompressionError("x is not on G2")
    if fq2_is_larger(y) != bool(flags & FLAG_Y_IS_LARGER):
        y = -y
    pt = (x, y, b.FQ2.one())
    if not in_subgroup(pt):
        raise CompressionError("G2 point not in subgroup")
    return pt


# Byte to byte forms, what the host compression syscalls take and return


def g1_compress(be: bytes) -> bytes:
    _check_len(be, G1, "G1", CompressionError)
    try:
        pt = be_to_g1(be)
    except DeserializationError as e:
        raise CompressionError(str(e)) from e
    return g1_to_be_compressed(pt)


def g1_decompress(be: bytes) -> bytes:
    return g1_to_be(be_compressed_to_g1(be))


def g2_compress(be: bytes) -> bytes:
    _check_len(be, G2, "G2", CompressionError)
    try:
        pt = be_to_g2(be)
    except DeserializationError as e:
        raise CompressionError(str(e)) from e
    return g2_to_be_compressed(pt)


def g2_decompress(be: bytes) -> bytes:
    return g2_to_be(be_compressed_to_g2(be))
