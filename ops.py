"""
Request values for the alt_bn128 host capability.

Each request holds its operands in big-endian byte form, `as_buf()` lays
them out the way the host expects and `exec()` hands them to a host.
"""

from dataclasses import dataclass, replace
from typing import Optional

from alt_bn128 import AltBn128, default_host
from consts import (
    FQ,
    FR,
    G1,
    G1_GEN_AFFINE_UNCOMPRESSED_BE,
    G2,
    G2_GEN_AFFINE_UNCOMPRESSED_BE,
    Q_BE,
)
from conv import fr_to_be
from errors import InvalidCurveDataError


def _sized(be: bytes, n: int, what: str) -> bytes:
    be = bytes(be)
    if len(be) != n:
        raise InvalidCurveDataError(f"{what}: expected {n} bytes, got {len(be)}")
    return be


def negate_g1_be(g1_affine_uncompressed_be: bytes) -> bytes:
    """-P for a big-endian uncompressed G1 point: (x, q - y).

    The point at infinity (all zeros) is its own negation.
    """
    be = _sized(g1_affine_uncompressed_be, G1, "G1")
    y = int.from_bytes(be[FQ:], "big")
    if y == 0:
        return be
    q = int.from_bytes(Q_BE, "big")
    if y >= q:
        raise InvalidCurveDataError("coordinate not in base field")
    return be[:FQ] + (q - y).to_bytes(FQ, "big")


@dataclass(frozen=True)
class G1Add:
    lhs: bytes = bytes(G1)
    rhs: bytes = bytes(G1)

    def with_lhs(self, g1_affine_uncompressed_be: bytes) -> "G1Add":
        return replace(self, lhs=_sized(g1_affine_uncompressed_be, G1, "lhs"))

    def with_rhs(self, g1_affine_uncompressed_be: bytes) -> "G1Add":
        return replace(self, rhs=_sized(g1_affine_uncompressed_be, G1, "rhs"))

    def as_buf(self) -> bytes:
        return self.lhs + self.rhs

    def exec(self, host: Optional[AltBn128] = None) -> bytes:
        return (host or default_host()).g1_add(self.as_buf())


@dataclass(frozen=True)
class G1ScalarMul:
    point: bytes = bytes(G1)
    scalar: bytes = bytes(FR)

    def with_g1_pt(self, g1_affine_uncompressed_be: bytes) -> "G1ScalarMul":
        return replace(self, point=_sized(g1_affine_uncompressed_be, G1, "point"))

    def with_g1_gen(self) -> "G1ScalarMul":
        return self.with_g1_pt(G1_GEN_AFFINE_UNCOMPRESSED_BE)

    def with_scalar(self, scalar_be: bytes) -> "G1ScalarMul":
        return replace(self, scalar=_sized(scalar_be, FR, "scalar"))

    def with_fr(self, fr) -> "G1ScalarMul":
        return self.with_scalar(fr_to_be(fr))

    def as_buf(self) -> bytes:
        return self.point + self.scalar

    def exec(self, host: Optional[AltBn128] = None) -> bytes:
        return (host or default_host()).g1_scalar_mul(self.as_buf())


@dataclass(frozen=True)
class G1G2Pairing:
    g1: bytes = bytes(G1)
    g2: bytes = bytes(G2)

    def with_g1_pt(self, g1_affine_uncompressed_be: bytes) -> "G1G2Pairing":
        return replace(self, g1=_sized(g1_affine_uncompressed_be, G1, "g1"))

    def with_g1_gen(self) -> "G1G2Pairing":
        return self.with_g1_pt(G1_GEN_AFFINE_UNCOMPRESSED_BE)

    def with_g2_pt(self, g2_affine_uncompressed_be: bytes) -> "G1G2Pairing":
        return replace(self, g2=_sized(g2_affine_uncompressed_be, G2, "g2"))

    def with_g2_gen(self) -> "G1G2Pairing":
        return self.with_g2_pt(G2_GEN_AFFINE_UNCOMPRESSED_BE)

    def as_buf(self) -> bytes:
        return self.g1 + self.g2

    def exec(self, host: Optional[AltBn128] = None) -> bytes:
        return (host or default_host()).pairing(self.as_buf())


@dataclass(frozen=True)
class G1G2PairingEqCheck:
    """Checks e(g1a, g2a) == e(g1b, g2b).

    Because e(-g1a, g2a) = e(g1a, g2a)^-1, this is the same as
    e(-g1a, g2a) * e(g1b, g2b) == 1, which the host checks in one call.
    `g1a` is stored already negated.
    """

    neg_g1a: bytes = bytes(G1)
    g2a: bytes = bytes(G2)
    g1b: bytes = bytes(G1)
    g2b: bytes = bytes(G2)

    def with_g1a(self, g1_affine_uncompressed_be: bytes) -> "G1G2PairingEqCheck":
        return replace(self, neg_g1a=negate_g1_be(g1_affine_uncompressed_be))

    def with_g1a_g1_gen(self) -> "G1G2PairingEqCheck":
        return self.with_g1a(G1_GEN_AFFINE_UNCOMPRESSED_BE)

    def with_g2a(self, g2_affine_uncompressed_be: bytes) -> "G1G2PairingEqCheck":
        return replace(self, g2a=_sized(g2_affine_uncompressed_be, G2, "g2a"))

    def with_g2a_gen(self) -> "G1G2PairingEqCheck":
        return self.with_g2a(G2_GEN_AFFINE_UNCOMPRESSED_BE)

    def with_g1b(self, g1_affine_uncompressed_be: bytes) -> "G1G2PairingEqCheck":
        return replace(self, g1b=_sized(g1_affine_uncompressed_be, G1, "g1b"))

    def with_g1b_g1_gen(self) -> "G1G2PairingEqCheck":
        return self.with_g1b(G1_GEN_AFFINE_UNCOMPRESSED_BE)

    def with_g2b(self, g2_affine_uncompressed_be: bytes) -> "G1G2PairingEqCheck":
        return replace(self, g2b=_sized(g2_affine_uncompressed_be, G2, "g2b"))

    def with_g2b_gen(self) -> "G1G2PairingEqCheck":
        return self.with_g2b(G2_GEN_AFFINE_UNCOMPRESSED_BE)

    def as_buf(self) -> bytes:
        return self.neg_g1a + self.g2a + self.g1b + self.g2b

    def exec(self, host: Optional[AltBn128] = None) -> bool:
        return (host or default_host()).pairing_product_equals_one(self.as_buf())
