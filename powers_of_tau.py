import py_ecc.optimized_bn128 as b
from dataclasses import dataclass, field
from typing import Iterable

from conv import (
    be_compressed_to_g1,
    be_to_g1,
    g1_to_be,
    g1_to_be_compressed,
    g2_to_be_compressed,
    be_compressed_to_g2,
)
from curve import G1Point, G2Point, Scalar, ec_mul


@dataclass
class PowersOfTau(object):
    #   ([1]₁, [τ]₁, ..., [τ^{d-1}]₁)
    # = ( G,    τG,  ...,  τ^{d-1}G ), where G is a generator of G_1
    g1: list[G1Point]
    # Same for G_2. Only the prover needs these
    g2: list[G2Point] = field(default_factory=list)

    @classmethod
    def insecure_from_tau(cls, tau, n_g1: int, n_g2: int = 0):
        # Test-only. A real table comes from a ceremony, after which tau
        # must be discarded
        tau = Scalar(tau) if isinstance(tau, int) else tau
        g1 = cls._powers(b.G1, tau, n_g1)
        g2 = cls._powers(b.G2, tau, n_g2)
        return cls(g1, g2)

    @staticmethod
    def _powers(gen, tau: Scalar, n: int) -> list:
        res = []
        pt = gen
        for _ in range(n):
            res.append(pt)
            pt = ec_mul(pt, tau)
        return res

    @classmethod
    def from_g1_compressed(cls, compressed: Iterable[bytes], g2: Iterable[G2Point] = ()):
        return cls([be_compressed_to_g1(c) for c in compressed], list(g2))

    @classmethod
    def from_g1_uncompressed(cls, uncompressed: Iterable[bytes], g2: Iterable[G2Point] = ()):
        return cls([be_to_g1(u) for u in uncompressed], list(g2))

    def g1_compressed(self) -> list[bytes]:
        return [g1_to_be_compressed(p) for p in self.g1]

    def g1_uncompressed(self) -> list[bytes]:
        return [g1_to_be(p) for p in self.g1]

    def g2_compressed(self) -> list[bytes]:
        return [g2_to_be_compressed(p) for p in self.g2]

    @classmethod
    def from_g2_compressed(cls, compressed: Iterable[bytes], g1: Iterable[G1Point] = ()):
        return cls(list(g1), [be_compressed_to_g2(c) for c in compressed])
