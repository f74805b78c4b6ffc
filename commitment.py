"""
KZG consume set commitments: C = p(tau)G2 where p is the vanishing
polynomial of the current members.

The compressed form is what gets stored. It has to be decompressed to
verify and consume, and compressed again to be stored.
"""

import hmac
import logging
from dataclasses import dataclass
from typing import Optional

from alt_bn128 import AltBn128, default_host
from consts import (
    G1,
    G2,
    G2_COMPRESSED,
    G2_GEN_AFFINE_COMPRESSED_BE,
    G2_GEN_AFFINE_UNCOMPRESSED_BE,
)
from conv import be_to_g2, g2_to_be
from curve import G2Point
from errors import InvalidProofError, MalformedDataError
from ops import G1G2Pairing, G1G2PairingEqCheck

logger = logging.getLogger(__name__)


def _sized(data: bytes, n: int, what: str) -> bytes:
    data = bytes(data)
    if len(data) != n:
        raise MalformedDataError(f"{what}: expected {n} bytes, got {len(data)}")
    return data


@dataclass(frozen=True)
class KCSCCompressed:
    """KZG Consume Set Commitment, compressed big-endian G2 point."""

    data: bytes

    def __post_init__(self):
        object.__setattr__(self, "data", _sized(self.data, G2_COMPRESSED, "compressed commitment"))

    @classmethod
    def empty(cls) -> "KCSCCompressed":
        return cls(G2_GEN_AFFINE_COMPRESSED_BE)

    def decompress(self, host: Optional[AltBn128] = None) -> "KCSCUncompressed":
        return KCSCUncompressed((host or default_host()).g2_decompress(self.data))

    def is_empty(self) -> bool:
        return hmac.compare_digest(self.data, G2_GEN_AFFINE_COMPRESSED_BE)


@dataclass
class KCSCUncompressed:
    """KZG Consume Set Commitment, uncompressed big-endian G2 point.

    This is the form proofs are verified and consumed against.
    """

    data: bytes

    def __post_init__(self):
        self.data = _sized(self.data, G2, "commitment")

    @classmethod
    def empty(cls) -> "KCSCUncompressed":
        return cls(G2_GEN_AFFINE_UNCOMPRESSED_BE)

    @classmethod
    def from_point(cls, pt: G2Point) -> "KCSCUncompressed":
        return cls(g2_to_be(pt))

    def to_point(self) -> G2Point:
        return be_to_g2(self.data)

    def compress(self, host: Optional[AltBn128] = None) -> KCSCCompressed:
        return KCSCCompressed((host or default_host()).g2_compress(self.data))

    def is_empty(self) -> bool:
        # p(x) = 1 for the empty set, so C is the G2 generator
        return hmac.compare_digest(self.data, G2_GEN_AFFINE_UNCOMPRESSED_BE)

    def expected_pairing(self, host: Optional[AltBn128] = None) -> bytes:
        """e(G1, C), the value e(z(tau)G1, proof) must equal."""
        return G1G2Pairing().with_g1_gen().with_g2_pt(self.data).exec(host)

    def is_poly_factor(
        self, poly_proof: bytes, z_tau_g1: bytes, host: Optional[AltBn128] = None
    ) -> bool:
        """True if z(x) divides the committed polynomial, i.e. if the roots
        of z are all members of the committed set.

        `poly_proof` = (p(tau) / z(tau))G2, uncompressed big-endian.
        `z_tau_g1` = z(tau)G1, uncompressed big-endian.

        Checks e(G1, C) == e(z(tau)G1, proof).
        """
        poly_proof = _sized(poly_proof, G2, "proof")
        z_tau_g1 = _sized(z_tau_g1, G1, "z(tau)G1")
        return (
            G1G2PairingEqCheck()
            .with_g1a_g1_gen()
            .with_g2a(self.data)
            .with_g1b(z_tau_g1)
            .with_g2b(poly_proof)
            .exec(host)
        )

    def consume_poly(
        self, poly_proof: bytes, z_tau_g1: bytes, host: Optional[AltBn128] = None
    ) -> None:
        """Verify that the roots of z(x) are members, then replace the
        commitment with the proof, the commitment of the remaining set.

        Raises InvalidProofError and leaves the commitment untouched if the
        check fails.
        """
        if not self.is_poly_factor(poly_proof, z_tau_g1, host):
            logger.warning("pairing check failed")
            raise InvalidProofError()
        self.data = bytes(poly_proof)


def compress_commitment(pt: G2Point, host: Optional[AltBn128] = None) -> KCSCCompressed:
    return KCSCUncompressed.from_point(pt).compress(host)
