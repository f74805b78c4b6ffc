import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from alt_bn128 import AltBn128, default_host
from commitment import KCSCUncompressed
from curve import Scalar
from errors import DuplicateRootError, TooManyRootsError
from poly import eval_poly_pwrs_of_tau_g1, poly_from_roots

logger = logging.getLogger(__name__)


@dataclass
class VerificationKey:
    """Verification key"""

    # [1]₁, [τ]₁, ..., [τ^k]₁ as uncompressed big-endian G1 points.
    # You only need 1 + (max roots verified per call) powers.
    pwrs_of_tau_g1: list[bytes]
    # Most elements that can be consumed in one call
    max_elems: int
    # Repeated roots make z(x) non-simple, which can never divide a
    # commitment made of one root per member. Reject them before paying
    # for the pairing.
    reject_duplicate_roots: bool = True

    def __post_init__(self):
        if self.max_elems < 1:
            raise ValueError("max_elems must be at least 1")
        if len(self.pwrs_of_tau_g1) < self.max_elems + 1:
            raise ValueError(
                f"need {self.max_elems + 1} powers of tau to consume {self.max_elems} elements, "
                f"got {len(self.pwrs_of_tau_g1)}"
            )

    @classmethod
    def from_compressed(
        cls,
        pwrs_of_tau_g1_compressed: Iterable[bytes],
        max_elems: Optional[int] = None,
        reject_duplicate_roots: bool = True,
        host: Optional[AltBn128] = None,
    ) -> "VerificationKey":
        host = host or default_host()
        pwrs = [host.g1_decompress(c) for c in pwrs_of_tau_g1_compressed]
        if max_elems is None:
            max_elems = len(pwrs) - 1
        return cls(pwrs, max_elems, reject_duplicate_roots)

    def check_roots(self, roots: Sequence[Scalar]) -> None:
        if len(roots) > self.max_elems:
            raise TooManyRootsError(
                f"TooManyRoots: {len(roots)} elements, at most {self.max_elems} per call"
            )
        if self.reject_duplicate_roots and len(set(roots)) != len(roots):
            raise DuplicateRootError("duplicate elements")

    # z(x), the vanishing polynomial of the elements being consumed
    def vanishing_poly(self, roots: Sequence[Scalar]) -> list[Scalar]:
        self.check_roots(roots)
        return poly_from_roots(roots, capacity=self.max_elems + 1)

    # z(τ)G1, uncompressed big-endian
    def z_tau_g1(self, coeffs: Sequence[Scalar], host: Optional[AltBn128] = None) -> bytes:
        return eval_poly_pwrs_of_tau_g1(coeffs, self.pwrs_of_tau_g1, host)

    def verify_consume(
        self,
        commitment: KCSCUncompressed,
        proof: bytes,
        roots: Sequence[Scalar],
        host: Optional[AltBn128] = None,
    ) -> bool:
        z_tau_g1 = self.z_tau_g1(self.vanishing_poly(roots), host)
        return commitment.is_poly_factor(proof, z_tau_g1, host)

    def consume(
        self,
        commitment: KCSCUncompressed,
        proof: bytes,
        roots: Sequence[Scalar],
        host: Optional[AltBn128] = None,
    ) -> None:
        """Removes `roots` from the set `commitment` represents.

        On success `commitment` becomes `proof`. On any failure it is
        left untouched.
        """
        z_tau_g1 = self.z_tau_g1(self.vanishing_poly(roots), host)
        commitment.consume_poly(proof, z_tau_g1, host)
        logger.debug("consumed %d elements", len(roots))
