"""
Off-chain proof generation.

For a committed set with vanishing polynomial p(x) and a subset whose
vanishing polynomial is z(x), the proof is q(tau)G2 where q = p / z.
Since every factor of p is a simple linear (x - r) factor, q is simply the
vanishing polynomial of the roots that are *not* being proven, so no
polynomial division is needed.
"""

import logging
from typing import Iterable, Iterator, Sequence

from conv import g2_to_be, g2_to_be_compressed
from curve import G2Point, Scalar
from errors import DegreeTooHighError, RootNotFoundError
from hash_to_field import item_to_fr
from poly import eval_poly_pwrs_of_tau, vanishing_poly

logger = logging.getLogger(__name__)


def gen_proof_for_quotient_poly_coeffs(
    quotient_poly_coeffs: Sequence[Scalar], pwrs_of_tau_g2: Sequence[G2Point]
) -> G2Point:
    """q(tau)G2 from the coefficients of q(x) = p(x) / z(x)."""
    if len(pwrs_of_tau_g2) < len(quotient_poly_coeffs):
        raise DegreeTooHighError()
    return eval_poly_pwrs_of_tau(quotient_poly_coeffs, pwrs_of_tau_g2)


def gen_proof_for_quotient_poly_roots(
    quotient_poly_roots: Sequence[Scalar], pwrs_of_tau_g2: Sequence[G2Point]
) -> G2Point:
    # Proving every member leaves q(x) = 1, so the proof is the G2 generator
    return gen_proof_for_quotient_poly_coeffs(vanishing_poly(quotient_poly_roots), pwrs_of_tau_g2)


def roots_to_prove_indices(all_roots: Sequence[Scalar], roots_to_prove: Iterable[Scalar]) -> set[int]:
    # Linear scan per root. Fine off-chain even for tens of thousands of roots
    res = set()
    for root in roots_to_prove:
        try:
            res.add(all_roots.index(root))
        except ValueError:
            raise RootNotFoundError() from None
    return res


def quotient_poly_roots_from_indices(
    all_roots: Iterable[Scalar], roots_to_prove_indices: set[int]
) -> Iterator[Scalar]:
    """The roots left once `roots_to_prove_indices` are taken out.

    Indices that are out of range are ignored.
    """
    for i, r in enumerate(all_roots):
        if i not in roots_to_prove_indices:
            yield r


def gen_proof_with_roots(
    all_roots: Sequence[Scalar],
    roots_to_prove: Iterable[Scalar],
    pwrs_of_tau_g2: Sequence[G2Point],
) -> G2Point:
    all_roots = list(all_roots)
    indices = roots_to_prove_indices(all_roots, roots_to_prove)
    quotient_poly_roots = list(quotient_poly_roots_from_indices(all_roots, indices))
    logger.debug(
        "proving %d of %d roots, quotient degree %d",
        len(indices),
        len(all_roots),
        len(quotient_poly_roots),
    )
    return gen_proof_for_quotient_poly_roots(quotient_poly_roots, pwrs_of_tau_g2)


def gen_proof_with_all_roots_and_items_to_prove(
    all_roots: Sequence[Scalar],
    items_to_prove: Iterable,
    pwrs_of_tau_g2: Sequence[G2Point],
) -> G2Point:
    """Like `gen_proof_with_roots`, but for items that still need hashing.

    Items are anything with a `to_hash()` (e.g. `ByteBuf`) or raw bytes.
    """
    return gen_proof_with_roots(all_roots, [item_to_fr(x) for x in items_to_prove], pwrs_of_tau_g2)


def gen_commitment(roots: Sequence[Scalar], pwrs_of_tau_g2: Sequence[G2Point]) -> G2Point:
    """p(tau)G2 for the set with these roots. The empty set commits to G2."""
    return gen_proof_for_quotient_poly_roots(list(roots), pwrs_of_tau_g2)


def gen_commitment_for_items(items: Iterable, pwrs_of_tau_g2: Sequence[G2Point]) -> G2Point:
    return gen_commitment([item_to_fr(x) for x in items], pwrs_of_tau_g2)


def proof_to_be_compressed(proof: G2Point) -> bytes:
    return g2_to_be_compressed(proof)


def proof_to_be(proof: G2Point) -> bytes:
    return g2_to_be(proof)
