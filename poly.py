"""
Polynomials over Fr as coefficient lists in ascending powers, and their
evaluation "at tau" against a public powers-of-tau table.
"""

from typing import Iterable, Optional, Sequence

from alt_bn128 import AltBn128
from consts import G1
from conv import fr_to_be
from curve import Point, Scalar, ec_lincomb
from errors import DegreeTooHighError, InvalidDegreeError, TooManyRootsError
from ops import G1Add, G1ScalarMul


def poly_from_roots(roots: Sequence, capacity: Optional[int] = None) -> list[Scalar]:
    """Coefficients of (x - r_1)(x - r_2)...(x - r_d), ascending, monic.

    i.e. x^2 + 2x + 3 -> [3, 2, 1], x + 2 -> [2, 1].

    `capacity` bounds the number of output coefficients (max degree + 1),
    which keeps the cost of a call predictable. With no capacity the
    output grows with the input.

    Raises:
        InvalidDegreeError: no roots, or a capacity below 1
        TooManyRootsError: more than capacity - 1 roots
    """
    d = len(roots)
    if (capacity is not None and capacity < 1) or d < 1:
        raise InvalidDegreeError()
    if capacity is not None and d > capacity - 1:
        raise TooManyRootsError()

    # this just does the naive n^2 thing of multiplying everything out
    res = [Scalar(0)] * (d + 1)

    # highest power coeff is always 1
    n = d
    res[n] = Scalar(1)

    for root in roots:
        root = Scalar(root) if isinstance(root, int) else root
        n -= 1
        for j in range(n, d):
            res[j] = res[j] - res[j + 1] * root

    return res


def vanishing_poly(roots: Sequence) -> list[Scalar]:
    # The empty product is the constant polynomial 1
    if len(roots) == 0:
        return [Scalar(1)]
    return poly_from_roots(roots)


def eval_poly(coeffs: Sequence[Scalar], x: Scalar) -> Scalar:
    if len(coeffs) == 0:
        raise InvalidDegreeError()
    o = Scalar(0)
    for c in reversed(coeffs):
        o = o * x + c
    return o


def _check_enough_powers(n_coeffs: int, n_powers: int):
    if n_coeffs == 0:
        raise InvalidDegreeError()
    # Never silently drop the high terms
    if n_powers < n_coeffs:
        raise DegreeTooHighError(
            f"DegreeTooHigh: {n_coeffs} coefficients but only {n_powers} powers of tau"
        )


def eval_poly_pwrs_of_tau(coeffs: Sequence[Scalar], pwrs_of_tau: Sequence[Point]) -> Point:
    """sum(coeffs[i] * pwrs_of_tau[i]), i.e. p(tau) * G for G1 or G2 tables."""
    _check_enough_powers(len(coeffs), len(pwrs_of_tau))
    return ec_lincomb(list(zip(pwrs_of_tau, coeffs)))


def eval_poly_pwrs_of_tau_g1(
    coeffs: Sequence[Scalar],
    pwrs_of_tau_g1_be: Iterable[bytes],
    host: Optional[AltBn128] = None,
) -> bytes:
    """z(tau)G1 through the host: scalar-multiply each term, then accumulate.

    `pwrs_of_tau_g1_be` are uncompressed big-endian G1 points starting
    with the generator (power 0).
    """
    pwrs = list(pwrs_of_tau_g1_be)
    _check_enough_powers(len(coeffs), len(pwrs))

    accum: Optional[bytes] = None
    for c, p in zip(coeffs, pwrs):
        term = G1ScalarMul().with_scalar(fr_to_be(c)).with_g1_pt(p).exec(host)
        if accum is None:
            accum = term
        else:
            accum = G1Add().with_lhs(accum).with_rhs(term).exec(host)
    assert accum is not None and len(accum) == G1
    return accum
