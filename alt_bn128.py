import logging
from abc import ABC, abstractmethod

import py_ecc.optimized_bn128 as b

import conv
from consts import (
    ALT_BN128_ADDITION_INPUT_LEN,
    ALT_BN128_MULTIPLICATION_INPUT_LEN,
    ALT_BN128_PAIRING_ELEMENT_LEN,
    FQ,
    G1,
)
from curve import fq_int
from errors import InvalidCurveDataError

logger = logging.getLogger(__name__)

GT = 12 * FQ


class AltBn128(ABC):
    """The host's elliptic-curve capability.

    Every method takes and returns the big-endian byte forms of `conv`.
    Any input that is not a valid point fails with `InvalidCurveDataError`.
    There is no retry: a call either completes or fails.
    """

    @abstractmethod
    def g1_add(self, input: bytes) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def g1_scalar_mul(self, input: bytes) -> bytes:
        raise NotImplementedError

    # Raw e(P, Q) for a single (G1, G2) element, for callers that compare
    # two independently computed pairings
    @abstractmethod
    def pairing(self, input: bytes) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def pairing_product_equals_one(self, input: bytes) -> bool:
        raise NotImplementedError

    @abstractmethod
    def g1_compress(self, input: bytes) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def g1_decompress(self, input: bytes) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def g2_compress(self, input: bytes) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def g2_decompress(self, input: bytes) -> bytes:
        raise NotImplementedError


def _check_len(input: bytes, n: int, op: str):
    if len(input) != n:
        raise InvalidCurveDataError(f"{op}: expected {n} bytes, got {len(input)}")


def _pairing_elements(input: bytes):
    for i in range(0, len(input), ALT_BN128_PAIRING_ELEMENT_LEN):
        g1 = conv.be_to_g1(input[i : i + G1])
        g2 = conv.be_to_g2(input[i + G1 : i + ALT_BN128_PAIRING_ELEMENT_LEN])
        yield g1, g2


def gt_to_be(gt: b.FQ12) -> bytes:
    return b"".join(fq_int(c).to_bytes(FQ, "big") for c in gt.coeffs)


class PyEccAltBn128(AltBn128):
    """`AltBn128` backed by py_ecc.optimized_bn128."""

    def g1_add(self, input: bytes) -> bytes:
        _check_len(input, ALT_BN128_ADDITION_INPUT_LEN, "g1_add")
        lhs = conv.be_to_g1(input[:G1])
        rhs = conv.be_to_g1(input[G1:])
        return conv.g1_to_be(b.add(lhs, rhs))

    def g1_scalar_mul(self, input: bytes) -> bytes:
        _check_len(input, ALT_BN128_MULTIPLICATION_INPUT_LEN, "g1_scalar_mul")
        pt = conv.be_to_g1(input[:G1])
        scalar = int.from_bytes(input[G1:], "big")
        return conv.g1_to_be(b.multiply(pt, scalar))

    def pairing(self, input: bytes) -> bytes:
        _check_len(input, ALT_BN128_PAIRING_ELEMENT_LEN, "pairing")
        [(g1, g2)] = _pairing_elements(input)
        # py_ecc takes (G2, G1)
        return gt_to_be(b.pairing(g2, g1))

    def pairing_product_equals_one(self, input: bytes) -> bool:
        if len(input) == 0 or len(input) % ALT_BN128_PAIRING_ELEMENT_LEN != 0:
            raise InvalidCurveDataError(f"pairing: invalid input length {len(input)}")
        # Multiply the Miller loop outputs and final exponentiate once
        acc = b.FQ12.one()
        for g1, g2 in _pairing_elements(input):
            acc = acc * b.pairing(g2, g1, final_exponentiate=False)
        return b.final_exponentiate(acc) == b.FQ12.one()

    def g1_compress(self, input: bytes) -> bytes:
        return conv.g1_compress(input)

    def g1_decompress(self, input: bytes) -> bytes:
        return conv.g1_decompress(input)

    def g2_compress(self, input: bytes) -> bytes:
        return conv.g2_compress(input)

    def g2_decompress(self, input: bytes) -> bytes:
        return conv.g2_decompress(input)


_default = None


def default_host() -> AltBn128:
    global _default
    if _default is None:
        _default = PyEccAltBn128()
        logger.debug("using py_ecc alt_bn128 backend")
    return _default
