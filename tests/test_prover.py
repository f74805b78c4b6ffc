import py_ecc.optimized_bn128 as b
import pytest

from consts import G2_COMPRESSED, G2_GEN_AFFINE_COMPRESSED_BE
from curve import Scalar
from errors import DegreeTooHighError, RootNotFoundError
from prover import (
    gen_commitment,
    gen_commitment_for_items,
    gen_proof_for_quotient_poly_coeffs,
    gen_proof_with_all_roots_and_items_to_prove,
    gen_proof_with_roots,
    proof_to_be,
    proof_to_be_compressed,
    quotient_poly_roots_from_indices,
    roots_to_prove_indices,
)


def test_roots_to_prove_indices(roots):
    assert roots_to_prove_indices(roots, [roots[3], roots[0]]) == {0, 3}
    with pytest.raises(RootNotFoundError):
        roots_to_prove_indices(roots[:2], [roots[4]])


def test_quotient_poly_roots_from_indices(roots):
    assert list(quotient_poly_roots_from_indices(roots, {1, 2, 99})) == [roots[0], roots[3], roots[4]]


def test_proof_is_commitment_of_remaining_set(roots, pwrs_of_tau):
    proof = gen_proof_with_roots(roots[:4], [roots[1], roots[2]], pwrs_of_tau.g2)
    assert b.eq(proof, gen_commitment([roots[0], roots[3]], pwrs_of_tau.g2))


def test_proof_with_items(items, roots, pwrs_of_tau):
    proof = gen_proof_with_all_roots_and_items_to_prove(roots[:3], items[:1], pwrs_of_tau.g2)
    assert b.eq(proof, gen_commitment_for_items(items[1:3], pwrs_of_tau.g2))


def test_proving_every_root_gives_empty_set(roots, pwrs_of_tau):
    proof = gen_proof_with_roots(roots[:2], roots[:2], pwrs_of_tau.g2)
    assert proof_to_be_compressed(proof) == G2_GEN_AFFINE_COMPRESSED_BE


def test_not_enough_g2_powers(pwrs_of_tau):
    with pytest.raises(DegreeTooHighError):
        gen_proof_for_quotient_poly_coeffs([Scalar(1)] * 3, pwrs_of_tau.g2[:2])
    with pytest.raises(DegreeTooHighError):
        gen_commitment([Scalar(i) for i in range(1, 7)], pwrs_of_tau.g2)


def test_encodings(pwrs_of_tau):
    assert len(proof_to_be_compressed(pwrs_of_tau.g2[1])) == G2_COMPRESSED
    assert len(proof_to_be(pwrs_of_tau.g2[1])) == 2 * G2_COMPRESSED
