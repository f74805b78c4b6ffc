import py_ecc.optimized_bn128 as b
from py_ecc.fields.field_elements import FQ as Field
from typing import Optional, Union

# Projective points as py_ecc.optimized_bn128 represents them
G1Point = tuple[b.FQ, b.FQ, b.FQ]
G2Point = tuple[b.FQ2, b.FQ2, b.FQ2]
Point = Union[G1Point, G2Point]


class Scalar(Field):
    field_modulus = b.curve_order

    def __hash__(self):
        return hash(self.n)

    def __repr__(self):
        return f"Scalar({self.n})"


def fq_int(c) -> int:
    # optimized FQ carries .n, optimized FQ2/FQ12 coeffs are plain ints
    return c.n if hasattr(c, "n") else int(c)


def fq2_ints(x: b.FQ2) -> tuple[int, int]:
    c0, c1 = x.coeffs
    return fq_int(c0), fq_int(c1)


def is_g2(pt: Point) -> bool:
    return isinstance(pt[0], b.FQ2)


def zero_like(pt: Point) -> Point:
    return b.Z2 if is_g2(pt) else b.Z1


def to_affine(pt: Point) -> Optional[tuple]:
    if b.is_inf(pt):
        return None
    return b.normalize(pt)


def ec_mul(pt: Point, coeff) -> Point:
    return b.multiply(pt, fq_int(coeff) % b.curve_order)


# Computes sum(pt_i * coeff_i). Works for both G1 and G2 points
def ec_lincomb(pairs: list[tuple[Point, object]]) -> Point:
    if len(pairs) == 0:
        raise ValueError("empty linear combination")
    o = zero_like(pairs[0][0])
    for pt, coeff in pairs:
        o = b.add(o, ec_mul(pt, coeff))
    return o


def in_subgroup(pt: Point) -> bool:
    # G1 has cofactor 1, only G2 needs the order check
    if not is_g2(pt):
        return True
    return b.is_inf(b.multiply(pt, b.curve_order))


def is_valid_g1(pt: G1Point) -> bool:
    return b.is_on_curve(pt, b.b)


def is_valid_g2(pt: G2Point) -> bool:
    return b.is_on_curve(pt, b.b2) and in_subgroup(pt)


# q = 3 mod 4, so a square root in Fq is a^((q+1)/4)
def fq_sqrt(a: int) -> Optional[int]:
    q = b.field_modulus
    x = pow(a, (q + 1) // 4, q)
    if x * x % q != a % q:
        return None
    return x


# Algorithm 9 of "Square root computation over even extension fields"
# (Adj, Rodriguez-Henriquez), valid for Fq2 = Fq[i]/(i^2 + 1) with q = 3 mod 4
def fq2_sqrt(a: b.FQ2) -> Optional[b.FQ2]:
    q = b.field_modulus
    minus_one = -b.FQ2.one()
    a1 = a ** ((q - 3) // 4)
    alpha = a1 * a1 * a
    a0 = (alpha ** q) * alpha
    if a0 == minus_one:
        return None
    x0 = a1 * a
    if alpha == minus_one:
        x = b.FQ2([0, 1]) * x0
    else:
        x = ((b.FQ2.one() + alpha) ** ((q - 1) // 2)) * x0
    if x * x != a:
        return None
    return x


# True if y is the lexicographically larger of {y, -y}.
# Fq2 elements compare c1 first, then c0.
def fq_is_larger(y: int) -> bool:
    q = b.field_modulus
    return y > (q - y) % q


def fq2_is_larger(y: b.FQ2) -> bool:
    q = b.field_modulus
    c0, c1 = fq2_ints(y)
    return (c1, c0) > ((q - c1) % q, (q - c0) % q)
