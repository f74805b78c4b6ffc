import py_ecc.optimized_bn128 as b

# Byte sizes of the big-endian forms the alt_bn128 host expects
FR = 32
FQ = 32
G1 = 64
G2 = 128
G1_COMPRESSED = 32
G2_COMPRESSED = 64

# alt_bn128 host request sizes
ALT_BN128_ADDITION_INPUT_LEN = 2 * G1
ALT_BN128_MULTIPLICATION_INPUT_LEN = G1 + FR
ALT_BN128_PAIRING_ELEMENT_LEN = G1 + G2
ALT_BN128_PAIRING_EQ_CHECK_LEN = 2 * ALT_BN128_PAIRING_ELEMENT_LEN

# Base field modulus q, big-endian. Negating a G1 point is y -> q - y.
Q_BE = b.field_modulus.to_bytes(FQ, "big")

# G1 generator (1, 2) in (x, y) form, big-endian
G1_GEN_AFFINE_UNCOMPRESSED_BE = (1).to_bytes(FQ, "big") + (2).to_bytes(FQ, "big")

_G2_GEN_X = (
    10857046999023057135944570762232829481370756359578518086990519993285655852781,
    11559732032986387107991004021392285783925812861821192530917403151452391805634,
)
_G2_GEN_Y = (
    8495653923123431417604973247489272438418190587263600148770280649306958101930,
    4082367875863433681332203403145435568316851327593401208105741076214120093531,
)

# G2 generator in (x, y) form, big-endian, imaginary limb first:
# x.c1 | x.c0 | y.c1 | y.c0
G2_GEN_AFFINE_UNCOMPRESSED_BE = b"".join(
    c.to_bytes(FQ, "big")
    for c in (_G2_GEN_X[1], _G2_GEN_X[0], _G2_GEN_Y[1], _G2_GEN_Y[0])
)

# y of the G2 generator is the smaller of its two roots, so no flag bits are set
G2_GEN_AFFINE_COMPRESSED_BE = _G2_GEN_X[1].to_bytes(FQ, "big") + _G2_GEN_X[0].to_bytes(FQ, "big")

G1_GEN_AFFINE_COMPRESSED_BE = (1).to_bytes(FQ, "big")
