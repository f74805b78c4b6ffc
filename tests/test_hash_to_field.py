import hashlib

import py_ecc.optimized_bn128 as b
import pytest

from curve import Scalar
from errors import DeserializationError
from hash_to_field import ByteBuf, fr_from_hash, hash_to_fr, hasher_by_name, item_to_fr, sha256


def test_fr_from_hash_is_little_endian():
    assert fr_from_hash(b"\x01" + bytes(31)) == Scalar(1)


def test_fr_from_hash_masks_top_bits():
    res = fr_from_hash(b"\xff" * 32)
    assert res == Scalar(2**253 - 1)
    assert res.n < b.curve_order


def test_fr_from_hash_wrong_length():
    with pytest.raises(DeserializationError):
        fr_from_hash(bytes(31))


def test_byte_buf():
    data = bytes(40)
    assert ByteBuf(data).to_hash() == hashlib.sha256(data).digest()
    assert item_to_fr(ByteBuf(data)) == item_to_fr(data) == hash_to_fr(data)


def test_custom_hasher():
    data = b"member"
    hasher = hasher_by_name("sha3_256")
    assert hasher(data) == hashlib.sha3_256(data).digest()
    assert item_to_fr(ByteBuf(data, hasher)) == hash_to_fr(data, hasher)
    assert hash_to_fr(data, hasher) != hash_to_fr(data)


def test_hasher_by_name():
    assert hasher_by_name("sha256") is sha256
    with pytest.raises(ValueError):
        hasher_by_name("sha512")
    with pytest.raises(ValueError):
        hasher_by_name("not-a-hash")
