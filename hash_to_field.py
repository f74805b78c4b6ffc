"""
Mapping application-level items to roots in Fr.

The mapping itself is a collaborator of the consume set: any deterministic
hash works, as long as the program and the prover use the same one.
`sha256` mirrors the host's `hashv`.
"""

import hashlib
from dataclasses import dataclass
from functools import partial
from typing import Callable, Protocol

from curve import Scalar
from errors import DeserializationError

HASH_SIZE = 32

Hasher = Callable[[bytes], bytes]


class ToHash(Protocol):
    def to_hash(self) -> bytes:
        ...


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


@dataclass(frozen=True)
class ByteBuf:
    """An item represented by a byte buffer, hashed by hashing the buffer."""

    data: bytes
    hasher: Hasher = sha256

    def to_hash(self) -> bytes:
        return self.hasher(bytes(self.data))


def fr_from_hash(digest: bytes) -> Scalar:
    # Interpret the digest as a little-endian 256-bit number with the 3 high
    # bits zeroed out. 2^253 < r, so the result is always canonical.
    if len(digest) != HASH_SIZE:
        raise DeserializationError(f"hash: expected {HASH_SIZE} bytes, got {len(digest)}")
    masked = digest[:-1] + bytes([digest[-1] & 0b0001_1111])
    return Scalar(int.from_bytes(masked, "little"))


def hash_to_fr(data: bytes, hasher: Hasher = sha256) -> Scalar:
    return fr_from_hash(hasher(data))


def item_to_fr(item) -> Scalar:
    """Root of anything that is ToHash, or of raw bytes hashed with sha256."""
    if isinstance(item, (bytes, bytearray, memoryview)):
        return hash_to_fr(bytes(item))
    return fr_from_hash(item.to_hash())


def _hashlib_digest(name: str, data: bytes) -> bytes:
    return hashlib.new(name, data).digest()


def hasher_by_name(name: str) -> Hasher:
    """A hashlib hasher by name. Only 32-byte digests can be mapped to Fr."""
    if name == "sha256":
        return sha256
    try:
        digest_size = hashlib.new(name).digest_size
    except ValueError:
        raise ValueError(f"unknown hash function {name!r}") from None
    if digest_size != HASH_SIZE:
        raise ValueError(f"{name} digests are {digest_size} bytes, need {HASH_SIZE}")
    return partial(_hashlib_digest, name)
