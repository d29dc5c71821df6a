"""
Prime-order group backend.

The proof system needs a cyclic group of prime order whose exponent field is
the scalar field of the bids. ``Group`` is the capability interface;
``BN254Group`` implements it over the BN254 (alt_bn128) G1 curve using
py_ecc. G1 has cofactor 1, so every point on the curve is in the
prime-order group and no subgroup check is needed beyond the curve equation.

Point encoding:
    64 bytes, x || y, each coordinate big-endian in Fq. The point at
    infinity encodes as 64 zero bytes (used only as hash input, never
    accepted by ``decode_point``).

Generators:
    Secondary generators come from try-and-increment hash-to-curve, so
    nobody knows their discrete log relative to G.
"""

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Iterable, Optional, Tuple

from py_ecc import bn128
from py_ecc.fields import bn128_FQ as FQ

from blindbid.errors import DecodingError
from blindbid.crypto.field import BN254_FR, Scalar, ScalarField
from blindbid.crypto.hashing import sha256

# BN254 base field prime
FQ_MODULUS = bn128.field_modulus

# Curve: y^2 = x^3 + 3
CURVE_B = 3

# Bytes per encoded coordinate
COORD_SIZE = 32
POINT_SIZE = 2 * COORD_SIZE

# Maximum hash-to-curve attempts (each succeeds with probability ~1/2)
MAX_H2C_ATTEMPTS = 256

# Domain prefix for hash-to-curve
H2C_PREFIX = b"blindbid/h2c/v1"

Point = Optional[Tuple[FQ, FQ]]


class Group(ABC):
    """Capability interface for a prime-order group."""

    name: str
    scalar_field: ScalarField
    point_size: int

    @abstractmethod
    def generator(self) -> Point:
        ...

    @abstractmethod
    def identity(self) -> Point:
        ...

    @abstractmethod
    def add(self, p: Point, q: Point) -> Point:
        ...

    @abstractmethod
    def neg(self, p: Point) -> Point:
        ...

    @abstractmethod
    def mul(self, p: Point, s: Scalar) -> Point:
        ...

    @abstractmethod
    def is_identity(self, p: Point) -> bool:
        ...

    @abstractmethod
    def encode_point(self, p: Point) -> bytes:
        ...

    @abstractmethod
    def decode_point(self, data: bytes) -> Point:
        ...

    @abstractmethod
    def hash_to_point(self, tag: bytes, data: bytes = b"") -> Point:
        ...

    def lincomb(self, terms: Iterable[Tuple[Scalar, Point]]) -> Point:
        """Sum of s_i * P_i."""
        acc = self.identity()
        for s, p in terms:
            acc = self.add(acc, self.mul(p, s))
        return acc


class BN254Group(Group):
    """BN254 G1 via py_ecc.bn128 (affine coordinates, None is infinity)."""

    name = "bn254-g1"
    point_size = POINT_SIZE

    def __init__(self, scalar_field: Optional[ScalarField] = None):
        self.scalar_field = scalar_field or BN254_FR
        if bn128.curve_order != self.scalar_field.order:
            raise ValueError("Scalar field order does not match the BN254 curve order")

    def generator(self) -> Point:
        return bn128.G1

    def identity(self) -> Point:
        return None

    def add(self, p: Point, q: Point) -> Point:
        return bn128.add(p, q)

    def neg(self, p: Point) -> Point:
        return bn128.neg(p)

    def mul(self, p: Point, s: Scalar) -> Point:
        if not self.scalar_field.contains(s):
            raise TypeError("Scalar does not belong to the group's field")
        return bn128.multiply(p, s.value)

    def is_identity(self, p: Point) -> bool:
        return p is None

    def encode_point(self, p: Point) -> bytes:
        if p is None:
            return bytes(POINT_SIZE)
        x, y = p
        return int(x.n).to_bytes(COORD_SIZE, byteorder="big") + int(y.n).to_bytes(COORD_SIZE, byteorder="big")

    def decode_point(self, data: bytes) -> Point:
        """
        Decode a 64-byte affine point.

        Raises:
            DecodingError: Wrong length, coordinate >= q, off-curve, or
                the point at infinity
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise DecodingError("Point encoding must be bytes")
        data = bytes(data)
        if len(data) != POINT_SIZE:
            raise DecodingError(f"Point encoding must be {POINT_SIZE} bytes, got {len(data)}")

        x = int.from_bytes(data[:COORD_SIZE], byteorder="big")
        y = int.from_bytes(data[COORD_SIZE:], byteorder="big")
        if x >= FQ_MODULUS or y >= FQ_MODULUS:
            raise DecodingError("Non-canonical point coordinate")
        if x == 0 and y == 0:
            raise DecodingError("Point at infinity is not allowed")
        if (y * y - x * x * x - CURVE_B) % FQ_MODULUS != 0:
            raise DecodingError("Point is not on the curve")

        return (FQ(x), FQ(y))

    def hash_to_point(self, tag: bytes, data: bytes = b"") -> Point:
        return _hash_to_g1(bytes(tag), bytes(data))


@lru_cache(maxsize=1024)
def _hash_to_g1(tag: bytes, data: bytes) -> Point:
    """
    Try-and-increment hash-to-curve onto BN254 G1.

    1. x = SHA-256(prefix || len(tag) || tag || data || counter) mod q
    2. Retry with the next counter while x^3 + 3 is a non-residue
    3. y = sqrt(x^3 + 3), normalized to even y

    q = 3 (mod 4), so the square root is a single exponentiation.
    """
    header = H2C_PREFIX + len(tag).to_bytes(2, byteorder="big") + tag + data

    for counter in range(MAX_H2C_ATTEMPTS):
        digest = sha256(header + counter.to_bytes(4, byteorder="big"))
        x = int.from_bytes(digest, byteorder="big") % FQ_MODULUS
        y_sq = (pow(x, 3, FQ_MODULUS) + CURVE_B) % FQ_MODULUS

        if y_sq == 0:
            continue
        # Euler criterion
        if pow(y_sq, (FQ_MODULUS - 1) // 2, FQ_MODULUS) != 1:
            continue

        y = pow(y_sq, (FQ_MODULUS + 1) // 4, FQ_MODULUS)
        if y % 2 != 0:
            y = FQ_MODULUS - y
        return (FQ(x), FQ(y))

    raise RuntimeError(f"hash_to_curve: no point found in {MAX_H2C_ATTEMPTS} attempts")


@lru_cache(maxsize=None)
def default_group() -> BN254Group:
    """Shared BN254 group instance (stateless)."""
    return BN254Group()


__all__ = [
    "Point",
    "Group",
    "BN254Group",
    "default_group",
    "POINT_SIZE",
    "FQ_MODULUS",
]
