"""
Scalar field arithmetic.

The protocol only needs a handful of operations from its scalar field:
add, multiply, invert, canonical encode/decode and random sampling.
``ScalarField`` captures that capability as an interface so the prover and
verifier can be retargeted to another prime-order group without touching
their logic. ``PrimeField`` is the one concrete implementation: integers
modulo a prime.

Encoding:
    Scalars are encoded as exactly 32 bytes, little-endian. Decoding rejects
    any other length and any value >= the field order, so every accepted
    byte string is the unique encoding of its value.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union

from blindbid.errors import DecodingError
from blindbid.crypto.poseidon import FIELD_PRIME

SCALAR_SIZE = 32

ScalarLike = Union["Scalar", bytes, bytearray, memoryview]


# =============================================================================
# Scalar
# =============================================================================


@dataclass(frozen=True)
class Scalar:
    """
    An element of a prime field.

    Immutable. Arithmetic operators only combine scalars of the same field.

    Attributes:
        value: Canonical integer representative in [0, order)
        order: Field order
    """
    value: int
    order: int = FIELD_PRIME

    def __post_init__(self):
        if not (0 <= self.value < self.order):
            raise DecodingError("Scalar value out of field range")

    def _check(self, other: "Scalar") -> None:
        if not isinstance(other, Scalar) or other.order != self.order:
            raise TypeError("Scalars must belong to the same field")

    def __add__(self, other: "Scalar") -> "Scalar":
        self._check(other)
        return Scalar((self.value + other.value) % self.order, self.order)

    def __sub__(self, other: "Scalar") -> "Scalar":
        self._check(other)
        return Scalar((self.value - other.value) % self.order, self.order)

    def __mul__(self, other: "Scalar") -> "Scalar":
        self._check(other)
        return Scalar((self.value * other.value) % self.order, self.order)

    def __neg__(self) -> "Scalar":
        return Scalar(-self.value % self.order, self.order)

    def is_zero(self) -> bool:
        return self.value == 0

    def inverse(self) -> "Scalar":
        """Multiplicative inverse (Fermat). Zero has none."""
        if self.value == 0:
            raise ZeroDivisionError("Zero has no inverse")
        return Scalar(pow(self.value, self.order - 2, self.order), self.order)

    def to_bytes(self) -> bytes:
        """Canonical 32-byte little-endian encoding."""
        return self.value.to_bytes(SCALAR_SIZE, byteorder="little")

    def hex(self) -> str:
        return self.to_bytes().hex()

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"Scalar(0x{self.to_bytes()[::-1].hex()})"


# =============================================================================
# Field Interface
# =============================================================================


class ScalarField(ABC):
    """
    Capability interface for scalar arithmetic used by the protocol.

    The prover, verifier and group backends only call the methods declared
    here, so any implementation can stand in for ``PrimeField``.
    """

    order: int

    @abstractmethod
    def from_int(self, value: int) -> Scalar:
        """Reduce an integer into the field."""

    @abstractmethod
    def add(self, a: Scalar, b: Scalar) -> Scalar:
        ...

    @abstractmethod
    def sub(self, a: Scalar, b: Scalar) -> Scalar:
        ...

    @abstractmethod
    def neg(self, a: Scalar) -> Scalar:
        ...

    @abstractmethod
    def mul(self, a: Scalar, b: Scalar) -> Scalar:
        ...

    @abstractmethod
    def inv(self, a: Scalar) -> Scalar:
        ...

    @abstractmethod
    def contains(self, a) -> bool:
        """True if ``a`` is a Scalar of this field."""

    @abstractmethod
    def encode(self, a: Scalar) -> bytes:
        ...

    @abstractmethod
    def decode(self, data: bytes) -> Scalar:
        ...

    @abstractmethod
    def coerce(self, value: ScalarLike, name: str = "scalar") -> Scalar:
        """Accept a Scalar of this field or its canonical encoding."""

    @abstractmethod
    def random(self, rng) -> Scalar:
        """Sample a uniformly random nonzero scalar from ``rng``."""


class PrimeField(ScalarField):
    """
    Integers modulo a prime ``order``.

    The order must fit in 32 bytes so that every element has a fixed-width
    encoding.
    """

    def __init__(self, order: int = FIELD_PRIME):
        if order < 3 or order.bit_length() > SCALAR_SIZE * 8:
            raise ValueError("Field order must be an odd prime of at most 256 bits")
        self.order = order

    def __eq__(self, other) -> bool:
        return isinstance(other, PrimeField) and other.order == self.order

    def __hash__(self) -> int:
        return hash(self.order)

    def __repr__(self) -> str:
        return f"PrimeField(order=0x{self.order:x})"

    def zero(self) -> Scalar:
        return Scalar(0, self.order)

    def one(self) -> Scalar:
        return Scalar(1, self.order)

    def from_int(self, value: int) -> Scalar:
        return Scalar(value % self.order, self.order)

    def add(self, a: Scalar, b: Scalar) -> Scalar:
        return a + b

    def sub(self, a: Scalar, b: Scalar) -> Scalar:
        return a - b

    def neg(self, a: Scalar) -> Scalar:
        return -a

    def mul(self, a: Scalar, b: Scalar) -> Scalar:
        return a * b

    def inv(self, a: Scalar) -> Scalar:
        return a.inverse()

    def contains(self, a) -> bool:
        return isinstance(a, Scalar) and a.order == self.order

    def encode(self, a: Scalar) -> bytes:
        if not self.contains(a):
            raise DecodingError("Scalar does not belong to this field")
        return a.to_bytes()

    def decode(self, data: bytes) -> Scalar:
        """
        Decode a canonical 32-byte little-endian scalar.

        Raises:
            DecodingError: Wrong type, wrong length, or value >= order
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise DecodingError(f"Scalar encoding must be bytes, got {type(data).__name__}")

        data = bytes(data)
        if len(data) != SCALAR_SIZE:
            raise DecodingError(f"Scalar encoding must be {SCALAR_SIZE} bytes, got {len(data)}")

        value = int.from_bytes(data, byteorder="little")
        if value >= self.order:
            raise DecodingError("Non-canonical scalar encoding (value >= field order)")

        return Scalar(value, self.order)

    def coerce(self, value: ScalarLike, name: str = "scalar") -> Scalar:
        """
        Accept a Scalar of this field or its canonical encoding.

        Raises:
            DecodingError: Bytes are not canonical, or the scalar belongs to
                another field
        """
        if isinstance(value, Scalar):
            if value.order != self.order:
                raise DecodingError(f"{name} belongs to a different field")
            return value
        try:
            return self.decode(value)
        except DecodingError as e:
            raise DecodingError(f"{name}: {e}") from e

    def random(self, rng) -> Scalar:
        return Scalar(1 + rng.randbelow(self.order - 1), self.order)


# Default field: BN254 (alt_bn128) scalar field
BN254_FR = PrimeField(FIELD_PRIME)


def encode_scalar(value: Scalar) -> bytes:
    """Encode a BN254 scalar to 32 bytes."""
    return BN254_FR.encode(value)


def decode_scalar(data: bytes) -> Scalar:
    """Decode a canonical 32-byte BN254 scalar."""
    return BN254_FR.decode(data)


__all__ = [
    "SCALAR_SIZE",
    "Scalar",
    "ScalarLike",
    "ScalarField",
    "PrimeField",
    "BN254_FR",
    "encode_scalar",
    "decode_scalar",
]
