"""
Tests for scalar field arithmetic and encoding.

Tests cover:
1. Arithmetic identities
2. Canonical little-endian encoding
3. Rejection of non-canonical and malformed encodings
"""

import pytest

from blindbid.errors import DecodingError
from blindbid.crypto.field import (
    SCALAR_SIZE,
    Scalar,
    PrimeField,
    ScalarField,
    BN254_FR,
    encode_scalar,
    decode_scalar,
)
from blindbid.crypto.poseidon import FIELD_PRIME


class TestScalarArithmetic:
    """Field operations on Scalar."""

    def test_add_wraps(self):
        a = BN254_FR.from_int(FIELD_PRIME - 1)
        assert (a + BN254_FR.one()).value == 0

    def test_sub_wraps(self):
        assert (BN254_FR.zero() - BN254_FR.one()).value == FIELD_PRIME - 1

    def test_neg(self):
        a = BN254_FR.from_int(12345)
        assert (a + -a).is_zero()

    def test_mul_and_inverse(self):
        a = BN254_FR.from_int(987654321)
        assert a * a.inverse() == BN254_FR.one()
        assert BN254_FR.inv(a) == a.inverse()

    def test_zero_has_no_inverse(self):
        with pytest.raises(ZeroDivisionError):
            BN254_FR.zero().inverse()

    def test_distributive(self):
        a, b, c = (BN254_FR.from_int(v) for v in (3, 5, 7))
        assert a * (b + c) == a * b + a * c

    def test_from_int_reduces(self):
        assert BN254_FR.from_int(FIELD_PRIME + 5).value == 5
        assert BN254_FR.from_int(-1).value == FIELD_PRIME - 1

    def test_out_of_range_scalar_rejected(self):
        with pytest.raises(DecodingError):
            Scalar(FIELD_PRIME)
        with pytest.raises(DecodingError):
            Scalar(-1)

    def test_mixed_fields_rejected(self):
        small = PrimeField(101)
        with pytest.raises(TypeError):
            small.one() + BN254_FR.one()

    def test_int_conversion(self):
        assert int(BN254_FR.from_int(42)) == 42


class TestScalarEncoding:
    """Canonical 32-byte little-endian encoding."""

    def test_one_is_little_endian(self):
        encoded = encode_scalar(BN254_FR.one())
        assert encoded == b"\x01" + b"\x00" * 31

    def test_roundtrip_edges(self):
        for value in (0, 1, 2 ** 64, FIELD_PRIME - 1):
            s = BN254_FR.from_int(value)
            encoded = encode_scalar(s)
            assert len(encoded) == SCALAR_SIZE
            assert decode_scalar(encoded) == s

    def test_order_rejected(self):
        """The order itself is not a canonical encoding of zero."""
        with pytest.raises(DecodingError):
            decode_scalar(FIELD_PRIME.to_bytes(32, byteorder="little"))

    def test_all_ones_rejected(self):
        with pytest.raises(DecodingError):
            decode_scalar(b"\xff" * 32)

    @pytest.mark.parametrize("length", [0, 31, 33, 64])
    def test_wrong_length_rejected(self, length):
        with pytest.raises(DecodingError):
            decode_scalar(b"\x00" * length)

    def test_non_bytes_rejected(self):
        with pytest.raises(DecodingError):
            decode_scalar("00" * 32)

    def test_bytearray_accepted(self):
        assert decode_scalar(bytearray(32)).is_zero()

    def test_coerce_names_field(self):
        with pytest.raises(DecodingError, match="seed"):
            BN254_FR.coerce(b"\x00" * 5, "seed")

    def test_coerce_other_field_rejected(self):
        with pytest.raises(DecodingError):
            BN254_FR.coerce(PrimeField(101).one(), "d")

    def test_encode_other_field_rejected(self):
        with pytest.raises(DecodingError):
            encode_scalar(PrimeField(101).one())


class TestPrimeField:
    """Field construction and sampling."""

    def test_invalid_order(self):
        with pytest.raises(ValueError):
            PrimeField(2)
        with pytest.raises(ValueError):
            PrimeField(1 << 300)

    def test_equality(self):
        assert PrimeField(FIELD_PRIME) == BN254_FR
        assert PrimeField(101) != BN254_FR

    def test_random_is_nonzero(self):
        class ZeroRng:
            def randbelow(self, n):
                return 0

        assert BN254_FR.random(ZeroRng()) == BN254_FR.one()

    def test_repr_hides_nothing_secret(self):
        assert repr(BN254_FR.one()).startswith("Scalar(0x")


class TestScalarFieldInterface:
    """Operations the protocol relies on are part of the interface."""

    def test_required_operations(self):
        required = {"from_int", "add", "sub", "neg", "mul", "inv",
                    "contains", "encode", "decode", "coerce", "random"}
        assert required <= ScalarField.__abstractmethods__

    def test_prime_field_implements_interface(self):
        assert isinstance(BN254_FR, ScalarField)
        assert not PrimeField.__abstractmethods__
