"""
Tests for input validation helpers.
"""

import pytest

from blindbid.utils.validation import (
    validate_bytes,
    validate_scalar_bytes,
    validate_proof_bytes,
    validate_array,
    validate_hex_string,
    validate_prove_request,
    validate_verify_request,
    MAX_PROOF_SIZE,
)

HEX32 = "01" + "00" * 31


class TestBasicValidators:

    def test_bytes(self):
        assert validate_bytes(b"abc", "x") == (True, "")
        assert not validate_bytes("abc", "x")[0]
        assert not validate_bytes(b"abc", "x", expected_length=4)[0]
        assert not validate_bytes(b"abc", "x", max_length=2)[0]

    def test_scalar_bytes(self):
        assert validate_scalar_bytes(b"\x00" * 32)[0]
        assert not validate_scalar_bytes(b"\x00" * 31)[0]

    def test_proof_bytes(self):
        assert validate_proof_bytes(b"\x00" * MAX_PROOF_SIZE)[0]
        assert not validate_proof_bytes(b"\x00" * (MAX_PROOF_SIZE + 1))[0]

    def test_array(self):
        assert validate_array([1], "xs")[0]
        assert validate_array((), "xs")[0]
        assert not validate_array([], "xs", allow_empty=False)[0]
        assert not validate_array({1}, "xs")[0]
        assert not validate_array([1, 2, 3], "xs", max_length=2)[0]

    @pytest.mark.parametrize("value,ok", [
        ("0x" + HEX32, True),
        (HEX32, True),
        ("abc", False),
        ("zz", False),
        (123, False),
    ])
    def test_hex_string(self, value, ok):
        assert validate_hex_string(value, "v")[0] is ok

    def test_hex_expected_bytes(self):
        assert validate_hex_string(HEX32, "v", 32)[0]
        valid, err = validate_hex_string("00", "v", 32)
        assert not valid
        assert "32 bytes" in err


class TestRequestValidators:

    def test_prove_request(self):
        req = {"d": HEX32, "k": HEX32, "seed": HEX32, "pub_list": [HEX32]}
        assert validate_prove_request(req) == (True, "")

    def test_prove_request_missing(self):
        valid, err = validate_prove_request({"d": HEX32, "k": HEX32, "pub_list": []})
        assert not valid
        assert "seed" in err

    def test_prove_request_bad_item(self):
        req = {"d": HEX32, "k": HEX32, "seed": HEX32, "pub_list": ["00"]}
        valid, err = validate_prove_request(req)
        assert not valid
        assert "pub_list[0]" in err

    def test_prove_request_not_dict(self):
        assert not validate_prove_request([])[0]

    def test_verify_request(self):
        req = {"proof": "00" * 230, "seed": HEX32, "score": HEX32, "commitment": HEX32, "pub_list": [HEX32]}
        assert validate_verify_request(req)[0]

    def test_verify_request_missing(self):
        valid, err = validate_verify_request({"proof": "00"})
        assert not valid
        assert "Missing" in err
