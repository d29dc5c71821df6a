"""
Input Validation - shape checks for external inputs.

Validators return ``(is_valid, error_message)`` tuples. The protocol layer
turns a failed check into the matching exception type.
"""

from typing import Any, Optional, Tuple

from blindbid.crypto.field import SCALAR_SIZE

# =============================================================================
# Constants
# =============================================================================

MAX_PROOF_SIZE = 4096
MAX_LIST_LENGTH = 4096
MAX_HEX_LENGTH = 2 * MAX_PROOF_SIZE + 2


# =============================================================================
# Validation Functions
# =============================================================================


def validate_bytes(
    data: Any,
    name: str,
    expected_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> Tuple[bool, str]:
    """
    Validate bytes input.

    Args:
        data: Data to validate
        name: Field name for error messages
        expected_length: Exact expected length
        max_length: Maximum allowed length

    Returns:
        (is_valid, error_message)
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        return False, f"{name} must be bytes, got {type(data).__name__}"

    if expected_length is not None and len(data) != expected_length:
        return False, f"{name} must be {expected_length} bytes, got {len(data)}"

    if max_length is not None and len(data) > max_length:
        return False, f"{name} exceeds max length {max_length}, got {len(data)}"

    return True, ""


def validate_scalar_bytes(data: Any, name: str = "scalar") -> Tuple[bool, str]:
    """Validate the length of a scalar encoding (range is checked on decode)."""
    return validate_bytes(data, name, expected_length=SCALAR_SIZE)


def validate_proof_bytes(data: Any) -> Tuple[bool, str]:
    """Validate a proof blob before parsing."""
    return validate_bytes(data, "proof", max_length=MAX_PROOF_SIZE)


def validate_array(
    data: Any,
    name: str,
    max_length: int = MAX_LIST_LENGTH,
    allow_empty: bool = True,
) -> Tuple[bool, str]:
    """
    Validate array/list input.

    Args:
        data: Data to validate
        name: Field name for errors
        max_length: Maximum allowed length
        allow_empty: Whether a zero-length list is acceptable

    Returns:
        (is_valid, error_message)
    """
    if not isinstance(data, (list, tuple)):
        return False, f"{name} must be list/tuple, got {type(data).__name__}"

    if not allow_empty and len(data) == 0:
        return False, f"{name} must not be empty"

    if len(data) > max_length:
        return False, f"{name} exceeds max length {max_length}, got {len(data)}"

    return True, ""


def validate_hex_string(value: Any, name: str, expected_bytes: Optional[int] = None) -> Tuple[bool, str]:
    """
    Validate a hex string (with or without 0x prefix).

    Args:
        value: Value to validate
        name: Field name
        expected_bytes: Expected byte length when decoded

    Returns:
        (is_valid, error_message)
    """
    if not isinstance(value, str):
        return False, f"{name} must be str, got {type(value).__name__}"

    if len(value) > MAX_HEX_LENGTH:
        return False, f"{name} exceeds max length {MAX_HEX_LENGTH}"

    hex_str = value[2:] if value.startswith(("0x", "0X")) else value

    if len(hex_str) % 2 != 0:
        return False, f"{name} has odd length, invalid hex"

    try:
        bytes.fromhex(hex_str)
    except ValueError:
        return False, f"{name} contains invalid hex characters"

    if expected_bytes is not None:
        actual_bytes = len(hex_str) // 2
        if actual_bytes != expected_bytes:
            return False, f"{name} must be {expected_bytes} bytes, got {actual_bytes}"

    return True, ""


# =============================================================================
# Composite Validators
# =============================================================================


def validate_prove_request(data: Any) -> Tuple[bool, str]:
    """Validate a JSON prove request: hex scalars d, k, seed and pub_list."""
    if not isinstance(data, dict):
        return False, "Prove request must be dict"

    for field in ("d", "k", "seed"):
        if field not in data:
            return False, f"Missing required field: {field}"
        valid, err = validate_hex_string(data[field], field, SCALAR_SIZE)
        if not valid:
            return False, err

    if "pub_list" not in data:
        return False, "Missing required field: pub_list"
    valid, err = validate_array(data["pub_list"], "pub_list")
    if not valid:
        return False, err

    for i, item in enumerate(data["pub_list"]):
        valid, err = validate_hex_string(item, f"pub_list[{i}]", SCALAR_SIZE)
        if not valid:
            return False, err

    return True, ""


def validate_verify_request(data: Any) -> Tuple[bool, str]:
    """Validate a JSON verify request: proof, seed, score, commitment, pub_list."""
    if not isinstance(data, dict):
        return False, "Verify request must be dict"

    required = ["proof", "seed", "score", "commitment", "pub_list"]
    for field in required:
        if field not in data:
            return False, f"Missing required field: {field}"

    valid, err = validate_hex_string(data["proof"], "proof")
    if not valid:
        return False, err

    for field in ("seed", "score", "commitment"):
        valid, err = validate_hex_string(data[field], field)
        if not valid:
            return False, err

    valid, err = validate_array(data["pub_list"], "pub_list")
    if not valid:
        return False, err

    for i, item in enumerate(data["pub_list"]):
        valid, err = validate_hex_string(item, f"pub_list[{i}]")
        if not valid:
            return False, err

    return True, ""


__all__ = [
    "validate_bytes",
    "validate_scalar_bytes",
    "validate_proof_bytes",
    "validate_array",
    "validate_hex_string",
    "validate_prove_request",
    "validate_verify_request",
    "MAX_PROOF_SIZE",
    "MAX_LIST_LENGTH",
]
