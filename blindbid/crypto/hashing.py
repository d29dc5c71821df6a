"""
Hash helpers.

SHA-256 is used where the output feeds byte-oriented code (hash-to-curve,
the deterministic test RNG). Poseidon is used wherever the output must be a
scalar: commitments, scores and Fiat-Shamir challenges.
"""

import hashlib

from blindbid.crypto.poseidon import FIELD_PRIME, poseidon_bytes


def sha256(data: bytes) -> bytes:
    """Compute SHA-256 hash."""
    return hashlib.sha256(data).digest()


def hash_to_scalar_int(domain_sep: int, *parts: bytes, order: int = FIELD_PRIME) -> int:
    """
    Hash byte strings to an integer in [0, order).

    Parts are concatenated as-is; callers only pass fixed-width encodings
    so the concatenation is unambiguous. For the BN254 scalar field the
    Poseidon output is already in range and the reduction is a no-op.
    """
    return poseidon_bytes(b"".join(parts), domain_sep) % order


def bytes_to_hex(data: bytes) -> str:
    """Convert bytes to hex string with 0x prefix."""
    return "0x" + data.hex()


def hex_to_bytes(hex_str: str) -> bytes:
    """Convert hex string (with or without 0x prefix) to bytes."""
    if hex_str.startswith("0x") or hex_str.startswith("0X"):
        hex_str = hex_str[2:]
    return bytes.fromhex(hex_str)


__all__ = [
    "sha256",
    "hash_to_scalar_int",
    "bytes_to_hex",
    "hex_to_bytes",
]
