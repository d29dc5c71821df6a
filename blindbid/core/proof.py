"""
Proof - versioned wire format for blind bid proofs.

Wire format (230 bytes):
    magic (4) | version (1) | suite (1) | C (64) | W (64) | c (32) | s_d (32) | s_k (32)

Header fields are big-endian. Points are 64-byte affine encodings; scalars
are canonical 32-byte little-endian. Parsing is strict: exact length,
canonical scalars, on-curve non-identity points. A proof therefore has
exactly one valid encoding, and any modified byte either fails to parse or
changes a value the verifier checks.
"""

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from blindbid.errors import DecodingError
from blindbid.crypto.field import SCALAR_SIZE, Scalar
from blindbid.crypto.group import Group, Point, default_group
from blindbid.crypto.hashing import bytes_to_hex, hex_to_bytes


class ProofSuite(IntEnum):
    """Group and hash combination a proof was made with."""
    BN254_POSEIDON = 1


# Format constants
MAGIC_BYTES = b"BBID"
PROOF_VERSION = 1
HEADER_FORMAT = ">4sBB"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)


def proof_size(group: Optional[Group] = None) -> int:
    """Total encoded size for a group backend."""
    group = group or default_group()
    return HEADER_SIZE + 2 * group.point_size + 3 * SCALAR_SIZE


def proof_header(suite: ProofSuite = ProofSuite.BN254_POSEIDON) -> bytes:
    return struct.pack(HEADER_FORMAT, MAGIC_BYTES, PROOF_VERSION, suite)


@dataclass(frozen=True)
class Proof:
    """
    Non-interactive proof of knowledge of (d, k) opening C and W.

    Attributes:
        commitment_point: C = d*G + k*H
        lottery_point: W = d*P_s + k*R_s
        challenge: Fiat-Shamir challenge c
        response_d: s_d = r_d + c*d
        response_k: s_k = r_k + c*k
        suite: Group/hash suite identifier
    """
    commitment_point: Point
    lottery_point: Point
    challenge: Scalar
    response_d: Scalar
    response_k: Scalar
    suite: ProofSuite = ProofSuite.BN254_POSEIDON

    def to_bytes(self, group: Optional[Group] = None) -> bytes:
        """Serialize to wire format."""
        group = group or default_group()
        scalar_field = group.scalar_field
        return (
            proof_header(self.suite)
            + group.encode_point(self.commitment_point)
            + group.encode_point(self.lottery_point)
            + scalar_field.encode(self.challenge)
            + scalar_field.encode(self.response_d)
            + scalar_field.encode(self.response_k)
        )

    @classmethod
    def from_bytes(cls, data: bytes, group: Optional[Group] = None) -> "Proof":
        """
        Deserialize from wire format.

        Raises:
            DecodingError: Any structural or canonicality violation
        """
        group = group or default_group()
        scalar_field = group.scalar_field

        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise DecodingError(f"Proof must be bytes, got {type(data).__name__}")
        data = bytes(data)

        expected = proof_size(group)
        if len(data) != expected:
            raise DecodingError(f"Proof must be {expected} bytes, got {len(data)}")

        magic, version, suite = struct.unpack(HEADER_FORMAT, data[:HEADER_SIZE])
        if magic != MAGIC_BYTES:
            raise DecodingError(f"Invalid magic bytes: {magic!r}")
        if version != PROOF_VERSION:
            raise DecodingError(f"Unsupported proof version: {version}")
        try:
            suite = ProofSuite(suite)
        except ValueError:
            raise DecodingError(f"Unknown proof suite: {suite}") from None

        offset = HEADER_SIZE
        points = []
        for _ in range(2):
            points.append(group.decode_point(data[offset:offset + group.point_size]))
            offset += group.point_size

        scalars = []
        for _ in range(3):
            scalars.append(scalar_field.decode(data[offset:offset + SCALAR_SIZE]))
            offset += SCALAR_SIZE

        return cls(
            commitment_point=points[0],
            lottery_point=points[1],
            challenge=scalars[0],
            response_d=scalars[1],
            response_k=scalars[2],
            suite=suite,
        )

    def to_dict(self, group: Optional[Group] = None) -> dict:
        """Convert to JSON-serializable dict."""
        group = group or default_group()
        return {
            "version": PROOF_VERSION,
            "suite": int(self.suite),
            "commitment_point": bytes_to_hex(group.encode_point(self.commitment_point)),
            "lottery_point": bytes_to_hex(group.encode_point(self.lottery_point)),
            "challenge": bytes_to_hex(self.challenge.to_bytes()),
            "response_d": bytes_to_hex(self.response_d.to_bytes()),
            "response_k": bytes_to_hex(self.response_k.to_bytes()),
        }

    @classmethod
    def from_dict(cls, data: dict, group: Optional[Group] = None) -> "Proof":
        """Create from dict (same strictness as from_bytes)."""
        group = group or default_group()
        if data.get("version") != PROOF_VERSION:
            raise DecodingError(f"Unsupported proof version: {data.get('version')}")
        try:
            blob = (
                proof_header(ProofSuite(data["suite"]))
                + hex_to_bytes(data["commitment_point"])
                + hex_to_bytes(data["lottery_point"])
                + hex_to_bytes(data["challenge"])
                + hex_to_bytes(data["response_d"])
                + hex_to_bytes(data["response_k"])
            )
        except (KeyError, TypeError, ValueError) as e:
            raise DecodingError(f"Malformed proof dict: {e}") from e
        return cls.from_bytes(blob, group)


__all__ = [
    "Proof",
    "ProofSuite",
    "MAGIC_BYTES",
    "PROOF_VERSION",
    "proof_size",
    "proof_header",
]
