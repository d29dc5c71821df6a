"""
Poseidon Hash over the BN254 scalar field.

Poseidon is an arithmetic-friendly sponge: inputs and outputs are field
elements of Fr, the same field our bid scalars live in. That makes it the
natural hash-to-scalar for commitments, scores and Fiat-Shamir challenges,
since no modular reduction (and no reduction bias) is needed on the output.

References:
- Poseidon paper: https://eprint.iacr.org/2019/458

Parameters (BN254 / alt_bn128):
- Field: 21888242871839275222246405745257275088548364400416034343698204186575808495617
- t=3 (2 inputs + 1 capacity)
- rounds_f=8 (full rounds)
- rounds_p=57 (partial rounds)
- alpha=5 (S-box exponent)
"""

import hashlib
from functools import lru_cache
from typing import List, Sequence, Tuple

# BN254 scalar field prime (order of the G1 group)
FIELD_PRIME = 21888242871839275222246405745257275088548364400416034343698204186575808495617

# Sponge width and round counts
WIDTH = 3
ROUNDS_F = 8
ROUNDS_P = 57

# Bytes per absorbed chunk (31 bytes always fit below FIELD_PRIME)
CHUNK_SIZE = 31

# Domain separators
DOMAIN_BID_COMMIT = 0x11
DOMAIN_SCORE = 0x12
DOMAIN_CHALLENGE = 0x13
DOMAIN_MERKLE_LEAF = 0x20
DOMAIN_MERKLE_NODE = 0x21


# =============================================================================
# Constants
# =============================================================================


def _generate_round_constants(t: int, rounds_f: int, rounds_p: int, seed: bytes = b"poseidon") -> List[int]:
    """
    Generate round constants from a SHAKE256 stream.

    One 32-byte chunk per constant, reduced modulo the field prime.
    """
    count = (rounds_f + rounds_p) * t
    digest = hashlib.shake_256(seed).digest(count * 32)
    return [
        int.from_bytes(digest[i * 32:(i + 1) * 32], byteorder="big") % FIELD_PRIME
        for i in range(count)
    ]


def _generate_mds_matrix(t: int) -> List[List[int]]:
    """
    Cauchy MDS matrix: M[i][j] = 1 / (x_i + y_j) with x_i = i+1, y_j = t+j+1.
    """
    matrix = []
    for i in range(t):
        row = []
        for j in range(t):
            denom = (i + 1) + (t + j + 1)
            row.append(pow(denom, FIELD_PRIME - 2, FIELD_PRIME))
        matrix.append(row)
    return matrix


@lru_cache(maxsize=None)
def _constants() -> Tuple[Tuple[int, ...], Tuple[Tuple[int, ...], ...]]:
    """Round constants and MDS matrix, computed once per process."""
    constants = _generate_round_constants(WIDTH, ROUNDS_F, ROUNDS_P)
    matrix = _generate_mds_matrix(WIDTH)
    return tuple(constants), tuple(tuple(row) for row in matrix)


# =============================================================================
# Permutation
# =============================================================================


def _mix(state: List[int], matrix: Sequence[Sequence[int]]) -> List[int]:
    """Multiply state by the MDS matrix."""
    return [
        sum(m * s for m, s in zip(row, state)) % FIELD_PRIME
        for row in matrix
    ]


def _permute(state: List[int]) -> List[int]:
    """Run the full Poseidon permutation over a width-3 state."""
    constants, matrix = _constants()
    half_f = ROUNDS_F // 2

    for round_idx in range(ROUNDS_F + ROUNDS_P):
        offset = round_idx * WIDTH
        state = [(state[i] + constants[offset + i]) % FIELD_PRIME for i in range(WIDTH)]

        if round_idx < half_f or round_idx >= half_f + ROUNDS_P:
            state = [pow(x, 5, FIELD_PRIME) for x in state]
        else:
            state[0] = pow(state[0], 5, FIELD_PRIME)

        state = _mix(state, matrix)

    return state


def poseidon_hash(inputs: Sequence[int], domain_sep: int = 0) -> int:
    """
    Compute Poseidon hash of up to two field elements.

    Args:
        inputs: Field elements (integers < FIELD_PRIME)
        domain_sep: Domain separator, placed in the capacity element

    Returns:
        Hash as a field element

    Raises:
        ValueError: If inputs are out of range or there are too many
    """
    if len(inputs) > WIDTH - 1:
        raise ValueError(f"Poseidon supports at most {WIDTH - 1} inputs, got {len(inputs)}")

    for i, val in enumerate(inputs):
        if not (0 <= val < FIELD_PRIME):
            raise ValueError(f"Input {i} out of field range")

    padded = list(inputs) + [0] * (WIDTH - 1 - len(inputs))
    state = [domain_sep % FIELD_PRIME] + padded

    return _permute(state)[1]


def poseidon2(a: int, b: int, domain_sep: int = 0) -> int:
    """Hash two field elements."""
    return poseidon_hash([a, b], domain_sep)


def poseidon1(a: int, domain_sep: int = 0) -> int:
    """Hash one field element."""
    return poseidon_hash([a], domain_sep)


def poseidon_bytes(data: bytes, domain_sep: int = 0) -> int:
    """
    Hash arbitrary bytes.

    Data is split into 31-byte big-endian chunks and absorbed as a chain
    h = poseidon2(h, chunk), starting from the domain separator. The total
    length is absorbed last so inputs that differ only in trailing zero
    bytes do not collide.
    """
    h = domain_sep % FIELD_PRIME
    for i in range(0, len(data), CHUNK_SIZE):
        chunk = int.from_bytes(data[i:i + CHUNK_SIZE], byteorder="big")
        h = poseidon2(h, chunk)
    return poseidon2(h, len(data))


__all__ = [
    "FIELD_PRIME",
    "DOMAIN_BID_COMMIT",
    "DOMAIN_SCORE",
    "DOMAIN_CHALLENGE",
    "DOMAIN_MERKLE_LEAF",
    "DOMAIN_MERKLE_NODE",
    "poseidon_hash",
    "poseidon1",
    "poseidon2",
    "poseidon_bytes",
]
