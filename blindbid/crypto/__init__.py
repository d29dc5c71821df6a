"""
Cryptographic primitives for blind bids.

This package provides:
- Scalar field arithmetic with canonical 32-byte little-endian encoding
- The BN254 G1 group (py_ecc) with hash-to-curve generators
- Poseidon hashing over the BN254 scalar field
- Injectable randomness sources

Design Notes:
-------------
The field and group are exposed as interfaces (``ScalarField``, ``Group``)
with one concrete backend each. The BN254 scalar field doubles as the
Poseidon field, so every hash-to-scalar lands in the right field without
reduction.
"""

from blindbid.crypto.poseidon import (
    FIELD_PRIME,
    DOMAIN_BID_COMMIT,
    DOMAIN_SCORE,
    DOMAIN_CHALLENGE,
    DOMAIN_MERKLE_LEAF,
    DOMAIN_MERKLE_NODE,
    poseidon_hash,
    poseidon1,
    poseidon2,
    poseidon_bytes,
)
from blindbid.crypto.hashing import (
    sha256,
    hash_to_scalar_int,
    bytes_to_hex,
    hex_to_bytes,
)
from blindbid.crypto.field import (
    SCALAR_SIZE,
    Scalar,
    ScalarField,
    PrimeField,
    BN254_FR,
    encode_scalar,
    decode_scalar,
)
from blindbid.crypto.group import (
    Group,
    BN254Group,
    default_group,
    POINT_SIZE,
)
from blindbid.crypto.rng import (
    RandomSource,
    SecureRandom,
    DeterministicRandom,
    default_rng,
    gen_rand_scalar,
)
