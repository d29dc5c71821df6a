"""
Bid commitment and score derivation.

A bid is a secret pair (d, k): the amount and a random nonce. Two public
values are derived from it:

    Commitment   C = d*G + k*H                    (Pedersen)
                 Z = Poseidon(DOMAIN_BID_COMMIT, C)

    Score        W = d*P_s + k*R_s                (P_s, R_s derived from seed)
                 Q = Poseidon(DOMAIN_SCORE, seed, W)

Both are pure and deterministic. Z does not depend on the seed, so a bid
commits once and is scored every round. Q changes unpredictably with every
seed and cannot be computed without both d and k.

The points C and W are what the proof opens; the scalars Z and Q are what
gets published and compared.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from blindbid.errors import InputShapeError
from blindbid.crypto.field import Scalar, ScalarLike, ScalarField
from blindbid.crypto.group import Group, Point, default_group
from blindbid.crypto.hashing import hash_to_scalar_int
from blindbid.crypto.poseidon import DOMAIN_BID_COMMIT, DOMAIN_SCORE
from blindbid.crypto.rng import RandomSource, default_rng

# Hash-to-curve tags
GENERATOR_H_TAG = b"generator/H"
SEED_P_TAG = b"seed/P"
SEED_R_TAG = b"seed/R"


# =============================================================================
# Input Coercion
# =============================================================================


def as_scalar(value: ScalarLike, name: str, scalar_field: ScalarField) -> Scalar:
    """
    Accept a Scalar or its canonical 32-byte encoding.

    Raises:
        InputShapeError: Value is neither a Scalar nor bytes
        DecodingError: Bytes are not a canonical scalar of ``scalar_field``
    """
    if not isinstance(value, (Scalar, bytes, bytearray, memoryview)):
        raise InputShapeError(f"{name} must be a Scalar or 32 bytes, got {type(value).__name__}")
    return scalar_field.coerce(value, name)


# =============================================================================
# Generators
# =============================================================================


def base_generators(group: Optional[Group] = None) -> Tuple[Point, Point]:
    """(G, H): the group generator and a hash-derived second generator."""
    group = group or default_group()
    return group.generator(), group.hash_to_point(GENERATOR_H_TAG)


def seed_generators(seed: Scalar, group: Optional[Group] = None) -> Tuple[Point, Point]:
    """(P_s, R_s): per-seed generators with no known discrete log relation."""
    group = group or default_group()
    seed_bytes = group.scalar_field.encode(seed)
    return (
        group.hash_to_point(SEED_P_TAG, seed_bytes),
        group.hash_to_point(SEED_R_TAG, seed_bytes),
    )


# =============================================================================
# Points
# =============================================================================


def commitment_point(d: ScalarLike, k: ScalarLike, group: Optional[Group] = None) -> Point:
    """C = d*G + k*H."""
    group = group or default_group()
    d = as_scalar(d, "d", group.scalar_field)
    k = as_scalar(k, "k", group.scalar_field)
    g, h = base_generators(group)
    return group.lincomb([(d, g), (k, h)])


def lottery_point(d: ScalarLike, k: ScalarLike, seed: ScalarLike, group: Optional[Group] = None) -> Point:
    """W = d*P_s + k*R_s."""
    group = group or default_group()
    d = as_scalar(d, "d", group.scalar_field)
    k = as_scalar(k, "k", group.scalar_field)
    seed = as_scalar(seed, "seed", group.scalar_field)
    p, r = seed_generators(seed, group)
    return group.lincomb([(d, p), (k, r)])


def commitment_from_point(c: Point, group: Optional[Group] = None) -> Scalar:
    """Z = Poseidon(DOMAIN_BID_COMMIT, enc(C))."""
    group = group or default_group()
    scalar_field = group.scalar_field
    value = hash_to_scalar_int(DOMAIN_BID_COMMIT, group.encode_point(c), order=scalar_field.order)
    return scalar_field.from_int(value)


def score_from_point(seed: Scalar, w: Point, group: Optional[Group] = None) -> Scalar:
    """Q = Poseidon(DOMAIN_SCORE, enc(seed) || enc(W))."""
    group = group or default_group()
    scalar_field = group.scalar_field
    value = hash_to_scalar_int(
        DOMAIN_SCORE,
        scalar_field.encode(seed),
        group.encode_point(w),
        order=scalar_field.order,
    )
    return scalar_field.from_int(value)


# =============================================================================
# Public API
# =============================================================================


def commit(d: ScalarLike, k: ScalarLike, group: Optional[Group] = None) -> Scalar:
    """
    Commit to a bid.

    Args:
        d: Secret bid amount
        k: Secret nonce
        group: Group backend (defaults to BN254 G1)

    Returns:
        Public commitment Z
    """
    group = group or default_group()
    return commitment_from_point(commitment_point(d, k, group), group)


def score(d: ScalarLike, k: ScalarLike, seed: ScalarLike, group: Optional[Group] = None) -> Scalar:
    """
    Derive the public score of a bid for a round seed.

    Args:
        d: Secret bid amount
        k: Secret nonce
        seed: Public round seed
        group: Group backend (defaults to BN254 G1)

    Returns:
        Public score Q
    """
    group = group or default_group()
    seed = as_scalar(seed, "seed", group.scalar_field)
    return score_from_point(seed, lottery_point(d, k, seed, group), group)


@dataclass(frozen=True)
class Bid:
    """
    A bidder's secret (amount, nonce) pair.

    Never serialized and never shown in repr.
    """
    amount: Scalar = field(repr=False)
    nonce: Scalar = field(repr=False)

    @classmethod
    def generate(
        cls,
        amount: Union[int, Scalar],
        rng: Optional[RandomSource] = None,
        group: Optional[Group] = None,
    ) -> "Bid":
        """
        Create a bid with a fresh random nonce.

        Args:
            amount: Bid amount (int or Scalar)
            rng: Randomness source for the nonce
            group: Group backend whose scalar field is used
        """
        group = group or default_group()
        scalar_field = group.scalar_field
        if isinstance(amount, int):
            if amount < 0 or amount >= scalar_field.order:
                raise InputShapeError("Bid amount out of field range")
            amount = scalar_field.from_int(amount)
        else:
            amount = as_scalar(amount, "amount", scalar_field)
        nonce = scalar_field.random(rng or default_rng())
        return cls(amount=amount, nonce=nonce)

    def commitment(self, group: Optional[Group] = None) -> Scalar:
        return commit(self.amount, self.nonce, group)

    def score(self, seed: ScalarLike, group: Optional[Group] = None) -> Scalar:
        return score(self.amount, self.nonce, seed, group)


__all__ = [
    "Bid",
    "commit",
    "score",
    "commitment_point",
    "lottery_point",
    "commitment_from_point",
    "score_from_point",
    "base_generators",
    "seed_generators",
    "as_scalar",
]
