"""
Tests for bid commitments and scores.

Tests cover:
1. Determinism of commit and score
2. Seed and bid sensitivity of the score
3. Input coercion errors
"""

import pytest

from blindbid.errors import DecodingError, InputShapeError
from blindbid.crypto import BN254_FR, FIELD_PRIME, DeterministicRandom, default_group
from blindbid.core.bid import (
    Bid,
    commit,
    score,
    commitment_point,
    lottery_point,
    commitment_from_point,
    score_from_point,
    base_generators,
    seed_generators,
)


@pytest.fixture
def one():
    return BN254_FR.one()


@pytest.fixture
def two():
    return BN254_FR.from_int(2)


class TestCommit:
    """Z = Poseidon(C), C = d*G + k*H."""

    def test_deterministic(self, one, two):
        assert commit(one, two) == commit(one, two)

    def test_accepts_bytes(self, one, two):
        assert commit(one.to_bytes(), two.to_bytes()) == commit(one, two)

    def test_binds_both_values(self, one, two):
        assert commit(one, two) != commit(two, one)

    def test_matches_point(self, one, two):
        c = commitment_point(one, two)
        assert commitment_from_point(c) == commit(one, two)

    def test_point_is_pedersen(self, one, two):
        group = default_group()
        g, h = base_generators(group)
        expected = group.add(g, group.mul(h, two))
        assert commitment_point(one, two) == expected

    def test_non_canonical_rejected(self, one):
        with pytest.raises(DecodingError):
            commit(FIELD_PRIME.to_bytes(32, "little"), one)

    def test_wrong_type_rejected(self, one):
        with pytest.raises(InputShapeError):
            commit(5, one)


class TestScore:
    """Q = Poseidon(seed, W), W = d*P_s + k*R_s."""

    def test_deterministic(self, one):
        assert score(one, one, one) == score(one, one, one)

    def test_seed_changes_score(self, one, two):
        assert score(one, one, one) != score(one, one, two)

    def test_bid_changes_score(self, one, two):
        assert score(one, one, one) != score(two, one, one)
        assert score(one, one, one) != score(one, two, one)

    def test_commitment_independent_of_seed(self, one, two):
        """Z has no seed input; only Q moves between rounds."""
        bid = Bid(amount=one, nonce=two)
        assert bid.commitment() == commit(one, two)

    def test_matches_point(self, one, two):
        w = lottery_point(one, two, one)
        assert score_from_point(one, w) == score(one, two, one)

    def test_seed_generators_differ(self, one, two):
        p1, r1 = seed_generators(one)
        p2, _ = seed_generators(two)
        assert p1 != r1
        assert p1 != p2

    def test_bad_seed_rejected(self, one):
        with pytest.raises(DecodingError):
            score(one, one, b"\x00" * 31)


class TestBid:
    """Bid holder."""

    def test_generate(self):
        bid = Bid.generate(1000, rng=DeterministicRandom(b"nonce"))
        assert bid.amount == BN254_FR.from_int(1000)
        assert not bid.nonce.is_zero()

    def test_generate_reproducible(self):
        a = Bid.generate(7, rng=DeterministicRandom(b"n"))
        b = Bid.generate(7, rng=DeterministicRandom(b"n"))
        assert a == b

    def test_generate_out_of_range(self):
        with pytest.raises(InputShapeError):
            Bid.generate(-1)
        with pytest.raises(InputShapeError):
            Bid.generate(FIELD_PRIME)

    def test_repr_hides_secrets(self):
        bid = Bid.generate(123456789)
        assert bid.amount.hex() not in repr(bid)
        assert bid.nonce.hex() not in repr(bid)

    def test_score_method(self, one):
        bid = Bid.generate(5, rng=DeterministicRandom(b"s"))
        assert bid.score(one) == score(bid.amount, bid.nonce, one)
