"""
Tests for proof verification.

Tests cover:
1. Honest proofs verify
2. Mismatched public inputs are rejected
3. Malformed inputs return False rather than raising
4. Structural errors still raise
"""

import pytest

from blindbid.errors import InputShapeError
from blindbid.crypto import BN254_FR, FIELD_PRIME, DeterministicRandom
from blindbid.core.bid import commit
from blindbid.core.config import BlindBidConfig
from blindbid.core.publist import PublicBidList
from blindbid.core.prover import prove
from blindbid.core.verifier import BlindBidVerifier, verify


@pytest.fixture(scope="module")
def round_data():
    """One honest proof over a three-item list."""
    d = BN254_FR.from_int(500)
    k = BN254_FR.from_int(77777)
    seed = BN254_FR.from_int(2024)
    z = commit(d, k)
    pub_list = [BN254_FR.from_int(11), z, BN254_FR.from_int(13)]
    output = prove(d, k, seed, pub_list, rng=DeterministicRandom(b"verifier"))
    return {
        "proof": output.proof,
        "seed": seed.to_bytes(),
        "pub_list": output.pub_list,
        "q": output.score.to_bytes(),
        "z": output.commitment.to_bytes(),
    }


def run_verify(data, **overrides):
    args = dict(data)
    args.update(overrides)
    return verify(args["proof"], args["seed"], args["pub_list"], args["q"], args["z"])


class TestAccept:
    """Honest proofs."""

    def test_valid(self, round_data):
        assert run_verify(round_data)

    def test_accepts_bytes_list(self, round_data):
        encoded = [item.to_bytes() for item in round_data["pub_list"]]
        assert run_verify(round_data, pub_list=encoded)

    def test_accepts_public_bid_list(self, round_data):
        lst = PublicBidList.from_scalars(round_data["pub_list"])
        assert run_verify(round_data, pub_list=lst)

    def test_deterministic(self, round_data):
        assert run_verify(round_data) == run_verify(round_data)

    def test_all_ones(self):
        one = BN254_FR.one()
        output = prove(one, one, one, [commit(one, one)])
        assert verify(output.proof, one.to_bytes(), output.pub_list,
                      output.score.to_bytes(), output.commitment.to_bytes())

    def test_membership_variant(self, round_data):
        verifier = BlindBidVerifier(config=BlindBidConfig(require_membership=True))
        d = round_data
        assert verifier.verify(d["proof"], d["seed"], d["pub_list"], d["q"], d["z"])


class TestReject:
    """Mismatched public inputs."""

    def test_wrong_seed(self, round_data):
        assert not run_verify(round_data, seed=BN254_FR.from_int(2025).to_bytes())

    def test_wrong_score(self, round_data):
        assert not run_verify(round_data, q=BN254_FR.from_int(1).to_bytes())

    def test_wrong_commitment(self, round_data):
        assert not run_verify(round_data, z=BN254_FR.from_int(11).to_bytes())

    def test_swapped_score_and_commitment(self, round_data):
        assert not run_verify(round_data, q=round_data["z"], z=round_data["q"])

    def test_reordered_list(self, round_data):
        items = list(round_data["pub_list"])
        assert not run_verify(round_data, pub_list=[items[1], items[0], items[2]])

    def test_substituted_list(self, round_data):
        items = list(round_data["pub_list"])
        items[0] = BN254_FR.from_int(12)
        assert not run_verify(round_data, pub_list=items)

    def test_truncated_list(self, round_data):
        assert not run_verify(round_data, pub_list=list(round_data["pub_list"])[:2])

    def test_extended_list(self, round_data):
        assert not run_verify(round_data, pub_list=list(round_data["pub_list"]) + [BN254_FR.one()])

    def test_unregistered_bid(self):
        """A bid whose commitment was never published in the list is rejected."""
        d, k, seed = (BN254_FR.from_int(v) for v in (5, 9, 3))
        others = [BN254_FR.from_int(v) for v in (21, 22, 23, 24)]
        lenient = BlindBidConfig(require_membership=False)
        output = prove(d, k, seed, others, config=lenient)
        args = (output.proof, seed.to_bytes(), others,
                output.score.to_bytes(), output.commitment.to_bytes())

        assert not verify(*args)
        assert verify(*args, config=lenient)

    def test_membership_missing(self, round_data):
        """The commitment is required to appear when membership is on."""
        verifier = BlindBidVerifier(config=BlindBidConfig(require_membership=True))
        d = round_data
        others = [item for item in d["pub_list"] if item.to_bytes() != d["z"]]
        assert not verifier.verify(d["proof"], d["seed"], others, d["q"], d["z"])


class TestMalformed:
    """Malformed bytes are a rejection, not an exception."""

    def test_empty_proof(self, round_data):
        assert not run_verify(round_data, proof=b"")

    def test_oversized_proof(self, round_data):
        assert not run_verify(round_data, proof=b"\x00" * 10_000)

    def test_proof_not_bytes(self, round_data):
        assert not run_verify(round_data, proof="deadbeef")

    def test_non_canonical_seed(self, round_data):
        assert not run_verify(round_data, seed=FIELD_PRIME.to_bytes(32, "little"))

    def test_short_score(self, round_data):
        assert not run_verify(round_data, q=round_data["q"][:31])

    def test_non_canonical_list_item(self, round_data):
        items = [item.to_bytes() for item in round_data["pub_list"]]
        items[2] = b"\xff" * 32
        assert not run_verify(round_data, pub_list=items)


class TestStructuralErrors:
    """Invalid calls raise InputShapeError."""

    def test_empty_list(self, round_data):
        with pytest.raises(InputShapeError):
            run_verify(round_data, pub_list=[])

    def test_list_not_a_sequence(self, round_data):
        with pytest.raises(InputShapeError):
            run_verify(round_data, pub_list=None)

    def test_list_too_long(self, round_data):
        verifier = BlindBidVerifier(config=BlindBidConfig(max_list_size=2))
        d = round_data
        with pytest.raises(InputShapeError):
            verifier.verify(d["proof"], d["seed"], d["pub_list"], d["q"], d["z"])


class TestSingleBidder:
    """Empty list under ``allow_empty_list``."""

    def test_empty_list_roundtrip(self):
        cfg = BlindBidConfig(allow_empty_list=True)
        d, k, seed = (BN254_FR.from_int(v) for v in (8, 13, 21))
        output = prove(d, k, seed, [], config=cfg)
        assert verify(output.proof, seed.to_bytes(), [], output.score.to_bytes(),
                      output.commitment.to_bytes(), config=cfg)

    def test_empty_list_proof_bound_to_empty_list(self):
        cfg = BlindBidConfig(allow_empty_list=True)
        d, k, seed = (BN254_FR.from_int(v) for v in (8, 13, 21))
        output = prove(d, k, seed, [], config=cfg)
        assert not verify(output.proof, seed.to_bytes(), [output.commitment],
                          output.score.to_bytes(), output.commitment.to_bytes(), config=cfg)

    def test_empty_list_rejected_without_variant(self):
        cfg = BlindBidConfig(allow_empty_list=True)
        d, k, seed = (BN254_FR.from_int(v) for v in (8, 13, 21))
        output = prove(d, k, seed, [], config=cfg)
        with pytest.raises(InputShapeError):
            verify(output.proof, seed.to_bytes(), [], output.score.to_bytes(), output.commitment.to_bytes())
