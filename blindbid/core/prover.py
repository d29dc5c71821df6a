"""
Blind Bid Prover - proof generation for a bid's score.

Given the secret bid (d, k), the round seed and the round's public list,
the prover publishes:

    Q = score(d, k, seed)        (public, rankable)
    Z = commit(d, k)             (public commitment)
    proof                        (binds Q and Z to one (d, k), seed and list)

The proof is a Schnorr-style proof of knowledge over two bases at once:

    C = d*G   + k*H
    W = d*P_s + k*R_s

    A = r_d*G   + r_k*H          (fresh nonces r_d, r_k)
    B = r_d*P_s + r_k*R_s
    c = Transcript(seed, Q, Z, list, C, W, A, B)
    s_d = r_d + c*d,  s_k = r_k + c*k

Because the same responses must satisfy both equations, the (d, k) inside
C is the (d, k) inside W. Z and Q are then checked as hashes of C and W.
"""

import time
from typing import List, NamedTuple, Optional, Sequence, Union

from blindbid.errors import InputShapeError, ProofConstructionError
from blindbid.crypto.field import Scalar, ScalarLike
from blindbid.crypto.group import Group, default_group
from blindbid.crypto.rng import RandomSource, default_rng
from blindbid.core.bid import (
    as_scalar,
    base_generators,
    seed_generators,
    commitment_from_point,
    score_from_point,
)
from blindbid.core.config import BlindBidConfig, config as default_config
from blindbid.core.proof import Proof, ProofSuite
from blindbid.core.publist import PublicBidList
from blindbid.core.transcript import compute_challenge
from blindbid.utils.logger import get_logger
from blindbid.utils.validation import validate_array

logger = get_logger("prover")


class ProofOutput(NamedTuple):
    """
    Result of ``prove``; unpacks as (proof, Q, Z, pub_list).

    ``pub_list`` holds the same values, in the same order, as the list passed
    in, always decoded to Scalars: items given as 32-byte encodings come back
    as the Scalars they encode. The caller's list is never modified.
    """
    proof: bytes
    score: Scalar
    commitment: Scalar
    pub_list: List[Scalar]


def coerce_pub_list(
    pub_list: Union[Sequence[ScalarLike], PublicBidList],
    cfg: BlindBidConfig,
    group: Group,
) -> PublicBidList:
    """
    Check the shape of a public list and decode its items.

    Raises:
        InputShapeError: Not a list/tuple, empty when not allowed, or too long
        DecodingError: An item is not a canonical scalar
    """
    if isinstance(pub_list, PublicBidList):
        pub_list = list(pub_list.items)

    valid, err = validate_array(
        pub_list,
        "pub_list",
        max_length=cfg.max_list_size,
        allow_empty=cfg.allow_empty_list,
    )
    if not valid:
        raise InputShapeError(err)

    return PublicBidList.from_scalars(pub_list, group.scalar_field)


def membership_holds(commitment: Scalar, bid_list: PublicBidList, cfg: BlindBidConfig) -> bool:
    """
    Direct inclusion rule: Z must appear in the round's public list.

    An empty list is the single-bidder variant (only reachable with
    ``allow_empty_list``) and has no members to check against.
    """
    if not cfg.require_membership or len(bid_list) == 0:
        return True
    return commitment in bid_list


class BlindBidProver:
    """
    Generates blind bid proofs.

    Stateless apart from its configuration; one instance can serve many
    threads.
    """

    def __init__(
        self,
        group: Optional[Group] = None,
        config: Optional[BlindBidConfig] = None,
        rng: Optional[RandomSource] = None,
    ):
        """
        Initialize the prover.

        Args:
            group: Group backend (defaults to BN254 G1)
            config: Protocol configuration
            rng: Randomness for proof nonces (defaults to the OS CSPRNG)
        """
        self.group = group or default_group()
        self.config = config or default_config
        self.rng = rng or default_rng()

    def prove(
        self,
        d: ScalarLike,
        k: ScalarLike,
        seed: ScalarLike,
        pub_list: Union[Sequence[ScalarLike], PublicBidList],
        rng: Optional[RandomSource] = None,
    ) -> ProofOutput:
        """
        Produce a proof, score and commitment for a bid.

        Args:
            d: Secret bid amount
            k: Secret nonce
            seed: Public round seed
            pub_list: Public list of commitments for the round
            rng: Per-call randomness override

        Returns:
            ProofOutput(proof, score, commitment, pub_list)

        Raises:
            DecodingError: An input is not a canonical scalar
            InputShapeError: The call is structurally invalid
            ProofConstructionError: Degenerate bid, or no entropy
        """
        start_time = time.perf_counter()
        group = self.group
        scalar_field = group.scalar_field
        rng = rng or self.rng

        d = as_scalar(d, "d", scalar_field)
        k = as_scalar(k, "k", scalar_field)
        seed = as_scalar(seed, "seed", scalar_field)
        bid_list = coerce_pub_list(pub_list, self.config, group)

        g, h = base_generators(group)
        p, r = seed_generators(seed, group)

        c_point = group.lincomb([(d, g), (k, h)])
        if group.is_identity(c_point):
            raise ProofConstructionError("Degenerate bid: commitment point is the identity")

        w_point = group.lincomb([(d, p), (k, r)])
        if group.is_identity(w_point):
            raise ProofConstructionError("Degenerate bid: lottery point is the identity")

        z = commitment_from_point(c_point, group)
        q = score_from_point(seed, w_point, group)

        if not membership_holds(z, bid_list, self.config):
            raise InputShapeError("Commitment is not a member of pub_list")

        r_d = scalar_field.random(rng)
        r_k = scalar_field.random(rng)
        a_point = group.lincomb([(r_d, g), (r_k, h)])
        b_point = group.lincomb([(r_d, p), (r_k, r)])

        suite = ProofSuite.BN254_POSEIDON
        c = compute_challenge(
            seed, q, z, bid_list,
            c_point, w_point, a_point, b_point,
            suite=suite, group=group,
        )

        proof = Proof(
            commitment_point=c_point,
            lottery_point=w_point,
            challenge=c,
            response_d=r_d + c * d,
            response_k=r_k + c * k,
            suite=suite,
        )

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(f"Proof generated: list_size={len(bid_list)}, time={elapsed_ms:.1f}ms")

        return ProofOutput(
            proof=proof.to_bytes(group),
            score=q,
            commitment=z,
            pub_list=list(bid_list.items),
        )


def prove(
    d: ScalarLike,
    k: ScalarLike,
    seed: ScalarLike,
    pub_list: Union[Sequence[ScalarLike], PublicBidList],
    rng: Optional[RandomSource] = None,
    config: Optional[BlindBidConfig] = None,
) -> ProofOutput:
    """Prove with the default group. See ``BlindBidProver.prove``."""
    return BlindBidProver(config=config, rng=rng).prove(d, k, seed, pub_list)


__all__ = ["BlindBidProver", "ProofOutput", "prove", "coerce_pub_list", "membership_holds"]
