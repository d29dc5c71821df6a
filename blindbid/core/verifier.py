"""
Blind Bid Verifier - checks a published score and commitment.

Verification never sees (d, k). It accepts iff:
1. seed, Q, Z decode as canonical scalars and the proof parses
2. Z == Poseidon(C) and Q == Poseidon(seed, W)
3. Z is a member of the public list (unless membership is disabled or
   the list is empty under the single-bidder variant)
4. The recomputed nonce commitments
       A' = s_d*G   + s_k*H   - c*C
       B' = s_d*P_s + s_k*R_s - c*W
   reproduce the challenge c over the exact (seed, Q, Z, list)

Malformed bytes are a plain rejection, indistinguishable from a false
proof. Only structurally invalid calls (an empty or oversized list) raise.
"""

from typing import Optional, Sequence, Union

from blindbid.errors import DecodingError
from blindbid.crypto.field import ScalarLike
from blindbid.crypto.group import Group, default_group
from blindbid.core.bid import (
    base_generators,
    seed_generators,
    commitment_from_point,
    score_from_point,
)
from blindbid.core.config import BlindBidConfig, config as default_config
from blindbid.core.proof import Proof
from blindbid.core.prover import coerce_pub_list, membership_holds
from blindbid.core.publist import PublicBidList
from blindbid.core.transcript import compute_challenge
from blindbid.utils.logger import get_logger
from blindbid.utils.validation import validate_proof_bytes

logger = get_logger("verifier")


class BlindBidVerifier:
    """
    Verifies blind bid proofs.

    Holds no mutable state and uses no randomness.
    """

    def __init__(
        self,
        group: Optional[Group] = None,
        config: Optional[BlindBidConfig] = None,
    ):
        self.group = group or default_group()
        self.config = config or default_config

    def verify(
        self,
        proof: bytes,
        seed_bytes: bytes,
        pub_list: Union[Sequence[ScalarLike], PublicBidList],
        q_bytes: bytes,
        z_bytes: bytes,
    ) -> bool:
        """
        Verify a proof against public inputs.

        Args:
            proof: Serialized proof
            seed_bytes: 32-byte round seed
            pub_list: Public list the proof was made against
            q_bytes: 32-byte claimed score
            z_bytes: 32-byte claimed commitment

        Returns:
            True if the proof establishes the claim

        Raises:
            InputShapeError: Structurally invalid public list
        """
        group = self.group
        scalar_field = group.scalar_field

        try:
            bid_list = coerce_pub_list(pub_list, self.config, group)
        except DecodingError as e:
            logger.debug(f"Rejected: {e}")
            return False

        valid, err = validate_proof_bytes(proof)
        if not valid:
            logger.debug(f"Rejected: {err}")
            return False

        try:
            seed = scalar_field.coerce(seed_bytes, "seed")
            q = scalar_field.coerce(q_bytes, "score")
            z = scalar_field.coerce(z_bytes, "commitment")
            parsed = Proof.from_bytes(proof, group)
        except DecodingError as e:
            logger.debug(f"Rejected: {e}")
            return False

        if not membership_holds(z, bid_list, self.config):
            logger.debug("Rejected: commitment not in pub_list")
            return False

        c_point = parsed.commitment_point
        w_point = parsed.lottery_point

        if commitment_from_point(c_point, group) != z:
            logger.debug("Rejected: commitment does not match proof")
            return False

        if score_from_point(seed, w_point, group) != q:
            logger.debug("Rejected: score does not match proof")
            return False

        g, h = base_generators(group)
        p, r = seed_generators(seed, group)
        c = parsed.challenge
        neg_c = -c

        a_point = group.lincomb([(parsed.response_d, g), (parsed.response_k, h), (neg_c, c_point)])
        b_point = group.lincomb([(parsed.response_d, p), (parsed.response_k, r), (neg_c, w_point)])

        expected = compute_challenge(
            seed, q, z, bid_list,
            c_point, w_point, a_point, b_point,
            suite=parsed.suite, group=group,
        )

        if expected != c:
            logger.debug("Rejected: challenge mismatch")
            return False

        logger.debug(f"Proof verified: list_size={len(bid_list)}")
        return True


def verify(
    proof: bytes,
    seed_bytes: bytes,
    pub_list: Union[Sequence[ScalarLike], PublicBidList],
    q_bytes: bytes,
    z_bytes: bytes,
    config: Optional[BlindBidConfig] = None,
) -> bool:
    """Verify with the default group. See ``BlindBidVerifier.verify``."""
    return BlindBidVerifier(config=config).verify(proof, seed_bytes, pub_list, q_bytes, z_bytes)


__all__ = ["BlindBidVerifier", "verify"]
