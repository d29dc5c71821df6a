"""
Fiat-Shamir transcript for blind bid proofs.

The challenge absorbs every public input the verifier is asked to accept,
in a fixed order and fixed widths:

    header | seed | Q | Z | len(list) | root(list) | C | W | A | B

Binding the header stops cross-version replay; binding seed, Q, Z and the
list root and length ties a proof to exactly one round and one public list.
"""

from typing import Optional

from blindbid.crypto.field import SCALAR_SIZE, Scalar
from blindbid.crypto.group import Group, Point, default_group
from blindbid.crypto.hashing import hash_to_scalar_int
from blindbid.crypto.poseidon import DOMAIN_CHALLENGE
from blindbid.core.proof import ProofSuite, proof_header
from blindbid.core.publist import PublicBidList


def compute_challenge(
    seed: Scalar,
    score: Scalar,
    commitment: Scalar,
    pub_list: PublicBidList,
    commitment_point: Point,
    lottery_point: Point,
    nonce_commitment_a: Point,
    nonce_commitment_b: Point,
    suite: ProofSuite = ProofSuite.BN254_POSEIDON,
    group: Optional[Group] = None,
) -> Scalar:
    """
    Derive the challenge scalar c.

    Args:
        seed: Round seed
        score: Claimed score Q
        commitment: Claimed commitment Z
        pub_list: Round public list
        commitment_point: C
        lottery_point: W
        nonce_commitment_a: A = r_d*G + r_k*H
        nonce_commitment_b: B = r_d*P_s + r_k*R_s
        suite: Proof suite written in the header
        group: Group backend

    Returns:
        Challenge scalar
    """
    group = group or default_group()
    scalar_field = group.scalar_field

    value = hash_to_scalar_int(
        DOMAIN_CHALLENGE,
        proof_header(suite),
        scalar_field.encode(seed),
        scalar_field.encode(score),
        scalar_field.encode(commitment),
        len(pub_list).to_bytes(SCALAR_SIZE, byteorder="little"),
        pub_list.root.to_bytes(SCALAR_SIZE, byteorder="big"),
        group.encode_point(commitment_point),
        group.encode_point(lottery_point),
        group.encode_point(nonce_commitment_a),
        group.encode_point(nonce_commitment_b),
        order=scalar_field.order,
    )
    return scalar_field.from_int(value)


__all__ = ["compute_challenge"]
