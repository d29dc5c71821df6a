"""Blind bid protocol: commitment, score, prove and verify"""
from blindbid.core.config import BlindBidConfig, load_config
from blindbid.core.bid import Bid, commit, score, commitment_point, lottery_point
from blindbid.core.publist import PublicBidList, compute_list_root, verify_inclusion
from blindbid.core.proof import Proof, ProofSuite, MAGIC_BYTES, PROOF_VERSION, proof_size
from blindbid.core.prover import BlindBidProver, ProofOutput, prove
from blindbid.core.verifier import BlindBidVerifier, verify

__all__ = [
    "BlindBidConfig",
    "load_config",
    "Bid",
    "commit",
    "score",
    "commitment_point",
    "lottery_point",
    "PublicBidList",
    "compute_list_root",
    "verify_inclusion",
    "Proof",
    "ProofSuite",
    "MAGIC_BYTES",
    "PROOF_VERSION",
    "proof_size",
    "BlindBidProver",
    "ProofOutput",
    "prove",
    "BlindBidVerifier",
    "verify",
]
