"""
Blind Bid

Proof-of-blind-bid for randomized leader selection:
- Pedersen-style bid commitments
- Seed-dependent, unpredictable scores
- Non-interactive proofs binding score, commitment, seed and public list
"""

from blindbid.errors import (
    BlindBidError,
    DecodingError,
    InputShapeError,
    ProofConstructionError,
    EntropyError,
)
from blindbid.crypto import (
    Scalar,
    ScalarField,
    PrimeField,
    BN254_FR,
    Group,
    BN254Group,
    RandomSource,
    SecureRandom,
    DeterministicRandom,
    encode_scalar,
    decode_scalar,
    gen_rand_scalar,
)
from blindbid.core import (
    BlindBidConfig,
    load_config,
    Bid,
    commit,
    score,
    PublicBidList,
    Proof,
    BlindBidProver,
    BlindBidVerifier,
    ProofOutput,
    prove,
    verify,
)

__version__ = "0.1.0"
