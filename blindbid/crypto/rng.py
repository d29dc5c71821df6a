"""
Randomness sources.

The prover never reaches for a global RNG: it takes a ``RandomSource``
argument. Production code passes ``SecureRandom`` (the default), which draws
from the OS CSPRNG via ``secrets``. Tests can pass ``DeterministicRandom``
to make proof bytes reproducible.
"""

import hashlib
import secrets
from typing import Optional, Protocol, runtime_checkable

from blindbid.errors import EntropyError
from blindbid.crypto.field import BN254_FR, Scalar, ScalarField


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can draw a uniform integer in [0, n)."""

    def randbelow(self, n: int) -> int:
        ...


class SecureRandom:
    """OS-backed CSPRNG. Raises EntropyError instead of blocking on failure."""

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError("Upper bound must be positive")
        try:
            return secrets.randbelow(n)
        except OSError as e:
            raise EntropyError(f"Entropy source unavailable: {e}") from e


class DeterministicRandom:
    """
    Reproducible randomness for tests.

    SHA-256 in counter mode over a fixed seed. Each draw consumes 64 bytes
    and reduces modulo n, which keeps the bias negligible for 256-bit n.

    NOT for production use: anyone who knows the seed can recover the
    prover's nonces and therefore the secret bid.
    """

    def __init__(self, seed: bytes):
        self._seed = bytes(seed)
        self._counter = 0

    def _block(self) -> bytes:
        data = self._seed + self._counter.to_bytes(8, byteorder="big")
        self._counter += 1
        return hashlib.sha256(data).digest()

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError("Upper bound must be positive")
        wide = self._block() + self._block()
        return int.from_bytes(wide, byteorder="big") % n


_default_rng = SecureRandom()


def default_rng() -> SecureRandom:
    """Process-wide secure source (stateless, safe to share across threads)."""
    return _default_rng


def gen_rand_scalar(rng: Optional[RandomSource] = None, field: ScalarField = BN254_FR) -> Scalar:
    """
    Generate a random nonzero scalar.

    Args:
        rng: Randomness source (defaults to the OS CSPRNG)
        field: Scalar field to sample from

    Returns:
        Uniform scalar in [1, order)
    """
    return field.random(rng or _default_rng)


__all__ = [
    "RandomSource",
    "SecureRandom",
    "DeterministicRandom",
    "default_rng",
    "gen_rand_scalar",
]
