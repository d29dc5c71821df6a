"""
Error types for the blind bid protocol.

Every error derives from ValueError so callers that already guard against
bad input with ``except ValueError`` keep working. The subclasses let a
caller tell "malformed input" apart from "proof could not be built".

A proof that is well-formed but false is not an error: ``verify`` returns
``False`` for it.
"""


class BlindBidError(ValueError):
    """Base class for all blind bid failures."""


class DecodingError(BlindBidError):
    """Bytes are not a canonical scalar, point, or proof encoding."""


class InputShapeError(BlindBidError):
    """A structurally invalid call (empty list, wrong type, oversized list)."""


class ProofConstructionError(BlindBidError):
    """Proof construction hit a degenerate value and cannot complete."""


class EntropyError(ProofConstructionError):
    """The randomness source is unavailable."""


__all__ = [
    "BlindBidError",
    "DecodingError",
    "InputShapeError",
    "ProofConstructionError",
    "EntropyError",
]
