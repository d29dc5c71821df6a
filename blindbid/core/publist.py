"""
PublicBidList - the ordered list of bid commitments for a round.

The list is bound into every proof through its Poseidon Merkle root and its
length. A proof made against one list does not verify against any other
list: substitution, reordering, truncation and extension all fail.

Tree layout:
- Leaf i = Poseidon(DOMAIN_MERKLE_LEAF, z_i)
- Node   = Poseidon(left, right) under DOMAIN_MERKLE_NODE
- Padded to the next power of two with EMPTY_LEAF

Inclusion proofs let a consumer that only holds the published root check
that a commitment Z sits at a given index.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from blindbid.errors import DecodingError, InputShapeError
from blindbid.crypto.field import BN254_FR, SCALAR_SIZE, Scalar, ScalarField
from blindbid.crypto.poseidon import DOMAIN_MERKLE_LEAF, DOMAIN_MERKLE_NODE, poseidon1, poseidon2
from blindbid.utils.logger import get_logger

logger = get_logger("publist")


# =============================================================================
# Constants
# =============================================================================

# Padding leaf, outside the range of hash_leaf
EMPTY_LEAF = poseidon2(DOMAIN_MERKLE_LEAF, 0, DOMAIN_MERKLE_NODE)

# Root of an empty list
EMPTY_ROOT = poseidon1(0, DOMAIN_MERKLE_NODE)


# =============================================================================
# Merkle helpers
# =============================================================================


def hash_leaf(value: int) -> int:
    """Hash a commitment into a leaf."""
    return poseidon1(value, DOMAIN_MERKLE_LEAF)


def hash_pair(left: int, right: int) -> int:
    """Hash two children to produce parent node."""
    return poseidon2(left, right, DOMAIN_MERKLE_NODE)


def _build_layers(leaves: List[int]) -> List[List[int]]:
    """All tree layers, leaves first, root last."""
    n = len(leaves)
    width = 1 << (n - 1).bit_length() if n > 1 else 1
    layer = leaves + [EMPTY_LEAF] * (width - n)

    layers = [layer]
    while len(layer) > 1:
        layer = [hash_pair(layer[i], layer[i + 1]) for i in range(0, len(layer), 2)]
        layers.append(layer)
    return layers


def compute_list_root(values: Sequence[int]) -> int:
    """Merkle root over commitment values; EMPTY_ROOT for an empty list."""
    if not values:
        return EMPTY_ROOT
    return _build_layers([hash_leaf(v) for v in values])[-1][0]


def verify_inclusion(value: int, index: int, proof: Sequence[int], root: int) -> bool:
    """
    Verify a Merkle inclusion proof.

    Standalone verification without the full list.
    """
    if index < 0 or index >> len(proof) != 0:
        return False

    current = hash_leaf(value)
    idx = index
    for sibling in proof:
        if idx & 1:
            current = hash_pair(sibling, current)
        else:
            current = hash_pair(current, sibling)
        idx >>= 1

    return current == root


# =============================================================================
# Public Bid List
# =============================================================================


@dataclass(frozen=True)
class PublicBidList:
    """
    Immutable, ordered list of commitment scalars for one round.

    Attributes:
        items: Commitments in publication order
    """
    items: Tuple[Scalar, ...] = ()
    _layers: Optional[List[List[int]]] = field(default=None, init=False, repr=False, compare=False)

    @classmethod
    def from_scalars(cls, values: Iterable[Scalar], scalar_field: ScalarField = BN254_FR) -> "PublicBidList":
        """
        Build from Scalars or their 32-byte encodings.

        Raises:
            InputShapeError: An item is neither a Scalar nor bytes
            DecodingError: An item is a non-canonical encoding
        """
        items = []
        for i, value in enumerate(values):
            if not isinstance(value, (Scalar, bytes, bytearray, memoryview)):
                raise InputShapeError(f"pub_list[{i}] must be a Scalar or 32 bytes, got {type(value).__name__}")
            items.append(scalar_field.coerce(value, f"pub_list[{i}]"))
        return cls(items=tuple(items))

    @classmethod
    def from_bytes(cls, data: bytes, scalar_field: ScalarField = BN254_FR) -> "PublicBidList":
        """Parse concatenated 32-byte encodings."""
        if len(data) % SCALAR_SIZE != 0:
            raise DecodingError(f"List encoding length must be a multiple of {SCALAR_SIZE}")
        return cls(items=tuple(
            scalar_field.decode(data[i:i + SCALAR_SIZE])
            for i in range(0, len(data), SCALAR_SIZE)
        ))

    def to_bytes(self) -> bytes:
        return b"".join(item.to_bytes() for item in self.items)

    def _tree(self) -> List[List[int]]:
        if self._layers is None:
            layers = _build_layers([hash_leaf(item.value) for item in self.items])
            object.__setattr__(self, "_layers", layers)
            logger.debug(f"Built list tree: size={len(self.items)}, depth={len(layers) - 1}")
        return self._layers

    @property
    def root(self) -> int:
        """Merkle root of the list."""
        if not self.items:
            return EMPTY_ROOT
        return self._tree()[-1][0]

    @property
    def depth(self) -> int:
        return len(self._tree()) - 1 if self.items else 0

    def index_of(self, value: Scalar) -> int:
        """First index of ``value``, or -1."""
        for i, item in enumerate(self.items):
            if item == value:
                return i
        return -1

    def inclusion_proof(self, index: int) -> List[int]:
        """
        Sibling path from leaf ``index`` to the root.

        Raises:
            IndexError: Index out of range
        """
        if index < 0 or index >= len(self.items):
            raise IndexError(f"Index {index} out of range [0, {len(self.items)})")

        proof = []
        idx = index
        for layer in self._tree()[:-1]:
            proof.append(layer[idx ^ 1])
            idx >>= 1
        return proof

    def verify_inclusion(self, value: Scalar, index: int, proof: Sequence[int]) -> bool:
        return verify_inclusion(value.value, index, proof, self.root)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index: int) -> Scalar:
        return self.items[index]

    def __contains__(self, value: Scalar) -> bool:
        return value in self.items


__all__ = [
    "PublicBidList",
    "compute_list_root",
    "verify_inclusion",
    "hash_leaf",
    "hash_pair",
    "EMPTY_LEAF",
    "EMPTY_ROOT",
]
