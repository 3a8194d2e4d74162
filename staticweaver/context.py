"""
Key-value context consumed by the rendering engine.
"""

import hashlib
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

_HASH_MASK = (1 << 64) - 1


def _pair_digest(key: str, value: str) -> int:
    """64-bit digest of a single (key, value) pair."""
    digest = hashlib.blake2b(digest_size=8)
    digest.update(key.encode("utf-8"))
    # Separator keeps ("ab", "c") and ("a", "bc") apart
    digest.update(b"\x00")
    digest.update(value.encode("utf-8"))
    return int.from_bytes(digest.digest(), "big")


class Context:
    """
    Mapping from template keys to the strings substituted for them.

    The hash is combined commutatively over all pairs, so two contexts
    holding the same elements always hash alike regardless of the order
    they were filled in. It is also stable across interpreter runs.

    Example:
        >>> context = Context({"name": "Alice"})
        >>> context.set("greeting", "Hello")
        >>> context.get("name")
        'Alice'
    """

    def __init__(self, elements: Optional[Mapping[str, str]] = None):
        self.elements: Dict[str, str] = dict(elements) if elements else {}

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> "Context":
        """Build a context from an iterable of (key, value) pairs."""
        context = cls()
        context.extend(pairs)
        return context

    def set(self, key: str, value: str) -> None:
        self.elements[key] = value

    def get(self, key: str) -> Optional[str]:
        return self.elements.get(key)

    def remove(self, key: str) -> Optional[str]:
        return self.elements.pop(key, None)

    def extend(self, pairs: Union[Iterable[Tuple[str, str]], Mapping[str, str]]) -> None:
        """Set every pair, later pairs overwriting earlier ones."""
        if isinstance(pairs, Mapping):
            pairs = pairs.items()
        for key, value in pairs:
            self.set(key, value)

    def clear(self) -> None:
        self.elements.clear()

    def copy(self) -> "Context":
        return Context(self.elements)

    def hash(self) -> int:
        """
        Order-independent 64-bit content hash.

        Returns:
            Sum of the per-pair digests modulo 2**64 (0 for an empty context)
        """
        total = 0
        for key, value in self.elements.items():
            total = (total + _pair_digest(key, value)) & _HASH_MASK
        return total

    def iter(self) -> Iterator[Tuple[str, str]]:
        return iter(self.elements.items())

    def is_empty(self) -> bool:
        return not self.elements

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return self.iter()

    def __len__(self) -> int:
        return len(self.elements)

    def __contains__(self, key: object) -> bool:
        return key in self.elements

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Context):
            return NotImplemented
        return self.elements == other.elements

    def __repr__(self) -> str:
        return f"Context({self.elements!r})"
