"""Entity id allocation and GUID generation.

Entity ids are structural: they are a pure function of an :class:`IdBlock`
and an offset, so re-running assembly with the same parameters reproduces
the same numbering.  GUIDs are random and carry no structural meaning.
"""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class IdBlock:
    """A reserved, contiguous range of entity ids for one structural unit."""

    kind: str
    index: int
    base: int
    stride: int

    @property
    def last(self) -> int:
        """Highest id reserved by this block."""
        return self.base + self.stride - 1

    def overlaps(self, other: IdBlock) -> bool:
        return self.base <= other.last and other.base <= self.last

    def ids(self, layout: dict[str, int]) -> dict[str, int]:
        """Resolve a ``name -> offset`` layout into ``name -> entity id``."""
        return {name: entity_id(self, offset) for name, offset in layout.items()}


def entity_id(block: IdBlock, offset: int) -> int:
    """Return the entity id at *offset* inside *block*.

    Raises :class:`ValueError` if the offset would spill into the next block.
    """
    if not 0 <= offset < block.stride:
        raise ValueError(
            f"offset {offset} outside {block.kind} block {block.index} "
            f"(stride {block.stride})"
        )
    return block.base + offset


class RandomSource(Protocol):
    """Anything with ``getrandbits``, such as :class:`random.Random`."""

    def getrandbits(self, k: int) -> int: ...


class GuidFactory:
    """Produce UUIDv4-shaped identifiers from a pluggable random source.

    Parameters
    ----------
    rng:
        Random source; defaults to :class:`random.SystemRandom`.  Tests
        pass a seeded :class:`random.Random` to get reproducible output.
    """

    def __init__(self, rng: RandomSource | None = None) -> None:
        self._rng = rng if rng is not None else random.SystemRandom()

    def new_uuid(self) -> uuid.UUID:
        # Setting version=4 also forces the RFC 4122 variant bits.
        return uuid.UUID(int=self._rng.getrandbits(128), version=4)

    def new_guid(self, hyphenated: bool = False) -> str:
        """Return a new GUID.

        The compact 32-character hex form is used inside STEP files; the
        hyphenated canonical form is for reports and previews.
        """
        value = self.new_uuid()
        return str(value) if hyphenated else value.hex
