"""Entity numbering scheme — fixed-stride id blocks per structural unit.

Each storey and each wall owns a block of ids computed from its index
alone, so no running counter is needed and blocks can never collide:

* storeys: ``200 + 10*i`` (4 ids used, 6 reserved), at most 10 storeys
* walls:   ``300 + 20*i`` (15 ids used, 5 reserved)
* relationships referencing every storey/wall start at 400
"""

from __future__ import annotations

from ifcai import config
from ifcai.step.ids import IdBlock

STOREY = "storey"
WALL = "wall"

# Placeholder name -> offset inside a storey block
STOREY_LAYOUT: dict[str, int] = {
    "STOREY": 0,
    "PLACEMENT": 1,
    "AXIS": 2,
    "ORIGIN": 3,
}

# Placeholder name -> offset inside a wall block
WALL_LAYOUT: dict[str, int] = {
    "WALL": 0,
    "PLACEMENT": 1,
    "AXIS": 2,
    "ORIGIN": 3,
    "AXIS_Z": 4,
    "REF_DIR": 5,
    "SHAPE": 10,
    "BODY": 11,
    "SOLID": 12,
    "PROFILE": 13,
    "SOLID_AXIS": 14,
    "EXTRUSION": 15,
    "PROFILE_AXIS": 16,
    "SOLID_ORIGIN": 17,
    "PROFILE_ORIGIN": 18,
}

# Relationship region
REL_STOREYS_ID = config.RELATIONSHIP_BASE
REL_WALLS_ID = config.RELATIONSHIP_BASE + 1

_SCHEME: dict[str, tuple[int, int, int]] = {
    # kind: (base, stride, capacity)
    STOREY: (config.STOREY_BASE, config.STOREY_STRIDE, config.MAX_STOREYS),
    WALL: (config.WALL_BASE, config.WALL_STRIDE, config.MAX_WALLS),
}


def block_for(kind: str, index: int) -> IdBlock:
    """Return the id block for unit *index* of *kind*.

    Raises :class:`ValueError` for an unknown kind or an index beyond the
    capacity of that kind's region.
    """
    try:
        base, stride, capacity = _SCHEME[kind]
    except KeyError:
        raise ValueError(f"unknown unit kind {kind!r}") from None
    if not 0 <= index < capacity:
        raise ValueError(f"{kind} index {index} outside 0..{capacity - 1}")
    return IdBlock(kind=kind, index=index, base=base + index * stride, stride=stride)


def storey_block(index: int) -> IdBlock:
    return block_for(STOREY, index)


def wall_block(index: int) -> IdBlock:
    return block_for(WALL, index)
