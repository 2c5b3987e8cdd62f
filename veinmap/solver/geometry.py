"""Direction/distance resolution: one clue to a set of candidate tiles.

Candidates form a banded Chebyshev ring around the reference tile
(``lo <= max(|dx|, |dy|) <= hi``) filtered by octant sign-matching: a tile
qualifies iff ``sign(dx)`` and ``sign(dy)`` equal the direction vector's
components, so a zero component demands an exact-zero offset on that axis.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import FrozenSet, Optional, Tuple, Union

import numpy as np

from ..ast import StrengthWord, Tile
from ..logging_utils import apply_debug_logging
from .config import get_resolver_config
from .model import ResolverConfig

logger = logging.getLogger(__name__)

Vector = Tuple[int, int]

# y grows to the north.
DIRECTION_VECTORS = {
    "north": (0, 1),
    "south": (0, -1),
    "east": (1, 0),
    "west": (-1, 0),
    "northeast": (1, 1),
    "northwest": (-1, 1),
    "southeast": (1, -1),
    "southwest": (-1, -1),
    "north east": (1, 1),
    "north west": (-1, 1),
    "south east": (1, -1),
    "south west": (-1, -1),
    "n": (0, 1),
    "s": (0, -1),
    "e": (1, 0),
    "w": (-1, 0),
    "ne": (1, 1),
    "nw": (-1, 1),
    "se": (1, -1),
    "sw": (-1, -1),
}

_punct_re = re.compile(r"[().,;:!]")
_dash_re = re.compile(r"[-_/]")


def normalize_direction(phrase: str) -> str:
    s = _punct_re.sub("", (phrase or "").lower())
    s = _dash_re.sub(" ", s)
    return " ".join(s.split())


def _clamp(value: int) -> int:
    return max(-1, min(1, value))


def _parse_direction(phrase: str) -> Optional[Tuple[Vector, Optional[Vector]]]:
    """Return ``(vector, dominant)``; ``dominant`` is the B of an "A of B" phrase."""

    d = normalize_direction(phrase)
    if d in DIRECTION_VECTORS:
        return DIRECTION_VECTORS[d], None
    parts = d.split(" of ")
    if len(parts) != 2:
        return None
    a = DIRECTION_VECTORS.get(parts[0])
    b = DIRECTION_VECTORS.get(parts[1])
    if a is None or b is None:
        return None
    vector = (_clamp(a[0] + b[0]), _clamp(a[1] + b[1]))
    if vector == (0, 0):
        return None
    return vector, b


def resolve_direction(phrase: str) -> Optional[Vector]:
    """Map a direction phrase to one of the 8 octant unit vectors, or ``None``."""

    parsed = _parse_direction(phrase)
    return parsed[0] if parsed is not None else None


def strength_band(
    strength: Union[StrengthWord, str], config: Optional[ResolverConfig] = None
) -> Optional[Tuple[int, int]]:
    config = config or get_resolver_config()
    if isinstance(strength, StrengthWord):
        word = strength
    else:
        try:
            word = StrengthWord(str(strength).strip().lower())
        except ValueError:
            return None
    return config.band(word)


@lru_cache(maxsize=64)
def _ring_offsets(lo: int, hi: int) -> np.ndarray:
    span = np.arange(-hi, hi + 1)
    dx, dy = np.meshgrid(span, span, indexing="ij")
    dist = np.maximum(np.abs(dx), np.abs(dy))
    mask = (dist >= lo) & (dist <= hi)
    offsets = np.stack([dx[mask], dy[mask]], axis=1)
    offsets.setflags(write=False)
    return offsets


def _half_plane_mask(offsets: np.ndarray, dominant: Vector) -> np.ndarray:
    # Only a cardinal B has a dominant axis; a diagonal B leaves the octant whole.
    if dominant[0] != 0 and dominant[1] != 0:
        return np.ones(len(offsets), dtype=bool)
    along = 0 if dominant[0] != 0 else 1
    return np.abs(offsets[:, along]) >= np.abs(offsets[:, 1 - along])


def candidate_offsets(
    strength: Union[StrengthWord, str],
    direction: str,
    config: Optional[ResolverConfig] = None,
) -> np.ndarray:
    """Offsets (``N x 2`` integer array) consistent with one clue."""

    config = config or get_resolver_config()
    empty = np.zeros((0, 2), dtype=int)
    band = strength_band(strength, config)
    parsed = _parse_direction(direction)
    if band is None or parsed is None:
        logger.debug("Unresolved clue strength=%r direction=%r", strength, direction)
        return empty
    lo, hi = band
    if lo < 1 or hi < lo:
        return empty
    vector, dominant = parsed
    offsets = _ring_offsets(lo, hi)
    mask = (np.sign(offsets[:, 0]) == vector[0]) & (np.sign(offsets[:, 1]) == vector[1])
    if config.compound_half_plane and dominant is not None:
        mask &= _half_plane_mask(offsets, dominant)
    return offsets[mask]


def candidates(
    reference: Tile,
    strength: Union[StrengthWord, str],
    direction: str,
    config: Optional[ResolverConfig] = None,
) -> FrozenSet[Tile]:
    """Tiles where a vein may sit given one clue read at ``reference``.

    An empty result means the clue carries no constraint.
    """

    offsets = candidate_offsets(strength, direction, config)
    if len(offsets) == 0:
        return frozenset()
    tiles = offsets + np.asarray(reference, dtype=int)
    return frozenset((int(x), int(y)) for x, y in tiles.tolist())


apply_debug_logging(globals(), logger=logger, skip={"normalize_direction", "_clamp", "_half_plane_mask"})
