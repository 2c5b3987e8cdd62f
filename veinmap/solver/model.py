"""Core data structures for the vein solver."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple

from ..ast import QualityGroup, StrengthWord, Tile
from ..quality import UNKNOWN_COLOR, color_for_band

Band = Tuple[int, int]

# Chebyshev distance band (inclusive) per strength word, nearest first.
DEFAULT_STRENGTH_BANDS: Dict[StrengthWord, Band] = {
    StrengthWord.SLIGHT: (1, 5),
    StrengthWord.FAINT: (3, 7),
    StrengthWord.MINUSCULE: (4, 9),
    StrengthWord.VAGUE: (6, 11),
    StrengthWord.INDISTINCT: (8, 14),
}


class VeinState(str, Enum):
    OPEN = "open"
    LOCKED = "locked"
    CONTRADICTED = "contradicted"


@dataclass
class ResolverConfig:
    """Policy constants of the direction/distance resolver."""

    strength_bands: Dict[StrengthWord, Band] = field(
        default_factory=lambda: dict(DEFAULT_STRENGTH_BANDS)
    )
    max_distance: Optional[int] = None
    compound_half_plane: bool = False

    def __post_init__(self) -> None:
        previous: Optional[Band] = None
        for word in StrengthWord:
            if word not in self.strength_bands:
                raise ValueError(f"strength band table is missing '{word.value}'")
            lo, hi = self.strength_bands[word]
            if lo < 1 or hi < lo:
                raise ValueError(f"invalid band {lo}..{hi} for '{word.value}'")
            if previous is not None and (lo < previous[0] or hi < previous[1]):
                raise ValueError(f"strength bands must be monotonic, '{word.value}' is nearer than its predecessor")
            previous = (lo, hi)
        if self.max_distance is not None and self.max_distance < 1:
            raise ValueError("max_distance must be at least 1")

    def band(self, strength: StrengthWord) -> Band:
        lo, hi = self.strength_bands[strength]
        if self.max_distance is not None:
            hi = min(hi, self.max_distance)
        return lo, hi


@dataclass
class SolveOptions:
    """Solver façade options; ``resolver`` overrides the module-level config."""

    resolver: Optional[ResolverConfig] = None


@dataclass
class VeinInstance:
    """One hypothesised physical vein and the tiles it may still occupy."""

    id: int
    group: QualityGroup
    feasible_tiles: FrozenSet[Tile]
    exact_quality: Optional[int] = None
    history: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.feasible_tiles = frozenset(self.feasible_tiles)
        if not self.history:
            self.history.append(len(self.feasible_tiles))

    @property
    def ore(self) -> str:
        return self.group.ore

    @property
    def display_name(self) -> str:
        return " ".join(word.capitalize() for word in self.group.ore.split())

    @property
    def display_quality(self) -> str:
        if self.exact_quality is not None:
            return str(self.exact_quality)
        return self.group.band or ""

    @property
    def color(self) -> str:
        if self.group.is_unknown:
            return UNKNOWN_COLOR
        return color_for_band(self.group.band)

    @property
    def locked(self) -> bool:
        return len(self.feasible_tiles) == 1

    @property
    def locked_tile(self) -> Optional[Tile]:
        if len(self.feasible_tiles) != 1:
            return None
        return next(iter(self.feasible_tiles))

    @property
    def state(self) -> VeinState:
        size = len(self.feasible_tiles)
        if size == 0:
            return VeinState.CONTRADICTED
        if size == 1:
            return VeinState.LOCKED
        return VeinState.OPEN

    def narrow(self, tiles: FrozenSet[Tile]) -> VeinState:
        """Intersect the feasible set with ``tiles``; only OPEN veins may narrow."""

        if self.state is not VeinState.OPEN:
            raise RuntimeError(f"vein {self.id} is {self.state.value} and cannot be narrowed")
        self.feasible_tiles = self.feasible_tiles & tiles
        self.history.append(len(self.feasible_tiles))
        return self.state

    def pin(self, tile: Tile) -> None:
        if tile not in self.feasible_tiles:
            raise RuntimeError(f"vein {self.id} cannot be pinned outside its feasible set")
        self.feasible_tiles = frozenset({tile})
        self.history.append(1)


@dataclass(frozen=True)
class SolveSummary:
    entries: int
    veins: int
    locked: int
    open: int
    contradicted: int


@dataclass
class Solution:
    veins: List[VeinInstance]
    positions: List[Tile] = field(default_factory=list)
    groups_per_entry: List[int] = field(default_factory=list)

    def by_state(self, state: VeinState) -> List[VeinInstance]:
        return [vein for vein in self.veins if vein.state is state]

    def summary(self) -> SolveSummary:
        return SolveSummary(
            entries=len(self.positions),
            veins=len(self.veins),
            locked=len(self.by_state(VeinState.LOCKED)),
            open=len(self.by_state(VeinState.OPEN)),
            contradicted=len(self.by_state(VeinState.CONTRADICTED)),
        )
