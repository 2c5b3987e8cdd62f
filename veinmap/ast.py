from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .quality import QualityAdjective, band_for_adjective, band_for_quality

Tile = Tuple[int, int]

UNKNOWN_ORE = "Unknown"


class StrengthWord(str, Enum):
    SLIGHT = "slight"
    FAINT = "faint"
    MINUSCULE = "minuscule"
    VAGUE = "vague"
    INDISTINCT = "indistinct"


@dataclass(frozen=True)
class QualityGroup:
    """Identity of a vein type: two observations merge only if their groups are equal."""

    ore: str
    band: Optional[str] = None

    @property
    def is_unknown(self) -> bool:
        return self.ore == UNKNOWN_ORE

    def __str__(self) -> str:
        return self.ore if self.band is None else f"{self.ore} {self.band}"


@dataclass(frozen=True)
class MiningContext:
    ore: str
    exact_quality: Optional[int] = None
    quality: Optional[QualityAdjective] = None
    line: int = 0

    @property
    def group(self) -> Optional[QualityGroup]:
        if self.exact_quality is not None:
            return QualityGroup(self.ore, band_for_quality(self.exact_quality).label)
        if self.quality is not None:
            return QualityGroup(self.ore, band_for_adjective(self.quality).label)
        return None


@dataclass(frozen=True)
class TraceObservation:
    ore: str
    strength: StrengthWord
    direction: str
    quality: Optional[QualityAdjective] = None
    line: int = 0

    @property
    def group(self) -> QualityGroup:
        band = band_for_adjective(self.quality).label if self.quality is not None else None
        return QualityGroup(self.ore, band)


@dataclass(frozen=True)
class ParsedSession:
    mining_context: Optional[MiningContext] = None
    traces: Tuple[TraceObservation, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return self.mining_context is None and not self.traces


@dataclass(frozen=True)
class Entry:
    """One user submission: the reference tile and the pasted log it was read at."""

    position: Tile
    raw_text: str
    session: ParsedSession = field(default_factory=ParsedSession)
