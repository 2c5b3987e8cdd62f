from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class QualityAdjective(str, Enum):
    POOR = "poor"
    DECENT = "decent"
    NORMAL = "normal"
    GOOD = "good"
    VERY_GOOD = "very_good"
    UTMOST = "utmost"

    @property
    def phrase(self) -> str:
        return self.value.replace("_", " ")


@dataclass(frozen=True)
class QualityBand:
    """Closed quality range shown with a single label and color."""

    label: str
    lo: int
    hi: int
    color: str

    def __contains__(self, quality: object) -> bool:
        return isinstance(quality, int) and self.lo <= quality <= self.hi

    def __str__(self) -> str:
        return self.label


QUALITY_BANDS: Tuple[QualityBand, ...] = (
    QualityBand("20-29", 20, 29, "#b9b9b9"),
    QualityBand("30-39", 30, 39, "#ffffff"),
    QualityBand("40-59", 40, 59, "#39ff4a"),
    QualityBand("60-79", 60, 79, "#23a3ff"),
    QualityBand("80-94", 80, 94, "#b44cff"),
    QualityBand("95-99", 95, 99, "#ff9f1a"),
)

UNKNOWN_COLOR = "#d0d4dc"

_BAND_BY_LABEL = {band.label: band for band in QUALITY_BANDS}

_BAND_BY_ADJECTIVE = {
    QualityAdjective.POOR: _BAND_BY_LABEL["20-29"],
    QualityAdjective.DECENT: _BAND_BY_LABEL["30-39"],
    QualityAdjective.NORMAL: _BAND_BY_LABEL["40-59"],
    QualityAdjective.GOOD: _BAND_BY_LABEL["60-79"],
    QualityAdjective.VERY_GOOD: _BAND_BY_LABEL["80-94"],
    QualityAdjective.UTMOST: _BAND_BY_LABEL["95-99"],
}

# "very good" must be tried before "good".
ADJECTIVE_PRIORITY: Tuple[QualityAdjective, ...] = (
    QualityAdjective.UTMOST,
    QualityAdjective.VERY_GOOD,
    QualityAdjective.GOOD,
    QualityAdjective.NORMAL,
    QualityAdjective.DECENT,
    QualityAdjective.POOR,
)


def find_adjective(text: str) -> Optional[QualityAdjective]:
    """Return the highest-priority quality adjective contained in ``text``."""

    low = " ".join((text or "").lower().split())
    for adjective in ADJECTIVE_PRIORITY:
        if adjective.phrase in low:
            return adjective
    return None


def band_for_quality(quality: int) -> QualityBand:
    for band in QUALITY_BANDS:
        if quality in band:
            return band
    if quality < QUALITY_BANDS[0].lo:
        return QUALITY_BANDS[0]
    return QUALITY_BANDS[-1]


def band_for_adjective(adjective: QualityAdjective) -> QualityBand:
    return _BAND_BY_ADJECTIVE[adjective]


def band_by_label(label: Optional[str]) -> Optional[QualityBand]:
    if label is None:
        return None
    return _BAND_BY_LABEL.get(label)


def color_for_band(label: Optional[str]) -> str:
    band = band_by_label(label)
    return band.color if band is not None else UNKNOWN_COLOR


__all__ = [
    "QualityAdjective",
    "QualityBand",
    "QUALITY_BANDS",
    "UNKNOWN_COLOR",
    "ADJECTIVE_PRIORITY",
    "find_adjective",
    "band_for_quality",
    "band_for_adjective",
    "band_by_label",
    "color_for_band",
]
