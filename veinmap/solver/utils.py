"""Tile-set helpers shared by the solver and the printer."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

import numpy as np
from scipy import ndimage

from ..ast import Tile

logger = logging.getLogger(__name__)

Bounds = Tuple[int, int, int, int]  # (min_x, max_x, min_y, max_y)


def tiles_to_array(tiles: Iterable[Tile]) -> np.ndarray:
    arr = np.array(sorted(tiles), dtype=int)
    return arr.reshape(-1, 2)


def bounds(tiles: Iterable[Tile]) -> Optional[Bounds]:
    arr = tiles_to_array(tiles)
    if len(arr) == 0:
        return None
    return (
        int(arr[:, 0].min()),
        int(arr[:, 0].max()),
        int(arr[:, 1].min()),
        int(arr[:, 1].max()),
    )


def connected_components(tiles: Iterable[Tile]) -> List[List[Tile]]:
    """Split ``tiles`` into 4-connected regions, each sorted, in raster order."""

    arr = tiles_to_array(tiles)
    if len(arr) == 0:
        return []
    origin = arr.min(axis=0)
    shifted = arr - origin
    grid = np.zeros(tuple(shifted.max(axis=0) + 1), dtype=bool)
    grid[shifted[:, 0], shifted[:, 1]] = True
    labels, count = ndimage.label(grid)
    components: List[List[Tile]] = []
    for label in range(1, count + 1):
        cells = np.argwhere(labels == label) + origin
        components.append([(int(x), int(y)) for x, y in cells.tolist()])
    logger.debug("Split %d tile(s) into %d component(s)", len(arr), count)
    return components


def centroid(tiles: Iterable[Tile]) -> Tuple[float, float]:
    arr = tiles_to_array(tiles)
    if len(arr) == 0:
        raise ValueError("centroid of an empty tile set")
    mean = arr.mean(axis=0)
    return float(mean[0]), float(mean[1])


def label_anchor(tiles: Iterable[Tile]) -> Tile:
    """Tile of ``tiles`` nearest its centroid, where a region label is placed.

    Bent or hollow regions can have their centroid off the region; the anchor
    is then snapped to the closest member tile, first in sorted order on ties.
    """

    arr = tiles_to_array(tiles)
    cx, cy = centroid(arr.tolist())
    rounded = (int(round(cx)), int(round(cy)))
    if ((arr[:, 0] == rounded[0]) & (arr[:, 1] == rounded[1])).any():
        return rounded
    dist = (arr[:, 0] - cx) ** 2 + (arr[:, 1] - cy) ** 2
    x, y = arr[int(np.argmin(dist))]
    return int(x), int(y)
