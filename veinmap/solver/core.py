"""Constraint propagation over an ordered list of entries."""

from __future__ import annotations

import itertools
import logging
from typing import Dict, FrozenSet, Iterator, List, Optional, Sequence

from ..ast import Entry, MiningContext, QualityGroup, Tile
from ..logging_utils import apply_debug_logging
from .geometry import candidates
from .model import ResolverConfig, Solution, VeinInstance, VeinState

logger = logging.getLogger(__name__)


def _new_vein(
    veins: List[VeinInstance],
    ids: Iterator[int],
    group: QualityGroup,
    tiles: FrozenSet[Tile],
    exact_quality: Optional[int] = None,
) -> VeinInstance:
    vein = VeinInstance(id=next(ids), group=group, feasible_tiles=tiles, exact_quality=exact_quality)
    veins.append(vein)
    logger.info(
        "Vein %d (%s) created with %d candidate tile(s), state=%s",
        vein.id,
        group,
        len(tiles),
        vein.state.value,
    )
    return vein


def apply_mining_context(
    veins: List[VeinInstance],
    ids: Iterator[int],
    context: MiningContext,
    tile: Tile,
) -> Optional[VeinInstance]:
    """Lock the first same-group vein that can sit on ``tile``, or create a locked one."""

    group = context.group
    if group is None:
        logger.debug("Mining context for %s carries no quality, skipped", context.ore)
        return None
    for vein in veins:
        if vein.group != group or tile not in vein.feasible_tiles:
            continue
        if vein.state is VeinState.OPEN:
            vein.pin(tile)
            logger.info("Vein %d (%s) locked at %s by mining context", vein.id, group, tile)
        if vein.exact_quality is None:
            vein.exact_quality = context.exact_quality
        return vein
    return _new_vein(veins, ids, group, frozenset({tile}), context.exact_quality)


def consolidate_traces(entry: Entry, config: Optional[ResolverConfig] = None) -> Dict[QualityGroup, FrozenSet[Tile]]:
    """Intersect the candidate sets of one entry's traces per quality group.

    Traces whose candidate set is empty carry no constraint and are left out;
    a group with no constraining trace does not appear in the result.
    """

    consolidated: Dict[QualityGroup, FrozenSet[Tile]] = {}
    for trace in entry.session.traces:
        tiles = candidates(entry.position, trace.strength, trace.direction, config)
        if not tiles:
            logger.debug(
                "Trace on line %d (%s, %r) yields no constraint",
                trace.line,
                trace.strength.value,
                trace.direction,
            )
            continue
        group = trace.group
        if group in consolidated:
            consolidated[group] = consolidated[group] & tiles
        else:
            consolidated[group] = tiles
    return consolidated


def _best_overlap(veins: Sequence[VeinInstance], group: QualityGroup, tiles: FrozenSet[Tile]) -> Optional[VeinInstance]:
    best: Optional[VeinInstance] = None
    best_overlap = 0
    for vein in veins:
        if vein.group != group or vein.state is not VeinState.OPEN:
            continue
        overlap = len(vein.feasible_tiles & tiles)
        if overlap > best_overlap:
            best, best_overlap = vein, overlap
    return best


def incorporate(
    veins: List[VeinInstance],
    ids: Iterator[int],
    group: QualityGroup,
    tiles: FrozenSet[Tile],
) -> VeinInstance:
    """Fold one consolidated candidate set into the vein collection."""

    match = _best_overlap(veins, group, tiles)
    if match is not None:
        before = len(match.feasible_tiles)
        state = match.narrow(tiles)
        logger.debug("Vein %d (%s) narrowed %d -> %d", match.id, group, before, len(match.feasible_tiles))
        if state is VeinState.LOCKED:
            logger.info("Vein %d (%s) locked at %s", match.id, group, match.locked_tile)
        return match

    for vein in veins:
        if vein.group == group and vein.state is VeinState.LOCKED and vein.locked_tile in tiles:
            logger.debug("Vein %d (%s) absorbs observation at its locked tile", vein.id, group)
            return vein

    vein = _new_vein(veins, ids, group, tiles)
    if vein.state is VeinState.CONTRADICTED:
        logger.info("Vein %d (%s) has no remaining candidates", vein.id, group)
    return vein


def solve_entries(entries: Sequence[Entry], config: Optional[ResolverConfig] = None) -> Solution:
    veins: List[VeinInstance] = []
    ids = itertools.count(1)
    groups_per_entry: List[int] = []

    for entry in entries:
        seen = set()
        context = entry.session.mining_context
        if context is not None and context.group is not None:
            apply_mining_context(veins, ids, context, entry.position)
            seen.add(context.group)
        for group, tiles in consolidate_traces(entry, config).items():
            incorporate(veins, ids, group, tiles)
            seen.add(group)
        groups_per_entry.append(len(seen))

    return Solution(
        veins=veins,
        positions=[entry.position for entry in entries],
        groups_per_entry=groups_per_entry,
    )


apply_debug_logging(globals(), logger=logger, skip={"_new_vein", "_best_overlap"})
