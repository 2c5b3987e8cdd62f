"""Solver façade: entries in, vein instances out."""

from __future__ import annotations

import logging
from typing import Sequence

from ..ast import Entry
from .config import get_resolver_config, reset_resolver_config, set_resolver_config
from .core import consolidate_traces, solve_entries
from .geometry import candidate_offsets, candidates, normalize_direction, resolve_direction, strength_band
from .model import (
    DEFAULT_STRENGTH_BANDS,
    ResolverConfig,
    Solution,
    SolveOptions,
    SolveSummary,
    VeinInstance,
    VeinState,
)
from .utils import bounds, centroid, connected_components, label_anchor

logger = logging.getLogger(__name__)


def solve(entries: Sequence[Entry], options: SolveOptions = SolveOptions()) -> Solution:
    """Rebuild the vein collection from ``entries`` in order.

    The result depends only on ``entries`` and the resolver configuration; no
    state survives between calls.
    """

    config = options.resolver or get_resolver_config()
    logger.info("Solving %d entr%s", len(entries), "y" if len(entries) == 1 else "ies")
    solution = solve_entries(entries, config)
    summary = solution.summary()
    logger.info(
        "Solved: %d vein(s), %d locked, %d open, %d contradicted",
        summary.veins,
        summary.locked,
        summary.open,
        summary.contradicted,
    )
    return solution


__all__ = [
    "DEFAULT_STRENGTH_BANDS",
    "ResolverConfig",
    "Solution",
    "SolveOptions",
    "SolveSummary",
    "VeinInstance",
    "VeinState",
    "bounds",
    "candidate_offsets",
    "candidates",
    "centroid",
    "connected_components",
    "consolidate_traces",
    "get_resolver_config",
    "label_anchor",
    "normalize_direction",
    "reset_resolver_config",
    "resolve_direction",
    "set_resolver_config",
    "solve",
    "solve_entries",
    "strength_band",
]
