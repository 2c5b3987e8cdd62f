from .ast import Entry, MiningContext, ParsedSession, QualityGroup, StrengthWord, TraceObservation, UNKNOWN_ORE
from .quality import QualityAdjective, QualityBand, QUALITY_BANDS, band_for_quality, band_for_adjective
from .parser import parse_session, try_parse_session, ParseFailure, ParseOptions, normalize_ore
from .validate import validate_entry, EntryValidationError
from .solver import (
    solve,
    solve_entries,
    candidates,
    resolve_direction,
    strength_band,
    SolveOptions,
    Solution,
    SolveSummary,
    VeinInstance,
    VeinState,
    ResolverConfig,
    get_resolver_config,
    set_resolver_config,
)
from .history import SessionHistory, make_entry
from .fetch import expand_paste
from .printer import format_solution, format_vein, render_grid

__all__ = [
    'Entry',
    'MiningContext',
    'ParsedSession',
    'QualityGroup',
    'StrengthWord',
    'TraceObservation',
    'UNKNOWN_ORE',
    'QualityAdjective',
    'QualityBand',
    'QUALITY_BANDS',
    'band_for_quality',
    'band_for_adjective',
    'parse_session',
    'try_parse_session',
    'ParseFailure',
    'ParseOptions',
    'normalize_ore',
    'validate_entry',
    'EntryValidationError',
    'solve',
    'solve_entries',
    'candidates',
    'resolve_direction',
    'strength_band',
    'SolveOptions',
    'Solution',
    'SolveSummary',
    'VeinInstance',
    'VeinState',
    'ResolverConfig',
    'get_resolver_config',
    'set_resolver_config',
    'SessionHistory',
    'make_entry',
    'expand_paste',
    'format_solution',
    'format_vein',
    'render_grid',
]
