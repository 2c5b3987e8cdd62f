import logging
import re
from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Pattern, Sequence

from .ast import UNKNOWN_ORE, MiningContext, ParsedSession, StrengthWord, TraceObservation
from .lexer import Line, fold, split_lines
from .quality import QualityAdjective, find_adjective

logger = logging.getLogger(__name__)

START_TRIGGERS = (
    'you start to analyse the shard',
    'you start to analyze the shard',
    'you start to analyse the ore',
    'you start to analyze the ore',
    'you start to gather fragments of the rock',
)

END_TRIGGERS = (
    'you finish analysing',
    'you finish analyzing',
    'you finish gathering',
    'you stop analysing',
    'you stop analyzing',
    'you stop gathering',
)

FILLER_NAMES = frozenset({
    'shards',
    'rock shards',
    'stone shards',
    'rock',
    'rocks',
    'stone',
    'dirt',
    'sand',
    'gravel',
    'rubble',
    'debris',
})

_UNKNOWN_MARKERS = ('something', 'cannot make it out', 'cannot quite make it out', 'indistinct shape')

_LEADING_WORDS = {'a', 'an', 'the', 'some'}
_TRAILING_WORDS = {'ore', 'vein', 'here'}

_quality_phrase_re = re.compile(r'\b(?:poor|decent|normal|good|very good|utmost)\s+quality\b')
_non_letter_re = re.compile(r'[^a-z\s]')

_mine_re = re.compile(r'^you would mine (?P<desc>.+?)\s*\.?$', re.IGNORECASE)
_max_ql_re = re.compile(r'^it has a max(?:imum)? quality of (?P<ql>\d+)\s*\.?$', re.IGNORECASE)
_trace_re = re.compile(
    r'^you (?:spot|see|notice|detect|find)\b.*?'
    r'\b(?P<strength>slight|faint|minuscule|vague|indistinct)\s+trace\s+of\s+'
    r'(?P<desc>.+?)\s*\((?P<direction>[^()]*)\)\s*\.?$',
    re.IGNORECASE,
)


class ParseFailure(ValueError):
    """Raised when a pasted block contains no usable session."""


@dataclass
class ParseOptions:
    """Parser knobs.

    ``lookback_lines`` lets the mining context be read from lines printed just
    before the start trigger; trace lines are only ever read after it.
    """

    lookback_lines: int = 0


def normalize_ore(desc: str) -> Optional[str]:
    """Reduce an ore descriptor to its bare lower-case name.

    Returns ``None`` for bulk filler material and for descriptors with no name left.
    """

    s = _quality_phrase_re.sub(' ', fold(desc))
    s = _non_letter_re.sub(' ', s)
    words = s.split()
    while True:
        if words and words[0] in _LEADING_WORDS:
            words = words[1:]
        elif words[:2] == ['vein', 'of']:
            words = words[2:]
        else:
            break
    while words and words[-1] in _TRAILING_WORDS:
        words = words[:-1]
    name = ' '.join(words)
    if not name or name in FILLER_NAMES or 'shards' in words:
        return None
    return name


def is_unknown_descriptor(desc: str) -> bool:
    low = fold(desc)
    return any(marker in low for marker in _UNKNOWN_MARKERS)


class _SessionBuilder:
    def __init__(self):
        self.mine_ore: Optional[str] = None
        self.mine_quality: Optional[QualityAdjective] = None
        self.mine_exact: Optional[int] = None
        self.mine_line = 0
        self.mine_pending = False
        self.traces: List[TraceObservation] = []

    def build(self) -> ParsedSession:
        context = None
        if self.mine_ore is not None:
            context = MiningContext(
                ore=self.mine_ore,
                exact_quality=self.mine_exact,
                quality=self.mine_quality,
                line=self.mine_line,
            )
        return ParsedSession(mining_context=context, traces=tuple(self.traces))


def _apply_mine(b: _SessionBuilder, m: re.Match, line_no: int) -> None:
    desc = m.group('desc')
    ore = normalize_ore(desc)
    b.mine_exact = None
    b.mine_line = line_no
    if ore is None:
        logger.debug('line %d: mining context names filler %r, dropped', line_no, desc)
        b.mine_ore = None
        b.mine_quality = None
        b.mine_pending = False
        return
    b.mine_ore = ore
    b.mine_quality = find_adjective(desc)
    b.mine_pending = True


def _apply_max_quality(b: _SessionBuilder, m: re.Match, line_no: int) -> None:
    if not b.mine_pending:
        logger.debug('line %d: max quality without a mining context, ignored', line_no)
        return
    b.mine_exact = int(m.group('ql'))
    b.mine_pending = False


def _apply_trace(b: _SessionBuilder, m: re.Match, line_no: int) -> None:
    strength = StrengthWord(m.group('strength').lower())
    desc = m.group('desc')
    direction = m.group('direction').strip()
    if is_unknown_descriptor(desc):
        b.traces.append(TraceObservation(UNKNOWN_ORE, strength, direction, None, line_no))
        return
    quality = find_adjective(desc)
    if quality is None:
        logger.debug('line %d: trace of %r has no quality adjective, dropped', line_no, desc)
        return
    ore = normalize_ore(desc)
    if ore is None:
        logger.debug('line %d: trace of filler %r, dropped', line_no, desc)
        return
    b.traces.append(TraceObservation(ore, strength, direction, quality, line_no))


class Rule(NamedTuple):
    name: str
    pattern: Pattern[str]
    apply: Callable[[_SessionBuilder, re.Match, int], None]


RULES: Sequence[Rule] = (
    Rule('mining_context', _mine_re, _apply_mine),
    Rule('max_quality', _max_ql_re, _apply_max_quality),
    Rule('trace', _trace_re, _apply_trace),
)

MINING_RULES: Sequence[Rule] = RULES[:2]


def match_rule(text: str, rules: Sequence[Rule] = RULES):
    """Return ``(rule, match)`` for the first rule matching ``text``, else ``None``."""
    for rule in rules:
        m = rule.pattern.match(text)
        if m:
            return rule, m
    return None


def _feed(b: _SessionBuilder, lines: Sequence[Line], rules: Sequence[Rule]) -> None:
    for line_no, text in lines:
        hit = match_rule(text, rules)
        if hit is None:
            continue
        rule, m = hit
        if rule.name not in ('mining_context', 'max_quality'):
            b.mine_pending = False
        rule.apply(b, m, line_no)


def _find_start(lines: Sequence[Line]) -> Optional[int]:
    for idx, (_, text) in enumerate(lines):
        low = fold(text)
        if any(trigger in low for trigger in START_TRIGGERS):
            return idx
    return None


def _find_end(lines: Sequence[Line], start: int) -> int:
    for idx in range(start + 1, len(lines)):
        low = fold(lines[idx][1])
        if any(trigger in low for trigger in END_TRIGGERS):
            return idx
    return len(lines)


def parse_session(text: str, options: Optional[ParseOptions] = None) -> ParsedSession:
    options = options or ParseOptions()
    lines = split_lines(text)
    start = _find_start(lines)
    if start is None:
        raise ParseFailure(f'no usable session: no start trigger in {len(lines)} line(s)')
    end = _find_end(lines, start)

    b = _SessionBuilder()
    if options.lookback_lines > 0:
        _feed(b, lines[max(0, start - options.lookback_lines):start], MINING_RULES)
    _feed(b, lines[start:end], RULES)

    session = b.build()
    logger.debug(
        'Parsed session from lines %d-%d: mining_context=%s, %d trace(s)',
        lines[start][0],
        lines[end - 1][0],
        session.mining_context,
        len(session.traces),
    )
    return session


def try_parse_session(text: str, options: Optional[ParseOptions] = None) -> Optional[ParsedSession]:
    try:
        return parse_session(text, options)
    except ParseFailure as exc:
        logger.info('%s', exc)
        return None
