import pytest

from veinmap import ParseFailure, ParseOptions, make_entry, parse_session, solve, try_parse_session
from veinmap.ast import UNKNOWN_ORE, StrengthWord
from veinmap.lexer import fold, split_lines, strip_timestamp
from veinmap.parser import RULES, match_rule, normalize_ore
from veinmap.quality import QualityAdjective


def session_text(*lines: str, start: str = 'You start to analyse the shard.') -> str:
    body = [start, *lines]
    return '\n'.join(f'[12:00:{idx:02d}] {line}' for idx, line in enumerate(body))


def test_strip_timestamp_and_split_lines():
    assert strip_timestamp('[01:02:03] You notice something.') == 'You notice something.'
    assert strip_timestamp('no stamp') == 'no stamp'
    lines = split_lines('[01:02:03] first\r\n\n   \n[01:02:04] second')
    assert lines == [(1, 'first'), (4, 'second')]
    assert fold('  Very   GOOD quality ') == 'very good quality'


def test_no_start_trigger_is_parse_failure():
    text = '[12:00:00] You notice a slight trace of normal quality iron (east).'
    with pytest.raises(ParseFailure) as excinfo:
        parse_session(text)
    assert 'no usable session' in str(excinfo.value)
    assert try_parse_session(text) is None


@pytest.mark.parametrize(
    'start',
    [
        'You start to analyse the shard.',
        'You start to analyze the shard.',
        'You start to analyse the ore.',
        'You start to analyze the ore.',
        'You start to gather fragments of the rock.',
    ],
)
def test_all_start_triggers_open_a_session(start):
    session = parse_session(session_text('You spot a vague trace of good quality tin (north).', start=start))
    assert len(session.traces) == 1


def test_trace_line_is_parsed():
    session = parse_session(session_text('You notice a slight trace of normal quality iron (east).'))
    assert session.mining_context is None
    (trace,) = session.traces
    assert trace.ore == 'iron'
    assert trace.quality is QualityAdjective.NORMAL
    assert trace.strength is StrengthWord.SLIGHT
    assert trace.direction == 'east'
    assert trace.group.band == '40-59'


def test_very_good_wins_over_good():
    session = parse_session(session_text('You spot a faint trace of very good quality silver ore (south of west).'))
    (trace,) = session.traces
    assert trace.quality is QualityAdjective.VERY_GOOD
    assert trace.ore == 'silver'
    assert trace.direction == 'south of west'


@pytest.mark.parametrize(
    'line',
    [
        'You spot an indistinct trace of something, but cannot quite make it out (east of north).',
        'You notice a minuscule trace of an indistinct shape, you cannot make it out (west).',
    ],
)
def test_unknown_trace_uses_sentinel(line):
    session = parse_session(session_text(line))
    (trace,) = session.traces
    assert trace.ore == UNKNOWN_ORE
    assert trace.quality is None
    assert trace.group.band is None


def test_indistinct_strength_is_read_before_trace():
    session = parse_session(
        session_text('You spot an indistinct trace of something, but cannot quite make it out (east of north).')
    )
    assert session.traces[0].strength is StrengthWord.INDISTINCT


def test_known_ore_without_quality_is_dropped():
    session = parse_session(session_text('You notice a slight trace of iron (east).'))
    assert session.traces == ()


def test_unrecognized_lines_are_ignored():
    session = parse_session(
        session_text(
            '<Bob> anyone selling iron?',
            'You notice a slight trace of normal quality iron (east).',
            'The weather is fine.',
        )
    )
    assert len(session.traces) == 1


def test_lines_before_start_and_after_end_are_ignored():
    text = '\n'.join(
        [
            'You notice a slight trace of utmost quality gold (north).',
            'You start to analyse the shard.',
            'You notice a slight trace of normal quality iron (east).',
            'You finish analysing the shard.',
            'You notice a vague trace of poor quality zinc (west).',
        ]
    )
    session = parse_session(text)
    assert [trace.ore for trace in session.traces] == ['iron']


def test_mining_context_with_exact_quality():
    session = parse_session(
        session_text('You would mine iron ore here.', 'It has a max quality of 96.')
    )
    ctx = session.mining_context
    assert ctx.ore == 'iron'
    assert ctx.exact_quality == 96
    assert ctx.group.band == '95-99'


def test_mining_context_with_adjective_only():
    session = parse_session(session_text('You would mine good quality copper ore here.'))
    ctx = session.mining_context
    assert ctx.ore == 'copper'
    assert ctx.exact_quality is None
    assert ctx.quality is QualityAdjective.GOOD
    assert ctx.group.band == '60-79'


def test_mining_context_without_quality_has_no_group():
    session = parse_session(session_text('You would mine tin ore here.'))
    assert session.mining_context.ore == 'tin'
    assert session.mining_context.group is None


def test_filler_mining_context_produces_no_observation():
    session = parse_session(
        session_text('You would mine rock shards here.', 'It has a max quality of 40.')
    )
    assert session.mining_context is None
    assert session.traces == ()
    assert session.is_empty


def test_max_quality_must_follow_mining_line():
    session = parse_session(
        session_text('It has a max quality of 70.', 'You would mine iron ore here.')
    )
    assert session.mining_context.exact_quality is None


def test_max_quality_after_other_lines_is_ignored():
    session = parse_session(
        session_text(
            'You would mine iron ore here.',
            'You notice a slight trace of normal quality tin (east).',
            'It has a max quality of 70.',
        )
    )
    assert session.mining_context.ore == 'iron'
    assert session.mining_context.exact_quality is None
    assert len(session.traces) == 1


def test_shards_mining_line_does_not_lock_a_vein():
    text = session_text('You would mine shards of rock here.', 'It has a max quality of 40.')
    assert parse_session(text).is_empty
    assert solve([make_entry((0, 0), text)]).veins == []


def test_lookback_reads_mining_context_before_start():
    text = '\n'.join(
        [
            'You would mine iron ore here.',
            'It has a max quality of 55.',
            'You start to analyse the ore.',
            'You notice a slight trace of normal quality iron (east).',
        ]
    )
    assert parse_session(text).mining_context is None
    ctx = parse_session(text, ParseOptions(lookback_lines=5)).mining_context
    assert ctx.ore == 'iron'
    assert ctx.exact_quality == 55


@pytest.mark.parametrize(
    'desc, expected',
    [
        ('iron ore', 'iron'),
        ('a vein of iron ore here', 'iron'),
        ('utmost quality rock salt', 'rock salt'),
        ('Normal quality Iron!', 'iron'),
        ('rock shards', None),
        ('shards of rock', None),
        ('some iron shards', None),
        ('stone', None),
        ('ore', None),
    ],
)
def test_normalize_ore(desc, expected):
    assert normalize_ore(desc) == expected


def test_rule_table_order_is_mining_then_quality_then_trace():
    assert [rule.name for rule in RULES] == ['mining_context', 'max_quality', 'trace']
    rule, _ = match_rule('It has a max quality of 12.')
    assert rule.name == 'max_quality'
    assert match_rule('hello there') is None
