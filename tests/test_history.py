import json

import pytest

from veinmap import EntryValidationError, ParseFailure, SessionHistory, solve
from veinmap.solver import ResolverConfig, SolveOptions, VeinState


def clue(text: str) -> str:
    return f'You start to analyse the shard.\nYou notice a {text}.\n'


EAST = clue('slight trace of normal quality iron (east)')
WEST = clue('slight trace of normal quality iron (west)')
SOUTHWEST = clue('slight trace of normal quality iron (southwest)')


def _fingerprint(veins):
    return [(v.group, v.feasible_tiles, v.state) for v in veins]


def test_add_undo_redo_reset():
    history = SessionHistory()
    history.add_entry((0, 0), EAST)
    history.add_entry((5, 0), WEST)
    assert len(history.entries) == 2
    assert history.summary().veins == 1

    undone = history.undo()
    assert undone.position == (5, 0)
    assert len(history.veins[0].feasible_tiles) == 5
    assert history.can_redo

    history.redo()
    assert len(history.veins[0].feasible_tiles) == 4
    assert not history.can_redo

    history.reset()
    assert history.entries == ()
    assert history.veins == []
    assert history.undo() is None
    assert history.redo() is None


def test_adding_after_undo_drops_redo():
    history = SessionHistory()
    history.add_entry((0, 0), EAST)
    history.undo()
    history.add_entry((0, 0), WEST)
    assert not history.can_redo
    assert history.redo() is None


def test_parse_failure_stores_nothing():
    history = SessionHistory()
    history.add_entry((0, 0), EAST)
    with pytest.raises(ParseFailure):
        history.add_entry((1, 1), 'just chatting')
    assert len(history.entries) == 1


def test_invalid_position_is_rejected():
    history = SessionHistory()
    with pytest.raises(EntryValidationError):
        history.add_entry((0.5, 1), EAST)
    assert history.entries == ()


def test_relative_positions_step_from_previous_entry():
    history = SessionHistory()
    history.add_entry((2, 3), EAST, relative=True)
    history.add_entry((3, -3), WEST, relative=True)
    assert [e.position for e in history.entries] == [(2, 3), (5, 0)]


def test_cached_solution_is_invalidated_on_every_mutation():
    history = SessionHistory()
    history.add_entry((0, 0), EAST)
    first = history.solution
    assert history.solution is first
    history.add_entry((5, 0), WEST)
    assert history.solution is not first


def test_undo_then_readd_matches_fresh_solve():
    history = SessionHistory()
    for position, text in [((0, 0), EAST), ((5, 0), WEST), ((2, 1), SOUTHWEST)]:
        history.add_entry(position, text)
    expected = _fingerprint(solve(list(history.entries)).veins)

    history.undo()
    history.add_entry((2, 1), SOUTHWEST)

    assert _fingerprint(history.veins) == expected
    assert history.veins[0].state is VeinState.LOCKED


def test_json_round_trip_recomputes_veins(tmp_path):
    history = SessionHistory()
    history.add_entry((0, 0), EAST)
    history.add_entry((5, 0), WEST)

    payload = json.loads(history.to_json())
    assert payload['version'] == 1
    assert payload['entries'][1] == {'position': [5, 0], 'text': WEST}
    assert 'veins' not in payload

    path = tmp_path / 'log.json'
    history.save(path)
    restored = SessionHistory.load(path)
    assert restored.entries == history.entries
    assert _fingerprint(restored.veins) == _fingerprint(history.veins)


def test_from_json_rejects_bad_payloads():
    with pytest.raises(EntryValidationError):
        SessionHistory.from_json('{"version": 99, "entries": []}')
    with pytest.raises(EntryValidationError):
        SessionHistory.from_json('{"version": 1, "entries": [{"text": "x"}]}')
    with pytest.raises(EntryValidationError, match='not valid JSON'):
        SessionHistory.from_json('{"version": 1,')


def test_history_uses_its_solve_options():
    history = SessionHistory(SolveOptions(resolver=ResolverConfig(max_distance=1)))
    history.add_entry((0, 0), EAST)
    assert history.veins[0].locked_tile == (1, 0)
