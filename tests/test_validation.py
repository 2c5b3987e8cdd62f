import pytest

from veinmap.validate import EntryValidationError, validate_entry, validate_position


@pytest.mark.parametrize('position', [(0, 0), [3, -4], (10**6, -(10**6))])
def test_validate_accepts_integer_pairs(position):
    assert validate_position(position) == tuple(position)


@pytest.mark.parametrize(
    'position, message_part',
    [
        ((1,), 'expected an (x, y) pair'),
        ('1,2', 'expected an (x, y) pair'),
        ((1.5, 2), 'position x'),
        ((1, '2'), 'position y'),
        ((True, 2), 'position x'),
    ],
)
def test_validate_rejects_bad_positions(position, message_part):
    with pytest.raises(EntryValidationError) as exc:
        validate_position(position)
    assert message_part in str(exc.value)


def test_validate_entry_requires_text():
    assert validate_entry((1, 2), 'log') == (1, 2)
    with pytest.raises(EntryValidationError) as exc:
        validate_entry((1, 2), None)
    assert 'expected pasted log text' in str(exc.value)
