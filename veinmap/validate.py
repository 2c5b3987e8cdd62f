import numbers
from typing import Any

from .ast import Tile


class EntryValidationError(ValueError):
    pass


def _ensure_coordinate(value: Any, axis: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise EntryValidationError(f'[position {axis}] expected an integer tile coordinate, got {value!r}')
    return int(value)


def validate_position(position: Any) -> Tile:
    if not isinstance(position, (list, tuple)) or len(position) != 2:
        raise EntryValidationError(f'[position] expected an (x, y) pair, got {position!r}')
    x, y = position
    return _ensure_coordinate(x, 'x'), _ensure_coordinate(y, 'y')


def validate_entry(position: Any, raw_text: Any) -> Tile:
    """Check one submission before it is parsed; returns the position as a tuple."""
    tile = validate_position(position)
    if not isinstance(raw_text, str):
        raise EntryValidationError(f'[text] expected pasted log text, got {type(raw_text).__name__}')
    return tile
