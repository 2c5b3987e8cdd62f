from typing import Dict, List, Optional, Tuple

from .ast import Tile
from .solver import Solution, VeinInstance, VeinState
from .solver.utils import bounds, connected_components, label_anchor

REFERENCE_MARK = '@'
OPEN_MARK = '/'
OVERLAP_MARK = '#'
EMPTY_MARK = '.'


def tile_str(tile: Tile) -> str:
    return f'({tile[0]}, {tile[1]})'


def vein_title(vein: VeinInstance) -> str:
    quality = vein.display_quality
    return f'#{vein.id} {vein.display_name}' + (f' {quality}' if quality else '')


def format_vein(vein: VeinInstance) -> str:
    title = vein_title(vein)
    state = vein.state
    if state is VeinState.LOCKED:
        return f'{title}: locked at {tile_str(vein.locked_tile)}'
    if state is VeinState.CONTRADICTED:
        return f'{title}: contradicted, no remaining candidates'
    regions = connected_components(vein.feasible_tiles)
    anchors = ', '.join(tile_str(label_anchor(region)) for region in regions)
    return (
        f'{title}: open, {len(vein.feasible_tiles)} candidate tile(s) '
        f'in {len(regions)} region(s) around {anchors}'
    )


def format_solution(solution: Solution) -> str:
    summary = solution.summary()
    lines = [
        f'Entries: {summary.entries}  Veins: {summary.veins}  Locked: {summary.locked}  '
        f'Open: {summary.open}  Contradicted: {summary.contradicted}',
    ]
    for idx, (pos, groups) in enumerate(zip(solution.positions, solution.groups_per_entry), start=1):
        lines.append(f'  entry {idx} at {tile_str(pos)}: {groups} vein type(s)')
    if solution.veins:
        lines.append('Veins:')
        lines.extend(f'  {format_vein(vein)}' for vein in solution.veins)
    return '\n'.join(lines)


def _marker(vein: VeinInstance, *, anchor: bool) -> str:
    initial = '?' if vein.group.is_unknown else vein.display_name[:1]
    return initial.upper() if not anchor else initial.lower()


def _window(solution: Solution, margin: int, max_size: int) -> Optional[Tuple[int, int, int, int]]:
    tiles: List[Tile] = list(solution.positions)
    for vein in solution.veins:
        tiles.extend(vein.feasible_tiles)
    box = bounds(tiles)
    if box is None:
        return None
    min_x, max_x, min_y, max_y = box
    min_x, max_x, min_y, max_y = min_x - margin, max_x + margin, min_y - margin, max_y + margin
    if max_x - min_x + 1 > max_size:
        mid = (min_x + max_x) // 2
        min_x, max_x = mid - max_size // 2, mid - max_size // 2 + max_size - 1
    if max_y - min_y + 1 > max_size:
        mid = (min_y + max_y) // 2
        min_y, max_y = mid - max_size // 2, mid - max_size // 2 + max_size - 1
    return min_x, max_x, min_y, max_y


def render_grid(solution: Solution, *, margin: int = 1, max_size: int = 80) -> str:
    """Draw entries and veins as text, north up.

    ``@`` marks a reference tile, an upper-case initial a locked vein, ``/``
    an open candidate tile (``#`` where open veins overlap) and a lower-case
    initial the label anchor of an open region.
    """
    window = _window(solution, margin, max_size)
    if window is None:
        return ''
    min_x, max_x, min_y, max_y = window

    cells: Dict[Tile, str] = {}
    for vein in solution.veins:
        if vein.state is not VeinState.OPEN:
            continue
        for tile in vein.feasible_tiles:
            cells[tile] = OVERLAP_MARK if tile in cells else OPEN_MARK
    for vein in solution.veins:
        if vein.state is not VeinState.OPEN:
            continue
        for region in connected_components(vein.feasible_tiles):
            cells[label_anchor(region)] = _marker(vein, anchor=True)
    for vein in solution.veins:
        if vein.state is VeinState.LOCKED:
            cells[vein.locked_tile] = _marker(vein, anchor=False)
    for pos in solution.positions:
        cells[pos] = REFERENCE_MARK

    rows = []
    for y in range(max_y, min_y - 1, -1):
        rows.append(''.join(cells.get((x, y), EMPTY_MARK) for x in range(min_x, max_x + 1)))
    return '\n'.join(rows)
