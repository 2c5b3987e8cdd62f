"""Entry log with undo/redo; the only retained state around the solver."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from .ast import Entry, Tile
from .parser import ParseOptions, parse_session
from .solver import Solution, SolveOptions, SolveSummary, VeinInstance, solve
from .validate import EntryValidationError, validate_entry, validate_position

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def make_entry(position: Any, raw_text: Any, parse_options: Optional[ParseOptions] = None) -> Entry:
    """Validate and parse one submission; raises before anything is stored."""

    tile = validate_entry(position, raw_text)
    session = parse_session(raw_text, parse_options)
    return Entry(position=tile, raw_text=raw_text, session=session)


class SessionHistory:
    def __init__(
        self,
        options: Optional[SolveOptions] = None,
        parse_options: Optional[ParseOptions] = None,
    ):
        self.options = options or SolveOptions()
        self.parse_options = parse_options or ParseOptions()
        self._entries: List[Entry] = []
        self._redo: List[Entry] = []
        self._solution: Optional[Solution] = None

    @property
    def entries(self) -> Tuple[Entry, ...]:
        return tuple(self._entries)

    @property
    def can_undo(self) -> bool:
        return bool(self._entries)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def _invalidate(self) -> None:
        self._solution = None

    def resolve_position(self, position: Any, *, relative: bool = False) -> Tile:
        tile = validate_position(position)
        if not relative:
            return tile
        last = self._entries[-1].position if self._entries else (0, 0)
        return last[0] + tile[0], last[1] + tile[1]

    def add_entry(self, position: Any, raw_text: str, *, relative: bool = False) -> Entry:
        """Parse ``raw_text`` read at ``position`` and append it.

        With ``relative=True`` the position is a step from the previous entry.
        ``ParseFailure`` and ``EntryValidationError`` propagate and leave the log untouched.
        """

        entry = make_entry(self.resolve_position(position, relative=relative), raw_text, self.parse_options)
        self._entries.append(entry)
        self._redo.clear()
        self._invalidate()
        logger.info(
            "Added entry %d at %s with %d trace(s)",
            len(self._entries),
            entry.position,
            len(entry.session.traces),
        )
        return entry

    def undo(self) -> Optional[Entry]:
        if not self._entries:
            return None
        entry = self._entries.pop()
        self._redo.append(entry)
        self._invalidate()
        logger.info("Undid entry at %s", entry.position)
        return entry

    def redo(self) -> Optional[Entry]:
        if not self._redo:
            return None
        entry = self._redo.pop()
        self._entries.append(entry)
        self._invalidate()
        logger.info("Redid entry at %s", entry.position)
        return entry

    def reset(self) -> None:
        self._entries.clear()
        self._redo.clear()
        self._invalidate()
        logger.info("History reset")

    @property
    def solution(self) -> Solution:
        if self._solution is None:
            self._solution = solve(self._entries, self.options)
        return self._solution

    @property
    def veins(self) -> List[VeinInstance]:
        return self.solution.veins

    def summary(self) -> SolveSummary:
        return self.solution.summary()

    def to_json(self) -> str:
        payload = {
            "version": FORMAT_VERSION,
            "entries": [
                {"position": list(entry.position), "text": entry.raw_text}
                for entry in self._entries
            ],
        }
        return json.dumps(payload, indent=2)

    @classmethod
    def from_json(
        cls,
        data: str,
        options: Optional[SolveOptions] = None,
        parse_options: Optional[ParseOptions] = None,
    ) -> "SessionHistory":
        """Rebuild a history from its entry log; veins are recomputed, never loaded."""

        try:
            payload = json.loads(data)
        except json.JSONDecodeError as exc:
            raise EntryValidationError(f"history is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict) or payload.get("version") != FORMAT_VERSION:
            raise EntryValidationError(f"unsupported history format: {str(payload)[:80]!r}")
        history = cls(options, parse_options)
        for idx, item in enumerate(payload.get("entries", []), start=1):
            if not isinstance(item, dict) or "position" not in item or "text" not in item:
                raise EntryValidationError(f"[entry {idx}] expected position and text")
            history.add_entry(item["position"], item["text"])
        return history

    def save(self, path: Union[str, Path]) -> None:
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(
        cls,
        path: Union[str, Path],
        options: Optional[SolveOptions] = None,
        parse_options: Optional[ParseOptions] = None,
    ) -> "SessionHistory":
        return cls.from_json(Path(path).read_text(encoding="utf-8"), options, parse_options)
