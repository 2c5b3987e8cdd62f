import re
from typing import List, Tuple

Line = Tuple[int, str]  # (line number, text without timestamp)

_timestamp_re = re.compile(r'^\s*\[\d{1,2}:\d{2}(?::\d{2})?\]\s*')
_newline_re = re.compile(r'\r?\n')
_ws_re = re.compile(r'\s+')


def strip_timestamp(s: str) -> str:
    return _timestamp_re.sub('', s).strip()


def fold(s: str) -> str:
    """Lower-case ``s`` and collapse runs of whitespace."""
    return _ws_re.sub(' ', s.lower()).strip()


def split_lines(text: str) -> List[Line]:
    lines: List[Line] = []
    for idx, raw in enumerate(_newline_re.split(text or ''), start=1):
        s = strip_timestamp(raw)
        if s:
            lines.append((idx, s))
    return lines
