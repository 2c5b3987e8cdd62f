import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

from veinmap import (
    EntryValidationError,
    ParseFailure,
    ParseOptions,
    ResolverConfig,
    SessionHistory,
    SolveOptions,
    expand_paste,
    format_solution,
    render_grid,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _parse_entry_arg(value: str) -> Tuple[Tuple[int, int], str]:
    """Parse ``X,Y:SOURCE`` or ``(X,Y):SOURCE``.

    The parenthesised form lets a negative X through argparse, which would
    otherwise read ``-3,2:log`` as an unknown option.
    """

    coords, sep, source = value.partition(":")
    coords = coords.strip()
    if coords.startswith("(") and coords.endswith(")"):
        coords = coords[1:-1]
    parts = [part.strip() for part in coords.split(",")]
    if not sep or not source or len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected X,Y:SOURCE, got {value!r}")
    try:
        position = (int(parts[0]), int(parts[1]))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid coordinates in {value!r}") from exc
    return position, source


def _read_source(source: str) -> str:
    if source.lower().startswith(("http://", "https://")):
        return expand_paste(source)
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Triangulate ore veins from analysing logs")
    parser.add_argument(
        "entries",
        nargs="*",
        type=_parse_entry_arg,
        help=(
            "Entries as X,Y:SOURCE or (X,Y):SOURCE where SOURCE is a log file, '-' or a "
            "paste link; use the parenthesised form or '--' before a negative X"
        ),
    )
    parser.add_argument(
        "-e",
        "--entry",
        dest="extra_entries",
        action="append",
        default=[],
        type=_parse_entry_arg,
        metavar="X,Y:SOURCE",
        help="Add an entry after the positional ones; write --entry=-3,2:log for a negative X",
    )
    parser.add_argument(
        "--relative",
        action="store_true",
        help="Treat X,Y as steps from the previous entry instead of absolute tiles",
    )
    parser.add_argument("--history", help="Load a saved entry log before adding entries")
    parser.add_argument("--save", help="Write the entry log to this path")
    parser.add_argument(
        "--max-distance",
        type=int,
        default=None,
        help="Clamp every strength band to this many tiles",
    )
    parser.add_argument(
        "--compound-half-plane",
        action="store_true",
        help="Let 'A of B' directions keep only the half of the octant nearer B",
    )
    parser.add_argument(
        "--lookback",
        type=int,
        default=0,
        help="Lines before the start trigger searched for the mining context (default: 0)",
    )
    parser.add_argument("--grid", action="store_true", help="Print an ASCII map of the veins")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    try:
        resolver = ResolverConfig(
            max_distance=args.max_distance,
            compound_half_plane=args.compound_half_plane,
        )
    except ValueError as exc:
        parser.error(str(exc))
    options = SolveOptions(resolver=resolver)
    parse_options = ParseOptions(lookback_lines=args.lookback)

    try:
        if args.history:
            logger.info("Loading entry log from %s", args.history)
            history = SessionHistory.load(args.history, options, parse_options)
        else:
            history = SessionHistory(options, parse_options)

        for position, source in [*args.entries, *args.extra_entries]:
            text = _read_source(source)
            history.add_entry(position, text, relative=args.relative)
    except (ParseFailure, EntryValidationError) as exc:
        logger.error("Entry rejected: %s", exc)
        raise SystemExit(1)
    except OSError as exc:
        logger.error("Cannot read input: %s", exc)
        raise SystemExit(1)

    solution = history.solution
    print(format_solution(solution))
    if args.grid:
        grid = render_grid(solution)
        if grid:
            print()
            print(grid)

    if args.save:
        output_path = Path(args.save)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        history.save(output_path)
        logger.info("Entry log written to %s", output_path)


if __name__ == "__main__":
    main(sys.argv[1:])
