"""Example: three analysing readings narrow an iron vein down to one tile."""

from veinmap import SessionHistory, format_solution, render_grid

READINGS = [
    ((0, 0), "You start to analyse the shard.\nYou notice a slight trace of normal quality iron (east)."),
    ((5, 0), "You start to analyse the shard.\nYou notice a slight trace of normal quality iron (west)."),
    ((2, 1), "You start to analyse the shard.\nYou notice a slight trace of normal quality iron (southwest)."),
]


def main() -> None:
    history = SessionHistory()
    for position, text in READINGS:
        history.add_entry(position, text)
        print(format_solution(history.solution))
        print()
    print(render_grid(history.solution))


if __name__ == "__main__":
    main()
