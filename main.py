import argparse
import logging

from config import CELL_SIZE, MAX_CELL_SIZE, MIN_CELL_SIZE
from gridsnake import SnakeWindow


def main():
    parser = argparse.ArgumentParser(description="Play Snake on a resizable grid.")
    parser.add_argument("--cell-size", type=int, default=CELL_SIZE,
                        help=f"Edge length of one grid cell in pixels ({MIN_CELL_SIZE}-{MAX_CELL_SIZE})")
    parser.add_argument("--debug", action="store_true", help="Log engine state transitions")
    args = parser.parse_args()

    if not MIN_CELL_SIZE <= args.cell_size <= MAX_CELL_SIZE:
        parser.error(f"--cell-size must be between {MIN_CELL_SIZE} and {MAX_CELL_SIZE}")

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    window = SnakeWindow(cell_size=args.cell_size)
    window.run()


if __name__ == "__main__":
    main()
