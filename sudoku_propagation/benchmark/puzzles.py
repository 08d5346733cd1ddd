"""Reading and writing puzzle files."""

from __future__ import annotations
import json
import os
from typing import Any, List

from ..core.grid import Grid


def load_puzzles(path: str) -> List[Grid]:
    """
    Load every puzzle in a file.

    JSON files may hold a single 9x9 array (one row per list), a list of
    such arrays, a list of 81-character strings, or a list of objects with
    a "puzzle" key. Any other file holds one 81-character puzzle per line;
    blank lines and lines starting with '#' are skipped.

    Args:
        path: File to read.

    Returns:
        The puzzles in file order.
    """
    with open(path, "r") as f:
        if path.endswith(".json"):
            return _from_json(json.load(f))
        return [
            Grid.from_string(line)
            for line in (raw.strip() for raw in f)
            if line and not line.startswith("#")
        ]


def _from_json(data: Any) -> List[Grid]:
    if _is_grid_rows(data):
        return [Grid.from_2d_list(data)]
    if not isinstance(data, list):
        raise ValueError("JSON puzzle file must hold a 9x9 array or a list of puzzles")

    puzzles = []
    for item in data:
        if isinstance(item, dict):
            item = item["puzzle"]
        if isinstance(item, str):
            puzzles.append(Grid.from_string(item))
        elif _is_grid_rows(item):
            puzzles.append(Grid.from_2d_list(item))
        else:
            raise ValueError(f"Unrecognised puzzle entry: {item!r}")
    return puzzles


def _is_grid_rows(data: Any) -> bool:
    return (
        isinstance(data, list)
        and len(data) == 9
        and all(isinstance(row, list) and len(row) == 9 for row in data)
        and all(isinstance(v, int) for row in data for v in row)
    )


def save_puzzles(puzzles: List[Grid], path: str) -> None:
    """Write puzzles one per line in the 81-character format."""
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, "w") as f:
        for puzzle in puzzles:
            f.write(puzzle.to_string())
            f.write("\n")
