import random
from typing import Optional

from petdoku.common.constants import CELL_COUNT, EMPTY, GRID_SIZE
from petdoku.engine.judge import Grid


def cells_to_clear(fill_percentage: int) -> int:
    """Number of cells to empty so that `fill_percentage` percent stay filled.

    Equals ``floor(81 * (1 - fill_percentage / 100))``, computed on integers.
    """
    if (
        isinstance(fill_percentage, bool)
        or not isinstance(fill_percentage, int)
        or not 0 <= fill_percentage <= 100
    ):
        raise ValueError(f"fill_percentage must be an int in [0, 100], got {fill_percentage!r}")
    return CELL_COUNT * (100 - fill_percentage) // 100


class PuzzleDeriver:
    """Turns a solved board into a playable puzzle by clearing cells.

    No uniqueness check is made: the source solution is only guaranteed to be
    one valid completion of the result.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def derive(self, solution: Grid, fill_percentage: int) -> Grid:
        puzzle = [row[:] for row in solution]
        filled = sum(1 for row in puzzle for v in row if v != EMPTY)
        holes = min(cells_to_clear(fill_percentage), filled)
        self._remove_cells(puzzle, holes)
        return puzzle

    def _remove_cells(self, board: Grid, holes: int) -> None:
        raise NotImplementedError


class RandomRemovalDeriver(PuzzleDeriver):
    """Clears uniformly random cells, retrying picks that are already empty."""

    def _remove_cells(self, board: Grid, holes: int) -> None:
        removed = 0
        while removed < holes:
            r = self.rng.randrange(GRID_SIZE)
            c = self.rng.randrange(GRID_SIZE)
            if board[r][c] != EMPTY:
                board[r][c] = EMPTY
                removed += 1


class ShuffledRemovalDeriver(PuzzleDeriver):
    """Shuffles all positions once and clears the first `holes` of them."""

    def _remove_cells(self, board: Grid, holes: int) -> None:
        cells = [(i, j) for i in range(GRID_SIZE) for j in range(GRID_SIZE)]
        self.rng.shuffle(cells)

        for i in range(min(holes, CELL_COUNT)):
            r, c = cells[i]
            board[r][c] = EMPTY
