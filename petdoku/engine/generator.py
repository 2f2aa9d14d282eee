import random
from typing import Optional, Tuple

from petdoku.common.constants import EMPTY, GRID_SIZE, SYMBOLS
from petdoku.engine import PUZZLE_DERIVERS
from petdoku.engine.judge import Grid, SudokuJudge
from petdoku.utils.log import get_logger


class SudokuGenerator:
    """
    Sudoku solution generator using randomized backtracking.

    Features:
    - Fills an empty 9x9 board cell by cell in row-major order
    - Shuffles the candidates of every cell, so each call yields a different solution
    - Delegates puzzle creation to a registered `PuzzleDeriver`
    """

    def __init__(self, seed: Optional[int] = None, max_attempts: int = 3):
        """
        Initialize the generator.

        Args:
            seed (Optional[int]): Seed of the private random source. None draws
                fresh entropy from the operating system.
            max_attempts (int): Number of fresh boards tried before giving up.
        """
        self.rng = random.Random(seed)
        self.max_attempts = max_attempts
        self.logger = get_logger(__name__)

    def generate_solution(self) -> Grid:
        """
        Generate a fully solved board.

        Returns:
            list[list[int]]: A 9x9 board where every row, column and box is a
                permutation of 1..9.

        Raises:
            RuntimeError: If no attempt produced a solution.
        """
        for attempt in range(1, self.max_attempts + 1):
            board = [[EMPTY for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]
            if self._fill_board(board, 0, 0):
                self.logger.debug(f"Generated solution on attempt {attempt}.")
                return board
            self.logger.error(
                f"Backtracking exhausted every candidate on attempt {attempt}/{self.max_attempts}."
            )
        raise RuntimeError(f"Failed to generate a solved board after {self.max_attempts} attempts")

    def generate(
        self, fill_percentage: int, deriver: str = "random_removal"
    ) -> Tuple[Grid, Grid]:
        """
        Generate a puzzle and its solution.

        Args:
            fill_percentage (int): Percentage of cells left filled, 0..100.
            deriver (str): Key of the deriver in `PUZZLE_DERIVERS`.

        Returns:
            tuple: (puzzle, solution), where puzzle contains zeros for empty cells.
        """
        solution = self.generate_solution()
        deriver_cls = PUZZLE_DERIVERS.get(deriver)
        puzzle = deriver_cls(rng=self.rng).derive(solution, fill_percentage)
        return puzzle, solution

    def _fill_board(self, board: Grid, row: int, col: int) -> bool:
        """
        Recursively fill the board from (row, col) onwards.

        Args:
            board (list[list[int]]): Board being filled, mutated in place.
            row (int): Row of the current cell.
            col (int): Column of the current cell.

        Returns:
            bool: True if the board is completely filled.
        """
        if col == GRID_SIZE:
            row, col = row + 1, 0
        if row == GRID_SIZE:
            return True

        if board[row][col] != EMPTY:
            return self._fill_board(board, row, col + 1)

        nums = list(SYMBOLS)
        self.rng.shuffle(nums)

        for v in nums:
            if SudokuJudge.is_valid_move(board, row, col, v):
                board[row][col] = v
                if self._fill_board(board, row, col + 1):
                    return True
                board[row][col] = EMPTY

        return False
