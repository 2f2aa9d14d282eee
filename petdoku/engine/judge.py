from typing import List

from petdoku.common.constants import BOX_SIZE, EMPTY, GRID_SIZE, SYMBOLS

Grid = List[List[int]]

_SYMBOL_SET = frozenset(SYMBOLS)


class SudokuJudge:
    """
    Judge 9x9 Sudoku board state.

    - `is_valid_move` checks a single candidate against the peers of a cell
    - `is_valid` allows incomplete boards (zeros are treated as empty cells)
    - `is_solved` is the win condition: full and every unit a permutation of 1..9
    """

    @staticmethod
    def is_valid_move(board: Grid, row: int, col: int, value: int) -> bool:
        """
        Check whether `value` may go at (row, col).

        The target cell itself is not examined, only its 20 distinct peers
        in the same row, column and 3x3 box.
        """
        for c in range(GRID_SIZE):
            if c != col and board[row][c] == value:
                return False

        for r in range(GRID_SIZE):
            if r != row and board[r][col] == value:
                return False

        br = row - row % BOX_SIZE
        bc = col - col % BOX_SIZE
        for r in range(br, br + BOX_SIZE):
            for c in range(bc, bc + BOX_SIZE):
                if (r, c) != (row, col) and board[r][c] == value:
                    return False

        return True

    @staticmethod
    def units(board: Grid) -> List[List[int]]:
        """All 27 units of the board: 9 rows, 9 columns, 9 boxes."""
        rows = [list(row) for row in board]
        cols = [[board[r][c] for r in range(GRID_SIZE)] for c in range(GRID_SIZE)]
        boxes = []
        for br in range(0, GRID_SIZE, BOX_SIZE):
            for bc in range(0, GRID_SIZE, BOX_SIZE):
                boxes.append(
                    [
                        board[r][c]
                        for r in range(br, br + BOX_SIZE)
                        for c in range(bc, bc + BOX_SIZE)
                    ]
                )
        return rows + cols + boxes

    @staticmethod
    def is_valid(board: Grid) -> bool:
        for unit in SudokuJudge.units(board):
            nums = [v for v in unit if v != EMPTY]
            if len(nums) != len(set(nums)):
                return False
        return True

    @staticmethod
    def is_complete(board: Grid) -> bool:
        return all(v != EMPTY for row in board for v in row)

    @staticmethod
    def is_solved(board: Grid) -> bool:
        if not SudokuJudge.is_complete(board):
            return False
        return all(
            len(unit) == GRID_SIZE and set(unit) == _SYMBOL_SET
            for unit in SudokuJudge.units(board)
        )

    @staticmethod
    def is_solution_of(board: Grid, puzzle: Grid) -> bool:
        """Whether `board` is solved and keeps every given of `puzzle`."""
        if not SudokuJudge.is_solved(board):
            return False
        return all(
            puzzle[r][c] == EMPTY or puzzle[r][c] == board[r][c]
            for r in range(GRID_SIZE)
            for c in range(GRID_SIZE)
        )
