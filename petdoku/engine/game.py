# -*- coding: utf-8 -*-
"""Game state engine: owns the play board and applies player moves."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

from petdoku.common.constants import (
    DEFAULT_FILL_PERCENTAGE,
    EMPTY,
    GRID_SIZE,
    SYMBOLS,
    MoveResult,
    OverwritePolicy,
)
from petdoku.engine.deriver import cells_to_clear
from petdoku.engine.generator import SudokuGenerator
from petdoku.engine.judge import Grid, SudokuJudge
from petdoku.utils.log import get_logger

if TYPE_CHECKING:
    from petdoku.common.config import GameConfig


def format_time(seconds: int) -> str:
    """Format elapsed seconds as zero-padded `MM:SS`."""
    mins, secs = divmod(int(seconds), 60)
    return f"{mins:02d}:{secs:02d}"


class SudokuGame:
    """
    Single-player Sudoku game state.

    The game owns one board and four pieces of auxiliary state:
    `selected_symbol`, `elapsed_seconds`, `is_timer_running` and `is_won`.
    Every transition is synchronous and leaves the object in a consistent
    state; callers read it through `snapshot()` or the read-only properties.

    Transitions:
    - `select_symbol`: choose the symbol that the next click places
    - `interact_cell`: clear, place, overwrite or reject at one cell
    - `tick`: advance the timer by one second while it runs
    - `start_new_game` / `load_puzzle`: reset everything for a fresh board

    Once `is_won` is set no transition changes the board or the timer until
    a new game starts.
    """

    def __init__(
        self,
        fill_percentage: int = DEFAULT_FILL_PERCENTAGE,
        overwrite_policy: Union[str, OverwritePolicy] = OverwritePolicy.VALIDATED,
        deriver_type: str = "random_removal",
        generator: Optional[SudokuGenerator] = None,
        new_game: bool = True,
    ):
        """
        Args:
            fill_percentage (int): Default percentage of cells filled in new puzzles.
            overwrite_policy (str | OverwritePolicy): Handling of clicks on cells
                that hold a different symbol.
            deriver_type (str): Key of the puzzle deriver in `PUZZLE_DERIVERS`.
            generator (SudokuGenerator): Source of solved boards. A fresh,
                unseeded generator is used if omitted.
            new_game (bool): Whether to generate the first puzzle right away.
        """
        cells_to_clear(fill_percentage)  # validates the range
        self.fill_percentage = fill_percentage
        self.overwrite_policy = OverwritePolicy(overwrite_policy)
        self.deriver_type = deriver_type
        self.generator = generator if generator is not None else SudokuGenerator()
        self.logger = get_logger(__name__)

        self._board: Grid = [[EMPTY] * GRID_SIZE for _ in range(GRID_SIZE)]
        self._solution: Optional[Grid] = None
        self.selected_symbol: Optional[int] = None
        self.elapsed_seconds = 0
        self.is_timer_running = False
        self.is_won = False

        if new_game:
            self.start_new_game()

    @classmethod
    def from_config(cls, config: GameConfig, new_game: bool = True) -> SudokuGame:
        return cls(
            fill_percentage=config.fill_percentage,
            overwrite_policy=config.overwrite_policy,
            deriver_type=config.deriver_type,
            generator=SudokuGenerator(
                seed=config.seed, max_attempts=config.max_generate_attempts
            ),
            new_game=new_game,
        )

    @property
    def board(self) -> Grid:
        """A copy of the current board."""
        return [row[:] for row in self._board]

    @property
    def solution(self) -> Optional[Grid]:
        """A copy of the answer key, if known."""
        if self._solution is None:
            return None
        return [row[:] for row in self._solution]

    @property
    def elapsed(self) -> str:
        return format_time(self.elapsed_seconds)

    def start_new_game(self, fill_percentage: Optional[int] = None) -> None:
        """Generate a new solution and puzzle and reset all state."""
        if fill_percentage is None:
            fill_percentage = self.fill_percentage
        puzzle, solution = self.generator.generate(fill_percentage, deriver=self.deriver_type)
        self.fill_percentage = fill_percentage
        self.load_puzzle(puzzle, solution)
        self.logger.info(
            f"New game with {fill_percentage}% filled "
            f"({cells_to_clear(fill_percentage)} empty cells)."
        )

    def load_puzzle(self, puzzle: Grid, solution: Optional[Grid] = None) -> None:
        """Reset all state and play on the given board."""
        if len(puzzle) != GRID_SIZE or any(len(row) != GRID_SIZE for row in puzzle):
            raise ValueError(f"Puzzle must be {GRID_SIZE}x{GRID_SIZE}")
        self._board = [row[:] for row in puzzle]
        self._solution = [row[:] for row in solution] if solution is not None else None
        self.selected_symbol = None
        self.elapsed_seconds = 0
        self.is_timer_running = False
        self.is_won = False
        # a fully given board is won before the first move
        if SudokuJudge.is_solved(self._board):
            self._win()

    def select_symbol(self, symbol: int) -> bool:
        """Select the symbol placed by the next cell interaction.

        Returns:
            bool: False if the game is already won and the selection was ignored.
        """
        if isinstance(symbol, bool) or symbol not in SYMBOLS:
            raise ValueError(f"Symbol must be one of {SYMBOLS}, got {symbol!r}")
        if self.is_won:
            return False
        self.selected_symbol = symbol
        return True

    def interact_cell(self, row: int, col: int) -> MoveResult:
        """Apply the selected symbol to (row, col)."""
        if not (0 <= row < GRID_SIZE and 0 <= col < GRID_SIZE):
            raise ValueError(f"Cell ({row}, {col}) is outside the board")
        if self.selected_symbol is None or self.is_won:
            return MoveResult.IGNORED

        symbol = self.selected_symbol
        current = self._board[row][col]

        if current == symbol:
            self._board[row][col] = EMPTY
            return MoveResult.CLEARED

        fits = SudokuJudge.is_valid_move(self._board, row, col, symbol)
        if current == EMPTY:
            result = MoveResult.PLACED if fits else MoveResult.REJECTED
        elif self.overwrite_policy == OverwritePolicy.PERMISSIVE or (
            self.overwrite_policy == OverwritePolicy.VALIDATED and fits
        ):
            result = MoveResult.OVERWRITTEN
        else:
            result = MoveResult.REJECTED

        if result == MoveResult.REJECTED:
            self.logger.debug(f"Rejected symbol {symbol} at ({row}, {col}).")
            return result

        self._board[row][col] = symbol
        if not self.is_timer_running:
            self.is_timer_running = True
        if SudokuJudge.is_solved(self._board):
            self._win()
        return result

    def tick(self) -> bool:
        """Advance the timer by one second.

        Returns:
            bool: Whether the timer advanced.
        """
        if not self.is_timer_running or self.is_won:
            return False
        self.elapsed_seconds += 1
        return True

    def snapshot(self) -> dict:
        """Read-only view for the presentation layer."""
        return {
            "board": self.board,
            "selected_symbol": self.selected_symbol,
            "elapsed_seconds": self.elapsed_seconds,
            "elapsed": self.elapsed,
            "is_timer_running": self.is_timer_running,
            "is_won": self.is_won,
            "fill_percentage": self.fill_percentage,
        }

    def _win(self) -> None:
        self.is_won = True
        self.is_timer_running = False
        self.logger.info(f"Congratulations! You won in {self.elapsed}!")
