"""Fixed-interval timer ticks for a running game."""

import asyncio
from typing import Optional

from petdoku.common.constants import DEFAULT_TICK_INTERVAL
from petdoku.engine.game import SudokuGame
from petdoku.utils.log import get_logger


class GameClock:
    """Drives `SudokuGame.tick()` once per `tick_interval` seconds.

    Call `sync()` after every game transition: the tick task exists only
    while the game timer runs and the game is not won, and there is never
    more than one of it.
    """

    def __init__(self, game: SudokuGame, tick_interval: float = DEFAULT_TICK_INTERVAL):
        self.game = game
        self.tick_interval = tick_interval
        self.tick_task: Optional[asyncio.Task] = None
        self.logger = get_logger(__name__)

    @property
    def running(self) -> bool:
        return self.tick_task is not None and not self.tick_task.done()

    def sync(self) -> None:
        """Start or cancel the tick task to match the game state."""
        should_run = self.game.is_timer_running and not self.game.is_won
        if should_run and not self.running:
            self.tick_task = asyncio.create_task(self._tick_loop())
            self.logger.debug("Clock started.")
        elif not should_run and self.running:
            self.tick_task.cancel()
            self.tick_task = None
            self.logger.debug("Clock cancelled.")

    async def stop(self) -> None:
        if self.tick_task is None:
            return
        self.tick_task.cancel()
        try:
            await self.tick_task
        except asyncio.CancelledError:
            pass
        self.tick_task = None

    async def _tick_loop(self) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            if not self.game.tick():
                break
