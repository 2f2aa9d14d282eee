import asyncio
from typing import Optional

from petdoku.common.config import Config
from petdoku.common.constants import MoveResult
from petdoku.engine.clock import GameClock
from petdoku.engine.game import SudokuGame
from petdoku.utils.log import get_logger


class GameService:
    """Owns one game and its clock, and serialises every mutation."""

    def __init__(self, config: Config, game: Optional[SudokuGame] = None):
        self.logger = get_logger(__name__)
        self.config = config
        self.game = game if game is not None else SudokuGame.from_config(config.game)
        self.clock = GameClock(self.game, tick_interval=config.clock.tick_interval)
        self.lock = asyncio.Lock()
        self.listen_address = config.service.listen_address
        self.port = config.service.port
        self.running = False
        self.serve_task: Optional[asyncio.Task] = None

    async def state(self) -> dict:
        async with self.lock:
            return self.game.snapshot()

    async def select_symbol(self, symbol: int) -> bool:
        async with self.lock:
            selected = self.game.select_symbol(symbol)
            self.clock.sync()
            return selected

    async def interact_cell(self, row: int, col: int) -> MoveResult:
        async with self.lock:
            result = self.game.interact_cell(row, col)
            self.clock.sync()
            if result.accepted and self.game.is_won:
                self.logger.info(f"Game won at {self.game.elapsed}.")
            return result

    async def start_new_game(self, fill_percentage: Optional[int] = None) -> dict:
        async with self.lock:
            await self.clock.stop()
            self.game.start_new_game(fill_percentage)
            self.clock.sync()
            return self.game.snapshot()

    async def serve(self) -> None:
        from petdoku.service.app import run_app

        if self.running:
            self.logger.warning("Server is already running.")
            return
        self.running = True
        self.logger.info(f"Serving petdoku on http://{self.listen_address}:{self.port}")
        self.serve_task = asyncio.create_task(
            run_app(service=self, listen_address=self.listen_address, port=self.port)
        )
        try:
            await self.serve_task
        except asyncio.CancelledError:
            pass
        finally:
            await self.clock.stop()
            self.running = False

    async def shutdown(self) -> None:
        await self.clock.stop()
        if not self.running:
            self.logger.warning("Server is not running.")
            return
        self.serve_task.cancel()
        try:
            await self.serve_task
        except asyncio.CancelledError:
            pass
        self.running = False
        self.logger.info("Game server shutdown.")
