import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

from petdoku.cli import launcher
from petdoku.common.constants import LOG_LEVEL_ENV_VAR, PETS
from petdoku.engine.game import SudokuGame
from tests.tools import TEMPLATE_CONFIG_PATH, board_with_holes, solved_board


def make_game() -> SudokuGame:
    game = SudokuGame(new_game=False)
    game.load_puzzle(board_with_holes([(0, 0), (4, 4)]), solved_board())
    return game


class TestLauncher(unittest.TestCase):
    def setUp(self):
        env_patch = mock.patch.dict(os.environ)
        env_patch.start()
        self.addCleanup(env_patch.stop)

    def _write_config(self, text: str) -> str:
        temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(temp_dir.cleanup)
        path = os.path.join(temp_dir.name, "config.yaml")
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def test_generate_digits(self):
        out = io.StringIO()
        with redirect_stdout(out):
            launcher.main(["generate", "--fill", "100", "--seed", "1", "--digits"])
        text = out.getvalue()
        self.assertIn("Puzzle:", text)
        self.assertIn("Solution:", text)
        self.assertNotIn("·", text)

    def test_generate_icons_from_config(self):
        out = io.StringIO()
        with redirect_stdout(out):
            launcher.main(["generate", "--config", TEMPLATE_CONFIG_PATH, "--seed", "2"])
        self.assertIn("·", out.getvalue())
        self.assertTrue(any(icon in out.getvalue() for _, icon in PETS.values()))

    def test_invalid_fill_exits(self):
        with self.assertRaises(SystemExit):
            launcher.main(["generate", "--fill", "150"])

    def test_unloadable_deriver_exits(self):
        path = self._write_config("game:\n  deriver_type: no.such.Deriver\n")
        with self.assertRaises(SystemExit):
            launcher.main(["generate", "--config", path])

    def test_exports_log_level(self):
        path = self._write_config("log:\n  level: debug\n")
        with redirect_stdout(io.StringIO()):
            launcher.main(["generate", "--config", path, "--seed", "4"])
        self.assertEqual(os.environ[LOG_LEVEL_ENV_VAR], "DEBUG")

    def test_play_dispatch(self):
        with mock.patch.object(launcher, "_play_loop", new=mock.AsyncMock()) as loop:
            launcher.main(["play", "--fill", "40", "--seed", "3"])
        loop.assert_awaited_once()
        game = loop.await_args.args[0]
        self.assertEqual(sum(row.count(0) for row in game.board), 48)


class TestPlayCommands(unittest.TestCase):
    def test_commands(self):
        game = make_game()
        self.assertEqual(launcher._handle_command(game, "c 1 1", False), "Select a pet first.")
        self.assertEqual(launcher._handle_command(game, "s 3", False), "Selected 3.")
        self.assertEqual(
            launcher._handle_command(game, "c 1 1", False), "That pet does not fit there."
        )
        launcher._handle_command(game, "s 5", False)
        self.assertEqual(launcher._handle_command(game, "c 1 1", False), "")
        self.assertEqual(game.board[0][0], 5)
        message = launcher._handle_command(game, "c 5 5", False)
        self.assertTrue(message.startswith("Congratulations! You won in"))
        self.assertEqual(launcher._handle_command(game, "c 5 5", False), "The game is over.")

    def test_misc_commands(self):
        game = make_game()
        self.assertIsNone(launcher._handle_command(game, "q", False))
        self.assertEqual(launcher._handle_command(game, "   ", False), "")
        self.assertIn("Commands:", launcher._handle_command(game, "h", False))
        self.assertTrue(launcher._handle_command(game, "s ten", False).startswith("Invalid"))
        self.assertTrue(launcher._handle_command(game, "c 0 1", True).startswith("Invalid"))
        self.assertTrue(launcher._handle_command(game, "dance", False).startswith("Unknown"))

    def test_new_game_command(self):
        game = make_game()
        self.assertEqual(launcher._handle_command(game, "n 100", False), "New game.")
        self.assertTrue(game.is_won)
        self.assertTrue(launcher._handle_command(game, "n 200", False).startswith("Invalid"))


class TestPlayLoop(unittest.IsolatedAsyncioTestCase):
    async def test_loop_until_quit(self):
        game = make_game()
        clock = launcher.GameClock(game, tick_interval=0.01)
        inputs = iter(["s 5", "c 1 1", "q"])
        out = io.StringIO()
        with mock.patch("builtins.input", side_effect=lambda prompt="": next(inputs)):
            with redirect_stdout(out):
                await launcher._play_loop(game, clock, icons=False)
        self.assertEqual(game.board[0][0], 5)
        self.assertIsNone(clock.tick_task)
        self.assertIn("Time:", out.getvalue())

    async def test_loop_stops_on_eof(self):
        game = make_game()
        clock = launcher.GameClock(game, tick_interval=0.01)
        out = io.StringIO()
        with mock.patch("builtins.input", side_effect=EOFError):
            with redirect_stdout(out):
                await launcher._play_loop(game, clock, icons=False)
        self.assertFalse(clock.running)
