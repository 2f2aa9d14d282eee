# -*- coding: utf-8 -*-
"""Configs for petdoku."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from omegaconf import OmegaConf

from petdoku.common.constants import (
    DEFAULT_FILL_PERCENTAGE,
    DEFAULT_TICK_INTERVAL,
    LOG_LEVEL_ENV_VAR,
    OverwritePolicy,
)
from petdoku.engine import PUZZLE_DERIVERS, PuzzleDeriver
from petdoku.utils.log import get_logger

logger = get_logger(__name__)


@dataclass
class GameConfig:
    """Configuration for puzzle creation and move handling."""

    # percentage of the 81 cells left filled in a new puzzle, 0..100
    fill_percentage: int = DEFAULT_FILL_PERCENTAGE
    # key in PUZZLE_DERIVERS, or a dotted class path
    deriver_type: str = "random_removal"
    # `validated`, `permissive` or `reject`
    overwrite_policy: str = OverwritePolicy.VALIDATED.value
    # fixed seed for reproducible puzzles, None for fresh entropy
    seed: Optional[int] = None
    max_generate_attempts: int = 3


@dataclass
class ClockConfig:
    tick_interval: float = DEFAULT_TICK_INTERVAL  # seconds between timer ticks


@dataclass
class ServiceConfig:
    """Configs for the HTTP service."""

    listen_address: str = "localhost"
    port: int = 8020


@dataclass
class LogConfig:
    """Configs for logger."""

    level: str = "INFO"  # default log level (DEBUG, INFO, WARNING, ERROR)


@dataclass
class Config:
    """Global Configuration"""

    project: str = "petdoku"
    name: str = "game"

    game: GameConfig = field(default_factory=GameConfig)
    clock: ClockConfig = field(default_factory=ClockConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)
    log: LogConfig = field(default_factory=LogConfig)

    def _check_game(self) -> None:
        fill = self.game.fill_percentage
        if isinstance(fill, bool) or not isinstance(fill, int) or not 0 <= fill <= 100:
            raise ValueError(f"`game.fill_percentage` must be an int in [0, 100], got {fill}")
        try:
            self.game.overwrite_policy = OverwritePolicy(self.game.overwrite_policy).value
        except ValueError:
            raise ValueError(
                f"Unknown `game.overwrite_policy` {self.game.overwrite_policy}, "
                f"expected one of {[p.value for p in OverwritePolicy]}"
            )
        if self.game.deriver_type not in PUZZLE_DERIVERS and "." not in self.game.deriver_type:
            raise ValueError(
                f"Unknown `game.deriver_type` {self.game.deriver_type}, "
                f"expected one of {PUZZLE_DERIVERS.keys()} or a dotted class path"
            )
        try:
            deriver_cls = PUZZLE_DERIVERS.get(self.game.deriver_type)
        except ImportError as e:
            raise ValueError(f"Cannot load `game.deriver_type` {self.game.deriver_type}: {e}") from e
        if not (isinstance(deriver_cls, type) and issubclass(deriver_cls, PuzzleDeriver)):
            raise ValueError(
                f"`game.deriver_type` {self.game.deriver_type} is not a PuzzleDeriver subclass"
            )
        if self.game.max_generate_attempts < 1:
            raise ValueError("`game.max_generate_attempts` must be at least 1")
        if self.game.overwrite_policy == OverwritePolicy.PERMISSIVE.value:
            logger.warning(
                "`game.overwrite_policy` is `permissive`: occupied cells can be overwritten "
                "even when the new symbol conflicts with its row, column or box."
            )

    def _check_clock(self) -> None:
        if self.clock.tick_interval <= 0:
            raise ValueError(f"`clock.tick_interval` must be positive, got {self.clock.tick_interval}")

    def _check_service(self) -> None:
        if not 0 < self.service.port < 65536:
            raise ValueError(f"`service.port` out of range: {self.service.port}")

    def check_and_update(self) -> Config:
        """Validate the config and normalize aliased values in place."""
        self._check_game()
        self._check_clock()
        self._check_service()
        self.log.level = self.log.level.upper()
        return self

    def get_envs(self) -> Dict[str, str]:
        """Get the environment variables from the config."""
        return {
            LOG_LEVEL_ENV_VAR: self.log.level,
        }


def load_config(config_path: str) -> Config:
    """Load the configuration from the given path."""
    schema = OmegaConf.structured(Config)
    yaml_config = OmegaConf.load(config_path)
    try:
        config = OmegaConf.merge(schema, yaml_config)
        return OmegaConf.to_object(config)
    except Exception as e:
        raise ValueError(f"Invalid configuration: {e}") from e
