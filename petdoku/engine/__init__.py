# -*- coding: utf-8 -*-
"""Puzzle engine: constraint checking, generation, derivation and play."""
from petdoku.engine.deriver import PuzzleDeriver, cells_to_clear
from petdoku.engine.judge import Grid, SudokuJudge
from petdoku.utils.registry import Registry

PUZZLE_DERIVERS: Registry = Registry(
    "puzzle_derivers",
    default_mapping={
        "random_removal": "petdoku.engine.deriver.RandomRemovalDeriver",
        "shuffled_removal": "petdoku.engine.deriver.ShuffledRemovalDeriver",
    },
)

__all__ = [
    "Grid",
    "PUZZLE_DERIVERS",
    "PuzzleDeriver",
    "SudokuJudge",
    "cells_to_clear",
]
