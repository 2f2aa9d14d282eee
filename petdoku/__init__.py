# -*- coding: utf-8 -*-
"""Petdoku: a pet-icon Sudoku game engine."""

__version__ = "0.1.0"
