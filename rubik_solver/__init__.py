# rubik_solver/__init__.py
"""Modelo y solvers de cubos Rubik 2x2, 3x3 y 4x4."""
import logging

from rubik_solver.core import CubeState, apply_move, apply_moves, is_solved, solved_state
from rubik_solver.logic.scramble import generate_scramble
from rubik_solver.logic.validator import ValidationResult, validate
from rubik_solver.solve import SolveResult, solve, solve_2x2, solve_3x3, solve_4x4

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CubeState",
    "SolveResult",
    "ValidationResult",
    "apply_move",
    "apply_moves",
    "generate_scramble",
    "is_solved",
    "solve",
    "solve_2x2",
    "solve_3x3",
    "solve_4x4",
    "solved_state",
    "validate",
]
