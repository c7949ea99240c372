# rubik_solver/core/__init__.py
from rubik_solver.core.cube_state import ANCHOR_COLORS, COLORS, FACES, CubeState, is_solved, solved_state
from rubik_solver.core.move_engine import EngineDefectError, MoveEngine, apply_move, apply_moves, engine_for

__all__ = [
    "ANCHOR_COLORS",
    "COLORS",
    "FACES",
    "CubeState",
    "EngineDefectError",
    "MoveEngine",
    "apply_move",
    "apply_moves",
    "engine_for",
    "is_solved",
    "solved_state",
]
