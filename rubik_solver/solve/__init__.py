# rubik_solver/solve/__init__.py
from __future__ import annotations

from typing import Optional

from rubik_solver.config import DEFAULT_CONFIG, SolverConfig
from rubik_solver.core.cube_state import CubeState
from rubik_solver.solve.bfs_solver import bfs_solve, solve_2x2
from rubik_solver.solve.iddfs_solver import iddfs_solve, solve_3x3
from rubik_solver.solve.reduction_solver import solve_4x4
from rubik_solver.solve.result import SolveResult

__all__ = ["SolveResult", "bfs_solve", "iddfs_solve", "solve", "solve_2x2", "solve_3x3", "solve_4x4"]


def solve(state: CubeState, config: Optional[SolverConfig] = None, seed: Optional[int] = None) -> SolveResult:
    """Resuelve un cubo de cualquier tamaño soportado con el solver que le corresponde."""
    config = config or DEFAULT_CONFIG
    if state.n == 2:
        moves = solve_2x2(state, config)
        if moves is None:
            return SolveResult.fail(
                f"No se encontró solución para el 2x2 dentro de {config.bfs_max_depth} movimientos."
            )
        return SolveResult.ok(moves)
    if state.n == 3:
        return solve_3x3(state, config)
    return solve_4x4(state, config, seed=seed)
