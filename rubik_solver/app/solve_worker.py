# rubik_solver/app/solve_worker.py
from __future__ import annotations

import traceback
from typing import Optional

from PySide6.QtCore import QThread, Signal

from rubik_solver.config import DEFAULT_CONFIG, SolverConfig
from rubik_solver.core.cube_state import CubeState
from rubik_solver.solve import solve
from rubik_solver.solve.iddfs_solver import solve_3x3
from rubik_solver.solve.result import SolveResult


class SolveWorker(QThread):
    """Hilo de trabajo para buscar una solución del cubo sin bloquear la UI.

    Elige el solver según el tamaño del cubo (BFS 2x2, IDDFS 3x3 o reducción 4x4),
    emitiendo señales para informar progreso y resultado. La búsqueda en sí es
    código sincrónico; el hilo sólo evita bloquear el loop de eventos de quien llama.

    Signals:
        depth_update(int): Se emite cuando el solver 3x3 pasa a probar una nueva profundidad.
        finished_solution(object): Se emite al terminar con un `SolveResult`.
        error(str): Se emite si ocurre una excepción inesperada durante la búsqueda.
    """

    depth_update = Signal(int)          # profundidad actual
    finished_solution = Signal(object)  # SolveResult
    error = Signal(str)                 # traceback si algo falla

    def __init__(
        self,
        state: CubeState,
        config: Optional[SolverConfig] = None,
        seed: Optional[int] = None,
    ) -> None:
        """Crea el worker con su propia copia del estado.

        Args:
            state: Cubo a resolver (2x2, 3x3 o 4x4).
            config: Límites de búsqueda; por defecto `DEFAULT_CONFIG`.
            seed: Semilla opcional para las perturbaciones del solver 4x4.
        """
        super().__init__()
        self.state: CubeState = state.copy()
        self.config: SolverConfig = config or DEFAULT_CONFIG
        self.seed: Optional[int] = seed
        self.result: Optional[SolveResult] = None

    def run(self) -> None:
        """Punto de entrada del hilo.

        Llama al solver correspondiente y emite el resultado por señales.
        """
        try:
            self.result = self._solve()
            self.finished_solution.emit(self.result)
        except Exception:
            msg = traceback.format_exc()
            self.error.emit(msg)

    def _solve(self) -> SolveResult:
        if self.state.n == 3:
            return solve_3x3(
                self.state,
                self.config,
                on_depth=self.depth_update.emit,
                should_cancel=self.isInterruptionRequested,
            )
        return solve(self.state, self.config, seed=self.seed)
