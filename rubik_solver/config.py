# rubik_solver/config.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SolverConfig:
    """Límites de búsqueda de los solvers.

    Attributes:
        bfs_max_depth: Profundidad máxima del BFS 2x2 (número de Dios del 2x2).
        iddfs_max_depth: Profundidad tope del IDDFS 3x3.
        iddfs_time_limit: Presupuesto de reloj del IDDFS 3x3, en segundos.
        node_check_interval: Cada cuántos nodos se consulta el reloj / la cancelación.
        pruning_depth: Profundidad de la tabla de distancias alrededor del resuelto.
        centers_time_limit: Presupuesto de la fase de centros del 4x4, en segundos.
        centers_max_iterations: Tope de iteraciones de la fase de centros.
        edges_time_limit: Presupuesto de la fase de aristas del 4x4, en segundos.
        edges_max_iterations: Tope de iteraciones de la fase de aristas.
    """

    bfs_max_depth: int = 11
    iddfs_max_depth: int = 20
    iddfs_time_limit: float = 8.0
    node_check_interval: int = 50_000
    pruning_depth: int = 4
    centers_time_limit: float = 4.0
    centers_max_iterations: int = 300
    edges_time_limit: float = 4.0
    edges_max_iterations: int = 200


DEFAULT_CONFIG = SolverConfig()
