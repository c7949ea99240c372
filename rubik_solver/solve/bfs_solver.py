# rubik_solver/solve/bfs_solver.py
from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

from rubik_solver.config import DEFAULT_CONFIG, SolverConfig
from rubik_solver.core.cube_state import CubeHash, CubeState, stickers_solved
from rubik_solver.core.move_engine import engine_for

logger = logging.getLogger(__name__)

# Con F, R y U basta: la esquina DBL nunca se mueve y cada estado se alcanza una sola vez.
MOVES: List[str] = [
    "F", "F'", "F2",
    "R", "R'", "R2",
    "U", "U'", "U2",
]


def bfs_solve(state: CubeState, max_depth: Optional[int] = None) -> Optional[List[str]]:
    """Busca una solución óptima del 2x2 con BFS (búsqueda en anchura).

    Cada estado visitado se guarda por su clave hasheable (todos los stickers en orden
    fijo) junto con su padre, para no volver a expandirlo y para reconstruir la ruta al
    final sin guardar una copia de la ruta por cada nodo en cola. Se descartan los
    movimientos que repiten la cara del movimiento anterior, porque se pueden fusionar
    en uno solo.

    Args:
        state: Cubo 2x2 a resolver.
        max_depth: Profundidad máxima (por defecto 11, el número de Dios del 2x2).

    Returns:
        La lista de movimientos más corta encontrada; `[]` si ya está resuelto; None si
        la cola se vacía sin llegar al resuelto (estado inalcanzable con F, R, U).

    Raises:
        ValueError: Si el estado no es de 2x2.
    """
    if state.n != 2:
        raise ValueError(f"El solver BFS es para 2x2 (se recibió {state.n}x{state.n}).")
    if max_depth is None:
        max_depth = DEFAULT_CONFIG.bfs_max_depth

    if state.is_solved():
        return []

    engine = engine_for(2)
    start = state.to_hashable()
    # Cada estado visitado apunta a su padre y al movimiento que llevó a él
    parents: Dict[CubeHash, Optional[Tuple[CubeHash, str]]] = {start: None}
    queue: Deque[Tuple[CubeHash, int, Optional[str]]] = deque([(start, 0, None)])

    while queue:
        stickers, depth, last_face = queue.popleft()
        if depth >= max_depth:
            continue

        for mv in MOVES:
            # Poda: no repetir la misma cara dos veces seguidas
            if mv[0] == last_face:
                continue

            child = engine.permute(stickers, mv)
            if child in parents:
                continue

            parents[child] = (stickers, mv)
            if stickers_solved(child, 2):
                logger.debug("BFS 2x2: solución de %d movimientos, %d estados visitados",
                             depth + 1, len(parents))
                return _path_to(parents, child)

            queue.append((child, depth + 1, mv[0]))

    logger.debug("BFS 2x2: sin solución tras %d estados", len(parents))
    return None


def _path_to(parents: Dict[CubeHash, Optional[Tuple[CubeHash, str]]], stickers: CubeHash) -> List[str]:
    """Reconstruye la ruta desde el inicio siguiendo los punteros al padre."""
    path: List[str] = []
    link = parents[stickers]
    while link is not None:
        stickers, mv = link
        path.append(mv)
        link = parents[stickers]
    path.reverse()
    return path


def solve_2x2(state: CubeState, config: Optional[SolverConfig] = None) -> Optional[List[str]]:
    """Punto de entrada del solver 2x2.

    Returns:
        Secuencia de movimientos o None si no hay solución dentro del límite.
    """
    config = config or DEFAULT_CONFIG
    return bfs_solve(state, max_depth=config.bfs_max_depth)
