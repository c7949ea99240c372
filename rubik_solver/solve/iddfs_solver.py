# rubik_solver/solve/iddfs_solver.py
from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from rubik_solver.config import DEFAULT_CONFIG, SolverConfig
from rubik_solver.core.cube_state import CubeHash, CubeState, solved_state, stickers_solved
from rubik_solver.core.move_engine import MoveEngine, engine_for
from rubik_solver.logic.validator import validate
from rubik_solver.solve.result import SolveResult

logger = logging.getLogger(__name__)

OnDepthCallback = Callable[[int], None]
ShouldCancelCallback = Callable[[], bool]

MOVES: List[str] = [
    "F", "F'", "F2",
    "R", "R'", "R2",
    "U", "U'", "U2",
    "B", "B'", "B2",
    "L", "L'", "L2",
    "D", "D'", "D2",
]

# Caras opuestas conmutan: sólo se explora el orden B->F, L->R, D->U
SKIP_PAIRS: FrozenSet[Tuple[str, str]] = frozenset({("F", "B"), ("R", "L"), ("U", "D")})

SOLVED = "solved"
TIMEOUT = "timeout"
CANCELLED = "cancelled"
EXHAUSTED = "exhausted"


@lru_cache(maxsize=4)
def distance_table(depth: int) -> Dict[CubeHash, int]:
    """Tabla de distancias exactas al resuelto para los estados a `depth` o menos.

    Se genera una sola vez por proceso con una expansión en anchura desde el resuelto
    (los movimientos son cerrados bajo inversión, así que la distancia desde el resuelto
    es también la distancia hasta el resuelto). Es de sólo lectura.

    Args:
        depth: Profundidad de la expansión.

    Returns:
        Diccionario estado -> cantidad mínima de movimientos para resolverlo.
    """
    engine = engine_for(3)
    start = solved_state(3).to_hashable()
    table: Dict[CubeHash, int] = {start: 0}
    frontier = [start]
    for d in range(1, depth + 1):
        nxt = []
        for stickers in frontier:
            for mv in MOVES:
                child = engine.permute(stickers, mv)
                if child not in table:
                    table[child] = d
                    nxt.append(child)
        frontier = nxt
    logger.debug("Tabla de distancias 3x3: profundidad %d, %d estados", depth, len(table))
    return table


class _Search:
    """DFS con cota (una iteración de IDA*) y chequeo periódico de reloj/cancelación."""

    def __init__(
        self,
        engine: MoveEngine,
        table: Dict[CubeHash, int],
        table_depth: int,
        deadline: float,
        check_interval: int,
        should_cancel: Optional[ShouldCancelCallback],
    ) -> None:
        self.engine = engine
        self.table = table
        self.miss = table_depth + 1
        self.deadline = deadline
        self.check_interval = check_interval
        self.should_cancel = should_cancel
        self.nodes = 0
        self.aborted: Optional[str] = None

    def dfs(self, stickers: CubeHash, g: int, bound: int, last_face: Optional[str], path: List[str]) -> bool:
        """DFS limitado en profundidad.

        Args:
            stickers: Estado actual.
            g: Movimientos aplicados hasta aquí.
            bound: Profundidad total permitida en esta iteración.
            last_face: Cara del último movimiento (para podas).
            path: Ruta acumulada; queda con la solución si se devuelve True.

        Returns:
            True si se llegó al resuelto dentro de la cota.
        """
        self.nodes += 1
        if self.nodes % self.check_interval == 0:
            if time.monotonic() > self.deadline:
                self.aborted = TIMEOUT
            elif self.should_cancel is not None and self.should_cancel():
                self.aborted = CANCELLED
        if self.aborted is not None:
            return False

        if stickers_solved(stickers, 3):
            return True

        # Cota inferior admisible: exacta dentro de la tabla, profundidad + 1 fuera de ella
        if g + self.table.get(stickers, self.miss) > bound:
            return False

        for mv in MOVES:
            face = mv[0]
            if last_face is not None:
                # Poda 1: no repetir la misma cara dos veces seguidas
                if face == last_face:
                    continue
                # Poda 2: un solo orden para caras opuestas
                if (last_face, face) in SKIP_PAIRS:
                    continue

            path.append(mv)
            if self.dfs(self.engine.permute(stickers, mv), g + 1, bound, face, path):
                return True

            # Backtrack
            path.pop()
            if self.aborted is not None:
                return False

        return False


def iddfs_search(
    state: CubeState,
    max_depth: Optional[int] = None,
    on_depth: Optional[OnDepthCallback] = None,
    should_cancel: Optional[ShouldCancelCallback] = None,
    time_limit: Optional[float] = None,
    config: Optional[SolverConfig] = None,
) -> Tuple[Optional[List[str]], str]:
    """Busca una solución del 3x3 con profundización iterativa (IDA*).

    El límite de profundidad crece de 1 a `max_depth`; en cada iteración se ejecuta un
    DFS con esa cota exacta, así que la primera solución encontrada es de la menor
    profundidad posible. Podas:
    - Evita repetir la misma cara consecutivamente (por ejemplo: U seguido de U/U'/U2).
    - Para caras opuestas (que conmutan) sólo explora un orden.
    - Corta ramas cuya cota inferior de distancia supera lo que queda de presupuesto.

    El reloj y la cancelación se consultan cada `config.node_check_interval` nodos.

    Args:
        state: Cubo 3x3 a resolver.
        max_depth: Profundidad máxima que se probará (por defecto `config.iddfs_max_depth`).
        on_depth: Callback opcional que se llama con la profundidad actual probada.
        should_cancel: Callback opcional para cancelar la búsqueda (retorna True si se cancela).
        time_limit: Presupuesto de reloj en segundos (por defecto `config.iddfs_time_limit`).
        config: Límites de búsqueda, intervalo de chequeo y profundidad de la tabla.

    Returns:
        Tupla (solución o None, estado) donde estado es "solved", "timeout",
        "cancelled" o "exhausted".
    """
    config = config or DEFAULT_CONFIG
    if state.n != 3:
        raise ValueError(f"El solver IDDFS es para 3x3 (se recibió {state.n}x{state.n}).")
    if max_depth is None:
        max_depth = config.iddfs_max_depth
    if time_limit is None:
        time_limit = config.iddfs_time_limit

    if state.is_solved():
        return [], SOLVED

    table = distance_table(config.pruning_depth)
    search = _Search(
        engine_for(3),
        table,
        config.pruning_depth,
        time.monotonic() + time_limit,
        config.node_check_interval,
        should_cancel,
    )
    start = state.to_hashable()

    for depth_limit in range(1, max_depth + 1):
        if should_cancel is not None and should_cancel():
            return None, CANCELLED

        if on_depth is not None:
            on_depth(depth_limit)

        path: List[str] = []
        if search.dfs(start, 0, depth_limit, None, path):
            logger.debug("IDDFS 3x3: solución de %d movimientos (%d nodos)", len(path), search.nodes)
            return list(path), SOLVED

        if search.aborted is not None:
            logger.debug("IDDFS 3x3: búsqueda interrumpida (%s) en profundidad %d", search.aborted, depth_limit)
            return None, search.aborted

        logger.debug("IDDFS 3x3: profundidad %d agotada (%d nodos)", depth_limit, search.nodes)

    return None, EXHAUSTED


def iddfs_solve(
    state: CubeState,
    max_depth: Optional[int] = None,
    on_depth: Optional[OnDepthCallback] = None,
    should_cancel: Optional[ShouldCancelCallback] = None,
    time_limit: Optional[float] = None,
    config: Optional[SolverConfig] = None,
) -> Optional[List[str]]:
    """Como `iddfs_search`, pero devuelve sólo la solución (o None).

    Si el cubo ya está resuelto, retorna una lista vacía.
    """
    solution, _ = iddfs_search(state, max_depth, on_depth, should_cancel, time_limit, config)
    return solution


def solve_3x3(
    state: CubeState,
    config: Optional[SolverConfig] = None,
    on_depth: Optional[OnDepthCallback] = None,
    should_cancel: Optional[ShouldCancelCallback] = None,
) -> SolveResult:
    """Valida y resuelve un 3x3.

    Returns:
        `SolveResult` con la solución, o con el motivo del fallo (configuración inválida,
        tiempo agotado, cancelación o profundidad agotada).
    """
    config = config or DEFAULT_CONFIG

    check = validate(state)
    if not check.valid:
        logger.warning("Configuración 3x3 inválida: %s", check.error)
        return SolveResult.fail(check.error or "Configuración inválida.")

    if state.is_solved():
        return SolveResult.ok([])

    solution, status = iddfs_search(state, on_depth=on_depth, should_cancel=should_cancel, config=config)
    if solution is not None:
        return SolveResult.ok(solution)

    if status == TIMEOUT:
        msg = (f"Se agotó el tiempo de búsqueda ({config.iddfs_time_limit:g} s). "
               "Prueba con una mezcla más corta.")
    elif status == CANCELLED:
        msg = "Búsqueda cancelada."
    else:
        msg = "No se encontró solución. El cubo puede estar en un estado imposible."
    logger.warning("Solver 3x3 sin solución: %s", msg)
    return SolveResult.fail(msg)
