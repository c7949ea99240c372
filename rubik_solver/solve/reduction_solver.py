# rubik_solver/solve/reduction_solver.py
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from rubik_solver.config import DEFAULT_CONFIG, SolverConfig
from rubik_solver.core.cube_state import ANCHOR_COLORS, FACES, CubeHash, CubeState, Face
from rubik_solver.core.move_engine import MoveEngine, engine_for
from rubik_solver.solve.iddfs_solver import solve_3x3
from rubik_solver.solve.result import SolveResult

logger = logging.getLogger(__name__)

# Índices de una cara 4x4:
#  0  1  2  3
#  4  5  6  7
#  8  9 10 11
# 12 13 14 15
CENTER: Tuple[int, ...] = (5, 6, 9, 10)
CENTER_TOTAL = 24
EDGE_TOTAL = 12

# Cada arista lógica: dos stickers que deben coincidir en cada una de sus dos caras
EDGE_PAIRS: List[Tuple[Tuple[Face, int, int], Tuple[Face, int, int]]] = [
    (("U", 13, 14), ("F", 1, 2)),    # UF
    (("U", 1, 2), ("B", 1, 2)),      # UB
    (("U", 4, 8), ("L", 1, 2)),      # UL
    (("U", 7, 11), ("R", 1, 2)),     # UR
    (("D", 1, 2), ("F", 13, 14)),    # DF
    (("D", 13, 14), ("B", 13, 14)),  # DB
    (("D", 4, 8), ("L", 13, 14)),    # DL
    (("D", 7, 11), ("R", 13, 14)),   # DR
    (("F", 4, 8), ("L", 7, 11)),     # FL
    (("F", 7, 11), ("R", 4, 8)),     # FR
    (("B", 7, 11), ("L", 4, 8)),     # BL
    (("B", 4, 8), ("R", 7, 11)),     # BR
]

# Esquinas, un sticker por arista emparejada y un centro: posición 4x4 -> 3x3 (fila-columna)
PICK_3X3: Tuple[int, ...] = (0, 1, 3, 4, 5, 7, 12, 13, 15)

CENTER_MOVES: List[str] = [
    "u", "u'", "d", "d'", "r", "r'", "l", "l'", "f", "f'", "b", "b'",
    "U", "U'", "D", "D'", "F", "F'", "R", "R'", "B", "B'", "L", "L'",
]

EDGE_MOVES: List[str] = [
    "U", "U'", "U2", "D", "D'", "D2",
    "F", "F'", "F2", "R", "R'", "R2",
    "B", "B'", "B2", "L", "L'", "L2",
    "u", "u'", "d", "d'",
]

# Secuencias cortas (capa interna + externa) que emparejan aristas
EDGE_MACROS: List[List[str]] = [
    ["u'", "F", "u"],
    ["u'", "F'", "u"],
    ["u", "F", "u'"],
    ["u", "F'", "u'"],
    ["d", "F", "d'"],
    ["d", "F'", "d'"],
    ["d'", "F", "d"],
    ["u'", "R", "U'", "R'", "u"],
    ["u", "L'", "U", "L", "u'"],
    ["d", "R'", "D", "R", "d'"],
    ["d'", "L", "D'", "L'", "d"],
    ["u'", "R'", "F", "R", "u"],
    ["u", "L", "F'", "L'", "u'"],
]

MACRO_SETUPS: List[List[str]] = [
    [], ["U"], ["U'"], ["U2"], ["F"], ["F'"], ["R"], ["R'"], ["D"], ["D'"],
]

# Sólo capas externas: no tocan los centros ya resueltos
OUTER_KICK_MOVES: List[str] = [
    "U", "U'", "D", "D'", "F", "F'", "R", "R'", "B", "B'", "L", "L'",
]


def _flat(face: Face, index: int) -> int:
    return FACES.index(face) * 16 + index


_CENTER_CHECKS: List[Tuple[int, str]] = [
    (_flat(f, p), ANCHOR_COLORS[f]) for f in FACES for p in CENTER
]
_EDGE_CHECKS: List[Tuple[int, int, int, int]] = [
    (_flat(fa, a1), _flat(fa, a2), _flat(fb, b1), _flat(fb, b2))
    for (fa, a1, a2), (fb, b1, b2) in EDGE_PAIRS
]


def _center_score(stickers: CubeHash) -> int:
    return sum(1 for pos, color in _CENTER_CHECKS if stickers[pos] == color)


def _edge_score(stickers: CubeHash) -> int:
    return sum(1 for a, b, c, d in _EDGE_CHECKS if stickers[a] == stickers[b] and stickers[c] == stickers[d])


def center_score(state: CubeState) -> int:
    """Cantidad de stickers centrales (de 24) que tienen el color ancla de su cara."""
    return _center_score(state.stickers)


def edge_score(state: CubeState) -> int:
    """Cantidad de aristas (de 12) con sus dos stickers emparejados en ambas caras."""
    return _edge_score(state.stickers)


@dataclass
class PhaseResult:
    """Estado alcanzado al terminar una fase y los movimientos usados para llegar."""

    state: CubeState
    moves: List[str]


# --------------------------
# Búsqueda local (greedy)
# --------------------------
def _sequences(
    engine: MoveEngine,
    stickers: CubeHash,
    moves: Sequence[str],
    depth: int,
    last_face: Optional[str],
) -> Iterator[Tuple[List[str], CubeHash]]:
    """Enumera todas las secuencias de `depth` movimientos sin repetir cara seguida."""
    for mv in moves:
        if mv[0] == last_face:
            continue
        child = engine.permute(stickers, mv)
        if depth == 1:
            yield [mv], child
        else:
            for rest, leaf in _sequences(engine, child, moves, depth - 1, mv[0]):
                yield [mv] + rest, leaf


def _best_sequence(
    engine: MoveEngine,
    stickers: CubeHash,
    moves: Sequence[str],
    depth: int,
    evaluate: Callable[[CubeHash], Optional[int]],
    baseline: int,
) -> Optional[Tuple[List[str], CubeHash]]:
    """Busca la secuencia de `depth` movimientos que más mejora el puntaje.

    A profundidad 1 se revisan todos los movimientos. A profundidad 2 y 3 se corta
    después del primer movimiento inicial cuyo subárbol mejora el puntaje.

    Args:
        engine: Motor 4x4.
        stickers: Estado actual.
        moves: Alfabeto de movimientos permitido.
        depth: Largo de las secuencias a probar.
        evaluate: Puntaje de un estado, o None si el estado no es aceptable.
        baseline: Puntaje a superar.

    Returns:
        (secuencia, estado resultante) o None si nada supera `baseline`.
    """
    best: Optional[Tuple[List[str], CubeHash]] = None
    best_score = baseline
    for root in moves:
        child = engine.permute(stickers, root)
        if depth == 1:
            candidates: Iterator[Tuple[List[str], CubeHash]] = iter([([root], child)])
        else:
            candidates = (([root] + rest, leaf) for rest, leaf in
                          _sequences(engine, child, moves, depth - 1, root[0]))
        for seq, leaf in candidates:
            score = evaluate(leaf)
            if score is not None and score > best_score:
                best_score = score
                best = (seq, leaf)
        if depth > 1 and best is not None:
            break
    return best


# --------------------------
# Fase A: centros
# --------------------------
def solve_centers(
    state: CubeState,
    config: Optional[SolverConfig] = None,
    rng: Optional[random.Random] = None,
) -> Optional[PhaseResult]:
    """Fase A: deja los 4 centros de cada cara con su color ancla.

    Búsqueda local: prueba profundidad 1, luego 2 y luego 3 hasta encontrar algo que
    aumente la cantidad de centros correctos. Si nada mejora (meseta), aplica dos
    movimientos aleatorios de caras distintas y sigue.

    Args:
        state: Cubo 4x4.
        config: Límites de tiempo e iteraciones.
        rng: Fuente aleatoria para salir de mesetas.

    Returns:
        `PhaseResult` con los 24 centros correctos, o None si se agotó el tiempo o el
        tope de iteraciones.
    """
    config = config or DEFAULT_CONFIG
    rng = rng or random.Random()
    engine = engine_for(4)
    start = time.monotonic()
    current = state.stickers
    moves: List[str] = []

    for iteration in range(config.centers_max_iterations):
        score = _center_score(current)
        if score == CENTER_TOTAL:
            logger.debug("Centros resueltos en %d iteraciones", iteration)
            return PhaseResult(CubeState._from_trusted(4, current), moves)
        if time.monotonic() - start > config.centers_time_limit:
            logger.warning("Fase de centros: tiempo agotado con %d/%d", score, CENTER_TOTAL)
            return None

        found = None
        for depth in (1, 2, 3):
            found = _best_sequence(engine, current, CENTER_MOVES, depth, _center_score, score)
            if found is not None:
                break

        if found is not None:
            seq, current = found
            moves.extend(seq)
            continue

        # Meseta: dos movimientos aleatorios de caras distintas
        r1 = rng.choice(CENTER_MOVES)
        r2 = rng.choice([m for m in CENTER_MOVES if m[0] != r1[0]])
        logger.debug("Fase de centros: meseta en %d, perturbando con %s %s", score, r1, r2)
        moves.extend([r1, r2])
        current = engine.permute(engine.permute(current, r1), r2)

    if _center_score(current) == CENTER_TOTAL:
        return PhaseResult(CubeState._from_trusted(4, current), moves)
    logger.warning("Fase de centros: tope de %d iteraciones alcanzado", config.centers_max_iterations)
    return None


# --------------------------
# Fase B: aristas
# --------------------------
def pair_edges(
    state: CubeState,
    config: Optional[SolverConfig] = None,
    rng: Optional[random.Random] = None,
) -> Optional[PhaseResult]:
    """Fase B: empareja las 12 aristas sin romper los centros.

    Igual que la fase A, pero sólo acepta secuencias que mantengan los centros al menos
    como estaban al empezar la fase. Después de profundidad 1..3 prueba una biblioteca
    de macros, cada una envuelta en "preparación / macro / deshacer preparación". Para
    salir de una meseta aplica un único movimiento externo aleatorio.

    Returns:
        `PhaseResult` con 12 aristas emparejadas y 24 centros correctos, o None.
    """
    config = config or DEFAULT_CONFIG
    rng = rng or random.Random()
    engine = engine_for(4)
    start = time.monotonic()
    current = state.stickers
    moves: List[str] = []
    center_floor = _center_score(current)

    def evaluate(stickers: CubeHash) -> Optional[int]:
        if _center_score(stickers) < center_floor:
            return None
        return _edge_score(stickers)

    def done(stickers: CubeHash) -> bool:
        return _edge_score(stickers) == EDGE_TOTAL and _center_score(stickers) == CENTER_TOTAL

    for iteration in range(config.edges_max_iterations):
        if done(current):
            logger.debug("Aristas emparejadas en %d iteraciones", iteration)
            return PhaseResult(CubeState._from_trusted(4, current), moves)
        if time.monotonic() - start > config.edges_time_limit:
            logger.warning("Fase de aristas: tiempo agotado con %d/%d", _edge_score(current), EDGE_TOTAL)
            return None

        score = _edge_score(current)
        found = None
        for depth in (1, 2, 3):
            found = _best_sequence(engine, current, EDGE_MOVES, depth, evaluate, score)
            if found is not None:
                break

        if found is None:
            found = _best_macro(engine, current, evaluate, score)

        if found is not None:
            seq, current = found
            moves.extend(seq)
            continue

        kick = rng.choice(OUTER_KICK_MOVES)
        logger.debug("Fase de aristas: meseta en %d, perturbando con %s", score, kick)
        moves.append(kick)
        current = engine.permute(current, kick)

    if done(current):
        return PhaseResult(CubeState._from_trusted(4, current), moves)
    logger.warning("Fase de aristas: tope de %d iteraciones alcanzado", config.edges_max_iterations)
    return None


def _best_macro(
    engine: MoveEngine,
    stickers: CubeHash,
    evaluate: Callable[[CubeHash], Optional[int]],
    baseline: int,
) -> Optional[Tuple[List[str], CubeHash]]:
    """Prueba cada macro con cada preparación y se queda con la que más mejora."""
    best: Optional[Tuple[List[str], CubeHash]] = None
    best_score = baseline
    for macro in EDGE_MACROS:
        for setup in MACRO_SETUPS:
            seq = setup + macro + engine.inverse_sequence(setup)
            leaf = stickers
            for mv in seq:
                leaf = engine.permute(leaf, mv)
            score = evaluate(leaf)
            if score is not None and score > best_score:
                best_score = score
                best = (seq, leaf)
    return best


# --------------------------
# Fase C: como 3x3
# --------------------------
def map_to_3x3(state: CubeState) -> CubeState:
    """Proyecta un 4x4 reducido a su 3x3 equivalente.

    Toma de cada cara las esquinas, un sticker de cada arista emparejada y un centro.
    Sólo es fiel si centros y aristas ya están resueltos; por eso el resultado final
    siempre se verifica sobre el 4x4 completo.
    """
    if state.n != 4:
        raise ValueError(f"Se esperaba un cubo 4x4 (se recibió {state.n}x{state.n}).")
    return CubeState(3, [state.sticker(f, i) for f in FACES for i in PICK_3X3])


def solve_as_3x3(state: CubeState, config: Optional[SolverConfig] = None) -> Optional[PhaseResult]:
    """Fase C: resuelve el 3x3 equivalente y aplica su solución al 4x4.

    Returns:
        `PhaseResult` con el 4x4 tras aplicar la solución (puede no quedar resuelto si la
        proyección no era fiel), o None si el solver 3x3 falla.
    """
    reduced = map_to_3x3(state)
    if reduced.is_solved():
        return PhaseResult(state, [])

    result = solve_3x3(reduced, config)
    if not result.success or result.solution is None:
        logger.warning("Fase 3x3: %s", result.error)
        return None

    final = engine_for(4).apply_sequence(state, result.solution)
    return PhaseResult(final, list(result.solution))


def solve_4x4(
    state: CubeState,
    config: Optional[SolverConfig] = None,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> SolveResult:
    """Resuelve un 4x4 por reducción: centros, aristas y luego como 3x3.

    Las fases se ejecutan en orden y cada una supone lo que dejó la anterior. Si alguna
    falla se descarta todo lo acumulado y se informa la fase que falló; nunca se
    devuelve una solución parcial.

    Args:
        state: Cubo 4x4.
        config: Límites de las fases y del solver 3x3.
        rng: Fuente aleatoria para las perturbaciones (tiene prioridad sobre `seed`).
        seed: Semilla para reproducir una resolución.

    Returns:
        `SolveResult` con la concatenación de las tres fases, verificada sobre el cubo
        completo, o con un error específico de la fase que falló.

    Raises:
        ValueError: Si el estado no es de 4x4.
    """
    if state.n != 4:
        raise ValueError(f"El solver por reducción es para 4x4 (se recibió {state.n}x{state.n}).")
    config = config or DEFAULT_CONFIG
    rng = rng or random.Random(seed)

    if state.is_solved():
        return SolveResult.ok([])

    centers = solve_centers(state, config, rng)
    if centers is None:
        return SolveResult.fail(
            "No se pudieron resolver los centros. Prueba con una mezcla más corta o revisa la configuración."
        )
    logger.info("Centros: %d movimientos", len(centers.moves))

    edges = pair_edges(centers.state, config, rng)
    if edges is None:
        return SolveResult.fail("No se pudieron emparejar las aristas. Prueba con una mezcla más corta.")
    logger.info("Aristas: %d movimientos", len(edges.moves))

    final = solve_as_3x3(edges.state, config)
    if final is None:
        return SolveResult.fail("No se pudo completar la fase 3x3. Prueba con una mezcla más corta.")
    logger.info("Fase 3x3: %d movimientos", len(final.moves))

    solution = centers.moves + edges.moves + final.moves
    if not engine_for(4).apply_sequence(state, solution).is_solved():
        logger.warning("La reducción no dejó el 4x4 resuelto (posible paridad)")
        return SolveResult.fail("El solver no dejó el cubo resuelto. Prueba con una mezcla más corta.")

    return SolveResult.ok(solution)
