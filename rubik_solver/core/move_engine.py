# rubik_solver/core/move_engine.py
from __future__ import annotations

from functools import lru_cache
from operator import itemgetter
from typing import Callable, Dict, Iterable, List, Literal, Tuple

from rubik_solver.core.cube_state import FACES, CubeHash, CubeState, Face
from rubik_solver.logic.moves import inverse_move, normalize_token

Vec3i = Tuple[int, int, int]
Axis = Literal["x", "y", "z"]
Permutation = Tuple[int, ...]

OUTER_FACES: List[str] = ["U", "D", "L", "R", "F", "B"]
INNER_SLICES: List[str] = ["u", "d", "l", "r", "f", "b"]
SUFFIXES: List[str] = ["", "'", "2"]

# Normales por cara (x, y, z)
FACE_NORMAL: Dict[Face, Vec3i] = {
    "F": (0, 0, 1),
    "B": (0, 0, -1),
    "R": (1, 0, 0),
    "L": (-1, 0, 0),
    "U": (0, 1, 0),
    "D": (0, -1, 0),
}

_AXES: Tuple[Axis, Axis, Axis] = ("x", "y", "z")


class EngineDefectError(RuntimeError):
    """Un movimiento declarado por el motor no tiene una permutación válida."""


class MoveEngine:
    """Motor de movimientos para un cubo NxN basado en rotaciones geométricas.

    Cada sticker se modela como un "facelet" con una posición entera (x, y, z) y una
    normal. Para un cubo de lado N se usan coordenadas dobladas: las capas quedan en
    -(N-1), -(N-3), ..., N-1 y los planos de las caras en ±N, así todo sigue siendo entero.

    Al construir el motor se calcula una vez la permutación de cada movimiento
    (giro de la capa + reubicación de los stickers vecinos). Aplicar un movimiento es
    sólo reordenar la tupla de stickers.

    Notación:
        - Caras: U D L R F B (capa externa).
        - Para N=4 además: u d l r f b (capa interna adyacente a esa cara).
        - Sufijos: "" horario visto desde la cara, "'" antihorario (3 giros), "2" 180° (2 giros).
    """

    def __init__(self, n: int) -> None:
        """Construye los mapas geométricos y las tablas de permutación.

        Args:
            n: Tamaño del cubo (2, 3 o 4).

        Raises:
            ValueError: Si el tamaño no está soportado.
            EngineDefectError: Si algún movimiento declarado queda sin implementar.
        """
        if n not in (2, 3, 4):
            raise ValueError(f"Tamaño de cubo no soportado: {n}")
        self.n: int = n
        self.bases: List[str] = OUTER_FACES + (INNER_SLICES if n == 4 else [])
        self.moves: List[str] = [b + s for b in self.bases for s in SUFFIXES]

        # Mapas: (face, idx) -> (pos, normal) y viceversa
        self._facelet_to_pn: Dict[Tuple[Face, int], Tuple[Vec3i, Vec3i]] = {}
        self._pn_to_facelet: Dict[Tuple[Vec3i, Vec3i], Tuple[Face, int]] = {}
        self._build_facelet_maps()

        self._perms: Dict[str, Permutation] = {}
        for base in self.bases:
            quarter = self._layer_permutation(base)
            half = _compose(quarter, quarter)
            self._perms[base] = quarter
            self._perms[base + "2"] = half
            self._perms[base + "'"] = _compose(half, quarter)

        self._check_complete()
        self._getters: Dict[str, Callable[[CubeHash], CubeHash]] = {
            m: itemgetter(*p) for m, p in self._perms.items()
        }

    # --------------------------
    # Public API
    # --------------------------
    def apply(self, state: CubeState, move: str) -> CubeState:
        """Aplica un movimiento y devuelve un estado nuevo.

        Args:
            state: Estado de partida (no se modifica).
            move: Movimiento en notación (por ejemplo: "R", "U'", "F2", "r").

        Returns:
            El estado resultante.

        Raises:
            ValueError: Si el estado es de otro tamaño o el movimiento no existe para este N.
        """
        if state.n != self.n:
            raise ValueError(f"El motor {self.n}x{self.n} no acepta un cubo {state.n}x{state.n}")
        move = normalize_token(move)
        if not move:
            return state
        return CubeState._from_trusted(self.n, self.permute(state.stickers, move))

    def apply_sequence(self, state: CubeState, moves: Iterable[str]) -> CubeState:
        """Aplica los movimientos en orden y devuelve el estado final."""
        for mv in moves:
            state = self.apply(state, mv)
        return state

    def permute(self, stickers: CubeHash, move: str) -> CubeHash:
        """Versión cruda de `apply` sobre la tupla de stickers (usada por los solvers)."""
        getter = self._getters.get(move)
        if getter is None:
            raise ValueError(f"Movimiento no soportado para {self.n}x{self.n}: {move}")
        return getter(stickers)

    def is_legal(self, move: str) -> bool:
        try:
            return normalize_token(move) in self._perms
        except ValueError:
            return False

    def inverse_moves(self, move: str) -> List[str]:
        """Devuelve la secuencia que deshace `move` en este motor.

        - 2x2 y 3x3: el movimiento con el sufijo invertido ("R" <-> "R'", "R2" <-> "R2").
        - 4x4: un cuarto de vuelta se deshace repitiéndolo tres veces (orden 4);
          el medio giro es su propio inverso.

        Args:
            move: Movimiento legal para este motor.

        Returns:
            Lista de movimientos que, aplicada después de `move`, vuelve al estado previo.
        """
        move = normalize_token(move)
        if move not in self._perms:
            raise ValueError(f"Movimiento no soportado para {self.n}x{self.n}: {move}")
        if self.n == 4:
            if move.endswith("2"):
                return [move]
            return [move, move, move]
        return [inverse_move(move)]

    def inverse_sequence(self, moves: Iterable[str]) -> List[str]:
        out: List[str] = []
        for mv in reversed(list(moves)):
            out.extend(self.inverse_moves(mv))
        return out

    # --------------------------
    # Core rotation logic (geométrica)
    # --------------------------
    def _build_facelet_maps(self) -> None:
        """Construye el mapeo entre stickers (facelets) y su representación geométrica.

        Con k(i) = 2*i - (N-1) y H = N:
        - F: x=k(c),  y=-k(r), z=+H
        - B: x=-k(c), y=-k(r), z=-H   (flip X, visto desde atrás)
        - R: x=+H,    y=-k(r), z=-k(c)
        - L: x=-H,    y=-k(r), z=k(c)
        - U: x=k(c),  y=+H,    z=k(r)   (fila 0 junto a B)
        - D: x=k(c),  y=-H,    z=-k(r)  (fila 0 junto a F)
        """
        n = self.n
        h = n

        def k(i: int) -> int:
            return 2 * i - (n - 1)

        for face in FACES:
            normal = FACE_NORMAL[face]
            for i in range(n * n):
                r, c = divmod(i, n)

                if face == "F":
                    pos: Vec3i = (k(c), -k(r), h)
                elif face == "B":
                    pos = (-k(c), -k(r), -h)
                elif face == "R":
                    pos = (h, -k(r), -k(c))
                elif face == "L":
                    pos = (-h, -k(r), k(c))
                elif face == "U":
                    pos = (k(c), h, k(r))
                elif face == "D":
                    pos = (k(c), -h, -k(r))
                else:
                    raise RuntimeError("Cara inválida")

                self._facelet_to_pn[(face, i)] = (pos, normal)
                self._pn_to_facelet[(pos, normal)] = (face, i)

    @staticmethod
    def _rotate(v: Vec3i, axis: Axis, turns: int) -> Vec3i:
        """Rota un vector 90°*turns alrededor de un eje (regla de la mano derecha)."""
        x, y, z = v
        for _ in range(turns % 4):
            if axis == "x":
                x, y, z = x, -z, y
            elif axis == "y":
                x, y, z = z, y, -x
            else:
                x, y, z = -y, x, z
        return (x, y, z)

    def _layer_permutation(self, base: str) -> Permutation:
        """Calcula la permutación de un cuarto de vuelta horario de una capa.

        Horario visto desde fuera de la cara equivale a -90° alrededor de su normal.
        La capa externa incluye los stickers de la propia cara; la interna (minúscula)
        sólo los stickers laterales de la segunda capa.

        Args:
            base: Letra de la cara o capa interna.

        Returns:
            Permutación `p` tal que `nuevo[i] = viejo[p[i]]`.
        """
        n = self.n
        size = n * n
        face = base.upper()
        depth = 0 if base.isupper() else 1
        normal = FACE_NORMAL[face]
        a = next(i for i, v in enumerate(normal) if v != 0)
        sign = normal[a]
        axis = _AXES[a]
        turns = -sign % 4

        perm = list(range(6 * size))
        for (src_face, i), (pos, nrm) in self._facelet_to_pn.items():
            level = pos[a] * sign
            if depth == 0:
                selected = level >= n - 1
            else:
                selected = level == n - 1 - 2 * depth
            if not selected:
                continue

            # Rotar posición + normal y ubicar en nueva cara/índice
            dest_face, dest_i = self._pn_to_facelet[
                (self._rotate(pos, axis, turns), self._rotate(nrm, axis, turns))
            ]
            perm[FACES.index(dest_face) * size + dest_i] = FACES.index(src_face) * size + i

        return tuple(perm)

    def _check_complete(self) -> None:
        """Verifica que cada movimiento declarado sea una permutación real (no un no-op)."""
        total = 6 * self.n * self.n
        identity = tuple(range(total))
        for mv in self.moves:
            p = self._perms.get(mv)
            if p is None:
                raise EngineDefectError(f"Movimiento sin implementar en {self.n}x{self.n}: {mv}")
            if len(p) != total or sorted(p) != list(identity):
                raise EngineDefectError(f"Permutación inválida para {mv} en {self.n}x{self.n}")
            if p == identity:
                raise EngineDefectError(f"El movimiento {mv} no mueve ningún sticker")


def _compose(first: Permutation, second: Permutation) -> Permutation:
    """Permutación de aplicar `first` y luego `second`."""
    return tuple(first[j] for j in second)


@lru_cache(maxsize=None)
def engine_for(n: int) -> MoveEngine:
    """Motor compartido (sólo lectura) para cubos de lado `n`."""
    return MoveEngine(n)


def apply_move(state: CubeState, move: str) -> CubeState:
    """Aplica un movimiento con el motor que corresponde al tamaño del cubo."""
    return engine_for(state.n).apply(state, move)


def apply_moves(state: CubeState, moves: Iterable[str]) -> CubeState:
    """Aplica una secuencia de movimientos (lista o string separado por espacios)."""
    if isinstance(moves, str):
        moves = moves.split()
    return engine_for(state.n).apply_sequence(state, moves)