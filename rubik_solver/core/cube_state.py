# rubik_solver/core/cube_state.py
from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List, Literal, Mapping, Sequence, Tuple

Face = Literal["U", "D", "F", "B", "L", "R"]
Color = str  # Letras: "W", "Y", "R", "O", "B", "G"
CubeHash = Tuple[Color, ...]

FACES: List[Face] = ["U", "D", "F", "B", "L", "R"]
COLORS: List[Color] = ["W", "Y", "R", "O", "B", "G"]

# Color fijo del centro de cada cara en el estado resuelto canónico
ANCHOR_COLORS: Dict[Face, Color] = {
    "U": "W",
    "D": "Y",
    "F": "R",
    "B": "O",
    "L": "G",
    "R": "B",
}

SUPPORTED_SIZES: Tuple[int, ...] = (2, 3, 4)


class CubeState:
    """Estado inmutable de un cubo NxN (N = 2, 3 o 4).

    Representación:
        - Una única tupla plana con los 6·N² stickers, cara por cara en el orden de `FACES`.
        - Dentro de cada cara, los índices 0..N²-1 van en orden fila-columna vista de frente
          (índice 0 = esquina superior izquierda).

    El valor nunca se modifica: cada movimiento o edición devuelve un estado nuevo, así
    que los nodos de búsqueda pueden compartir estados sin riesgo de aliasing.
    """

    __slots__ = ("_n", "_stickers")

    def __init__(self, n: int, stickers: Sequence[Color]) -> None:
        """Crea un estado a partir de la tupla plana de stickers.

        Args:
            n: Tamaño del cubo (2, 3 o 4).
            stickers: 6·N² colores en el orden de `FACES`.

        Raises:
            ValueError: Si el tamaño no está soportado, la longitud no coincide o
                aparece un color desconocido.
        """
        if n not in SUPPORTED_SIZES:
            raise ValueError(f"Tamaño de cubo no soportado: {n}")
        stickers = tuple(stickers)
        if len(stickers) != 6 * n * n:
            raise ValueError(
                f"Un cubo {n}x{n} necesita {6 * n * n} stickers, se recibieron {len(stickers)}."
            )
        unknown = sorted(set(stickers) - set(COLORS))
        if unknown:
            raise ValueError(f"Colores desconocidos: {', '.join(map(str, unknown))}")
        self._n = n
        self._stickers: CubeHash = stickers

    # --------------------------
    # Construcción
    # --------------------------
    @classmethod
    def solved(cls, n: int) -> "CubeState":
        """Devuelve el estado resuelto canónico (cada cara con su color ancla)."""
        return cls(n, [ANCHOR_COLORS[f] for f in FACES for _ in range(n * n)])

    @classmethod
    def _from_trusted(cls, n: int, stickers: CubeHash) -> "CubeState":
        # Sin validación: sólo para permutaciones de un estado ya válido
        obj = object.__new__(cls)
        obj._n = n
        obj._stickers = stickers
        return obj

    @classmethod
    def from_faces(cls, faces: Mapping[str, Iterable[Color]]) -> "CubeState":
        """Construye un estado desde un mapeo cara -> lista de colores.

        Es el formato que entrega el escaneo por cámara o el pintado manual.

        Args:
            faces: Diccionario con las seis caras (`U D F B L R`), cada una con N² colores.

        Returns:
            El estado correspondiente; N se deduce de la longitud de las caras.

        Raises:
            ValueError: Si falta alguna cara o las caras no tienen la misma longitud.
        """
        missing = [f for f in FACES if f not in faces]
        if missing:
            raise ValueError(f"Faltan caras: {', '.join(missing)}")

        rows = {f: [str(c).upper() for c in faces[f]] for f in FACES}
        sizes = {len(r) for r in rows.values()}
        if len(sizes) != 1:
            raise ValueError("Todas las caras deben tener la misma cantidad de stickers.")

        count = sizes.pop()
        n = int(round(count ** 0.5))
        if n * n != count:
            raise ValueError(f"Una cara no puede tener {count} stickers.")

        return cls(n, [c for f in FACES for c in rows[f]])

    @classmethod
    def from_string(cls, text: str, n: int) -> "CubeState":
        """Construye un estado desde un string de 6·N² letras (orden `FACES`).

        Se ignoran espacios y saltos de línea, así que el texto puede venir agrupado por cara.
        """
        letters = [ch.upper() for ch in text if not ch.isspace()]
        return cls(n, letters)

    # --------------------------
    # Acceso
    # --------------------------
    @property
    def n(self) -> int:
        return self._n

    @property
    def stickers(self) -> CubeHash:
        return self._stickers

    def face(self, face: Face) -> Tuple[Color, ...]:
        """Devuelve los N² stickers de una cara."""
        size = self._n * self._n
        start = FACES.index(face) * size
        return self._stickers[start:start + size]

    def faces(self) -> Dict[Face, Tuple[Color, ...]]:
        """Diccionario cara -> stickers, en el orden U D F B L R."""
        return {f: self.face(f) for f in FACES}

    def sticker(self, face: Face, index: int) -> Color:
        """Color del sticker `index` (fila * N + columna) de la cara `face`."""
        return self._stickers[self.flat_index(face, index)]

    def flat_index(self, face: Face, index: int) -> int:
        """Traduce (cara, índice) a la posición en la tupla plana."""
        size = self._n * self._n
        if not 0 <= index < size:
            raise ValueError(f"Índice fuera de rango para {face}: {index}")
        return FACES.index(face) * size + index

    def center_indices(self) -> Tuple[int, ...]:
        """Índices (dentro de una cara) de los stickers centrales de un cubo NxN."""
        n = self._n
        lo = (n - 1) // 2
        hi = n // 2
        return tuple(sorted({r * n + c for r in (lo, hi) for c in (lo, hi)}))

    def color_counts(self) -> Counter:
        return Counter(self._stickers)

    def to_hashable(self) -> CubeHash:
        """Clave hasheable del estado: los stickers concatenados en orden fijo."""
        return self._stickers

    # --------------------------
    # Predicados / edición
    # --------------------------
    def is_solved(self) -> bool:
        """Indica si cada cara tiene un solo color.

        Returns:
            True si todas las caras son monocromáticas.
        """
        return stickers_solved(self._stickers, self._n)

    def with_sticker(self, face: Face, index: int, color: Color) -> "CubeState":
        """Devuelve una copia con un sticker repintado (pintado manual)."""
        pos = self.flat_index(face, index)
        stickers = list(self._stickers)
        stickers[pos] = color.upper()
        return CubeState(self._n, stickers)

    def copy(self) -> "CubeState":
        return CubeState(self._n, self._stickers)

    # --------------------------
    # Protocolo de valor
    # --------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CubeState):
            return NotImplemented
        return self._n == other._n and self._stickers == other._stickers

    def __hash__(self) -> int:
        return hash((self._n, self._stickers))

    def __repr__(self) -> str:
        rows = " ".join(f"{f}:{''.join(self.face(f))}" for f in FACES)
        return f"CubeState(n={self._n}, {rows})"


def solved_state(n: int) -> CubeState:
    """Atajo para `CubeState.solved(n)`."""
    return CubeState.solved(n)


def is_solved(state: CubeState) -> bool:
    """Indica si el cubo está resuelto (cada cara de un solo color)."""
    return state.is_solved()


def stickers_solved(stickers: CubeHash, n: int) -> bool:
    """Igual que `CubeState.is_solved` pero sobre la tupla cruda de stickers."""
    size = n * n
    for start in range(0, len(stickers), size):
        first = stickers[start]
        for i in range(start + 1, start + size):
            if stickers[i] != first:
                return False
    return True
