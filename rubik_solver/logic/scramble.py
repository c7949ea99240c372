# rubik_solver/logic/scramble.py
from __future__ import annotations

import random
from typing import Dict, List, Optional

SUFFIX: List[str] = ["", "'", "2"]

# El 2x2 sólo mezcla con F, R y U: la esquina DBL queda fija, igual que en su solver.
FACES_BY_SIZE: Dict[int, List[str]] = {
    2: ["F", "R", "U"],
    3: ["U", "D", "L", "R", "F", "B"],
    4: ["U", "D", "L", "R", "F", "B"],
}


def generate_scramble(
    n: int,
    size: int = 3,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """Genera una secuencia de mezcla (scramble) aleatoria para el cubo.

    La secuencia se construye evitando repetir la misma cara en movimientos consecutivos
    (por ejemplo, evita "U U'" o "R R2" seguidos), lo que produce scrambles más variados.
    Para el 4x4 sólo se usan capas externas.

    Args:
        n: Cantidad de movimientos a generar.
        size: Tamaño del cubo (2, 3 o 4); define qué caras se usan.
        seed: Semilla opcional para obtener resultados reproducibles. Si es None,
            el scramble será distinto en cada ejecución.
        rng: Generador ya creado (tiene prioridad sobre `seed`).

    Returns:
        Lista de movimientos, por ejemplo: ["R", "U'", "F2", "L", "D2"].

    Raises:
        ValueError: Si `n` es menor o igual a 0 o el tamaño no está soportado.
    """
    if n <= 0:
        raise ValueError("n debe ser mayor que 0.")
    if size not in FACES_BY_SIZE:
        raise ValueError(f"Tamaño de cubo no soportado: {size}")

    if rng is None:
        rng = random.Random(seed)
    faces = FACES_BY_SIZE[size]

    seq: List[str] = []
    last_face: Optional[str] = None

    for _ in range(n):
        # Evitar repetir la misma cara consecutiva
        candidates = [m for m in faces if m != last_face]
        face = rng.choice(candidates)
        last_face = face

        seq.append(face + rng.choice(SUFFIX))

    return seq
