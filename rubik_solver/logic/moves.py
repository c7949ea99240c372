# rubik_solver/logic/moves.py
from __future__ import annotations

from typing import List, Sequence, Set

VALID_FACES: Set[str] = {"U", "D", "L", "R", "F", "B"}
INNER_FACES: Set[str] = {"u", "d", "l", "r", "f", "b"}
VALID_SUFFIX: Set[str] = {"", "'", "2"}


def normalize_token(tok: str) -> str:
    """Normaliza un token de movimiento a un formato estándar.

    Reglas principales:
    - Elimina espacios y convierte comilla tipográfica (’ o ‘) a comilla simple (').
    - Acepta caras externas (U D L R F B) y, para el 4x4, capas internas en minúscula
      (u d l r f b), con sufijo opcional "", "'" o "2".
    - Corrige el caso típico "D2'" -> "D2" (ya que el inverso de un 180° es el mismo).

    Args:
        tok: Token de movimiento (por ejemplo: "R", "U'", "F2", "r'").

    Returns:
        Token normalizado. Un token vacío devuelve "".

    Raises:
        ValueError: Si la cara no es válida o si el sufijo no es válido.
    """
    tok = tok.strip().replace("’", "'").replace("‘", "'")
    if not tok:
        return ""

    base = tok[0]
    suf = tok[1:]

    if base not in VALID_FACES and base not in INNER_FACES:
        raise ValueError(f"Movimiento inválido: {tok}")

    # Corrección: "D2'" -> "D2"
    if suf == "2'":
        suf = "2"

    if suf not in VALID_SUFFIX:
        raise ValueError(f"Sufijo inválido en: {tok}")

    return base + suf


def inverse_move(m: str) -> str:
    """Devuelve el movimiento inverso de un token invirtiendo su sufijo.

    Ejemplos:
        - "R"  -> "R'"
        - "R'" -> "R"
        - "R2" -> "R2"

    Sólo es el inverso de grupo correcto para los motores 2x2 y 3x3. El motor 4x4
    expone su propio `inverse_moves`, que no depende de este atajo textual.

    Args:
        m: Movimiento en notación estándar (o normalizable).

    Returns:
        El movimiento inverso. Si `m` es un string vacío, retorna "".

    Raises:
        ValueError: Si `m` no es un token válido.
    """
    m = normalize_token(m)
    if not m:
        return m

    base = m[0]
    suf = m[1:]

    if suf == "":
        return base + "'"
    if suf == "'":
        return base
    return base + "2"


def invert_sequence(moves: Sequence[str]) -> List[str]:
    """Invierte una secuencia completa (para deshacer una solución paso a paso).

    Args:
        moves: Movimientos en orden de aplicación.

    Returns:
        Los inversos de cada movimiento, en orden inverso.
    """
    return [inverse_move(m) for m in reversed(moves)]


def parse_sequence(text: str) -> List[str]:
    """Lee una secuencia escrita a mano ("R U R' U'") y la normaliza token por token.

    Acepta cualquier espacio en blanco como separador (espacios, tabs o saltos de línea),
    así se puede pegar una mezcla copiada de otro programa.

    Args:
        text: Movimientos separados por espacios en blanco.

    Returns:
        Movimientos normalizados, en el orden en que aparecen. Un texto vacío da `[]`.

    Raises:
        ValueError: Si algún token no es un movimiento válido.
    """
    return [normalize_token(tok) for tok in text.split()]


def format_sequence(moves: Sequence[str]) -> str:
    """Une una secuencia en texto, separando los movimientos con un espacio."""
    return " ".join(moves)
