# rubik_solver/logic/validator.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from rubik_solver.core.cube_state import ANCHOR_COLORS, COLORS, FACES, CubeState


@dataclass(frozen=True)
class ValidationResult:
    """Resultado de validar una configuración pintada o escaneada."""

    valid: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.valid


def validate(state: CubeState) -> ValidationResult:
    """Valida una configuración de 3x3 antes de pasarla al solver.

    Comprueba:
        1. Que cada uno de los seis colores aparezca exactamente 9 veces.
        2. Que el sticker central de cada cara tenga el color ancla de esa cara.

    No verifica paridades ni orientaciones: una configuración imposible pasa la
    validación y el solver la reporta como no resuelta al agotar su búsqueda.

    Args:
        state: Estado a validar (debe ser 3x3).

    Returns:
        `ValidationResult(valid=True)` o un resultado inválido con el motivo.

    Raises:
        ValueError: Si el estado no es de 3x3.
    """
    if state.n != 3:
        raise ValueError(f"La validación sólo aplica a cubos 3x3 (se recibió {state.n}x{state.n}).")

    expected = state.n * state.n
    counts = state.color_counts()
    for color in COLORS:
        if counts.get(color, 0) != expected:
            return ValidationResult(
                False,
                f"Cada color debe aparecer exactamente {expected} veces. "
                f"{color} aparece {counts.get(color, 0)} veces.",
            )

    (center,) = state.center_indices()
    for face in FACES:
        if state.sticker(face, center) != ANCHOR_COLORS[face]:
            return ValidationResult(
                False,
                f"El centro de la cara {face} debería ser {ANCHOR_COLORS[face]}.",
            )

    return ValidationResult(True)
