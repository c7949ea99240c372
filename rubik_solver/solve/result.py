# rubik_solver/solve/result.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence


@dataclass(frozen=True)
class SolveResult:
    """Resultado estructurado de un solver.

    Attributes:
        success: True si se encontró una solución.
        solution: Movimientos a aplicar (vacío si el cubo ya estaba resuelto).
        error: Motivo legible del fallo cuando `success` es False.
    """

    success: bool
    solution: Optional[List[str]] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, moves: Sequence[str]) -> "SolveResult":
        return cls(True, list(moves), None)

    @classmethod
    def fail(cls, error: str) -> "SolveResult":
        return cls(False, None, error)
