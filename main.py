# main.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, NoReturn, Optional

from PySide6.QtCore import QCoreApplication

from rubik_solver.app.solve_worker import SolveWorker
from rubik_solver.core import apply_moves, solved_state
from rubik_solver.logic.moves import format_sequence, parse_sequence
from rubik_solver.logic.scramble import generate_scramble
from rubik_solver.solve.result import SolveResult


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Mezcla y resuelve un cubo Rubik 2x2, 3x3 o 4x4.")
    parser.add_argument("--size", type=int, choices=(2, 3, 4), default=3)
    parser.add_argument("--length", type=int, default=5, help="largo del scramble aleatorio")
    parser.add_argument("--moves", default="", help="scramble explícito, por ejemplo \"R U R' U'\"")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """Punto de entrada de la aplicación.

    Crea la instancia de `QCoreApplication`, mezcla un cubo, lanza el `SolveWorker`
    en segundo plano y ejecuta el loop de eventos de Qt hasta que llegue el resultado.

    Returns:
        No retorna (finaliza el proceso con `sys.exit`).
    """
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    scramble = parse_sequence(args.moves) if args.moves else generate_scramble(
        args.length, size=args.size, seed=args.seed
    )
    state = apply_moves(solved_state(args.size), scramble)
    print(f"Scramble: {format_sequence(scramble)}")

    app = QCoreApplication(sys.argv[:1])
    worker = SolveWorker(state, seed=args.seed)

    def on_finished(result: SolveResult) -> None:
        if result.success:
            print(f"Solución ({len(result.solution or [])}): {format_sequence(result.solution or [])}")
            app.exit(0)
        else:
            print(f"Sin solución: {result.error}")
            app.exit(1)

    def on_error(msg: str) -> None:
        print(msg, file=sys.stderr)
        app.exit(2)

    worker.depth_update.connect(lambda d: logging.getLogger("main").debug("Profundidad %d", d))
    worker.finished_solution.connect(on_finished)
    worker.error.connect(on_error)
    worker.start()

    code = app.exec()
    worker.wait()
    sys.exit(code)


if __name__ == "__main__":
    main()
