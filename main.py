"""Lanzador de azwire desde un checkout, sin instalar el paquete.

    python main.py decode InfrastructureConfiguration payload.json

Añade `src/` al `sys.path` y delega en `cli.main.run`.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
