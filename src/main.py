"""`python -m main` dentro de `src/`: mismo efecto que el script `azwire`."""

from __future__ import annotations

import sys

# Las tablas Rich y los payloads JSON pueden traer caracteres fuera de cp1252.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run  # noqa: E402

if __name__ == "__main__":
    run()
