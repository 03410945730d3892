"""Exportación JSON de payloads codificados.

Por qué JSON estable:
- Permite comparar con `diff` lo que el servicio envió y lo que re-emitimos.
- `sort_keys=False`: el orden (tag primero) es parte de lo que se inspecciona.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def export_wire_json(*, payload: Any, output_path: Path) -> Path:
    """Escribe un payload ya codificado (`to_wire`/`encode`) como JSON UTF-8."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    return output_path


def load_json_file(path: Path) -> Any:
    """Lee un JSON de disco. El JSON mal formado se propaga como `json.JSONDecodeError`."""

    return json.loads(path.read_text(encoding="utf-8"))
