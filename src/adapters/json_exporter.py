"""Exportación JSON de resultados de `batch`.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines (p.ej. cargar a una tabla).
- Formato estable (claves ordenadas, UTF-8 sin escapar).
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from core.domain.models import BatchItem


def export_batch_json(*, items: Sequence[BatchItem], output_path: Path) -> Path:
    """Exporta la lista de `BatchItem` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = [item.model_dump(mode="json") for item in items]
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
