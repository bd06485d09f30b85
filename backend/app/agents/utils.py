"""Utilidades compartidas entre agentes."""

import json
import re
from typing import Any

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


def _outer_json_span(text: str) -> str | None:
    """Recorta desde el primer '[' o '{' hasta su cierre más lejano."""
    starts = [i for i in (text.find("["), text.find("{")) if i != -1]
    if not starts:
        return None
    start = min(starts)
    end = text.rfind("]" if text[start] == "[" else "}")
    return text[start : end + 1] if end > start else None


def parse_json_response(response: str) -> Any | None:
    """
    Parsea respuesta JSON del LLM (objeto o arreglo).

    Tolera fences de markdown y texto alrededor del JSON
    ("Here is the list: [...]"). Devuelve None si no hay JSON válido.
    """
    clean = response.strip()
    fenced = _FENCE_RE.search(clean)
    if fenced:
        clean = fenced.group(1)

    for candidate in (clean, _outer_json_span(clean)):
        if not candidate:
            continue
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    return None
