from __future__ import annotations
import json
from typing import Any, Dict
from pathlib import Path

import yaml


def load_value(path: str | Path) -> Any:
    """Load one operand document (JSON, or YAML by file suffix)."""
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        text = f.read()
    if p.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(text)
    return json.loads(text)


def save_json(path: str | Path, obj: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)
