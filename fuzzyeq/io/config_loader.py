from __future__ import annotations
from typing import Any, Dict
import json
import logging
from pathlib import Path

import yaml

from fuzzyeq.core.config import ComparisonConfig
from fuzzyeq.core.engine import FuzzyComparer
from fuzzyeq.core.errors import InvalidConfigError
from fuzzyeq.core.observer import ObserverLike

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        text = f.read()
    suffix = p.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    else:
        # default to JSON
        data = json.loads(text or "{}")
    if not isinstance(data, dict):
        raise InvalidConfigError(f"{p}: configuration must be a mapping, got {type(data).__name__}")
    # Accept either a bare mapping or one nested under "fuzzyeq".
    if isinstance(data.get("fuzzyeq"), dict):
        data = data["fuzzyeq"]
    logger.debug("loaded configuration from %s: %s", p, data)
    return data


def build_config(cfg: Dict[str, Any] | None) -> ComparisonConfig:
    return ComparisonConfig.from_dict(cfg or {})


def build_from_config(cfg: Dict[str, Any] | None, observer: ObserverLike | None = None) -> FuzzyComparer:
    return FuzzyComparer.from_config(build_config(cfg), observer=observer)
