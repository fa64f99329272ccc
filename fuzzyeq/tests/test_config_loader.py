import json
import logging
from pathlib import Path

import pytest

from fuzzyeq.core.config import ComparisonConfig, DEFAULT_TOLERANCE, DEFAULT_MAX_DEPTH
from fuzzyeq.core.errors import InvalidConfigError, InvalidToleranceError
from fuzzyeq.core.observer import LoggingObserver
from fuzzyeq.io import load_config, build_config, build_from_config


def test_defaults():
    cfg = ComparisonConfig()
    assert cfg.tolerance == DEFAULT_TOLERANCE == 1e-5
    assert cfg.max_depth == DEFAULT_MAX_DEPTH
    assert cfg.map_strategy == "keyed"
    assert cfg.trace == "off"


def test_config_validation():
    assert ComparisonConfig(tolerance=1).tolerance == 1.0
    with pytest.raises(InvalidToleranceError):
        ComparisonConfig(tolerance=-1e-3)
    with pytest.raises(InvalidConfigError):
        ComparisonConfig(max_depth=0)
    with pytest.raises(InvalidConfigError):
        ComparisonConfig(map_strategy="sorted")
    with pytest.raises(InvalidConfigError):
        ComparisonConfig(trace="loud")
    with pytest.raises(InvalidConfigError):
        ComparisonConfig.from_dict({"tolerence": 0.1})


def test_load_json_config(tmp_path: Path):
    path = tmp_path / "fuzzyeq.json"
    path.write_text(json.dumps({"tolerance": 0.5, "map_strategy": "lockstep"}), encoding="utf-8")
    loaded = load_config(path)
    assert loaded == {"tolerance": 0.5, "map_strategy": "lockstep"}
    comparer = build_from_config(loaded)
    assert comparer.tolerance == 0.5
    assert comparer.compare(1.0, 1.4) is True
    assert comparer.compare({1: 1, 2: 2}, {2: 2, 1: 1}) is False


def test_load_yaml_config_nested_section(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text("fuzzyeq:\n  tolerance: 0.01\n  max_depth: 10\n  trace: all\n", encoding="utf-8")
    cfg = build_config(load_config(path))
    assert cfg == ComparisonConfig(tolerance=0.01, max_depth=10, trace="all")
    comparer = build_from_config(load_config(path))
    assert isinstance(comparer.observer, LoggingObserver)
    assert comparer.observer.mismatches_only is False


def test_trace_mismatches_logs(tmp_path: Path, caplog):
    caplog.set_level(logging.DEBUG, logger="fuzzyeq.core.observer")
    comparer = build_from_config({"trace": "mismatches"})
    assert comparer.compare([1.0, 2.0], [1.0, 3.0]) is False
    assert "$[1]" in caplog.text


def test_empty_and_invalid_files(tmp_path: Path):
    empty = tmp_path / "empty.yml"
    empty.write_text("", encoding="utf-8")
    assert load_config(empty) == {}
    assert build_config(load_config(empty)) == ComparisonConfig()

    bad = tmp_path / "list.json"
    bad.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(InvalidConfigError):
        load_config(bad)
