import json
from pathlib import Path

from fuzzyeq import __version__
from fuzzyeq.cli import main


def _write(tmp_path: Path, name: str, obj) -> str:
    p = tmp_path / name
    p.write_text(json.dumps(obj), encoding="utf-8")
    return str(p)


def test_version(capsys):
    assert main(["version"]) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_compare_equal_documents(tmp_path: Path, capsys):
    left = _write(tmp_path, "left.json", {"a": [1.0, 2.0], "b": "x"})
    right = _write(tmp_path, "right.json", {"b": "x", "a": [1.000001, 2]})
    assert main(["compare", left, right]) == 0
    assert capsys.readouterr().out.strip() == "true"


def test_compare_respects_tolerance(tmp_path: Path, capsys):
    left = _write(tmp_path, "left.json", [1.0, 2.0])
    right = _write(tmp_path, "right.json", [1.0, 2.4])
    assert main(["compare", left, right]) == 1
    assert capsys.readouterr().out.strip() == "false"
    assert main(["compare", left, right, "--tolerance", "0.5"]) == 0


def test_compare_with_yaml_config_and_report(tmp_path: Path, capsys):
    left = _write(tmp_path, "left.json", [1.0, 2.0])
    right = tmp_path / "right.yaml"
    right.write_text("- 1.0\n- 2.2\n", encoding="utf-8")
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("tolerance: 0.1\n", encoding="utf-8")
    out = tmp_path / "report" / "result.json"
    assert main(["compare", left, str(right), "--config", str(cfg), "--out", str(out), "--explain"]) == 1
    text = capsys.readouterr().out
    assert "First mismatch at $[1]" in text
    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["equal"] is False
    assert report["config"]["tolerance"] == 0.1


def test_invalid_tolerance_exit_code(tmp_path: Path):
    left = _write(tmp_path, "left.json", 1)
    assert main(["compare", left, left, "--tolerance", "-1"]) == 2
