from __future__ import annotations
from typing import Any, Dict, List, Optional

from fuzzyeq.core.config import ComparisonConfig
from fuzzyeq.core.observer import ComparisonEvent


def build_event_rows(events: List[ComparisonEvent], *, mismatches_only: bool = False) -> List[Dict[str, Any]]:
    """
    Turn recorded comparison events into display-friendly rows.

    Rows keep emission order, which is post-order: children are listed
    before the container that holds them.
    """
    rows: List[Dict[str, Any]] = []
    for idx, e in enumerate(events, start=1):
        if mismatches_only and e.result:
            continue
        rows.append(
            {
                "index": idx,
                "path": e.path,
                "category": e.category.value,
                "left": e.left,
                "right": e.right,
                "result": e.result,
                "depth": e.depth,
                "details": dict(e.details),
            }
        )
    return rows


def _trim(s: str, width: int) -> str:
    return s if len(s) <= width else (s[: max(0, width - 1)] + "…")


def format_event_table(
    rows: List[Dict[str, Any]],
    *,
    max_rows: int = 50,
    col_widths: Optional[Dict[str, int]] = None,
) -> str:
    """
    Pretty-print a text table of event rows.

    Columns:
      IDX | PATH | CATEGORY | LEFT | RIGHT | EQUAL
    """
    widths = {
        "idx": 4,
        "path": 24,
        "category": 14,
        "left": 20,
        "right": 20,
        "result": 5,
    }
    if col_widths:
        widths.update(col_widths)

    header = (
        f"{'IDX':>{widths['idx']}} | {'PATH':<{widths['path']}} | {'CATEGORY':<{widths['category']}} | "
        f"{'LEFT':<{widths['left']}} | {'RIGHT':<{widths['right']}} | {'EQUAL':^{widths['result']}}"
    )
    sep = "-" * len(header)

    out_lines = [header, sep]
    for r in rows[:max_rows]:
        mark = "✓" if r["result"] else "✗"
        out_lines.append(
            f"{r['index']:>{widths['idx']}} | "
            f"{_trim(r['path'], widths['path']):<{widths['path']}} | "
            f"{_trim(r['category'], widths['category']):<{widths['category']}} | "
            f"{_trim(r['left'], widths['left']):<{widths['left']}} | "
            f"{_trim(r['right'], widths['right']):<{widths['right']}} | "
            f"{mark:^{widths['result']}}"
        )

    if len(rows) > max_rows:
        out_lines.append(f"... ({len(rows) - max_rows} more rows)")
    return "\n".join(out_lines)


def _format_details(details: Dict[str, Any]) -> str:
    parts = []
    for k, v in details.items():
        parts.append(f"{k}={v:.3g}" if isinstance(v, float) else f"{k}={v}")
    return ", ".join(parts)


def build_json_report(
    result: bool,
    events: List[ComparisonEvent],
    *,
    config: Optional[ComparisonConfig] = None,
) -> Dict[str, Any]:
    """JSON-serializable summary of one comparison and the events it produced."""
    first = next((e for e in events if not e.result), None)
    report: Dict[str, Any] = {
        "equal": bool(result),
        "events": build_event_rows(events),
        "first_mismatch": None if first is None else {
            "path": first.path,
            "category": first.category.value,
            "left": first.left,
            "right": first.right,
            "details": dict(first.details),
        },
    }
    if config is not None:
        report["config"] = config.to_dict()
    return report


def format_text_report(
    result: bool,
    events: List[ComparisonEvent],
    *,
    config: Optional[ComparisonConfig] = None,
    max_rows: int = 50,
    mismatches_only: bool = False,
    title: Optional[str] = None,
) -> str:
    lines: List[str] = []
    lines.append("=" * 80)
    lines.append(title or "fuzzyeq comparison")
    lines.append("=" * 80)
    lines.append(f"Equal:      {bool(result)}")
    if config is not None:
        lines.append(f"Tolerance:  {config.tolerance:g}")
        lines.append(f"Map mode:   {config.map_strategy}")

    first = next((e for e in events if not e.result), None)
    if first is not None:
        lines.append("")
        lines.append(f"First mismatch at {first.path} ({first.category.value}):")
        lines.append(f"  left:  {first.left}")
        lines.append(f"  right: {first.right}")
        if first.details:
            lines.append(f"  {_format_details(first.details)}")

    lines.append("")
    lines.append("Events:")
    lines.append(format_event_table(build_event_rows(events, mismatches_only=mismatches_only), max_rows=max_rows))
    lines.append("=" * 80)
    return "\n".join(lines)
