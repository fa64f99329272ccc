from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict
import math
import numbers

from fuzzyeq.core.errors import InvalidConfigError, InvalidToleranceError

DEFAULT_TOLERANCE = 1e-5
# Each nesting level costs a few interpreter frames; stay well below
# the default recursion limit of 1000.
DEFAULT_MAX_DEPTH = 200

MAP_STRATEGIES = ("keyed", "lockstep")
TRACE_MODES = ("off", "mismatches", "all")


def validate_tolerance(tolerance: Any) -> float:
    if isinstance(tolerance, bool) or not isinstance(tolerance, numbers.Real):
        raise InvalidToleranceError(tolerance)
    value = float(tolerance)
    if math.isnan(value) or value < 0.0:
        raise InvalidToleranceError(tolerance)
    return value


@dataclass(frozen=True)
class ComparisonConfig:
    tolerance: float = DEFAULT_TOLERANCE
    max_depth: int = DEFAULT_MAX_DEPTH
    map_strategy: str = "keyed"
    trace: str = "off"

    def __post_init__(self) -> None:
        object.__setattr__(self, "tolerance", validate_tolerance(self.tolerance))
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise InvalidConfigError(f"max_depth must be a positive integer, got {self.max_depth!r}")
        if self.map_strategy not in MAP_STRATEGIES:
            raise InvalidConfigError(
                f"map_strategy must be one of {', '.join(MAP_STRATEGIES)}, got {self.map_strategy!r}"
            )
        if self.trace not in TRACE_MODES:
            raise InvalidConfigError(f"trace must be one of {', '.join(TRACE_MODES)}, got {self.trace!r}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "ComparisonConfig":
        unknown = set(d) - {"tolerance", "max_depth", "map_strategy", "trace"}
        if unknown:
            raise InvalidConfigError(f"unknown configuration keys: {', '.join(sorted(unknown))}")
        return ComparisonConfig(
            tolerance=d.get("tolerance", DEFAULT_TOLERANCE),
            max_depth=d.get("max_depth", DEFAULT_MAX_DEPTH),
            map_strategy=str(d.get("map_strategy", "keyed")).lower(),
            trace=str(d.get("trace", "off")).lower(),
        )
