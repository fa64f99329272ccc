from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fuzzyeq.core.categories import Category, normalize_operand
from fuzzyeq.core.comparators import CategoryComparator, default_comparators, get_comparator_for_category
from fuzzyeq.core.config import DEFAULT_MAX_DEPTH, DEFAULT_TOLERANCE, ComparisonConfig, validate_tolerance
from fuzzyeq.core.dispatcher import select_category
from fuzzyeq.core.errors import NestingTooDeepError
from fuzzyeq.core.observer import ComparisonEvent, LoggingObserver, NullObserver, ObserverLike, summarize


@dataclass
class ComparisonContext:
    """
    Per-call state handed to a comparator. `child` recurses into a nested
    pair; `probe` does the same without reporting to the observer, for
    speculative matches (set elements, map entries).
    """
    comparer: "FuzzyComparer"
    tolerance: float
    path: str = "$"
    depth: int = 0
    silent: bool = False
    details: Dict[str, Any] = field(default_factory=dict)

    def child(self, left: Any, right: Any, step: str) -> bool:
        return self.comparer._compare(left, right, self._descend(self.path + step, self.silent))

    def probe(self, left: Any, right: Any) -> bool:
        return self.comparer._compare(left, right, self._descend(self.path, True))

    def _descend(self, path: str, silent: bool) -> "ComparisonContext":
        return ComparisonContext(
            comparer=self.comparer,
            tolerance=self.tolerance,
            path=path,
            depth=self.depth + 1,
            silent=silent,
        )


class FuzzyComparer:
    def __init__(self,
                 tolerance: float = DEFAULT_TOLERANCE,
                 observer: Optional[ObserverLike] = None,
                 max_depth: int = DEFAULT_MAX_DEPTH,
                 map_strategy: str = "keyed",
                 comparators_by_category: Optional[Dict[Category, CategoryComparator]] = None) -> None:
        self.tolerance = validate_tolerance(tolerance)
        self.observer = observer if observer is not None else NullObserver()
        self._reporting = not isinstance(self.observer, NullObserver)
        self.max_depth = max_depth
        self.comparators = default_comparators(map_strategy)
        self.comparators_by_category = comparators_by_category

    @staticmethod
    def from_config(config: ComparisonConfig, observer: Optional[ObserverLike] = None) -> "FuzzyComparer":
        if observer is None and config.trace != "off":
            observer = LoggingObserver(mismatches_only=(config.trace == "mismatches"))
        return FuzzyComparer(
            tolerance=config.tolerance,
            observer=observer,
            max_depth=config.max_depth,
            map_strategy=config.map_strategy,
        )

    def context(self, tolerance: Optional[float] = None) -> ComparisonContext:
        tol = self.tolerance if tolerance is None else validate_tolerance(tolerance)
        return ComparisonContext(comparer=self, tolerance=tol)

    def compare(self, left: Any, right: Any, tolerance: Optional[float] = None) -> bool:
        """
        Fuzzy equality of two arbitrarily nested values.

        Numeric leaves are equal when |a - b| <= tolerance; containers, maps and
        tuples recurse with the same tolerance; any pair without a matching rule
        is simply unequal. `tolerance` overrides the comparer's default for this
        call only.
        """
        return self._compare(left, right, self.context(tolerance))

    __call__ = compare

    def _compare(self, left: Any, right: Any, ctx: ComparisonContext) -> bool:
        if ctx.depth > self.max_depth:
            raise NestingTooDeepError(ctx.path, self.max_depth)
        left = normalize_operand(left)
        right = normalize_operand(right)
        category = select_category(type(left), type(right))
        comparator = get_comparator_for_category(self.comparators, self.comparators_by_category, category)
        result = bool(comparator.compare(left, right, ctx))
        if self._reporting and not ctx.silent:
            self.observer(ComparisonEvent(
                category=category,
                path=ctx.path,
                left=summarize(left),
                right=summarize(right),
                result=result,
                depth=ctx.depth,
                details=dict(ctx.details),
            ))
        return result


def is_equal(left: Any,
             right: Any,
             tolerance: float = DEFAULT_TOLERANCE,
             *,
             observer: Optional[ObserverLike] = None) -> bool:
    """
    Compare two values of any types within an absolute numeric tolerance.

    >>> is_equal([1.2, 36.6], (1.2, 36.6))
    False
    >>> is_equal({1: 1.2, 36: 36.6}, {1: 1.2000001, 36: 36.6})
    True
    """
    return FuzzyComparer(tolerance=tolerance, observer=observer).compare(left, right)
