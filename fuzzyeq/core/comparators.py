from __future__ import annotations
from fractions import Fraction
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Optional, Protocol, Tuple
import math

import numpy as np

from fuzzyeq.core.categories import Category, classify
from fuzzyeq.core.errors import CategoryMismatchError, InvalidConfigError

if TYPE_CHECKING:
    from fuzzyeq.core.engine import ComparisonContext


class CategoryComparator(Protocol):
    category: Category

    def compare(self, left: Any, right: Any, ctx: "ComparisonContext") -> bool: ...


def _require(category: Category, left: Any, right: Any, check, missing: str) -> None:
    if not (check(classify(type(left))) and check(classify(type(right)))):
        raise CategoryMismatchError(category.value, left, right, missing)


def _widen(value: Any) -> np.float64:
    # float() raises OverflowError past the float64 range rather than saturating.
    return np.float64(float(value))


def _exact_delta(left: Any, right: Any) -> float:
    try:
        return float(abs(Fraction(left) - Fraction(right)))
    except (TypeError, ValueError, OverflowError):
        return math.inf


class NumericComparator:
    category = Category.NUMERIC

    def compare(self, left: Any, right: Any, ctx: "ComparisonContext") -> bool:
        _require(self.category, left, right, lambda t: t.is_numeric, "both operands must be numeric scalars")
        try:
            a = _widen(left)
            b = _widen(right)
        except OverflowError:
            # ints beyond float64 range
            delta = _exact_delta(left, right)
            ctx.details.update(delta=delta, tolerance=ctx.tolerance)
            return delta <= ctx.tolerance
        except ValueError:
            # Decimal("sNaN") refuses float conversion; NaNs never compare equal.
            ctx.details["reason"] = "not convertible to float"
            return False
        if a == b:
            return True
        with np.errstate(over="ignore", invalid="ignore"):
            delta = float(np.abs(a - b))
        ctx.details.update(delta=delta, tolerance=ctx.tolerance)
        return delta <= ctx.tolerance


def _hash_hints(items: List[Any]) -> Dict[Any, List[int]]:
    """Positions of each hashable item, for trying exact counterparts first."""
    hints: Dict[Any, List[int]] = {}
    for j, item in enumerate(items):
        try:
            hints.setdefault(item, []).append(j)
        except TypeError:
            continue
    return hints


def _lookup(hints: Dict[Any, List[int]], item: Any) -> List[int]:
    try:
        return hints.get(item, [])
    except TypeError:
        return []


def _match_all(
    n_left: int,
    n_right: int,
    accepts: Callable[[int, int], bool],
    hinted: Callable[[int], List[int]],
) -> Tuple[Dict[int, int], Optional[int]]:
    """
    One-to-one matching of left positions onto right positions where
    accepts(i, j) holds, by Kuhn's augmenting paths. The result depends only
    on which pairs are accepted, never on the order they are tried in, so a
    wider tolerance can only add matches.

    Returns (left -> right pairs, first left position that cannot be matched).
    Stops at the first failure: no perfect matching exists past that point.
    """
    cache: Dict[Tuple[int, int], bool] = {}
    owner: Dict[int, int] = {}

    def edge(i: int, j: int) -> bool:
        if (i, j) not in cache:
            cache[(i, j)] = bool(accepts(i, j))
        return cache[(i, j)]

    def neighbours(i: int) -> Iterator[int]:
        first = hinted(i)
        for j in first:
            if edge(i, j):
                yield j
        for j in range(n_right):
            if j not in first and edge(i, j):
                yield j

    def augment(start: int) -> bool:
        # Iterative DFS; rights[k] is the position that led into lefts[k + 1].
        seen = set()
        lefts = [start]
        frontier = [neighbours(start)]
        rights: List[int] = []
        while frontier:
            j = next(frontier[-1], None)
            if j is None:
                frontier.pop()
                lefts.pop()
                if rights:
                    rights.pop()
                continue
            if j in seen:
                continue
            seen.add(j)
            rights.append(j)
            if j not in owner:
                for u, r in zip(lefts, rights):
                    owner[r] = u
                return True
            lefts.append(owner[j])
            frontier.append(neighbours(owner[j]))
        return False

    for i in range(n_left):
        if not augment(i):
            return {u: r for r, u in owner.items()}, i
    return {u: r for r, u in owner.items()}, None


class SequenceComparator:
    category = Category.SEQUENCE

    def compare(self, left: Any, right: Any, ctx: "ComparisonContext") -> bool:
        _require(self.category, left, right, lambda t: t.is_sequence, "both operands must be sized iterables")
        if len(left) != len(right):
            ctx.details.update(reason="size mismatch", left_size=len(left), right_size=len(right))
            return False
        if classify(type(left)).is_unordered or classify(type(right)).is_unordered:
            return self._compare_unordered(left, right, ctx)
        for index, (a, b) in enumerate(zip(left, right)):
            if not ctx.child(a, b, f"[{index}]"):
                ctx.details["first_mismatch"] = index
                return False
        return True

    @staticmethod
    def _compare_unordered(left: Any, right: Any, ctx: "ComparisonContext") -> bool:
        lefts, rights = list(left), list(right)
        hints = _hash_hints(rights)
        _, failed = _match_all(
            len(lefts),
            len(rights),
            lambda i, j: ctx.probe(lefts[i], rights[j]),
            lambda i: _lookup(hints, lefts[i]),
        )
        if failed is not None:
            ctx.details.update(reason="no counterpart", element=repr(lefts[failed]))
            return False
        return True


class MapComparator:
    """
    strategy="keyed" pairs entries one-to-one where both key and value are
    equal within tolerance, trying the exact key first. strategy="lockstep" walks both
    maps in their iteration order, which is only meaningful when both are ordered alike.
    """
    category = Category.MAP

    def __init__(self, strategy: str = "keyed") -> None:
        if strategy not in ("keyed", "lockstep"):
            raise InvalidConfigError(f"unknown map strategy {strategy!r}")
        self.strategy = strategy

    def compare(self, left: Any, right: Any, ctx: "ComparisonContext") -> bool:
        _require(self.category, left, right, lambda t: t.is_map, "both operands must be mappings")
        if len(left) != len(right):
            ctx.details.update(reason="size mismatch", left_size=len(left), right_size=len(right))
            return False
        if self.strategy == "lockstep":
            return self._compare_lockstep(left, right, ctx)
        return self._compare_keyed(left, right, ctx)

    @staticmethod
    def _compare_lockstep(left: Any, right: Any, ctx: "ComparisonContext") -> bool:
        for index, ((lk, lv), (rk, rv)) in enumerate(zip(left.items(), right.items())):
            if not ctx.child(lk, rk, f".keys[{index}]"):
                ctx.details["first_mismatch"] = index
                return False
            if not ctx.child(lv, rv, f"[{lk!r}]"):
                ctx.details["first_mismatch"] = index
                return False
        return True

    def _compare_keyed(self, left: Any, right: Any, ctx: "ComparisonContext") -> bool:
        lefts, rights = list(left.items()), list(right.items())
        hints = _hash_hints([rk for rk, _ in rights])
        pairs, failed = _match_all(
            len(lefts),
            len(rights),
            lambda i, j: ctx.probe(lefts[i][0], rights[j][0]) and ctx.probe(lefts[i][1], rights[j][1]),
            lambda i: _lookup(hints, lefts[i][0]),
        )
        for i, (lk, lv) in enumerate(lefts):
            if i == failed:
                return self._report_unmatched(lk, lv, rights, _lookup(hints, lk), ctx)
            if not ctx.child(lv, rights[pairs[i]][1], f"[{lk!r}]"):
                ctx.details["first_mismatch"] = repr(lk)
                return False
        return True

    @staticmethod
    def _report_unmatched(lk: Any, lv: Any, rights: List[Tuple[Any, Any]], hinted: List[int], ctx: "ComparisonContext") -> bool:
        for j in hinted:
            rk, rv = rights[j]
            if ctx.probe(lk, rk):
                ctx.child(lv, rv, f"[{lk!r}]")
                ctx.details["first_mismatch"] = repr(lk)
                return False
        if any(ctx.probe(lk, rk) for rk, _ in rights):
            ctx.details.update(reason="no matching entry", key=repr(lk))
        else:
            ctx.details.update(reason="missing key", key=repr(lk))
        return False


class TupleComparator:
    category = Category.TUPLE

    def compare(self, left: Any, right: Any, ctx: "ComparisonContext") -> bool:
        lt, rt = classify(type(left)), classify(type(right))
        if not (lt.is_tuple or rt.is_tuple):
            raise CategoryMismatchError(self.category.value, left, right, "at least one operand must be a tuple")
        if not (lt.is_tuple and rt.is_tuple):
            ctx.details["reason"] = "not a product type"
            return False
        if len(left) != len(right):
            ctx.details.update(reason="arity mismatch", left_arity=len(left), right_arity=len(right))
            return False
        # Every position is compared, even after a mismatch.
        results = [ctx.child(a, b, f"[{index}]") for index, (a, b) in enumerate(zip(left, right))]
        failed = [index for index, ok in enumerate(results) if not ok]
        if failed:
            ctx.details["mismatched_positions"] = failed
        return not failed


class UserEquatableComparator:
    category = Category.USER_EQUATABLE

    def compare(self, left: Any, right: Any, ctx: "ComparisonContext") -> bool:
        if type(left) is not type(right):
            raise CategoryMismatchError(self.category.value, left, right, "operands must share one type")
        if left is None:
            return right is None
        return bool(left == right)


class IncompatibleComparator:
    category = Category.INCOMPATIBLE

    def compare(self, left: Any, right: Any, ctx: "ComparisonContext") -> bool:
        ctx.details["reason"] = f"{type(left).__name__} vs {type(right).__name__}"
        return False


def default_comparators(map_strategy: str = "keyed") -> Dict[Category, CategoryComparator]:
    return {
        Category.NUMERIC: NumericComparator(),
        Category.SEQUENCE: SequenceComparator(),
        Category.MAP: MapComparator(strategy=map_strategy),
        Category.TUPLE: TupleComparator(),
        Category.USER_EQUATABLE: UserEquatableComparator(),
        Category.INCOMPATIBLE: IncompatibleComparator(),
    }


def get_comparator_for_category(
    defaults: Dict[Category, CategoryComparator],
    overrides: Dict[Category, CategoryComparator] | None,
    category: Category,
) -> CategoryComparator:
    """
    Resolve which comparator handles a category.
    Falls back to the default comparator if no override exists.
    """
    if overrides and category in overrides:
        return overrides[category]
    return defaults[category]
