from __future__ import annotations
from functools import lru_cache
from typing import Callable, Tuple

from fuzzyeq.core.categories import Category, TypeTraits, classify

Rule = Callable[[TypeTraits, TypeTraits], bool]


def _both_maps(lt: TypeTraits, rt: TypeTraits) -> bool:
    return lt.is_map and rt.is_map


def _both_sequences(lt: TypeTraits, rt: TypeTraits) -> bool:
    return lt.is_sequence and rt.is_sequence


def _both_numeric(lt: TypeTraits, rt: TypeTraits) -> bool:
    return lt.is_numeric and rt.is_numeric


def _either_tuple(lt: TypeTraits, rt: TypeTraits) -> bool:
    return lt.is_tuple or rt.is_tuple


def _same_equatable_type(lt: TypeTraits, rt: TypeTraits) -> bool:
    return lt.type_ is rt.type_ and lt.defines_equality and not lt.is_numeric


# First match wins. Maps are iterable, so they go before sequences; numbers go
# before tuples; a user __eq__ never shadows the built-in rules.
PRECEDENCE: Tuple[Tuple[Category, Rule], ...] = (
    (Category.MAP, _both_maps),
    (Category.SEQUENCE, _both_sequences),
    (Category.NUMERIC, _both_numeric),
    (Category.TUPLE, _either_tuple),
    (Category.USER_EQUATABLE, _same_equatable_type),
)


@lru_cache(maxsize=2048)
def select_category(left_type: type, right_type: type) -> Category:
    """
    Pick the comparison rule for a pair of concrete types.
    Depends on the types alone, never on the values.
    """
    lt = classify(left_type)
    rt = classify(right_type)
    for category, rule in PRECEDENCE:
        if rule(lt, rt):
            return category
    return Category.INCOMPATIBLE
