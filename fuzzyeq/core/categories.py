from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any
import numbers

import numpy as np


class Category(str, Enum):
    NUMERIC = "numeric"
    SEQUENCE = "sequence"
    MAP = "map"
    TUPLE = "tuple"
    USER_EQUATABLE = "user_equatable"
    INCOMPATIBLE = "incompatible"


# Iterable and sized, but compared as opaque values.
TEXT_TYPES = (str, bytes, bytearray)
BOOLEAN_TYPES = (bool, np.bool_)

_MAP_METHODS = ("keys", "items", "__getitem__", "__len__", "__iter__")
_CONTAINER_METHODS = ("__len__", "__iter__")


@dataclass(frozen=True)
class TypeTraits:
    """
    Every structural fact known about one concrete type. A type may satisfy
    several of these at once; the dispatcher decides which one wins.
    """
    type_: type
    is_numeric: bool
    is_sequence: bool
    is_unordered: bool
    is_map: bool
    is_tuple: bool
    defines_equality: bool


def _exposes(tp: type, names: tuple[str, ...]) -> bool:
    return all(callable(getattr(tp, name, None)) for name in names)


def is_map_type(tp: type) -> bool:
    return _exposes(tp, _MAP_METHODS)


def is_tuple_type(tp: type) -> bool:
    return issubclass(tp, tuple)


def is_sequence_type(tp: type) -> bool:
    if issubclass(tp, TEXT_TYPES) or is_map_type(tp) or is_tuple_type(tp):
        return False
    return _exposes(tp, _CONTAINER_METHODS)


def is_unordered_type(tp: type) -> bool:
    return is_sequence_type(tp) and callable(getattr(tp, "isdisjoint", None))


def is_numeric_type(tp: type) -> bool:
    if issubclass(tp, BOOLEAN_TYPES) or issubclass(tp, TEXT_TYPES):
        return False
    # numpy complex scalars define __float__ but drop the imaginary part.
    if issubclass(tp, np.complexfloating) or (issubclass(tp, numbers.Complex) and not issubclass(tp, numbers.Real)):
        return False
    # Scalars only: numpy arrays also define __float__ and __sub__.
    if is_sequence_type(tp) or is_map_type(tp) or is_tuple_type(tp):
        return False
    return _exposes(tp, ("__float__", "__sub__"))


def defines_equality(tp: type) -> bool:
    # None only ever equals itself; treat it as identity-equatable.
    if tp is type(None):
        return True
    return getattr(tp, "__eq__", object.__eq__) is not object.__eq__


@lru_cache(maxsize=512)
def classify(tp: type) -> TypeTraits:
    return TypeTraits(
        type_=tp,
        is_numeric=is_numeric_type(tp),
        is_sequence=is_sequence_type(tp),
        is_unordered=is_unordered_type(tp),
        is_map=is_map_type(tp),
        is_tuple=is_tuple_type(tp),
        defines_equality=defines_equality(tp),
    )


def normalize_operand(value: Any) -> Any:
    """0-d numpy arrays carry no length; compare them as the scalar they hold."""
    if isinstance(value, np.ndarray) and value.ndim == 0:
        return value[()]
    return value
