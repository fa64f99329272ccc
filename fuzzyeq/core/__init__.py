from .categories import Category, TypeTraits, classify, normalize_operand
from .dispatcher import PRECEDENCE, select_category
from .comparators import (
    CategoryComparator,
    NumericComparator,
    SequenceComparator,
    MapComparator,
    TupleComparator,
    UserEquatableComparator,
    IncompatibleComparator,
    default_comparators,
    get_comparator_for_category,
)
from .config import ComparisonConfig, DEFAULT_TOLERANCE, DEFAULT_MAX_DEPTH
from .observer import ComparisonEvent, NullObserver, RecordingObserver, LoggingObserver
from .engine import ComparisonContext, FuzzyComparer, is_equal
from .errors import (
    FuzzyEqualError,
    InvalidToleranceError,
    InvalidConfigError,
    NestingTooDeepError,
    CategoryMismatchError,
)

__all__ = [
    "Category",
    "TypeTraits",
    "classify",
    "normalize_operand",
    "PRECEDENCE",
    "select_category",
    "CategoryComparator",
    "NumericComparator",
    "SequenceComparator",
    "MapComparator",
    "TupleComparator",
    "UserEquatableComparator",
    "IncompatibleComparator",
    "default_comparators",
    "get_comparator_for_category",
    "ComparisonConfig",
    "DEFAULT_TOLERANCE",
    "DEFAULT_MAX_DEPTH",
    "ComparisonEvent",
    "NullObserver",
    "RecordingObserver",
    "LoggingObserver",
    "ComparisonContext",
    "FuzzyComparer",
    "is_equal",
    "FuzzyEqualError",
    "InvalidToleranceError",
    "InvalidConfigError",
    "NestingTooDeepError",
    "CategoryMismatchError",
]
