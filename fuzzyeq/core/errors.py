from __future__ import annotations


class FuzzyEqualError(Exception):
    """Base class for every error raised by fuzzyeq."""


class InvalidToleranceError(FuzzyEqualError, ValueError):
    def __init__(self, tolerance: object) -> None:
        super().__init__(f"tolerance must be a non-negative real number, got {tolerance!r}")
        self.tolerance = tolerance


class InvalidConfigError(FuzzyEqualError, ValueError):
    pass


class NestingTooDeepError(FuzzyEqualError, RecursionError):
    """
    Raised when operands nest deeper than the configured max_depth.
    Self-referential containers end up here as well.
    """
    def __init__(self, path: str, max_depth: int) -> None:
        super().__init__(f"nesting deeper than {max_depth} levels at {path}")
        self.path = path
        self.max_depth = max_depth


class CategoryMismatchError(FuzzyEqualError, TypeError):
    """
    A comparator was called directly on operands it cannot inspect
    (e.g. a sequence comparator given an int). The dispatcher never does this.
    """
    def __init__(self, category: str, left: object, right: object, missing: str) -> None:
        super().__init__(
            f"{category} comparator cannot compare {type(left).__name__} "
            f"with {type(right).__name__}: {missing}"
        )
        self.category = category
        self.missing = missing
