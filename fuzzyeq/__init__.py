"""
fuzzyeq: tolerance-aware structural equality for nested Python values.

A single entry point, `is_equal(left, right, tolerance=1e-5)`, decides whether
two values of possibly different but compatible types are equal:
- numeric scalars (int, float, Fraction, Decimal, numpy scalars) within an absolute tolerance
- sequences (lists, arrays, numpy arrays, sets) element by element
- mappings entry by entry
- tuples position by position
- anything else through its own __eq__, when both sides share a type

Types are classified by the operations they expose, not by name, and the
tolerance is threaded unchanged through every level of nesting.
"""

__all__ = [
    "__version__",
    "is_equal",
    "FuzzyComparer",
]

__version__ = "0.1.0"

from fuzzyeq.core.engine import FuzzyComparer, is_equal
