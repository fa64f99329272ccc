from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
import logging
import reprlib

from fuzzyeq.core.categories import Category

logger = logging.getLogger(__name__)

_repr = reprlib.Repr()
_repr.maxstring = 40
_repr.maxother = 40
_repr.maxlist = 6
_repr.maxtuple = 6
_repr.maxdict = 4


def summarize(value: Any) -> str:
    """Short, bounded repr used in events and reports."""
    return _repr.repr(value)


@dataclass(frozen=True)
class ComparisonEvent:
    category: Category
    path: str
    left: str
    right: str
    result: bool
    depth: int = 0
    details: Dict[str, Any] = field(default_factory=dict)


ObserverLike = Callable[[ComparisonEvent], None]


class NullObserver:
    def __call__(self, event: ComparisonEvent) -> None:
        return None


class RecordingObserver:
    """
    Keeps every event in emission order. Events arrive post-order, so the
    first recorded mismatch is the deepest point where the operands diverge.
    """
    def __init__(self) -> None:
        self.events: List[ComparisonEvent] = []

    def __call__(self, event: ComparisonEvent) -> None:
        self.events.append(event)

    @property
    def mismatches(self) -> List[ComparisonEvent]:
        return [e for e in self.events if not e.result]

    @property
    def first_mismatch(self) -> Optional[ComparisonEvent]:
        for e in self.events:
            if not e.result:
                return e
        return None

    def by_path(self, path: str) -> List[ComparisonEvent]:
        return [e for e in self.events if e.path == path]

    def clear(self) -> None:
        self.events.clear()


class LoggingObserver:
    def __init__(
        self,
        log: Optional[logging.Logger] = None,
        level: int = logging.DEBUG,
        mismatches_only: bool = True,
    ) -> None:
        self.log = log or logger
        self.level = level
        self.mismatches_only = mismatches_only

    def __call__(self, event: ComparisonEvent) -> None:
        if self.mismatches_only and event.result:
            return
        if not self.log.isEnabledFor(self.level):
            return
        extra = ", ".join(f"{k}={v}" for k, v in event.details.items())
        self.log.log(
            self.level,
            "%s (%s) %s vs %s -> %s%s",
            event.path,
            event.category.value,
            event.left,
            event.right,
            event.result,
            f" [{extra}]" if extra else "",
        )
