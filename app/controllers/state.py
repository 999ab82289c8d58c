import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S")

# (level, message): what a UI would show as a toast.
Notifier = Callable[[str, str], None]


def log_notifier(level: str, message: str) -> None:
    logger.log(logging.ERROR if level == "error" else logging.INFO, "[%s] %s", level, message)


class Phase(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass(frozen=True)
class WidgetState(Generic[S]):
    """
    Optimistic update lifecycle: Idle -> Pending(previous) -> Committed | RolledBack(previous).

    ``shown`` is what the widget displays; ``previous`` is the snapshot captured
    when the pending operation started, and is exactly what a rollback restores.
    """

    phase: Phase
    shown: S
    previous: Optional[S] = None

    @classmethod
    def idle(cls, shown: S) -> "WidgetState[S]":
        return cls(Phase.IDLE, shown)

    def begin(self, predicted: S) -> "WidgetState[S]":
        return WidgetState(Phase.PENDING, predicted, previous=self.shown)

    def commit(self, actual: S) -> "WidgetState[S]":
        return WidgetState(Phase.COMMITTED, actual)

    def rollback(self) -> "WidgetState[S]":
        return WidgetState(Phase.ROLLED_BACK, self.previous, previous=self.previous)

    @property
    def pending(self) -> bool:
        return self.phase is Phase.PENDING
