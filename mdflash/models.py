"""Shared data classes used by the parser, scheduler, sequencer and writer."""

import enum
from dataclasses import dataclass, field
from datetime import datetime


class CardType(str, enum.Enum):
    BASIC = "basic"
    REVERSED = "reversed"
    MULTI_LINE = "multi_line"
    MULTI_LINE_REVERSED = "multi_line_reversed"


class ReviewResponse(str, enum.Enum):
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"


@dataclass(frozen=True)
class ScheduleInfo:
    interval: int
    ease: int
    due_date: datetime
    is_due: bool = False


@dataclass(frozen=True)
class SrsSettings:
    """Scheduling parameters, fixed for the lifetime of a session.

    lapses_interval_change and max_link_factor are accepted for
    configuration compatibility but not used by the current formula.
    """
    hard_factor: float = 1.2
    easy_bonus: float = 1.3
    maximum_interval: int = 36525
    lapses_interval_change: float = 0.5
    base_ease: int = 250
    max_link_factor: float = 0.3

    def __post_init__(self):
        if self.maximum_interval < 1:
            raise ValueError(f"maximum_interval must be >= 1, got {self.maximum_interval}")
        if self.base_ease < 130:
            raise ValueError(f"base_ease must be >= 130, got {self.base_ease}")


@dataclass(frozen=True)
class Card:
    front: str
    back: str
    type: CardType = CardType.BASIC
    context: list[str] = field(default_factory=list)
    source_file: str = ""
    schedule: ScheduleInfo | None = None
    source_line: int = 1
    end_line: int = 1

    @property
    def is_due(self) -> bool:
        return self.schedule is not None and self.schedule.is_due


@dataclass
class CardUpdate:
    """Minimal shape accepted by the writer: what to match and what to write."""
    front: str
    schedule: ScheduleInfo
    back: str | None = None
    source_file: str = ""
