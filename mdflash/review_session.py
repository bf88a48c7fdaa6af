"""ReviewSession: orders a batch of cards and applies the SRS calculator per answer."""

import dataclasses
from dataclasses import dataclass
from datetime import datetime

from mdflash.models import Card, SrsSettings
from mdflash.srs import (calculate_initial_schedule, calculate_schedule,
                         coerce_response, ensure_utc, round_half_up)

IDLE = "idle"
ACTIVE = "active"
COMPLETE = "complete"


@dataclass(frozen=True)
class Progress:
    current: int
    total: int
    percentage: int


@dataclass(frozen=True)
class ReviewStep:
    """One answered card: its value before and after rescheduling."""
    before: Card
    after: Card
    response: str


def order_cards(cards: list[Card], now: datetime) -> list[Card]:
    """Due cards first, then the rest; each group by earliest due date.

    Cards that were never reviewed count as not due with a due date of
    `now`, so they land among the not-due cards. The sort is stable.
    """
    def sort_key(card: Card):
        if card.schedule is None:
            return (1, now)
        return (0 if card.schedule.is_due else 1, ensure_utc(card.schedule.due_date))
    return sorted(cards, key=sort_key)


class ReviewSession:
    """Single pass through a batch of cards.

    The cursor only moves forward. Cards are never mutated: answering a
    card replaces it in the batch with a new Card value, and the pair is
    kept in `history` (the most recent one is `last_step`).

    Usage:
        session = ReviewSession(cards, settings)
        card = session.get_current_card()
        while card is not None:
            ...show card, collect response...
            card = session.next_card(response)
        updated = session.get_cards_with_updated_schedules()
    """

    def __init__(self, cards: list[Card], settings: SrsSettings | None = None,
                 now: datetime | None = None):
        self.settings = settings or SrsSettings()
        self.now = ensure_utc(now)
        self.cards = order_cards(list(cards), self.now)
        self.cursor = 0
        self.history: list[ReviewStep] = []

    @property
    def state(self) -> str:
        if not self.cards:
            return IDLE
        if self.cursor < len(self.cards):
            return ACTIVE
        return COMPLETE

    @property
    def last_step(self) -> ReviewStep | None:
        return self.history[-1] if self.history else None

    def get_current_card(self) -> Card | None:
        if self.cursor < len(self.cards):
            return self.cards[self.cursor]
        return None

    def next_card(self, response) -> Card | None:
        """Reschedule the current card, advance, and return the new current card."""
        response = coerce_response(response)
        card = self.get_current_card()
        if card is not None:
            if card.schedule is None:
                schedule = calculate_initial_schedule(response, self.settings, self.now)
            else:
                schedule = calculate_schedule(response, card.schedule.interval,
                                              card.schedule.ease, self.settings, self.now)
            updated = dataclasses.replace(card, schedule=schedule)
            self.cards[self.cursor] = updated
            self.history.append(ReviewStep(before=card, after=updated,
                                           response=response.value))
        self.cursor += 1
        return self.get_current_card()

    def has_more_cards(self) -> bool:
        return self.cursor < len(self.cards)

    def get_progress(self) -> Progress:
        total = len(self.cards)
        current = min(self.cursor, total)
        percentage = round_half_up(current / total * 100) if total > 0 else 0
        return Progress(current=current, total=total, percentage=percentage)

    def get_cards_with_updated_schedules(self) -> list[Card]:
        return list(self.cards)
