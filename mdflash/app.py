"""App: central object that wires together settings, storage, scanning and saving."""

import pathlib
import sys
from datetime import datetime

from mdflash.config import load_settings, srs_settings
from mdflash.models import Card, CardType
from mdflash.review_session import ReviewSession
from mdflash.scanner import scan_sources
from mdflash.storage import LocalFileStore, save_card, save_updates

# Reversed siblings share their declaration's metadata line with the
# forward card, so only forward cards are written back.
_FORWARD_TYPES = (CardType.BASIC, CardType.MULTI_LINE)


class App:
    """Holds shared state for one deck directory.

    Usage:
        app = App("/path/to/notes")
        session = app.start_session()          # all files
        card = session.get_current_card()
        card = session.next_card("good")
        app.save_progress(session.last_step.after)
        app.save_session(session)

    For testing, pass a store object and a fixed `now`.
    """

    def __init__(self, deck_dir: pathlib.Path | str, store=None,
                 now: datetime | None = None):
        self.deck_dir = pathlib.Path(deck_dir)
        self.settings = load_settings(self.deck_dir)
        self.srs = srs_settings(self.settings)
        self.separator = self.settings["separator"]
        self.inverse_separator = self.settings["inverse_separator"]
        self.store = store or LocalFileStore(self.deck_dir,
                                             recursive=bool(self.settings["recursive"]))
        self.now = now

    def scan(self) -> list[tuple[str, list[Card]]]:
        return scan_sources(self.store, self.separator, self.inverse_separator, self.now,
                            self.srs.maximum_interval)

    def cards_by_file(self) -> dict[str, list[Card]]:
        return {file_id: cards for file_id, cards in self.scan()}

    def start_session(self, file_id: str | None = None) -> ReviewSession:
        """Start a session over one file's cards, or over every file when file_id is None."""
        by_file = self.cards_by_file()
        if file_id is None:
            cards = [card for file_cards in by_file.values() for card in file_cards]
        elif file_id in by_file:
            cards = by_file[file_id]
        else:
            raise KeyError(f"No such card file: {file_id}")
        return ReviewSession(cards, self.srs, self.now)

    def save_progress(self, card: Card) -> None:
        """Persist one answered card right away."""
        if card.type in _FORWARD_TYPES:
            save_card(self.store, card, self.separator, self.inverse_separator)
        else:
            print(f"Warning: reversed card \"{card.front}\" is not saved to {card.source_file}",
                  file=sys.stderr)

    def save_session(self, session: ReviewSession) -> list[str]:
        """Persist every scheduled forward card of the session. Returns the file ids merged."""
        cards = session.get_cards_with_updated_schedules()
        skipped = sum(1 for c in cards if c.type not in _FORWARD_TYPES and c.schedule is not None)
        if skipped:
            print(f"Warning: {skipped} reviewed reversed card(s) not saved", file=sys.stderr)
        cards = [card for card in cards if card.type in _FORWARD_TYPES]
        return save_updates(self.store, cards, self.separator, self.inverse_separator)
