"""Source scanning: read every card file in a store and parse its cards."""

import dataclasses
import sys
from datetime import datetime

from mdflash.models import Card
from mdflash.parser import DEFAULT_INVERSE_SEPARATOR, DEFAULT_SEPARATOR, extract


def scan_sources(store, separator: str = DEFAULT_SEPARATOR,
                 inverse_separator: str = DEFAULT_INVERSE_SEPARATOR,
                 now: datetime | None = None, maximum_interval: int | None = None
                 ) -> list[tuple[str, list[Card]]]:
    """Scan all files listed by the store.

    Returns list of (file_id, cards) in store order. Files without cards
    are included with an empty list; unreadable files are skipped with a
    warning.
    """
    results = []
    for file_id in store.list_files():
        try:
            text = store.read_file(file_id)
        except (OSError, UnicodeDecodeError) as e:
            print(f"Warning: cannot read {file_id}: {e}", file=sys.stderr)
            continue
        cards = [dataclasses.replace(card, source_file=file_id)
                 for card in extract(text, separator, inverse_separator, now,
                                   maximum_interval)]
        results.append((file_id, cards))
    return results
