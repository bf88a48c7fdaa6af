"""Card parser: finds flashcard declarations in plain text / markdown.

Syntax (one declaration per line, checked in this order):
    ?? Question       next line is the answer, card plus its reverse
    ? Question        next line is the answer
    Front ;;; Back    card plus its reverse
    Front ;; Back     one card

The checks are mutually exclusive: since ";;;" contains ";;", a line such
as `A ;;; B` is an inverse declaration only and never also a basic one.

Scheduling metadata is stored as an HTML comment directly after the
declaration's content lines:
    <!-- SRS: interval=3, ease=250, due=2025-01-04T09:30:00.000Z -->
"""

import re
from dataclasses import dataclass
from datetime import datetime

from mdflash.models import Card, CardType, ScheduleInfo
from mdflash.srs import MIN_EASE, ensure_utc

DEFAULT_SEPARATOR = ";;"
DEFAULT_INVERSE_SEPARATOR = ";;;"

METADATA_PREFIX = "<!-- SRS:"
_METADATA_RE = re.compile(
    r'^<!--\s*SRS:\s*interval=(\d+)\s*,\s*ease=(\d+)\s*,\s*due=(\S+?)\s*-->$')


@dataclass
class Declaration:
    """A card declaration found at lines[start:start + length]."""
    type: CardType
    sibling_type: CardType | None
    front: str
    back: str
    start: int
    length: int

    @property
    def is_card(self) -> bool:
        return bool(self.front) and bool(self.back)


def is_metadata_line(line: str) -> bool:
    return line.strip().startswith(METADATA_PREFIX)


def format_timestamp(value: datetime) -> str:
    value = ensure_utc(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_timestamp(text: str) -> datetime | None:
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def format_metadata(schedule: ScheduleInfo) -> str:
    return (f"{METADATA_PREFIX} interval={schedule.interval}, ease={schedule.ease}, "
            f"due={format_timestamp(schedule.due_date)} -->")


def parse_metadata(line: str, now: datetime | None = None,
                   maximum_interval: int | None = None) -> ScheduleInfo | None:
    """Parse a metadata comment line. Returns None if it is malformed.

    Hand-edited values are pulled back into range: ease is raised to at
    least 130 and interval is capped at maximum_interval when given.
    """
    m = _METADATA_RE.match(line.strip())
    if not m:
        return None
    interval = int(m.group(1))
    due_date = parse_timestamp(m.group(3))
    if interval < 1 or due_date is None:
        return None
    if maximum_interval is not None:
        interval = min(interval, maximum_interval)
    ease = max(MIN_EASE, int(m.group(2)))
    return ScheduleInfo(interval=interval, ease=ease, due_date=due_date,
                        is_due=due_date <= ensure_utc(now))


def match_declaration(lines: list[str], i: int, separator: str = DEFAULT_SEPARATOR,
                      inverse_separator: str = DEFAULT_INVERSE_SEPARATOR
                      ) -> Declaration | None:
    """Detect a declaration starting at lines[i].

    Returns None when lines[i] declares nothing. A returned Declaration may
    still have an empty front or back (see Declaration.is_card); its length
    says how many lines the declaration occupies either way.
    """
    line = lines[i].strip()
    if not line or line.startswith(METADATA_PREFIX):
        return None

    if line.startswith("?"):
        if i + 1 >= len(lines):
            return None
        answer = lines[i + 1].strip()
        if line.startswith("??"):
            return Declaration(CardType.MULTI_LINE, CardType.MULTI_LINE_REVERSED,
                               line[2:].strip(), answer, i, 2)
        return Declaration(CardType.MULTI_LINE, None, line[1:].strip(), answer, i, 2)

    if inverse_separator and inverse_separator in line:
        front, back = line.split(inverse_separator, 1)
        return Declaration(CardType.BASIC, CardType.REVERSED,
                           front.strip(), back.strip(), i, 1)

    if separator and separator in line:
        front, back = line.split(separator, 1)
        return Declaration(CardType.BASIC, None, front.strip(), back.strip(), i, 1)

    return None


def _cards_for(decl: Declaration, schedule: ScheduleInfo | None) -> list[Card]:
    first_line = decl.start + 1
    last_line = decl.start + decl.length
    cards = [Card(front=decl.front, back=decl.back, type=decl.type, schedule=schedule,
                  source_line=first_line, end_line=last_line)]
    if decl.sibling_type is not None:
        cards.append(Card(front=decl.back, back=decl.front, type=decl.sibling_type,
                          source_line=first_line, end_line=last_line))
    return cards


def extract(content: str, separator: str = DEFAULT_SEPARATOR,
            inverse_separator: str = DEFAULT_INVERSE_SEPARATOR,
            now: datetime | None = None,
            maximum_interval: int | None = None) -> list[Card]:
    """Extract cards from file text, in file order.

    Never raises: anything that is not a well-formed declaration is skipped.
    Metadata lines following a declaration give its forward card a
    schedule; reversed siblings are returned unscheduled. source_file is
    left empty for the caller to fill in.
    """
    now = ensure_utc(now)
    lines = content.split("\n")
    cards = []
    i = 0
    while i < len(lines):
        decl = match_declaration(lines, i, separator, inverse_separator)
        if decl is None:
            i += 1
            continue

        i = decl.start + decl.length
        schedule = None
        while i < len(lines) and is_metadata_line(lines[i]):
            if schedule is None:
                schedule = parse_metadata(lines[i], now, maximum_interval)
            i += 1

        if decl.is_card:
            cards.extend(_cards_for(decl, schedule))
    return cards
