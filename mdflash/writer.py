"""Writer: re-embeds scheduling metadata into a card file's original text."""

import sys
from dataclasses import dataclass, field

from mdflash.parser import (DEFAULT_INVERSE_SEPARATOR, DEFAULT_SEPARATOR,
                            Declaration, format_metadata, is_metadata_line,
                            match_declaration)


@dataclass
class MergeResult:
    text: str
    unmatched: list = field(default_factory=list)


def _take_match(pool: list, decl: Declaration):
    """Pop the first pooled card matching the declaration's content.

    Front must match exactly; back is compared only when both sides have one.
    """
    for idx, card in enumerate(pool):
        if card.front != decl.front:
            continue
        back = getattr(card, "back", None)
        if back and decl.back and back != decl.back:
            continue
        return pool.pop(idx)
    return None


def merge_updates(original_text: str, updated_cards, separator: str = DEFAULT_SEPARATOR,
                  inverse_separator: str = DEFAULT_INVERSE_SEPARATOR) -> MergeResult:
    """Write one metadata line after each declaration that has an update.

    updated_cards: Card or CardUpdate objects (anything with front, an
    optional back and a schedule). Entries without a schedule are ignored.
    Existing metadata lines directly after a matched declaration are
    replaced, so running this twice with the same cards changes nothing.
    Every other line is kept verbatim and in order.
    """
    lines = original_text.split("\n")
    pool = [c for c in updated_cards if getattr(c, "schedule", None) is not None]

    i = 0
    while i < len(lines) and pool:
        decl = match_declaration(lines, i, separator, inverse_separator)
        if decl is None:
            i += 1
            continue

        meta_start = decl.start + decl.length
        card = _take_match(pool, decl) if decl.is_card else None
        if card is None:
            i = meta_start
            continue

        meta_end = meta_start
        while meta_end < len(lines) and is_metadata_line(lines[meta_end]):
            meta_end += 1
        # keep CRLF files consistent
        eol = "\r" if lines[decl.start].endswith("\r") else ""
        lines[meta_start:meta_end] = [format_metadata(card.schedule) + eol]
        i = meta_start + 1

    return MergeResult(text="\n".join(lines), unmatched=pool)


def update_content(original_text: str, updated_cards, separator: str = DEFAULT_SEPARATOR,
                   inverse_separator: str = DEFAULT_INVERSE_SEPARATOR) -> str:
    """Like merge_updates, but warns about unmatched cards and returns only the text."""
    result = merge_updates(original_text, updated_cards, separator, inverse_separator)
    for card in result.unmatched:
        back = getattr(card, "back", None) or "N/A"
        print(f'Warning: card not found in file: front "{card.front}", back "{back}"',
              file=sys.stderr)
    return result.text
