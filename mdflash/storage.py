"""File storage collaborator and per-file saving of updated schedules.

Anything with read_file(file_id) -> str, write_file(file_id, text) and
list_files() -> list[str] can serve as a store. LocalFileStore is the
on-disk implementation used by the CLI.
"""

import pathlib

from mdflash.parser import DEFAULT_INVERSE_SEPARATOR, DEFAULT_SEPARATOR
from mdflash.writer import update_content

FLASHCARD_EXTENSIONS = (".md", ".txt")


def is_valid_flashcard_file(name: str, extensions=FLASHCARD_EXTENSIONS) -> bool:
    return pathlib.PurePath(name).suffix.lower() in extensions


class LocalFileStore:
    """Cards files under a directory, addressed by their POSIX path relative to it."""

    def __init__(self, root: pathlib.Path | str, extensions=FLASHCARD_EXTENSIONS,
                 recursive: bool = False):
        self.root = pathlib.Path(root)
        self.extensions = tuple(extensions)
        self.recursive = recursive

    def _path(self, file_id: str) -> pathlib.Path:
        path = (self.root / file_id).resolve()
        if not path.is_relative_to(self.root.resolve()):
            raise ValueError(f"File outside of {self.root}: {file_id}")
        return path

    def list_files(self) -> list[str]:
        pattern = "**/*" if self.recursive else "*"
        files = []
        for path in sorted(self.root.glob(pattern)):
            rel = path.relative_to(self.root)
            if any(part.startswith(".") for part in rel.parts):
                continue
            if path.is_file() and is_valid_flashcard_file(path.name, self.extensions):
                files.append(rel.as_posix())
        return files

    def read_file(self, file_id: str) -> str:
        with open(self._path(file_id), encoding="utf-8", newline="") as f:
            return f.read()

    def write_file(self, file_id: str, text: str) -> None:
        with open(self._path(file_id), "w", encoding="utf-8", newline="") as f:
            f.write(text)


def save_updates(store, cards, separator: str = DEFAULT_SEPARATOR,
                 inverse_separator: str = DEFAULT_INVERSE_SEPARATOR) -> list[str]:
    """Merge updated cards into their source files, one read/write per file.

    Cards are grouped by source_file. Returns the file ids merged; a file is
    only rewritten when its text changed.
    """
    by_file: dict[str, list] = {}
    for card in cards:
        if getattr(card, "schedule", None) is None:
            continue
        by_file.setdefault(card.source_file, []).append(card)

    merged = []
    for file_id, file_cards in by_file.items():
        original = store.read_file(file_id)
        updated = update_content(original, file_cards, separator, inverse_separator)
        if updated != original:
            store.write_file(file_id, updated)
        merged.append(file_id)
    return merged


def save_card(store, card, separator: str = DEFAULT_SEPARATOR,
              inverse_separator: str = DEFAULT_INVERSE_SEPARATOR) -> None:
    """Merge a single card, leaving other cards' metadata in the file untouched."""
    save_updates(store, [card], separator, inverse_separator)
