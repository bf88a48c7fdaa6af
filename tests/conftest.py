"""Shared test fixtures."""

from datetime import datetime, timezone

import pytest

from mdflash.models import SrsSettings

NOW = datetime(2025, 1, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep the user's ~/.config/mdflash/settings.toml out of tests."""
    monkeypatch.setenv("MDFLASH_CONFIG", str(tmp_path / "no-such-settings.toml"))


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def settings():
    return SrsSettings()


@pytest.fixture
def tmp_deck(tmp_path):
    """A deck directory with two card files and one file that is not a card file."""
    deck = tmp_path / "deck"
    deck.mkdir()
    (deck / "geo.md").write_text(
        "# Capitals\n"
        "\n"
        "Paris ;; France\n"
        "Berlin ;;; Germany\n"
        "\n"
        "? Largest ocean\n"
        "Pacific\n",
        encoding="utf-8")
    (deck / "words.txt").write_text("hund ;; dog\nkatze ;; cat\n", encoding="utf-8")
    (deck / "image.png").write_bytes(b"\x89PNG")
    return deck
