"""Tests for CLI argument parsing and command dispatch."""

from unittest.mock import MagicMock, patch

import pytest

from mdflash.cli import main


def _run(argv, inputs=()):
    answers = iter(inputs)

    def fake_input(prompt=""):
        try:
            return next(answers)
        except StopIteration:
            raise EOFError from None

    with patch("sys.argv", ["mdflash"] + argv):
        with patch("builtins.input", fake_input):
            main()


def test_no_command_prints_help(capsys):
    with pytest.raises(SystemExit):
        _run([])
    assert "usage:" in capsys.readouterr().out.lower()


def test_not_a_directory(tmp_path, capsys):
    with pytest.raises(SystemExit):
        _run(["scan", str(tmp_path / "missing")])
    assert "Not a directory" in capsys.readouterr().err


def test_scan(tmp_deck, capsys):
    _run(["scan", str(tmp_deck)])
    out = capsys.readouterr().out
    assert "Found 6 cards in 2 file(s)" in out
    assert "geo.md: 4 cards" in out


def test_scan_default_path_is_cwd(tmp_deck, monkeypatch):
    monkeypatch.chdir(tmp_deck)
    with patch("sys.argv", ["mdflash", "scan"]):
        with patch("mdflash.cli.App") as MockApp:
            mock_app = MagicMock()
            mock_app.scan.return_value = []
            MockApp.return_value = mock_app
            main()
            assert MockApp.call_args[0][0] == tmp_deck.resolve()
            mock_app.scan.assert_called_once()


def test_status(tmp_deck, capsys):
    (tmp_deck / "words.txt").write_text(
        "hund ;; dog\n<!-- SRS: interval=3, ease=250, due=2000-01-01T00:00:00.000Z -->\n"
        "katze ;; cat\n<!-- SRS: interval=3, ease=250, due=2999-01-01T00:00:00.000Z -->\n")
    _run(["status", str(tmp_deck)])
    out = capsys.readouterr().out
    assert "6 total" in out
    assert "Due now:   1" in out
    assert "New:       4" in out
    assert "Scheduled: 1" in out


def test_review_saves_each_answer(tmp_deck, capsys):
    _run(["review", str(tmp_deck), "--file", "words.txt"], ["", "g", "", "x", "e"])
    out = capsys.readouterr().out
    assert "Q: hund" in out
    assert "A: dog" in out
    assert "Unknown answer" in out
    assert "Reviewed 2 card(s), 100% of session" in out
    text = (tmp_deck / "words.txt").read_text(encoding="utf-8")
    assert text.count("<!-- SRS:") == 2
    assert "interval=3, ease=265" in text


def test_review_quit_keeps_answered_cards(tmp_deck, capsys):
    _run(["review", str(tmp_deck), "--file", "words.txt"], ["", "h", "", "q"])
    out = capsys.readouterr().out
    assert "Reviewed 1 card(s), 50% of session" in out
    text = (tmp_deck / "words.txt").read_text(encoding="utf-8")
    assert text.startswith("hund ;; dog\n<!-- SRS: interval=1, ease=230,")
    assert text.count("<!-- SRS:") == 1


def test_review_unknown_file(tmp_deck, capsys):
    with pytest.raises(SystemExit):
        _run(["review", str(tmp_deck), "--file", "nope.md"])
    assert "No such card file" in capsys.readouterr().err


def test_review_empty_deck(tmp_path, capsys):
    _run(["review", str(tmp_path)])
    assert "No cards to review." in capsys.readouterr().out


def test_review_end_of_input_saves_answered_cards(tmp_deck, capsys):
    _run(["review", str(tmp_deck), "--file", "words.txt"], ["", "g", ""])
    out = capsys.readouterr().out
    assert "Reviewed 1 card(s), 50% of session" in out
    text = (tmp_deck / "words.txt").read_text(encoding="utf-8")
    assert text.startswith("hund ;; dog\n<!-- SRS: interval=3, ease=250,")
    assert text.count("<!-- SRS:") == 1


def test_review_interrupt_saves_answered_cards(tmp_deck, capsys):
    answers = iter(["", "e"])

    def interrupting_input(prompt=""):
        answer = next(answers, None)
        if answer is None:
            raise KeyboardInterrupt
        return answer

    with patch("sys.argv", ["mdflash", "review", str(tmp_deck), "--file", "words.txt"]):
        with patch("builtins.input", interrupting_input):
            main()
    assert "Reviewed 1 card(s)" in capsys.readouterr().out
    text = (tmp_deck / "words.txt").read_text(encoding="utf-8")
    assert "interval=3, ease=265" in text


def test_invalid_deck_config_reports_error(tmp_deck, capsys):
    (tmp_deck / ".mdflash.toml").write_text("base_ease = 100\n")
    with pytest.raises(SystemExit) as exc:
        _run(["scan", str(tmp_deck)])
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("Error:")
    assert "Traceback" not in err
