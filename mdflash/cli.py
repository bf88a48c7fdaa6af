"""CLI: command-line interface for mdflash."""

import argparse
import pathlib
import sys

from mdflash.app import App

_RESPONSE_KEYS = {"h": "hard", "g": "good", "e": "easy",
                  "hard": "hard", "good": "good", "easy": "easy"}


def cmd_scan(args, app: App):
    results = app.scan()
    total_cards = sum(len(cards) for _, cards in results)
    print(f"Found {total_cards} cards in {len(results)} file(s)")
    for file_id, cards in results:
        print(f"  {file_id}: {len(cards)} cards")


def cmd_status(args, app: App):
    cards = [card for _, file_cards in app.scan() for card in file_cards]
    new = sum(1 for c in cards if c.schedule is None)
    due = sum(1 for c in cards if c.is_due)
    print(f"Cards:     {len(cards)} total")
    print(f"Due now:   {due}")
    print(f"New:       {new}")
    print(f"Scheduled: {len(cards) - new - due}")


def _ask_response() -> str | None:
    while True:
        answer = input("[h]ard / [g]ood / [e]asy / [q]uit: ").strip().lower()
        if answer in ("q", "quit"):
            return None
        if answer in _RESPONSE_KEYS:
            return _RESPONSE_KEYS[answer]
        print(f"Unknown answer: {answer!r}")


def cmd_review(args, app: App):
    try:
        session = app.start_session(args.file)
    except KeyError:
        print(f"No such card file: {args.file}", file=sys.stderr)
        sys.exit(1)

    card = session.get_current_card()
    if card is None:
        print("No cards to review.")
        return

    try:
        while card is not None:
            progress = session.get_progress()
            print(f"\n[{progress.current + 1}/{progress.total}] {card.source_file}")
            print(f"Q: {card.front}")
            input("(press Enter to show the answer) ")
            print(f"A: {card.back}")
            response = _ask_response()
            if response is None:
                break
            card = session.next_card(response)
            app.save_progress(session.last_step.after)
    except (EOFError, KeyboardInterrupt):
        print()

    app.save_session(session)
    progress = session.get_progress()
    print(f"\nReviewed {len(session.history)} card(s), {progress.percentage}% of session")


def main():
    parser = argparse.ArgumentParser(prog="mdflash",
                                     description="Spaced repetition over markdown flashcards")
    subparsers = parser.add_subparsers(dest="command")

    p_scan = subparsers.add_parser("scan", help="List card files and card counts")
    p_scan.add_argument("path", nargs="?", help="Deck directory (default: cwd)")

    p_status = subparsers.add_parser("status", help="Show due and new card counts")
    p_status.add_argument("path", nargs="?", help="Deck directory (default: cwd)")

    p_review = subparsers.add_parser(
        "review", help="Review cards in the terminal (reversed cards are not saved)")
    p_review.add_argument("path", nargs="?", help="Deck directory (default: cwd)")
    p_review.add_argument("--file", help="Only review cards from this file")

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    deck_dir = pathlib.Path(args.path).resolve() if args.path else pathlib.Path.cwd()
    if not deck_dir.is_dir():
        print(f"Not a directory: {deck_dir}", file=sys.stderr)
        sys.exit(1)

    try:
        app = App(deck_dir)
        if args.command == "scan":
            cmd_scan(args, app)
        elif args.command == "status":
            cmd_status(args, app)
        elif args.command == "review":
            cmd_review(args, app)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
