"""mdflash: spaced repetition over flashcards written in plain text files."""

__version__ = "0.1.0"

from mdflash.models import Card, CardType, CardUpdate, ReviewResponse, ScheduleInfo, SrsSettings
from mdflash.parser import extract
from mdflash.review_session import ReviewSession
from mdflash.srs import calculate_initial_schedule, calculate_schedule
from mdflash.writer import merge_updates, update_content
from mdflash.app import App

__all__ = [
    "App", "Card", "CardType", "CardUpdate", "ReviewResponse", "ReviewSession",
    "ScheduleInfo", "SrsSettings", "calculate_initial_schedule", "calculate_schedule",
    "extract", "merge_updates", "update_content",
]
