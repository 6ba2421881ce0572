"""Spaced-repetition scheduling for flashcard decks."""

__version__ = "1.0.0"
