"""Computer opponent: word lists and selection strategy."""

from wordchain.ai.word_database import DEFAULT_DATABASE, DEFAULT_WORDS, WordDatabase
from wordchain.ai.selector import canonical, find_candidates, select_word

__all__ = [
    "DEFAULT_DATABASE",
    "DEFAULT_WORDS",
    "WordDatabase",
    "canonical",
    "find_candidates",
    "select_word",
]
