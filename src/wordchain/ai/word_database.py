"""Static per-category word lists used by the computer opponent."""

from typing import Mapping, Optional

# Order matters: the easy and hard strategies scan these lists left to right.
DEFAULT_WORDS: dict[str, tuple[str, ...]] = {
    "cities": (
        "Moscow", "Amsterdam", "Madrid", "London", "Oslo",
        "Kyiv", "Warsaw", "Rome", "Paris", "Berlin",
        "Nairobi", "Istanbul", "Dublin", "Wellington", "Athens",
    ),
    "animals": (
        "Antelope", "Ram", "Rhinoceros", "Cheetah", "Dolphin",
        "Raccoon", "Giraffe", "Zebra", "Iguana", "Kangaroo",
        "Eagle", "Narwhal", "Lynx", "Octopus", "Tiger",
    ),
    "plants": (
        "Acacia", "Birch", "Chamomile", "Carnation", "Oak",
        "Spruce", "Jasmine", "Iris", "Cedar", "Linden",
        "Elm", "Magnolia", "Nettle", "Rose", "Tulip",
    ),
}


class WordDatabase:
    """Read-only lookup of word lists keyed by category name.

    Unknown categories resolve to an empty list rather than raising, so a
    computer player in an unknown category simply has no candidates.
    """

    def __init__(self, words: Optional[Mapping[str, list[str] | tuple[str, ...]]] = None):
        source = DEFAULT_WORDS if words is None else words
        self._words: dict[str, tuple[str, ...]] = {
            category: tuple(entries) for category, entries in source.items()
        }

    def words(self, category: str) -> tuple[str, ...]:
        """Return the word list for a category in its natural order."""
        return self._words.get(category, ())

    def categories(self) -> list[str]:
        """Return the known category names."""
        return list(self._words.keys())

    def __contains__(self, category: object) -> bool:
        return category in self._words


DEFAULT_DATABASE = WordDatabase()
