"""Word selection strategy for the computer opponent.

Pure function of (word list, used words, last word, difficulty). The caller
treats a None result as an empty submission, which the state machine records
as a skipped turn.
"""

import random
from typing import Iterable, Optional

from wordchain.config import Difficulty, parse_difficulty


def canonical(word: str) -> str:
    """Case-folded, trimmed form used for comparison and uniqueness."""
    return word.strip().casefold()


def find_candidates(
    words: Iterable[str],
    used_words: set[str] | frozenset[str],
    last_word: str = "",
) -> list[str]:
    """Return unused words that continue the chain, in list order.

    Args:
        words: Category word list in its natural order.
        used_words: Canonical forms already played.
        last_word: Last accepted word in any casing, or "" at game start.
    """
    last = canonical(last_word) if last_word else ""
    required = last[-1] if last else ""

    candidates = []
    for word in words:
        form = canonical(word)
        if not form or form in used_words:
            continue
        if required and form[0] != required:
            continue
        candidates.append(word)
    return candidates


def select_word(
    words: Iterable[str],
    used_words: set[str] | frozenset[str],
    last_word: str = "",
    difficulty: Difficulty | str = Difficulty.MEDIUM,
    rng: Optional[random.Random] = None,
) -> Optional[str]:
    """Choose the computer's next word.

    - easy: first candidate in list order
    - hard: longest candidate, earliest wins ties
    - medium (and anything unrecognised): uniform random choice

    Returns:
        The chosen word in its original casing, or None if nothing fits.
    """
    candidates = find_candidates(words, used_words, last_word)
    if not candidates:
        return None

    level = parse_difficulty(difficulty)
    if level == Difficulty.EASY:
        return candidates[0]

    if level == Difficulty.HARD:
        best = candidates[0]
        for word in candidates[1:]:
            # Strict comparison keeps the leftmost word on equal lengths
            if len(word) > len(best):
                best = word
        return best

    return (rng or random).choice(candidates)
