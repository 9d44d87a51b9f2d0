"""Summary reports over a game's state."""

from typing import Iterable, Optional

from pydantic import BaseModel

from wordchain.engine.game_state import GameState


class GameSummary(BaseModel):
    player_count: int
    word_count: int
    category: str
    best_player: Optional[str] = None
    best_score: int = 0


class WordAnalysis(BaseModel):
    total: int
    average_length: float
    longest: str
    shortest: str


def game_summary(state: GameState) -> GameSummary:
    """Player count, word count and the current leader."""
    best_index = state.find_winner_index()
    best = state.players[best_index] if best_index is not None else None
    return GameSummary(
        player_count=len(state.players),
        word_count=len(state.used_words),
        category=state.category,
        best_player=best.name if best else None,
        best_score=best.score if best else 0,
    )


def word_analysis(used_words: Iterable[str]) -> Optional[WordAnalysis]:
    """Length statistics for the played words, or None if there are none.

    Ties for longest/shortest go to the alphabetically first word so the
    result does not depend on set iteration order.
    """
    words = sorted(used_words)
    if not words:
        return None

    longest = words[0]
    shortest = words[0]
    for word in words[1:]:
        if len(word) > len(longest):
            longest = word
        if len(word) < len(shortest):
            shortest = word

    return WordAnalysis(
        total=len(words),
        average_length=round(sum(len(word) for word in words) / len(words), 2),
        longest=longest,
        shortest=shortest,
    )
