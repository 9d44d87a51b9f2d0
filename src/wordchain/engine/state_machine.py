"""GameStateMachine - turn legality, scoring and termination.

States:
    IDLE -> ACTIVE                  (start)
    ACTIVE -> ACTIVE                (accepted or rejected turn below thresholds)
    ACTIVE -> WON_BY_WORDS          (used words reach max_words_for_win)
    ACTIVE -> LOST_BY_ATTRITION     (consecutive skips reach max_skipped_turns)

Terminal states have no outgoing transitions; start() begins a new game.
Every problem with a submitted word is returned as a TurnResult, never raised.
"""

import logging
from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel

from wordchain.ai.selector import canonical
from wordchain.config import DEFAULT_CONFIG, GameConfig
from wordchain.engine.game_state import GameOutcome, GameState
from wordchain.models.player import MoveContext, Player

logger = logging.getLogger(__name__)


class RejectionReason(str, Enum):
    """Why a submitted word was not accepted."""

    EMPTY = "empty"
    TOO_SHORT = "too_short"
    DUPLICATE = "duplicate"
    CHAIN_MISMATCH = "chain_mismatch"
    TERMINAL = "terminal"


class TurnResult(BaseModel):
    """Outcome of a single submit_word call."""

    accepted: bool
    reason: Optional[RejectionReason] = None
    word: str = ""
    points: int = 0
    player_index: Optional[int] = None


def score_for(word: str, config: GameConfig = DEFAULT_CONFIG) -> int:
    """Points for an accepted word: half its length, capped."""
    return min(len(word) // 2, config.max_points_per_word)


class GameStateMachine:
    """Applies one player's word per turn and decides when the game ends.

    Usage:
        machine = GameStateMachine([human, computer])
        machine.start("cities")
        result = machine.submit_word(machine.state.turn_index, "Moscow")
        machine.advance_turn()
    """

    def __init__(
        self,
        players: Optional[Sequence[Player]] = None,
        category: str = "",
        config: GameConfig = DEFAULT_CONFIG,
        state: Optional[GameState] = None,
    ):
        """Initialize the machine.

        Args:
            players: Players in turn order. Ignored when state is given.
            category: Initial category (start() may override it).
            config: Rule thresholds.
            state: Existing state to resume, e.g. one restored from a snapshot.

        Raises:
            ValueError: If there are no players.
        """
        if state is None:
            state = GameState(players=list(players or []), category=category)
        if not state.players:
            raise ValueError("GameStateMachine requires at least one player")
        self._state = state
        self._config = config

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def outcome(self) -> GameOutcome:
        return self._state.outcome

    @property
    def is_active(self) -> bool:
        return self._state.is_active

    @property
    def current_player(self) -> Player:
        return self._state.current_player

    @property
    def winner(self) -> Optional[Player]:
        return self._state.winner

    def start(self, category: str, players: Optional[Sequence[Player]] = None) -> None:
        """Begin a fresh game in the given category.

        Scores are reset so replaying with the same players starts from zero.

        Raises:
            ValueError: If the player list is empty.
        """
        if players is not None:
            if not players:
                raise ValueError("GameStateMachine requires at least one player")
            self._state.players = list(players)

        for player in self._state.players:
            player.reset_score()

        state = self._state
        state.category = category
        state.used_words = set()
        state.last_word = ""
        state.skip_count = 0
        state.round_count = 0
        state.turn_index = 0
        state.winner_index = None
        state.is_active = True
        state.outcome = GameOutcome.ACTIVE
        logger.debug("Game started: category=%s players=%d", category, len(state.players))

    def context(self) -> MoveContext:
        """Read-only view handed to the player whose turn it is."""
        return MoveContext(
            category=self._state.category,
            used_words=frozenset(self._state.used_words),
            last_word=self._state.last_word,
        )

    def check_word(self, raw_word: Optional[str]) -> Optional[RejectionReason]:
        """Return why the word would be rejected, or None if it is legal."""
        word = (raw_word or "").strip()
        if not word:
            return RejectionReason.EMPTY
        if len(word) < self._config.min_word_length:
            return RejectionReason.TOO_SHORT

        form = canonical(word)
        if form in self._state.used_words:
            return RejectionReason.DUPLICATE

        last = self._state.last_word_canonical
        if last and form[0] != last[-1]:
            return RejectionReason.CHAIN_MISMATCH
        return None

    def submit_word(self, player_index: int, raw_word: Optional[str]) -> TurnResult:
        """Apply one turn for the player at player_index.

        Args:
            player_index: Index of the acting player in turn order.
            raw_word: Submitted word; None or blank counts as a skip.

        Returns:
            TurnResult describing acceptance or the rejection reason.

        Raises:
            IndexError: If player_index is out of range.
        """
        state = self._state
        if not 0 <= player_index < len(state.players):
            raise IndexError(f"player_index {player_index} out of range")

        if not state.is_active:
            return TurnResult(
                accepted=False,
                reason=RejectionReason.TERMINAL,
                word=(raw_word or "").strip(),
                player_index=player_index,
            )

        word = (raw_word or "").strip()
        reason = self.check_word(word)

        if reason is None:
            points = score_for(word, self._config)
            state.used_words.add(canonical(word))
            state.last_word = word
            state.players[player_index].add_points(points)
            state.skip_count = 0
            state.round_count += 1
            result = TurnResult(
                accepted=True, word=word, points=points, player_index=player_index
            )
        else:
            state.skip_count += 1
            result = TurnResult(
                accepted=False, reason=reason, word=word, player_index=player_index
            )

        self._evaluate_termination()
        return result

    def advance_turn(self) -> int:
        """Move to the next player and return the new turn index."""
        state = self._state
        state.turn_index = (state.turn_index + 1) % len(state.players)
        return state.turn_index

    def _evaluate_termination(self) -> None:
        # Word-count win takes precedence over attrition.
        state = self._state
        if len(state.used_words) >= self._config.max_words_for_win:
            self._finish(GameOutcome.WON_BY_WORDS)
        elif state.skip_count >= self._config.max_skipped_turns:
            self._finish(GameOutcome.LOST_BY_ATTRITION)

    def _finish(self, outcome: GameOutcome) -> None:
        state = self._state
        state.is_active = False
        state.outcome = outcome
        state.winner_index = state.find_winner_index()
        logger.info(
            "Game over: %s, winner=%s",
            outcome.value,
            state.winner.name if state.winner else None,
        )
