"""WordChainGame - drives players and the state machine turn by turn."""

import asyncio
import logging
from typing import Callable, Optional

from pydantic import BaseModel

from wordchain.engine import GameOutcome, GameStateMachine
from wordchain.events import (
    GameEvent,
    GameOver,
    GameStart,
    WordAccepted,
    WordRejected,
)
from wordchain.engine.state_machine import RejectionReason, TurnResult
from wordchain.models import ComputerPlayer, HumanPlayer
from wordchain.stats import StatsRecorder

logger = logging.getLogger(__name__)


class GameResult(BaseModel):
    """Final result returned by WordChainGame.run()."""

    outcome: GameOutcome
    winner_name: Optional[str] = None
    winner_index: Optional[int] = None
    scores: list[tuple[str, int]]
    used_words: set[str]
    last_word: str = ""
    category: str = ""


class WordChainGame:
    """Main game controller - runs the turn loop until the machine is terminal.

    Each turn:
        1. Ask the current player for a word (human input or computer choice)
        2. Submit it to the state machine
        3. Emit an event describing the result
        4. Advance to the next player

    Only the move request and the optional computer delay await; all state
    changes happen synchronously inside the machine.
    """

    def __init__(
        self,
        machine: GameStateMachine,
        stats: Optional[StatsRecorder] = None,
        on_event: Optional[Callable[[GameEvent], None]] = None,
        computer_delay: float = 0.0,
    ):
        """Initialize the game.

        Args:
            machine: A started (or resumed active) state machine.
            stats: Optional collaborator that receives per-player results.
            on_event: Optional callback fired for every event.
            computer_delay: Cosmetic pause in seconds after computer turns.
        """
        self._machine = machine
        self._stats = stats
        self._on_event = on_event
        self._computer_delay = computer_delay
        self._events: list[GameEvent] = []

    @property
    def machine(self) -> GameStateMachine:
        return self._machine

    @property
    def events(self) -> list[GameEvent]:
        return list(self._events)

    async def run(self) -> GameResult:
        """Run turns until the game ends and return the result."""
        state = self._machine.state
        self._emit(GameStart(
            round=state.round_count,
            category=state.category,
            player_names=[player.name for player in state.players],
        ))

        while self._machine.is_active:
            await self.play_turn()

        result = self._build_result()
        self._emit(GameOver(
            round=state.round_count,
            outcome=result.outcome,
            winner_name=result.winner_name,
            winner_score=state.winner.score if state.winner else 0,
            scores=result.scores,
            word_count=len(result.used_words),
            last_word=result.last_word,
        ))
        self._report_stats()
        return result

    async def play_turn(self) -> TurnResult:
        """Resolve the current player's turn and advance to the next one."""
        machine = self._machine
        index = machine.state.turn_index
        player = machine.current_player
        # Captured before submitting, for the rejection message
        required = machine.state.last_word_canonical[-1:] or None

        word = await player.produce_move(machine.context())
        result = machine.submit_word(index, word)

        if result.accepted:
            self._emit(WordAccepted(
                round=machine.state.round_count,
                player_index=index,
                player_name=player.name,
                word=result.word,
                points=result.points,
                score=player.score,
            ))
        else:
            self._emit(WordRejected(
                round=machine.state.round_count,
                player_index=index,
                player_name=player.name,
                word=result.word,
                reason=result.reason,
                required_letter=required if result.reason == RejectionReason.CHAIN_MISMATCH else None,
                skip_count=machine.state.skip_count,
            ))

        machine.advance_turn()

        if isinstance(player, ComputerPlayer) and self._computer_delay > 0:
            await asyncio.sleep(self._computer_delay)
        return result

    def _build_result(self) -> GameResult:
        state = self._machine.state
        winner = state.winner
        return GameResult(
            outcome=state.outcome,
            winner_name=winner.name if winner else None,
            winner_index=state.winner_index,
            scores=state.scores(),
            used_words=set(state.used_words),
            last_word=state.last_word,
            category=state.category,
        )

    def _report_stats(self) -> None:
        state = self._machine.state
        if self._stats is None or not state.is_terminal:
            return
        for index, player in enumerate(state.players):
            if not isinstance(player, HumanPlayer) or player.identity is None:
                continue
            self._stats.record_game(
                player.identity,
                player.score,
                index == state.winner_index,
                state.last_word,
                state.category,
            )

    def _emit(self, event: GameEvent) -> None:
        self._events.append(event)
        logger.debug("%s", event)
        if self._on_event is not None:
            self._on_event(event)
