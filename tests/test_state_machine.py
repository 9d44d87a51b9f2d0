"""Tests for GameStateMachine: validation, scoring and termination."""

import pytest

from wordchain.config import GameConfig
from wordchain.engine import (
    GameOutcome,
    GameState,
    GameStateMachine,
    RejectionReason,
    score_for,
)
from wordchain.models import ComputerPlayer, HumanPlayer


CHAIN = ["Moscow", "Warsaw", "Wellington", "Nairobi", "Istanbul"]


def create_players() -> list:
    """Human first, computer second."""
    return [
        HumanPlayer(name="Ann", username="ann"),
        ComputerPlayer(difficulty="easy"),
    ]


def create_started_machine(category: str = "cities", **kwargs) -> GameStateMachine:
    """Machine with two players, already started."""
    machine = GameStateMachine(create_players(), **kwargs)
    machine.start(category)
    return machine


def play(machine: GameStateMachine, word) -> object:
    """Submit for the current player and advance the turn."""
    result = machine.submit_word(machine.state.turn_index, word)
    machine.advance_turn()
    return result


class TestConstruction:
    """Tests for machine construction and start()."""

    def test_requires_players(self):
        """Zero players is a programmer error."""
        with pytest.raises(ValueError):
            GameStateMachine([])

    def test_start_with_empty_players_raises(self):
        """start() also rejects an empty player list."""
        machine = GameStateMachine(create_players())
        with pytest.raises(ValueError):
            machine.start("cities", players=[])

    def test_new_machine_is_idle(self):
        """Before start() the machine is inactive."""
        machine = GameStateMachine(create_players())
        assert machine.outcome == GameOutcome.IDLE
        assert not machine.is_active

    def test_start_resets_state(self):
        """start() clears words, counters and scores."""
        machine = create_started_machine()
        play(machine, "Moscow")
        play(machine, "Oslo")

        machine.start("animals")

        state = machine.state
        assert state.category == "animals"
        assert state.used_words == set()
        assert state.last_word == ""
        assert state.skip_count == 0
        assert state.round_count == 0
        assert state.turn_index == 0
        assert state.is_active
        assert state.outcome == GameOutcome.ACTIVE
        assert all(player.score == 0 for player in state.players)

    def test_start_can_replace_players(self):
        """Passing players to start() replaces the list."""
        machine = GameStateMachine(create_players())
        solo = HumanPlayer(name="Solo")
        machine.start("plants", players=[solo])
        assert machine.state.players == [solo]


class TestAcceptance:
    """Tests for accepted words."""

    def test_first_word_accepted(self):
        """Moscow is accepted at game start and scores 3."""
        machine = create_started_machine()

        result = machine.submit_word(0, "Moscow")

        assert result.accepted
        assert result.reason is None
        assert result.points == 3
        assert machine.state.last_word == "Moscow"
        assert machine.state.used_words == {"moscow"}
        assert machine.state.players[0].score == 3
        assert machine.state.round_count == 1

    def test_word_is_trimmed(self):
        """Whitespace around the word is ignored."""
        machine = create_started_machine()
        result = machine.submit_word(0, "  Moscow \n")
        assert result.accepted
        assert result.word == "Moscow"
        assert machine.state.last_word == "Moscow"

    def test_chain_continues_case_insensitively(self):
        """Chain rule compares canonical letters."""
        machine = create_started_machine()
        play(machine, "MOSCOW")
        result = play(machine, "warsaw")
        assert result.accepted
        assert machine.state.used_words == {"moscow", "warsaw"}

    def test_cyrillic_chain(self):
        """Non-Latin words follow the same rules."""
        machine = create_started_machine()
        play(machine, "Москва")
        result = play(machine, "Архангельск")
        assert result.accepted
        assert "москва" in machine.state.used_words

    def test_acceptance_resets_skip_counter(self):
        """An accepted word clears earlier skips."""
        machine = create_started_machine()
        play(machine, "Moscow")
        play(machine, "Oslo")
        assert machine.state.skip_count == 1
        play(machine, "Warsaw")
        assert machine.state.skip_count == 0

    def test_points_go_to_acting_player(self):
        """Points are awarded to the player at player_index."""
        machine = create_started_machine()
        machine.submit_word(1, "Rome")
        assert machine.state.players[0].score == 0
        assert machine.state.players[1].score == 2


class TestScoring:
    """Tests for the per-word score."""

    @pytest.mark.parametrize(
        "word,points",
        [("Om", 1), ("Ram", 1), ("Oslo", 2), ("Paris", 2), ("Moscow", 3), ("Wellington", 3)],
    )
    def test_score_is_half_length_capped(self, word, points):
        """min(len // 2, 3)."""
        assert score_for(word) == points

    def test_cap_follows_config(self):
        """Cap comes from the config."""
        assert score_for("Wellington", GameConfig(max_points_per_word=10)) == 5


class TestRejection:
    """Tests for rejected submissions."""

    @pytest.mark.parametrize("word", [None, "", "   "])
    def test_empty(self, word):
        """Missing or blank words are EMPTY skips."""
        machine = create_started_machine()
        result = machine.submit_word(0, word)
        assert not result.accepted
        assert result.reason == RejectionReason.EMPTY
        assert machine.state.skip_count == 1

    def test_too_short(self):
        """Single letters are below the minimum length."""
        machine = create_started_machine()
        result = machine.submit_word(0, " a ")
        assert result.reason == RejectionReason.TOO_SHORT

    def test_duplicate_is_case_insensitive(self):
        """A word already played in any casing is a duplicate."""
        machine = create_started_machine()
        play(machine, "Warsaw")
        result = play(machine, "WARSAW")
        assert result.reason == RejectionReason.DUPLICATE
        assert machine.state.used_words == {"warsaw"}

    def test_chain_mismatch(self):
        """Oslo does not follow Moscow."""
        machine = create_started_machine()
        play(machine, "Moscow")

        result = machine.submit_word(1, "Oslo")

        assert not result.accepted
        assert result.reason == RejectionReason.CHAIN_MISMATCH
        assert machine.state.skip_count == 1

    def test_rejection_does_not_mutate_words_or_scores(self):
        """Only the skip counter changes on rejection."""
        machine = create_started_machine()
        play(machine, "Moscow")
        before_words = set(machine.state.used_words)
        before_scores = machine.state.scores()

        machine.submit_word(1, "Oslo")

        assert machine.state.used_words == before_words
        assert machine.state.last_word == "Moscow"
        assert machine.state.scores() == before_scores
        assert machine.state.round_count == 1

    def test_check_word_has_no_side_effects(self):
        """check_word only reports."""
        machine = create_started_machine()
        assert machine.check_word("a") == RejectionReason.TOO_SHORT
        assert machine.check_word("Moscow") is None
        assert machine.state.skip_count == 0
        assert machine.state.used_words == set()

    def test_bad_player_index_raises(self):
        """Out-of-range index is a programmer error."""
        machine = create_started_machine()
        with pytest.raises(IndexError):
            machine.submit_word(5, "Moscow")


class TestTermination:
    """Tests for win and attrition transitions."""

    def test_win_exactly_at_five_words(self):
        """Machine stays active for four words and ends on the fifth."""
        machine = create_started_machine()
        for word in CHAIN[:4]:
            assert play(machine, word).accepted
            assert machine.is_active
            assert machine.outcome == GameOutcome.ACTIVE

        assert play(machine, CHAIN[4]).accepted
        assert not machine.is_active
        assert machine.outcome == GameOutcome.WON_BY_WORDS
        assert len(machine.state.used_words) == 5

    def test_winner_is_highest_score(self):
        """After the chain, the first player has 9 points vs 6."""
        machine = create_started_machine()
        for word in CHAIN:
            play(machine, word)
        assert machine.state.scores() == [("Ann", 9), ("Computer", 6)]
        assert machine.winner.name == "Ann"
        assert machine.state.winner_index == 0

    def test_attrition_after_two_skips(self):
        """Two consecutive rejections end the game."""
        machine = create_started_machine()
        play(machine, "Moscow")
        play(machine, "Oslo")
        assert machine.is_active
        play(machine, "")
        assert not machine.is_active
        assert machine.outcome == GameOutcome.LOST_BY_ATTRITION
        assert len(machine.state.used_words) < 5

    def test_attrition_winner_by_score_alone(self):
        """Winner is decided by score, not by who made the skips."""
        machine = create_started_machine()
        play(machine, "Rome")      # Ann +2
        play(machine, "Edinburgh")  # Computer +3
        play(machine, "x")
        play(machine, "")
        assert machine.outcome == GameOutcome.LOST_BY_ATTRITION
        assert machine.winner.name == "Computer"

    def test_tie_goes_to_first_player(self):
        """Equal scores resolve to the earliest player in turn order."""
        machine = create_started_machine()
        play(machine, "Oslo")  # +2
        play(machine, "Omsk")  # +2
        play(machine, "")
        play(machine, "")
        assert machine.state.scores() == [("Ann", 2), ("Computer", 2)]
        assert machine.state.winner_index == 0

    def test_attrition_with_no_words(self):
        """Two skips at the very start still terminate."""
        machine = create_started_machine()
        play(machine, None)
        play(machine, None)
        assert machine.outcome == GameOutcome.LOST_BY_ATTRITION
        assert machine.state.winner_index == 0

    def test_terminal_machine_is_noop(self):
        """Submissions after the end are rejected without changes."""
        machine = create_started_machine()
        for word in CHAIN:
            play(machine, word)
        skips = machine.state.skip_count
        scores = machine.state.scores()

        result = machine.submit_word(1, "Lisbon")

        assert not result.accepted
        assert result.reason == RejectionReason.TERMINAL
        assert machine.state.skip_count == skips
        assert machine.state.scores() == scores
        assert len(machine.state.used_words) == 5
        assert machine.outcome == GameOutcome.WON_BY_WORDS

    def test_idle_machine_rejects(self):
        """Submissions before start() are rejected as terminal."""
        machine = GameStateMachine(create_players())
        result = machine.submit_word(0, "Moscow")
        assert result.reason == RejectionReason.TERMINAL
        assert machine.state.used_words == set()

    def test_win_checked_before_attrition(self):
        """When both thresholds are met the game is won."""
        config = GameConfig(max_words_for_win=1, max_skipped_turns=0)
        machine = create_started_machine(config=config)
        machine.submit_word(0, "Moscow")
        assert machine.outcome == GameOutcome.WON_BY_WORDS

    def test_custom_thresholds(self):
        """Thresholds come from the config."""
        config = GameConfig(max_words_for_win=2, max_skipped_turns=3)
        machine = create_started_machine(config=config)
        play(machine, "x")
        play(machine, "y")
        assert machine.is_active
        play(machine, "Moscow")
        play(machine, "Warsaw")
        assert machine.outcome == GameOutcome.WON_BY_WORDS


class TestTurnOrder:
    """Tests for advance_turn and context."""

    def test_advance_turn_cycles(self):
        """Turn index wraps around the player list."""
        machine = create_started_machine()
        assert machine.advance_turn() == 1
        assert machine.advance_turn() == 0
        assert machine.current_player.name == "Ann"

    def test_single_player_turn_stays(self):
        """With one player the index stays at zero."""
        machine = GameStateMachine([HumanPlayer(name="Solo")])
        machine.start("cities")
        assert machine.advance_turn() == 0

    def test_context_is_a_read_only_copy(self):
        """Context reflects the state without sharing the set."""
        machine = create_started_machine()
        machine.submit_word(0, "Moscow")
        context = machine.context()
        assert context.category == "cities"
        assert context.last_word == "Moscow"
        assert context.used_words == frozenset({"moscow"})
        machine.submit_word(1, "Warsaw")
        assert context.used_words == frozenset({"moscow"})


class TestChainProperties:
    """Property-style checks over a longer submission sequence."""

    def test_accepted_words_chain_and_stay_unique(self):
        """Consecutive accepted words chain; the used set never duplicates."""
        machine = create_started_machine(config=GameConfig(max_words_for_win=50, max_skipped_turns=50))
        submissions = [
            "Moscow", "wARSAW", "Warsaw", "Wellington", "Oslo", "Nairobi",
            "nairobi", "Istanbul", "Lisbon", "London", "Nice", "Edinburgh",
        ]
        accepted = []
        for word in submissions:
            result = play(machine, word)
            if result.accepted:
                accepted.append(result.word.casefold())
            assert len(machine.state.used_words) == len(accepted)

        for previous, current in zip(accepted, accepted[1:]):
            assert current[0] == previous[-1]
        assert len(set(accepted)) == len(accepted)

    def test_state_last_word_is_in_used_set(self):
        """last_word canonical form is always a used word."""
        machine = create_started_machine()
        for word in ["Moscow", "Oslo", "Warsaw"]:
            play(machine, word)
            assert machine.state.last_word_canonical in machine.state.used_words

    def test_machine_resumes_existing_state(self):
        """A machine can wrap a restored GameState."""
        state = GameState(
            players=create_players(),
            category="cities",
            used_words={"moscow"},
            last_word="Moscow",
            is_active=True,
            outcome=GameOutcome.ACTIVE,
        )
        machine = GameStateMachine(state=state)
        assert machine.submit_word(1, "Warsaw").accepted
        assert machine.state is state
