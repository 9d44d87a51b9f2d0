"""Test player models and the move-producing capability."""

import pytest
from pydantic import ValidationError

from wordchain.ai import WordDatabase
from wordchain.config import Difficulty
from wordchain.models import (
    COMPUTER_NAME,
    ComputerPlayer,
    HumanPlayer,
    MoveContext,
)
from wordchain.ui import ScriptedWordSource


def test_human_player_creation():
    """Human players carry identity fields and start at zero."""
    player = HumanPlayer(name="Ann", email="ann@example.com", username="ann")
    assert player.kind == "human"
    assert player.score == 0
    assert player.identity == "ann"
    assert len(player.id) == 9


def test_human_without_username_has_no_identity():
    """Empty username means no stats attribution."""
    assert HumanPlayer(name="Guest").identity is None


def test_computer_player_defaults():
    """Computer defaults to the standard name and medium difficulty."""
    player = ComputerPlayer()
    assert player.kind == "computer"
    assert player.name == COMPUTER_NAME
    assert player.difficulty == Difficulty.MEDIUM


def test_player_ids_are_unique():
    """Generated ids differ between players."""
    ids = {HumanPlayer(name="x").id for _ in range(50)}
    assert len(ids) == 50


@pytest.mark.parametrize(
    "raw,expected",
    [("easy", Difficulty.EASY), ("HARD", Difficulty.HARD), ("nonsense", Difficulty.MEDIUM), (None, Difficulty.MEDIUM)],
)
def test_computer_difficulty_coercion(raw, expected):
    """Unknown difficulty values fall back to medium."""
    assert ComputerPlayer(difficulty=raw).difficulty == expected


class TestScoring:
    """add_points / reset_score on every variant."""

    @pytest.mark.parametrize("player", [HumanPlayer(name="Ann"), ComputerPlayer()])
    def test_add_and_reset(self, player):
        assert player.add_points(3) == 3
        assert player.add_points() == 4
        player.reset_score()
        assert player.score == 0

    def test_negative_points_rejected(self):
        """Scores never go negative."""
        player = HumanPlayer(name="Ann")
        with pytest.raises(ValueError):
            player.add_points(-1)

    def test_negative_score_field_rejected(self):
        """Model validation guards the score field too."""
        with pytest.raises(ValidationError):
            HumanPlayer(name="Ann", score=-2)


class TestProfile:
    """update_profile validation."""

    def test_valid_values_applied(self):
        player = HumanPlayer(name="Ann")
        player.update_profile(email="ann@example.com", username="ann_1")
        assert player.email == "ann@example.com"
        assert player.username == "ann_1"

    def test_invalid_values_ignored(self):
        player = HumanPlayer(name="Ann", email="ok@example.com", username="ann")
        player.update_profile(email="not-an-email", username="a!")
        assert player.email == "ok@example.com"
        assert player.username == "ann"


class TestProduceMove:
    """produce_move for both variants."""

    @pytest.mark.asyncio
    async def test_human_without_source_skips(self):
        """No attached input means an empty move."""
        player = HumanPlayer(name="Ann")
        assert await player.produce_move(MoveContext(category="cities")) is None

    @pytest.mark.asyncio
    async def test_human_move_is_trimmed(self):
        """Raw input is trimmed before validation."""
        source = ScriptedWordSource(["  Moscow  "])
        player = HumanPlayer(name="Ann").attach_source(source)
        context = MoveContext(category="cities")

        assert await player.produce_move(context) == "Moscow"
        assert source.calls == [context]

    @pytest.mark.asyncio
    async def test_computer_uses_its_database(self):
        """Computer picks from its own word lists by difficulty."""
        db = WordDatabase({"cities": ["Oslo", "Omsk", "Orenburg"]})
        player = ComputerPlayer(database=db, difficulty="hard")
        move = await player.produce_move(MoveContext(category="cities", last_word="Toronto"))
        assert move == "Orenburg"

    @pytest.mark.asyncio
    async def test_computer_respects_used_words(self):
        """Used words are never chosen again."""
        db = WordDatabase({"cities": ["Oslo", "Omsk"]})
        player = ComputerPlayer(database=db, difficulty="easy")
        context = MoveContext(category="cities", used_words=frozenset({"oslo"}))
        assert await player.produce_move(context) == "Omsk"

    @pytest.mark.asyncio
    async def test_computer_no_candidate(self):
        """No candidate gives None."""
        player = ComputerPlayer(difficulty="easy")
        context = MoveContext(category="unknown")
        assert await player.produce_move(context) is None

    @pytest.mark.asyncio
    async def test_computer_seed_is_reproducible(self):
        """Same seed, same medium choices."""
        context = MoveContext(category="animals")
        first = ComputerPlayer(seed=11)
        second = ComputerPlayer(seed=11)
        assert [await first.produce_move(context) for _ in range(5)] == [
            await second.produce_move(context) for _ in range(5)
        ]


def test_move_context_is_frozen():
    """Players get a read-only view."""
    context = MoveContext(category="cities")
    with pytest.raises(ValidationError):
        context.category = "animals"
