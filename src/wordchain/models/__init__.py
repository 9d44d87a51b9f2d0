"""Models package."""

from wordchain.models.player import (
    COMPUTER_NAME,
    BasePlayer,
    ComputerPlayer,
    HumanPlayer,
    MoveContext,
    Player,
    WordSource,
    generate_player_id,
)

__all__ = [
    "COMPUTER_NAME",
    "BasePlayer",
    "ComputerPlayer",
    "HumanPlayer",
    "MoveContext",
    "Player",
    "WordSource",
    "generate_player_id",
]
