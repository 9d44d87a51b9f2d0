"""Console input for human players."""

from .interactive import ConsoleWordSource, ScriptedWordSource

__all__ = [
    "ConsoleWordSource",
    "ScriptedWordSource",
]
