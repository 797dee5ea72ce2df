"""Core game engine components.

This package contains the fundamental engine systems:
- commands.py: Command results and the rejection taxonomy
- game_state.py: Turn phases, cursor and activation state
"""

from .commands import CommandRejected, CommandResult, RejectionKind, DEFAULT_REJECTION_MESSAGES
from .game_state import BattlePhase, TurnPhase, CursorState, TurnState

__all__ = [
    "CommandRejected",
    "CommandResult",
    "RejectionKind",
    "DEFAULT_REJECTION_MESSAGES",
    "BattlePhase",
    "TurnPhase",
    "CursorState",
    "TurnState",
]
