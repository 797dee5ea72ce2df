"""Command outcomes for the player-facing command surface.

Every command either succeeds, producing a state change plus narration, or
is rejected with one ``RejectionKind`` and leaves the game untouched.
Components raise ``CommandRejected`` before mutating anything; the match
turns that into a ``CommandResult`` for the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..events.events import GameEvent


class RejectionKind(Enum):
    """Reasons a command can be refused."""

    OUT_OF_BOUNDS = auto()
    TILE_OCCUPIED = auto()
    OUT_OF_RANGE = auto()
    ALREADY_MOVED = auto()
    ALREADY_ATTACKED = auto()
    NO_VALID_TARGET = auto()
    MATCH_OVER = auto()
    NO_ACTIVE_UNIT = auto()
    WRONG_PHASE = auto()


DEFAULT_REJECTION_MESSAGES = {
    RejectionKind.OUT_OF_BOUNDS: "That position is outside the board.",
    RejectionKind.TILE_OCCUPIED: "Tile occupied.",
    RejectionKind.OUT_OF_RANGE: "Out of movement range.",
    RejectionKind.ALREADY_MOVED: "You have already moved this turn.",
    RejectionKind.ALREADY_ATTACKED: "You have already attacked this turn.",
    RejectionKind.NO_VALID_TARGET: "No valid target at this tile.",
    RejectionKind.MATCH_OVER: "The match is over. Start a new game to continue.",
    RejectionKind.NO_ACTIVE_UNIT: "No unit is selected.",
    RejectionKind.WRONG_PHASE: "That command is not available during this phase.",
}


class CommandRejected(Exception):
    """Raised when a command is refused. Nothing has been changed."""

    def __init__(self, kind: RejectionKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or DEFAULT_REJECTION_MESSAGES[kind]
        super().__init__(self.message)


@dataclass
class CommandResult:
    """Outcome of a command plus the ordered narration it produced."""

    success: bool
    rejection: Optional[RejectionKind] = None
    messages: list[str] = field(default_factory=list)
    events: list["GameEvent"] = field(default_factory=list)

    @classmethod
    def ok(cls, events: Optional[list["GameEvent"]] = None) -> "CommandResult":
        """Create a successful result from the events the command produced."""
        events = list(events or [])
        messages = [text for text in (event.describe() for event in events) if text]
        return cls(success=True, messages=messages, events=events)

    @classmethod
    def rejected(cls, error: CommandRejected) -> "CommandResult":
        """Create a rejected result carrying the narrated reason."""
        return cls(success=False, rejection=error.kind, messages=[error.message])

    def merge(self, other: "CommandResult") -> "CommandResult":
        """Append another result; success requires both to succeed."""
        return CommandResult(
            success=self.success and other.success,
            rejection=self.rejection or other.rejection,
            messages=self.messages + other.messages,
            events=self.events + other.events,
        )
