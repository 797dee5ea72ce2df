"""
Turn management system for the player phase.

This module owns the player-phase state machine: which unit is active,
where the cursor is, and whether the active unit has already moved or
attacked. Each command either raises CommandRejected before changing
anything or mutates state and publishes the events describing the change.
"""
from typing import TYPE_CHECKING, Optional

from ..core.data import Vector2
from ..core.engine import BattlePhase, CommandRejected, RejectionKind, TurnPhase, TurnState
from ..core.events import CursorMoved, LogMessage, PhaseChanged, UnitMoved, UnitSelected, UnitWaited

if TYPE_CHECKING:
    from .board import Board
    from .combat_resolver import CombatResolver, CombatResult
    from .entities.unit import Unit
    from ..core.events import EventManager


class TurnController:
    """Drives selection, movement, attacks and round transitions for the player."""

    def __init__(
        self,
        board: "Board",
        player_units: list["Unit"],
        combat_resolver: "CombatResolver",
        event_manager: "EventManager",
        state: Optional[TurnState] = None,
    ):
        self.board = board
        self.player_units = player_units
        self.combat_resolver = combat_resolver
        self.event_manager = event_manager
        self.state = state or TurnState()

    def _emit_log(self, message: str, category: str = "SYSTEM", level: str = "INFO") -> None:
        """Emit a log message event."""
        self.event_manager.publish(
            LogMessage(
                round_number=self.state.round_number,
                message=message,
                category=category,
                level=level,
                source="TurnController"
            ),
            source="TurnController"
        )

    # ============== Queries ==============

    def available_units(self) -> list["Unit"]:
        """Player units that are alive and have not acted this round, in roster order."""
        return [unit for unit in self.player_units if unit.is_alive and not unit.has_acted]

    @property
    def active_unit(self) -> Optional["Unit"]:
        if self.state.turn_phase != TurnPhase.UNIT_SELECTED:
            return None
        for unit in self.player_units:
            if unit.unit_id == self.state.active_unit_id:
                return unit
        return None

    @property
    def cursor(self) -> Vector2:
        return self.state.cursor.position

    def _require_active_unit(self) -> "Unit":
        unit = self.active_unit
        if unit is None or unit.position is None:
            raise CommandRejected(RejectionKind.NO_ACTIVE_UNIT)
        return unit

    # ============== Selection ==============

    def select_unit(self, index: int) -> None:
        """Make the index-th available unit active (wrapping), or end the round if none remain."""
        available = self.available_units()
        if not available:
            self._emit_log("No units left to act, ending round")
            self.end_round()
            return

        index = index % len(available)
        unit = available[index]
        assert unit.position is not None
        self.state.begin_activation(index, unit.unit_id, unit.position)

        self.event_manager.publish(
            UnitSelected(
                round_number=self.state.round_number,
                unit=unit,
                position=unit.position,
                hp_current=unit.hp_current,
            ),
            source="TurnController"
        )

    def cycle_unit(self) -> None:
        """Select the next available unit after the active one."""
        if self.state.turn_phase == TurnPhase.UNIT_SELECTED:
            self.select_unit(self.state.active_unit_index + 1)
        else:
            self.select_unit(0)

    def move_cursor(self, dx: int, dy: int) -> None:
        """Shift the cursor by (dx, dy) and narrate the tile it lands on."""
        self._require_active_unit()
        target = self.state.cursor.offset(dx, dy)
        tile = self.board.get_tile(target)
        if tile is None:
            raise CommandRejected(RejectionKind.OUT_OF_BOUNDS)

        self.state.cursor.set_position(target)
        self.event_manager.publish(
            CursorMoved(round_number=self.state.round_number, tile=tile),
            source="TurnController"
        )

    # ============== Actions ==============

    def attempt_move(self) -> None:
        """Move the active unit to the cursor tile.

        Raises:
            CommandRejected: ALREADY_MOVED, OUT_OF_RANGE or TILE_OCCUPIED
        """
        unit = self._require_active_unit()
        if self.state.has_moved:
            raise CommandRejected(RejectionKind.ALREADY_MOVED)

        origin = unit.position
        assert origin is not None
        destination = self.cursor
        if origin.manhattan_distance_to(destination) > unit.move_range:
            raise CommandRejected(RejectionKind.OUT_OF_RANGE)
        if self.board.is_occupied(destination):
            raise CommandRejected(RejectionKind.TILE_OCCUPIED)
        if not self.board.move_unit(unit, destination):
            raise CommandRejected(RejectionKind.OUT_OF_BOUNDS)

        self.state.has_moved = True
        self.event_manager.publish(
            UnitMoved(
                round_number=self.state.round_number,
                unit=unit,
                from_position=origin,
                to_position=destination,
            ),
            source="TurnController"
        )
        self._emit_log(f"{unit.display_label}: {origin} -> {destination}", category="MOVEMENT")

    def attempt_attack(self) -> "CombatResult":
        """Attack the enemy standing on the cursor tile.

        Raises:
            CommandRejected: ALREADY_ATTACKED or NO_VALID_TARGET
        """
        unit = self._require_active_unit()
        if self.state.has_attacked:
            raise CommandRejected(RejectionKind.ALREADY_ATTACKED)

        target = self.combat_resolver.target_at(unit, self.cursor)
        if target is None:
            raise CommandRejected(
                RejectionKind.NO_VALID_TARGET,
                f"No valid target at this tile. Your attack range is: {unit.range_description}.",
            )

        result = self.combat_resolver.execute_attack(unit, target, self.state.round_number)
        self.state.has_attacked = True
        return result

    def wait(self) -> None:
        """End the active unit's activation and hand over to the next unit in roster order."""
        unit = self._require_active_unit()
        unit.has_acted = True
        self.state.clear_activation()
        self.event_manager.publish(
            UnitWaited(round_number=self.state.round_number, unit=unit),
            source="TurnController"
        )
        # The waiting unit left the available list, so the same index is the next unit
        self.select_unit(self.state.active_unit_index)

    # ============== Round flow ==============

    def end_round(self) -> None:
        """Hand control to the enemy phase and clear the squad's acted flags."""
        if self.state.phase != BattlePhase.PLAYER_PHASE or self.state.turn_phase == TurnPhase.ROUND_ENDED:
            raise CommandRejected(RejectionKind.WRONG_PHASE)

        for unit in self.player_units:
            unit.has_acted = False

        self.state.clear_activation()
        self.state.turn_phase = TurnPhase.ROUND_ENDED
        self.state.phase = BattlePhase.ENEMY_PHASE
        self.event_manager.publish(
            PhaseChanged(round_number=self.state.round_number, phase=BattlePhase.ENEMY_PHASE),
            source="TurnController"
        )
        self._emit_log(f"Round {self.state.round_number}: player phase ended")

    def begin_player_phase(self) -> None:
        """Start the next round's player phase and select the first unit."""
        self.state.round_number += 1
        self.state.phase = BattlePhase.PLAYER_PHASE
        self.state.turn_phase = TurnPhase.IDLE
        self.state.active_unit_index = 0
        self.event_manager.publish(
            PhaseChanged(round_number=self.state.round_number, phase=BattlePhase.PLAYER_PHASE),
            source="TurnController"
        )
        self._emit_log(f"Round {self.state.round_number}: player phase started")
        self.select_unit(0)
