"""Read-only game view adapter for the presentation layer.

This module provides a stable, minimal interface for renderers and screen
readers to query game state without reaching into the board arrays or
mutating units.

Design Principles:
- Read-only interface: views are frozen snapshots
- Minimal query surface reduces coupling
- Narration helpers (status report, unit details) live here so they read
  the same state the presentation layer sees
"""

from dataclasses import dataclass
from typing import Iterable, Optional, TYPE_CHECKING

from .data import AttackType, MatchOutcome, Team, UnitClass, Vector2, coord_label
from .engine import BattlePhase

if TYPE_CHECKING:
    from ..game.entities.unit import Unit
    from ..game.match_state import MatchState


@dataclass(frozen=True)
class UnitView:
    """Read-only snapshot of a unit."""
    unit_id: str
    name: str
    display_label: str
    team: Team
    unit_class: UnitClass
    hp_current: int
    hp_max: int
    move_range: int
    attack_range: int
    attack_type: AttackType
    position: Optional[Vector2]
    is_alive: bool
    has_acted: bool

    @classmethod
    def from_unit(cls, unit: "Unit") -> "UnitView":
        return cls(
            unit_id=unit.unit_id,
            name=unit.name,
            display_label=unit.display_label,
            team=unit.team,
            unit_class=unit.unit_class,
            hp_current=unit.hp_current,
            hp_max=unit.hp_max,
            move_range=unit.move_range,
            attack_range=unit.attack_range,
            attack_type=unit.attack_type,
            position=unit.position,
            is_alive=unit.is_alive,
            has_acted=unit.has_acted,
        )


@dataclass(frozen=True)
class TileView:
    """Read-only snapshot of a tile."""
    position: Vector2
    elevation: int
    occupant: Optional[UnitView] = None

    @property
    def coordinate(self) -> str:
        return coord_label(self.position)


class GameView:
    """Read-only facade over a match.

    Always reflects the match's current board, so it stays valid across
    restarts.
    """

    def __init__(self, match: "MatchState"):
        self._match = match

    # ============== Board ==============

    def get_map_dimensions(self) -> tuple[int, int]:
        """Get board width and height."""
        return (self._match.board.width, self._match.board.height)

    def is_valid_position(self, position: Vector2) -> bool:
        return self._match.board.is_valid_position(position)

    def tile(self, position: Vector2) -> Optional[TileView]:
        """Snapshot of the tile at position, or None off the board."""
        tile = self._match.board.get_tile(position)
        if tile is None:
            return None
        occupant = UnitView.from_unit(tile.occupant) if tile.occupant is not None else None
        return TileView(position=tile.position, elevation=tile.elevation, occupant=occupant)

    def get_unit_at(self, position: Vector2) -> Optional[UnitView]:
        unit = self._match.board.get_unit_at(position)
        return UnitView.from_unit(unit) if unit is not None else None

    # ============== Rosters ==============

    def iter_units(self, team: Optional[Team] = None, alive: bool = True) -> Iterable[UnitView]:
        """Iterate over units matching criteria, players first, in roster order.

        Args:
            team: If specified, only include units from this team
            alive: If True, only include living units
        """
        for unit in self._match.player_units + self._match.enemy_units:
            if team is not None and unit.team != team:
                continue
            if alive and not unit.is_alive:
                continue
            yield UnitView.from_unit(unit)

    def player_units(self) -> list[UnitView]:
        """Whole player roster, defeated units included."""
        return list(self.iter_units(Team.PLAYER, alive=False))

    def enemy_units(self) -> list[UnitView]:
        """Whole enemy roster, defeated units included."""
        return list(self.iter_units(Team.ENEMY, alive=False))

    def count_units(self, team: Team, alive: bool = True) -> int:
        return sum(1 for _ in self.iter_units(team, alive))

    # ============== Turn ==============

    @property
    def phase(self) -> BattlePhase:
        return self._match.phase

    @property
    def cursor(self) -> Vector2:
        return self._match.cursor

    @property
    def active_unit(self) -> Optional[UnitView]:
        unit = self._match.active_unit
        return UnitView.from_unit(unit) if unit is not None else None

    @property
    def outcome(self) -> MatchOutcome:
        return self._match.outcome

    @property
    def round_number(self) -> int:
        return self._match.round_number

    # ============== Narration ==============

    def unit_details(self, unit: UnitView) -> str:
        """One-line stat summary, e.g. ``"Mage. HP: 60/60. Move: 2, Attack: 2 (magic)"``."""
        return (f"{unit.display_label}. HP: {unit.hp_current}/{unit.hp_max}. "
                f"Move: {unit.move_range}, Attack: {unit.attack_range} ({unit.attack_type.name.lower()})")

    def enemy_status(self, unit: UnitView) -> str:
        if unit.position is None:
            return f"{unit.display_label} defeated."
        return f"{unit.display_label} at {coord_label(unit.position)}. HP: {unit.hp_current}"

    def status_report(self, position: Optional[Vector2] = None) -> str:
        """Describe a tile (default: the cursor tile) and, if occupied, the unit's options.

        For an occupied tile this lists the elevated tiles the unit could
        move to this turn and the opponents it could attack after such a
        move.
        """
        position = position if position is not None else self.cursor
        board = self._match.board
        tile = board.get_tile(position)
        if tile is None:
            return f"{coord_label(position)} is outside the board."

        text = f"Status for {coord_label(position)}: {tile.elevation_label}"
        unit = tile.occupant
        if unit is None:
            return text + ", Unoccupied"

        text += f", Occupied by {unit.display_label} (HP: {unit.hp_current})"

        reachable = board.positions_within(position, unit.move_range)
        elevated: dict[int, list[str]] = {1: [], 2: []}
        attackable: list[str] = []
        for destination in reachable:
            elevation = board.get_elevation(destination) or 0
            if elevation in elevated:
                elevated[elevation].append(coord_label(destination))
            for target in self._match.combat_resolver.attack_targets(unit, anchor=destination):
                assert target.position is not None
                entry = f"{target.display_label} at {coord_label(target.position)}"
                if entry not in attackable:
                    attackable.append(entry)

        parts = [f"elevation {level}: {', '.join(labels)}" for level, labels in elevated.items() if labels]
        if parts:
            total = len(elevated[1]) + len(elevated[2])
            text += f". Reachable elevated tiles ({total}): {'. '.join(parts)}."
        else:
            text += ". No reachable elevated tiles."

        if attackable:
            text += f" You can move and attack: {', '.join(attackable)}."
        else:
            text += " No enemies are reachable for attack this turn."
        return text
