from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from ..core.data import (
    Vector2,
    VectorArray,
    HIGH_GROUND_CHANCE,
    HILL_CHANCE,
    MAX_ELEVATION,
)
from ..core.engine.commands import CommandRejected, RejectionKind
from .entities.unit import Unit
from .tile import Tile


@dataclass
class Board:
    """Grid of tiles with elevation and occupancy.

    Tiles are stored as two numpy arrays indexed ``[y, x]``: ``elevation``
    (int8, 0..2) and ``occupancy`` (int16 index into the registered unit
    list, -1 for empty). Every placement goes through ``place_unit`` so a
    unit's ``position`` always mirrors the tile that holds it.
    """
    width: int
    height: int
    rng: Optional[np.random.Generator] = field(default=None, repr=False)
    elevation: np.ndarray = field(init=False, repr=False)
    occupancy: np.ndarray = field(init=False, repr=False)
    _units: list[Unit] = field(default_factory=list, init=False, repr=False)
    unit_id_to_index: dict[str, int] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        self.initialize(self.width, self.height, self.rng)

    def initialize(self, width: int, height: int, rng: Optional[np.random.Generator] = None) -> None:
        """Build a fresh grid with randomized elevation and no units.

        Each tile independently gets elevation 2 with probability 0.1,
        otherwise elevation 1 with probability 0.2, otherwise 0.
        """
        if width < 0 or height < 0:
            raise ValueError(f"Board dimensions must not be negative: {width}x{height}")

        self.width = width
        self.height = height
        self.rng = rng if rng is not None else np.random.default_rng()

        high_ground = self.rng.random((height, width)) < HIGH_GROUND_CHANCE
        hills = self.rng.random((height, width)) < HILL_CHANCE
        self.elevation = np.where(high_ground, MAX_ELEVATION, np.where(hills, 1, 0)).astype(np.int8)

        self.occupancy = np.full((height, width), -1, dtype=np.int16)
        self._units = []
        self.unit_id_to_index = {}

    # ============== Tiles ==============

    def is_valid_position(self, position: Vector2) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def get_tile(self, position: Vector2) -> Optional[Tile]:
        """Tile at position, or None if the position is off the board."""
        if not self.is_valid_position(position):
            return None
        return Tile(
            position=position,
            elevation=int(self.elevation[position.y, position.x]),
            occupant=self.get_unit_at(position),
        )

    def get_elevation(self, position: Vector2) -> Optional[int]:
        if self.is_valid_position(position):
            return int(self.elevation[position.y, position.x])
        return None

    def set_elevation(self, position: Vector2, elevation: int) -> None:
        """Override a tile's elevation (scenario setup and tests)."""
        if not self.is_valid_position(position):
            raise CommandRejected(RejectionKind.OUT_OF_BOUNDS)
        if not 0 <= elevation <= MAX_ELEVATION:
            raise ValueError(f"Elevation must be between 0 and {MAX_ELEVATION}, got {elevation}")
        self.elevation[position.y, position.x] = elevation

    def flatten(self) -> None:
        """Set every tile to ground level."""
        self.elevation[:, :] = 0

    # ============== Occupancy ==============

    @property
    def units(self) -> list[Unit]:
        """Units currently standing on the board, in registration order."""
        occupied = set(int(index) for index in self.occupancy[self.occupancy >= 0])
        return [unit for index, unit in enumerate(self._units) if index in occupied]

    def get_occupied_mask(self) -> NDArray[np.bool_]:
        return self.occupancy >= 0

    def get_unit_at(self, position: Vector2) -> Optional[Unit]:
        if not self.is_valid_position(position):
            return None
        index = int(self.occupancy[position.y, position.x])
        return self._units[index] if index >= 0 else None

    def is_occupied(self, position: Vector2) -> bool:
        return self.is_valid_position(position) and self.occupancy[position.y, position.x] >= 0

    def get_units_in_positions(self, positions: VectorArray) -> list[Unit]:
        """Units standing on any of the given positions (off-board ones ignored)."""
        on_board = positions.filter_by_bounds(0, self.height - 1, 0, self.width - 1)
        if len(on_board) == 0:
            return []
        indices = self.occupancy[on_board.y_coords, on_board.x_coords]
        return [self._units[int(index)] for index in indices if index >= 0]

    def _register(self, unit: Unit) -> int:
        index = self.unit_id_to_index.get(unit.unit_id)
        if index is not None:
            if self._units[index] is not unit:
                raise ValueError(f"Another unit with id {unit.unit_id!r} is already on this board")
            return index
        index = len(self._units)
        self._units.append(unit)
        self.unit_id_to_index[unit.unit_id] = index
        return index

    def place_unit(self, unit: Unit, position: Vector2) -> None:
        """Put a unit on a tile, clearing the tile it stood on before.

        Meant for initial placement: it succeeds even on an occupied tile, in
        which case the displaced unit is taken off the board.

        Raises:
            CommandRejected: OUT_OF_BOUNDS if the position is off the board
        """
        if not self.is_valid_position(position):
            raise CommandRejected(RejectionKind.OUT_OF_BOUNDS)

        index = self._register(unit)

        if unit.position is not None and self.is_valid_position(unit.position):
            if self.occupancy[unit.position.y, unit.position.x] == index:
                self.occupancy[unit.position.y, unit.position.x] = -1

        displaced = self.get_unit_at(position)
        if displaced is not None and displaced is not unit:
            displaced.position = None

        self.occupancy[position.y, position.x] = index
        unit.position = position

    def move_unit(self, unit: Unit, position: Vector2) -> bool:
        """Move a unit to an empty in-bounds tile. Returns False and changes nothing otherwise."""
        if not self.is_valid_position(position) or self.is_occupied(position):
            return False
        self.place_unit(unit, position)
        return True

    def remove_unit(self, unit: Unit) -> Optional[Vector2]:
        """Take a unit off the board. Returns the position it vacated."""
        old_position = unit.position
        index = self.unit_id_to_index.get(unit.unit_id)
        if old_position is None or index is None or self._units[index] is not unit:
            return None
        if self.is_valid_position(old_position) and self.occupancy[old_position.y, old_position.x] == index:
            self.occupancy[old_position.y, old_position.x] = -1
        unit.position = None
        return old_position

    # ============== Spatial queries ==============

    def positions_within(self, origin: Vector2, distance: int) -> list[Vector2]:
        """Empty positions at Manhattan distance 1..distance from origin, row-major order."""
        ys, xs = np.indices((self.height, self.width))
        distances = np.abs(ys - origin.y) + np.abs(xs - origin.x)
        mask = (distances >= 1) & (distances <= distance) & (self.occupancy < 0)
        return [Vector2(int(y), int(x)) for y, x in zip(*np.nonzero(mask))]
