from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..core.data import Vector2, coord_label

if TYPE_CHECKING:
    from .entities.unit import Unit


@dataclass
class Tile:
    """Snapshot of one board square. Built on demand from the board arrays."""
    position: Vector2
    elevation: int = 0
    occupant: Optional["Unit"] = None

    @property
    def is_occupied(self) -> bool:
        return self.occupant is not None

    @property
    def elevation_label(self) -> str:
        return "Ground Level" if self.elevation == 0 else f"Elevation {self.elevation}"

    def label(self) -> str:
        """Narration used when the cursor lands on this tile."""
        text = f"Tile {coord_label(self.position)}: {self.elevation_label}"
        if self.occupant is not None:
            side = "Ally" if self.occupant.is_player else "Enemy"
            text += f", {side}: {self.occupant.display_label}"
        return text
