"""Spatial data structures shared by every layer of the game.

Vector2 is the single position type used by the board, units, cursor and
events. VectorArray wraps an (N, 2) numpy array for batch operations such as
translating an attack pattern to an anchor tile and clipping it to the board.

Both use (y, x) ordering so that positions line up with ``array[y][x]``
access into the board's elevation and occupancy grids.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@dataclass(frozen=True)
class Vector2:
    """Immutable board position or offset, row (y) first.

    Examples:
        Vector2(1, 2)                # row B, column 3
        Vector2(0, 0) + Vector2(1, 0)
        tuple(Vector2(1, 2))         # (1, 2)
    """
    y: int
    x: int

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.y + other.y, self.x + other.x)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.y - other.y, self.x - other.x)

    def __mul__(self, scalar: int) -> "Vector2":
        return Vector2(self.y * scalar, self.x * scalar)

    def __iter__(self) -> Iterator[int]:
        return iter((self.y, self.x))

    def __repr__(self) -> str:
        return f"Vector2({self.y}, {self.x})"

    def manhattan_distance_to(self, other: "Vector2") -> int:
        return abs(self.y - other.y) + abs(self.x - other.x)

    def sign(self) -> "Vector2":
        """Unit step in the direction of this vector, each axis in {-1, 0, 1}."""
        return Vector2(_sign(self.y), _sign(self.x))

    @classmethod
    def from_xy(cls, x: int, y: int) -> "Vector2":
        """Build from column-first coordinates, as roster files write them."""
        return cls(y, x)


class VectorArray:
    """Collection of positions backed by an (N, 2) int16 numpy array.

    Attack patterns are stored as offsets once, then translated to an anchor
    tile and clipped to the board in one vectorized step.
    """

    def __init__(self, vectors: Optional[Union[Sequence[Vector2], NDArray[np.integer]]] = None):
        if vectors is None or (not isinstance(vectors, np.ndarray) and len(vectors) == 0):
            data = np.empty((0, 2), dtype=np.int16)
        elif isinstance(vectors, np.ndarray):
            if vectors.ndim != 2 or vectors.shape[1] != 2:
                raise ValueError(f"Expected an (N, 2) array, got shape {vectors.shape}")
            data = vectors
        else:
            data = np.array([tuple(vector) for vector in vectors])
        self._data: NDArray[np.int16] = data.astype(np.int16, copy=False)

    @classmethod
    def from_ranges(cls, y_range: tuple[int, int], x_range: tuple[int, int]) -> "VectorArray":
        """Every position of the rectangle spanned by two inclusive ranges."""
        ys, xs = np.mgrid[y_range[0]:y_range[1] + 1, x_range[0]:x_range[1] + 1]
        return cls(np.stack((ys.ravel(), xs.ravel()), axis=1))

    @property
    def y_coords(self) -> NDArray[np.int16]:
        return self._data[:, 0]

    @property
    def x_coords(self) -> NDArray[np.int16]:
        return self._data[:, 1]

    def __len__(self) -> int:
        return self._data.shape[0]

    def __iter__(self) -> Iterator[Vector2]:
        return (Vector2(int(y), int(x)) for y, x in self._data)

    def to_vector_list(self) -> list[Vector2]:
        return list(self)

    def translate(self, origin: Vector2) -> "VectorArray":
        """Shift every vector by origin."""
        return VectorArray(self._data + np.array(tuple(origin), dtype=np.int16))

    def filter_by_bounds(self, min_y: int, max_y: int, min_x: int, max_x: int) -> "VectorArray":
        """Keep the vectors inside the inclusive rectangle."""
        lower = np.array([min_y, min_x])
        upper = np.array([max_y, max_x])
        mask = np.all((self._data >= lower) & (self._data <= upper), axis=1)
        return VectorArray(self._data[mask])

    def contains(self, vector: Vector2) -> bool:
        return bool(np.any(np.all(self._data == tuple(vector), axis=1)))


def coord_label(position: Vector2) -> str:
    """Human-readable coordinate: row letter then 1-based column (``B3``)."""
    return f"{chr(ord('A') + position.y)}{position.x + 1}"
