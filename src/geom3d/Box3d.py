import enum
import logging
from typing import Any, Iterator, List, Optional, Tuple

import numpy as np

from .Vector3d import DEFAULT_DTYPE, Vector3d

logger = logging.getLogger(__name__)


class Corner(enum.Enum):
    """
    Named corners of a box.

    The value of each vertex is its position in the corner list: bit 0 picks
    left/right (x), bit 1 bottom/top (y) and bit 2 front/back (z).
    """

    FRONT_BOTTOM_LEFT = 0
    FRONT_BOTTOM_RIGHT = 1
    FRONT_TOP_LEFT = 2
    FRONT_TOP_RIGHT = 3
    BACK_BOTTOM_LEFT = 4
    BACK_BOTTOM_RIGHT = 5
    BACK_TOP_LEFT = 6
    BACK_TOP_RIGHT = 7
    CENTER = 8


class Face(enum.Enum):
    FRONT = enum.auto()
    BACK = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    TOP = enum.auto()
    BOTTOM = enum.auto()


# face -> (axis, which end of the axis)
_FACE_AXES = {
    Face.LEFT: (0, 0),
    Face.RIGHT: (0, 1),
    Face.BOTTOM: (1, 0),
    Face.TOP: (1, 1),
    Face.FRONT: (2, 0),
    Face.BACK: (2, 1),
}


class Box3d:
    """An axis aligned box stored as its eight corners."""

    def __init__(self, low: Optional[Vector3d] = None, high: Optional[Vector3d] = None, *, dtype: Any = None) -> None:
        """
        Initialize the box.

        Args:
            low: One corner of the box, or None for the unit box.
            high: The opposite corner, or None for the unit box.
            dtype: The element type of the corners. Defaults to the element type
                   of low, or DEFAULT_DTYPE for the unit box.

        Raises:
            TypeError: If only one corner is given or a corner is not a Vector3d.
        """
        if low is None and high is None:
            dtype = DEFAULT_DTYPE if dtype is None else dtype
            low, high = Vector3d(0, dtype=dtype), Vector3d(1, dtype=dtype)
        elif not (isinstance(low, Vector3d) and isinstance(high, Vector3d)):
            raise TypeError("Box3d needs either no corners or two Vector3d corners")

        if dtype is None:
            dtype = low.dtype
        low_data = low.cast(dtype).to_numpy()
        high_data = high.cast(dtype).to_numpy()
        bounds = (np.minimum(low_data, high_data), np.maximum(low_data, high_data))
        if not np.array_equal(bounds[0], low_data):
            logger.debug("reordered box corners %r %r", low, high)

        self._corners = [
            Vector3d([bounds[(index >> axis) & 1][axis] for axis in range(3)], dtype=dtype) for index in range(8)
        ]

    @property
    def dtype(self) -> np.dtype:
        return self._corners[0].dtype

    @property
    def low(self) -> Vector3d:
        """The corner with the smallest components."""
        return self._corners[Corner.FRONT_BOTTOM_LEFT.value].copy()

    @property
    def high(self) -> Vector3d:
        """The corner with the largest components."""
        return self._corners[Corner.BACK_TOP_RIGHT.value].copy()

    def get(self, corner: Corner) -> Vector3d:
        """
        Get a named corner of the box.

        Args:
            corner: Which corner. Corner.CENTER gives the mean of all eight
                    corners, truncated for integer boxes.

        Returns:
            Vector3d: A copy of the corner.

        Raises:
            TypeError: If corner is not a Corner.
        """
        if not isinstance(corner, Corner):
            raise TypeError(f"expected a Corner, got {type(corner).__name__}")
        if corner is Corner.CENTER:
            points = np.array([c.to_numpy() for c in self._corners], dtype=np.float64)
            return Vector3d(points.mean(axis=0), dtype=self.dtype)
        return self._corners[corner.value].copy()

    def face(self, face: Face) -> Tuple[Vector3d, Vector3d, Vector3d, Vector3d]:
        """
        Get the four corners on one face, in Corner order.

        Raises:
            TypeError: If face is not a Face.
        """
        if not isinstance(face, Face):
            raise TypeError(f"expected a Face, got {type(face).__name__}")
        axis, side = _FACE_AXES[face]
        return tuple(c.copy() for index, c in enumerate(self._corners) if (index >> axis) & 1 == side)

    def corners(self) -> List[Vector3d]:
        return [c.copy() for c in self._corners]

    def __iter__(self) -> Iterator[Vector3d]:
        return iter(self.corners())

    def __len__(self) -> int:
        return len(self._corners)

    def swap(self, other: "Box3d") -> None:
        """
        Exchange corners with other.

        Raises:
            TypeError: If other is not a Box3d of the same element type.
        """
        if not isinstance(other, Box3d):
            raise TypeError(f"can only swap with a Box3d, not {type(other).__name__}")
        if other.dtype != self.dtype:
            raise TypeError(f"cannot swap {self.dtype} box with {other.dtype} box")
        self._corners, other._corners = other._corners, self._corners

    def copy(self) -> "Box3d":
        return Box3d(self.low, self.high)

    def __copy__(self) -> "Box3d":
        return self.copy()

    def __deepcopy__(self, memo) -> "Box3d":
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Box3d):
            return NotImplemented
        return all(a == b for a, b in zip(self._corners, other._corners))

    def __repr__(self) -> str:
        return f"Box3d({self.low!r}, {self.high!r})"
