from .Box3d import Box3d, Corner, Face
from .Vector3d import DEFAULT_DTYPE, DegenerateVectorError, IndexOutOfRangeError, Vector3d, swap

__all__ = [
    "Box3d",
    "Corner",
    "Face",
    "DEFAULT_DTYPE",
    "DegenerateVectorError",
    "IndexOutOfRangeError",
    "Vector3d",
    "swap",
]
