import logging
import math
import numbers
from typing import Any, Callable, Iterator, List, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_DTYPE = np.float32

Scalar = Union[int, float]


class IndexOutOfRangeError(IndexError):
    """Raised when a component index is not 0, 1 or 2."""


class DegenerateVectorError(ZeroDivisionError):
    """Raised when normalizing a vector whose norm is zero."""


def _validate_dtype(dtype: Any) -> np.dtype:
    """
    Check that dtype is a usable element type and return it as a numpy dtype.

    Args:
        dtype: Anything numpy accepts as a dtype, e.g. np.float32 or "int64".

    Returns:
        The corresponding numpy dtype.

    Raises:
        TypeError: If the dtype is not an integer or floating point type.
    """
    dtype = np.dtype(dtype)
    if not (np.issubdtype(dtype, np.integer) or np.issubdtype(dtype, np.floating)):
        raise TypeError(f"Vector3d element type must be an integer or float dtype, got {dtype}")
    return dtype


def _check_number(value: Any) -> None:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise TypeError(f"Vector3d components must be numbers, got {type(value).__name__}")


def _check_range(value: Any, dtype: np.dtype) -> None:
    """
    Check that value can be stored in an integer dtype without wrapping.

    Floats are truncated toward zero before the check, as the cast will.

    Raises:
        ValueError: If value is NaN.
        OverflowError: If value is infinite or does not fit in dtype.
    """
    if not np.issubdtype(dtype, np.integer):
        return
    info = np.iinfo(dtype)
    if not info.min <= int(value) <= info.max:
        raise OverflowError(f"{value} does not fit in {dtype}")


def _rel_tol(dtype: np.dtype) -> float:
    if np.issubdtype(dtype, np.integer):
        return 1e-9
    return max(1e-9, 4 * float(np.finfo(dtype).eps))


class Vector3d:
    """
    A three component vector with a numpy element type.

    The components live in a numpy array of shape (3,) owned by the vector.
    Arithmetic results keep the element type of the left hand operand.
    """

    def __init__(self, *args, dtype: Any = None) -> None:
        """
        Initialize a Vector3d.

        Args:
            *args: Nothing for a zero vector, a single value to broadcast, three
                   components, a sequence of three components, or another
                   Vector3d to copy / convert.
            dtype: The element type. Defaults to DEFAULT_DTYPE, or to the element
                   type of the source vector when converting.

        Raises:
            TypeError: If the arguments or dtype are not valid.
            ValueError: If a sequence does not hold exactly three components.
        """
        match args:
            case ():
                values = (0, 0, 0)
            case (Vector3d() as other,):
                target = other.dtype if dtype is None else _validate_dtype(dtype)
                for value in other:
                    _check_range(value, target)
                self._data = other._data.astype(target)
                return
            case (np.ndarray() | list() | tuple() as values,):
                if np.shape(values) != (3,):
                    raise ValueError(f"Vector3d needs exactly 3 components, got shape {np.shape(values)}")
            case (value,):
                values = (value, value, value)
            case (x, y, z):
                values = (x, y, z)
            case _:
                raise TypeError(f"Vector3d takes 0, 1 or 3 components, got {len(args)}")

        target = _validate_dtype(DEFAULT_DTYPE if dtype is None else dtype)
        for value in values:
            _check_number(value)
            _check_range(value, target)
        self._data = np.array(values, dtype=target)

    @property
    def dtype(self) -> np.dtype:
        """The numpy element type of the components."""
        return self._data.dtype

    def _check_index(self, index: Any) -> None:
        """
        Check the index refers to one of the three components.

        Raises:
            TypeError: If the index is not an integer.
            IndexOutOfRangeError: If the index is outside 0..2.
        """
        if isinstance(index, bool) or not isinstance(index, numbers.Integral):
            raise TypeError(f"Vector3d indices must be integers, not {type(index).__name__}")
        if not 0 <= index < 3:
            raise IndexOutOfRangeError(f"component index out of range {index=}")

    def __getitem__(self, index: int) -> Scalar:
        self._check_index(index)
        return self._data[index].item()

    def __setitem__(self, index: int, value: Scalar) -> None:
        self._check_index(index)
        _check_number(value)
        _check_range(value, self.dtype)
        self._data[index] = value

    def at(self, index: int) -> Scalar:
        """Return the component at index, same as v[index]."""
        return self[index]

    @property
    def x(self) -> Scalar:
        return self[0]

    @x.setter
    def x(self, value: Scalar) -> None:
        self[0] = value

    @property
    def y(self) -> Scalar:
        return self[1]

    @y.setter
    def y(self, value: Scalar) -> None:
        self[1] = value

    @property
    def z(self) -> Scalar:
        return self[2]

    @z.setter
    def z(self, value: Scalar) -> None:
        self[2] = value

    def __len__(self) -> int:
        return 3

    def __iter__(self) -> Iterator[Scalar]:
        return iter(self._data.tolist())

    def __reversed__(self) -> Iterator[Scalar]:
        return reversed(self._data.tolist())

    def to_tuple(self) -> Tuple[Scalar, Scalar, Scalar]:
        return tuple(self._data.tolist())

    def to_list(self) -> List[Scalar]:
        return self._data.tolist()

    def to_numpy(self) -> np.ndarray:
        """Return a copy of the components as a numpy array."""
        return self._data.copy()

    def cast(self, dtype: Any) -> "Vector3d":
        """
        Convert to another element type.

        Float to integer conversion truncates toward zero. The receiver is left
        unchanged.

        Args:
            dtype: The target element type.

        Returns:
            Vector3d: A new vector with the target element type.
        """
        return Vector3d(self, dtype=dtype)

    def unary_apply(self, unary: Callable[[Scalar], Scalar]) -> None:
        """
        Replace every component with unary(component), in place.

        Args:
            unary: The function to apply to each component.
        """
        self._data[:] = self.unary_expr(unary)._data

    def unary_expr(self, unary: Callable[[Scalar], Scalar]) -> "Vector3d":
        """
        Return a new vector with unary applied to each component.

        Args:
            unary: The function to apply to each component.

        Returns:
            Vector3d: The transformed copy, with the same element type.
        """
        return Vector3d(*[unary(component) for component in self], dtype=self.dtype)

    def _coerce(self, other: "Vector3d") -> np.ndarray:
        # the right hand operand is converted to our element type first
        return other._data.astype(self.dtype)

    def __add__(self, other: "Vector3d") -> "Vector3d":
        if not isinstance(other, Vector3d):
            return NotImplemented
        return Vector3d(self._data + self._coerce(other), dtype=self.dtype)

    def __sub__(self, other: "Vector3d") -> "Vector3d":
        if not isinstance(other, Vector3d):
            return NotImplemented
        return Vector3d(self._data - self._coerce(other), dtype=self.dtype)

    def __neg__(self) -> "Vector3d":
        return Vector3d(-self._data, dtype=self.dtype)

    def __iadd__(self, other: "Vector3d") -> "Vector3d":
        if not isinstance(other, Vector3d):
            return NotImplemented
        self._data[:] = (self + other)._data
        return self

    def __isub__(self, other: "Vector3d") -> "Vector3d":
        if not isinstance(other, Vector3d):
            return NotImplemented
        self._data[:] = (self - other)._data
        return self

    def add(self, other: "Vector3d") -> "Vector3d":
        return self + other

    def subtract(self, other: "Vector3d") -> "Vector3d":
        return self - other

    def negate(self) -> "Vector3d":
        return -self

    def norm(self) -> float:
        """
        Calculate the Euclidean norm of the vector.

        The components are promoted to Python floats and math.hypot scales them,
        so neither integer vectors nor very large or small floats overflow.

        Returns:
            float: The length of the vector.
        """
        return math.hypot(*self._data.astype(np.float64).tolist())

    def normalize(self) -> None:
        """
        Scale the vector to unit length, in place.

        Integer vectors are truncated toward zero after the division.

        Raises:
            DegenerateVectorError: If the vector has zero length. The vector is
                                   left unchanged.
        """
        length = self.norm()
        if length == 0.0:
            logger.debug("cannot normalize %r", self)
            raise DegenerateVectorError(f"cannot normalize zero length vector {self!r}")
        self._data[:] = (self._data / length).astype(self.dtype)

    def normalized(self) -> "Vector3d":
        """Return a normalized copy, see normalize()."""
        result = self.copy()
        result.normalize()
        return result

    def dot(self, other: "Vector3d") -> Scalar:
        """
        Compute the dot product.

        The products are taken in the common type of both vectors and the sum
        is converted to this vector's element type.

        Args:
            other (Vector3d): The other vector.

        Returns:
            The dot product as a Python int or float.
        """
        if not isinstance(other, Vector3d):
            raise TypeError(f"dot needs a Vector3d, not {type(other).__name__}")
        total = np.dot(self._data, other._data).item()
        _check_range(total, self.dtype)
        return np.array(total, dtype=self.dtype).item()

    def cross(self, other: "Vector3d") -> "Vector3d":
        """
        Compute the cross product of two vectors.

        Like dot(), the products are taken in the common type and only the
        result is converted.

        Args:
            other (Vector3d): The other vector.

        Returns:
            Vector3d: The cross product, with this vector's element type.
        """
        if not isinstance(other, Vector3d):
            raise TypeError(f"cross needs a Vector3d, not {type(other).__name__}")
        return Vector3d(np.cross(self._data, other._data), dtype=self.dtype)

    def copy(self) -> "Vector3d":
        return Vector3d(self)

    def __copy__(self) -> "Vector3d":
        return self.copy()

    def __deepcopy__(self, memo) -> "Vector3d":
        return self.copy()

    def swap(self, other: "Vector3d") -> None:
        """
        Exchange components with other.

        Raises:
            TypeError: If other is not a Vector3d of the same element type.
        """
        if not isinstance(other, Vector3d):
            raise TypeError(f"can only swap with a Vector3d, not {type(other).__name__}")
        if other.dtype != self.dtype:
            raise TypeError(f"cannot swap {self.dtype} vector with {other.dtype} vector")
        self._data, other._data = other._data, self._data

    def __eq__(self, other: object) -> bool:
        """
        Integer vectors compare exactly. Anything involving floats is compared
        like math.isclose, with no absolute tolerance and a relative one of
        1e-9, widened to a few ulps for float types coarser than float64.
        """
        if not isinstance(other, Vector3d):
            return NotImplemented
        if np.issubdtype(self.dtype, np.integer) and np.issubdtype(other.dtype, np.integer):
            return bool(np.array_equal(self._data, other._data))
        rtol = max(_rel_tol(self.dtype), _rel_tol(other.dtype))
        return bool(np.allclose(self._data, other._data, rtol=rtol, atol=0.0))

    def __repr__(self) -> str:
        x, y, z = self._data.tolist()
        return f"Vector3d({x}, {y}, {z}, dtype={self.dtype})"


def swap(lhs, rhs) -> None:
    """
    Exchange the contents of two vectors or two boxes.

    Args:
        lhs: A Vector3d or Box3d.
        rhs: An object of the same type as lhs.
    """
    if type(lhs) is not type(rhs):
        raise TypeError(f"cannot swap {type(lhs).__name__} with {type(rhs).__name__}")
    lhs.swap(rhs)
