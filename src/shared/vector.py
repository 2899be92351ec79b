# shared/vector.py
import math
import numbers
from collections.abc import Mapping, Sequence
from typing import Iterator, List, Tuple, Union

import numpy as np

from shared.errors import DivisionByZero, InvalidArgument
from shared.types import Array2d, IVector3, VectorLike

# Tolerances used by Vector3.equals().
EPSILON = 1e-6
REL_TOLERANCE = 1e-9

Operand = Union[float, VectorLike]


def _is_scalar(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _component(value, name: str) -> float:
    """
    Validates a single component and returns it as a float.
    """
    if not _is_scalar(value):
        raise InvalidArgument(f"Component {name} must be a real number, got {value!r}")
    try:
        value = float(value)
    except OverflowError:
        raise InvalidArgument(f"Component {name} is out of float range: {value!r}") from None
    if not math.isfinite(value):
        raise InvalidArgument(f"Component {name} must be finite, got {value!r}")
    return value


def _finite(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise InvalidArgument(f"{what} is out of float range: {value!r}")
    return value


def _resolve(source) -> Tuple[object, object, object]:
    """
    Pulls (x, y, z) out of a mapping, an object with x/y/z attributes,
    a 1-D numpy array or a sequence of three numbers.
    """
    if isinstance(source, Mapping):
        try:
            return source["x"], source["y"], source["z"]
        except KeyError as e:
            raise InvalidArgument(f"Mapping is missing component {e.args[0]!r}") from None

    if isinstance(source, IVector3):
        return source.x, source.y, source.z

    if isinstance(source, np.ndarray):
        if source.shape != (3,):
            raise InvalidArgument(f"Expected an array of shape (3,), got {source.shape}")
        return tuple(source.tolist())

    if isinstance(source, (str, bytes)) or not isinstance(source, Sequence):
        raise InvalidArgument(f"Cannot build a Vector3 from {source!r}")
    if len(source) != 3:
        raise InvalidArgument(f"Expected 3 components, got {len(source)}")
    return source[0], source[1], source[2]


class Vector3:
    """
    An immutable 3D vector supporting arithmetic, dot and cross products,
    normalization and angle conversions.

    Accepts three numbers, a sequence of three numbers, or anything with
    readable x, y and z (objects and {"x", "y", "z"} mappings alike).
    """
    __slots__ = ("_x", "_y", "_z")

    def __init__(self, *args):
        if len(args) == 3:
            x, y, z = args
        elif len(args) == 1:
            x, y, z = _resolve(args[0])
        else:
            raise InvalidArgument(f"Vector3 takes 1 or 3 arguments ({len(args)} given)")
        self._x = _component(x, "x")
        self._y = _component(y, "y")
        self._z = _component(z, "z")

    @classmethod
    def from_sequence(cls, components: Sequence) -> "Vector3":
        if isinstance(components, (Mapping, str, bytes)) or \
                not isinstance(components, (Sequence, np.ndarray)):
            raise InvalidArgument(f"{components!r} is not a sequence of three numbers")
        return cls(*_resolve(components))

    @classmethod
    def from_object(cls, source: Union[IVector3, Mapping]) -> "Vector3":
        if not isinstance(source, (IVector3, Mapping)):
            raise InvalidArgument(f"{source!r} has no x, y and z components")
        return cls(*_resolve(source))

    @classmethod
    def zero(cls) -> "Vector3":
        return cls(0.0, 0.0, 0.0)

    @classmethod
    def from_angles(cls, pitch: float, yaw: float) -> "Vector3":
        """
        Returns the unit direction for the given pitch and yaw (radians).
        Y is up and yaw 0 looks down -Z.
        """
        return cls(
            math.sin(yaw) * math.cos(pitch),
            math.sin(pitch),
            -math.cos(yaw) * math.cos(pitch)
        )

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def z(self) -> float:
        return self._z

    def _operand(self, other: Operand) -> Tuple[float, float, float]:
        if _is_scalar(other):
            s = _component(other, "scalar")
            return s, s, s
        if not isinstance(other, Vector3):
            other = Vector3(other)
        return other.x, other.y, other.z

    def add(self, other: Operand) -> "Vector3":
        ox, oy, oz = self._operand(other)
        return Vector3(self.x + ox, self.y + oy, self.z + oz)

    def subtract(self, other: Operand) -> "Vector3":
        ox, oy, oz = self._operand(other)
        return Vector3(self.x - ox, self.y - oy, self.z - oz)

    def multiply(self, other: Operand) -> "Vector3":
        """
        Scales by a scalar, or multiplies component-wise by a vector.
        """
        ox, oy, oz = self._operand(other)
        return Vector3(self.x * ox, self.y * oy, self.z * oz)

    def divide(self, other: Operand) -> "Vector3":
        ox, oy, oz = self._operand(other)
        if ox == 0 or oy == 0 or oz == 0:
            raise DivisionByZero(f"Cannot divide {self!r} by {other!r}")
        return Vector3(self.x / ox, self.y / oy, self.z / oz)

    def dot(self, other: VectorLike) -> float:
        ox, oy, oz = self._vector(other)
        return _finite(self.x * ox + self.y * oy + self.z * oz, "Dot product")

    def cross(self, other: VectorLike) -> "Vector3":
        ox, oy, oz = self._vector(other)
        return Vector3(
            self.y * oz - self.z * oy,
            self.z * ox - self.x * oz,
            self.x * oy - self.y * ox
        )

    def _vector(self, other: VectorLike) -> Tuple[float, float, float]:
        if _is_scalar(other):
            raise InvalidArgument(f"Expected a vector, got scalar {other!r}")
        return self._operand(other)

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return _finite(math.hypot(self.x, self.y, self.z), "Length")

    def _is_zero(self) -> bool:
        return self.x == 0 and self.y == 0 and self.z == 0

    def _direction(self) -> Tuple[float, float, float]:
        """
        Returns the unit components, or all zeros for the zero vector.
        Scaling by the largest component first keeps hypot() finite.
        """
        m = max(abs(self.x), abs(self.y), abs(self.z))
        if m == 0:
            return 0.0, 0.0, 0.0
        x, y, z = self.x / m, self.y / m, self.z / m
        l = math.hypot(x, y, z)
        return x / l, y / l, z / l

    def unit(self) -> "Vector3":
        """
        Returns a copy with the same direction and a length of 1.
        Raises DivisionByZero for the zero vector.
        """
        if self._is_zero():
            raise DivisionByZero("Cannot take the unit vector of a zero-length vector")
        return Vector3(*self._direction())

    def normalize(self) -> "Vector3":
        """
        Like unit(), but the zero vector normalizes to itself.
        """
        return Vector3(*self._direction())

    def angle_to(self, other: VectorLike) -> float:
        """
        Returns the angle between the two vectors in radians, in [0, pi].
        """
        other = Vector3(self._vector(other))
        if self._is_zero() or other._is_zero():
            raise DivisionByZero("Angle to or from a zero-length vector is undefined")
        ax, ay, az = self._direction()
        bx, by, bz = other._direction()
        # Rounding can push the cosine slightly past +-1.
        cos_theta = max(-1.0, min(1.0, ax * bx + ay * by + az * bz))
        return math.acos(cos_theta)

    def min(self) -> float:
        return min(self.x, self.y, self.z)

    def max(self) -> float:
        return max(self.x, self.y, self.z)

    def negative(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def equals(self, other: VectorLike) -> bool:
        """
        Component-wise comparison within EPSILON (absolute) or
        REL_TOLERANCE (relative), whichever is looser.
        """
        ox, oy, oz = self._vector(other)
        return (math.isclose(self.x, ox, rel_tol=REL_TOLERANCE, abs_tol=EPSILON) and
                math.isclose(self.y, oy, rel_tol=REL_TOLERANCE, abs_tol=EPSILON) and
                math.isclose(self.z, oz, rel_tol=REL_TOLERANCE, abs_tol=EPSILON))

    def clone(self) -> "Vector3":
        return Vector3(self.x, self.y, self.z)

    def to_array(self) -> List[float]:
        return [self.x, self.y, self.z]

    def to_angles(self) -> Array2d:
        """
        Returns (pitch, yaw) in radians for the direction of this vector,
        the inverse of from_angles(). The length is ignored; a vertical
        vector has yaw 0 and the zero vector gives (0, 0).
        """
        if self.x == 0 and self.z == 0:
            yaw = 0.0
        else:
            # -0.0 on x would flip yaw from pi to -pi.
            yaw = math.atan2(self.x or 0.0, -self.z)
        pitch = math.atan2(self.y, math.hypot(self.x, self.z))
        return (pitch, yaw)

    def to_numpy(self, dtype=np.float64) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=dtype)

    def __add__(self, other):
        if not (_is_scalar(other) or isinstance(other, Vector3)):
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        if not (_is_scalar(other) or isinstance(other, Vector3)):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.negative().add(other)

    def __mul__(self, other):
        if not (_is_scalar(other) or isinstance(other, Vector3)):
            return NotImplemented
        return self.multiply(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if not (_is_scalar(other) or isinstance(other, Vector3)):
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return Vector3(other, other, other).divide(self)

    def __neg__(self) -> "Vector3":
        return self.negative()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.equals(other)

    # Tolerant equality is not transitive, so vectors cannot be dict keys.
    __hash__ = None

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __len__(self) -> int:
        return 3

    def __repr__(self) -> str:
        return f"Vector3({self.x}, {self.y}, {self.z})"
