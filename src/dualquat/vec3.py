"""
===============================================================================
DUALQUAT - 3D Vectors and Rigid-Body Transforms
===============================================================================

Rotation, translation, combined rotation+translation and rotation about an
arbitrary pivot, all expressed as one biquaternion sandwich product.

Every transform follows the same three steps:

    1. Embed the point v as the biquaternion  X = (1, [0, v_x, v_y, v_z]).
    2. Build a motion operator M from the axis / angle / step arguments.
    3. Compute M * X * M_star and read the point back from the vector part
       of the secondary quaternion.

Motion operators (R is the unit rotation quaternion for axis/angle, t is the
pure quaternion [0, s/2] of the half step):

    rotate               M = (R, 0)                    M_star = cc(M)
    step_to              M = (1, t)                    M_star = cc(c(M))
    rotate_and_step_to   M = (R, t*R)                  M_star = cc(c(M))
    step_and_rotate_to   M = (R, R*t)                  M_star = cc(c(M))
    rotate_around_point  M = (1, t)(R, 0)(1, conj(t))  M_star = cc(c(M))

where c is the dual-number conjugate and cc the quaternion conjugate of
``BiQuaternion``. The ``t*R`` / ``R*t`` orders are part of the contract:
the first rotates and then translates, the second translates and then
rotates.

Only a zero rotation axis can fail; it raises
``dualquat.quaternion.DegenerateQuaternionError``.
===============================================================================
"""

import numbers
from typing import Iterator, Sequence, Union

import numpy as np

from dualquat.biquaternion import BiQuaternion
from dualquat.constants import DEG2RAD
from dualquat.quaternion import Quaternion


Number = Union[int, float]


class Vec3:
    """
    Immutable 3D point / vector.

    Attributes
    ----------
    x, y, z : float
        Cartesian components.

    Examples
    --------
    >>> Vec3(1.0, 0.0, 0.0).rotate(Vec3(0.0, 0.0, 1.0), np.pi).equals(
    ...     Vec3(-1.0, 0.0, 0.0), 1e-9)
    True
    """

    __slots__ = ('_v',)

    def __init__(self, x: Number, y: Number, z: Number) -> None:
        v = np.array([x, y, z], dtype=np.float64)
        v.flags.writeable = False
        object.__setattr__(self, '_v', v)

    def __setattr__(self, name, value):
        raise AttributeError(f"Vec3 is immutable; cannot set '{name}'")

    def __delattr__(self, name):
        raise AttributeError(f"Vec3 is immutable; cannot delete '{name}'")

    @staticmethod
    def from_array(a: Sequence[float]) -> 'Vec3':
        """
        Build a Vec3 from any 3-element array_like.

        Raises
        ------
        ValueError
            If a does not have exactly three components.
        """
        a = np.asarray(a, dtype=np.float64)

        if a.shape != (3,):
            raise ValueError(f"Vec3 needs 3 components, got shape {a.shape}")

        return Vec3(a[0], a[1], a[2])

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def x(self) -> float:
        return float(self._v[0])

    @property
    def y(self) -> float:
        return float(self._v[1])

    @property
    def z(self) -> float:
        return float(self._v[2])

    @property
    def components(self) -> np.ndarray:
        """Writeable copy of [x, y, z]."""
        return self._v.copy()

    def to_quaternion(self) -> Quaternion:
        """Pure quaternion [0, x, y, z]."""
        return Quaternion.from_vector(self._v)

    # =========================================================================
    # VECTOR ARITHMETIC
    # =========================================================================

    def add(self, other: 'Vec3') -> 'Vec3':
        return Vec3.from_array(self._v + _as_vec3(other)._v)

    def sub(self, other: 'Vec3') -> 'Vec3':
        return Vec3.from_array(self._v - _as_vec3(other)._v)

    def scale(self, n: Number) -> 'Vec3':
        return Vec3.from_array(self._v * n)

    def length(self) -> float:
        """Euclidean length sqrt(x^2 + y^2 + z^2)."""
        x, y, z = self.x, self.y, self.z
        return float(np.sqrt(x * x + y * y + z * z))

    def equals(self, other: 'Vec3', eps: float) -> bool:
        """
        Component-wise tolerance equality.

        Unlike ``Quaternion.equals`` there is no second, length-based
        criterion.
        """
        d = self.sub(other)
        return abs(d.x) < eps and abs(d.y) < eps and abs(d.z) < eps

    # =========================================================================
    # RIGID-BODY TRANSFORMS
    # =========================================================================

    def rotate(self, axis: Sequence[float], angle: float) -> 'Vec3':
        """
        Rotate about an axis through the origin.

        Parameters
        ----------
        axis : Vec3 or array_like
            Rotation axis; need not be unit length.
        angle : float
            Rotation angle in radians (right-hand rule).

        Returns
        -------
        Vec3
            The rotated vector. Its length equals ``self.length()``.

        Raises
        ------
        DegenerateQuaternionError
            If axis is the zero vector.
        """
        motion = BiQuaternion.from_rotation(_rotation(axis, angle))
        return _extract(motion.sandwich(self._embed(), dual=False))

    rotate_rad = rotate

    def rotate_deg(self, axis: Sequence[float], angle_deg: float) -> 'Vec3':
        """Same as ``rotate`` with the angle given in degrees."""
        return self.rotate(axis, angle_deg * DEG2RAD)

    def step_to(self, step: Sequence[float]) -> 'Vec3':
        """
        Translate by ``step``.

        The motion is (1, [0, step/2]); the result is self + step.
        """
        motion = BiQuaternion.from_translation(_as_vec3(step)._v)
        return _extract(motion.sandwich(self._embed()))

    def rotate_and_step_to(self, step: Sequence[float],
                           rotate_axis: Sequence[float],
                           angle: float) -> 'Vec3':
        """
        Rotate about ``rotate_axis`` through the origin, then translate by
        ``step``.

        The motion's secondary part is the half step multiplied on the left
        of the rotation: (R, t*R).

        Raises
        ------
        DegenerateQuaternionError
            If rotate_axis is the zero vector.
        """
        rotation = _rotation(rotate_axis, angle)
        half_step = _half_step(step)

        motion = BiQuaternion(rotation, half_step.mul_by_grassmann(rotation))
        return _extract(motion.sandwich(self._embed()))

    def step_and_rotate_to(self, step: Sequence[float],
                           rotate_axis: Sequence[float],
                           angle: float) -> 'Vec3':
        """
        Translate by ``step``, then rotate about ``rotate_axis`` through the
        origin.

        The motion's secondary part is the half step multiplied on the right
        of the rotation: (R, R*t). Differs from ``rotate_and_step_to`` unless
        the step is zero or parallel to the axis.

        Raises
        ------
        DegenerateQuaternionError
            If rotate_axis is the zero vector.
        """
        rotation = _rotation(rotate_axis, angle)
        half_step = _half_step(step)

        motion = BiQuaternion(rotation, rotation.mul_by_grassmann(half_step))
        return _extract(motion.sandwich(self._embed()))

    def rotate_around_point(self, point: Sequence[float],
                            rotate_axis: Sequence[float],
                            angle: float) -> 'Vec3':
        """
        Rotate about an axis through ``point`` instead of the origin.

        The motion is the product of three operators: a translation by the
        half pivot, the rotation, and a translation by the conjugated half
        pivot.

            M = (1, t) * (R, 0) * (1, conj(t)),   t = [0, point/2]

        Rotating by ``angle`` and then by ``-angle`` about the same point
        returns the original vector.

        Raises
        ------
        DegenerateQuaternionError
            If rotate_axis is the zero vector.
        """
        rotation = _rotation(rotate_axis, angle)
        half_point = _half_step(point)

        motion = (BiQuaternion(Quaternion.identity(), half_point)
                  .mul(BiQuaternion.from_rotation(rotation))
                  .mul(BiQuaternion(Quaternion.identity(), half_point.conjugate())))

        return _extract(motion.sandwich(self._embed()))

    def _embed(self) -> BiQuaternion:
        return BiQuaternion.from_point(self._v)

    # =========================================================================
    # PROTOCOLS
    # =========================================================================

    # np.asarray(v) still works; numpy operands defer to the operators below
    __array_ufunc__ = None

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        return np.array(self._v, dtype=dtype)

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __len__(self) -> int:
        return 3

    def __add__(self, other: 'Vec3') -> 'Vec3':
        if isinstance(other, Vec3):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: 'Vec3') -> 'Vec3':
        if isinstance(other, Vec3):
            return self.sub(other)
        return NotImplemented

    def __mul__(self, other: Number) -> 'Vec3':
        if isinstance(other, numbers.Real):
            return self.scale(other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other: Number) -> 'Vec3':
        if isinstance(other, numbers.Real):
            if other == 0:
                raise ZeroDivisionError("Vec3 division by zero")
            return Vec3.from_array(self._v / other)
        return NotImplemented

    def __neg__(self) -> 'Vec3':
        return Vec3(-self.x, -self.y, -self.z)

    def __eq__(self, other: object) -> bool:
        """Exact component equality. Use ``equals`` for tolerance checks."""
        if not isinstance(other, Vec3):
            return NotImplemented
        return bool(np.array_equal(self._v, other._v))

    def __hash__(self) -> int:
        return hash(tuple(self._v.tolist()))

    def __repr__(self) -> str:
        return f"Vec3(x={self.x!r}, y={self.y!r}, z={self.z!r})"

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.z})"


# =============================================================================
# HELPERS
# =============================================================================

def _as_vec3(value: Union[Vec3, Sequence[float]]) -> Vec3:
    if isinstance(value, Vec3):
        return value
    return Vec3.from_array(value)


def _rotation(axis: Union[Vec3, Sequence[float]], angle: float) -> Quaternion:
    """Unit rotation quaternion; raises DegenerateQuaternionError on a zero axis."""
    return Quaternion.from_axis_angle(_as_vec3(axis)._v, angle)


def _half_step(step: Union[Vec3, Sequence[float]]) -> Quaternion:
    return Quaternion.from_vector(_as_vec3(step)._v / 2)


def _extract(result: BiQuaternion) -> Vec3:
    """Read the transformed point from the vector part of the dual quaternion."""
    return Vec3(result.q.i, result.q.j, result.q.k)
