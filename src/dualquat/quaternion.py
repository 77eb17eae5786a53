"""
===============================================================================
DUALQUAT - Quaternion Algebra
===============================================================================

General (not necessarily unit) quaternions with the full set of algebraic
operations the biquaternion and vector-transform layers are built from:
addition, the Grassmann (Hamilton) and Euclid products, the scalar and outer
products, the commutator ("vector") product, conjugation, normalization and
inversion.

Convention
----------
Scalar-first:

    q = [w, i, j, k] = w + i*I + j*J + k*K

where w is the scalar (real) part and [i, j, k] the vector (imaginary) part.

A unit rotation quaternion for a rotation by angle theta about unit axis n is

    q = [cos(theta/2), sin(theta/2) * n]

and rotates a pure quaternion v by the sandwich product q * v * q_conjugate.

Squared norm
------------
``Quaternion.norm`` is the SQUARED magnitude, w^2 + i^2 + j^2 + k^2, not its
square root. Every formula in this package (inverse, equality, scaling) is
written against the squared norm. Use ``Quaternion.magnitude`` when the
Euclidean length is wanted.

Immutability
------------
Instances never change after construction. The components live in a
read-only numpy array and attribute assignment raises ``AttributeError``,
so a quaternion can be shared freely between biquaternions and threads.

References
----------
    [1] Kuipers, "Quaternions and Rotation Sequences", Princeton, 1999.
    [2] Kenwright, "A Beginners Guide to Dual-Quaternions", WSCG, 2012.

===============================================================================
"""

import logging
import numbers
from typing import Sequence, Union

import numpy as np

from dualquat.constants import IDENTITY_COMPONENTS, ZERO_COMPONENTS


logger = logging.getLogger(__name__)

Number = Union[int, float]


class DegenerateQuaternionError(ValueError):
    """
    Raised when an operation has to divide by the squared norm of an
    all-zero quaternion.

    This is the only failure mode of the library. It is raised by
    ``normalize``, ``reverse``, ``to_rotate_quaternion`` and, through them,
    by every vector transform built from a zero rotation axis.

    Attributes
    ----------
    operation : str
        Name of the operation that rejected the operand.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"All components equal to zero ({operation})")


class Quaternion:
    """
    Immutable quaternion value.

    Attributes
    ----------
    w : float
        Scalar (real) component.
    i : float
        First imaginary component.
    j : float
        Second imaginary component.
    k : float
        Third imaginary component.

    Examples
    --------
    >>> a = Quaternion(1.0, 0.0, 0.0, 0.0)
    >>> (a + a).equals(Quaternion(2.0, 0.0, 0.0, 0.0), 1e-15)
    True
    >>> str(Quaternion(0.0, 1.0, 0.0, 0.0) * Quaternion(0.0, 0.0, 1.0, 0.0))
    '(0.0)+(0.0)i+(0.0)j+(1.0)k'
    """

    __slots__ = ('_q',)

    def __init__(self, w: Number, i: Number, j: Number, k: Number) -> None:
        q = np.array([w, i, j, k], dtype=np.float64)
        q.flags.writeable = False
        object.__setattr__(self, '_q', q)

    def __setattr__(self, name, value):
        raise AttributeError(f"Quaternion is immutable; cannot set '{name}'")

    def __delattr__(self, name):
        raise AttributeError(f"Quaternion is immutable; cannot delete '{name}'")

    # =========================================================================
    # PROPERTIES - Read access to quaternion components
    # =========================================================================

    @property
    def w(self) -> float:
        """Scalar (real) part of the quaternion."""
        return float(self._q[0])

    @property
    def i(self) -> float:
        """First imaginary component."""
        return float(self._q[1])

    @property
    def j(self) -> float:
        """Second imaginary component."""
        return float(self._q[2])

    @property
    def k(self) -> float:
        """Third imaginary component."""
        return float(self._q[3])

    @property
    def scalar(self) -> float:
        """Scalar part of the quaternion (alias for w)."""
        return self.w

    @property
    def vector(self) -> np.ndarray:
        """
        Vector (imaginary) part of the quaternion as a 3-element array.

        Returns
        -------
        np.ndarray
            Writeable copy of [i, j, k].
        """
        return self._q[1:4].copy()

    @property
    def components(self) -> np.ndarray:
        """
        Full quaternion as a 4-element numpy array [w, i, j, k].

        Returns
        -------
        np.ndarray
            Writeable copy of the internal component array.
        """
        return self._q.copy()

    # =========================================================================
    # STATIC FACTORY METHODS
    # =========================================================================

    @staticmethod
    def identity() -> 'Quaternion':
        """
        Create the identity quaternion [1, 0, 0, 0].

        It is the multiplicative identity of the Grassmann product and the
        unit rotation quaternion of the zero rotation.
        """
        return Quaternion(*IDENTITY_COMPONENTS)

    @staticmethod
    def zero() -> 'Quaternion':
        """Create the additive identity [0, 0, 0, 0]."""
        return Quaternion(*ZERO_COMPONENTS)

    @staticmethod
    def from_scalar(n: Number) -> 'Quaternion':
        """Embed a real number as [n, 0, 0, 0]."""
        return Quaternion(n, 0.0, 0.0, 0.0)

    @staticmethod
    def from_vector(v: Sequence[float]) -> 'Quaternion':
        """
        Embed a 3-vector as the pure quaternion [0, v_x, v_y, v_z].

        Parameters
        ----------
        v : array_like
            Anything numpy can turn into a 3-element float array, including
            ``dualquat.vec3.Vec3``.

        Raises
        ------
        ValueError
            If v does not have exactly three components.
        """
        v = np.asarray(v, dtype=np.float64)

        if v.shape != (3,):
            raise ValueError(f"Vector must have 3 components, got shape {v.shape}")

        return Quaternion(0.0, v[0], v[1], v[2])

    @staticmethod
    def from_axis_angle(axis: Sequence[float], angle: float) -> 'Quaternion':
        """
        Create a unit rotation quaternion from an axis-angle representation.

        Shorthand for ``Quaternion.from_vector(axis).to_rotate_quaternion(angle)``.

        Parameters
        ----------
        axis : array_like
            3-element rotation axis. Normalized internally.
        angle : float
            Rotation angle in radians (right-hand rule).

        Raises
        ------
        DegenerateQuaternionError
            If the axis is the zero vector.
        """
        return Quaternion.from_vector(axis).to_rotate_quaternion(angle)

    # =========================================================================
    # ADDITIVE OPERATIONS
    # =========================================================================

    def add(self, other: 'Quaternion') -> 'Quaternion':
        """Component-wise sum."""
        return Quaternion(*(self._q + other._q))

    def sub(self, other: 'Quaternion') -> 'Quaternion':
        """Component-wise difference self - other."""
        return Quaternion(*(self._q - other._q))

    # =========================================================================
    # PRODUCTS
    # =========================================================================

    def mul_by_grassmann(self, other: 'Quaternion') -> 'Quaternion':
        """
        Grassmann (Hamilton) product self * other.

        The product is NOT commutative. In component form:

            (a1 + b1*i + c1*j + d1*k) * (a2 + b2*i + c2*j + d2*k) =

            (a1*a2 - b1*b2 - c1*c2 - d1*d2) +
            (a1*b2 + b1*a2 + c1*d2 - d1*c2) i +
            (a1*c2 - b1*d2 + c1*a2 + d1*b2) j +
            (a1*d2 + b1*c2 - c1*b2 + d1*a2) k

        Parameters
        ----------
        other : Quaternion
            The right-hand quaternion in the product.

        Returns
        -------
        Quaternion
            The Grassmann product self * other.
        """
        a1, b1, c1, d1 = self.w, self.i, self.j, self.k
        a2, b2, c2, d2 = other.w, other.i, other.j, other.k

        w = a1 * a2 - b1 * b2 - c1 * c2 - d1 * d2
        i = a1 * b2 + b1 * a2 + c1 * d2 - d1 * c2
        j = a1 * c2 - b1 * d2 + c1 * a2 + d1 * b2
        k = a1 * d2 + b1 * c2 - c1 * b2 + d1 * a2

        return Quaternion(w, i, j, k)

    def mul_by_euclid(self, other: 'Quaternion') -> 'Quaternion':
        """
        Euclid product conj(self) * other.

        Its scalar part is the 4D dot product of the two quaternions.
        """
        return self.conjugate().mul_by_grassmann(other)

    def mul_scalar(self, other: 'Quaternion') -> float:
        """
        Symmetric scalar product (conj(self)*other + conj(other)*self).w / 2.

        Equals the 4D dot product w1*w2 + i1*i2 + j1*j2 + k1*k2. For
        other = [0, 1, 0, 0] it returns exactly ``self.i``.
        """
        left = self.conjugate().mul_by_grassmann(other)
        right = other.conjugate().mul_by_grassmann(self)
        return left.add(right).w / 2

    def mul_outer(self, other: 'Quaternion') -> float:
        """Antisymmetric part (conj(self)*other - conj(other)*self).w / 2."""
        left = self.conjugate().mul_by_grassmann(other)
        right = other.conjugate().mul_by_grassmann(self)
        return left.sub(right).w / 2

    def mul_by_number(self, n: Number) -> 'Quaternion':
        """
        Scale every component by the real number n.

        Computed as the Grassmann product with [n, 0, 0, 0], which yields
        exactly the component-wise scaling, so norm(q * n) == norm(q) * n^2.
        """
        return self.mul_by_grassmann(Quaternion.from_scalar(n))

    def mul_vector(self, other: 'Quaternion') -> 'Quaternion':
        """
        Commutator product (self*other - other*self) / 2.

        For pure quaternions this is the cross product of the vector parts.
        """
        d = self.mul_by_grassmann(other).sub(other.mul_by_grassmann(self))
        return Quaternion(d.w / 2, d.i / 2, d.j / 2, d.k / 2)

    # =========================================================================
    # CONJUGATE, NORM AND INVERSE
    # =========================================================================

    def conjugate(self) -> 'Quaternion':
        """
        Return the quaternion conjugate [w, -i, -j, -k].

        For unit quaternions the conjugate is the inverse and represents the
        reverse rotation.
        """
        return Quaternion(self.w, -self.i, -self.j, -self.k)

    def norm(self) -> float:
        """
        Squared norm w^2 + i^2 + j^2 + k^2.

        This is NOT the Euclidean length; see ``magnitude``.
        """
        w, i, j, k = self.w, self.i, self.j, self.k
        return w * w + i * i + j * j + k * k

    def magnitude(self) -> float:
        """Euclidean length sqrt(norm())."""
        return float(np.sqrt(self.norm()))

    def normalize(self) -> 'Quaternion':
        """
        Return a new quaternion of unit magnitude with the same direction.

        Returns
        -------
        Quaternion
            self / sqrt(norm(self)).

        Raises
        ------
        DegenerateQuaternionError
            If all four components are zero.
        """
        norm = self.norm()

        if norm == 0:
            logger.debug("normalize rejected zero quaternion %r", self)
            raise DegenerateQuaternionError("normalize")

        norm_sqrt = np.sqrt(norm)
        return Quaternion(*(self._q / norm_sqrt))

    def reverse(self) -> 'Quaternion':
        """
        Multiplicative inverse conj(self) / norm(self).

        Satisfies self * self.reverse() == [1, 0, 0, 0] up to rounding.

        Raises
        ------
        DegenerateQuaternionError
            If all four components are zero.
        """
        norm = self.norm()

        if norm == 0:
            logger.debug("reverse rejected zero quaternion %r", self)
            raise DegenerateQuaternionError("reverse")

        conj = self.conjugate()
        return Quaternion(conj.w / norm, conj.i / norm, conj.j / norm, conj.k / norm)

    # =========================================================================
    # ROTATION
    # =========================================================================

    def to_rotate_quaternion(self, angle: float) -> 'Quaternion':
        """
        Build the unit rotation quaternion about this quaternion's axis.

        The quaternion is normalized first (all four components, so callers
        normally pass a pure quaternion [0, n_x, n_y, n_z]). The scalar part
        is then replaced by cos(angle/2) and the vector part scaled by
        sin(angle/2):

            q = [cos(angle/2), sin(angle/2) * n]

        Parameters
        ----------
        angle : float
            Rotation angle in radians (right-hand rule).

        Returns
        -------
        Quaternion
            Unit rotation quaternion.

        Raises
        ------
        DegenerateQuaternionError
            If the axis quaternion is zero.
        """
        n = self.normalize()

        half_angle = angle / 2.0
        sin_half = np.sin(half_angle)

        return Quaternion(np.cos(half_angle),
                          n.i * sin_half,
                          n.j * sin_half,
                          n.k * sin_half)

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def equals(self, other: 'Quaternion', eps: float) -> bool:
        """
        Tolerance equality.

        Both criteria must hold:
            1. every component differs by less than eps, and
            2. the squared norms differ by less than eps.

        Parameters
        ----------
        other : Quaternion
            Quaternion to compare against.
        eps : float
            Tolerance. There is no default.
        """
        return self._equals_by_coords(other, eps) and self._equals_by_norm(other, eps)

    def is_unit(self, tolerance: float = 1e-8) -> bool:
        """Check whether the squared norm is within tolerance of 1.0."""
        return abs(self.norm() - 1.0) < tolerance

    def _equals_by_coords(self, other: 'Quaternion', eps: float) -> bool:
        sub = self.sub(other)
        return (abs(sub.w) < eps and abs(sub.i) < eps
                and abs(sub.j) < eps and abs(sub.k) < eps)

    def _equals_by_norm(self, other: 'Quaternion', eps: float) -> bool:
        return abs(self.norm() - other.norm()) < eps

    # =========================================================================
    # OPERATOR OVERLOADS
    # =========================================================================

    # numpy scalars defer to __rmul__ instead of broadcasting over the object
    __array_ufunc__ = None

    def __add__(self, other: 'Quaternion') -> 'Quaternion':
        if isinstance(other, Quaternion):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: 'Quaternion') -> 'Quaternion':
        if isinstance(other, Quaternion):
            return self.sub(other)
        return NotImplemented

    def __mul__(self, other: Union['Quaternion', Number]) -> 'Quaternion':
        """
        Multiplication operator.

        - Quaternion * Quaternion -> Grassmann product
        - Quaternion * number -> ``mul_by_number``
        """
        if isinstance(other, Quaternion):
            return self.mul_by_grassmann(other)
        elif isinstance(other, numbers.Real):
            return self.mul_by_number(other)
        return NotImplemented

    def __rmul__(self, other: Number) -> 'Quaternion':
        """Right-multiplication by a number: n * Quaternion."""
        if isinstance(other, numbers.Real):
            return self.mul_by_number(other)
        return NotImplemented

    def __neg__(self) -> 'Quaternion':
        return Quaternion(-self.w, -self.i, -self.j, -self.k)

    def __eq__(self, other: object) -> bool:
        """Exact component equality. Use ``equals`` for tolerance checks."""
        if not isinstance(other, Quaternion):
            return NotImplemented
        return bool(np.array_equal(self._q, other._q))

    def __hash__(self) -> int:
        return hash(tuple(self._q.tolist()))

    def __repr__(self) -> str:
        return (f"Quaternion(w={self.w!r}, i={self.i!r}, "
                f"j={self.j!r}, k={self.k!r})")

    def __str__(self) -> str:
        """Human-readable form (W)+(I)i+(J)j+(K)k."""
        return f"({self.w})+({self.i})i+({self.j})j+({self.k})k"
