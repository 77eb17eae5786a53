"""
===============================================================================
DUALQUAT - Biquaternion Algebra
===============================================================================

A biquaternion here is an ordered pair of quaternions (p, q) multiplied with
the dual-number rule:

    (p1, q1) * (p2, q2) = (p1*p2, p1*q2 + q1*p2)

p is the primary (real) part and q the secondary (dual) part. With p a unit
rotation quaternion and q built from a translation, the pair is a rigid-motion
operator that rotates and translates a point in one sandwich product.

Two conjugations
----------------
    conjugate()          (p, q) -> (p, -q)              dual-number conjugate
    complex_conjugate()  (p, q) -> (conj(p), conj(q))   quaternion conjugate

They are unrelated operations and are kept as two distinct methods. A pure
rotation is applied with the quaternion conjugate alone; any motion with a
translation needs both, composed.
===============================================================================
"""

from typing import Sequence

import numpy as np

from dualquat.quaternion import Quaternion


class BiQuaternion:
    """
    Immutable pair of quaternions (p, q).

    Attributes
    ----------
    p : Quaternion
        Primary (real) part.
    q : Quaternion
        Secondary (dual) part.
    """

    __slots__ = ('_p', '_q')

    def __init__(self, p: Quaternion, q: Quaternion) -> None:
        if not isinstance(p, Quaternion) or not isinstance(q, Quaternion):
            raise TypeError(
                f"BiQuaternion parts must be Quaternion, got "
                f"{type(p).__name__} and {type(q).__name__}"
            )
        object.__setattr__(self, '_p', p)
        object.__setattr__(self, '_q', q)

    def __setattr__(self, name, value):
        raise AttributeError(f"BiQuaternion is immutable; cannot set '{name}'")

    def __delattr__(self, name):
        raise AttributeError(f"BiQuaternion is immutable; cannot delete '{name}'")

    @property
    def p(self) -> Quaternion:
        """Primary (real) part."""
        return self._p

    @property
    def q(self) -> Quaternion:
        """Secondary (dual) part."""
        return self._q

    # =========================================================================
    # STATIC FACTORY METHODS
    # =========================================================================

    @staticmethod
    def identity() -> 'BiQuaternion':
        """The multiplicative identity (1, 0)."""
        return BiQuaternion(Quaternion.identity(), Quaternion.zero())

    @staticmethod
    def from_point(v: Sequence[float]) -> 'BiQuaternion':
        """
        Embed a 3D point as (1, [0, v_x, v_y, v_z]).

        This is the operand every vector transform sandwiches between a
        motion and its conjugate.
        """
        return BiQuaternion(Quaternion.identity(), Quaternion.from_vector(v))

    @staticmethod
    def from_rotation(rotation: Quaternion) -> 'BiQuaternion':
        """Pure rotation operator (r, 0). r should be a unit quaternion."""
        return BiQuaternion(rotation, Quaternion.zero())

    @staticmethod
    def from_translation(step: Sequence[float]) -> 'BiQuaternion':
        """Pure translation operator (1, [0, s/2])."""
        half = np.asarray(step, dtype=np.float64) / 2
        return BiQuaternion(Quaternion.identity(), Quaternion.from_vector(half))

    # =========================================================================
    # ALGEBRA
    # =========================================================================

    def add(self, other: 'BiQuaternion') -> 'BiQuaternion':
        """Part-wise sum."""
        return BiQuaternion(self._p.add(other.p), self._q.add(other.q))

    def sub(self, other: 'BiQuaternion') -> 'BiQuaternion':
        """Part-wise difference."""
        return BiQuaternion(self._p.sub(other.p), self._q.sub(other.q))

    def mul(self, other: 'BiQuaternion') -> 'BiQuaternion':
        """
        Biquaternion product self * other.

            p = self.p * other.p
            q = self.p * other.q + self.q * other.p

        All products are Grassmann products, so operand order matters in
        both parts.
        """
        return BiQuaternion(
            self._p.mul_by_grassmann(other.p),
            self._p.mul_by_grassmann(other.q).add(self._q.mul_by_grassmann(other.p)),
        )

    def conjugate(self) -> 'BiQuaternion':
        """Dual-number conjugate (p, -q); p is returned unchanged."""
        return BiQuaternion(self._p, self._q.mul_by_number(-1))

    def complex_conjugate(self) -> 'BiQuaternion':
        """Quaternion conjugate applied to both parts: (conj(p), conj(q))."""
        return BiQuaternion(self._p.conjugate(), self._q.conjugate())

    def sandwich(self, operand: 'BiQuaternion', dual: bool = True) -> 'BiQuaternion':
        """
        Apply this biquaternion as a motion: self * operand * self_star.

        Parameters
        ----------
        operand : BiQuaternion
            Usually a point embedded with ``from_point``.
        dual : bool, optional
            If True (default), self_star is
            ``self.conjugate().complex_conjugate()``, required whenever the
            motion carries a translation. If False, self_star is
            ``self.complex_conjugate()``, which is enough for a pure
            rotation (q == 0).

        Returns
        -------
        BiQuaternion
            The transformed operand.
        """
        if dual:
            star = self.conjugate().complex_conjugate()
        else:
            star = self.complex_conjugate()

        return self.mul(operand).mul(star)

    def equals(self, other: 'BiQuaternion', eps: float) -> bool:
        """True iff both p parts and both q parts pass ``Quaternion.equals``."""
        return self._p.equals(other.p, eps) and self._q.equals(other.q, eps)

    # =========================================================================
    # OPERATOR OVERLOADS
    # =========================================================================

    def __add__(self, other: 'BiQuaternion') -> 'BiQuaternion':
        if isinstance(other, BiQuaternion):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: 'BiQuaternion') -> 'BiQuaternion':
        if isinstance(other, BiQuaternion):
            return self.sub(other)
        return NotImplemented

    def __mul__(self, other: 'BiQuaternion') -> 'BiQuaternion':
        if isinstance(other, BiQuaternion):
            return self.mul(other)
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        """Exact equality of both parts."""
        if not isinstance(other, BiQuaternion):
            return NotImplemented
        return self._p == other.p and self._q == other.q

    def __hash__(self) -> int:
        return hash((self._p, self._q))

    def __repr__(self) -> str:
        return f"BiQuaternion(p={self._p!r}, q={self._q!r})"

    def __str__(self) -> str:
        return f"{{\n{self._p},\n{self._q}\n}}"
