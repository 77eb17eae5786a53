"""
===============================================================================
DUALQUAT - Quaternion, Biquaternion and Rigid-Motion Library
===============================================================================
Quaternion algebra, dual-number biquaternions built from quaternion pairs,
and 3D rigid-body transforms expressed as biquaternion sandwich products.

Modules:
    constants    -- Angle conversions and comparison tolerances
    quaternion   -- Quaternion value type and DegenerateQuaternionError
    biquaternion -- BiQuaternion (p, q) with dual-number multiplication
    vec3         -- Vec3 with rotate / step / rotate-around-point transforms
===============================================================================
"""

from dualquat.quaternion import DegenerateQuaternionError, Quaternion
from dualquat.biquaternion import BiQuaternion
from dualquat.vec3 import Vec3

__all__ = ["BiQuaternion", "DegenerateQuaternionError", "Quaternion", "Vec3"]
__version__ = "0.1.0"
