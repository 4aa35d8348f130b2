"""Small vector, matrix and quaternion types used by the physics bodies."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Union

Scalar = Union[int, float]
_SCALARS = (int, float)


@dataclass(frozen=True, slots=True)
class Vec3:
    """An immutable three component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other: Vec3) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __rsub__(self, other: Scalar) -> Vec3:
        if isinstance(other, _SCALARS):
            return Vec3(other - self.x, other - self.y, other - self.z)
        return NotImplemented

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Vec3 | Scalar) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        if isinstance(other, _SCALARS):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __rmul__(self, other: Scalar) -> Vec3:
        if isinstance(other, _SCALARS):
            return Vec3(self.x * other, self.y * other, self.z * other)
        return NotImplemented

    def __truediv__(self, other: Vec3 | Scalar) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x / other.x, self.y / other.y, self.z / other.z)
        if isinstance(other, _SCALARS):
            return Vec3(self.x / other, self.y / other, self.z / other)
        return NotImplemented

    def dot(self, other: Vec3) -> float:
        """Scalar product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Vector product with another vector."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vec3:
        """Unit vector in the same direction; raises ValueError for a zero vector."""
        length = self.magnitude()
        if length == 0:
            raise ValueError("cannot normalize a zero-length vector")
        return self / length


@dataclass(frozen=True, slots=True)
class Mat3:
    """A 3x3 matrix stored as three column vectors."""

    x: Vec3 = Vec3(1.0, 0.0, 0.0)
    y: Vec3 = Vec3(0.0, 1.0, 0.0)
    z: Vec3 = Vec3(0.0, 0.0, 1.0)

    def transform(self, v: Vec3) -> Vec3:
        """Multiply this matrix by a column vector."""
        return self.x * v.x + self.y * v.y + self.z * v.z

    def __matmul__(self, v: Vec3) -> Vec3:
        if isinstance(v, Vec3):
            return self.transform(v)
        return NotImplemented


@dataclass(frozen=True, slots=True)
class Quaternion:
    """A rotation quaternion with components (x, y, z, w); identity by default."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __mul__(self, other: Quaternion | Vec3) -> Quaternion | Vec3:
        if isinstance(other, Quaternion):
            ax, ay, az, aw = self
            bx, by, bz, bw = other
            return Quaternion(
                aw * bx + ax * bw + ay * bz - az * by,
                aw * by - ax * bz + ay * bw + az * bx,
                aw * bz + ax * by - ay * bx + az * bw,
                aw * bw - ax * bx - ay * by - az * bz,
            )
        if isinstance(other, Vec3):
            return self.rotate(other)
        return NotImplemented

    def normalized(self) -> Quaternion:
        """Unit quaternion; raises ValueError for a zero quaternion."""
        norm = math.sqrt(self.x**2 + self.y**2 + self.z**2 + self.w**2)
        if norm == 0:
            raise ValueError("cannot normalize a zero quaternion")
        return Quaternion(self.x / norm, self.y / norm, self.z / norm, self.w / norm)

    def matrix(self) -> Mat3:
        """Rotation matrix of this (unit) quaternion."""
        x, y, z, w = self
        return Mat3(
            Vec3(1 - 2 * (y * y + z * z), 2 * (x * y + z * w), 2 * (x * z - y * w)),
            Vec3(2 * (x * y - z * w), 1 - 2 * (x * x + z * z), 2 * (y * z + x * w)),
            Vec3(2 * (x * z + y * w), 2 * (y * z - x * w), 1 - 2 * (x * x + y * y)),
        )

    def rotate(self, v: Vec3) -> Vec3:
        """Rotate a vector by this quaternion."""
        return self.matrix().transform(v)