"""Scalar helpers, small vector types and a 4x4 matrix for graphics work."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Callable


def randf() -> float:
    """Return a random float in the unit interval."""
    return random.random()


def clampf(n: float, lo: float, hi: float) -> float:
    """Clamp ``n`` to the range ``[lo, hi]``."""
    return hi if n > hi else lo if n < lo else n


def lerpf(a: float, b: float, t: float) -> float:
    """Linear interpolation from ``a`` to ``b``."""
    return a + t * (b - a)


def smoothlerpf(a: float, b: float, t: float) -> float:
    """Smoothstep interpolation from ``a`` to ``b``."""
    return a + (t * t * (3.0 - 2.0 * t)) * (b - a)


def ilerpf(lo: float, hi: float, n: float) -> float:
    """Inverse interpolation: where ``n`` sits between ``lo`` and ``hi``; 0 for an empty range."""
    return (n - lo) / (hi - lo) if hi - lo != 0.0 else 0.0


def remapf(lo: float, hi: float, a: float, b: float, n: float) -> float:
    """Map ``n`` from the range ``[lo, hi]`` onto ``[a, b]``."""
    return lerpf(a, b, ilerpf(lo, hi, n))


def rad2deg(rad: float) -> float:
    """Convert radians to degrees."""
    return rad * (180.0 / math.pi)


def deg2rad(deg: float) -> float:
    """Convert degrees to radians."""
    return deg / (180.0 / math.pi)


def _inverse(n: float) -> float:
    return 0.0 if n == 0.0 else 1.0 / n


@dataclass(frozen=True, slots=True)
class IVec2:
    x: int
    y: int

    def to_vec(self) -> Vec2:
        return Vec2(float(self.x), float(self.y))


@dataclass(frozen=True, slots=True)
class IVec3:
    x: int
    y: int
    z: int

    def to_vec(self) -> Vec3:
        return Vec3(float(self.x), float(self.y), float(self.z))


@dataclass(frozen=True, slots=True)
class IVec4:
    x: int
    y: int
    z: int
    w: int

    def to_vec(self) -> Vec4:
        return Vec4(float(self.x), float(self.y), float(self.z), float(self.w))


@dataclass(frozen=True, slots=True)
class Vec2:
    x: float
    y: float

    @classmethod
    def uni(cls, n: float) -> Vec2:
        return cls(n, n)

    @classmethod
    def rand(cls) -> Vec2:
        return cls(randf(), randf())

    @classmethod
    def from_rad(cls, rad: float) -> Vec2:
        return cls(math.cos(rad), math.sin(rad))

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, n: float) -> Vec2:
        return Vec2(self.x * n, self.y * n)

    def __truediv__(self, n: float) -> Vec2:
        """Divide by ``n``; dividing by zero gives the zero vector."""
        return self * _inverse(n)

    def norm(self) -> Vec2:
        return self * _inverse(self.mag())

    def cross(self, other: Vec2) -> Vec2:
        """Perpendicular of the difference ``self - other``."""
        return Vec2(-(self.y - other.y), self.x - other.x)

    def prod(self, other: Vec2) -> Vec2:
        return Vec2(self.x * other.x, self.y * other.y)

    def lerp(self, other: Vec2, t: float) -> Vec2:
        return Vec2(self.x + t * (other.x - self.x), self.y + t * (other.y - self.y))

    def sqmag(self) -> float:
        return self.x * self.x + self.y * self.y

    def mag(self) -> float:
        return math.sqrt(self.sqmag())

    def sqdist(self, other: Vec2) -> float:
        return (self - other).sqmag()

    def dist(self, other: Vec2) -> float:
        return (self - other).mag()

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def rads(self) -> float:
        return math.atan2(self.y, self.x)

    def to_ivec(self) -> IVec2:
        return IVec2(int(self.x), int(self.y))


@dataclass(frozen=True, slots=True)
class Vec3:
    x: float
    y: float
    z: float

    @classmethod
    def uni(cls, n: float) -> Vec3:
        return cls(n, n, n)

    @classmethod
    def rand(cls) -> Vec3:
        return cls(randf(), randf(), randf())

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, n: float) -> Vec3:
        return Vec3(self.x * n, self.y * n, self.z * n)

    def __truediv__(self, n: float) -> Vec3:
        """Divide by ``n``; dividing by zero gives the zero vector."""
        return self * _inverse(n)

    def norm(self) -> Vec3:
        return self * _inverse(self.mag())

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - other.y * self.z,
            self.z * other.x - other.z * self.x,
            self.x * other.y - other.x * self.y,
        )

    def prod(self, other: Vec3) -> Vec3:
        return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)

    def lerp(self, other: Vec3, t: float) -> Vec3:
        return Vec3(
            self.x + t * (other.x - self.x),
            self.y + t * (other.y - self.y),
            self.z + t * (other.z - self.z),
        )

    def sqmag(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def mag(self) -> float:
        return math.sqrt(self.sqmag())

    def sqdist(self, other: Vec3) -> float:
        return (self - other).sqmag()

    def dist(self, other: Vec3) -> float:
        return (self - other).mag()

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def to_ivec(self) -> IVec3:
        return IVec3(int(self.x), int(self.y), int(self.z))


@dataclass(frozen=True, slots=True)
class Vec4:
    x: float
    y: float
    z: float
    w: float

    @classmethod
    def uni(cls, n: float) -> Vec4:
        return cls(n, n, n, n)

    @classmethod
    def rand(cls) -> Vec4:
        return cls(randf(), randf(), randf(), randf())

    def __add__(self, other: Vec4) -> Vec4:
        return Vec4(self.x + other.x, self.y + other.y, self.z + other.z, self.w + other.w)

    def __sub__(self, other: Vec4) -> Vec4:
        return Vec4(self.x - other.x, self.y - other.y, self.z - other.z, self.w - other.w)

    def __mul__(self, n: float) -> Vec4:
        return Vec4(self.x * n, self.y * n, self.z * n, self.w * n)

    def __truediv__(self, n: float) -> Vec4:
        """Divide by ``n``; dividing by zero gives the zero vector."""
        return self * _inverse(n)

    def norm(self) -> Vec4:
        return self * _inverse(self.mag())

    def prod(self, other: Vec4) -> Vec4:
        return Vec4(self.x * other.x, self.y * other.y, self.z * other.z, self.w * other.w)

    def lerp(self, other: Vec4, t: float) -> Vec4:
        return Vec4(
            self.x + t * (other.x - self.x),
            self.y + t * (other.y - self.y),
            self.z + t * (other.z - self.z),
            self.w + t * (other.w - self.w),
        )

    def sqmag(self) -> float:
        return self.dot(self)

    def mag(self) -> float:
        return math.sqrt(self.sqmag())

    def sqdist(self, other: Vec4) -> float:
        return (self - other).sqmag()

    def dist(self, other: Vec4) -> float:
        return (self - other).mag()

    def dot(self, other: Vec4) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def mult_mat4(self, m: Mat4) -> Vec4:
        """Transform this row vector by ``m``."""
        comps = (self.x, self.y, self.z, self.w)
        x, y, z, w = (sum(c * row[j] for c, row in zip(comps, m.data)) for j in range(4))
        return Vec4(x, y, z, w)

    def to_ivec(self) -> IVec4:
        return IVec4(int(self.x), int(self.y), int(self.z), int(self.w))


Rows = tuple[tuple[float, float, float, float], ...]


def _build(cell: Callable[[int, int], float]) -> Mat4:
    return Mat4(tuple(tuple(cell(i, j) for j in range(4)) for i in range(4)))


@dataclass(frozen=True, slots=True)
class Mat4:
    """A 4x4 matrix stored as four rows of four floats."""

    data: Rows

    def __post_init__(self) -> None:
        rows = tuple(tuple(float(v) for v in row) for row in self.data)
        if len(rows) != 4 or any(len(row) != 4 for row in rows):
            raise ValueError("Mat4 needs exactly 4 rows of 4 values")
        object.__setattr__(self, "data", rows)

    def __getitem__(self, index: int) -> tuple[float, float, float, float]:
        return self.data[index]

    @classmethod
    def identity(cls) -> Mat4:
        return _build(lambda i, j: 1.0 if i == j else 0.0)

    @classmethod
    def zero(cls) -> Mat4:
        return _build(lambda i, j: 0.0)

    def translate(self, p: Vec3) -> Mat4:
        """Replace the translation row with ``p``."""
        rows = list(self.data)
        rows[3] = (p.x, p.y, p.z, rows[3][3])
        return Mat4(tuple(rows))

    def __matmul__(self, other: Mat4) -> Mat4:
        a, b = self.data, other.data
        return _build(lambda i, j: sum(a[k][j] * b[i][k] for k in range(4)))

    def mult_vec4(self, v: Vec4) -> Mat4:
        """Scale each row by the matching component of ``v``."""
        factors = (v.x, v.y, v.z, v.w)
        return Mat4(tuple(tuple(c * f for c in row) for row, f in zip(self.data, factors)))

    def mult_vec3(self, v: Vec3) -> Mat4:
        """Scale the first three rows by ``v``, leaving the last row as it is."""
        return self.mult_vec4(Vec4(v.x, v.y, v.z, 1.0))

    def scale(self, v: Vec3) -> Mat4:
        diag = (v.x, v.y, v.z, 1.0)
        scaling = _build(lambda i, j: diag[i] if i == j else 0.0)
        return scaling @ self

    def rot(self, deg: float, rot_axis: Vec3) -> Mat4:
        """Rotate by the angle ``deg`` (taken in radians) about ``rot_axis``."""
        c = math.cos(deg)
        s = math.sin(deg)
        axis = rot_axis.norm()
        temp = axis * (1.0 - c)
        rot = (
            (c + temp.x * axis.x, temp.x * axis.y + s * axis.z, temp.x * axis.z - s * axis.y),
            (temp.y * axis.x - s * axis.z, c + temp.y * axis.y, temp.y * axis.z + s * axis.x),
            (temp.z * axis.x + s * axis.y, temp.z * axis.y - s * axis.x, c + temp.z * axis.z),
        )
        mat = self.data

        def cell(i: int, j: int) -> float:
            if i == 3:
                return mat[3][j]
            if j == 3:
                return 0.0
            return sum(mat[k][j] * rot[i][k] for k in range(3))

        return _build(cell)

    @classmethod
    def _perspective(cls, fov: float, aspect: float, near: float, far: float, sign: float) -> Mat4:
        tan_half_fov = math.tan(fov / 2.0)
        return cls(
            (
                (1.0 / (aspect * tan_half_fov), 0.0, 0.0, 0.0),
                (0.0, 1.0 / tan_half_fov, 0.0, 0.0),
                (0.0, 0.0, (far + near) / (far - near), 1.0),
                (0.0, 0.0, sign * (2.0 * far * near) / (far - near), 0.0),
            )
        )

    @classmethod
    def perspective_rh(cls, fov: float, aspect: float, near: float, far: float) -> Mat4:
        return cls._perspective(fov, aspect, near, far, 1.0)

    @classmethod
    def perspective_lh(cls, fov: float, aspect: float, near: float, far: float) -> Mat4:
        return cls._perspective(fov, aspect, near, far, -1.0)

    @classmethod
    def look_at_rh(cls, eye_position: Vec3, eye_direction: Vec3, eye_up: Vec3) -> Mat4:
        f = (eye_direction - eye_position).norm()
        s = f.cross(eye_up).norm()
        u = s.cross(f)
        return cls(
            (
                (s.x, u.x, -f.x, 0.0),
                (s.y, u.y, -f.y, 0.0),
                (s.z, u.z, -f.z, 0.0),
                (-s.dot(eye_position), -u.dot(eye_position), f.dot(eye_position), 1.0),
            )
        )

    @classmethod
    def look_at_lh(cls, eye_position: Vec3, eye_direction: Vec3, eye_up: Vec3) -> Mat4:
        f = (eye_direction - eye_position).norm()
        s = eye_up.cross(f).norm()
        u = f.cross(s)
        return cls(
            (
                (s.x, u.x, f.x, 0.0),
                (s.y, u.y, f.y, 0.0),
                (s.z, u.z, f.z, 0.0),
                (-s.dot(eye_position), -u.dot(eye_position), -f.dot(eye_position), 1.0),
            )
        )

    @classmethod
    def ortho(cls, left: float, right: float, bottom: float, top: float) -> Mat4:
        return cls(
            (
                (2.0 / (right - left), 0.0, 0.0, 0.0),
                (0.0, 2.0 / (top - bottom), 0.0, 0.0),
                (0.0, 0.0, -1.0, 0.0),
                (-(right + left) / (right - left), -(top + bottom) / (top - bottom), 0.0, 1.0),
            )
        )

    @classmethod
    def perspective(cls, fov: float, aspect: float, near: float, far: float) -> Mat4:
        return cls.perspective_rh(fov, aspect, near, far)

    @classmethod
    def look_at(cls, eye_position: Vec3, eye_direction: Vec3, eye_up: Vec3) -> Mat4:
        return cls.look_at_rh(eye_position, eye_direction, eye_up)

    @classmethod
    def model(cls, translation: Vec3, scale: Vec3, rot_axis: Vec3, rot_degs: float) -> Mat4:
        return cls.identity().scale(scale).rot(rot_degs, rot_axis).translate(translation)