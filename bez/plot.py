"""Pixel plotting: colours, a pixel texture and rasterisers for lines, curves and shapes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence, TypeVar

from bez.vmath import IVec2, Vec2, clampf

SUBSAMPLES = 2

_T = TypeVar("_T")

# Sample offsets (in half pixels) used for triangle anti-aliasing.
_SAMPLES: tuple[tuple[float, float], ...] = (
    (0.0, 0.0),
    (1.0, 0.0),
    (0.0, -1.0),
    (-1.0, 0.0),
    (0.0, 1.0),
    (1.0, 1.0),
    (1.0, -1.0),
    (-1.0, -1.0),
    (-1.0, 1.0),
)


def _mix8(a: int, b: int, t: float) -> int:
    return int(a + t * (b - a)) & 0xFF


@dataclass(frozen=True, slots=True)
class Px:
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        if any(not 0 <= c <= 255 for c in (self.r, self.g, self.b, self.a)):
            raise ValueError(f"channel out of range 0..255 in {self!r}")

    def lerp(self, other: Px, t: float) -> Px:
        """Interpolate every channel towards ``other`` by ``t``."""
        return Px(
            _mix8(self.r, other.r, t),
            _mix8(self.g, other.g, t),
            _mix8(self.b, other.b, t),
            _mix8(self.a, other.a, t),
        )


_BLANK = Px(0, 0, 0, 0)


@dataclass(frozen=True, slots=True)
class Vert2D:
    """A 2D vertex with a texture coordinate."""

    pos: Vec2
    uv: Vec2


@dataclass(eq=False)
class Texture:
    """A row-major grid of pixels, indexed as ``texture[x, y]``."""

    width: int
    height: int
    pixels: list[Px] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("texture dimensions must not be negative")
        size = self.width * self.height
        if not self.pixels:
            self.pixels = [_BLANK] * size
        elif len(self.pixels) != size:
            raise ValueError(f"expected {size} pixels, got {len(self.pixels)}")

    def _offset(self, pos: tuple[int, int]) -> int:
        x, y = pos
        if not self.inside(x, y):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} texture")
        return y * self.width + x

    def __getitem__(self, pos: tuple[int, int]) -> Px:
        return self.pixels[self._offset(pos)]

    def __setitem__(self, pos: tuple[int, int], color: Px) -> None:
        self.pixels[self._offset(pos)] = color

    def inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def fill(self, value: Px | int) -> None:
        """Fill with a colour, or with a byte value written to every channel."""
        color = value if isinstance(value, Px) else Px(value, value, value, value)
        self.pixels[:] = [color] * len(self.pixels)

    def plot(self, x: int, y: int, color: Px) -> None:
        """Set a pixel; coordinates outside the texture are ignored."""
        if self.inside(x, y):
            self.pixels[y * self.width + x] = color

    def blend(self, x: int, y: int, t: float, color: Px) -> None:
        """Blend a pixel towards ``color`` by ``t``; outside coordinates are ignored."""
        if self.inside(x, y):
            i = y * self.width + x
            self.pixels[i] = self.pixels[i].lerp(color, t)

    def mix(self, x: int, y: int, color: Px) -> None:
        """Blend an opaque version of ``color`` using its alpha as the weight."""
        t = color.a / 255.0
        self.blend(x, y, t, Px(color.r, color.g, color.b, 255))


def _sort3(items: Iterable[_T], key: Callable[[_T], tuple[float, float]]) -> list[_T]:
    t = list(items)
    for i, j in ((0, 2), (0, 1), (1, 2)):
        if key(t[j]) < key(t[i]):
            t[i], t[j] = t[j], t[i]
    return t


def _determinant(a: Vec2, b: Vec2, cx: float, cy: float) -> float:
    return (cx - a.x) * (b.y - a.y) - (cy - a.y) * (b.x - a.x)


def _coverage(p0: Vec2, p1: Vec2, p2: Vec2, x: int, y: int) -> float:
    hits = 0
    for ox, oy in _SAMPLES:
        qx = x + 0.5 * ox
        qy = y + 0.5 * oy
        if (
            _determinant(p1, p2, qx, qy) >= 0.0
            and _determinant(p2, p0, qx, qy) >= 0.0
            and _determinant(p0, p1, qx, qy) >= 0.0
        ):
            hits += 1
    return hits / len(_SAMPLES)


def _step(span: float) -> float:
    return 1.0 / span if span else 0.0


def _clamp_index(n: float, hi: int) -> int:
    return int(clampf(n, 0, hi))


def plot_line(texture: Texture, p: IVec2, q: IVec2, color: Px) -> None:
    """Draw a one-pixel line between two integer points."""
    x, y = p.x, p.y
    dx = q.x - x
    dy = q.y - y
    sx = 1 if dx >= 0 else -1
    sy = 1 if dy >= 0 else -1
    dx = abs(dx)
    dy = -abs(dy)
    error = dx + dy
    while x != q.x or y != q.y:
        e2 = error * 2
        texture.plot(x, y, color)
        if e2 >= dy:
            error += dy
            x += sx
        if e2 <= dx:
            error += dx
            y += sy
    texture.plot(x, y, color)


def plot_line_smooth(texture: Texture, p: Vec2, q: Vec2, color: Px) -> None:
    """Draw an anti-aliased line between two points."""
    px, py, qx, qy = p.x, p.y, q.x, q.y
    steep = abs(qy - py) > abs(qx - px)
    if steep:
        px, py = py, px
        qx, qy = qy, qx
    if px > qx:
        px, qx = qx, px
        py, qy = qy, py

    dx = qx - px
    dy = qy - py
    g = dy / dx if dx != 0.0 else 1.0

    def put(x: int, y: int, t: float) -> None:
        if steep:
            texture.blend(y, x, t, color)
        else:
            texture.blend(x, y, t, color)

    xend = math.floor(px)
    yend = py + g * (xend - px)
    xgap = 1.0 - ((px + 0.5) - math.floor(px + 0.5))
    xpos1 = xend
    ypos1 = math.floor(yend)
    fpart = yend - ypos1
    put(xpos1, ypos1, (1.0 - fpart) * xgap)
    put(xpos1, ypos1 + 1, fpart * xgap)

    intery = yend + g
    xend = math.floor(qx)
    yend = qy + g * (xend - qx)
    xgap = 1.0 - ((qx + 0.5) - math.floor(qx + 0.5))
    xpos2 = xend
    ypos2 = math.floor(yend)
    fpart = yend - ypos2
    put(xpos2, ypos2, (1.0 - fpart) * xgap)
    put(xpos2, ypos2 + 1, fpart * xgap)

    for x in range(xpos1 + 1, xpos2):
        y = math.floor(intery)
        fpart = intery - y
        put(x, y, 1.0 - fpart)
        put(x, y + 1, fpart)
        intery += g


def _quadratic(a: Vec2, b: Vec2, c: Vec2, t: float) -> Vec2:
    return a.lerp(c, t).lerp(c.lerp(b, t), t)


def plot_bezier2(texture: Texture, a: Vec2, b: Vec2, c: Vec2, color: Px) -> None:
    """Plot a quadratic curve from ``a`` to ``b`` with control point ``c``."""
    dxy = abs(b.x - a.x) + abs(b.y - a.y)
    delta = 1.0 / dxy if dxy != 0.0 else 1.0
    t = 0.0
    while t < 1.0:
        p = _quadratic(a, b, c, t)
        texture.plot(int(p.x), int(p.y), color)
        t += delta


def plot_bezier2_smooth(texture: Texture, a: Vec2, b: Vec2, c: Vec2, color: Px) -> None:
    """Draw an anti-aliased quadratic curve from ``a`` to ``b`` with control point ``c``."""
    dxy = max(abs(b.x - a.x), abs(b.y - a.y))
    delta = 1.0 / dxy if dxy != 0.0 else 1.0
    p = a
    t = delta
    while t < 1.0:
        q = _quadratic(a, b, c, t)
        plot_line_smooth(texture, p, q, color)
        p = q
        t += delta
    plot_line_smooth(texture, p, b, color)


def _floor(p: Vec2) -> Vec2:
    return Vec2(float(math.floor(p.x)), float(math.floor(p.y)))


def plot_bezier3(texture: Texture, a: Vec2, b: Vec2, c: Vec2, d: Vec2, color: Px) -> None:
    """Draw a cubic curve from ``a`` to ``d`` with control points ``b`` and ``c``."""
    dxy = abs(d.x - a.x) + abs(d.y - a.y)
    delta = 4.0 / dxy if dxy != 0.0 else 1.0
    p = a
    t = delta
    while t < 1.0:
        u = 1.0 - t
        uu = u * u
        tt = t * t
        uuu = uu * u
        ttt = tt * t
        uut = 3.0 * uu * t
        utt = 3.0 * u * tt
        q = Vec2(
            uuu * a.x + uut * b.x + utt * c.x + ttt * d.x,
            uuu * a.y + uut * b.y + utt * c.y + ttt * d.y,
        )
        plot_line_smooth(texture, _floor(p), _floor(q), color)
        p = q
        t += delta
    plot_line_smooth(texture, p, d, color)


def plot_rect(texture: Texture, p: IVec2, q: IVec2, color: Px) -> None:
    """Fill the rectangle centred on ``p`` with half extents ``q``, clipped to the texture."""
    resx, resy = texture.width - 1, texture.height - 1
    starty = _clamp_index(p.y - q.y, resy)
    endy = _clamp_index(p.y + q.y, resy)
    startx = _clamp_index(p.x - q.x, resx)
    endx = _clamp_index(p.x + q.x, resx)
    for y in range(starty, endy + 1):
        for x in range(startx, endx + 1):
            texture[x, y] = color


def plot_rect_round(texture: Texture, p: IVec2, q: IVec2, t: float, color: Px) -> None:
    """Fill a rectangle with corners rounded by ``t`` (0 square, 1 fully round)."""
    shortest = float(min(q.x, q.y))
    r = math.floor(shortest * clampf(t, 0.0, 1.0))
    d = math.ceil((q.y - r) + r * 0.5)
    radius = int(r)

    half_x, half_y = q.x, q.y - radius
    band = IVec2(q.x - radius, int(radius / 2))
    plot_rect(texture, p, IVec2(half_x, half_y), color)
    plot_rect(texture, IVec2(p.x, p.y + d), band, color)
    plot_rect(texture, IVec2(p.x, p.y - d), band, color)

    half_x -= radius
    corners = (
        IVec2(p.x - half_x - 1, p.y + half_y),
        IVec2(p.x - half_x - 1, p.y - half_y - 1),
        IVec2(p.x + half_x, p.y - half_y - 1),
        IVec2(p.x + half_x, p.y + half_y),
    )
    for corner in corners:
        plot_circle_smooth(texture, corner, radius, color)


def plot_tri(texture: Texture, p0: IVec2, p1: IVec2, p2: IVec2, color: Px) -> None:
    """Fill a triangle given by three integer points."""
    resx, resy = texture.width - 1, texture.height - 1
    t = _sort3((p0, p1, p2), key=lambda v: (v.y, v.x))

    starty = max(t[0].y, 0)
    endy = min(t[2].y, resy)
    difx = (t[2].x - t[0].x, t[1].x - t[0].x, t[2].x - t[1].x)
    steps = (
        _step(t[2].y - t[0].y),
        _step(t[1].y - t[0].y),
        _step(t[2].y - t[1].y),
    )

    n = 1
    for y in range(starty, endy + 1):
        if n == 1 and y >= t[1].y:
            n = 2
        dx = steps[0] * (y - t[0].y) if steps[0] != 0.0 else 1.0
        dy = steps[n] * (y - t[n - 1].y) if steps[n] != 0.0 else 1.0
        x0 = t[0].x + difx[0] * dx
        x1 = t[n - 1].x + difx[n] * dy
        if x1 < x0:
            x0, x1 = x1, float(int(x0))
        startx = int(x0 if x0 > 0 else 0)
        endx = int(x1 if x1 < resx else resx)
        for x in range(startx, endx + 1):
            texture[x, y] = color


def _edge_spans(t: Sequence[Vec2]) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
    difx = (t[2].x - t[0].x, t[1].x - t[0].x, t[2].x - t[1].x)
    steps = (
        _step(t[2].y - t[0].y),
        _step(t[1].y - t[0].y),
        _step(t[2].y - t[1].y),
    )
    return difx, steps


def plot_tri_smooth(texture: Texture, p0: Vec2, p1: Vec2, p2: Vec2, color: Px) -> None:
    """Fill an anti-aliased triangle; only counter-clockwise (on screen) triangles are drawn."""
    resx, resy = texture.width - 1, texture.height - 1
    t = _sort3((p0, p1, p2), key=lambda v: (v.y, v.x))

    starty = int(t[0].y if t[0].y > 0 else 0)
    endy = int(t[2].y if t[2].y < resy else resy)
    difx, steps = _edge_spans(t)

    n = 1
    for y in range(starty, endy + 1):
        if n == 1 and y >= t[1].y:
            n = 2
        d0 = steps[0] * (y - t[0].y) if steps[0] != 0.0 else 1.0
        d1 = steps[n] * (y - t[n - 1].y) if steps[n] != 0.0 else 1.0
        x0 = t[0].x + difx[0] * max(d0, 0.0)
        x1 = t[n - 1].x + difx[n] * max(d1, 0.0)
        if x1 < x0:
            x0, x1 = x1, x0
        startx = int(x0 if x0 > 0 else 0)
        endx = int(x1 + 1 if x1 + 1 < resx else resx)
        for x in range(startx, endx):
            weight = _coverage(p0, p1, p2, x, y)
            texture[x, y] = texture[x, y].lerp(color, weight)


def tex_map(texture: Texture, uv: Vec2) -> Px:
    """Sample ``texture`` at ``uv``; only the fractional part of each coordinate counts."""
    if not texture.width or not texture.height:
        raise IndexError("cannot sample an empty texture")
    u = uv.x - int(uv.x)
    v = uv.y - int(uv.y)
    x = int(texture.width * u) % texture.width
    y = int(texture.height * v) % texture.height
    return texture[x, y]


def _normalize(lo: float, hi: float, n: float) -> float:
    n -= lo
    return 0.0 if n == 0.0 else (hi - lo) / n


def map_tri_2d(fb: Texture, texture: Texture, p0: Vert2D, p1: Vert2D, p2: Vert2D) -> None:
    """Draw an anti-aliased triangle into ``fb`` sampling colours from ``texture``."""
    resx, resy = fb.width - 1, fb.height - 1
    t = _sort3((p0, p1, p2), key=lambda v: (v.pos.y, v.pos.x))
    pos = [v.pos for v in t]

    starty = int(pos[0].y if pos[0].y > 0 else 0)
    endy = int(pos[2].y if pos[2].y < resy else resy)
    difx, steps = _edge_spans(pos)
    difuv = (t[2].uv - t[0].uv, t[1].uv - t[0].uv, t[2].uv - t[1].uv)

    n = 1
    for y in range(starty, endy + 1):
        if n == 1 and y >= pos[1].y:
            n = 2
        d0 = max(steps[0] * (y - pos[0].y) if steps[0] != 0.0 else 1.0, 0.0)
        d1 = max(steps[n] * (y - pos[n - 1].y) if steps[n] != 0.0 else 1.0, 0.0)
        x0 = pos[0].x + difx[0] * d0
        x1 = pos[n - 1].x + difx[n] * d1
        uv0 = t[0].uv + difuv[0] * d0
        uv1 = t[n - 1].uv + difuv[n] * d1
        if x1 < x0:
            x0, x1 = x1, x0
            uv0, uv1 = uv1, uv0
        startx = int(x0 if x0 > 0 else 0)
        endx = int(x1 + 1 if x1 + 1 < resx else resx)
        for x in range(startx, endx):
            uv = uv0.lerp(uv1, _normalize(x0, x1, float(x)))
            weight = _coverage(p0.pos, p1.pos, p2.pos, x, y)
            fb.blend(x, y, weight, tex_map(texture, uv))


def plot_circle(texture: Texture, p: IVec2, r: float, color: Px) -> None:
    """Fill a circle of radius ``r`` around ``p``."""
    sqr = r * r
    resx, resy = texture.width - 1, texture.height - 1
    startx = _clamp_index(p.x - r, resx)
    starty = _clamp_index(p.y - r, resy)
    endx = _clamp_index(p.x + r + 1.0, resx)
    endy = _clamp_index(p.y + r + 1.0, resy)
    for y in range(starty, endy + 1):
        dy = p.y - y + 0.5
        dy *= dy
        for x in range(startx + 1, endx + 1):
            dx = p.x - x + 0.5
            if dx * dx + dy <= sqr:
                texture[x, y] = color


def plot_circle_smooth(texture: Texture, p: IVec2, r: float, color: Px) -> None:
    """Fill an anti-aliased circle of radius ``r`` around ``p`` using supersampling."""
    sqr = r * r
    subscale = 1.0 / SUBSAMPLES
    total = SUBSAMPLES * SUBSAMPLES
    resx, resy = texture.width - 1, texture.height - 1
    startx = _clamp_index(p.x - r - 1.0, resx)
    starty = _clamp_index(p.y - r - 1.0, resy)
    endx = _clamp_index(p.x + r + 1.0, resx)
    endy = _clamp_index(p.y + r + 1.0, resy)
    for y in range(starty, endy + 1):
        dy = p.y - y + 0.5
        for x in range(startx + 1, endx + 1):
            dx = p.x - x + 0.5
            count = sum(
                (dx + sx * subscale) ** 2 + (dy + sy * subscale) ** 2 <= sqr
                for sy in range(SUBSAMPLES)
                for sx in range(SUBSAMPLES)
            )
            texture.blend(x, y, count / total, color)