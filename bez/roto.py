"""Rotoscoping masks made of cubic spline points that are edited with the mouse."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import pairwise
from typing import Iterator, Protocol

from bez.engine import Key, MouseButton
from bez.plot import Px, Texture, plot_bezier3, plot_line_smooth
from bez.vmath import Vec2

RED = Px(255, 0, 0)
GREEN = Px(0, 255, 0)
BLUE = Px(0, 0, 255)

_FIELDS = ("p", "c0", "c1")
_FAR = 9999999.9


class _Controls(Protocol):
    def key_down(self, key: int) -> bool: ...

    def key_pressed(self, key: int) -> bool: ...

    def mouse_pressed(self, button: int) -> bool: ...

    def mouse_down(self, button: int) -> bool: ...


@dataclass
class Spline:
    """An anchor point ``p`` with its incoming and outgoing handles."""

    p: Vec2
    c0: Vec2
    c1: Vec2


@dataclass(eq=False)
class Mask:
    """A chain of spline points, optionally closed into a loop."""

    splines: list[Spline] = field(default_factory=list)
    isclosed: bool = False


def _points(mask: Mask) -> Iterator[Vec2]:
    for spline in mask.splines:
        yield spline.p
        yield spline.c0
        yield spline.c1


def _get(mask: Mask, index: int) -> Vec2:
    return getattr(mask.splines[index // 3], _FIELDS[index % 3])


def _set(mask: Mask, index: int, value: Vec2) -> None:
    setattr(mask.splines[index // 3], _FIELDS[index % 3], value)


@dataclass
class Roto:
    """Editor state: the masks and the currently selected point.

    ``selected_point`` is one more than the index of the selected point
    among the mask's points (anchor, handle, handle, ...); 0 means none.
    """

    masks: list[Mask] = field(default_factory=list)
    selected_point: int = 0
    selected_mask: int = 0
    justcreated: bool = False
    overlay: bool = True
    isactive: bool = True

    def reset(self) -> None:
        """Drop every mask and start over with one empty mask."""
        self.masks = [Mask()]

    def push_mask(self) -> Mask:
        mask = Mask()
        self.masks.append(mask)
        return mask

    def push_spline(self, p: Vec2) -> Spline:
        """Append a point at ``p`` to the open mask, starting a new mask if needed."""
        mask = self.masks[-1] if self.masks else None
        if mask is None or mask.isclosed:
            mask = self.push_mask()
        spline = Spline(p, p, p)
        mask.splines.append(spline)
        self.selected_mask = len(self.masks) - 1
        self.selected_point = (len(mask.splines) - 1) * 3 + 1
        self.justcreated = True
        return spline

    def push_spline_nearest(self, p: Vec2) -> Spline:
        """Insert a point at ``p`` between the pair of neighbouring points closest to it."""
        best = _FAR
        found: tuple[int, int] | None = None
        for n, mask in enumerate(self.masks):
            splines = mask.splines
            count = len(splines)
            span = count if mask.isclosed else count - 1
            for i in range(max(span, 0)):
                j = (i + 1) % count
                d = (splines[i].p - p).sqmag() + (splines[j].p - p).sqmag()
                if d < best:
                    best = d
                    found = (n, i)
        if found is None:
            return self.push_spline(p)

        n, i = found
        splines = self.masks[n].splines
        at = (i + 1) % len(splines)
        self.selected_mask = n
        self.selected_point = at * 3 + 1
        self.justcreated = True
        spline = Spline(p, p, p)
        splines.insert(at, spline)
        return spline

    def select(self, m: Vec2) -> None:
        """Select the first point lying exactly at ``m`` unless a point is already selected."""
        for n, mask in enumerate(self.masks):
            if self.selected_point:
                break
            for i, point in enumerate(_points(mask)):
                if point.x == m.x and point.y == m.y:
                    self.selected_point = i + 1
                    self.selected_mask = n
                    break

    def handle_input(self, mouse: Vec2, controls: _Controls) -> None:
        """React to the editing keys and to the mouse button state."""
        if controls.key_pressed(Key.R):
            self.reset()
        if controls.key_pressed(Key.Q):
            self.overlay = not self.overlay
        if controls.key_pressed(Key.BACKSPACE) and self.masks and self.masks[-1].splines:
            self.masks[-1].splines.pop()
        if controls.key_pressed(Key.X):
            if self.masks:
                mask = self.masks.pop()
                if not mask.splines and len(self.masks) > 1:
                    self.masks.pop()
            if not self.masks:
                self.push_mask()

        if controls.mouse_down(MouseButton.LEFT):
            self.select(mouse)
        else:
            self.selected_point = 0
            self.justcreated = False

    def _drag(self, mask: Mask, m: Vec2, cntrl: bool, controls: _Controls) -> None:
        index = self.selected_point - 1
        if index % 3 == 0 and not self.justcreated and controls.key_down(Key.Z):
            index += 1

        if self.justcreated:
            anchor = _get(mask, index)
            d = m - anchor
            _set(mask, index + 1, anchor - d)
            _set(mask, index + 2, m)
        elif index % 3 == 0:
            d = m - _get(mask, index)
            _set(mask, index, m)
            _set(mask, index + 1, _get(mask, index + 1) + d)
            _set(mask, index + 2, _get(mask, index + 2) + d)
            if controls.key_pressed(Key.C):
                del mask.splines[index // 3]
                self.selected_point = 0
        elif cntrl:
            _set(mask, index, m)
        else:
            couple = -1 if (index + 1) % 3 == 0 else 1
            anchor = index - 1 if couple == 1 else index - 2
            if controls.key_pressed(Key.C):
                _set(mask, index, _get(mask, anchor))
                self.selected_point = 0
            else:
                d = _get(mask, index) - _get(mask, anchor)
                _set(mask, index, m)
                _set(mask, index + couple, _get(mask, anchor) - d)

    def edit(self, mouse: Vec2, controls: _Controls) -> None:
        """Close, drag or create points according to the current selection."""
        cntrl = controls.key_down(Key.LEFT_CONTROL)
        pressed = controls.mouse_pressed(MouseButton.LEFT)
        mask = self.masks[self.selected_mask] if self.selected_mask < len(self.masks) else None
        if mask is not None and self.selected_point > 3 * len(mask.splines):
            self.selected_point = 0

        if (
            mask is not None
            and not mask.isclosed
            and len(mask.splines) > 1
            and self.selected_point == 1
        ):
            mask.isclosed = True
            self.selected_point = 0
        elif mask is not None and mask.splines and self.selected_point:
            self._drag(mask, mouse, cntrl, controls)
        elif pressed:
            if cntrl:
                self.push_spline_nearest(mouse)
            else:
                self.push_spline(mouse)

    def plot(self, texture: Texture) -> None:
        """Draw the curves of every mask."""
        for mask in self.masks:
            splines = mask.splines
            if mask.isclosed and splines:
                last, first = splines[-1], splines[0]
                plot_bezier3(texture, last.p, last.c1, first.c0, first.p, BLUE)
            for a, b in pairwise(splines):
                plot_bezier3(texture, a.p, a.c1, b.c0, b.p, BLUE)

    def plot_overlay(self, texture: Texture) -> None:
        """Draw the handles and points of every spline."""
        for mask in self.masks:
            for spline in mask.splines:
                plot_line_smooth(texture, spline.p, spline.c0, RED)
                plot_line_smooth(texture, spline.p, spline.c1, RED)
                for point in (spline.p, spline.c0, spline.c1):
                    texture.plot(int(point.x), int(point.y), GREEN)

    def update(self, texture: Texture, mouse: Vec2, controls: _Controls) -> None:
        """Apply one frame of input and draw the masks while the editor is active."""
        if controls.key_pressed(Key.D):
            self.isactive = not self.isactive
        if self.isactive:
            self.handle_input(mouse, controls)
            self.edit(mouse, controls)
            self.plot(texture)
            if self.overlay:
                self.plot_overlay(texture)