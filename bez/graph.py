"""A node editor: boxes that are dragged, linked and deleted with the mouse and keyboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from bez.engine import Key, MouseButton
from bez.plot import Px, Texture, plot_bezier3, plot_circle_smooth, plot_rect_round
from bez.vmath import IVec2

RADIUS = 4.0
ROUNDNESS = 0.5
SPLINE_BEND = 40.0
NODE_HALF_SIZE = IVec2(60, 20)

RED = Px(255, 0, 0)
BLUE = Px(0, 0, 255)
ORANGE = Px(255, 155, 0)


class _Controls(Protocol):
    def key_pressed(self, key: int) -> bool: ...

    def mouse_pressed(self, button: int) -> bool: ...

    def mouse_down(self, button: int) -> bool: ...


def _shift(color: Px, dr: int, dg: int) -> Px:
    return Px((color.r + dr) & 0xFF, (color.g + dg) & 0xFF, color.b, color.a)


def _circle_contains(p: IVec2, q: IVec2, sqr: float) -> bool:
    dx, dy = p.x - q.x, p.y - q.y
    return dx * dx + dy * dy <= sqr


def _discard(nodes: list[Node], node: Node) -> None:
    for i, other in enumerate(nodes):
        if other is node:
            del nodes[i]
            return


def _plot_spline(texture: Texture, p: IVec2, q: IVec2, color: Px) -> None:
    start, end = p.to_vec(), q.to_vec()
    pull = type(start)(start.x, start.y - SPLINE_BEND)
    push = type(end)(end.x, end.y + SPLINE_BEND)
    plot_bezier3(texture, start, pull, push, end, color)


@dataclass
class Rect:
    """A rectangle given by its centre ``p`` and half extents ``q``."""

    p: IVec2
    q: IVec2

    def contains(self, p: IVec2) -> bool:
        """True when ``p`` lies strictly inside the rectangle."""
        return (
            self.p.x - self.q.x < p.x < self.p.x + self.q.x
            and self.p.y - self.q.y < p.y < self.p.y + self.q.y
        )


@dataclass(eq=False)
class Node:
    """A box in the graph with links to the nodes feeding it and the nodes it feeds."""

    rect: Rect
    inputs: list[Node] = field(default_factory=list)
    outputs: list[Node] = field(default_factory=list)
    selected: bool = False
    hover: bool = False
    outhover: bool = False
    held: bool = False
    outheld: bool = False

    def inpos(self) -> IVec2:
        """Position of the input port, on the top edge."""
        return IVec2(self.rect.p.x, self.rect.p.y + self.rect.q.y)

    def outpos(self) -> IVec2:
        """Position of the output port, on the bottom edge."""
        return IVec2(self.rect.p.x, self.rect.p.y - self.rect.q.y)

    def connect(self, output: Node) -> None:
        """Link this node's output to ``output``."""
        self.outputs.append(output)
        output.inputs.append(self)

    def detach(self) -> None:
        """Remove every link to and from this node."""
        for node in self.inputs:
            _discard(node.outputs, self)
        for node in self.outputs:
            _discard(node.inputs, self)
        self.inputs.clear()
        self.outputs.clear()


class NodeGraph:
    """The set of nodes being edited."""

    def __init__(self) -> None:
        self.nodes: list[Node] = []
        self._last_mouse = IVec2(0, 0)

    def push(self, p: IVec2) -> Node:
        """Add a node centred on ``p``."""
        node = Node(Rect(p, NODE_HALF_SIZE))
        self.nodes.append(node)
        return node

    def remove(self, node: Node) -> None:
        node.detach()
        self.nodes.remove(node)

    def pop(self) -> Node | None:
        """Remove and return the newest node, or None when the graph is empty."""
        if not self.nodes:
            return None
        node = self.nodes.pop()
        node.detach()
        return node

    def clear(self) -> None:
        for node in self.nodes:
            node.detach()
        self.nodes.clear()

    def _update_node(
        self,
        node: Node,
        mouse: IVec2,
        dif: IVec2,
        pressed: bool,
        down: bool,
        controls: _Controls,
    ) -> bool:
        node.outhover = _circle_contains(node.outpos(), mouse, RADIUS * RADIUS)
        node.hover = node.rect.contains(mouse)

        if node.outhover and pressed:
            node.outheld = True
        elif node.hover and pressed:
            node.selected = True
            node.held = True
        elif pressed:
            node.selected = False

        released = False
        if not down:
            released = node.outheld
            node.outheld = False
            node.held = False

        if node.held:
            node.rect.p = IVec2(node.rect.p.x + dif.x, node.rect.p.y + dif.y)
            if controls.key_pressed(Key.BACKSPACE):
                self.remove(node)
        return released

    def _plot_node(self, node: Node, texture: Texture, mouse: IVec2) -> None:
        out = node.outpos()
        color = ORANGE if node.selected else RED
        if node.hover:
            color = _shift(color, -100, 0)
        outcolor = _shift(BLUE, 100, 100) if node.outhover else BLUE

        plot_rect_round(texture, node.rect.p, node.rect.q, ROUNDNESS, color)
        plot_circle_smooth(texture, out, RADIUS, outcolor)
        if node.inputs:
            plot_circle_smooth(texture, node.inpos(), RADIUS, outcolor)
        if node.outheld:
            plot_circle_smooth(texture, mouse, RADIUS, outcolor)
            _plot_spline(texture, out, mouse, outcolor)
        for target in node.outputs:
            _plot_spline(texture, out, target.inpos(), outcolor)

    def plot(self, texture: Texture, mouse: IVec2) -> None:
        """Draw every node and its links."""
        for node in self.nodes:
            self._plot_node(node, texture, mouse)

    def update(self, texture: Texture, mouse: IVec2, controls: _Controls) -> None:
        """Apply one frame of input to the graph and draw it."""
        dif = IVec2(mouse.x - self._last_mouse.x, mouse.y - self._last_mouse.y)
        pressed = controls.mouse_pressed(MouseButton.LEFT)
        down = controls.mouse_down(MouseButton.LEFT)
        hover: Node | None = None
        released: Node | None = None

        for node in list(self.nodes):
            was_released = self._update_node(node, mouse, dif, pressed, down, controls)
            if node not in self.nodes:
                continue
            if was_released and released is None:
                released = node
            elif hover is None and node.hover:
                hover = node
            self._plot_node(node, texture, mouse)

        self._last_mouse = mouse
        if hover is not None and released is not None and hover not in released.outputs:
            released.connect(hover)

        if controls.key_pressed(Key.Z):
            self.push(mouse)
        elif controls.key_pressed(Key.X):
            self.pop()