"""The editor program: a window that switches between the node graph and roto masks."""

from __future__ import annotations

import sys
from typing import Sequence

from bez.engine import Engine, Key
from bez.graph import NodeGraph
from bez.plot import Px, Texture
from bez.roto import Roto
from bez.vmath import IVec2

DEFAULT_SIZE = (400, 300)
WINDOW_SIZE = (800, 600)
BACKGROUND = 155
CURSOR = Px(255, 0, 0)


def _dimension(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise ValueError(f"invalid size: {text!r}") from None
    if value <= 0:
        raise ValueError(f"size must be positive: {text!r}")
    return value


def parse_size(argv: Sequence[str]) -> tuple[int, int]:
    """Screen size from ``[width [height]]``; a lone width is also the height."""
    if not argv:
        return DEFAULT_SIZE
    width = _dimension(argv[0])
    height = _dimension(argv[1]) if len(argv) > 1 else width
    return width, height


def main(argv: Sequence[str] | None = None) -> int:
    """Run the editor; returns the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        width, height = parse_size(args)
    except ValueError as exc:
        print(f"bez: {exc}", file=sys.stderr)
        return 1

    try:
        engine = Engine("nodes", WINDOW_SIZE[0], WINDOW_SIZE[1], width, height)
    except (RuntimeError, ValueError) as exc:
        print(f"bez: could not open window: {exc}", file=sys.stderr)
        return 1

    texture = Texture(width, height)
    roto = Roto()
    graph = NodeGraph()
    node_mode = True

    with engine:
        controls = engine.input
        while engine.run(texture):
            mouse = IVec2(*engine.mouse_pos())
            if controls.key_pressed(Key.ESCAPE):
                break
            if controls.key_pressed(Key.SPACE):
                node_mode = not node_mode

            texture.fill(BACKGROUND)
            if node_mode:
                graph.update(texture, mouse, controls)
            else:
                roto.update(texture, mouse.to_vec(), controls)
            texture.plot(mouse.x, mouse.y, CURSOR)

        graph.clear()
        roto.masks.clear()
    return 0