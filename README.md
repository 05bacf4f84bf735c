# bez

A tiny pixel-perfect editor for bezier rotoscoping masks and node graphs.
Everything is drawn by a software rasterizer into a low-resolution pixel
canvas, which is then scaled up into a pygame window with its aspect ratio
kept.

## Install

```
pip install .
```

The window needs `pygame`; the math, drawing and editor-state modules do
not open a window and can be used without one.

## Running

```
bez [WIDTH [HEIGHT]]
```

`WIDTH` and `HEIGHT` set the size of the pixel canvas (default 400 x 300).
If only `WIDTH` is given, the canvas is square. Sizes must be positive
whole numbers; otherwise `bez` prints an error and exits with status 1.
The window opens at 800 x 600 and can be resized, but not below the canvas
size. Canvas coordinates start at the bottom-left corner, with y pointing up.
The pixel under the cursor is drawn red.

## Controls

Global:

- `Space` switches between the node graph (shown first) and the
  rotoscoping editor.
- `Escape` quits.

Node graph:

- `Z` adds a node centred under the cursor, `X` removes the newest node.
- Drag a node to move it; `Backspace` while dragging deletes it.
- Drag from a node's output socket (bottom edge) and release over another
  node to connect them.

Rotoscoping:

- `D` toggles the editor on and off.
- Click to add a point to the current mask; keep the button down and drag
  to pull out its handles. A new mask is started when the last one is
  closed.
- Points are picked by clicking exactly on their pixel. Clicking the first
  point of an open mask with at least two points closes it.
- `Ctrl` + click inserts a point between the pair of neighbouring points
  nearest the cursor; `Ctrl` + drag on a handle moves that handle alone.
- Drag a point to move it together with its handles; hold `Z` to drag its
  first handle instead. Dragging a handle mirrors the opposite handle.
- `C` while dragging a point deletes it; while dragging a handle it
  collapses the handle onto its point.
- `Backspace` removes the last point of the last mask, `X` removes the last
  mask, `R` clears everything, `Q` toggles the handle overlay.

## Library use

```python
from bez.plot import Px, Texture, plot_bezier3, plot_circle_smooth
from bez.vmath import Vec2, IVec2

tex = Texture(64, 64)
tex.fill(155)
plot_bezier3(tex, Vec2(2, 2), Vec2(60, 2), Vec2(2, 60), Vec2(60, 60),
             Px(0, 0, 255, 255))
plot_circle_smooth(tex, IVec2(32, 32), 6.0, Px(255, 0, 0, 255))
print(tex[32, 32])
```

- `bez.vmath`: `Vec2`, `Vec3`, `Vec4`, their integer forms `IVec2`,
  `IVec3`, `IVec4`, the 4x4 matrix `Mat4` (identity, translate, scale,
  rotate, perspective, look-at, orthographic), and scalar helpers such as
  `clampf`, `lerpf`, `ilerpf`, `smoothlerpf` and `remapf`.
- `bez.plot`: the `Px` colour, the `Texture` pixel grid (indexed as
  `texture[x, y]`, with `plot`, `blend`, `mix` and `fill`), and rasterizers:
  `plot_line`, `plot_line_smooth`, `plot_bezier2`, `plot_bezier2_smooth`,
  `plot_bezier3`, `plot_rect`, `plot_rect_round`, `plot_tri`,
  `plot_tri_smooth`, `map_tri_2d`, `plot_circle` and `plot_circle_smooth`.
- `bez.engine`: `Engine`, the window that shows a texture; `Input`, the
  keyboard and mouse state it fills from events; the `Key`, `MouseButton`
  and `Action` codes; and `window_to_screen` for mapping cursor positions.
- `bez.graph.NodeGraph` and `bez.roto.Roto` hold the editor state. Their
  `update` methods take any object with `key_pressed`, `key_down`,
  `mouse_pressed` and `mouse_down` methods, so they can be driven by an
  `Input` without opening a window.
- `bez.app.main` runs the `bez` command.

## What it does not do

Masks and graphs live only in memory: there is no saving, loading or
exporting of them, and nodes carry no data or computation beyond their
position and links.