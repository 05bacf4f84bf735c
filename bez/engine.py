"""A window showing a pixel texture scaled to fit, with keyboard, mouse and time input."""

from __future__ import annotations

import itertools
import time
from enum import IntEnum
from typing import Any

from bez.plot import Px, Texture

MOD_SHIFT = 0x0001
MOD_CONTROL = 0x0002
MOD_ALT = 0x0004
MOD_SUPER = 0x0008
MOD_CAPS_LOCK = 0x0010
MOD_NUM_LOCK = 0x0020

_KEY_CODES: list[tuple[str, int]] = (
    [
        ("SPACE", 32),
        ("APOSTROPHE", 39),
        ("COMMA", 44),
        ("MINUS", 45),
        ("PERIOD", 46),
        ("SLASH", 47),
    ]
    + [(f"NUM_{i}", 48 + i) for i in range(10)]
    + [("SEMICOLON", 59), ("EQUAL", 61)]
    + [(chr(c), c) for c in range(ord("A"), ord("Z") + 1)]
    + [
        ("LEFT_BRACKET", 91),
        ("BACKSLASH", 92),
        ("RIGHT_BRACKET", 93),
        ("GRAVE_ACCENT", 96),
        ("WORLD_1", 161),
        ("WORLD_2", 162),
        ("ESCAPE", 256),
        ("ENTER", 257),
        ("TAB", 258),
        ("BACKSPACE", 259),
        ("INSERT", 260),
        ("DELETE", 261),
        ("RIGHT", 262),
        ("LEFT", 263),
        ("DOWN", 264),
        ("UP", 265),
        ("PAGE_UP", 266),
        ("PAGE_DOWN", 267),
        ("HOME", 268),
        ("END", 269),
        ("CAPS_LOCK", 280),
        ("SCROLL_LOCK", 281),
        ("NUM_LOCK", 282),
        ("PRINT_SCREEN", 283),
        ("PAUSE", 284),
    ]
    + [(f"F{i}", 289 + i) for i in range(1, 26)]
    + [(f"KP_{i}", 320 + i) for i in range(10)]
    + [
        ("KP_DECIMAL", 330),
        ("KP_DIVIDE", 331),
        ("KP_MULTIPLY", 332),
        ("KP_SUBTRACT", 333),
        ("KP_ADD", 334),
        ("KP_ENTER", 335),
        ("KP_EQUAL", 336),
        ("LEFT_SHIFT", 340),
        ("LEFT_CONTROL", 341),
        ("LEFT_ALT", 342),
        ("LEFT_SUPER", 343),
        ("RIGHT_SHIFT", 344),
        ("RIGHT_CONTROL", 345),
        ("RIGHT_ALT", 346),
        ("RIGHT_SUPER", 347),
        ("MENU", 348),
        ("LAST", 348),
    ]
)

Key = IntEnum("Key", _KEY_CODES)
Key.__doc__ = "Keyboard key codes."


class MouseButton(IntEnum):
    """Mouse button numbers."""

    BUTTON_1 = 0
    BUTTON_2 = 1
    BUTTON_3 = 2
    BUTTON_4 = 3
    BUTTON_5 = 4
    BUTTON_6 = 5
    BUTTON_7 = 6
    BUTTON_8 = 7
    LAST = 7
    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


class Action(IntEnum):
    """What happened to a key."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2


def frame_ratio(window_size: tuple[int, int], screen_size: tuple[int, int]) -> tuple[float, float]:
    """Fraction of the window, per axis, that the screen occupies when its aspect is kept."""
    w = window_size[0] / screen_size[0]
    h = window_size[1] / screen_size[1]
    return (h / w if h < w else 1.0, w / h if w < h else 1.0)


def window_to_screen(
    cursor: tuple[float, float], window_size: tuple[int, int], screen_size: tuple[int, int]
) -> tuple[int, int]:
    """Map a window cursor position to screen pixel coordinates, with y pointing up."""
    ratio_w, ratio_h = frame_ratio(window_size, screen_size)
    width, height = float(screen_size[0]), float(screen_size[1])
    half_w, half_h = width * 0.5, height * 0.5
    dx = cursor[0] * (width / window_size[0])
    dy = height - cursor[1] * (height / window_size[1])
    return int((dx - half_w) / ratio_w + half_w), int((dy - half_h) / ratio_h + half_h)


class Input:
    """Keyboard and mouse state fed by window events."""

    def __init__(self) -> None:
        self._keys: dict[int, int] = {}
        self._pressed: dict[int, bool] = {}
        self._buttons: set[int] = set()
        self._mouse_state = False
        self._queued = True
        self._char = 0
        self.cursor: tuple[float, float] = (0.0, 0.0)

    def handle_key(self, key: int, action: int, mod: int) -> None:
        """Record a key event; printable keys also queue a character."""
        if not 0 <= key <= Key.LAST:
            return
        if key < 128 and not self._keys.get(key):
            if mod in (MOD_CAPS_LOCK, MOD_SHIFT) or key < 65:
                self._char = key
            else:
                self._char = key + 32
            self._queued = True
        self._keys[key] = int(action)
        if not action:
            self._pressed[key] = False

    def handle_mouse_button(self, button: int, down: bool) -> None:
        if down:
            self._buttons.add(button)
        else:
            self._buttons.discard(button)

    def handle_cursor(self, x: float, y: float) -> None:
        self.cursor = (float(x), float(y))

    def key_down(self, key: int) -> bool:
        return bool(self._keys.get(key))

    def key_pressed(self, key: int) -> bool:
        """True once for each press of ``key``."""
        if not self._pressed.get(key) and self._keys.get(key):
            self._pressed[key] = True
            return True
        return False

    def key_released(self, key: int) -> bool:
        if not self._keys.get(key) and self._pressed.get(key):
            self._pressed[key] = False
            return True
        return False

    def key_char(self) -> str:
        """Take the queued character, or return an empty string if there is none."""
        if not self._queued:
            return ""
        self._queued = False
        return chr(self._char)

    def mouse_down(self, button: int) -> bool:
        return button in self._buttons

    def mouse_pressed(self, button: int) -> bool:
        """True when ``button`` is down and the last polled button was up."""
        down = self.mouse_down(button)
        pressed = down and not self._mouse_state
        self._mouse_state = down
        return pressed

    def mouse_released(self, button: int) -> bool:
        return not self.mouse_down(button)


def _key_table(pg: Any) -> dict[int, int]:
    table: dict[int, int] = {}
    for code in range(32, 127):
        if ord("a") <= code <= ord("z"):
            table[code] = code - 32
        elif code in Key._value2member_map_:
            table[code] = code
    names = {
        "K_ESCAPE": Key.ESCAPE,
        "K_RETURN": Key.ENTER,
        "K_TAB": Key.TAB,
        "K_BACKSPACE": Key.BACKSPACE,
        "K_INSERT": Key.INSERT,
        "K_DELETE": Key.DELETE,
        "K_RIGHT": Key.RIGHT,
        "K_LEFT": Key.LEFT,
        "K_DOWN": Key.DOWN,
        "K_UP": Key.UP,
        "K_PAGEUP": Key.PAGE_UP,
        "K_PAGEDOWN": Key.PAGE_DOWN,
        "K_HOME": Key.HOME,
        "K_END": Key.END,
        "K_CAPSLOCK": Key.CAPS_LOCK,
        "K_SCROLLLOCK": Key.SCROLL_LOCK,
        "K_NUMLOCK": Key.NUM_LOCK,
        "K_PRINTSCREEN": Key.PRINT_SCREEN,
        "K_PAUSE": Key.PAUSE,
        "K_KP_PERIOD": Key.KP_DECIMAL,
        "K_KP_DIVIDE": Key.KP_DIVIDE,
        "K_KP_MULTIPLY": Key.KP_MULTIPLY,
        "K_KP_MINUS": Key.KP_SUBTRACT,
        "K_KP_PLUS": Key.KP_ADD,
        "K_KP_ENTER": Key.KP_ENTER,
        "K_KP_EQUALS": Key.KP_EQUAL,
        "K_LSHIFT": Key.LEFT_SHIFT,
        "K_LCTRL": Key.LEFT_CONTROL,
        "K_LALT": Key.LEFT_ALT,
        "K_LSUPER": Key.LEFT_SUPER,
        "K_RSHIFT": Key.RIGHT_SHIFT,
        "K_RCTRL": Key.RIGHT_CONTROL,
        "K_RALT": Key.RIGHT_ALT,
        "K_RSUPER": Key.RIGHT_SUPER,
        "K_MENU": Key.MENU,
    }
    names.update({f"K_F{i}": Key[f"F{i}"] for i in range(1, 16)})
    names.update({f"K_KP{i}": Key[f"KP_{i}"] for i in range(10)})
    names.update({f"K_KP_{i}": Key[f"KP_{i}"] for i in range(10)})
    for name, key in names.items():
        code = getattr(pg, name, None)
        if code is not None:
            table[code] = int(key)
    return table


_BUTTONS = {
    1: MouseButton.LEFT,
    2: MouseButton.MIDDLE,
    3: MouseButton.RIGHT,
    6: MouseButton.BUTTON_4,
    7: MouseButton.BUTTON_5,
}


class Engine:
    """A window that displays a screen-sized texture and collects input."""

    def __init__(
        self, title: str, win_width: int, win_height: int, scr_width: int, scr_height: int
    ) -> None:
        if scr_width <= 0 or scr_height <= 0:
            raise ValueError("screen size must be positive")
        import pygame

        self._pg = pygame
        try:
            pygame.init()
            pygame.display.set_mode((win_width, win_height), pygame.RESIZABLE)
        except pygame.error as exc:
            pygame.quit()
            raise RuntimeError(f"could not open window: {exc}") from exc
        pygame.display.set_caption(title)
        self.window_size = (win_width, win_height)
        self.screen_size = (scr_width, scr_height)
        self.texture = Texture(scr_width, scr_height)
        self.input = Input()
        self._keymap = _key_table(pygame)
        self._background = (0, 0, 0)
        self._should_close = False
        self._start = time.perf_counter()

    def time(self) -> float:
        """Seconds since the engine started."""
        return time.perf_counter() - self._start

    def mouse_pos(self) -> tuple[int, int]:
        """Cursor position in screen pixels."""
        return window_to_screen(self.input.cursor, self.window_size, self.screen_size)

    def mouse_visible(self, visible: bool) -> None:
        self._pg.mouse.set_visible(bool(visible))
        self._pg.event.set_grab(not visible)

    def background_color(self, color: Px) -> None:
        self._background = (color.r, color.g, color.b)

    def render(self, texture: Texture) -> None:
        """Draw ``texture`` centred in the window, keeping its aspect ratio."""
        if (texture.width, texture.height) != self.screen_size:
            raise ValueError(
                f"texture is {texture.width}x{texture.height}, "
                f"screen is {self.screen_size[0]}x{self.screen_size[1]}"
            )
        pg = self._pg
        data = bytes(itertools.chain.from_iterable((p.r, p.g, p.b, p.a) for p in texture.pixels))
        image = pg.image.frombuffer(data, self.screen_size, "RGBA")
        image = pg.transform.flip(image, False, True)
        ratio_w, ratio_h = frame_ratio(self.window_size, self.screen_size)
        view = (
            max(1, int(self.window_size[0] * ratio_w)),
            max(1, int(self.window_size[1] * ratio_h)),
        )
        image = pg.transform.scale(image, view)
        origin = ((self.window_size[0] - view[0]) // 2, (self.window_size[1] - view[1]) // 2)
        pg.display.get_surface().blit(image, origin)

    def _mods(self, mod: int) -> int:
        pg = self._pg
        bits = 0
        for mask, bit in (
            (pg.KMOD_SHIFT, MOD_SHIFT),
            (pg.KMOD_CTRL, MOD_CONTROL),
            (pg.KMOD_ALT, MOD_ALT),
            (getattr(pg, "KMOD_GUI", 0), MOD_SUPER),
            (pg.KMOD_CAPS, MOD_CAPS_LOCK),
            (pg.KMOD_NUM, MOD_NUM_LOCK),
        ):
            if mod & mask:
                bits |= bit
        return bits

    def _resize(self, width: int, height: int) -> None:
        size = (max(width, self.screen_size[0]), max(height, self.screen_size[1]))
        if size != (width, height):
            self._pg.display.set_mode(size, self._pg.RESIZABLE)
        self.window_size = size

    def step(self) -> bool:
        """Handle pending events and present the frame; False once the window is closing."""
        pg = self._pg
        for event in pg.event.get():
            if event.type == pg.QUIT:
                self._should_close = True
            elif event.type in (pg.KEYDOWN, pg.KEYUP):
                key = self._keymap.get(event.key)
                if key is not None:
                    action = Action.PRESS if event.type == pg.KEYDOWN else Action.RELEASE
                    self.input.handle_key(key, action, self._mods(event.mod))
            elif event.type in (pg.MOUSEBUTTONDOWN, pg.MOUSEBUTTONUP):
                button = _BUTTONS.get(event.button)
                if button is not None:
                    self.input.handle_mouse_button(button, event.type == pg.MOUSEBUTTONDOWN)
            elif event.type == pg.MOUSEMOTION:
                self.input.handle_cursor(*event.pos)
            elif event.type == pg.VIDEORESIZE:
                self._resize(event.w, event.h)
        pg.display.flip()
        pg.display.get_surface().fill(self._background)
        return not self._should_close

    def run(self, texture: Texture) -> bool:
        """Render ``texture`` and step; False once the window is closing."""
        self.render(texture)
        return self.step()

    def close(self) -> None:
        self._pg.quit()

    def __enter__(self) -> Engine:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()