"""Per-frame UI input state, key codes, clipboard access and key repeat emulation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto

from quadkit.geometry import Vec2


class KeyCode(Enum):
    """Keys the UI reacts to besides plain characters."""

    UP = auto()
    DOWN = auto()
    RIGHT = auto()
    LEFT = auto()
    BACKSPACE = auto()
    DELETE = auto()
    ENTER = auto()
    TAB = auto()
    HOME = auto()
    END = auto()
    CONTROL = auto()
    ESCAPE = auto()
    A = auto()  # select all
    Z = auto()  # undo
    Y = auto()  # redo
    C = auto()  # copy
    V = auto()  # paste
    X = auto()  # cut


@dataclass(frozen=True)
class InputCharacter:
    """One keyboard event: a typed character (``str``) or a :class:`KeyCode`."""

    key: str | KeyCode
    modifier_shift: bool = False
    modifier_ctrl: bool = False


@dataclass
class Input:
    """Mouse and keyboard state collected for one frame."""

    mouse_position: Vec2 = field(default_factory=Vec2)
    mouse_down: bool = False
    click_down: bool = False
    click_up: bool = False
    mouse_wheel: Vec2 = field(default_factory=Vec2)
    input_buffer: list[InputCharacter] = field(default_factory=list)
    modifier_ctrl: bool = False
    escape: bool = False
    enter: bool = False
    cursor_grabbed: bool = False
    window_active: bool = False

    def _available(self) -> bool:
        return not self.cursor_grabbed and self.window_active

    def is_mouse_down(self) -> bool:
        """Mouse held, unless another widget grabbed it or the window is inactive."""
        return self.mouse_down and self._available()

    def is_click_down(self) -> bool:
        """Mouse pressed this frame, subject to the same conditions."""
        return self.click_down and self._available()

    def is_click_up(self) -> bool:
        """Mouse released this frame, subject to the same conditions."""
        return self.click_up and self._available()

    def reset(self) -> None:
        """Clear the per-frame events; mouse position and held state remain."""
        self.modifier_ctrl = False
        self.escape = False
        self.enter = False
        self.click_down = False
        self.click_up = False
        self.mouse_wheel = Vec2(0.0, 0.0)
        self.input_buffer = []
        self.window_active = False


class Clipboard(ABC):
    """Source and sink for copied text."""

    @abstractmethod
    def get(self) -> str | None:
        """Current clipboard text, or None if there is none."""

    @abstractmethod
    def set(self, data: str) -> None:
        """Replace the clipboard text."""


class MemoryClipboard(Clipboard):
    """A clipboard kept in process memory."""

    def __init__(self, data: str | None = None) -> None:
        self._data = data

    def get(self) -> str | None:
        return self._data

    def set(self, data: str) -> None:
        self._data = data


@dataclass
class KeyRepeat:
    """Emulates OS key repeat: one press, then repeats only after a delay."""

    character_this_frame: KeyCode | None = None
    active_character: KeyCode | None = None
    repeating_character: KeyCode | None = None
    pressed_time: float = 0.0

    def add_repeat_gap(self, character: KeyCode, time: float) -> bool:
        """Record a held key; return whether it should act this frame."""
        self.character_this_frame = character
        return (
            self.active_character is None
            or self.active_character != character
            or self.repeating_character == character
        )

    def new_frame(self, time: float) -> None:
        """Close the frame, updating which key is held and whether it repeats."""
        this_frame = self.character_this_frame
        self.character_this_frame = None

        if this_frame == self.active_character and time - self.pressed_time > 0.5:
            self.repeating_character = self.active_character

        if this_frame != self.active_character:
            self.active_character = this_frame
            self.pressed_time = time
            self.repeating_character = None