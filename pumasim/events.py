"""Window input events: keys, mouse buttons, cursor motion, scrolling and resizes."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar, Iterable, Optional, Type, TypeVar

_MOD_SHIFT = 0x0001
_MOD_CONTROL = 0x0002
_MOD_ALT = 0x0004
_MOD_CAPS_LOCK = 0x0010
_MOD_NUM_LOCK = 0x0020

_E = TypeVar("_E", bound=enum.Enum)


class EventType(enum.Enum):
    """Kind of an input event."""

    KEY = enum.auto()
    MOUSE_CLICK = enum.auto()
    MOUSE_MOVE = enum.auto()
    MOUSE_SCROLL = enum.auto()
    RESIZE = enum.auto()


class Action(enum.IntEnum):
    """What happened to a key or a mouse button."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class Button(enum.IntEnum):
    """Mouse buttons that are reported."""

    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


@dataclass(frozen=True)
class Mods:
    """Modifier key bit field that accompanies key and button events."""

    bits: int = 0

    def is_shift_down(self) -> bool:
        return bool(self.bits & _MOD_SHIFT)

    def is_ctrl_down(self) -> bool:
        return bool(self.bits & _MOD_CONTROL)

    def is_alt_down(self) -> bool:
        return bool(self.bits & _MOD_ALT)

    def is_caps_lock_on(self) -> bool:
        return bool(self.bits & _MOD_CAPS_LOCK)

    def is_num_lock_on(self) -> bool:
        return bool(self.bits & _MOD_NUM_LOCK)


def _parse(
    enum_cls: Type[_E], value: object, name: str, allowed: Optional[Iterable[_E]] = None
) -> _E:
    try:
        member = enum_cls(value)
    except ValueError:
        raise ValueError(f"Invalid argument '{name}', value: {value}") from None
    if allowed is not None and member not in tuple(allowed):
        raise ValueError(f"Invalid argument '{name}', value: {value}")
    return member


def _as_mods(mods: Mods | int) -> Mods:
    return mods if isinstance(mods, Mods) else Mods(int(mods))


class InputEvent:
    """Base of all input events; ``type`` tells which kind it is."""

    type: ClassVar[EventType]


@dataclass
class KeyEvent(InputEvent):
    """A keyboard key was pressed, released or repeated."""

    type: ClassVar[EventType] = EventType.KEY

    key: int
    scancode: int
    action: Action
    mods: Mods = Mods()

    def __post_init__(self) -> None:
        self.action = _parse(Action, self.action, "action")
        self.mods = _as_mods(self.mods)


@dataclass
class MouseClickEvent(InputEvent):
    """A mouse button was pressed or released."""

    type: ClassVar[EventType] = EventType.MOUSE_CLICK

    button: Button
    action: Action
    mods: Mods = Mods()

    def __post_init__(self) -> None:
        self.button = _parse(Button, self.button, "button")
        self.action = _parse(
            Action, self.action, "action", (Action.PRESS, Action.RELEASE)
        )
        self.mods = _as_mods(self.mods)


@dataclass
class MouseMoveEvent(InputEvent):
    """Cursor position relative to the top-left corner of the window."""

    type: ClassVar[EventType] = EventType.MOUSE_MOVE

    xpos: float
    ypos: float


@dataclass
class MouseScrollEvent(InputEvent):
    """Scroll wheel offsets."""

    type: ClassVar[EventType] = EventType.MOUSE_SCROLL

    xoffset: float
    yoffset: float


@dataclass
class ResizeEvent(InputEvent):
    """New framebuffer size."""

    type: ClassVar[EventType] = EventType.RESIZE

    width: int
    height: int