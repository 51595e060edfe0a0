"""Keyboard, mouse and gamepad state tracking with named action bindings."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

PRESS = 1
RELEASE = 0

KEY_SPACE = 32
KEY_LAST = 348
MOUSE_BUTTON_1 = 0
MOUSE_BUTTON_LAST = 7
JOYSTICK_1 = 0
JOYSTICK_LAST = 15


class KeyState(enum.Enum):
    """Per-frame state of a key or button."""

    NONE = 0
    PRESSED = 1
    RELEASED = 2
    HELD = 3

    @property
    def is_down(self) -> bool:
        return self in (KeyState.PRESSED, KeyState.HELD)


@dataclass
class GamepadState:
    """Last polled state of one joystick."""

    present: bool = False
    axes: List[float] = field(default_factory=list)
    buttons: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class GamepadBinding:
    """A button on a particular joystick."""

    jid: int
    button: int


class InputBackend(abc.ABC):
    """Source of raw device state polled by InputManager once per frame."""

    sticky_input: bool = False

    def set_sticky_input(self, enabled: bool) -> None:
        """Record whether short presses should be latched until polled."""
        self.sticky_input = bool(enabled)

    @abc.abstractmethod
    def get_key(self, key: int) -> int:
        """PRESS or RELEASE for ``key``."""

    @abc.abstractmethod
    def get_mouse_button(self, button: int) -> int:
        """PRESS or RELEASE for ``button``."""

    @abc.abstractmethod
    def joystick_present(self, jid: int) -> bool:
        """Whether joystick ``jid`` is connected."""

    @abc.abstractmethod
    def get_joystick_axes(self, jid: int) -> Sequence[float]:
        """Axis values of joystick ``jid``."""

    @abc.abstractmethod
    def get_joystick_buttons(self, jid: int) -> Sequence[int]:
        """Button values (PRESS or RELEASE) of joystick ``jid``."""

    @abc.abstractmethod
    def get_cursor_pos(self) -> Tuple[float, float]:
        """Cursor position in window coordinates."""


ActionCallback = Callable[[str, KeyState], None]
CodeCallback = Callable[[int, KeyState], None]


def _next_state(raw: int, previous: KeyState) -> KeyState:
    if raw == PRESS:
        return KeyState.HELD if previous.is_down else KeyState.PRESSED
    if raw == RELEASE and previous.is_down:
        return KeyState.RELEASED
    return KeyState.NONE


class InputManager:
    """Turns polled device state into pressed/held/released transitions and actions."""

    def __init__(self, backend: InputBackend) -> None:
        self._backend = backend
        backend.set_sticky_input(True)
        self._key_states: Dict[int, KeyState] = {}
        self._mouse_button_states: Dict[int, KeyState] = {}
        self._gamepads: Dict[int, GamepadState] = {}
        # dicts used as insertion-ordered sets
        self._key_bindings: Dict[str, Dict[int, None]] = {}
        self._mouse_bindings: Dict[str, Dict[int, None]] = {}
        self._gamepad_bindings: Dict[str, List[GamepadBinding]] = {}
        self.on_action: Optional[ActionCallback] = None
        self.on_key: Optional[CodeCallback] = None
        self.on_mouse_button: Optional[CodeCallback] = None

    # === Per-frame update ===

    def update(self) -> None:
        """Poll all devices, fire callbacks and process action bindings."""
        for key in range(KEY_SPACE, KEY_LAST + 1):
            state = _next_state(self._backend.get_key(key),
                                self._key_states.get(key, KeyState.NONE))
            self._key_states[key] = state
            if state is not KeyState.NONE and self.on_key:
                self.on_key(key, state)

        for button in range(MOUSE_BUTTON_1, MOUSE_BUTTON_LAST + 1):
            state = _next_state(self._backend.get_mouse_button(button),
                                self._mouse_button_states.get(button, KeyState.NONE))
            self._mouse_button_states[button] = state
            if state is not KeyState.NONE and self.on_mouse_button:
                self.on_mouse_button(button, state)

        self._poll_gamepads()
        self._process_bindings()

    def _poll_gamepads(self) -> None:
        for jid in range(JOYSTICK_1, JOYSTICK_LAST + 1):
            if self._backend.joystick_present(jid):
                pad = self._gamepads.setdefault(jid, GamepadState())
                pad.present = True
                pad.axes = list(self._backend.get_joystick_axes(jid))
                pad.buttons = list(self._backend.get_joystick_buttons(jid))
            else:
                self._gamepads.setdefault(jid, GamepadState()).present = False

    def _gamepad_button(self, binding: GamepadBinding) -> Optional[int]:
        pad = self.get_gamepad_state(binding.jid)
        if not pad.present or not 0 <= binding.button < len(pad.buttons):
            return None
        return pad.buttons[binding.button]

    def _process_bindings(self) -> None:
        if not self.on_action:
            return
        for action, keys in self._key_bindings.items():
            for key in keys:
                state = self._key_states.get(key)
                if state is not None and state is not KeyState.NONE:
                    self.on_action(action, state)

        for action, buttons in self._mouse_bindings.items():
            for button in buttons:
                state = self._mouse_button_states.get(button)
                if state is not None and state is not KeyState.NONE:
                    self.on_action(action, state)

        for action, bindings in self._gamepad_bindings.items():
            for binding in bindings:
                if self._gamepad_button(binding) == PRESS:
                    self.on_action(action, KeyState.PRESSED)

    # === Keyboard ===

    def is_key_down(self, key: int) -> bool:
        return self._key_states.get(key, KeyState.NONE).is_down

    def is_key_pressed(self, key: int) -> bool:
        return self._key_states.get(key) is KeyState.PRESSED

    def is_key_released(self, key: int) -> bool:
        return self._key_states.get(key) is KeyState.RELEASED

    # === Mouse ===

    def is_mouse_button_down(self, button: int) -> bool:
        return self._mouse_button_states.get(button, KeyState.NONE).is_down

    def is_mouse_button_pressed(self, button: int) -> bool:
        return self._mouse_button_states.get(button) is KeyState.PRESSED

    def is_mouse_button_released(self, button: int) -> bool:
        return self._mouse_button_states.get(button) is KeyState.RELEASED

    # === Actions ===

    def _action_matches(self, action: str, key_test, mouse_test, pad_value: int) -> bool:
        if any(key_test(key) for key in self._key_bindings.get(action, ())):
            return True
        if any(mouse_test(btn) for btn in self._mouse_bindings.get(action, ())):
            return True
        return any(self._gamepad_button(binding) == pad_value
                   for binding in self._gamepad_bindings.get(action, ()))

    def is_action_down(self, action: str) -> bool:
        return self._action_matches(action, self.is_key_down,
                                    self.is_mouse_button_down, PRESS)

    def is_action_pressed(self, action: str) -> bool:
        return self._action_matches(action, self.is_key_pressed,
                                    self.is_mouse_button_pressed, PRESS)

    def is_action_released(self, action: str) -> bool:
        return self._action_matches(action, self.is_key_released,
                                    self.is_mouse_button_released, RELEASE)

    # === Mouse position and gamepads ===

    def get_mouse_position(self) -> Tuple[float, float]:
        x, y = self._backend.get_cursor_pos()
        return float(x), float(y)

    def get_gamepad_state(self, jid: int) -> GamepadState:
        """State of joystick ``jid``; an empty, absent state if never polled."""
        pad = self._gamepads.get(jid)
        return pad if pad is not None else GamepadState()

    # === Bindings ===

    def bind_key(self, action: str, key: int) -> None:
        self._key_bindings.setdefault(action, {})[key] = None

    def bind_mouse_button(self, action: str, button: int) -> None:
        self._mouse_bindings.setdefault(action, {})[button] = None

    def bind_gamepad_button(self, action: str, jid: int, button: int) -> None:
        self._gamepad_bindings.setdefault(action, []).append(GamepadBinding(jid, button))

    def clear_bindings(self) -> None:
        self._key_bindings.clear()
        self._mouse_bindings.clear()
        self._gamepad_bindings.clear()

    def clear_binding(self, action: str) -> None:
        self._key_bindings.pop(action, None)
        self._mouse_bindings.pop(action, None)
        self._gamepad_bindings.pop(action, None)