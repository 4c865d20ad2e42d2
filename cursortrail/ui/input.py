"""Keyboard input handling for the demo terminal."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable
import pygame


class InputAction(Enum):
    """Input actions that can be triggered."""
    TYPE_TEXT = "type_text"  # Carries the typed string
    BACKSPACE = "backspace"
    DELETE_WORD = "delete_word"
    NEWLINE = "newline"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    HOME = "home"
    END = "end"
    NEXT_PANE = "next_pane"
    TOGGLE_TRAIL = "toggle_trail"
    PAUSE = "pause"
    QUIT = "quit"


# Plain keys
KEY_ACTIONS: dict[int, InputAction] = {
    pygame.K_BACKSPACE: InputAction.BACKSPACE,
    pygame.K_RETURN: InputAction.NEWLINE,
    pygame.K_KP_ENTER: InputAction.NEWLINE,
    pygame.K_LEFT: InputAction.MOVE_LEFT,
    pygame.K_RIGHT: InputAction.MOVE_RIGHT,
    pygame.K_UP: InputAction.MOVE_UP,
    pygame.K_DOWN: InputAction.MOVE_DOWN,
    pygame.K_HOME: InputAction.HOME,
    pygame.K_END: InputAction.END,
    pygame.K_TAB: InputAction.NEXT_PANE,
    pygame.K_ESCAPE: InputAction.QUIT,
}

# Ctrl + key
CTRL_KEY_ACTIONS: dict[int, InputAction] = {
    pygame.K_w: InputAction.DELETE_WORD,
    pygame.K_BACKSPACE: InputAction.DELETE_WORD,
    pygame.K_t: InputAction.TOGGLE_TRAIL,
    pygame.K_p: InputAction.PAUSE,
    pygame.K_q: InputAction.QUIT,
    pygame.K_a: InputAction.HOME,
    pygame.K_e: InputAction.END,
}


@dataclass
class InputState:
    """Current input state."""
    ctrl_held: bool = False


class InputHandler:
    """Turns pygame keyboard events into terminal actions."""

    def __init__(self) -> None:
        self.state = InputState()
        self._callbacks: dict[InputAction, list[Callable]] = {}

    def register_callback(self, action: InputAction, callback: Callable) -> None:
        """Register a callback for an input action."""
        self._callbacks.setdefault(action, []).append(callback)

    def _fire_action(self, action: InputAction, *args) -> None:
        for callback in self._callbacks.get(action, []):
            callback(*args)

    def process_events(self, events: list[pygame.event.Event]) -> bool:
        """Process pygame events.

        Returns:
            False if quit was requested, True otherwise
        """
        for event in events:
            if event.type == pygame.QUIT:
                self._fire_action(InputAction.QUIT)
                return False

            elif event.type == pygame.KEYDOWN:
                if not self._handle_key_down(event):
                    return False

            elif event.type == pygame.KEYUP:
                self.state.ctrl_held = bool(event.mod & pygame.KMOD_CTRL)

            elif event.type == pygame.TEXTINPUT:
                # Ctrl shortcuts also arrive as text on some platforms
                if not self.state.ctrl_held and event.text:
                    self._fire_action(InputAction.TYPE_TEXT, event.text)

        return True

    def _handle_key_down(self, event: pygame.event.Event) -> bool:
        """Handle key press. Returns False on quit."""
        self.state.ctrl_held = bool(event.mod & pygame.KMOD_CTRL)

        if self.state.ctrl_held:
            action = CTRL_KEY_ACTIONS.get(event.key)
        else:
            action = KEY_ACTIONS.get(event.key)

        if action is None:
            return True

        self._fire_action(action)
        return action is not InputAction.QUIT
