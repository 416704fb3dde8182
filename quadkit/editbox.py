"""Keyboard editing of an edit box's text."""

from __future__ import annotations

from collections.abc import Callable, MutableSequence

from quadkit.input import Clipboard, InputCharacter, KeyCode
from quadkit.text_editor import EditboxState

LEFT_MARGIN = 2.0

_CTRL_COMMANDS = frozenset({KeyCode.Z, KeyCode.Y, KeyCode.X, KeyCode.V, KeyCode.A})


def _accepts(character: str, char_filter: Callable[[str], bool] | None) -> bool:
    return char_filter is None or char_filter(character)


def _paste(
    clipboard: Clipboard,
    text: str,
    state: EditboxState,
    char_filter: Callable[[str], bool] | None,
) -> str:
    data = clipboard.get()
    if not data:
        return text
    if state.selection is not None:
        text = state.delete_selected(text)
    if char_filter is None:
        return state.insert_string(text, data)
    for character in data:
        if char_filter(character):
            text = state.insert_character(text, character)
    return text


def _ctrl_command(
    key: KeyCode,
    clipboard: Clipboard,
    text: str,
    state: EditboxState,
    char_filter: Callable[[str], bool] | None,
) -> str:
    if key is KeyCode.Z:
        return state.undo(text)
    if key is KeyCode.Y:
        return state.redo(text)
    if key is KeyCode.X:
        return state.delete_selected(text)
    if key is KeyCode.V:
        return _paste(clipboard, text, state, char_filter)
    state.select_all(text)
    return text


def _navigate(key: KeyCode, text: str, state: EditboxState, shift: bool, ctrl: bool) -> None:
    if key is KeyCode.RIGHT:
        if ctrl:
            state.move_cursor_next_word(text, shift)
        else:
            state.move_cursor(text, 1, shift)
    elif key is KeyCode.LEFT:
        if ctrl:
            state.move_cursor_prev_word(text, shift)
        else:
            state.move_cursor(text, -1, shift)
    elif key is KeyCode.HOME:
        state.move_cursor(text, -state.find_line_begin(text), shift)
    elif key is KeyCode.END:
        state.move_cursor(text, state.find_line_end(text), shift)
    elif key is KeyCode.UP:
        to_line_begin = state.find_line_begin(text)
        state.move_cursor(text, -to_line_begin, shift)
        if state.cursor != 0:
            state.move_cursor(text, -1, shift)
            new_to_line_begin = state.find_line_begin(text)
            offset = min(to_line_begin, new_to_line_begin) - new_to_line_begin
            state.move_cursor(text, offset, shift)
    elif key is KeyCode.DOWN:
        to_line_begin = state.find_line_begin(text)
        to_line_end = state.find_line_end(text)
        state.move_cursor(text, to_line_end, shift)
        if text and state.cursor < len(text) - 1:
            state.move_cursor(text, 1, shift)
            state.move_cursor_within_line(text, to_line_begin, shift)


def apply_keyboard_input(
    input_buffer: MutableSequence[InputCharacter],
    clipboard: Clipboard,
    text: str,
    state: EditboxState,
    multiline: bool = True,
    char_filter: Callable[[str], bool] | None = None,
) -> str:
    """Apply and consume the buffered key events; return the edited text.

    ``char_filter`` decides which typed or pasted characters are accepted.
    """
    events = list(input_buffer)
    input_buffer.clear()

    for event in events:
        key = event.key
        shift = event.modifier_shift
        ctrl = event.modifier_ctrl

        if isinstance(key, str):
            if ctrl:
                continue
            if key not in ("\r", "\n") and key.isascii() and _accepts(key, char_filter):
                if state.selection is not None:
                    text = state.delete_selected(text)
                text = state.insert_character(text, key)
        elif ctrl and key in _CTRL_COMMANDS:
            text = _ctrl_command(key, clipboard, text, state, char_filter)
        elif key is KeyCode.ENTER:
            if multiline:
                text = state.insert_character(text, "\n")
        elif key is KeyCode.BACKSPACE:
            if state.selection is None:
                text = state.delete_current_character(text)
            else:
                text = state.delete_selected(text)
        elif key is KeyCode.DELETE:
            if state.selection is None:
                text = state.delete_next_character(text)
            else:
                text = state.delete_selected(text)
        else:
            _navigate(key, text, state, shift, ctrl)

    return text