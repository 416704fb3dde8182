"""Editable text state: cursor, selection, mouse selection and undo/redo history.

Text is passed in as an immutable ``str``; every operation that edits it
returns the new text.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto

DOUBLE_CLICK_TIME = 0.5

_WORD_DELIMITERS = frozenset(' ();"')


def _char_at(text: str, index: int, default: str) -> str:
    return text[index] if 0 <= index < len(text) else default


class _Command(ABC):
    """One reversible edit. Both directions return ``(cursor, text)``."""

    @abstractmethod
    def apply(self, text: str) -> tuple[int, str]:
        ...

    @abstractmethod
    def unapply(self, text: str) -> tuple[int, str]:
        ...


@dataclass(frozen=True)
class _InsertCharacter(_Command):
    character: str
    cursor: int

    def apply(self, text: str) -> tuple[int, str]:
        if self.cursor <= len(text):
            text = text[: self.cursor] + self.character + text[self.cursor :]
        return self.cursor + 1, text

    def unapply(self, text: str) -> tuple[int, str]:
        if self.cursor < len(text):
            text = text[: self.cursor] + text[self.cursor + 1 :]
        return self.cursor, text


@dataclass(frozen=True)
class _InsertString(_Command):
    data: str
    cursor: int

    def apply(self, text: str) -> tuple[int, str]:
        if self.cursor <= len(text):
            text = text[: self.cursor] + self.data + text[self.cursor :]
        return self.cursor + len(self.data), text

    def unapply(self, text: str) -> tuple[int, str]:
        if self.cursor < len(text):
            end = min(self.cursor + len(self.data), len(text))
            text = text[: self.cursor] + text[end:]
        return self.cursor, text


@dataclass(frozen=True)
class _DeleteCharacter(_Command):
    character: str
    cursor: int

    def apply(self, text: str) -> tuple[int, str]:
        if self.cursor < len(text):
            text = text[: self.cursor] + text[self.cursor + 1 :]
        return self.cursor, text

    def unapply(self, text: str) -> tuple[int, str]:
        if self.cursor <= len(text):
            text = text[: self.cursor] + self.character + text[self.cursor :]
        return self.cursor + 1, text


@dataclass(frozen=True)
class _DeleteRange(_Command):
    start: int
    end: int
    data: str

    @classmethod
    def capture(cls, text: str, selection: tuple[int, int]) -> _DeleteRange:
        start, end = selection
        return cls(start, end, text[min(start, end) : max(start, end)])

    def apply(self, text: str) -> tuple[int, str]:
        low, high = min(self.start, self.end), max(self.start, self.end)
        return low, text[:low] + text[high:]

    def unapply(self, text: str) -> tuple[int, str]:
        low = min(self.start, self.end)
        return low, text[:low] + self.data + text[low:]


class ClickState(Enum):
    """What a held mouse button is currently selecting."""

    NONE = auto()
    SELECTING_CHARS = auto()
    SELECTING_WORDS = auto()
    SELECTING_LINES = auto()
    SELECTED = auto()


@dataclass
class EditboxState:
    """Cursor, selection and edit history of one edit box."""

    cursor: int = 0
    click_state: ClickState = ClickState.NONE
    # Selection start for SELECTING_CHARS, the selected word or line span otherwise.
    click_anchor: tuple[int, int] = (0, 0)
    clicks_counter: int = 0
    current_click: int = 0
    last_click_time: float = 0.0
    last_click: int = 0
    selection: tuple[int, int] | None = None
    _undo_stack: list[_Command] = field(default_factory=list, repr=False)
    _redo_stack: list[_Command] = field(default_factory=list, repr=False)

    def clamp_selection(self, text: str) -> None:
        """Keep the selection inside the text after it changed elsewhere."""
        if self.selection is not None:
            start, end = self.selection
            self.selection = (min(start, len(text)), min(end, len(text)))

    def selected_text(self, text: str) -> str | None:
        """The selected part of ``text``, or None without a selection."""
        if self.selection is None:
            return None
        low, high = min(self.selection), max(self.selection)
        if high > len(text):
            raise ValueError(f"selection {self.selection} is outside text of length {len(text)}")
        return text[low:high]

    def in_selected_range(self, cursor: int) -> bool:
        """Whether the character at ``cursor`` is selected."""
        if self.selection is None:
            return False
        return min(self.selection) <= cursor < max(self.selection)

    def find_line_begin(self, text: str) -> int:
        """Distance from the cursor back to the start of its line."""
        position = self.cursor
        while position > 0 and _char_at(text, position - 1, "x") != "\n":
            position -= 1
        return self.cursor - position

    def find_line_end(self, text: str) -> int:
        """Distance from the cursor forward to the end of its line."""
        position = self.cursor
        while position < len(text) and _char_at(text, position, "x") != "\n":
            position += 1
        return max(position - self.cursor, 0)

    @staticmethod
    def word_delimiter(character: str) -> bool:
        """Whether the character separates words."""
        return character in _WORD_DELIMITERS

    def find_word_begin(self, text: str, cursor: int) -> int:
        """Distance from ``cursor`` back to the start of its word."""
        position = cursor
        while position > 0:
            current = _char_at(text, position - 1, " ")
            if self.word_delimiter(current) or current == "\n":
                break
            position -= 1
        return cursor - position

    def find_word_end(self, text: str, cursor: int) -> int:
        """Distance from ``cursor`` past the word and the delimiters after it."""
        position = cursor
        space_skipping = False
        while position < len(text):
            current = _char_at(text, position, " ")
            if self.word_delimiter(current) or current == "\n":
                space_skipping = True
            if space_skipping and not self.word_delimiter(current):
                break
            position += 1
        return position - cursor

    def _do(self, command: _Command, text: str) -> str:
        self.cursor, text = command.apply(text)
        self._undo_stack.append(command)
        return text

    def insert_character(self, text: str, character: str) -> str:
        """Insert one character at the cursor; return the new text."""
        self._redo_stack.clear()
        self.selection = None
        return self._do(_InsertCharacter(character, self.cursor), text)

    def insert_string(self, text: str, string: str) -> str:
        """Insert a string at the cursor; return the new text."""
        self._redo_stack.clear()
        self.selection = None
        return self._do(_InsertString(string, self.cursor), text)

    def delete_selected(self, text: str) -> str:
        """Remove the selected text, if any; return the new text."""
        self._redo_stack.clear()
        if self.selection is not None:
            text = self._do(_DeleteRange.capture(text, self.selection), text)
        self.selection = None
        return text

    def delete_next_character(self, text: str) -> str:
        """Remove the character under the cursor; return the new text."""
        self._redo_stack.clear()
        if 0 <= self.cursor < len(text):
            text = self._do(_DeleteCharacter(text[self.cursor], self.cursor), text)
        return text

    def delete_current_character(self, text: str) -> str:
        """Remove the character before the cursor; return the new text."""
        if self.cursor > 0:
            self.cursor -= 1
            text = self.delete_next_character(text)
        return text

    def move_cursor_next_word(self, text: str, shift: bool) -> None:
        """Jump to the start of the next word."""
        next_word = self.find_word_end(text, self.cursor + 1) + 1
        self.move_cursor(text, next_word, shift)

    def move_cursor_prev_word(self, text: str, shift: bool) -> None:
        """Jump to the start of the previous word."""
        if self.cursor > 1:
            prev_word = self.find_word_begin(text, self.cursor - 1) + 1
            self.move_cursor(text, -prev_word, shift)

    def move_cursor(self, text: str, dx: int, shift: bool) -> None:
        """Move the cursor by ``dx`` if it stays in the text; extend the selection with shift."""
        start_cursor = self.cursor
        end_cursor = start_cursor
        if 0 <= self.cursor + dx <= len(text):
            end_cursor = self.cursor + dx
            self.cursor = end_cursor

        if not shift:
            self.selection = None
        elif self.selection is None:
            self.selection = (start_cursor, end_cursor)
        else:
            self.selection = (self.selection[0], end_cursor)

    def move_cursor_within_line(self, text: str, dx: int, shift: bool) -> None:
        """Move forward up to ``dx`` characters without leaving the line."""
        if dx < 0:
            raise ValueError("moving backwards within a line is not supported")
        for _ in range(dx):
            if _char_at(text, self.cursor, "x") == "\n" or self.cursor == len(text):
                break
            self.move_cursor(text, 1, shift)

    def select_all(self, text: str) -> None:
        """Select the whole text."""
        self.selection = (0, len(text))
        self.click_state = ClickState.NONE

    def deselect(self) -> None:
        """Drop the selection and any mouse selection in progress."""
        self.click_state = ClickState.NONE
        self.selection = None

    def select_word(self, text: str) -> tuple[int, int]:
        """Select the word under the cursor and return its span."""
        new_selection = (
            self.cursor - self.find_word_begin(text, self.cursor),
            self.cursor + self.find_word_end(text, self.cursor),
        )
        self.selection = new_selection
        return new_selection

    def select_line(self, text: str) -> tuple[int, int]:
        """Select the line under the cursor and return its span."""
        new_selection = (
            self.cursor - self.find_line_begin(text),
            self.cursor + self.find_line_end(text),
        )
        self.selection = new_selection
        return new_selection

    def click_down(self, time: float, text: str, cursor: int) -> None:
        """Handle a mouse press on character ``cursor``; repeated presses pick words, then lines."""
        self.current_click = cursor

        if self.last_click == self.current_click and time - self.last_click_time < DOUBLE_CLICK_TIME:
            self.clicks_counter += 1
            phase = self.clicks_counter % 3
            if phase == 0:
                self.deselect()
            elif phase == 1:
                self.click_anchor = self.select_word(text)
                self.click_state = ClickState.SELECTING_WORDS
            else:
                self.click_anchor = self.select_line(text)
                self.click_state = ClickState.SELECTING_LINES
        else:
            self.clicks_counter = 0
            if self.click_state in (ClickState.NONE, ClickState.SELECTED):
                self.click_state = ClickState.SELECTING_CHARS
                self.click_anchor = (cursor, cursor)
                self.selection = (cursor, cursor)
            else:
                self.click_state = ClickState.NONE
                self.selection = None
                self.cursor = cursor

        self.last_click_time = time

    def click_move(self, text: str, cursor: int) -> None:
        """Handle the mouse moving to ``cursor`` while held."""
        self.cursor = cursor
        if self.cursor != self.last_click:
            self.clicks_counter = 0

        start, end = self.click_anchor
        if self.click_state is ClickState.SELECTING_CHARS:
            self.selection = (start, cursor)
        elif self.click_state is ClickState.SELECTING_WORDS:
            if cursor < start:
                word_begin = self.cursor - self.find_word_begin(text, self.cursor)
                self.selection = (word_begin, end)
                self.cursor = word_begin
            elif cursor > end:
                word_end = self.cursor + self.find_word_end(text, self.cursor)
                self.selection = (start, word_end)
                self.cursor = word_end
            else:
                self.selection = (start, end)
                self.cursor = end
        elif self.click_state is ClickState.SELECTING_LINES:
            if cursor < start:
                line_begin = self.cursor - self.find_line_begin(text)
                line_end = self.cursor + self.find_line_end(text)
                self.selection = (line_begin, end)
                self.cursor = line_end
            elif cursor > end:
                line_end = self.cursor + self.find_line_end(text)
                self.selection = (start, line_end)
                self.cursor = line_end
            else:
                self.selection = (start, end)
                self.cursor = end

        self.last_click = cursor

    def click_up(self, text: str) -> None:
        """Finish a mouse selection; an empty one is dropped."""
        self.click_state = ClickState.NONE
        if self.selection is not None:
            start, end = self.selection
            if start != end:
                self.click_state = ClickState.SELECTED
            else:
                self.selection = None

    def undo(self, text: str) -> str:
        """Revert the last edit; return the new text."""
        if self._undo_stack:
            command = self._undo_stack.pop()
            self.cursor, text = command.unapply(text)
            self._redo_stack.append(command)
        return text

    def redo(self, text: str) -> str:
        """Reapply the last reverted edit; return the new text."""
        if self._redo_stack:
            command = self._redo_stack.pop()
            self.cursor, text = command.apply(text)
            self._undo_stack.append(command)
        return text