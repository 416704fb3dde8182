import pytest

from quadkit.text_editor import ClickState, EditboxState


def type_text(state, text, chars):
    for ch in chars:
        text = state.insert_character(text, ch)
    return text


def test_typing_builds_text_and_moves_cursor():
    state = EditboxState()
    text = type_text(state, "", "hello")
    assert text == "hello"
    assert state.cursor == len("hello")


def test_undo_and_redo_round_trip():
    state = EditboxState()
    text = type_text(state, "", "hello")
    for _ in "hello":
        text = state.undo(text)
    assert text == ""
    assert state.cursor == 0
    for _ in "hello":
        text = state.redo(text)
    assert text == "hello"
    assert state.cursor == len("hello")


def test_undo_with_empty_history_keeps_text():
    state = EditboxState()
    assert state.undo("abc") == "abc"
    assert state.redo("abc") == "abc"


def test_insert_string_at_start():
    state = EditboxState()
    text = state.insert_string("world", "hello ")
    assert text == "hello world"
    assert state.cursor == len("hello ")
    assert state.undo(text) == "world"


def test_new_edit_clears_redo():
    state = EditboxState()
    text = state.insert_character("", "a")
    text = state.undo(text)
    text = state.insert_character(text, "b")
    assert state.redo(text) == "b"


def test_select_all_and_delete_selected():
    state = EditboxState()
    original = "some text"
    state.select_all(original)
    assert state.selected_text(original) == original
    text = state.delete_selected(original)
    assert text == ""
    assert state.selection is None
    assert state.undo(text) == original


def test_typing_over_selection_via_delete_then_insert():
    state = EditboxState(cursor=0)
    original = "abcdef"
    state.move_cursor(original, 3, shift=True)
    assert state.selected_text(original) == original[:3]
    text = state.delete_selected(original)
    assert text == original[3:]
    assert state.cursor == 0


def test_backspace_removes_previous_character():
    state = EditboxState(cursor=len("abc"))
    text = state.delete_current_character("abc")
    assert text == "ab"
    assert state.cursor == len("ab")
    assert state.undo(text) == "abc"


def test_delete_at_end_is_noop():
    state = EditboxState(cursor=len("abc"))
    text = state.delete_next_character("abc")
    assert text == "abc"
    assert state.undo(text) == "abc"


def test_move_cursor_with_shift_builds_selection():
    state = EditboxState(cursor=1)
    state.move_cursor("abcd", 2, shift=True)
    assert state.selection == (1, 3)
    state.move_cursor("abcd", -1, shift=True)
    assert state.selection == (1, 2)
    state.move_cursor("abcd", 1, shift=False)
    assert state.selection is None


def test_move_cursor_out_of_bounds_stays():
    state = EditboxState(cursor=2)
    state.move_cursor("abc", 5, shift=False)
    assert state.cursor == 2
    state.move_cursor("abc", -5, shift=False)
    assert state.cursor == 2


def test_line_begin_and_end():
    text = "ab\ncd"
    state = EditboxState(cursor=text.index("\n") + 1)
    assert state.find_line_begin(text) == 0
    assert state.find_line_end(text) == len("cd")
    state.cursor = len(text)
    assert state.find_line_begin(text) == len("cd")


@pytest.mark.parametrize("ch", [" ", "(", ")", ";", '"'])
def test_word_delimiters(ch):
    assert EditboxState.word_delimiter(ch)


@pytest.mark.parametrize("ch", ["a", "\n", "_"])
def test_non_delimiters(ch):
    assert not EditboxState.word_delimiter(ch)


def test_select_word_in_last_word():
    text = "foo bar"
    state = EditboxState(cursor=text.index("bar") + 1)
    assert state.select_word(text) == (text.index("bar"), len(text))
    assert state.selection == (text.index("bar"), len(text))


def test_next_and_prev_word():
    text = "foo bar baz"
    state = EditboxState(cursor=0)
    state.move_cursor_next_word(text, shift=False)
    assert state.cursor == text.index("bar")
    state.cursor = text.index("baz")
    state.move_cursor_prev_word(text, shift=False)
    assert state.cursor == text.index("bar")


def test_move_within_line_stops_at_newline():
    text = "ab\ncd"
    state = EditboxState(cursor=0)
    state.move_cursor_within_line(text, 10, shift=False)
    assert state.cursor == text.index("\n")


def test_move_within_line_rejects_negative():
    with pytest.raises(ValueError):
        EditboxState().move_cursor_within_line("abc", -1, shift=False)


def test_in_selected_range_is_direction_independent():
    forward = EditboxState(selection=(1, 3))
    backward = EditboxState(selection=(3, 1))
    for i in range(5):
        assert forward.in_selected_range(i) == backward.in_selected_range(i)
    assert forward.in_selected_range(1)
    assert not forward.in_selected_range(3)


def test_clamp_selection():
    state = EditboxState(selection=(2, 10))
    state.clamp_selection("abcd")
    assert state.selection == (2, len("abcd"))


def test_selected_text_outside_text_raises():
    state = EditboxState(selection=(0, 10))
    with pytest.raises(ValueError):
        state.selected_text("abc")


def test_single_click_without_drag_clears_selection():
    state = EditboxState()
    state.click_down(0.0, "hello", 2)
    assert state.click_state is ClickState.SELECTING_CHARS
    assert state.selection == (2, 2)
    state.click_up("hello")
    assert state.selection is None
    assert state.click_state is ClickState.NONE


def test_drag_selects_characters():
    text = "hello"
    state = EditboxState()
    state.click_down(0.0, text, 1)
    state.click_move(text, 4)
    state.click_up(text)
    assert state.selection == (1, 4)
    assert state.click_state is ClickState.SELECTED


def test_double_and_triple_click():
    text = "foo bar"
    c = text.index("bar") + 1
    state = EditboxState()
    state.click_down(0.0, text, c)
    state.click_move(text, c)
    state.click_up(text)

    state.click_down(0.1, text, c)
    assert state.click_state is ClickState.SELECTING_WORDS
    assert state.selection == (text.index("bar"), len(text))
    state.click_move(text, c)
    assert state.cursor == len(text)
    state.click_up(text)
    assert state.click_state is ClickState.SELECTED

    state.cursor = c
    state.click_down(0.2, text, c)
    assert state.click_state is ClickState.SELECTING_LINES
    assert state.selection == (0, len(text))