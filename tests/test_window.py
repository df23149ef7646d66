"""Tests for cell/char/byte conversions and window contexts."""

import pytest

from editor.buffer import Buffer
from editor.cursor import CursorPos
from editor.window import (
    LineContext,
    Window,
    WindowContext,
    byte2char,
    byteidx,
    cell2char,
    char_width,
    clip_window_context,
    display_width,
    get_window_context,
)
from jump.hint import HintDirection
from jump.options import Options


class TestWidths:
    def test_ascii_is_one_cell(self):
        assert char_width("a") == 1

    def test_wide_char_is_two_cells(self):
        assert char_width("中") == 2

    def test_combining_mark_is_zero_cells(self):
        assert char_width("\u0301") == 0

    def test_display_width(self):
        assert display_width("a中b") == 4
        assert display_width("") == 0


class TestCell2Char:
    def test_non_positive_cell(self):
        assert cell2char("abc", 0) == 0
        assert cell2char("abc", -3) == 0

    def test_ascii(self):
        assert cell2char("abc", 2) == 2

    def test_wide_char_straddling_cell_is_skipped(self):
        assert cell2char("a中b", 1) == 1
        assert cell2char("a中b", 2) == 2
        assert cell2char("a中b", 3) == 2
        assert cell2char("a中b", 4) == 3

    def test_clamps_to_line_length(self):
        assert cell2char("a中b", 10) == 3

    def test_combining_marks_stay_with_their_base(self):
        assert cell2char("e\u0301x", 1) == 2


class TestBytes:
    def test_byteidx(self):
        assert byteidx("héllo", 0) == 0
        assert byteidx("héllo", 2) == 3

    def test_byte2char(self):
        assert byte2char("héllo", 0) == 0
        assert byte2char("héllo", 1) == 1
        assert byte2char("héllo", 2) == 1
        assert byte2char("héllo", 3) == 2

    def test_byte2char_past_end(self):
        assert byte2char("ab", 10) == 2


def make_window(handle, content, cursor, **kwargs):
    return Window(handle, Buffer(content), cursor, **kwargs)


class TestWindowContext:
    def test_visible_lines(self):
        window = make_window(1000, "a\nb\nc\nd", CursorPos(1, 0), viewport_start_line=1, height=2)
        ctx = window.get_window_context()
        assert ctx.lines == (LineContext(1, "b"), LineContext(2, "c"))
        assert ctx.win_handle == 1000
        assert ctx.buf_handle == window.buffer.handle

    def test_col_first_follows_cursor_cell(self):
        window = make_window(1000, "中文abc", CursorPos(0, 6), col_offset=1)
        # byte 6 is 'a', drawn at cell 4; one cell is scrolled away
        assert window.get_window_context().col_first == 3

    def test_clip_after_cursor(self):
        ctx = make_window(1000, "a\nb\nc\nd", CursorPos(2, 0)).get_window_context()
        clipped = clip_window_context(ctx, HintDirection.AFTER_CURSOR)
        assert [l.line_row for l in clipped.lines] == [2, 3]

    def test_clip_before_cursor(self):
        ctx = make_window(1000, "a\nb\nc\nd", CursorPos(2, 0)).get_window_context()
        clipped = clip_window_context(ctx, HintDirection.BEFORE_CURSOR)
        assert [l.line_row for l in clipped.lines] == [0, 1, 2]

    def test_clip_without_direction_keeps_everything(self):
        ctx = WindowContext(1000, 1, CursorPos(0, 0), lines=(LineContext(0, "x"),))
        assert clip_window_context(ctx, None) is ctx


class TestGetWindowContext:
    def test_focused_window_comes_first(self):
        windows = [make_window(1001, "x", CursorPos(0, 0)), make_window(1000, "y", CursorPos(0, 0))]
        contexts = get_window_context(windows, 1000, Options(multi_windows=True))
        assert [c.win_handle for c in contexts] == [1000, 1001]

    def test_single_window_by_default(self):
        windows = [make_window(1001, "x", CursorPos(0, 0)), make_window(1000, "y", CursorPos(0, 0))]
        contexts = get_window_context(windows, 1000, Options())
        assert [c.win_handle for c in contexts] == [1000]

    def test_contexts_are_clipped(self):
        windows = [make_window(1000, "a\nb\nc", CursorPos(1, 0))]
        contexts = get_window_context(windows, 1000, Options(direction=HintDirection.AFTER_CURSOR))
        assert [l.line_row for l in contexts[0].lines] == [1, 2]

    def test_unknown_focused_window(self):
        with pytest.raises(ValueError):
            get_window_context([make_window(1000, "a", CursorPos(0, 0))], 42, Options())
