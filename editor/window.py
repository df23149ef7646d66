import dataclasses
import functools
import logging
import unicodedata
from dataclasses import dataclass
from typing import Optional, Tuple

from editor.cursor import CursorPos
from jump.hint import HintDirection

logger = logging.getLogger(__name__)


# Columns on screen come in three flavours:
#   cell - display column, wide characters take two cells, combining marks none
#   char - index into the Python string
#   byte - UTF-8 byte offset, the unit of buffer columns (CursorPos.col)

@functools.lru_cache(maxsize=1024)
def char_width(char: str) -> int:
    """Display width of a single character."""
    if unicodedata.combining(char) or unicodedata.category(char) == 'Cf':
        return 0
    return 2 if unicodedata.east_asian_width(char) in "WF" else 1


def display_width(s: str) -> int:
    return sum(map(char_width, s))


def cell2char(line: str, cell: int) -> int:
    """Index of the first character of `line` not starting before display cell `cell`.

    A wide character straddling `cell` is skipped over, as are the zero-width
    marks attached to the last character before it.
    """
    if cell <= 0:
        return 0
    visual_pos = 0
    idx = 0
    while idx < len(line) and visual_pos < cell:
        visual_pos += char_width(line[idx])
        idx += 1
    while idx < len(line) and char_width(line[idx]) == 0:
        idx += 1
    return idx


def byteidx(line: str, idx: int) -> int:
    """UTF-8 byte offset of character `idx` in `line`."""
    return len(line[:idx].encode('utf-8'))


def byte2char(line: str, byte: int) -> int:
    """Index of the character of `line` containing byte offset `byte`."""
    if byte <= 0:
        return 0
    consumed = 0
    for idx, char in enumerate(line):
        consumed += len(char.encode('utf-8'))
        if consumed > byte:
            return idx
    return len(line)


@dataclass(frozen=True)
class LineContext:
    line_row: int
    line: str


@dataclass(frozen=True)
class WindowContext:
    """What the jump target scanner sees of a window.

    `col_offset` is the leftmost visible display cell, `win_width` the number of
    visible cells (None when lines are not cut on the right), and `col_first` the
    display cell, relative to `col_offset`, that vertical hints line up on.
    """
    win_handle: int
    buf_handle: int
    cursor: CursorPos
    col_offset: int = 0
    win_width: Optional[int] = None
    col_first: int = 0
    lines: Tuple[LineContext, ...] = ()


class Window:
    """A view on a buffer: cursor, vertical viewport and horizontal scroll."""

    def __init__(self, handle, buffer, cursor=None, viewport_start_line=0, height=None,
                 col_offset=0, width=None):
        self.handle = handle
        self.buffer = buffer
        self.cursor = cursor if cursor is not None else CursorPos(0, 0)
        self.viewport_start_line = viewport_start_line
        self.height = height
        self.col_offset = col_offset
        self.width = width

    def visible_rows(self):
        """Range of buffer rows shown in the viewport."""
        line_count = self.buffer.get_line_count()
        height = self.height if self.height is not None else line_count
        start = max(0, min(self.viewport_start_line, line_count - 1))
        return range(start, min(line_count, start + height))

    def get_window_context(self):
        rows = self.visible_rows()
        cursor_line = self.buffer.get_line(self.cursor.row) or ""
        cursor_cell = display_width(cursor_line[:byte2char(cursor_line, self.cursor.col)])
        return WindowContext(
            win_handle=self.handle,
            buf_handle=self.buffer.handle,
            cursor=self.cursor,
            col_offset=self.col_offset,
            win_width=self.width,
            col_first=max(0, cursor_cell - self.col_offset),
            lines=tuple(LineContext(row, text) for row, text in self.buffer.get_lines(rows.start, rows.stop)),
        )


def clip_window_context(win_ctx: WindowContext, direction: Optional[HintDirection]) -> WindowContext:
    """Drop the lines a directional jump cannot reach."""
    if direction == HintDirection.AFTER_CURSOR:
        lines = tuple(line_ctx for line_ctx in win_ctx.lines if line_ctx.line_row >= win_ctx.cursor.row)
    elif direction == HintDirection.BEFORE_CURSOR:
        lines = tuple(line_ctx for line_ctx in win_ctx.lines if line_ctx.line_row <= win_ctx.cursor.row)
    else:
        return win_ctx
    return dataclasses.replace(win_ctx, lines=lines)


def get_window_context(windows, current_window, opts):
    """Window contexts to scan, the focused window first.

    Other windows are only included when `opts.multi_windows` is set. Each
    context is already clipped to `opts.direction`.
    """
    focused = [w for w in windows if w.handle == current_window]
    if not focused:
        raise ValueError(f"Focused window {current_window} is not among the given windows")

    ordered = focused
    if opts.multi_windows:
        ordered = focused + [w for w in windows if w.handle != current_window]

    contexts = [clip_window_context(w.get_window_context(), opts.direction) for w in ordered]
    logger.debug("Collected %d window context(s), focused window %s", len(contexts), current_window)
    return contexts
