"""Jump targets: places in visible buffers where the user might want to jump.

Targets are kept in a flat list in discovery order (window by window, line by
line, left to right), which is the order hints are laid out in. Their priority
lives in a parallel list of indirect jump targets, (index, score) pairs sorted by
score, so that the closest targets can get the shortest labels without moving
the targets themselves.
"""
import logging
import operator
from dataclasses import dataclass, field
from itertools import accumulate
from typing import List, Optional

from editor.cursor import CursorPos
from editor.window import LineContext, WindowContext, byte2char, byteidx, cell2char, display_width
from jump.hint import HintDirection, HintPosition
from jump.regex import Regex

logger = logging.getLogger(__name__)

# Upper bound on the characters of a single line looked at by the scanner.
MAX_SCAN_CHARS = 10000
# Minimum score penalty per unit of window handle distance from the focused window.
WINDOW_BIAS = 1000


@dataclass(frozen=True)
class JumpTarget:
    window: int
    buffer: int
    cursor: CursorPos
    length: int  # bytes covered by the match, 0 for anchors like line starts


@dataclass(frozen=True)
class IndirectJumpTarget:
    index: int  # 1-based position in Locations.jump_targets
    score: int  # lower comes first, unless the distribution is reversed


@dataclass
class Locations:
    jump_targets: List[JumpTarget] = field(default_factory=list)
    indirect_jump_targets: List[IndirectJumpTarget] = field(default_factory=list)

    def target(self, indirect_jump_target):
        return self.jump_targets[indirect_jump_target.index - 1]

    def sorted_targets(self):
        """Jump targets in priority order."""
        return [self.target(ijt) for ijt in self.indirect_jump_targets]


@dataclass(frozen=True)
class MatchContext:
    """What a Regex may know besides the text it searches.

    `line` is the whole scanned text and `offset` the position the searched
    suffix starts at in it.
    """
    col_first: int
    direction: Optional[HintDirection]
    line: str = ''
    offset: int = 0


@dataclass
class JumpContext:
    win_ctx: WindowContext
    line_ctx: LineContext
    regex: Regex
    x_bias: int
    direction: Optional[HintDirection]
    hint_position: HintPosition


def manh_dist(a, b, x_bias):
    """Manhattan distance between two positions, rows weighted by `x_bias`."""
    return x_bias * abs(b.row - a.row) + abs(b.col - a.col)


def mark_jump_targets_line(ctx):
    """Jump targets of a single line, left to right."""
    win_ctx = ctx.win_ctx
    line = ctx.line_ctx.line
    jump_targets = []

    end_cell = display_width(line)
    if win_ctx.win_width is not None:
        end_cell = win_ctx.col_offset + win_ctx.win_width

    # Cut the visible part of the line; cells go to chars, the bias is in bytes
    left_idx = cell2char(line, win_ctx.col_offset)
    right_idx = max(left_idx, cell2char(line, end_cell))
    shifted_line = line[left_idx:right_idx]
    col_bias = byteidx(line, left_idx)

    if ctx.direction == HintDirection.AFTER_CURSOR:
        start = byte2char(shifted_line, win_ctx.cursor.col - col_bias)
        col_bias += byteidx(shifted_line, start)
        shifted_line = shifted_line[start:]
    elif ctx.direction == HintDirection.BEFORE_CURSOR:
        if win_ctx.cursor.col < col_bias:
            return jump_targets
        # the character under the cursor is kept
        shifted_line = shifted_line[:byte2char(shifted_line, win_ctx.cursor.col - col_bias) + 1]

    # Nothing left of a horizontally scrolled line
    if not shifted_line and win_ctx.col_offset > 0:
        return jump_targets

    if len(shifted_line) > MAX_SCAN_CHARS:
        logger.debug("Line %d truncated to %d characters for scanning", ctx.line_ctx.line_row, MAX_SCAN_CHARS)
        shifted_line = shifted_line[:MAX_SCAN_CHARS]

    byte_offsets = [0, *accumulate(len(c.encode('utf-8')) for c in shifted_line)]

    col = 0
    while True:
        s = shifted_line[col:]
        span = ctx.regex.match(s, MatchContext(win_ctx.col_first, ctx.direction, shifted_line, col))
        if span is None:
            break

        b, e = span
        assert 0 <= b <= e <= len(s), f"match span {span} out of [0, {len(s)}]"
        # a zero-width match at the scan position only counts for linewise regexes
        if b == e == 0 and not ctx.regex.linewise:
            break
        matched_length = byte_offsets[col + e] - byte_offsets[col + b]
        # A hint sits on a cell, so anchors between cells (like line starts) take the next one
        if b == e:
            e += 1

        if ctx.hint_position == HintPosition.MIDDLE:
            colp = col + (b + e) // 2
        elif ctx.hint_position == HintPosition.END:
            colp = col + e - 1
        else:
            colp = col + b
        colp = min(colp, len(shifted_line))

        jump_targets.append(JumpTarget(
            window=win_ctx.win_handle,
            buffer=win_ctx.buf_handle,
            cursor=CursorPos(ctx.line_ctx.line_row, max(0, byte_offsets[colp] + col_bias)),
            length=max(0, matched_length),
        ))

        if ctx.regex.oneshot or not s:
            break
        col += e
        if col > len(shifted_line):
            break

    return jump_targets


def create_jump_targets_for_line(ctx, locations, win_bias=0):
    """Scan a line and append its targets, scored, to `locations`."""
    for jump_target in mark_jump_targets_line(ctx):
        locations.jump_targets.append(jump_target)
        locations.indirect_jump_targets.append(IndirectJumpTarget(
            index=len(locations.jump_targets),
            score=manh_dist(ctx.win_ctx.cursor, jump_target.cursor, ctx.x_bias) + win_bias,
        ))


def _window_bias_unit(window_contexts, x_bias):
    """Penalty per window step, above any distance reachable inside a window."""
    unit = WINDOW_BIAS
    for win_ctx in window_contexts:
        rows = [line_ctx.line_row for line_ctx in win_ctx.lines] + [win_ctx.cursor.row]
        max_col = max([len(line_ctx.line.encode('utf-8')) for line_ctx in win_ctx.lines] + [win_ctx.cursor.col])
        unit = max(unit, abs(x_bias) * (max(rows) - min(rows)) + max_col + 1)
    return unit


def jump_targets_by_scanning_lines(regex, opts, window_contexts, current_window):
    """Jump targets of every visible line of every window context.

    `window_contexts` must already be clipped to `opts.direction`: after the
    cursor the first line is the cursor line, before the cursor the last one.
    Targets of windows other than `current_window` always score worse than those
    of the focused window.
    """
    locations = Locations()
    unit = _window_bias_unit(window_contexts, opts.x_bias)

    for win_ctx in window_contexts:
        win_bias = abs(current_window - win_ctx.win_handle) * unit
        lines = win_ctx.lines
        if not lines:
            continue

        def scan(line_ctx, direction=None):
            jump_ctx = JumpContext(win_ctx, line_ctx, regex, opts.x_bias, direction, opts.hint_position)
            create_jump_targets_for_line(jump_ctx, locations, win_bias)

        # Linewise targets do not depend on the cursor column, so the cursor line is left out
        if opts.direction == HintDirection.AFTER_CURSOR:
            if not regex.linewise:
                scan(lines[0], opts.direction)
            for line_ctx in lines[1:]:
                scan(line_ctx)
        elif opts.direction == HintDirection.BEFORE_CURSOR:
            for line_ctx in lines[:-1]:
                scan(line_ctx)
            if not regex.linewise:
                scan(lines[-1], opts.direction)
        else:
            for line_ctx in lines:
                is_cursor_line = (win_ctx.win_handle == current_window
                                  and win_ctx.cursor.row == line_ctx.line_row)
                if regex.linewise and is_cursor_line:
                    continue
                scan(line_ctx)

    sort_indirect_jump_targets(locations.indirect_jump_targets, opts)
    logger.debug("Found %d jump target(s) in %d window(s)", len(locations.jump_targets), len(window_contexts))
    return locations


def jump_targets_for_current_line(regex, opts, window_contexts, current_window):
    """Jump targets of the cursor line of the first window context only."""
    locations = Locations()
    if not window_contexts:
        return locations

    win_ctx = window_contexts[0]
    line_ctx = next((lc for lc in win_ctx.lines if lc.line_row == win_ctx.cursor.row), None)
    if line_ctx is None:
        raise ValueError(f"Cursor row {win_ctx.cursor.row} is not in the window context")

    jump_ctx = JumpContext(win_ctx, line_ctx, regex, opts.x_bias, opts.direction, opts.hint_position)
    unit = _window_bias_unit([win_ctx], opts.x_bias)
    create_jump_targets_for_line(jump_ctx, locations, abs(current_window - win_ctx.win_handle) * unit)

    sort_indirect_jump_targets(locations.indirect_jump_targets, opts)
    return locations


def sort_indirect_jump_targets(indirect_jump_targets, opts):
    """Sort by score in place, ascending or descending with reverse_distribution.

    The sort is stable: equal scores keep discovery order.
    """
    indirect_jump_targets.sort(key=operator.attrgetter('score'), reverse=opts.reverse_distribution)
