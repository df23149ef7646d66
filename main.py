import argparse
import logging
import sys

from editor.buffer import Buffer
from editor.cursor import CursorPos
from editor.window import Window, get_window_context
from jump import jump_target
from jump import regex as jump_regex
from jump.hint import HintDirection, HintPosition
from jump.options import Options

logger = logging.getLogger(__name__)

WINDOW_HANDLE = 1000
DEFAULT_HEIGHT = 40

MODES = {
    "word": jump_regex.regex_by_word_start,
    "camel": jump_regex.regex_by_camel_case,
    "line": jump_regex.by_line_start,
    "line-skip-whitespace": jump_regex.regex_by_line_start_skip_whitespace,
    "vertical": jump_regex.regex_by_vertical,
    "anywhere": jump_regex.regex_by_anywhere,
}

DIRECTIONS = {
    "after": HintDirection.AFTER_CURSOR,
    "before": HintDirection.BEFORE_CURSOR,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jump-targets",
        description="List the jump targets of a file around a cursor, closest first",
    )
    parser.add_argument("file", help="File to scan")
    parser.add_argument("--row", type=int, default=0, help="Cursor row (0-based)")
    parser.add_argument("--col", type=int, default=0, help="Cursor column in characters (0-based)")
    parser.add_argument("--mode", choices=sorted(MODES) + ["search"], default="word")
    parser.add_argument("--pattern", help="Pattern for --mode search")
    parser.add_argument("--plain", action="store_true", help="Search the pattern literally")
    parser.add_argument("--smart-case", action="store_true")
    parser.add_argument("--case-sensitive", action="store_true")
    parser.add_argument("--direction", choices=sorted(DIRECTIONS))
    parser.add_argument("--hint-position", choices=[p.name.lower() for p in HintPosition], default="start")
    parser.add_argument("--top", type=int, default=0, help="First visible row")
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT, help="Number of visible rows")
    parser.add_argument("--col-offset", type=int, default=0, help="Leftmost visible display column")
    parser.add_argument("--width", type=int, help="Number of visible display columns")
    parser.add_argument("--reverse", action="store_true", help="Farthest targets first")
    parser.add_argument("--current-line", action="store_true", help="Only scan the cursor line")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def options_from_args(args):
    return Options(
        direction=DIRECTIONS.get(args.direction),
        hint_position=HintPosition[args.hint_position.upper()],
        reverse_distribution=args.reverse,
        case_insensitive=not args.case_sensitive,
        smart_case=args.smart_case,
    )


def build_regex(args, opts):
    if args.mode == "search":
        return jump_regex.regex_by_case_searching(args.pattern or "", args.plain, opts)
    return MODES[args.mode]()


def format_locations(locations):
    lines = []
    for ijt in locations.indirect_jump_targets:
        target = locations.target(ijt)
        lines.append(f"{target.cursor.row}:{target.cursor.col} {target.length} {ijt.score}")
    return lines


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="[%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    opts = options_from_args(args)
    try:
        regex = build_regex(args, opts)
    except jump_regex.InvalidPatternError as e:
        logger.error("%s", e)
        return 2

    buffer = Buffer(filepath=args.file)
    cursor = CursorPos.from_char_col(buffer.get_line(args.row) or "", args.row, args.col)
    window = Window(WINDOW_HANDLE, buffer, cursor, viewport_start_line=args.top, height=args.height,
                    col_offset=args.col_offset, width=args.width)
    contexts = get_window_context([window], WINDOW_HANDLE, opts)

    if args.current_line:
        locations = jump_target.jump_targets_for_current_line(regex, opts, contexts, WINDOW_HANDLE)
    else:
        locations = jump_target.jump_targets_by_scanning_lines(regex, opts, contexts, WINDOW_HANDLE)

    for line in format_locations(locations):
        print(line)
    return 0


if __name__ == '__main__':
    sys.exit(main())
