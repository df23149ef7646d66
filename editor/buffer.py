import itertools
import logging

logger = logging.getLogger(__name__)

_buffer_handles = itertools.count(1)


class Buffer:
    """Read-only line storage for a text buffer, identified by a handle."""

    def __init__(self, initial_content=None, filepath=None, handle=None):
        self.handle = handle if handle is not None else next(_buffer_handles)
        self.lines = [""]
        self.filepath = filepath

        if filepath:
            self.load_from_file(filepath)
        elif initial_content:
            self.lines = initial_content.splitlines()
            if not self.lines:
                self.lines = [""]

    def get_line(self, line_num):
        if 0 <= line_num < len(self.lines):
            return self.lines[line_num]
        return None

    def get_line_count(self):
        return len(self.lines)

    def get_lines(self, start, end):
        """Lines in [start, end) clamped to the buffer, paired with their row."""
        start = max(0, start)
        end = min(end, len(self.lines))
        return [(row, self.lines[row]) for row in range(start, end)]

    def load_from_file(self, filepath):
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                self.lines = [line.rstrip('\n\r') for line in f.readlines()]
            if not self.lines:
                self.lines = [""]
            self.filepath = filepath
            logger.debug("File '%s' loaded (%d lines).", filepath, len(self.lines))
            return True
        except FileNotFoundError:
            logger.warning("File not found '%s'. Using an empty buffer.", filepath)
            self.lines = [""]
            self.filepath = filepath
            return False
