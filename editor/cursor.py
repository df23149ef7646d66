from dataclasses import dataclass


@dataclass(frozen=True)
class CursorPos:
    """A buffer position: 0-based row, 0-based byte column."""
    row: int
    col: int

    @classmethod
    def from_char_col(cls, line_text, row, char_col):
        """Build a position from a character column on `line_text`."""
        char_col = max(0, min(char_col, len(line_text)))
        return cls(row, len(line_text[:char_col].encode('utf-8')))
