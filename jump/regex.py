import logging
import re
from abc import ABC, abstractmethod

from editor.window import cell2char
from jump import mappings
from jump.hint import HintDirection

logger = logging.getLogger(__name__)


class InvalidPatternError(ValueError):
    """Raised when a search pattern cannot be compiled."""

    def __init__(self, pattern, reason):
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class Regex(ABC):
    """A rule telling where jump targets sit on a line.

    `match(s, mctx)` returns the half-open span (begin, end) of the first match in
    `s`, relative to `s`, or None. `oneshot` regexes only give the first match of a
    line; `linewise` ones describe the line as a whole rather than a place in it.
    """
    oneshot = False
    linewise = False

    @abstractmethod
    def match(self, s, mctx):
        pass


class PatternRegex(Regex):
    """Regex backed by a compiled `re` pattern."""

    def __init__(self, pattern, flags=0, oneshot=False, linewise=False):
        try:
            self.pattern = re.compile(pattern, flags)
        except re.error as e:
            raise InvalidPatternError(pattern, e) from e
        self.oneshot = oneshot
        self.linewise = linewise
        logger.debug("Compiled pattern %r (flags=%s)", pattern, flags)

    def match(self, s, mctx=None):
        # Search the whole scanned line from the suffix start so that word
        # boundaries and lookbehinds see the characters preceding `s`.
        if mctx is not None and mctx.line:
            m = self.pattern.search(mctx.line, mctx.offset)
            offset = mctx.offset
        else:
            m = self.pattern.search(s)
            offset = 0
        if m is None:
            return None
        return m.start() - offset, m.end() - offset


class LineStartRegex(Regex):
    oneshot = True
    linewise = True

    def match(self, s, mctx=None):
        return 0, 0


class VerticalRegex(Regex):
    """Column under the cursor on every line, clamped to the line's last character."""
    oneshot = True
    linewise = True

    def match(self, s, mctx):
        # The cursor line is not hinted after the cursor; other lines take the first column.
        if mctx.direction == HintDirection.AFTER_CURSOR:
            return 0, min(1, len(s))
        idx = cell2char(s, mctx.col_first)
        if idx < len(s):
            return idx, idx + 1
        return max(0, len(s) - 1), len(s)


def starts_with_uppercase(s):
    if not s:
        return False
    # A space has no case but upper() leaves it alone, so rule it out first.
    if s[0] == ' ':
        return False
    return s[0].upper() == s[0]


def regex_by_searching(pat, plain_search=False):
    if plain_search:
        pat = re.escape(pat)
    return PatternRegex(pat)


def regex_by_case_searching(pat, plain_search, opts):
    """Search `pat`, honouring case settings and alternate-character mappings."""
    if not pat:
        raise InvalidPatternError(pat, "empty pattern")

    ignore_case = False
    if opts.smart_case:
        ignore_case = not starts_with_uppercase(pat)
    elif opts.case_insensitive:
        ignore_case = True
    pat_mappings = mappings.checkout(pat, opts)

    if plain_search:
        pat = re.escape(pat)
    if pat_mappings:
        pat = f'(?:{pat})|(?:{pat_mappings})'

    return PatternRegex(pat, re.IGNORECASE if ignore_case else 0)


def regex_by_word_start():
    return regex_by_searching(r'\w+')


_CAMEL_CASE_PARTS = [
    r'[A-Z][a-z]+',             # Camel
    r'[A-Z]+(?=[A-Z][a-z])',    # acronym followed by a Camel word: HTTPServer
    r'[A-Z]+',
    r'[a-z]+',
    r'#[0-9a-fA-F]+\b',         # #rgb colours
    r'\b0[xX][0-9a-fA-F]+\b',
    r'\b0[oO][0-7]+\b',
    r'\b0[bB][01]+\b',
    r'[0-9]+',
    r'~', r'!', r'@', r'#', r'\$',
]


def regex_by_camel_case():
    return regex_by_searching('|'.join(f'(?:{part})' for part in _CAMEL_CASE_PARTS))


def by_line_start():
    return LineStartRegex()


def regex_by_vertical():
    return VerticalRegex()


def regex_by_line_start_skip_whitespace():
    return PatternRegex(r'\S', oneshot=True, linewise=True)


def regex_by_anywhere():
    # word start, word end, camelCase hump, after '_', after '#'
    return regex_by_searching(r'\b\w|\w\b|(?<=[a-z])[A-Z]|(?<=_).|(?<=#).')
