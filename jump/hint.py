from enum import Enum, auto


class HintDirection(Enum):
    BEFORE_CURSOR = auto()  # only targets up to the cursor
    AFTER_CURSOR = auto()   # only targets from the cursor on


class HintPosition(Enum):
    START = auto()  # first column of the match
    MIDDLE = auto()
    END = auto()    # last column of the match
