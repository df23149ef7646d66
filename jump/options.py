from dataclasses import dataclass
from typing import Optional, Tuple

from jump.hint import HintDirection, HintPosition


@dataclass
class Options:
    """Settings shared by matcher construction, scanning and scoring."""

    direction: Optional[HintDirection] = None
    hint_position: HintPosition = HintPosition.START
    # Weight of the row distance; higher values keep hints packed on the cursor row.
    x_bias: int = 10
    reverse_distribution: bool = False
    case_insensitive: bool = True
    smart_case: bool = False
    match_mappings: Tuple[str, ...] = ()
    multi_windows: bool = False
