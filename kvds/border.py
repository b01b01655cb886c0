"""Score borders for range queries: inclusive, exclusive or infinite."""

from __future__ import annotations

import math
from dataclasses import dataclass

NEGATIVE_INF = -1
POSITIVE_INF = 1

_PARSE_ERROR = "ERR min or max is not a float"


@dataclass(frozen=True)
class ScoreBorder:
    """One end of a score range; ``inf`` is -1, 0 or 1."""

    inf: int = 0
    value: float = 0.0
    exclude: bool = False

    def greater(self, value: float) -> bool:
        """Whether ``value`` lies below this border when used as the maximum."""
        if self.inf == NEGATIVE_INF:
            return False
        if self.inf == POSITIVE_INF:
            return True
        if self.exclude:
            return self.value > value
        return self.value >= value

    def less(self, value: float) -> bool:
        """Whether ``value`` lies above this border when used as the minimum."""
        if self.inf == NEGATIVE_INF:
            return True
        if self.inf == POSITIVE_INF:
            return False
        if self.exclude:
            return self.value < value
        return self.value <= value


POSITIVE_INF_BORDER = ScoreBorder(inf=POSITIVE_INF, value=math.inf)
NEGATIVE_INF_BORDER = ScoreBorder(inf=NEGATIVE_INF, value=-math.inf)


def _parse_float(text: str) -> float:
    if not text or text != text.strip() or "_" in text:
        raise ValueError(_PARSE_ERROR)
    try:
        return float(text)
    except ValueError:
        raise ValueError(_PARSE_ERROR) from None


def parse_score_border(text: str) -> ScoreBorder:
    """Parse ``inf``, ``+inf``, ``-inf``, a number, or ``(`` and a number for an exclusive border."""
    if text in ("inf", "+inf"):
        return POSITIVE_INF_BORDER
    if text == "-inf":
        return NEGATIVE_INF_BORDER
    if text.startswith("("):
        return ScoreBorder(value=_parse_float(text[1:]), exclude=True)
    return ScoreBorder(value=_parse_float(text), exclude=False)