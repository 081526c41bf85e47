import logging
import math
import uuid
from datetime import datetime, timezone
from typing import Any, List

logger = logging.getLogger(__name__)


def clamp_score(value: Any, low: float = 0.0, high: float = 100.0) -> float:
    """Coerce an oracle-supplied number into [low, high].

    Raises:
        ValueError: If the value is not numeric (bools are rejected too).
    """
    if isinstance(value, bool):
        raise ValueError(f"Score must be numeric, got bool: {value!r}")
    score = float(value)
    if math.isnan(score):
        raise ValueError("Score must not be NaN")
    if not (low <= score <= high):
        logger.debug(f"Score out of range: {score}, clipping to [{low}, {high}]")
    return max(low, min(high, score))


def dedupe_preserving_order(items: Any) -> List[str]:
    """Drop blank and case-insensitive duplicate strings, keeping first occurrences.

    A lone string counts as a single item.
    """
    if isinstance(items, str):
        items = [items]
    seen = set()
    result = []
    for item in items or []:
        text = str(item).strip()
        key = text.lower()
        if not text or key in seen:
            continue
        seen.add(key)
        result.append(text)
    return result


def coerce_str_list(value: Any) -> List[str]:
    """Read a list-of-strings field, keeping items verbatim.

    A lone string becomes a one-item list; null or empty becomes [].

    Raises:
        ValueError: If the value is neither a list nor a string.
    """
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"Expected a list of strings, got {type(value).__name__}: {value!r}")
    return [str(v) for v in value if v is not None]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def new_id(prefix: str) -> str:
    """Generate an identifier like ``job-3f2a9c...``."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"
