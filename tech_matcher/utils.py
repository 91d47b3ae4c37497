# tech_matcher/utils.py
from typing import Any, Iterable, List


def normalize_tag(tag: Any) -> str:
    """Strip and lowercase a skill/area tag. Non-strings become ''."""
    if not isinstance(tag, str):
        return ""
    return " ".join(tag.split()).lower()


def unique_lower(items: Iterable[Any]) -> List[str]:
    out = []
    seen = set()
    for x in items or []:
        k = normalize_tag(x)
        if k and k not in seen:
            seen.add(k)
            out.append(k)
    return out


def as_tag_list(value: Any) -> List[str]:
    """
    Coerce whatever storage gave us into an ordered list of tags.
    A bare string counts as a single tag; anything that is not a
    collection counts as empty.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return unique_lower([value])
    if isinstance(value, (list, tuple, set, frozenset)):
        return unique_lower(value)
    return []


def as_int(value: Any, default: int = 0, minimum: int = 0) -> int:
    if isinstance(value, bool):
        return default
    try:
        n = int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return max(minimum, n)


def as_float(value: Any, default: float = 0.0, low: float = 0.0, high: float = float("inf")) -> float:
    if isinstance(value, bool):
        return default
    try:
        x = float(value)
    except (TypeError, ValueError):
        return default
    if x != x or x in (float("inf"), float("-inf")):
        return default
    return min(high, max(low, x))


def as_bool(value: Any) -> bool:
    # only a real boolean true counts; "true" and 1 from loose exports do not
    return value is True
