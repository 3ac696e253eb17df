"""
extraction.py
=============
Response Extractor and payload accessors.

Model output is not guaranteed to be well-formed JSON: it may be wrapped in
prose, fenced as ```json, fenced without a tag, or bare. ``extract_json`` tries
an ordered list of strategies and returns the first JSON object that parses:

    0. the whole text (a shortcut for replies that are pure JSON; any
       reply it accepts would also be accepted by step 3)
    1. a fenced block tagged ``json``
    2. any fenced block (a leading language tag is ignored)
    3. the greedy span from the first ``{`` to the last ``}``

If none yields an object, ExtractionError is raised and the mapper decides
whether to scrape the text heuristically or give up.

The accessor helpers below let each mapper declare, per field, an ordered list
of dotted paths into the loosely-typed payload (``case.title``,
``case_details.title``, ``title``) evaluated first-match-wins.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from errors import ExtractionError

logger = logging.getLogger("detective.extraction")

Payload = Dict[str, Any]
FieldPaths = Sequence[str]


# ---------------------------------------------------------------------------
# JSON extraction cascade
# ---------------------------------------------------------------------------

_FENCED_JSON = re.compile(r"```[ \t]*json[ \t]*\r?\n?(.*?)```", re.DOTALL | re.IGNORECASE)
_FENCED_ANY  = re.compile(r"```(.*?)```", re.DOTALL)
_LANG_TAG    = re.compile(r"^[ \t]*[A-Za-z][\w+-]*[ \t]*\r?\n")
_BRACED      = re.compile(r"\{.*\}", re.DOTALL)


def _whole_text(raw: str) -> Optional[str]:
    return raw.strip()


def _fenced_json(raw: str) -> Optional[str]:
    match = _FENCED_JSON.search(raw)
    return match.group(1) if match else None


def _fenced_any(raw: str) -> Optional[str]:
    match = _FENCED_ANY.search(raw)
    if not match:
        return None
    return _LANG_TAG.sub("", match.group(1), count=1)


def _braced_span(raw: str) -> Optional[str]:
    match = _BRACED.search(raw)
    return match.group(0) if match else None


STRATEGIES: Tuple[Tuple[str, Callable[[str], Optional[str]]], ...] = (
    ("whole_text", _whole_text),
    ("fenced_json", _fenced_json),
    ("fenced_any", _fenced_any),
    ("braced_span", _braced_span),
)


def _parse_object(candidate: str) -> Optional[Payload]:
    try:
        parsed = json.loads(candidate)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def extract_json(raw: str) -> Payload:
    """
    Locate and parse the JSON object embedded in a model response.

    Args:
        raw: The completion text exactly as returned by the client.

    Returns:
        The parsed JSON object.

    Raises:
        ExtractionError: when no strategy yields a parseable JSON object.

    Examples:
        >>> extract_json('Here you go:\\n```json\\n{"a": 1}\\n```\\nThanks')
        {'a': 1}
        >>> extract_json('The answer is {"a": 1}.')
        {'a': 1}
    """
    if not raw or not raw.strip():
        raise ExtractionError("Empty model response", raw or "")

    for name, strategy in STRATEGIES:
        candidate = strategy(raw)
        if candidate is None:
            continue
        parsed = _parse_object(candidate)
        if parsed is not None:
            logger.debug("JSON extracted with strategy=%s", name)
            return parsed

    logger.warning(
        "No parseable JSON object in model response (first 200 chars): %r",
        raw[:200],
    )
    raise ExtractionError("No parseable JSON object found in model response", raw)


# ---------------------------------------------------------------------------
# Payload accessors
# ---------------------------------------------------------------------------

_MISSING = object()


def _resolve_path(data: Any, path: str) -> Any:
    current = data
    for key in path.split("."):
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _is_absent(value: Any) -> bool:
    if value is _MISSING or value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict, tuple)):
        return len(value) == 0
    return False


def first_present(data: Any, paths: FieldPaths, default: Any = None) -> Any:
    """
    Return the value at the first path that holds something.

    None, blank strings and empty containers count as absent; ``0`` and
    ``False`` are present values.

    Example:
        >>> first_present({"case_details": {"title": "T"}}, ("case.title", "case_details.title"))
        'T'
    """
    for path in paths:
        value = _resolve_path(data, path)
        if not _is_absent(value):
            return value
    return default


def as_text(value: Any, default: str = "") -> str:
    """Coerce a scalar payload value to stripped text."""
    if _is_absent(value):
        return default
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float, bool)):
        return str(value)
    return default


def as_text_list(value: Any) -> List[str]:
    """
    Normalise a list-or-string payload value to a list of non-blank strings.

    A bare string becomes a one-element list. Dict items contribute their
    first textual value (models sometimes return ``[{"question": "..."}]``).
    """
    if _is_absent(value):
        return []
    if isinstance(value, str):
        return [value.strip()]
    if not isinstance(value, (list, tuple)):
        return []

    items: List[str] = []
    for item in value:
        if isinstance(item, dict):
            item = next((v for v in item.values() if isinstance(v, str) and v.strip()), "")
        text = as_text(item)
        if text:
            items.append(text)
    return items


def as_dict_list(value: Any) -> List[Payload]:
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, dict)]


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def coerce_score(value: Any, low: int = 0, high: int = 100, default: int = 50) -> int:
    """
    Coerce a model-reported score to an integer clamped to [low, high].

    Integers and floats are truncated; strings are read like ``parseInt``
    (leading digits, so ``"75%"`` is 75). Anything non-numeric, including
    booleans, yields ``default``.

    Examples:
        >>> coerce_score("150")
        100
        >>> coerce_score("abc")
        50
        >>> coerce_score(-3)
        0
    """
    number: Optional[int] = None
    if isinstance(value, bool):
        number = None
    elif isinstance(value, int):
        number = value
    elif isinstance(value, float):
        number = int(value) if math.isfinite(value) else None
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        number = int(match.group(1)) if match else None

    if number is None:
        return default
    return max(low, min(high, number))


_AFFIRMATIVE = frozenset({"true", "yes", "correct", "solved"})


def is_affirmative(value: Any) -> bool:
    """True for ``True`` or an affirmative string such as ``"true"``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _AFFIRMATIVE
    return False


def any_affirmative(data: Payload, keys: Iterable[str]) -> bool:
    return any(is_affirmative(_resolve_path(data, key)) for key in keys)
