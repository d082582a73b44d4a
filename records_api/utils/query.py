"""
Query builder for record reads, updates and deletes.

WHAT: Turns the flat option mappings that arrive in query strings and
request bodies into the condition set the data-access controller
understands.

WHY: Callers mix paging and projection hints (``skip``, ``limit``,
``sort``, ``return``, ``count``) with field filters in one mapping. The
builder separates the two so controllers only ever see field conditions.

HOW: Reserved keys are parsed and removed; every other key is passed
through unchanged as an equality condition. Wildcard searches become a
single ``WildcardCondition`` stored under ``WILDCARD_KEY`` so it can be
merged into an ordinary condition mapping.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from records_api.core.exceptions import ValidationError


WILDCARD_KEY = "$wildcard"
"""Condition key holding a WildcardCondition inside a condition mapping."""

RESERVED_KEYS = ("skip", "limit", "sort", "return", "count")

_TRUTHY = {"true", "1", "yes", "on"}


@dataclass(frozen=True)
class WildcardCondition:
    """
    Case-insensitive substring match of ``keyword`` against any of ``fields``.

    The per-field matches are OR-ed: a record matches when at least one of
    the listed fields contains the keyword.
    """

    fields: Tuple[str, ...]
    keyword: str


@dataclass
class BuiltQuery:
    """Result of build_query."""

    seek_conditions: Dict[str, Any]
    skip: int = 0
    limit: Optional[int] = None
    sort: List[Tuple[str, bool]] = field(default_factory=list)
    """(field, descending) pairs in priority order."""
    fields_to_return: List[str] = field(default_factory=list)
    count: bool = False


def split_keys(value: Union[str, Iterable[str], None]) -> List[str]:
    """
    Split a comma-separated key list, trimming whitespace and dropping blanks.

    Lists and tuples are accepted as-is (after the same cleanup).
    """
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [str(item).strip() for item in items if str(item).strip()]


def _parse_count(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"'{name}' must be a non-negative integer", option=name)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"'{name}' must be a non-negative integer", option=name)
    if number < 0:
        raise ValidationError(f"'{name}' must be a non-negative integer", option=name)
    return number


def _parse_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def _parse_sort(value: Any) -> List[Tuple[str, bool]]:
    sort = []
    for key in split_keys(value):
        if key.startswith("-"):
            sort.append((key[1:], True))
        else:
            sort.append((key.lstrip("+"), False))
    return [(name, descending) for name, descending in sort if name]


def build_query(options: Optional[Mapping[str, Any]]) -> BuiltQuery:
    """
    Split an options mapping into seek conditions and read modifiers.

    Args:
        options: Flat mapping from a query string or request body

    Returns:
        BuiltQuery whose seek_conditions hold every non-reserved key unchanged

    Raises:
        ValidationError: If skip or limit is not a non-negative integer, or
            the options name the wildcard condition key

    Example:
        >>> build_query({"name": "Widget", "limit": "10", "sort": "-id"})
        BuiltQuery(seek_conditions={'name': 'Widget'}, skip=0, limit=10,
                   sort=[('id', True)], fields_to_return=[], count=False)
    """
    options = dict(options or {})
    if WILDCARD_KEY in options:
        raise ValidationError(f"'{WILDCARD_KEY}' is not a valid option", option=WILDCARD_KEY)
    seek_conditions = {k: v for k, v in options.items() if k not in RESERVED_KEYS}

    skip = _parse_count("skip", options["skip"]) if options.get("skip") not in (None, "") else 0
    limit = (
        _parse_count("limit", options["limit"])
        if options.get("limit") not in (None, "")
        else None
    )

    return BuiltQuery(
        seek_conditions=seek_conditions,
        skip=skip,
        limit=limit,
        sort=_parse_sort(options.get("sort")),
        fields_to_return=split_keys(options.get("return")),
        count=_parse_flag(options.get("count", False)),
    )


def build_wildcard_options(keys: Optional[str], keyword: Optional[str]) -> Dict[str, WildcardCondition]:
    """
    Build the wildcard condition for a comma-separated key list.

    Args:
        keys: Field names, e.g. ``"name, description"``
        keyword: Substring to look for (case-insensitive)

    Returns:
        ``{WILDCARD_KEY: WildcardCondition(...)}``, ready to merge into
        a seek-condition mapping

    Raises:
        ValidationError: If no usable key is given or keyword is missing
    """
    fields = split_keys(keys)
    if not fields or keyword is None:
        raise ValidationError("Invalid key/keyword")
    return {WILDCARD_KEY: WildcardCondition(fields=tuple(fields), keyword=str(keyword))}
