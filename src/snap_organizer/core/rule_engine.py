"""Rule matching for item names.

Filters, subcategories, exception rules and render keywords are all
evaluated against the item name alone. None of these functions raise:
an item that matches nothing simply has no match.
"""

import logging
from typing import Iterable, List, Optional

from ..models.config import ExceptionKind, ExceptionRule, Filter, FilterKind, Subcategory
from .extensions import normalize_extension, parse_extension

logger = logging.getLogger(__name__)


def matches_filter(item_name: str, rule_filter: Filter) -> bool:
    """Check if a single filter matches an item name (case-insensitive)."""
    name = item_name.lower()
    value = rule_filter.value.strip().lower()
    if not value:
        return False

    if rule_filter.kind == FilterKind.EXTENSION:
        return parse_extension(item_name) == normalize_extension(value)
    elif rule_filter.kind == FilterKind.NAME_PREFIX:
        return name.startswith(value)
    elif rule_filter.kind == FilterKind.NAME_KEYWORD:
        return value in name

    return False


def matches_any(item_name: str, filters: Iterable[Filter]) -> bool:
    """Check if any filter matches; an empty filter list never matches."""
    return any(matches_filter(item_name, f) for f in filters)


def subcategory_matches(item_name: str, subcategory: Subcategory) -> bool:
    """Check if an item belongs in a subcategory.

    A subcategory without filters takes every item that reaches it, unless
    it is marked as requiring keywords.
    """
    if subcategory.filters:
        return matches_any(item_name, subcategory.filters)
    return not subcategory.keyword_required


def resolve_subcategory(item_name: str, subcategories: List[Subcategory]) -> Optional[Subcategory]:
    """Find the first subcategory by order that takes the item.

    Returns:
        The matching subcategory or None if no subcategory matches
    """
    for subcategory in sorted(subcategories, key=lambda s: s.order):
        if subcategory_matches(item_name, subcategory):
            return subcategory
    return None


def others_folder_name(subcategory_count: int) -> str:
    """Name of the generated bucket for items no subcategory took, e.g. ``03_Others``."""
    return f"{subcategory_count + 1:02d}_Others"


def matches_exception(item_name: str, exception: ExceptionRule) -> bool:
    """Check if an exception rule matches an item name."""
    pattern = exception.pattern.lower()
    if not pattern.strip():
        return False

    if exception.kind == ExceptionKind.NAME_CONTAINS:
        return pattern in item_name.lower()
    elif exception.kind == ExceptionKind.EXTENSION:
        return parse_extension(item_name) == normalize_extension(pattern)

    return False


def find_matching_exception(item_name: str, exceptions: List[ExceptionRule]) -> Optional[ExceptionRule]:
    """Find the first exception rule, in list order, that matches an item name."""
    for exception in exceptions:
        if matches_exception(item_name, exception):
            logger.debug(f"Exception '{exception.pattern}' matched {item_name}")
            return exception
    return None


def matches_render_keywords(item_name: str, keywords: Iterable[str]) -> bool:
    """Check if an item name contains any render keyword (trimmed, case-insensitive)."""
    name = item_name.lower()
    for keyword in keywords or []:
        keyword = keyword.strip().lower()
        if keyword and keyword in name:
            return True
    return False
