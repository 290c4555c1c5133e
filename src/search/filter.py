"""
Search result filters.

This module parses `--filter` expressions into a SearchFilter and evaluates
it against registry results. Supported expressions:

    stars=<n>            at least n stars
    is-official[=false]  official images only (or non-official with =false)
    is-automated[=false] automated builds only (or non-automated with =false)

When a key is repeated, the last occurrence wins.
"""

import re
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict

from src.registry.types import RawResult
from src.utils.errors import ErrorDetail, FilterParseError
from src.utils.logging import get_logger

logger = get_logger(__name__)

STARS = "stars"
STARS_VALUE_PATTERN = re.compile(r"[0-9]+")
IS_OFFICIAL = "is-official"
IS_AUTOMATED = "is-automated"


class SearchFilter(BaseModel):
    """Parsed filter conditions; unset conditions accept every result."""

    model_config = ConfigDict(frozen=True)

    stars: int = 0
    is_official: Optional[bool] = None
    is_automated: Optional[bool] = None

    def matches(self, result: RawResult) -> bool:
        """Check a result against all conditions."""
        return (
            self.matches_stars(result)
            and self.matches_official(result)
            and self.matches_automated(result)
        )

    def matches_stars(self, result: RawResult) -> bool:
        return result.star_count >= self.stars

    def matches_official(self, result: RawResult) -> bool:
        if self.is_official is None:
            return True
        return result.is_official == self.is_official

    def matches_automated(self, result: RawResult) -> bool:
        if self.is_automated is None:
            return True
        return result.is_automated == self.is_automated


def _parse_stars(expression: str, value: Optional[str]) -> int:
    if value is None:
        raise FilterParseError(
            f"invalid `stars` filter {expression!r}, should be stars=<value>",
            details=[ErrorDetail(param=STARS, value=expression, message="missing value")],
        )
    if not STARS_VALUE_PATTERN.fullmatch(value):
        raise FilterParseError(
            "incorrect value type for stars filter",
            details=[
                ErrorDetail(
                    param=STARS,
                    value=value,
                    message="expected a non-negative integer",
                )
            ],
        )
    return int(value)


def parse_filters(expressions: Iterable[str]) -> SearchFilter:
    """
    Parse filter expressions.

    Args:
        expressions: Raw `key` or `key=value` strings, in command-line order

    Returns:
        Parsed filter

    Raises:
        FilterParseError: If a key is unknown or a value has the wrong type
    """
    expressions = list(expressions)
    values = {}
    for expression in expressions:
        key, sep, raw_value = expression.partition("=")
        value = raw_value if sep else None

        if key == STARS:
            values["stars"] = _parse_stars(expression, value)
        elif key == IS_OFFICIAL:
            values["is_official"] = value != "false"
        elif key == IS_AUTOMATED:
            values["is_automated"] = value != "false"
        else:
            raise FilterParseError(
                f"invalid filter type {expression!r}",
                details=[ErrorDetail(param=key, value=expression, message="unknown filter")],
            )

    search_filter = SearchFilter(**values)
    logger.debug(f"Parsed filters {expressions!r} into {search_filter!r}")
    return search_filter


def matches(result: RawResult, search_filter: SearchFilter) -> bool:
    """Check whether a registry result passes a filter."""
    return search_filter.matches(result)
