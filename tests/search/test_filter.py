"""
Tests for search result filters.
"""

import unittest

from src.registry.types import RawResult
from src.search.filter import SearchFilter, matches, parse_filters
from src.utils.errors import ErrorCode, FilterParseError


class TestParseFilters(unittest.TestCase):
    """Tests for filter expression parsing."""

    def test_no_filters(self):
        """Test that no expressions give an empty filter."""
        search_filter = parse_filters([])
        self.assertEqual(search_filter, SearchFilter())
        self.assertEqual(search_filter.stars, 0)
        self.assertIsNone(search_filter.is_official)
        self.assertIsNone(search_filter.is_automated)

    def test_stars(self):
        """Test the stars filter."""
        self.assertEqual(parse_filters(["stars=5"]).stars, 5)
        self.assertEqual(parse_filters(["stars=0"]).stars, 0)

    def test_stars_requires_value(self):
        """Test that stars without a value is rejected."""
        with self.assertRaises(FilterParseError) as ctx:
            parse_filters(["stars"])
        self.assertIn("should be stars=<value>", ctx.exception.message)
        self.assertEqual(ctx.exception.code, ErrorCode.FILTER_PARSE_ERROR)

    def test_stars_requires_integer(self):
        """Test that non-numeric and negative star counts are rejected."""
        for expression in [
            "stars=abc", "stars=", "stars=1.5", "stars=-1", "stars=1_0", "stars= 5", "stars=5 "
        ]:
            with self.assertRaises(FilterParseError) as ctx:
                parse_filters([expression])
            self.assertEqual(
                ctx.exception.message, "incorrect value type for stars filter"
            )

    def test_value_split_on_first_equals(self):
        """Test that only the first '=' separates key and value."""
        with self.assertRaises(FilterParseError):
            parse_filters(["stars=3=4"])
        self.assertTrue(parse_filters(["is-official=a=b"]).is_official)

    def test_is_official(self):
        """Test the is-official filter."""
        self.assertTrue(parse_filters(["is-official"]).is_official)
        self.assertTrue(parse_filters(["is-official=true"]).is_official)
        self.assertTrue(parse_filters(["is-official=anything"]).is_official)
        self.assertFalse(parse_filters(["is-official=false"]).is_official)

    def test_is_automated(self):
        """Test the is-automated filter."""
        self.assertTrue(parse_filters(["is-automated"]).is_automated)
        self.assertFalse(parse_filters(["is-automated=false"]).is_automated)
        self.assertTrue(parse_filters(["is-automated=FALSE"]).is_automated)

    def test_unknown_filter(self):
        """Test that unknown filter keys are rejected."""
        with self.assertRaises(FilterParseError) as ctx:
            parse_filters(["stars=3", "is-trusted"])
        self.assertIn("invalid filter type", ctx.exception.message)
        self.assertIn("is-trusted", ctx.exception.message)

    def test_last_occurrence_wins(self):
        """Test that repeated keys resolve to the last value."""
        search_filter = parse_filters(
            ["stars=10", "is-official", "stars=2", "is-official=false"]
        )
        self.assertEqual(search_filter.stars, 2)
        self.assertFalse(search_filter.is_official)

    def test_deterministic(self):
        """Test that the same expressions always give the same filter."""
        expressions = ["is-automated", "stars=7", "is-official=false"]
        self.assertEqual(parse_filters(expressions), parse_filters(list(expressions)))

    def test_accepts_iterators(self):
        """Test that any iterable of expressions is accepted."""
        search_filter = parse_filters(iter(["stars=4", "is-official"]))
        self.assertEqual(search_filter.stars, 4)
        self.assertTrue(search_filter.is_official)


class TestMatches(unittest.TestCase):
    """Tests for filter evaluation."""

    def setUp(self):
        """Set up test fixtures."""
        self.official = RawResult(name="alpine", star_count=100, is_official=True)
        self.automated = RawResult(name="me/app", star_count=5, is_automated=True)
        self.plain = RawResult(name="me/tool", star_count=4)

    def test_empty_filter_accepts_everything(self):
        """Test that an empty filter accepts every result."""
        search_filter = SearchFilter()
        for result in [self.official, self.automated, self.plain]:
            self.assertTrue(matches(result, search_filter))

    def test_stars_lower_bound_is_inclusive(self):
        """Test that the star threshold includes the bound."""
        search_filter = parse_filters(["stars=5"])
        self.assertTrue(matches(self.automated, search_filter))
        self.assertFalse(matches(self.plain, search_filter))

    def test_official(self):
        """Test official equality."""
        only_official = parse_filters(["is-official"])
        self.assertTrue(matches(self.official, only_official))
        self.assertFalse(matches(self.plain, only_official))

        not_official = parse_filters(["is-official=false"])
        self.assertFalse(matches(self.official, not_official))
        self.assertTrue(matches(self.plain, not_official))

    def test_automated(self):
        """Test automated equality."""
        only_automated = parse_filters(["is-automated"])
        self.assertTrue(matches(self.automated, only_automated))
        self.assertFalse(matches(self.official, only_automated))

    def test_conditions_are_combined(self):
        """Test that all conditions must hold."""
        search_filter = parse_filters(["stars=50", "is-official", "is-automated=false"])
        self.assertTrue(matches(self.official, search_filter))
        self.assertFalse(matches(self.automated, search_filter))
        self.assertFalse(
            matches(
                RawResult(name="x", star_count=10, is_official=True),
                search_filter,
            )
        )
