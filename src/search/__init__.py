"""
Container image search across registries.

This package provides filter parsing, per-registry query execution,
result projection, aggregation across registries and output formatting.
"""

from src.search.aggregator import SearchAggregator
from src.search.executor import RegistryQueryExecutor
from src.search.filter import SearchFilter, matches, parse_filters
from src.search.formatter import SearchResultFormatter, gen_search_format, render
from src.search.options import DEFAULT_LIMIT, SearchOptions
from src.search.projector import DisplayRecord, index_label, project

__all__ = [
    "SearchAggregator",
    "RegistryQueryExecutor",
    "SearchFilter",
    "matches",
    "parse_filters",
    "SearchResultFormatter",
    "gen_search_format",
    "render",
    "DEFAULT_LIMIT",
    "SearchOptions",
    "DisplayRecord",
    "index_label",
    "project",
]
