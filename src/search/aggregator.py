"""
Search across several registries.

This module fans a search term out to every registry, then filters, caps
and projects each registry's results. Output keeps registry order and,
within a registry, the order the registry returned.
"""

import asyncio
import time
from typing import List, Optional, Sequence

from src.registry.types import RawResult, SystemContext
from src.search.executor import RegistryQueryExecutor
from src.search.filter import SearchFilter, parse_filters
from src.search.options import DEFAULT_LIMIT, SearchOptions
from src.search.projector import DisplayRecord, index_label, project
from src.utils.errors import AggregateError
from src.utils.logging import get_logger

logger = get_logger(__name__)


class SearchAggregator:
    """Searches a list of registries and merges their results."""

    def __init__(
        self,
        executor: Optional[RegistryQueryExecutor] = None,
        timeout: float = 30.0,
        registries_conf_path: Optional[str] = None,
    ):
        """
        Initialize the aggregator.

        Args:
            executor: Per-registry query executor
            timeout: Per-registry request timeout in seconds
            registries_conf_path: Registries configuration path passed to clients
        """
        self.executor = executor or RegistryQueryExecutor()
        self.timeout = timeout
        self.registries_conf_path = registries_conf_path

    def _system_context(self, options: SearchOptions) -> SystemContext:
        return SystemContext(
            auth_file=options.authfile,
            tls_verify=options.tls_verify,
            registries_conf_path=self.registries_conf_path,
            timeout=self.timeout,
        )

    async def search(
        self,
        term: str,
        registries: Sequence[str],
        options: SearchOptions,
        search_filter: Optional[SearchFilter] = None,
    ) -> List[DisplayRecord]:
        """
        Search all registries for a term.

        Args:
            term: Search term without a registry prefix
            registries: Registries to search, in output order
            options: Search options
            search_filter: Parsed filters (parsed from options.filters when omitted)

        Returns:
            Display records, grouped by registry in the given order

        Raises:
            AggregateError: If no registries were given
            FilterParseError: If filters must be parsed and are invalid
        """
        if not registries:
            raise AggregateError("no registries to search")

        if search_filter is None:
            search_filter = parse_filters(options.filters)

        start_time = time.time()
        context = self._system_context(options)
        query_limit = options.query_limit

        per_registry = await asyncio.gather(
            *(
                self.executor.query(registry, term, query_limit, context)
                for registry in registries
            )
        )

        records: List[DisplayRecord] = []
        for registry, results in zip(registries, per_registry):
            records.extend(
                self._collect(registry, results, options, search_filter)
            )

        logger.info(
            "Search for %r across %d registries returned %d results in %.2f seconds",
            term,
            len(registries),
            len(records),
            time.time() - start_time,
        )
        return records

    def _collect(
        self,
        registry: str,
        results: List[RawResult],
        options: SearchOptions,
        search_filter: SearchFilter,
    ) -> List[DisplayRecord]:
        index = index_label(registry)

        # The caller's limit applies to each registry separately
        cap = min(DEFAULT_LIMIT, len(results))
        if 0 < options.limit < len(results):
            cap = options.limit

        records = []
        for raw in results[:cap]:
            if options.filters and not search_filter.matches(raw):
                continue
            records.append(project(raw, registry, index, truncate=not options.no_trunc))
        return records

    def search_sync(
        self,
        term: str,
        registries: Sequence[str],
        options: SearchOptions,
        search_filter: Optional[SearchFilter] = None,
    ) -> List[DisplayRecord]:
        """Run search() to completion from synchronous code."""
        return asyncio.run(self.search(term, registries, options, search_filter))
