"""
Per-registry query execution.
"""

from typing import List, Optional

from src.registry.client import FallbackSearchClient, RegistryClient
from src.registry.types import RawResult, SystemContext
from src.utils.logging import get_logger

logger = get_logger(__name__)


class RegistryQueryExecutor:
    """
    Runs one search against one registry.

    A failing registry is logged and contributes no results, so the
    remaining registries can still be searched.
    """

    def __init__(self, client: Optional[RegistryClient] = None):
        """
        Initialize the executor.

        Args:
            client: Registry search client (defaults to V1 search with V2 catalog fallback)
        """
        self.client = client or FallbackSearchClient()

    async def query(
        self,
        registry: str,
        term: str,
        limit: int,
        context: Optional[SystemContext] = None,
    ) -> List[RawResult]:
        """
        Search a single registry.

        Args:
            registry: Registry host
            term: Search term
            limit: Number of results to request from the registry
            context: Connection settings passed through to the client

        Returns:
            Raw results in registry order, or an empty list if the query failed
        """
        try:
            results = await self.client.search(registry, term, limit, context)
        except Exception as e:
            logger.error(f"error searching registry {registry!r}: {e}")
            return []

        logger.info(f"Registry {registry} returned {len(results)} results for {term!r}")
        return list(results)
