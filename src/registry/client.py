"""
Registry search clients.

This module defines the search capability the aggregator depends on and
HTTP implementations for the Docker Registry V1 search API and the V2
catalog API.
"""

import abc
import asyncio
from typing import Any, Dict, List, Optional, Sequence, Tuple

import aiohttp
from pydantic import ValidationError

from src.registry.auth import load_credentials
from src.registry.types import RawResult, SystemContext
from src.utils.errors import ErrorCode, RegistryQueryError
from src.utils.logging import get_logger

logger = get_logger(__name__)

DOCKER_HUB_HOST = "docker.io"
DOCKER_HUB_API_HOST = "index.docker.io"


class RegistryClient(abc.ABC):
    """Search capability of a container image registry."""

    @abc.abstractmethod
    async def search(
        self,
        host: str,
        term: str,
        limit: int,
        context: Optional[SystemContext] = None,
    ) -> List[RawResult]:
        """
        Search a registry for images matching a term.

        Args:
            host: Registry host name
            term: Search term
            limit: Maximum number of results to request
            context: Connection settings (optional)

        Returns:
            Results in the order the registry returned them

        Raises:
            RegistryQueryError: If the registry cannot be searched
        """


class HTTPRegistryClient(RegistryClient):
    """Base class for clients speaking HTTP to a registry."""

    def _api_host(self, host: str) -> str:
        if host == DOCKER_HUB_HOST:
            return DOCKER_HUB_API_HOST
        return host

    async def _get_json(
        self,
        host: str,
        path: str,
        params: Dict[str, Any],
        context: SystemContext,
    ) -> Any:
        """
        Issue a GET request against a registry and decode the JSON body.

        Raises:
            RegistryQueryError: On transport errors, timeouts, non-200
                responses and undecodable bodies
        """
        url = f"https://{self._api_host(host)}{path}"
        auth = None
        credentials = load_credentials(context.auth_file, host)
        if credentials:
            auth = aiohttp.BasicAuth(*credentials)

        request_kwargs: Dict[str, Any] = {"params": params, "auth": auth}
        if not context.verify_tls:
            request_kwargs["ssl"] = False

        timeout = aiohttp.ClientTimeout(total=context.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, **request_kwargs) as response:
                    if response.status == 401:
                        raise RegistryQueryError(
                            f"unauthorized to search {host}",
                            registry=host,
                            code=ErrorCode.REGISTRY_UNAUTHORIZED,
                        )
                    if response.status != 200:
                        raise RegistryQueryError(
                            f"error searching {url}: HTTP {response.status}",
                            registry=host,
                        )
                    return await response.json(content_type=None)

        except aiohttp.ClientError as e:
            raise RegistryQueryError(f"HTTP error: {e}", registry=host)

        except asyncio.TimeoutError:
            raise RegistryQueryError(
                f"request to {url} timed out after {context.timeout} seconds",
                registry=host,
                code=ErrorCode.SEARCH_TIMEOUT,
            )

        except ValueError as e:
            raise RegistryQueryError(f"invalid response from {url}: {e}", registry=host)


class DockerV1SearchClient(HTTPRegistryClient):
    """Client for the `/v1/search` endpoint served by Docker Hub and compatible registries."""

    async def search(
        self,
        host: str,
        term: str,
        limit: int,
        context: Optional[SystemContext] = None,
    ) -> List[RawResult]:
        context = context or SystemContext()
        data = await self._get_json(
            host, "/v1/search", {"q": term, "n": str(limit)}, context
        )

        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            raise RegistryQueryError(
                f"unexpected search response from {host}", registry=host
            )

        results = []
        for item in data["results"]:
            try:
                results.append(
                    RawResult(
                        name=item.get("name", ""),
                        description=item.get("description") or "",
                        star_count=item.get("star_count") or 0,
                        is_official=bool(item.get("is_official", False)),
                        is_automated=bool(item.get("is_automated", False)),
                    )
                )
            except (AttributeError, ValidationError) as e:
                raise RegistryQueryError(
                    f"malformed search result from {host}: {e}", registry=host
                )

        logger.debug(f"V1 search of {host} for {term!r} returned {len(results)} results")
        return results


class CatalogV2SearchClient(HTTPRegistryClient):
    """
    Client for registries that only serve the V2 `_catalog` endpoint.

    The catalog has no search support, so repositories are matched by
    substring on the client side and carry no description or stars.
    """

    async def search(
        self,
        host: str,
        term: str,
        limit: int,
        context: Optional[SystemContext] = None,
    ) -> List[RawResult]:
        context = context or SystemContext()
        data = await self._get_json(host, "/v2/_catalog", {}, context)

        repositories = data.get("repositories") if isinstance(data, dict) else None
        if not isinstance(repositories, list):
            raise RegistryQueryError(
                f"unexpected catalog response from {host}", registry=host
            )

        results = [
            RawResult(name=repo)
            for repo in repositories
            if isinstance(repo, str) and term in repo
        ]
        logger.debug(f"V2 catalog of {host} matched {len(results)} repositories for {term!r}")
        return results[:limit]


class FallbackSearchClient(RegistryClient):
    """
    Tries each client in turn and returns the first successful search.

    V1 search clients are skipped for an empty term, which lists the catalog.
    """

    def __init__(self, clients: Optional[Sequence[RegistryClient]] = None):
        """
        Initialize the fallback client.

        Args:
            clients: Clients to try, in order (defaults to V1 search, then V2 catalog)
        """
        self.clients: Tuple[RegistryClient, ...] = tuple(
            clients or (DockerV1SearchClient(), CatalogV2SearchClient())
        )

    async def search(
        self,
        host: str,
        term: str,
        limit: int,
        context: Optional[SystemContext] = None,
    ) -> List[RawResult]:
        last_error: Optional[RegistryQueryError] = None
        for client in self.clients:
            if not term and isinstance(client, DockerV1SearchClient):
                logger.debug(f"Skipping {type(client).__name__} for {host}: empty term")
                continue
            try:
                return await client.search(host, term, limit, context)
            except RegistryQueryError as e:
                logger.debug(f"{type(client).__name__} failed for {host}: {e}")
                last_error = e
        if last_error is None:
            raise RegistryQueryError(f"no search client can list {host}", registry=host)
        raise last_error
