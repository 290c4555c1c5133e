"""
Registry resolution for search terms.
"""

from typing import List, Tuple

from src.config.config import Config
from src.utils.errors import AggregateError
from src.utils.logging import get_logger

logger = get_logger(__name__)


def get_registry(term: str) -> str:
    """
    Return the registry named at the start of a search term, or "".

    The leading path component is a registry when it looks like a host:
    it contains a dot or a port separator, or is "localhost".
    A term ending in "/" names a registry as a whole.
    """
    if term.endswith("/"):
        return term[:-1]
    head, sep, _ = term.partition("/")
    if not sep:
        return ""
    if "." in head or ":" in head or head == "localhost":
        return head
    return ""


def split_term(term: str) -> Tuple[str, str]:
    """
    Split a search term into its registry and the remaining term.

    Args:
        term: Raw search term, e.g. "quay.io/coreos/etcd" or "alpine"

    Returns:
        (registry, term) tuple; registry is "" when the term names none
    """
    registry = get_registry(term)
    if registry:
        term = term[len(registry) + 1:]
    return registry, term


def get_registries(registry: str, config: Config) -> List[str]:
    """
    Get the list of registries to search.

    Args:
        registry: Registry named in the search term, or ""
        config: Loaded configuration holding the default search registries

    Returns:
        Registries to search, in order

    Raises:
        AggregateError: If no registry could be resolved
    """
    if registry:
        return [registry]

    registries = list(config.registries.search)
    if not registries:
        raise AggregateError("error getting registries to search: none configured")

    logger.debug(f"Searching configured registries: {registries}")
    return registries
