"""
Projection of registry results into display records.
"""

from pydantic import BaseModel, ConfigDict

from src.registry.types import RawResult

DESCRIPTION_TRUNC_LENGTH = 44
FLAG_MARKER = "[OK]"
DOCKER_HUB_INDEX = "docker.io"


class DisplayRecord(BaseModel):
    """A search result ready for output."""

    model_config = ConfigDict(frozen=True)

    index: str
    name: str
    description: str
    stars: int
    official: str
    automated: str


def index_label(registry: str) -> str:
    """
    Short index name shown for a registry.

    Hosts with more than two labels keep only the last two, so
    "registry.fedoraproject.org" becomes "fedoraproject.org".
    """
    labels = registry.split(".")
    if len(labels) > 2:
        return ".".join(labels[-2:])
    return registry


def _marker(flag: bool) -> str:
    return FLAG_MARKER if flag else ""


def project(
    raw: RawResult,
    registry: str,
    index: str,
    truncate: bool = True,
) -> DisplayRecord:
    """
    Build the display record for a registry result.

    Args:
        raw: Result returned by the registry
        registry: Host the result came from
        index: Index label of that host
        truncate: Cut long descriptions to DESCRIPTION_TRUNC_LENGTH characters

    Returns:
        Display record
    """
    description = raw.description.replace("\n", " ")
    if truncate and len(description) > DESCRIPTION_TRUNC_LENGTH:
        description = description[:DESCRIPTION_TRUNC_LENGTH] + "..."

    name = f"{registry}/{raw.name}"
    if index == DOCKER_HUB_INDEX and "/" not in raw.name:
        name = f"{index}/library/{raw.name}"

    return DisplayRecord(
        index=index,
        name=name,
        description=description,
        stars=raw.star_count,
        official=_marker(raw.is_official),
        automated=_marker(raw.is_automated),
    )
