"""
Per-invocation search options.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.registry.types import OptionalBool

DEFAULT_LIMIT = 25


class SearchOptions(BaseModel):
    """Options for a single search invocation."""

    model_config = ConfigDict(frozen=True)

    filters: List[str] = Field(default_factory=list)
    limit: int = Field(0, ge=0, description="Result limit per registry, 0 for the default cap")
    no_trunc: bool = False
    authfile: Optional[str] = None
    tls_verify: OptionalBool = OptionalBool.UNDEFINED
    format: str = ""

    @property
    def query_limit(self) -> int:
        """Number of results requested from each registry."""
        if self.limit > 0:
            return self.limit
        return DEFAULT_LIMIT
