"""
Types shared between registry clients and the search pipeline.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class OptionalBool(str, Enum):
    """Tri-state flag: explicitly on, explicitly off, or left to the default."""

    TRUE = "true"
    FALSE = "false"
    UNDEFINED = "undefined"

    @classmethod
    def from_bool(cls, value: Optional[bool]) -> "OptionalBool":
        if value is None:
            return cls.UNDEFINED
        return cls.TRUE if value else cls.FALSE


class RawResult(BaseModel):
    """One search hit as returned by a registry."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    star_count: int = Field(0, ge=0)
    is_official: bool = False
    is_automated: bool = False


class SystemContext(BaseModel):
    """Connection settings handed to registry clients."""

    model_config = ConfigDict(frozen=True)

    auth_file: Optional[str] = None
    tls_verify: OptionalBool = OptionalBool.UNDEFINED
    registries_conf_path: Optional[str] = None
    timeout: float = 30.0

    @property
    def verify_tls(self) -> bool:
        """Certificates are verified unless explicitly disabled."""
        return self.tls_verify != OptionalBool.FALSE
