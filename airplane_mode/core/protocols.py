"""Value objects exchanged between the host and the policy gate."""

from __future__ import annotations

from typing import Any, Dict, FrozenSet, Optional, Union

from pydantic import BaseModel, Field


class Principal(BaseModel):
    """The caller identity supplied by the host for the current request."""
    id: Union[int, str] = 0
    capabilities: FrozenSet[str] = Field(default_factory=frozenset)

    def can(self, capability: str) -> bool:
        return capability in self.capabilities


class RequestContext(BaseModel):
    """Per-request state the host hands to request-scoped handlers."""
    url: str = "/"
    query: Dict[str, str] = Field(default_factory=dict)
    principal: Principal = Field(default_factory=Principal)
    is_admin: bool = False
    admin_bar_showing: bool = False
    # Filled in by handlers that want the host to redirect.
    redirect: Optional[str] = None


class HttpBlocked(BaseModel):
    """Tagged failure returned in place of an outbound HTTP response."""
    code: str = "airplane_mode_enabled"
    message: str = "Airplane Mode is enabled"
    url: str = ""


class ToolbarNode(BaseModel):
    id: str
    title: str
    href: str = ""
    meta: Dict[str, Any] = Field(default_factory=dict)


class Asset(BaseModel):
    """A stylesheet or script queued for output."""
    handle: str
    src: str
    kind: str = "style"           # style | script
    deps: list[str] = Field(default_factory=list)
    ver: Optional[str] = None
