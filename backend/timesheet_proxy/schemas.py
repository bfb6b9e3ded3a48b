from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class HealthResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    ok: bool = True
    warning: Optional[str] = None
    gas_reachable: Optional[bool] = None
    gas_status: Optional[int] = None
    data: Any = None
    error: Optional[str] = None


class ProxyErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class ProxyActionRequest(BaseModel):
    """Body relayed upstream; unknown keys are preserved."""

    model_config = ConfigDict(extra="allow")

    action: Optional[str] = None
