"""Pydantic models for the authorization request sent to the PDP."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class ConnectionTuple(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ip_address: str = Field(default="", alias="ipAddress")
    port: int = Field(default=0, ge=0, le=65535)


class IncomingHttpRequest(BaseModel):
    """The intercepted call being authorized."""

    scheme: str = ""
    method: str = ""
    path: str = ""
    query: Dict[str, Any] = Field(default_factory=dict)
    headers: Dict[str, str] = Field(default_factory=dict)


class Resources(BaseModel):
    requirements: List[str] = Field(default_factory=list)
    attributes: Dict[str, str] = Field(default_factory=dict)


class AuthorizationInput(BaseModel):
    request: IncomingHttpRequest = Field(default_factory=IncomingHttpRequest)
    resources: Resources = Field(default_factory=Resources)
    source: ConnectionTuple = Field(default_factory=ConnectionTuple)
    destination: ConnectionTuple = Field(default_factory=ConnectionTuple)

    @classmethod
    def from_addresses(
        cls,
        request: IncomingHttpRequest,
        resources: Resources,
        source: str,
        destination: str,
    ) -> "AuthorizationInput":
        return cls(
            request=request,
            resources=resources,
            source=ConnectionTuple(ip_address=source),
            destination=ConnectionTuple(ip_address=destination),
        )


class AuthorizationRequest(BaseModel):
    input: AuthorizationInput = Field(default_factory=AuthorizationInput)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


__all__ = [
    "AuthorizationRequest",
    "AuthorizationInput",
    "IncomingHttpRequest",
    "Resources",
    "ConnectionTuple",
]
