"""
Response envelope and service request schemas.

WHAT: ``ResponseEnvelope`` is the single shape every service method
returns; ``ServiceRequest`` is the transport-neutral request a route hands
to a service.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResponseEnvelope(BaseModel):
    """
    Uniform response body: ``{status, error, payload}``.

    Exactly one of ``error`` and ``payload`` carries information; ``status``
    is always present.
    """

    status: int = Field(..., description="HTTP status code for the response")
    error: Optional[str] = Field(default=None, description="Error message, null on success")
    payload: Any = Field(default=None, description="Result data, null on failure or no-op")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "status": 200,
                "error": None,
                "payload": {"id": 1, "_id": "5f0c3c8e9b1e4a2f8d7c6b5a4e3d2c1b", "name": "Widget"},
            }
        },
    )

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ServiceRequest:
    """
    Request data handed from a route to a service.

    Attributes:
        body: Parsed JSON body (empty when the request has none)
        params: Path parameters
        query: Query-string parameters
    """

    body: Dict[str, Any] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    query: Dict[str, Any] = field(default_factory=dict)
