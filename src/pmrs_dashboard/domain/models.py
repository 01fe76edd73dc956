"""Domain models for the proxy façade.

``Envelope`` is the only shape a caller ever sees, whatever happened
upstream. ``UpstreamResource`` names one proxied endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, model_validator

DEFAULT_RESPONSE_KEY = "payload"


class Envelope(BaseModel):
    """Uniform ``{success, payload}`` wrapper around an upstream result.

    ``success`` is False exactly when ``payload`` is None.
    """

    success: bool
    payload: Any = None

    @model_validator(mode="after")
    def _check_payload_matches_success(self) -> "Envelope":
        if self.success and self.payload is None:
            raise ValueError("a successful envelope must carry a payload")
        if not self.success and self.payload is not None:
            raise ValueError("a failed envelope must not carry a payload")
        return self

    @classmethod
    def ok(cls, payload: Any) -> "Envelope":
        return cls(success=True, payload=payload)

    @classmethod
    def failure(cls) -> "Envelope":
        return cls(success=False, payload=None)

    def to_response(self, response_key: str = DEFAULT_RESPONSE_KEY) -> dict[str, Any]:
        """Serialize to the JSON body, using ``response_key`` for the payload."""
        return {"success": self.success, response_key: self.payload}


@dataclass(frozen=True)
class UpstreamResource:
    """A resource served by the upstream at a fixed path."""

    name: str
    path: str
    response_key: str = DEFAULT_RESPONSE_KEY


SERVICES = UpstreamResource(name="services", path="/services")
SYSTEM = UpstreamResource(name="system", path="/system")

RESOURCES: dict[str, UpstreamResource] = {r.name: r for r in (SERVICES, SYSTEM)}
