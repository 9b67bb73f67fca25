"""Endpoint and status API models for ngrok tunnels."""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from ..common.utils import is_secure_scheme


class Endpoint(BaseModel):
    """A publicly accessible URL that tunnels to the local machine."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(min_length=1, description="Public URL")
    secure: bool = Field(description="True when the URL uses https")

    @classmethod
    def from_entry(cls, entry: "TunnelEntry") -> "Endpoint":
        """Build an endpoint from one status API tunnel entry."""
        return cls(url=entry.public_url, secure=is_secure_scheme(entry.proto))


class TunnelEntry(BaseModel):
    """One tunnel as reported by the ngrok status API."""

    model_config = ConfigDict(extra="ignore")

    public_url: str
    proto: str


class TunnelsResponse(BaseModel):
    """Body of ``GET /api/tunnels``."""

    model_config = ConfigDict(extra="ignore")

    tunnels: list[TunnelEntry]


@dataclass(frozen=True)
class ConnectionInfo:
    """Result of connection discovery: endpoints or an error, never both."""

    endpoints: list[Endpoint] = field(default_factory=list)
    error: Exception | None = None

    def __post_init__(self) -> None:
        if self.error is None and not self.endpoints:
            raise ValueError("ConnectionInfo needs endpoints or an error")
        if self.error is not None and self.endpoints:
            raise ValueError("ConnectionInfo cannot carry both endpoints and an error")

    @property
    def ok(self) -> bool:
        return self.error is None
