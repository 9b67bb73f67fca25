"""Tunnel settings model."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_STATUS_URL = "http://127.0.0.1:4040/api/tunnels"


class TunnelSettings(BaseModel):
    """Timings and locations used when supervising an ngrok process."""

    model_config = ConfigDict(
        str_strip_whitespace=True, validate_assignment=True, extra="forbid"
    )

    binary_name: str = Field(
        default="ngrok", min_length=1, description="Executable looked up on PATH"
    )
    protocol: str = Field(
        default="http", min_length=1, description="ngrok tunnel verb"
    )
    status_url: str = Field(
        default=DEFAULT_STATUS_URL, description="Local ngrok status API endpoint"
    )

    connection_timeout: float = Field(
        default=20.0, gt=0, le=600.0, description="How long open waits for ngrok"
    )
    # Setting this too low while another ngrok runs elsewhere lets the poller
    # read that process's tunnels before ours registers.
    initial_connection_wait: float = Field(
        default=5.0, ge=0, le=60.0, description="Delay before the first status poll"
    )
    poll_interval: float = Field(
        default=1.0, ge=0, le=60.0, description="Delay between status polls"
    )
    request_timeout: float = Field(
        default=2.0, gt=0, le=60.0, description="Timeout for one status request"
    )

    terminate_poll_interval: float = Field(
        default=0.2, ge=0, le=10.0, description="Delay between exit checks on close"
    )
    terminate_retries: int = Field(
        default=20, ge=0, le=1000, description="Exit checks before force killing"
    )

    @field_validator("status_url")
    @classmethod
    def validate_status_url(cls, v: str) -> str:
        """Validate the status API URL is plain HTTP(S)."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("status_url must start with http:// or https://")
        return v
