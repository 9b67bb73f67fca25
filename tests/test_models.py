"""Tests for endpoint and status API models."""

import pytest
from pydantic import ValidationError

from ngrok_wrapper.client.models import (
    ConnectionInfo,
    Endpoint,
    TunnelEntry,
    TunnelsResponse,
)
from ngrok_wrapper.common.exceptions import MultipleTunnelsError


class TestEndpoint:
    """Test Endpoint model."""

    def test_endpoint_is_immutable(self):
        """Test Endpoint is frozen"""
        endpoint = Endpoint(url="https://abc.example", secure=True)

        with pytest.raises(ValidationError):
            endpoint.url = "https://other.example"

    def test_endpoint_equality_by_fields(self):
        """Test endpoints compare by value"""
        assert Endpoint(url="http://a", secure=False) == Endpoint(
            url="http://a", secure=False
        )

    def test_empty_url_rejected(self):
        """Test Endpoint requires a URL"""
        with pytest.raises(ValidationError):
            Endpoint(url="", secure=False)

    @pytest.mark.parametrize(
        "proto,secure",
        [("https", True), ("http", False), ("tcp", False), ("HTTPS", False), ("", False)],
    )
    def test_from_entry(self, proto, secure):
        """Test secure flag is derived from the entry protocol"""
        entry = TunnelEntry(public_url="https://abc.example", proto=proto)

        assert Endpoint.from_entry(entry).secure is secure

    def test_serializes_to_url_and_secure(self):
        """Test Endpoint serialization to dictionary"""
        endpoint = Endpoint(url="https://abc.example", secure=True)

        assert endpoint.model_dump() == {"url": "https://abc.example", "secure": True}


class TestTunnelsResponse:
    """Test status API body parsing."""

    def test_extra_fields_ignored(self):
        """Test unknown status API fields are ignored"""
        body = TunnelsResponse.model_validate(
            {
                "tunnels": [
                    {
                        "name": "command_line",
                        "public_url": "https://abc.example",
                        "proto": "https",
                        "config": {"addr": "http://localhost:8080"},
                    }
                ],
                "uri": "/api/tunnels",
            }
        )

        assert body.tunnels[0].public_url == "https://abc.example"

    def test_missing_tunnels_rejected(self):
        """Test a response without tunnels fails validation"""
        with pytest.raises(ValidationError):
            TunnelsResponse.model_validate({"uri": "/api/tunnels"})


class TestConnectionInfo:
    """Test ConnectionInfo invariants."""

    def test_success(self):
        """Test ConnectionInfo carrying endpoints is ok"""
        info = ConnectionInfo(endpoints=[Endpoint(url="http://a", secure=False)])
        assert info.ok

    def test_failure(self):
        """Test ConnectionInfo carrying an error is not ok"""
        info = ConnectionInfo(error=MultipleTunnelsError(3))
        assert not info.ok

    def test_needs_endpoints_or_error(self):
        """Test ConnectionInfo rejects an empty result"""
        with pytest.raises(ValueError):
            ConnectionInfo()

    def test_cannot_carry_both(self):
        """Test ConnectionInfo rejects endpoints together with an error"""
        with pytest.raises(ValueError):
            ConnectionInfo(
                endpoints=[Endpoint(url="http://a", secure=False)],
                error=MultipleTunnelsError(3),
            )
