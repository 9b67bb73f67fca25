"""Tests for utility functions."""

import pytest

from ngrok_wrapper.common.utils import (
    MAX_PORT,
    MIN_PORT,
    decode_output,
    is_secure_scheme,
    validate_port,
)


class TestValidatePort:
    """Test port validation function."""

    def test_valid_ports(self):
        """Test validation of valid ports."""
        validate_port(1, "Test port")
        validate_port(80, "HTTP port")
        validate_port(8080, "Alt HTTP port")
        validate_port(65535, "Max port")

    def test_invalid_ports(self):
        """Test validation of invalid ports."""
        with pytest.raises(ValueError, match="Test port must be between 1 and 65535"):
            validate_port(0, "Test port")

        with pytest.raises(ValueError, match="Test port must be between 1 and 65535"):
            validate_port(65536, "Test port")

        with pytest.raises(ValueError, match="Test port must be between 1 and 65535"):
            validate_port(-1, "Test port")

    def test_non_integer_ports(self):
        """Test validation of non-integer ports."""
        with pytest.raises(ValueError, match="Test port must be between 1 and 65535"):
            validate_port("80", "Test port")  # type: ignore

        with pytest.raises(ValueError, match="Test port must be between 1 and 65535"):
            validate_port(80.5, "Test port")  # type: ignore

        with pytest.raises(ValueError):
            validate_port(True)  # type: ignore

    def test_default_port_name(self):
        """Test the default name in the error message"""
        with pytest.raises(ValueError, match="^Port must be between"):
            validate_port(0)

    def test_constants(self):
        """Test port range constants"""
        assert MIN_PORT == 1
        assert MAX_PORT == 65535


class TestIsSecureScheme:
    """Test secure scheme detection."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("https", True),
            ("HTTPS", False),
            (" https", False),
            ("HTTPS://abc.example", False),
            ("http", False),
            ("tcp", False),
            ("https://abc.example", True),
            ("http://abc.example", False),
            ("tls://abc.example:443", False),
        ],
    )
    def test_values(self, value, expected):
        """is_secure_scheme should only accept the exact https scheme"""
        assert is_secure_scheme(value) is expected


class TestDecodeOutput:
    """Test process output decoding."""

    def test_strips_whitespace(self):
        """Test decoded output is trimmed"""
        assert decode_output(b"  failed\n") == "failed"

    def test_replaces_invalid_utf8(self):
        """Test undecodable bytes are replaced"""
        assert decode_output(b"ok\xff") == "ok�"
