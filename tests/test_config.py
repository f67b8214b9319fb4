"""
Tests for Configuration
"""

import pytest

from blink_wallet_mcp.config import (
    DEFAULT_BLINK_ENDPOINT,
    BlinkConfig,
    ConfigurationError,
    McpServerConfig,
)


class TestMcpServerConfig:
    """Tests for MCP server configuration."""

    def test_defaults(self):
        """Test empty environment gives plain HTTP on port 3000."""
        config = McpServerConfig.from_env({})

        assert config.port == 3000
        assert config.api_key is None
        assert config.transport == "http"
        assert config.https is None

    def test_custom_port_and_api_key(self):
        config = McpServerConfig.from_env({"MCP_PORT": "8080", "MCP_API_KEY": "secret"})

        assert config.port == 8080
        assert config.api_key == "secret"

    @pytest.mark.parametrize("port", ["0", "65536", "abc", "-1"])
    def test_invalid_port_raises(self, port):
        """Test ports outside 1-65535 are rejected."""
        with pytest.raises(ConfigurationError, match="Invalid MCP_PORT"):
            McpServerConfig.from_env({"MCP_PORT": port})

    def test_stdio_transport(self):
        config = McpServerConfig.from_env({"MCP_TRANSPORT": "STDIO"})

        assert config.transport == "stdio"

    def test_invalid_transport_raises(self):
        with pytest.raises(ConfigurationError, match="Invalid MCP_TRANSPORT"):
            McpServerConfig.from_env({"MCP_TRANSPORT": "websocket"})

    def test_domain_requires_email(self):
        """Test HTTPS mode needs an administrative email."""
        with pytest.raises(ConfigurationError, match="MCP_ACME_EMAIL is required"):
            McpServerConfig.from_env({"MCP_DOMAIN": "mcp.example.com"})

    def test_https_defaults(self):
        config = McpServerConfig.from_env(
            {"MCP_DOMAIN": "mcp.example.com", "MCP_ACME_EMAIL": "ops@example.com"}
        )

        assert config.https is not None
        assert config.https.domain == "mcp.example.com"
        assert config.https.email == "ops@example.com"
        assert config.https.https_port == 443
        assert config.https.staging is False
        assert config.https.certfile == "/etc/letsencrypt/live/mcp.example.com/fullchain.pem"
        assert config.https.keyfile == "/etc/letsencrypt/live/mcp.example.com/privkey.pem"

    def test_https_staging_and_port(self):
        config = McpServerConfig.from_env(
            {
                "MCP_DOMAIN": "mcp.example.com",
                "MCP_ACME_EMAIL": "ops@example.com",
                "MCP_HTTPS_PORT": "8443",
                "MCP_ACME_STAGING": "TRUE",
                "MCP_CERT_DIR": "/certs",
            }
        )

        assert config.https.https_port == 8443
        assert config.https.staging is True
        assert config.https.certfile == "/certs/mcp.example.com/fullchain.pem"

    def test_invalid_https_port_raises(self):
        with pytest.raises(ConfigurationError, match="Invalid MCP_HTTPS_PORT"):
            McpServerConfig.from_env(
                {
                    "MCP_DOMAIN": "mcp.example.com",
                    "MCP_ACME_EMAIL": "ops@example.com",
                    "MCP_HTTPS_PORT": "70000",
                }
            )

    def test_config_is_frozen(self):
        config = McpServerConfig.from_env({})

        with pytest.raises(AttributeError):
            config.port = 1234  # type: ignore[misc]


class TestBlinkConfig:
    """Tests for Blink API configuration."""

    def test_valid_key_uses_default_endpoint(self):
        config = BlinkConfig.from_env({"BLINK_API_KEY": "blink_abc123"})

        assert config.api_key == "blink_abc123"
        assert config.endpoint == DEFAULT_BLINK_ENDPOINT
        assert config.endpoint == "https://api.blink.sv/graphql"
        assert config.timeout == 30.0

    def test_missing_key_raises(self):
        with pytest.raises(ConfigurationError, match="Missing required environment variable: BLINK_API_KEY"):
            BlinkConfig.from_env({})

    def test_key_without_prefix_raises(self):
        """Test a key not starting with blink_ fails before any network activity."""
        with pytest.raises(ConfigurationError, match="expected key starting with 'blink_'"):
            BlinkConfig.from_env({"BLINK_API_KEY": "sk_live_abc123"})

    def test_custom_endpoint(self):
        config = BlinkConfig.from_env(
            {
                "BLINK_API_KEY": "blink_abc123",
                "BLINK_ENDPOINT": "https://api.staging.blink.sv/graphql",
            }
        )

        assert config.endpoint == "https://api.staging.blink.sv/graphql"

    @pytest.mark.parametrize("timeout", ["0", "-5", "soon"])
    def test_invalid_timeout_raises(self, timeout):
        with pytest.raises(ConfigurationError, match="Invalid BLINK_TIMEOUT"):
            BlinkConfig.from_env({"BLINK_API_KEY": "blink_abc123", "BLINK_TIMEOUT": timeout})
