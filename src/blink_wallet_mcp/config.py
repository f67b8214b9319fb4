"""
Configuration

Resolves the MCP server settings and the Blink API settings from environment
variables. Both groups are read once at startup; a missing or malformed value
raises ConfigurationError so the server never starts half-configured.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_BLINK_ENDPOINT = "https://api.blink.sv/graphql"
BLINK_API_KEY_PREFIX = "blink_"
DEFAULT_CERT_DIR = "/etc/letsencrypt/live"


class ConfigurationError(Exception):
    """Exception for missing or invalid configuration."""
    pass


def _get_required(env: Mapping[str, str], key: str) -> str:
    value = env.get(key)
    if not value:
        raise ConfigurationError(f"Missing required environment variable: {key}")
    return value


def _parse_port(value: str, key: str) -> int:
    try:
        port = int(value, 10)
    except ValueError:
        raise ConfigurationError(f"Invalid {key}: {value}") from None
    if port < 1 or port > 65535:
        raise ConfigurationError(f"Invalid {key}: {value}")
    return port


@dataclass(frozen=True)
class HttpsConfig:
    """
    HTTPS settings, present only when MCP_DOMAIN is set.

    Certificates are obtained and renewed by an external ACME client;
    this server only reads the resulting files.
    """

    domain: str
    """Public domain name the certificate is issued for."""

    email: str
    """Administrative contact registered with the ACME provider."""

    https_port: int = 443
    """Port the HTTPS listener binds to."""

    staging: bool = False
    """Whether certificates come from the ACME staging environment."""

    cert_dir: str = DEFAULT_CERT_DIR
    """Directory holding one sub-directory of PEM files per domain."""

    @property
    def certfile(self) -> str:
        return str(Path(self.cert_dir) / self.domain / "fullchain.pem")

    @property
    def keyfile(self) -> str:
        return str(Path(self.cert_dir) / self.domain / "privkey.pem")


@dataclass(frozen=True)
class McpServerConfig:
    """Settings for the outward-facing MCP endpoint."""

    port: int = 3000
    """Plain HTTP listening port."""

    api_key: Optional[str] = None
    """
    Key inbound requests must present in the X-API-KEY header.
    When unset, requests are accepted unauthenticated (local testing only).
    """

    transport: str = "http"
    """Either "http" (streamable HTTP) or "stdio"."""

    https: Optional[HttpsConfig] = None
    """HTTPS settings; None means plain HTTP mode."""

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "McpServerConfig":
        """
        Build the server configuration from environment variables.

        Environment variables:
            MCP_PORT: Optional - HTTP port (default: 3000)
            MCP_API_KEY: Optional - inbound API key
            MCP_TRANSPORT: Optional - "http" or "stdio" (default: http)
            MCP_DOMAIN: Optional - enables HTTPS mode
            MCP_ACME_EMAIL: Required when MCP_DOMAIN is set
            MCP_HTTPS_PORT: Optional - HTTPS port (default: 443)
            MCP_ACME_STAGING: Optional - "true" for staging certificates
            MCP_CERT_DIR: Optional - certificate directory

        Raises:
            ConfigurationError: If any value is missing or malformed
        """
        env = os.environ if env is None else env

        port = _parse_port(env.get("MCP_PORT") or "3000", "MCP_PORT")
        api_key = env.get("MCP_API_KEY") or None

        transport = (env.get("MCP_TRANSPORT") or "http").lower()
        if transport not in ("http", "stdio"):
            raise ConfigurationError(
                f"Invalid MCP_TRANSPORT: {transport} (expected 'http' or 'stdio')"
            )

        domain = env.get("MCP_DOMAIN")
        if not domain:
            return cls(port=port, api_key=api_key, transport=transport)

        email = env.get("MCP_ACME_EMAIL")
        if not email:
            raise ConfigurationError("MCP_ACME_EMAIL is required when MCP_DOMAIN is set")

        https_port = _parse_port(env.get("MCP_HTTPS_PORT") or "443", "MCP_HTTPS_PORT")
        staging = (env.get("MCP_ACME_STAGING") or "false").lower() == "true"

        return cls(
            port=port,
            api_key=api_key,
            transport=transport,
            https=HttpsConfig(
                domain=domain,
                email=email,
                https_port=https_port,
                staging=staging,
                cert_dir=env.get("MCP_CERT_DIR") or DEFAULT_CERT_DIR,
            ),
        )


@dataclass(frozen=True)
class BlinkConfig:
    """Blink GraphQL API settings."""

    api_key: str
    """API key from the Blink dashboard, always prefixed with "blink_"."""

    endpoint: str = DEFAULT_BLINK_ENDPOINT
    """GraphQL endpoint URL."""

    timeout: float = 30.0
    """Per-request timeout in seconds."""

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "BlinkConfig":
        """
        Build the Blink configuration from environment variables.

        Environment variables:
            BLINK_API_KEY: Required - Blink API key (blink_...)
            BLINK_ENDPOINT: Optional - GraphQL endpoint
            BLINK_TIMEOUT: Optional - request timeout in seconds (default: 30)

        Raises:
            ConfigurationError: If the key is missing or malformed
        """
        env = os.environ if env is None else env

        api_key = _get_required(env, "BLINK_API_KEY")
        if not api_key.startswith(BLINK_API_KEY_PREFIX):
            raise ConfigurationError(
                f"Invalid BLINK_API_KEY format: expected key starting with '{BLINK_API_KEY_PREFIX}'"
            )

        endpoint = env.get("BLINK_ENDPOINT") or DEFAULT_BLINK_ENDPOINT

        timeout_str = env.get("BLINK_TIMEOUT") or "30"
        try:
            timeout = float(timeout_str)
        except ValueError:
            raise ConfigurationError(f"Invalid BLINK_TIMEOUT: {timeout_str}") from None
        if timeout <= 0:
            raise ConfigurationError(f"Invalid BLINK_TIMEOUT: {timeout_str}")

        return cls(api_key=api_key, endpoint=endpoint, timeout=timeout)


def get_mcp_server_config() -> McpServerConfig:
    """Resolve the MCP server configuration from the process environment."""
    return McpServerConfig.from_env()


def get_blink_config() -> BlinkConfig:
    """Resolve the Blink configuration from the process environment."""
    return BlinkConfig.from_env()
