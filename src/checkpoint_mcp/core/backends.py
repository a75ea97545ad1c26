"""
Check Point MCP Server - Backend Variants

Each management deployment (Smart-1 Cloud tenant, on-premises management server,
Harmony SASE) is described by an immutable backend object. The client never branches
on the concrete type: it only asks the backend for its host, its login request, how to
read the token out of the login answer and which headers carry the session.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from ..shared.constants import (
    API_LOGIN,
    API_SAAS_AUTHORIZE,
    DEFAULT_MANAGEMENT_PORT,
    DEFAULT_USER_AGENT,
    SESSION_HEADER,
)
from .exceptions import AuthenticationError, ConfigurationError
from .models import ManagementSettings

logger = logging.getLogger("checkpoint-mcp")


class Backend(Protocol):
    """Capabilities the client needs from a backend variant."""

    kind: str
    verify_tls: bool
    login_path: str

    def get_host(self) -> str: ...

    def login_payload(self) -> dict[str, Any]: ...

    def login_headers(self) -> dict[str, str]: ...

    def extract_token(self, body: dict[str, Any]) -> str | None: ...

    def get_headers(self, token: str | None) -> dict[str, str]: ...


def _session_headers(token: str | None) -> dict[str, str]:
    headers = {
        "Content-Type": "application/json",
        "User-Agent": DEFAULT_USER_AGENT,
    }
    if token:
        headers[SESSION_HEADER] = token
    return headers


@dataclass(frozen=True)
class CloudBackend:
    """Smart-1 Cloud tenant reached through its fixed web API URL."""

    cloud_url: str
    api_key: str = field(repr=False)
    kind: str = field(default="cloud", init=False)
    verify_tls: bool = field(default=True, init=False)
    login_path: str = field(default=API_LOGIN, init=False)

    def get_host(self) -> str:
        return self.cloud_url.rstrip("/")

    def login_payload(self) -> dict[str, Any]:
        return {"api-key": self.api_key}

    def login_headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    def extract_token(self, body: dict[str, Any]) -> str | None:
        return body.get("sid")

    def get_headers(self, token: str | None) -> dict[str, str]:
        return _session_headers(token)


@dataclass(frozen=True)
class OnPremBackend:
    """On-premises management server with a self-signed certificate.

    Logs in with the API key when one is set, otherwise with user name and password.
    """

    management_host: str
    management_port: str = DEFAULT_MANAGEMENT_PORT
    api_key: str | None = field(default=None, repr=False)
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    kind: str = field(default="on-prem", init=False)
    verify_tls: bool = field(default=False, init=False)
    login_path: str = field(default=API_LOGIN, init=False)

    def get_host(self) -> str:
        return f"https://{self.management_host}:{self.management_port}/web_api"

    def login_payload(self) -> dict[str, Any]:
        if self.api_key:
            return {"api-key": self.api_key}
        if self.username and self.password:
            return {"user": self.username, "password": self.password}
        raise AuthenticationError(
            "Authentication failed: No API key or username/password provided",
            status_code=401,
            context={"backend": self.kind, "host": self.management_host},
        )

    def login_headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    def extract_token(self, body: dict[str, Any]) -> str | None:
        return body.get("sid")

    def get_headers(self, token: str | None) -> dict[str, str]:
        return _session_headers(token)


@dataclass(frozen=True)
class SaasBackend:
    """Harmony SASE: API key exchanged for a bearer token, Origin sent on every call."""

    management_host: str
    origin: str
    api_key: str = field(repr=False)
    kind: str = field(default="saas", init=False)
    verify_tls: bool = field(default=True, init=False)
    login_path: str = field(default=API_SAAS_AUTHORIZE, init=False)

    def get_host(self) -> str:
        return self.management_host.rstrip("/")

    def login_payload(self) -> dict[str, Any]:
        return {"apiKey": self.api_key, "grantType": "api_key"}

    def login_headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", "accept": "application/json"}

    def extract_token(self, body: dict[str, Any]) -> str | None:
        data = body.get("data")
        if not isinstance(data, dict):
            return None
        return data.get("accessToken")

    def get_headers(self, token: str | None) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
            "Origin": self.origin,
        }


def select_backend(settings: ManagementSettings) -> Backend:
    """Pick the backend variant for the resolved settings.

    First match wins: cloud URL, then management host with an origin (SaaS), then
    management host alone (on-prem).

    Raises:
        ConfigurationError: If no backend is configured or the chosen one lacks
            its credentials. Raised before any network call.
    """
    if settings.cloud_url:
        if not settings.api_key:
            raise ConfigurationError(
                "API key is required for Smart-1 Cloud (via --api-key or API_KEY env var)",
                context={"backend": "cloud"},
            )
        logger.info("Using Smart-1 Cloud tenant with API key")
        return CloudBackend(cloud_url=settings.cloud_url, api_key=settings.api_key)

    if settings.management_host and settings.origin:
        if not settings.api_key:
            raise ConfigurationError(
                "API key is required for Harmony SASE (via --api-key or API_KEY env var)",
                context={"backend": "saas"},
            )
        logger.info("Using Harmony SASE management host with API key")
        return SaasBackend(
            management_host=settings.management_host,
            origin=settings.origin,
            api_key=settings.api_key,
        )

    if settings.management_host:
        has_credentials = bool(settings.username and settings.password)
        if not settings.api_key and not has_credentials:
            raise ConfigurationError(
                "Either API key or username/password are required for on-prem management "
                "(via CLI args or env vars)",
                context={"backend": "on-prem", "host": settings.management_host},
            )
        auth_method = "API key" if settings.api_key else "username/password"
        logger.info(
            f"Using on-prem management host {settings.management_host}:"
            f"{settings.management_port} ({auth_method})"
        )
        return OnPremBackend(
            management_host=settings.management_host,
            management_port=settings.management_port,
            api_key=settings.api_key,
            username=settings.username,
            password=settings.password,
        )

    raise ConfigurationError(
        "No backend configured: set S1C_URL (cloud) or MANAGEMENT_HOST (on-prem, "
        "add ORIGIN for Harmony SASE)"
    )
