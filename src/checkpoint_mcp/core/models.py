"""
Check Point MCP Server - Data Models

This module contains the Pydantic settings model and the small value types shared by
the client and the manager.
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def null_or_empty(value: str | None) -> bool:
    """Return True for values that count as "not configured"."""
    return value is None or value.strip() in ("", "undefined", "null")


class ManagementSettings(BaseModel):
    """Resolved connection settings for one management backend."""

    model_config = ConfigDict(validate_assignment=True)

    api_key: str | None = Field(default=None, description="Management API key", repr=False)
    username: str | None = Field(default=None, description="Administrator user name")
    password: str | None = Field(default=None, description="Administrator password", repr=False)
    cloud_url: str | None = Field(default=None, description="Smart-1 Cloud tenant web API URL")
    management_host: str | None = Field(default=None, description="Management server host")
    management_port: str = Field(default="443", description="Management server HTTPS port")
    origin: str | None = Field(default=None, description="Origin header for SaaS backends")
    verbose: bool = Field(default=False, description="Log request payloads (redacted)")

    @field_validator(
        "api_key", "username", "password", "cloud_url", "management_host", "origin",
        mode="before",
    )
    @classmethod
    def normalize_empty(cls, v):
        """Treat blank, "undefined" and "null" strings as unset."""
        if isinstance(v, str) and null_or_empty(v):
            return None
        return v

    @field_validator("cloud_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip("/") if v else v

    @field_validator("management_port", mode="before")
    @classmethod
    def validate_port(cls, v):
        """Validate the port is a number in the TCP range."""
        if v is None or (isinstance(v, str) and null_or_empty(v)):
            return "443"
        port = str(v).strip()
        if not port.isdigit() or not 1 <= int(port) <= 65535:
            raise ValueError(f"Invalid management port: {v}")
        return port


@dataclass(frozen=True)
class ClientResponse:
    """HTTP status paired with the decoded response body."""

    status: int
    response: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass
class Session:
    """Server-issued token plus its expiry bookkeeping.

    A missing ``timeout_seconds`` means the session never expires by local policy;
    only a 401 from the server will then force a new login.
    """

    token: str | None = None
    issued_at: float | None = None
    timeout_seconds: float | None = None

    def is_expired(self, now: float, guard_band: float) -> bool:
        if not self.token or self.issued_at is None:
            return True
        if self.timeout_seconds is None:
            return False
        return now >= self.issued_at + self.timeout_seconds - guard_band

    def reset(self) -> None:
        self.token = None
        self.issued_at = None
        self.timeout_seconds = None
