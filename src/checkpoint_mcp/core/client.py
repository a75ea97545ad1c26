"""
Check Point MCP Server - API Client

This module provides the authenticated client for one Check Point management backend.
The client owns the session: it logs in lazily, tracks the server-issued session timeout
and logs in again once the session has expired.
"""

import asyncio
import json
import logging
import ssl
import time
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import certifi
import httpx

from ..shared.constants import (
    DEFAULT_REQUEST_TIMEOUT,
    REDACTED_HEADERS,
    REDACTED_PAYLOAD_KEYS,
    SESSION_GUARD_BAND_SECONDS,
    SUPPORTED_HTTP_METHODS,
)
from .backends import Backend
from .exceptions import (
    AuthenticationError,
    RequestTimeoutError,
    TransportError,
    UpstreamError,
    ValidationError,
)
from .models import ClientResponse, Session

logger = logging.getLogger("checkpoint-mcp")


def redact_payload(data: Any) -> Any:
    """Return a copy of a request payload with credential values replaced."""
    if isinstance(data, dict):
        return {
            key: "[REDACTED]" if key.lower() in REDACTED_PAYLOAD_KEYS else redact_payload(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [redact_payload(item) for item in data]
    return data


class RequestResponseLogger:
    """Framework for logging API requests and responses with sensitive data protection."""

    def __init__(self, logger: logging.Logger):
        """Initialize request/response logger.

        Args:
            logger: Logger instance to use for logging
        """
        self.logger = logger

    def log_request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict] = None,
        data: Optional[Dict] = None,
        operation: str = "unknown",
        include_payload: bool = False,
    ):
        """Log API request details with sensitive data sanitization.

        Args:
            method: HTTP method
            url: Request URL
            headers: Request headers
            data: Request payload
            operation: Operation name for context
            include_payload: Add the (redacted) payload to the log line
        """
        safe_headers = {}
        if headers:
            for key, value in headers.items():
                if key.lower() in REDACTED_HEADERS:
                    safe_headers[key] = "[REDACTED]"
                else:
                    safe_headers[key] = value

        log_data = {
            "operation": operation,
            "request": {
                "method": method,
                "url": url,
                "headers": safe_headers,
                "has_data": bool(data),
            },
        }
        if include_payload and data:
            log_data["request"]["data"] = redact_payload(data)

        self.logger.info(f"API Request: {json.dumps(log_data)}")

    def log_response(
        self,
        status_code: int,
        response_size: Optional[int] = None,
        duration_ms: Optional[float] = None,
        operation: str = "unknown",
        error: Optional[Exception] = None,
    ):
        """Log API response details with performance metrics.

        Args:
            status_code: HTTP status code
            response_size: Size of response in bytes
            duration_ms: Request duration in milliseconds
            operation: Operation name for context
            error: Exception if request failed
        """
        log_data = {
            "operation": operation,
            "response": {
                "status_code": status_code,
                "response_size": response_size,
                "duration_ms": duration_ms,
                "success": 200 <= status_code < 300,
                "has_error": bool(error),
            },
        }

        if error:
            log_data["error"] = str(error)

        level = logging.INFO if log_data["response"]["success"] else logging.WARNING
        self.logger.log(level, f"API Response: {json.dumps(log_data)}")


request_logger = RequestResponseLogger(logger)


def _decode_body(response: httpx.Response) -> Dict[str, Any]:
    if not response.content:
        return {}
    try:
        body = response.json()
    except json.JSONDecodeError:
        return {"message": response.text}
    if isinstance(body, dict):
        return body
    return {"data": body}


def _parse_session_timeout(body: Dict[str, Any]) -> Optional[float]:
    value = body.get("session-timeout")
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return None
    return timeout if timeout > 0 else None


class ManagementClient:
    """Authenticated client for exactly one management backend."""

    def _create_ssl_context(self, verify_tls: bool) -> ssl.SSLContext:
        """
        Create SSL context for the backend.

        Args:
            verify_tls: Whether to verify TLS certificates

        Returns:
            Configured SSL context

        Notes:
            - On-prem management servers ship self-signed certificates, so their
              backend disables verification and a warning is logged
            - Otherwise TLS 1.2+ and certificate validation against certifi's CA bundle
        """
        if not verify_tls:
            logger.warning(
                "TLS certificate verification is disabled for the on-prem management server "
                f"{self.backend.get_host()} (self-signed certificates accepted)."
            )
            context = ssl.create_default_context()
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
            return context

        context = ssl.create_default_context(cafile=certifi.where())
        context.check_hostname = True
        context.verify_mode = ssl.CERT_REQUIRED
        context.minimum_version = ssl.TLSVersion.TLSv1_2

        logger.debug("TLS verification enabled with TLS 1.2+ enforcement")
        return context

    def __init__(
        self,
        backend: Backend,
        verbose: bool = False,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        guard_band: float = SESSION_GUARD_BAND_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the client.

        Args:
            backend: Backend variant this client talks to
            verbose: Log request payloads (secrets redacted)
            timeout: Per-request timeout in seconds
            guard_band: Seconds subtracted from the session timeout
            clock: Monotonic time source, replaceable in tests
        """
        self.backend = backend
        self.verbose = verbose
        self.guard_band = guard_band
        self._clock = clock
        self.session = Session()
        self._refresh_lock = asyncio.Lock()

        self.client = httpx.AsyncClient(
            verify=self._create_ssl_context(backend.verify_tls),
            timeout=httpx.Timeout(timeout, pool=5.0),
            limits=httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0,
            ),
        )

        logger.info(
            f"Initialized {backend.kind} management client for {backend.get_host()} "
            f"(TLS verification: {'enabled' if backend.verify_tls else 'DISABLED'})"
        )

    async def close(self):
        """Close the httpx client."""
        await self.client.aclose()

    def is_session_expired(self) -> bool:
        """Return True when there is no usable session token."""
        return self.session.is_expired(self._clock(), self.guard_band)

    async def login(self) -> str:
        """Log in to the backend and record the new session.

        Returns:
            The session token

        Raises:
            AuthenticationError: Credentials missing for this backend (before any
                network call), login rejected, or no token in the answer
            TransportError: No response from the backend
        """
        payload = self.backend.login_payload()
        logger.info(f"Logging in to {self.backend.kind} backend at {self.backend.get_host()}")

        response = await self._send(
            "POST",
            self.backend.login_path,
            data=payload,
            headers=self.backend.login_headers(),
            operation="login",
        )

        token = self.backend.extract_token(response.response) if response.ok else None
        if not token:
            raise AuthenticationError(
                f"Login failed with status {response.status}",
                status_code=response.status,
                body=response.response,
                context={"backend": self.backend.kind, "host": self.backend.get_host()},
            )

        timeout_seconds = _parse_session_timeout(response.response)
        self.session = Session(
            token=token,
            issued_at=self._clock(),
            timeout_seconds=timeout_seconds,
        )
        if timeout_seconds is None:
            logger.info("Login succeeded; no session-timeout returned, session kept until rejected")
        else:
            logger.info(f"Login succeeded; session timeout {timeout_seconds:.0f}s")
        return token

    async def _ensure_session(self) -> Optional[ClientResponse]:
        """Log in if needed. Returns a failure response when login is rejected."""
        if not self.is_session_expired():
            return None

        async with self._refresh_lock:
            # Another caller may have refreshed while we waited for the lock
            if not self.is_session_expired():
                return None
            try:
                await self.login()
            except AuthenticationError as e:
                logger.error(f"Login failed with status {e.status_code}: {e.message}")
                return ClientResponse(e.status_code, e.body)
        return None

    async def call_api(
        self,
        method: str,
        uri: str,
        data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        operation: str = "api_request",
    ) -> ClientResponse:
        """Call a management API command with a valid session.

        Args:
            method: HTTP method (GET, POST, etc.)
            uri: Command path relative to the backend host (e.g. "show-hosts")
            data: Request body, sent for non-GET methods only
            params: Query parameters, sent for GET only
            operation: Name of operation for logging context

        Returns:
            The response; a failed login is returned as a response carrying the
            login status and body instead of being raised

        Raises:
            ValidationError: For an unsupported method or empty uri
            UpstreamError: For non-2xx answers to the call itself
            TransportError: When no response is received
        """
        if not method or not uri:
            raise ValidationError(
                "Method and uri are required", context={"method": method, "uri": uri}
            )
        if method.upper() not in SUPPORTED_HTTP_METHODS:
            raise ValidationError(f"Unsupported HTTP method: {method}", context={"method": method})

        login_failure = await self._ensure_session()
        if login_failure is not None:
            return login_failure

        response = await self._send(
            method,
            uri,
            data=data,
            headers=self.backend.get_headers(self.session.token),
            params=params,
            operation=operation,
        )

        if response.status == 401:
            logger.info("Session rejected by the server, a new login will be performed")
            self.session.reset()

        if not response.ok:
            raise UpstreamError(
                f"API request failed: {response.status} - {json.dumps(response.response)}",
                status_code=response.status,
                body=response.response,
                method=method.upper(),
                url=self._build_url(uri),
            )
        return response

    def _build_url(self, uri: str) -> str:
        return f"{self.backend.get_host()}/{uri.lstrip('/')}"

    async def _send(
        self,
        method: str,
        uri: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        operation: str = "api_request",
    ) -> ClientResponse:
        """Issue one HTTP request and wrap the answer, whatever its status."""
        method = method.upper()
        url = self._build_url(uri)

        kwargs: Dict[str, Any] = {"headers": headers or {}}
        if method == "GET":
            if params:
                kwargs["params"] = params
        elif data is not None:
            kwargs["json"] = data

        request_logger.log_request(
            method, url, headers, data, operation, include_payload=self.verbose
        )
        start_time = datetime.utcnow()

        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            duration_ms = (datetime.utcnow() - start_time).total_seconds() * 1000
            request_logger.log_response(0, 0, duration_ms, operation, e)
            raise RequestTimeoutError(
                f"Request timed out: {method} {url}",
                context={"method": method, "url": url},
            ) from e
        except httpx.RequestError as e:
            duration_ms = (datetime.utcnow() - start_time).total_seconds() * 1000
            request_logger.log_response(0, 0, duration_ms, operation, e)
            raise TransportError(
                f"Cannot reach management API at {url}",
                context={"method": method, "url": url, "error": str(e)},
            ) from e

        duration_ms = (datetime.utcnow() - start_time).total_seconds() * 1000
        response_size = len(response.content) if response.content else 0
        request_logger.log_response(response.status_code, response_size, duration_ms, operation)

        return ClientResponse(response.status_code, _decode_body(response))
