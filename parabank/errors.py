"""Exceptions raised by the probe, the session bridge and the setup flow."""
from __future__ import annotations

from typing import Optional


class ParaBankError(Exception):
    """Base class for every error raised by this package"""
    pass


class AuthenticationError(ParaBankError):
    """Login was rejected by the server"""

    def __init__(self, status_code: Optional[int], message: str = "Login failed") -> None:
        self.status_code = status_code
        super().__init__(f"{message} (HTTP {status_code})")


class NetworkError(ParaBankError):
    """Transport-level failure: timeout, refused connection, broken TLS"""
    pass


class ApiResponseError(ParaBankError):
    """A REST call answered with a non-success status"""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        super().__init__(f"{message} (HTTP {status_code})")


class SchemaViolationError(ParaBankError):
    """A JSON body did not have the shape the suite relies on"""
    pass


class SessionError(ParaBankError):
    """No usable session cookie could be found to bridge"""
    pass


class CorrelationError(ParaBankError):
    """UI-observed and API-observed identifiers disagree"""
    pass


class InterceptTimeoutError(ParaBankError, TimeoutError):
    """The awaited browser response never arrived"""

    def __init__(self, description: str, timeout: float) -> None:
        self.description = description
        self.timeout = timeout
        super().__init__(f"No response matching {description} within {timeout:g}s")


class IdentitySetupError(ParaBankError):
    """Neither interception nor the UI fallback produced a customer/account pair"""
    pass
