"""
sarufi-chat error types.
"""

from typing import Any, Optional


class SarufiChatError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class StartupConfigError(SarufiChatError):
    def __init__(self, message: str):
        super().__init__("startup_config", message)


class GatewayError(SarufiChatError):
    def __init__(self, message: str, code: str = "gateway_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class AuthError(GatewayError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, code="auth_error", details=details)


class MalformedReplyError(GatewayError):
    """Reply payload does not match the shape expected for the bot's kind."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, code="malformed_reply", details=details)
