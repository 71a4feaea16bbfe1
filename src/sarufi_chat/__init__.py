"""
sarufi-chat — terminal client for Sarufi chatbots.

Authenticate with an API key, pick one of your bots, and chat with it.
"""

from sarufi_chat.errors import (
    AuthError,
    GatewayError,
    MalformedReplyError,
    SarufiChatError,
    StartupConfigError,
)
from sarufi_chat.gateway import BotGateway, SarufiGateway
from sarufi_chat.models.bot import Bot, BotKind, BotSummary

__version__ = "0.1.0"
__all__ = [
    "SarufiGateway",
    "BotGateway",
    "Bot",
    "BotKind",
    "BotSummary",
    "SarufiChatError",
    "StartupConfigError",
    "GatewayError",
    "AuthError",
    "MalformedReplyError",
]
