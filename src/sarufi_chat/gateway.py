"""
Sarufi bot gateway — authenticate, fetch a bot, talk to it.

The gateway is created once at startup after the API key has been
validated and is shared read-only by the controller and the task runner.
"""

import logging
import uuid
from typing import Any, Optional, Protocol

from pydantic import ValidationError

from sarufi_chat.errors import GatewayError
from sarufi_chat.models.bot import Bot, BotSummary
from sarufi_chat.models.reply import reply_for
from sarufi_chat.transport.http import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_S, HttpClient

DEFAULT_CHANNEL = "general"

logger = logging.getLogger(__name__)


class BotGateway(Protocol):
    async def authenticate(self, api_key: Optional[str] = None) -> list[BotSummary]: ...

    async def get_bot(self, bot_id: int) -> Bot: ...

    async def respond(self, bot: Bot, message: str, channel: str = DEFAULT_CHANNEL) -> str: ...

    async def close(self) -> None: ...


class SarufiGateway:
    """Async Sarufi REST gateway."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_S,
        chat_id: Optional[str] = None,
        http: Optional[HttpClient] = None,
    ):
        self.http = http or HttpClient(base_url=base_url, token=api_key, timeout=timeout)
        if http is not None and api_key:
            self.http.set_token(api_key)
        self.chat_id = chat_id or str(uuid.uuid4())

    async def authenticate(self, api_key: Optional[str] = None) -> list[BotSummary]:
        """List the bots owned by the API key; doubles as the credential check."""
        if api_key:
            self.http.set_token(api_key)
        data = await self.http.get("/chatbots")
        if not isinstance(data, list):
            raise GatewayError(f"Unexpected bot listing: expected a list, got {type(data).__name__}")
        try:
            bots = [BotSummary.model_validate(item) for item in data]
        except ValidationError as e:
            raise GatewayError(f"Unexpected bot listing: {e}")
        logger.info("Authenticated, %d bot(s) available", len(bots))
        return bots

    async def get_bot(self, bot_id: int) -> Bot:
        data = await self.http.get(f"/chatbot/{bot_id}")
        try:
            return Bot.model_validate(data)
        except ValidationError as e:
            raise GatewayError(f"Unexpected bot record for {bot_id}: {e}")

    async def respond(self, bot: Bot, message: str, channel: str = DEFAULT_CHANNEL) -> str:
        """Send ``message`` to ``bot`` and return the text of its reply."""
        raw: Any = await self.http.post("/conversation", {
            "chat_id": self.chat_id,
            "bot_id": bot.id,
            "message": message,
            "message_type": "text",
            "channel": channel,
        })
        return reply_for(bot, raw).extract()

    async def close(self) -> None:
        await self.http.close()
