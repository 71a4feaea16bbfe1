"""Shared fixtures: an in-memory gateway standing in for the Sarufi API."""

import asyncio
from typing import Optional

import pytest

from sarufi_chat.errors import GatewayError
from sarufi_chat.models.bot import Bot, BotSummary


class FakeGateway:
    def __init__(
        self,
        bots: Optional[list[Bot]] = None,
        replies: Optional[list[object]] = None,
        auth_error: Optional[Exception] = None,
    ):
        self.bots = {b.id: b for b in (bots or [])}
        self.replies = list(replies or [])
        self.auth_error = auth_error
        self.sent: list[tuple[int, str, str]] = []
        self.fetched: list[int] = []
        self.closed = False
        self.release = asyncio.Event()
        self.release.set()
        self.fetch_release = asyncio.Event()
        self.fetch_release.set()

    async def authenticate(self, api_key=None):
        if self.auth_error:
            raise self.auth_error
        return [BotSummary(id=b.id, name=b.name, description=b.description) for b in self.bots.values()]

    async def get_bot(self, bot_id):
        self.fetched.append(bot_id)
        await self.fetch_release.wait()
        if bot_id not in self.bots:
            raise GatewayError(f"HTTP 404: bot {bot_id} not found", details={"status_code": 404})
        return self.bots[bot_id]

    async def respond(self, bot, message, channel="general"):
        self.sent.append((bot.id, message, channel))
        await self.release.wait()
        reply = self.replies.pop(0) if self.replies else "ok"
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self):
        self.closed = True


ECHO = Bot(id=1, name="Echo", description="Repeats you", model_name="")
GPT = Bot(id=2, name="Helper", description="General helper", model_name="gpt-3.5-turbo")


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway(bots=[ECHO, GPT])


async def until(predicate, timeout: float = 1.0) -> None:
    """Yield to the loop until ``predicate()`` holds."""
    async def _poll():
        while not predicate():
            await asyncio.sleep(0.001)
    await asyncio.wait_for(_poll(), timeout)
