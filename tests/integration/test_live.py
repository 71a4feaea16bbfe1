"""
Integration tests for sarufi-chat — tests against the real Sarufi API.

Requires environment variables:
  SARUFI_API_KEY   valid API key owning at least one bot
  SARUFI_BASE_URL  (optional) defaults to https://api.sarufi.io

Run: SARUFI_INTEGRATION=1 pytest tests/integration/ -v
"""

import os

import pytest

from sarufi_chat import AuthError, SarufiGateway

SKIP = not os.environ.get("SARUFI_INTEGRATION")
API_KEY = os.environ.get("SARUFI_API_KEY", "")
BASE_URL = os.environ.get("SARUFI_BASE_URL", "https://api.sarufi.io")

pytestmark = pytest.mark.skipif(SKIP, reason="SARUFI_INTEGRATION not set")


def make_gateway() -> SarufiGateway:
    return SarufiGateway(api_key=API_KEY, base_url=BASE_URL)


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_lists_bots(self):
        gateway = make_gateway()
        bots = await gateway.authenticate()
        assert len(bots) > 0
        assert all(b.id for b in bots)
        await gateway.close()

    @pytest.mark.asyncio
    async def test_rejects_invalid_key(self):
        gateway = SarufiGateway(api_key="invalid", base_url=BASE_URL)
        with pytest.raises(AuthError):
            await gateway.authenticate()
        await gateway.close()


class TestConversation:
    @pytest.mark.asyncio
    async def test_first_bot_replies_with_text(self):
        gateway = make_gateway()
        bots = await gateway.authenticate()
        bot = await gateway.get_bot(bots[0].id)
        assert bot.id == bots[0].id

        reply = await gateway.respond(bot, "Hello")
        assert isinstance(reply, str)
        assert len(reply) > 0
        print(f"  {bot.name} ({bot.kind.value}): {reply[:200]}")
        await gateway.close()
