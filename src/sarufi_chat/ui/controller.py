"""
Interaction controller: the screen state machine.

``handle_event`` is the only place SessionState changes. It returns the
tasks the runner should launch next; it never launches them itself.
"""

from __future__ import annotations

import logging

from sarufi_chat.errors import GatewayError
from sarufi_chat.gateway import BotGateway
from sarufi_chat.ui.events import (
    BACK_KEY,
    QUIT_KEYS,
    SUBMIT_KEY,
    Authenticate,
    AuthenticationCompleted,
    BotReplyCompleted,
    Event,
    KeyPressed,
    SendMessage,
    Task,
    TimerTick,
)
from sarufi_chat.ui.state import Screen, SessionState

logger = logging.getLogger(__name__)


class InteractionController:
    def __init__(self, gateway: BotGateway):
        self._gateway = gateway

    @staticmethod
    def startup_tasks() -> list[Task]:
        return [Authenticate()]

    async def handle_event(self, state: SessionState, event: Event) -> tuple[SessionState, list[Task]]:
        before = state.screen
        if isinstance(event, KeyPressed):
            tasks = await self._on_key(state, event)
        elif isinstance(event, AuthenticationCompleted):
            tasks = self._on_authenticated(state, event)
        elif isinstance(event, BotReplyCompleted):
            tasks = self._on_reply(state, event)
        elif isinstance(event, TimerTick):
            state.auth_spinner.tick()
            state.reply_spinner.tick()
            tasks = []
        else:
            raise TypeError(f"Unknown event: {event!r}")
        if state.screen != before:
            logger.debug("Screen %s -> %s", before.name, state.screen.name)
        return state, tasks

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    async def _on_key(self, state: SessionState, event: KeyPressed) -> list[Task]:
        if event.key in QUIT_KEYS:
            state.quit = True
            return []

        if event.key == BACK_KEY and state.screen == Screen.MESSAGING_BOT:
            state.message_input.blur()
            state.screen = Screen.LISTING_BOTS
            return []

        if event.key == SUBMIT_KEY:
            if state.screen == Screen.LISTING_BOTS:
                await self._select_bot(state)
                return []
            if state.screen == Screen.MESSAGING_BOT:
                return self._submit(state)
            return []

        if state.screen == Screen.LISTING_BOTS:
            state.bots.handle_key(event.key, event.character)
        elif state.screen == Screen.MESSAGING_BOT:
            state.message_input.handle_key(event.key, event.character)
        return []

    async def _select_bot(self, state: SessionState) -> None:
        summary = state.bots.selected()
        if summary is None:
            return
        try:
            bot = await self._gateway.get_bot(summary.id)
        except Exception as e:
            logger.warning("Fetching bot %s failed: %s", summary.id, e)
            state.error = e
            return
        state.select_bot(bot)

    def _submit(self, state: SessionState) -> list[Task]:
        text = state.message_input.value
        bot = state.selected_bot
        if not text or bot is None:
            return []
        state.message_input.reset()
        state.transcript.append(f"You: {text}")
        state.screen = Screen.WAITING_FOR_RESPONSE
        return [SendMessage(bot=bot, text=text)]

    # ------------------------------------------------------------------
    # Async completions
    # ------------------------------------------------------------------

    def _on_authenticated(self, state: SessionState, event: AuthenticationCompleted) -> list[Task]:
        if state.screen != Screen.AUTHENTICATING:
            logger.debug("Ignoring authentication result in %s", state.screen.name)
            return []
        if event.success:
            state.bots.set_items(list(event.bots))
            state.screen = Screen.LISTING_BOTS
        else:
            logger.warning("Authentication failed: %s", event.error)
            state.error = event.error or GatewayError("Authentication failed")
        return []

    def _on_reply(self, state: SessionState, event: BotReplyCompleted) -> list[Task]:
        if state.screen != Screen.WAITING_FOR_RESPONSE:
            logger.debug("Ignoring bot reply in %s", state.screen.name)
            return []
        if event.error is not None:
            logger.warning("Bot reply failed: %s", event.error)
            state.error = event.error
        else:
            state.transcript.append(f"Bot: {event.text or ''}")
        # A failed send still returns to the chat screen; the error keeps the view.
        state.screen = Screen.MESSAGING_BOT
        return []
