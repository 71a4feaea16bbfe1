"""
sarufi-chat UI: Textual application shell.

The app owns the asyncio loop and the terminal. It turns key presses and a
periodic timer into events, and paints whatever the renderer returns. All
decisions are made by the controller behind the event loop.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from sarufi_chat import __version__
from sarufi_chat.gateway import BotGateway
from sarufi_chat.ui.controller import InteractionController
from sarufi_chat.ui.events import KeyPressed, TimerTick
from sarufi_chat.ui.runner import AsyncTaskRunner, EventLoop
from sarufi_chat.ui.state import SessionState

TICK_INTERVAL_S = 0.1


class SarufiChatApp(App, inherit_bindings=False):  # type: ignore[type-arg]
    """Interactive chat with Sarufi bots."""

    TITLE = f"sarufi-chat {__version__}"

    # Quit keys must reach the controller even if a widget would claim them.
    BINDINGS = [
        Binding("ctrl+c", "forward_key('ctrl+c')", "Quit", show=False, priority=True),
        Binding("escape", "forward_key('escape')", "Quit", show=False, priority=True),
    ]

    def __init__(self, gateway: BotGateway, tick_interval: float = TICK_INTERVAL_S):
        super().__init__()
        self._gateway = gateway
        self._tick_interval = tick_interval
        self.chat_loop: Optional[EventLoop] = None

    def compose(self) -> ComposeResult:
        yield Static(id="frame")

    def on_mount(self) -> None:
        queue: asyncio.Queue = asyncio.Queue()
        self.chat_loop = EventLoop(
            controller=InteractionController(self._gateway),
            runner=AsyncTaskRunner(self._gateway, queue),
            queue=queue,
            state=SessionState(),
            on_frame=self._paint,
        )
        self.set_interval(self._tick_interval, self._tick)
        self.run_worker(self._drive(self.chat_loop), name="event-loop", exclusive=True)

    async def _drive(self, chat_loop: EventLoop) -> None:
        try:
            await chat_loop.run()
        finally:
            await self._gateway.close()
        self.exit()

    def _tick(self) -> None:
        if self.chat_loop is not None:
            self.chat_loop.post(TimerTick())

    def _paint(self, frame: str) -> None:
        self.query_one("#frame", Static).update(Text(frame))

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        if self.chat_loop is not None:
            self.chat_loop.post(KeyPressed(key=event.key, character=event.character))

    def action_forward_key(self, key: str) -> None:
        if self.chat_loop is not None:
            self.chat_loop.post(KeyPressed(key=key))

    @property
    def session_state(self) -> Optional[SessionState]:
        return self.chat_loop.state if self.chat_loop else None


def run(gateway: BotGateway) -> Optional[int]:
    """Run the UI until the user quits. Returns the app's exit code."""
    app = SarufiChatApp(gateway)
    app.run()
    return app.return_code
