"""
Task runner and event loop.

Gateway calls run as independent asyncio tasks. Each posts exactly one
completion event onto the shared queue; the event loop is the single
consumer of that queue and the only caller of the controller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from sarufi_chat.gateway import BotGateway
from sarufi_chat.ui.controller import InteractionController
from sarufi_chat.ui.events import (
    QUIT_KEYS,
    Authenticate,
    AuthenticationCompleted,
    BotReplyCompleted,
    Event,
    KeyPressed,
    SendMessage,
    Task,
)
from sarufi_chat.ui.render import render
from sarufi_chat.ui.state import SessionState

logger = logging.getLogger(__name__)


class AsyncTaskRunner:
    def __init__(self, gateway: BotGateway, queue: "asyncio.Queue[Event]"):
        self._gateway = gateway
        self._queue = queue
        self._running: dict[asyncio.Task[None], Task] = {}

    def launch(self, task: Task) -> asyncio.Task[None]:
        """Schedule ``task`` without waiting for it."""
        if isinstance(task, Authenticate):
            coro = self._authenticate()
        elif isinstance(task, SendMessage):
            coro = self._send_message(task)
        else:
            raise TypeError(f"Unknown task: {task!r}")
        handle = asyncio.get_running_loop().create_task(coro)
        self._running[handle] = task
        handle.add_done_callback(lambda t: self._running.pop(t, None))
        logger.debug("Launched %s", type(task).__name__)
        return handle

    def in_flight(self, kind: Optional[type] = None) -> int:
        if kind is None:
            return len(self._running)
        return sum(1 for t in self._running.values() if isinstance(t, kind))

    async def _authenticate(self) -> None:
        try:
            bots = await self._gateway.authenticate()
        except Exception as e:
            event: Event = AuthenticationCompleted(success=False, error=e)
        else:
            event = AuthenticationCompleted(success=True, bots=tuple(bots))
        logger.debug("Authentication finished: success=%s", event.success)
        self._queue.put_nowait(event)

    async def _send_message(self, task: SendMessage) -> None:
        try:
            text = await self._gateway.respond(task.bot, task.text, channel=task.channel)
        except Exception as e:
            event: Event = BotReplyCompleted(error=e)
        else:
            event = BotReplyCompleted(text=text)
        logger.debug("Reply from bot %s finished: error=%s", task.bot.id, event.error)
        self._queue.put_nowait(event)

    def shutdown(self) -> None:
        """Forget outstanding tasks; they are left to die with the process."""
        if self._running:
            logger.debug("Exiting with %d task(s) still running", len(self._running))
        self._running.clear()


class EventLoop:
    def __init__(
        self,
        controller: InteractionController,
        runner: AsyncTaskRunner,
        queue: "asyncio.Queue[Event]",
        state: Optional[SessionState] = None,
        on_frame: Optional[Callable[[str], None]] = None,
    ):
        self.controller = controller
        self.runner = runner
        self.queue = queue
        self.state = state or SessionState()
        self._on_frame = on_frame
        self._handling: Optional[asyncio.Future] = None

    def _emit_frame(self) -> None:
        if self._on_frame is not None:
            self._on_frame(render(self.state))

    def post(self, event: Event) -> None:
        self.queue.put_nowait(event)
        # A quit key preempts an event still waiting on the network.
        if isinstance(event, KeyPressed) and event.key in QUIT_KEYS and self._handling is not None:
            self._handling.cancel()

    async def step(self) -> None:
        """Handle the next queued event."""
        event = await self.queue.get()
        self._handling = asyncio.ensure_future(self.controller.handle_event(self.state, event))
        try:
            await asyncio.wait({self._handling})
        finally:
            handling, self._handling = self._handling, None
        if handling.cancelled():
            logger.debug("Abandoned %s for a quit key", type(event).__name__)
            return
        self.state, tasks = handling.result()
        for task in tasks:
            self.runner.launch(task)
        self._emit_frame()

    async def run(self) -> SessionState:
        for task in self.controller.startup_tasks():
            self.runner.launch(task)
        self._emit_frame()
        try:
            while not self.state.quit:
                await self.step()
        finally:
            self.runner.shutdown()
        return self.state
