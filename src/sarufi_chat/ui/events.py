"""
Events consumed by the controller and tasks it asks the runner to launch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from sarufi_chat.gateway import DEFAULT_CHANNEL
from sarufi_chat.models.bot import Bot, BotSummary

QUIT_KEYS = frozenset({"ctrl+c", "escape"})
BACK_KEY = "ctrl+b"
SUBMIT_KEY = "enter"


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KeyPressed:
    key: str
    character: Optional[str] = None


@dataclass(frozen=True)
class AuthenticationCompleted:
    success: bool
    bots: tuple[BotSummary, ...] = ()
    error: Optional[BaseException] = None


@dataclass(frozen=True)
class BotReplyCompleted:
    text: Optional[str] = None
    error: Optional[BaseException] = None


@dataclass(frozen=True)
class TimerTick:
    pass


Event = Union[KeyPressed, AuthenticationCompleted, BotReplyCompleted, TimerTick]


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Authenticate:
    pass


@dataclass(frozen=True)
class SendMessage:
    bot: Bot
    text: str
    channel: str = DEFAULT_CHANNEL


Task = Union[Authenticate, SendMessage]
