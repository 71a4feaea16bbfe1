"""
UI state types: pure Python dataclasses, no Textual imports.

These can be constructed and tested without a running Textual app.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from rich.spinner import Spinner as RichSpinner

from sarufi_chat.models.bot import Bot, BotSummary

BOT_LIST_TITLE = "My Sarufi Bots"
INPUT_PLACEHOLDER = "Write a message"
INPUT_CHAR_LIMIT = 156
LIST_PAGE_SIZE = 10


class Screen(Enum):
    AUTHENTICATING = auto()
    LISTING_BOTS = auto()
    MESSAGING_BOT = auto()
    WAITING_FOR_RESPONSE = auto()


# ---------------------------------------------------------------------------
# Widget sub-states
# ---------------------------------------------------------------------------


@dataclass
class Spinner:
    """Frame table borrowed from rich plus the index of the current frame."""

    frames: tuple[str, ...]
    index: int = 0

    @classmethod
    def named(cls, name: str) -> Spinner:
        return cls(frames=tuple(RichSpinner(name).frames))

    @property
    def frame(self) -> str:
        return self.frames[self.index % len(self.frames)] if self.frames else ""

    def tick(self) -> None:
        self.index = (self.index + 1) % max(len(self.frames), 1)


@dataclass
class BotList:
    """Navigable bot catalog."""

    title: str = BOT_LIST_TITLE
    items: list[BotSummary] = field(default_factory=list)
    cursor: int = 0

    def set_items(self, items: list[BotSummary]) -> None:
        self.items = list(items)
        self.cursor = 0

    def selected(self) -> Optional[BotSummary]:
        if not self.items:
            return None
        return self.items[self.cursor]

    def _move(self, delta: int) -> None:
        if self.items:
            self.cursor = min(max(self.cursor + delta, 0), len(self.items) - 1)

    def handle_key(self, key: str, character: Optional[str] = None) -> bool:
        """Apply a navigation key. Returns False when the key is not a list key."""
        if key in ("up", "k"):
            self._move(-1)
        elif key in ("down", "j"):
            self._move(1)
        elif key == "pageup":
            self._move(-LIST_PAGE_SIZE)
        elif key == "pagedown":
            self._move(LIST_PAGE_SIZE)
        elif key in ("home", "g"):
            self.cursor = 0
        elif key in ("end", "G") or character == "G":
            self.cursor = max(len(self.items) - 1, 0)
        else:
            return False
        return True


@dataclass
class TextInput:
    """Single-line text editor."""

    value: str = ""
    cursor: int = 0
    focused: bool = False
    placeholder: str = INPUT_PLACEHOLDER
    char_limit: int = INPUT_CHAR_LIMIT

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    def reset(self) -> None:
        self.value = ""
        self.cursor = 0

    def insert(self, text: str) -> None:
        room = self.char_limit - len(self.value)
        if room <= 0:
            return
        text = text[:room]
        self.value = self.value[: self.cursor] + text + self.value[self.cursor :]
        self.cursor += len(text)

    def handle_key(self, key: str, character: Optional[str] = None) -> bool:
        """Apply an editing key. Returns False when the key was not used."""
        if not self.focused:
            return False
        if key == "backspace":
            if self.cursor > 0:
                self.value = self.value[: self.cursor - 1] + self.value[self.cursor :]
                self.cursor -= 1
        elif key == "delete":
            self.value = self.value[: self.cursor] + self.value[self.cursor + 1 :]
        elif key == "left":
            self.cursor = max(self.cursor - 1, 0)
        elif key == "right":
            self.cursor = min(self.cursor + 1, len(self.value))
        elif key in ("home", "ctrl+a"):
            self.cursor = 0
        elif key in ("end", "ctrl+e"):
            self.cursor = len(self.value)
        elif key == "ctrl+u":
            self.value = self.value[self.cursor :]
            self.cursor = 0
        elif key == "ctrl+k":
            self.value = self.value[: self.cursor]
        elif character and character.isprintable():
            self.insert(character)
        else:
            return False
        return True


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------


@dataclass
class SessionState:
    """Everything the renderer needs; written only by the controller."""

    screen: Screen = Screen.AUTHENTICATING
    bots: BotList = field(default_factory=BotList)
    selected_bot: Optional[Bot] = None
    transcript: list[str] = field(default_factory=list)
    error: Optional[BaseException] = None
    quit: bool = False
    message_input: TextInput = field(default_factory=TextInput)
    auth_spinner: Spinner = field(default_factory=lambda: Spinner.named("dots"))
    reply_spinner: Spinner = field(default_factory=lambda: Spinner.named("line"))

    def select_bot(self, bot: Bot) -> None:
        self.selected_bot = bot
        self.transcript = []
        self.message_input.reset()
        self.message_input.focus()
        self.screen = Screen.MESSAGING_BOT


__all__ = [
    "BOT_LIST_TITLE",
    "INPUT_CHAR_LIMIT",
    "INPUT_PLACEHOLDER",
    "BotList",
    "Screen",
    "SessionState",
    "Spinner",
    "TextInput",
]
