"""
Reply variants: one per bot kind, each with its own extraction path.

Knowledge-based bots answer with::

    {"message": [{"response": ["<text>", ...]}, ...]}

Conversational-model bots answer with::

    {"message": ["<text>", ...]}
"""

from typing import Any, Union

from pydantic import BaseModel

from sarufi_chat.errors import MalformedReplyError
from sarufi_chat.models.bot import Bot, BotKind


class KnowledgeBasedReply(BaseModel):
    raw: Any = None

    def extract(self) -> str:
        try:
            first = self.raw["message"][0]["response"][0]
        except (KeyError, IndexError, TypeError):
            raise MalformedReplyError(
                "Unexpected knowledge-based reply: missing message[0].response[0]",
                details={"raw": self.raw},
            )
        if not isinstance(first, str):
            raise MalformedReplyError(
                f"Unexpected knowledge-based reply: expected text, got {type(first).__name__}",
                details={"raw": self.raw},
            )
        return first


class ConversationalReply(BaseModel):
    raw: Any = None

    def extract(self) -> str:
        try:
            first = self.raw["message"][0]
        except (KeyError, IndexError, TypeError):
            raise MalformedReplyError(
                "Unexpected conversational reply: missing message[0]",
                details={"raw": self.raw},
            )
        if not isinstance(first, str):
            raise MalformedReplyError(
                f"Unexpected conversational reply: expected text, got {type(first).__name__}",
                details={"raw": self.raw},
            )
        return first


BotReply = Union[KnowledgeBasedReply, ConversationalReply]


def reply_for(bot: Bot, raw: Any) -> BotReply:
    """Tag a raw /conversation payload with the variant matching ``bot``."""
    if bot.kind == BotKind.KNOWLEDGE_BASED:
        return KnowledgeBasedReply(raw=raw)
    return ConversationalReply(raw=raw)
