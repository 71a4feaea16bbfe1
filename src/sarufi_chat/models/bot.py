"""
Bot models: records returned by /chatbots and /chatbot/{id}.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class BotKind(str, Enum):
    KNOWLEDGE_BASED = "knowledge_based"
    CONVERSATIONAL = "conversational"


class BotSummary(BaseModel):
    """Catalog entry shown in the bot list."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str = ""
    description: Optional[str] = ""


class Bot(BaseModel):
    """Full bot record needed to send messages and read replies."""

    model_config = ConfigDict(frozen=True, extra="ignore", protected_namespaces=())

    id: int
    name: str = ""
    description: Optional[str] = ""
    industry: Optional[str] = None
    model_name: Optional[str] = None

    @property
    def kind(self) -> BotKind:
        # Bots without a model name answer from their knowledge base.
        return BotKind.CONVERSATIONAL if self.model_name else BotKind.KNOWLEDGE_BASED
