"""Dialogue turns and per-turn context for the assistant."""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from aqua_core.models.organization import Organization
from aqua_core.models.pollution import PollutionMetric


class DialogueRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class DialogueTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: DialogueRole
    content: str


class ResponseContext(BaseModel):
    """Optional values a response builder may weave into its reply."""

    metric: Optional[PollutionMetric] = None
    organization: Optional[Organization] = None


class DialogueTurnResult(BaseModel):
    """Outcome of one turn: the reply and the extended transcript."""

    reply: str
    rule_name: str
    transcript: Tuple[DialogueTurn, ...]
