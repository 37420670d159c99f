"""Citation and answer models returned to callers."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .section import Position


class Citation(BaseModel):
    """A citation marker found in a generated answer."""
    model_config = ConfigDict(frozen=True)

    id: str
    reference: str
    document_id: Optional[str] = None
    file_name: Optional[str] = None
    position: Optional[Position] = None

    @property
    def is_resolved(self) -> bool:
        return self.document_id is not None


class AnswerOutcome(str, Enum):
    """Terminal state reached while answering a query."""
    ANSWERED = "answered"
    NO_DOCUMENTS = "no_documents"
    DEGRADED = "degraded"
    APOLOGY = "apology"


class Answer(BaseModel):
    """Best-effort answer to a policy question."""
    answer: str
    citations: List[Citation] = Field(default_factory=list)
    outcome: AnswerOutcome = AnswerOutcome.ANSWERED
    sources: List[str] = Field(default_factory=list)
