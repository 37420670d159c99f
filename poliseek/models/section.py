"""Document section models shared by extraction, ranking and context assembly."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Position(BaseModel):
    """Location of a section inside its source document."""
    model_config = ConfigDict(frozen=True)

    start_page: int
    end_page: Optional[int] = None
    start_offset: Optional[int] = None
    end_offset: Optional[int] = None


class Section(BaseModel):
    """Represents a titled, paged excerpt of a policy document."""
    model_config = ConfigDict(frozen=True)

    title: str
    content: str
    page_number: int
    article_number: Optional[str] = None
    section_id: Optional[str] = None
    position: Optional[Position] = None
    document_id: Optional[str] = None
    file_name: Optional[str] = None

    @property
    def start_page(self) -> int:
        """First page of the section, falling back to the page it was found on."""
        if self.position is not None:
            return self.position.start_page
        return self.page_number

    @property
    def is_structured(self) -> bool:
        return bool(self.article_number and self.section_id)


class DocumentInfo(BaseModel):
    """Provenance of a citable article or section."""
    model_config = ConfigDict(frozen=True)

    document_id: Optional[str] = None
    file_name: Optional[str] = None
    position: Optional[Position] = None


@dataclass
class ScoredSection:
    """A section paired with its relevance score for one query."""
    section: Section
    score: float


@dataclass
class DocumentRecord:
    """A source document known to a document store."""
    document_id: str
    file_name: str
    path: Optional[Path] = None
    created_at: Optional[datetime] = None
