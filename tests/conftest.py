"""
Shared test fixtures and fakes for the policy answer engine.

Provides: Section factory, fake generative client, fake document store
Dependencies: pytest
"""

import threading
import time
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Union

import pytest

from poliseek.models import DocumentRecord, Position, Section


class FakeGenerativeClient:
    """Generative client returning a canned answer or raising an error."""

    def __init__(self, response: str = "", error: Optional[Exception] = None, delay: float = 0.0):
        self.response = response
        self.error = error
        self.delay = delay
        self.calls = []
        self.threads = []

    def generate(self, system_prompt: str, user_query: str) -> str:
        self.calls.append((system_prompt, user_query))
        self.threads.append(threading.current_thread())
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


class FakeDocumentStore:
    """Document store serving page texts from memory."""

    def __init__(self, documents: Dict[str, Union[List[str], Exception]]):
        base = datetime(2024, 1, 1)
        self.records = [
            DocumentRecord(
                document_id=document_id,
                file_name=f"{document_id}.pdf",
                created_at=base + timedelta(days=index)
            )
            for index, document_id in enumerate(documents)
        ]
        self.documents = documents
        self.extracted = []

    def list_documents(self) -> List[DocumentRecord]:
        return list(self.records)

    def extract_pages(self, record: DocumentRecord) -> List[str]:
        self.extracted.append(record.document_id)
        pages = self.documents[record.document_id]
        if isinstance(pages, Exception):
            raise pages
        return pages


@pytest.fixture
def make_section():
    """Factory for sections with sensible defaults."""
    def _make(
        title: str = "Untitled",
        content: str = "",
        page_number: int = 1,
        article_number: Optional[str] = None,
        section_id: Optional[str] = None,
        document_id: Optional[str] = "doc-1",
        file_name: Optional[str] = "handbook.pdf"
    ) -> Section:
        return Section(
            title=title,
            content=content,
            page_number=page_number,
            article_number=article_number,
            section_id=section_id,
            position=Position(start_page=page_number),
            document_id=document_id,
            file_name=file_name
        )
    return _make


@pytest.fixture
def unrelated_sections(make_section):
    """Ten sections about topics unrelated to attendance."""
    topics = [
        ("Library Hours", "The library opens at eight in the morning."),
        ("Parking Permits", "Vehicles need a valid sticker on campus."),
        ("Tuition Fees", "Fees are payable before enrollment closes."),
        ("Scholarships", "Grants are awarded on merit and need."),
        ("Laboratory Safety", "Goggles must be worn during experiments."),
        ("Canteen Rules", "Food may not be taken into classrooms."),
        ("Graduation", "Candidates must clear all accounts."),
        ("Email Accounts", "Each enrolled person receives an address."),
        ("Lost and Found", "Items are kept for thirty days."),
        ("Clinic Services", "The nurse is available on weekdays."),
    ]
    return [
        make_section(title=title, content=content, document_id=f"doc-{i}", file_name=f"doc-{i}.pdf")
        for i, (title, content) in enumerate(topics)
    ]


@pytest.fixture
def client_factory():
    """Builds fake generative clients."""
    return FakeGenerativeClient


@pytest.fixture
def store_factory():
    """Builds fake document stores."""
    return FakeDocumentStore
