"""Section extraction from policy document page text."""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from ..config import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_POLICY_CONTEXT_AFTER,
    DEFAULT_POLICY_CONTEXT_BEFORE
)
from ..models.section import Position, Section

logger = logging.getLogger(__name__)

PAGE_MARKER_PATTERN = re.compile(r'^--- PAGE \d+ ---[ \t]*\n?', re.MULTILINE)


class SectionExtractor:
    """Splits page text into article, section, policy or heading sections."""

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_title_length: int = 100,
        policy_context_before: int = DEFAULT_POLICY_CONTEXT_BEFORE,
        policy_context_after: int = DEFAULT_POLICY_CONTEXT_AFTER
    ):
        """Initialize the section extractor.

        Args:
            chunk_size: Size of page chunks for pages without any headings
            max_title_length: Maximum length for a line to be considered a heading
            policy_context_before: Characters kept before a policy number
            policy_context_after: Characters kept after a policy number
        """
        self.chunk_size = chunk_size
        self.max_title_length = max_title_length
        self.policy_context_before = policy_context_before
        self.policy_context_after = policy_context_after

        self.article_pattern = re.compile(
            r'^[ \t]*article[ \t]+([IVX\d]+)\b[ \t]*[-:.]?[ \t]*(.*)$',
            re.IGNORECASE | re.MULTILINE
        )
        self.section_pattern = re.compile(
            r'^[ \t]*section[ \t]+(\d+(?:\.\d+)*[A-Za-z]?)\b[ \t]*[-:.]?[ \t]*(.*)$',
            re.IGNORECASE | re.MULTILINE
        )
        self.policy_pattern = re.compile(
            r'^[ \t]*policy[ \t]+(?:number[ \t]*)?[:#]?[ \t]*(\d+(?:\.\d+)?)\b',
            re.IGNORECASE | re.MULTILINE
        )
        self.policy_title_pattern = re.compile(r'(?:title|subject):[ \t]*([^\n]+)', re.IGNORECASE)

        # Heading patterns for pages without articles, sections or policies
        self.title_patterns = [
            r'^[A-Z][A-Z\s]{5,}:?$',  # ALL CAPS headings
            r'^[IVX]+\.\s+[A-Z]',  # Roman numeral headings
            r'^\d+\.\s+[A-Z]',  # Numbered headings
            r'^[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*:?$',  # Title Case lines
            r'^[A-Z][a-zA-Z\s]{3,}:$',  # Headers ending with colon
        ]

    @staticmethod
    def split_pages(text: str) -> List[str]:
        """Split raw document text into pages.

        Understands ``--- PAGE n ---`` markers and form feeds; text without
        either is a single page.
        """
        if PAGE_MARKER_PATTERN.search(text):
            pages = PAGE_MARKER_PATTERN.split(text)
            # Text before the first marker is not a page
            return pages[1:] if not pages[0].strip() else pages
        return text.split('\f')

    def _is_title(self, line: str) -> bool:
        """Check if a line is a heading."""
        line = line.strip()
        if not line or len(line) > self.max_title_length:
            return False
        return any(re.match(pattern, line) for pattern in self.title_patterns)

    @staticmethod
    def _title(kind: str, number: str, title: str) -> str:
        title = title.strip()
        return f"{kind} {number}: {title}" if title else f"{kind} {number}"

    def _article_sections(
        self,
        page_text: str,
        page_number: int
    ) -> List[Tuple[int, Section]]:
        matches = list(self.article_pattern.finditer(page_text))
        sections = []
        for i, match in enumerate(matches):
            end = matches[i + 1].start() if i + 1 < len(matches) else len(page_text)
            sections.append((match.start(), Section(
                title=self._title("Article", match.group(1), match.group(2)),
                content=page_text[match.start():end].strip(),
                page_number=page_number,
                article_number=match.group(1),
                position=Position(start_page=page_number, end_page=page_number,
                                  start_offset=match.start(), end_offset=end)
            )))
        return sections

    def _section_sections(
        self,
        page_text: str,
        page_number: int,
        articles: Sequence[Tuple[int, Section]],
        current_article: Optional[str]
    ) -> List[Tuple[int, Section]]:
        matches = list(self.section_pattern.finditer(page_text))
        sections = []
        for i, match in enumerate(matches):
            end = matches[i + 1].start() if i + 1 < len(matches) else len(page_text)

            # Belongs to the closest article heading above it
            article_number = current_article
            for offset, article in articles:
                if offset <= match.start():
                    article_number = article.article_number

            sections.append((match.start(), Section(
                title=self._title("Section", match.group(1), match.group(2)),
                content=page_text[match.start():end].strip(),
                page_number=page_number,
                article_number=article_number,
                section_id=match.group(1),
                position=Position(start_page=page_number, end_page=page_number,
                                  start_offset=match.start(), end_offset=end)
            )))
        return sections

    def _policy_sections(self, page_text: str, page_number: int) -> List[Tuple[int, Section]]:
        sections = []
        for match in self.policy_pattern.finditer(page_text):
            policy_id = match.group(1)
            start = max(0, match.start() - self.policy_context_before)
            end = min(len(page_text), match.start() + self.policy_context_after)
            policy_context = page_text[start:end]

            title_match = self.policy_title_pattern.search(policy_context)
            policy_title = title_match.group(1) if title_match else ""

            sections.append((match.start(), Section(
                title=self._title("Policy", policy_id, policy_title),
                content=policy_context.strip(),
                page_number=page_number,
                section_id=policy_id,
                position=Position(start_page=page_number, end_page=page_number,
                                  start_offset=start, end_offset=end)
            )))
        return sections

    def _heading_sections(self, page_text: str, page_number: int) -> List[Section]:
        headings = []
        offset = 0
        for line in page_text.splitlines(keepends=True):
            if self._is_title(line):
                headings.append((offset, line.strip().rstrip(':')))
            offset += len(line)

        sections = []
        for i, (start, title) in enumerate(headings):
            end = headings[i + 1][0] if i + 1 < len(headings) else len(page_text)
            sections.append(Section(
                title=title,
                content=page_text[start:end].strip(),
                page_number=page_number,
                position=Position(start_page=page_number, end_page=page_number,
                                  start_offset=start, end_offset=end)
            ))
        return sections

    def _chunk_sections(self, page_text: str, page_number: int) -> List[Section]:
        chunks = []
        current_chunk = ""
        for paragraph in re.split(r'\n\s*\n', page_text):
            paragraph = paragraph.strip()
            if not paragraph:
                continue
            if current_chunk and len(current_chunk) + len(paragraph) > self.chunk_size:
                chunks.append(current_chunk)
                current_chunk = paragraph
            else:
                current_chunk += ("\n\n" if current_chunk else "") + paragraph
        if current_chunk:
            chunks.append(current_chunk)

        return [
            Section(
                title=f"Page {page_number} - Part {part}",
                content=chunk,
                page_number=page_number,
                position=Position(start_page=page_number, end_page=page_number)
            )
            for part, chunk in enumerate(chunks, 1)
        ]

    def extract(
        self,
        pages: Sequence[str],
        document_id: Optional[str] = None,
        file_name: Optional[str] = None
    ) -> List[Section]:
        """Extract ordered sections from the pages of one document.

        Pages with article, section or policy headings yield one section per
        heading. Other pages fall back to generic headings, then to paragraph
        chunks.

        Args:
            pages: Page texts, first page first
            document_id: Identifier of the source document
            file_name: File name of the source document

        Returns:
            Sections in document order
        """
        sections: List[Section] = []
        current_article: Optional[str] = None

        for page_number, page_text in enumerate(pages, 1):
            if not page_text.strip():
                continue

            articles = self._article_sections(page_text, page_number)
            structured = (
                articles
                + self._section_sections(page_text, page_number, articles, current_article)
                + self._policy_sections(page_text, page_number)
            )
            if articles:
                current_article = articles[-1][1].article_number

            if structured:
                page_sections = [section for _, section in sorted(structured, key=lambda item: item[0])]
            else:
                page_sections = (
                    self._heading_sections(page_text, page_number)
                    or self._chunk_sections(page_text, page_number)
                )

            sections.extend(
                section.model_copy(update={'document_id': document_id, 'file_name': file_name})
                for section in page_sections
            )

        logger.info(f"Extracted {len(sections)} sections from {file_name or 'document'}")
        return sections
