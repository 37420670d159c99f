"""Context assembly from ranked policy sections."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..config import DEFAULT_GENERAL_CONTEXT_SECTIONS, DEFAULT_MAX_CONTEXT_CHARS
from ..models.section import DocumentInfo, Section

logger = logging.getLogger(__name__)

PARAGRAPH_BREAK = "\n\n"


@dataclass
class AssembledContext:
    """Context text handed to the model plus the citation lookup."""
    context_text: str
    document_info: Dict[str, DocumentInfo] = field(default_factory=dict)
    sections: List[Section] = field(default_factory=list)
    is_general: bool = False
    empty_corpus: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.context_text

    @property
    def sources(self) -> List[str]:
        """Distinct file names of the included sections, in context order."""
        return list(dict.fromkeys(s.file_name for s in self.sections if s.file_name))


def reference_keys(section: Section) -> List[str]:
    """Lookup keys under which a section can be cited."""
    keys = []
    if section.article_number:
        keys.append(f"article {section.article_number.strip().lower()}")
    if section.section_id:
        section_id = section.section_id.strip().lower()
        keys.append(f"section {section_id}")
        if section.title.lower().startswith("policy"):
            keys.append(f"policy {section_id}")
    return keys


def build_document_info(sections: Sequence[Section]) -> Dict[str, DocumentInfo]:
    """Build the citation lookup from sections carrying article/section numbers.

    The first section registered for a key wins.
    """
    document_info: Dict[str, DocumentInfo] = {}
    for section in sections:
        for key in reference_keys(section):
            document_info.setdefault(key, DocumentInfo(
                document_id=section.document_id,
                file_name=section.file_name,
                position=section.position
            ))
    return document_info


def format_section(section: Section) -> str:
    """Format one section as a context block."""
    source = f"[Source: {section.file_name}] " if section.file_name else ""
    return f"{source}[Page: {section.start_page}] {section.title}\n{section.content}{PARAGRAPH_BREAK}"


def general_context_sections(
    corpus: Sequence[Section],
    limit: int = DEFAULT_GENERAL_CONTEXT_SECTIONS
) -> List[Section]:
    """Pick the first section of each distinct document, in extraction order."""
    seen = set()
    selected = []
    for section in corpus:
        document_key = section.document_id or section.file_name
        if not document_key or document_key in seen:
            continue
        seen.add(document_key)
        selected.append(section)
        if len(selected) >= limit:
            break
    return selected


def truncate_at_paragraph(text: str, limit: int) -> str:
    """Cut text to at most ``limit`` characters at a paragraph boundary.

    Falls back to a hard cut when no paragraph break precedes the limit.
    """
    if len(text) <= limit:
        return text
    cut = text.rfind(PARAGRAPH_BREAK, 0, limit)
    if cut <= 0:
        return text[:limit]
    return text[:cut]


class ContextAssembler:
    """Builds a bounded context block from ranked sections."""

    def __init__(
        self,
        max_chars: int = DEFAULT_MAX_CONTEXT_CHARS,
        general_sections: int = DEFAULT_GENERAL_CONTEXT_SECTIONS
    ):
        """Initialize the assembler.

        Args:
            max_chars: Context must stay under this many characters
            general_sections: Sections used for the general-context fallback
        """
        self.max_chars = max_chars
        self.general_sections = general_sections

    def assemble(
        self,
        ranked_sections: Sequence[Section],
        corpus: Optional[Sequence[Section]] = None
    ) -> AssembledContext:
        """Assemble the context for ranked sections.

        When nothing was ranked, a general context with one section per
        document is built from ``corpus``. When the corpus is empty too, the
        result is empty and flagged with ``empty_corpus``.

        Args:
            ranked_sections: Sections ordered best first
            corpus: Every section available for the query; also the source of
                the citation lookup when given

        Returns:
            AssembledContext with text, lookup and the sections included
        """
        is_general = not ranked_sections
        if is_general:
            candidates = general_context_sections(corpus or [], self.general_sections)
            logger.info(f"No ranked sections, using general context from {len(candidates)} documents")
        else:
            candidates = list(ranked_sections)

        lookup_sections = corpus if corpus is not None else candidates
        document_info = build_document_info(lookup_sections)

        if not candidates:
            return AssembledContext(
                context_text="",
                document_info=document_info,
                is_general=is_general,
                empty_corpus=is_general and not corpus
            )

        blocks = []
        included = []
        total_length = 0
        for section in candidates:
            block = format_section(section)
            if total_length + len(block) >= self.max_chars:
                logger.info(f"Context size limit reached at {total_length} characters, truncating")
                break
            blocks.append(block)
            included.append(section)
            total_length += len(block)

        logger.info(f"Assembled context from {len(included)} sections ({total_length} characters)")
        return AssembledContext(
            context_text="".join(blocks),
            document_info=document_info,
            sections=included,
            is_general=is_general
        )


def assemble(
    ranked_sections: Sequence[Section],
    max_chars: int = DEFAULT_MAX_CONTEXT_CHARS,
    corpus: Optional[Sequence[Section]] = None
) -> AssembledContext:
    """Assemble context with a given character budget."""
    return ContextAssembler(max_chars=max_chars).assemble(ranked_sections, corpus)
