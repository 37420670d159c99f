"""Citation extraction from generated answers.

The model is asked to cite policies as ``[Type Number: Title]`` where Type is
Article, Section or Policy. Markers are found left to right, resolved against
the document lookup built during context assembly and rewritten in place as
``<marker>(citation-<n>)`` links. Markers that cannot be resolved are still
recorded, they just carry no document provenance.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Union

from ..exceptions import MalformedCitation
from ..models.citation import Citation
from ..models.section import DocumentInfo

logger = logging.getLogger(__name__)

CITATION_TYPES = ('Article', 'Section', 'Policy')
MARKER_PATTERN = re.compile(
    r'\[(' + '|'.join(CITATION_TYPES) + r')\s+(\S[^:\[\]]*?)\s*:\s*(\S[^\[\]]*?)\s*\]'
)
CITATION_ID_PREFIX = "citation-"

DocumentLookup = Mapping[str, Union[DocumentInfo, Dict]]


@dataclass
class CitationResult:
    """Rewritten answer text and the citations found in it."""
    text: str
    citations: List[Citation] = field(default_factory=list)


def reference_key(marker_type: str, number: str) -> str:
    """Normalize a marker into a document lookup key."""
    return f"{marker_type.lower()} {number.strip().lower()}"


def _parse_marker(text: str, start: int) -> re.Match:
    match = MARKER_PATTERN.match(text, start)
    if match is None:
        raise MalformedCitation(f"Bracket at {start} is not a citation marker", start)
    return match


def _resolve(document_info: DocumentLookup, key: str) -> Optional[DocumentInfo]:
    info = document_info.get(key)
    if info is None:
        return None
    if isinstance(info, DocumentInfo):
        return info
    return DocumentInfo(**info)


def extract_citations(
    generated_text: str,
    document_info: Optional[DocumentLookup] = None
) -> CitationResult:
    """Extract citation markers and rewrite them as links.

    Args:
        generated_text: Answer text produced by the model
        document_info: Lookup from reference keys ("article 5") to provenance

    Returns:
        CitationResult with the rewritten text and one citation per marker,
        in order of appearance
    """
    document_info = document_info or {}
    citations: List[Citation] = []
    pieces: List[str] = []
    last_end = 0

    pos = generated_text.find('[')
    while pos != -1:
        try:
            match = _parse_marker(generated_text, pos)
        except MalformedCitation as e:
            logger.debug(str(e))
            pos = generated_text.find('[', pos + 1)
            continue

        marker_type = match.group(1)
        number = match.group(2).strip()
        title = match.group(3).strip()
        citation_id = f"{CITATION_ID_PREFIX}{len(citations)}"

        info = _resolve(document_info, reference_key(marker_type, number))
        if info is None:
            logger.info(f"Citation '{marker_type} {number}' has no matching document")

        citations.append(Citation(
            id=citation_id,
            reference=f"{marker_type} {number}: {title}",
            document_id=info.document_id if info else None,
            file_name=info.file_name if info else None,
            position=info.position if info else None
        ))

        pieces.append(generated_text[last_end:match.start()])
        pieces.append(f"{match.group(0)}({citation_id})")
        last_end = match.end()
        pos = generated_text.find('[', last_end)

    pieces.append(generated_text[last_end:])
    logger.info(f"Extracted {len(citations)} citations from generated text")
    return CitationResult(text="".join(pieces), citations=citations)
