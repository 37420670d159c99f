"""Utility functions for inspecting the policy corpus."""

import logging
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from tqdm import tqdm

from .documents.section_extractor import SectionExtractor
from .documents.store import DocumentStore
from .exceptions import ExtractionError
from .models.section import Section

logger = logging.getLogger(__name__)


def load_all_sections(
    document_store: DocumentStore,
    section_extractor: Optional[SectionExtractor] = None,
    show_progress: bool = True
) -> List[Section]:
    """Extract sections from every document in the store, without a document cap.

    Documents that fail to extract are skipped.
    """
    section_extractor = section_extractor or SectionExtractor()
    sections = []
    for record in tqdm(document_store.list_documents(), desc="Extracting", disable=not show_progress):
        try:
            pages = document_store.extract_pages(record)
        except ExtractionError as e:
            logger.warning(f"Skipping document {record.file_name}: {str(e)}")
            continue
        sections.extend(section_extractor.extract(pages, record.document_id, record.file_name))
    return sections


def inspect_corpus(sections: Sequence[Section]) -> Dict[str, Any]:
    """Inspect extracted sections.

    Args:
        sections: Sections to inspect

    Returns:
        Dictionary containing corpus statistics
    """
    if not sections:
        return {"error": "No sections found. Add documents to the policy directory."}

    lengths = np.array([len(section.content) for section in sections])
    per_document = Counter(section.file_name or "unknown" for section in sections)

    return {
        "num_sections": len(sections),
        "num_documents": len(per_document),
        "sections_per_document": dict(per_document),
        "structured_sections": sum(1 for section in sections if section.is_structured),
        "articles": sorted({s.article_number for s in sections if s.article_number}),
        "content_length_statistics": {
            "min": int(np.min(lengths)),
            "max": int(np.max(lengths)),
            "mean": float(np.mean(lengths)),
            "median": float(np.median(lengths))
        },
        "sample_titles": [section.title for section in sections[:10]]
    }


def print_inspection_results(stats: Dict[str, Any]) -> None:
    """Print formatted corpus statistics."""
    print("\n=== Policy Corpus Inspection ===\n")
    if "error" in stats:
        print(stats["error"])
        return

    print(f"  • Number of sections: {stats['num_sections']}")
    print(f"  • Number of documents: {stats['num_documents']}")
    print(f"  • Structured sections: {stats['structured_sections']}")
    print(f"  • Articles: {', '.join(stats['articles']) or 'none'}")

    print("\nSections per document:")
    for file_name, count in stats["sections_per_document"].items():
        print(f"  • {file_name}: {count}")

    print("\nContent Length Statistics:")
    length_stats = stats["content_length_statistics"]
    print(f"  • Min length: {length_stats['min']}")
    print(f"  • Max length: {length_stats['max']}")
    print(f"  • Mean length: {length_stats['mean']:.2f}")
    print(f"  • Median length: {length_stats['median']:.2f}")

    print("\nSample Titles (first 10):")
    for i, title in enumerate(stats["sample_titles"], 1):
        print(f"{i}. {title}")
