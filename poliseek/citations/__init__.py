"""Citations package for resolving model citation markers."""

from .extractor import CitationResult, extract_citations

__all__ = ['CitationResult', 'extract_citations']
