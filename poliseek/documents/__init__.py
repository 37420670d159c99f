"""Documents package for page loading and section extraction."""

from .loader import DocumentLoader
from .section_extractor import SectionExtractor
from .store import DirectoryDocumentStore, DocumentStore

__all__ = ['DirectoryDocumentStore', 'DocumentLoader', 'DocumentStore', 'SectionExtractor']
