"""Document store boundary used by the answer orchestrator."""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Union

from ..config import INPUT_DOCUMENTS_DIR, SUPPORTED_DOCUMENT_PATTERNS
from ..exceptions import ExtractionError
from ..models.section import DocumentRecord
from .loader import DocumentLoader

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Capability for listing reference documents and reading their pages."""

    def list_documents(self) -> List[DocumentRecord]:
        ...

    def extract_pages(self, record: DocumentRecord) -> List[str]:
        """Return the page texts of a document or raise ExtractionError."""
        ...


class DirectoryDocumentStore:
    """Reference documents read from a local directory."""

    def __init__(
        self,
        directory: Union[str, Path] = INPUT_DOCUMENTS_DIR,
        patterns: Sequence[str] = SUPPORTED_DOCUMENT_PATTERNS,
        loader: Optional[DocumentLoader] = None
    ):
        """Initialize the store.

        Args:
            directory: Directory containing the policy documents
            patterns: Glob patterns of files to consider
            loader: Loader used to read page text
        """
        self.directory = Path(directory)
        self.patterns = patterns
        self.loader = loader or DocumentLoader()

    def list_documents(self) -> List[DocumentRecord]:
        """List matching documents, using modification time as creation time."""
        if not self.directory.exists():
            logger.warning(f"Document directory '{self.directory}' does not exist")
            return []

        paths = sorted({path for pattern in self.patterns for path in self.directory.glob(pattern)})
        return [
            DocumentRecord(
                document_id=path.relative_to(self.directory).as_posix(),
                file_name=path.name,
                path=path,
                created_at=datetime.fromtimestamp(path.stat().st_mtime)
            )
            for path in paths
        ]

    def extract_pages(self, record: DocumentRecord) -> List[str]:
        if record.path is None:
            raise ExtractionError(f"Document {record.file_name} has no path", record.document_id)
        return self.loader.load_pages(record.path)
