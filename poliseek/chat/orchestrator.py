"""Answer orchestration: ranking, context assembly, generation and citations."""

from concurrent.futures import ThreadPoolExecutor
import threading
from datetime import datetime
from typing import List, Optional, Sequence
import logging

from ..citations.extractor import extract_citations
from ..config import (
    DEFAULT_EXTRACTION_WORKERS,
    DEFAULT_LLM_CONTEXT_CHARS,
    DEFAULT_LLM_TIMEOUT,
    DEFAULT_MAX_CONTEXT_CHARS,
    DEFAULT_MAX_DOCUMENTS
)
from ..context.assembler import AssembledContext, ContextAssembler
from ..context.prompts import build_system_prompt
from ..documents.section_extractor import SectionExtractor
from ..documents.store import DocumentStore
from ..exceptions import EmptyCorpus, ExtractionError, LLMTimeout, ModelError
from ..llm.client import GenerativeClient
from ..models.citation import Answer, AnswerOutcome
from ..models.section import DocumentRecord, ScoredSection, Section
from ..retrieval.scorer import LexicalScorer

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

NO_DOCUMENTS_MESSAGE = (
    "I don't have any information from policy documents yet. "
    "Please upload some documents so I can provide accurate answers."
)
APOLOGY_MESSAGE = (
    "I'm sorry, I couldn't answer your question right now. "
    "Please try again later or check with the administration."
)


class AnswerOrchestrator:
    """Answers policy questions from a document store using a generative model."""

    def __init__(
        self,
        document_store: DocumentStore,
        generative_client: GenerativeClient,
        scorer: Optional[LexicalScorer] = None,
        section_extractor: Optional[SectionExtractor] = None,
        max_context_chars: int = DEFAULT_MAX_CONTEXT_CHARS,
        llm_context_chars: int = DEFAULT_LLM_CONTEXT_CHARS,
        max_documents: int = DEFAULT_MAX_DOCUMENTS,
        extraction_workers: int = DEFAULT_EXTRACTION_WORKERS,
        llm_timeout: float = DEFAULT_LLM_TIMEOUT
    ):
        """Initialize the orchestrator.

        Args:
            document_store: Source of reference documents and their page text
            generative_client: Model used to write answers
            scorer: Section ranking strategy
            section_extractor: Splits page text into sections
            max_context_chars: Budget for the assembled context
            llm_context_chars: Bound on the context at the model boundary
            max_documents: Documents processed per request
            extraction_workers: Threads used to extract documents in parallel
            llm_timeout: Seconds to wait for the model before degrading
        """
        self.document_store = document_store
        self.generative_client = generative_client
        self.scorer = scorer or LexicalScorer()
        self.section_extractor = section_extractor or SectionExtractor()
        self.assembler = ContextAssembler(max_chars=max_context_chars)
        self.llm_context_chars = llm_context_chars
        self.max_documents = max_documents
        self.extraction_workers = extraction_workers
        self.llm_timeout = llm_timeout

    def answer(self, query: str) -> Answer:
        """Answer a query from the documents in the store.

        Args:
            query: User question

        Returns:
            Best-effort answer; never raises
        """
        logger.info(f"Finding relevant information for query: '{query}'")
        try:
            corpus = self.load_corpus()
        except EmptyCorpus as e:
            logger.warning(str(e))
            return self._no_documents()
        except Exception as e:
            logger.exception(f"Error loading reference documents: {str(e)}")
            return self._no_documents()

        return self.answer_from_sections(query, corpus)

    def answer_from_sections(self, query: str, corpus: Sequence[Section]) -> Answer:
        """Answer a query from an already extracted corpus.

        Args:
            query: User question
            corpus: Every section available for the query

        Returns:
            Best-effort answer; never raises
        """
        if not corpus:
            return self._no_documents()

        ranked = self.scorer.rank_scored(query, corpus)
        context = self.assembler.assemble([item.section for item in ranked], corpus=corpus)
        system_prompt = build_system_prompt(context.context_text, self.llm_context_chars)

        try:
            generated = self._call_llm(system_prompt, query)
        except ModelError as e:
            logger.error(f"Model error: {str(e)}")
            return self._degraded(ranked, context)
        except Exception as e:
            logger.exception(f"Unexpected error calling the model: {str(e)}")
            return self._degraded(ranked, context)

        result = extract_citations(generated, context.document_info)
        return Answer(
            answer=result.text,
            citations=result.citations,
            outcome=AnswerOutcome.ANSWERED,
            sources=context.sources
        )

    def load_corpus(self) -> List[Section]:
        """Extract sections from the most recent documents in the store.

        At most ``max_documents`` documents are processed, newest first.
        A document that fails to extract is skipped.

        Returns:
            Sections of all processed documents, in document order

        Raises:
            EmptyCorpus: If no document yields any section
        """
        documents = self.document_store.list_documents()
        if not documents:
            raise EmptyCorpus("No reference documents available")

        documents = sorted(
            documents,
            key=lambda doc: doc.created_at or datetime.min,
            reverse=True
        )
        to_process = documents[:self.max_documents]
        if len(documents) > len(to_process):
            logger.info(f"Processing {len(to_process)} of {len(documents)} documents (limited to avoid timeouts)")

        workers = max(1, min(self.extraction_workers, len(to_process)))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(self._extract_document, to_process))

        sections = [section for document_sections in results for section in document_sections]
        logger.info(f"Total sections available for search: {len(sections)}")
        if not sections:
            raise EmptyCorpus("No sections could be extracted from the reference documents")
        return sections

    def _extract_document(self, record: DocumentRecord) -> List[Section]:
        try:
            pages = self.document_store.extract_pages(record)
            return self.section_extractor.extract(pages, record.document_id, record.file_name)
        except ExtractionError as e:
            logger.warning(f"Skipping document {record.file_name}: {str(e)}")
        except Exception as e:
            logger.exception(f"Error processing document {record.file_name}: {str(e)}")
        return []

    def _call_llm(self, system_prompt: str, query: str) -> str:
        """Call the model with a hard deadline.

        Raises:
            LLMTimeout: If no answer arrived within ``llm_timeout`` seconds
            LLMUnavailable: If the model call failed
        """
        outcome = {}

        def generate():
            try:
                outcome['answer'] = self.generative_client.generate(system_prompt, query)
            except Exception as e:
                outcome['error'] = e

        # Daemon thread: an abandoned call must not keep the interpreter alive
        worker = threading.Thread(target=generate, name="llm-call", daemon=True)
        worker.start()
        worker.join(self.llm_timeout)

        if worker.is_alive():
            raise LLMTimeout(f"No answer within {self.llm_timeout}s")
        if 'error' in outcome:
            raise outcome['error']
        return outcome['answer']

    def _no_documents(self) -> Answer:
        return Answer(answer=NO_DOCUMENTS_MESSAGE, outcome=AnswerOutcome.NO_DOCUMENTS)

    def _degraded(self, ranked: Sequence[ScoredSection], context: AssembledContext) -> Answer:
        """Fall back to the best section's raw content, or apologise."""
        if context.is_empty:
            return Answer(answer=APOLOGY_MESSAGE, outcome=AnswerOutcome.APOLOGY)

        best = ranked[0].section if ranked else context.sections[0]
        logger.info(f"Returning degraded answer from '{best.title[:60]}'")
        return Answer(
            answer=best.content,
            outcome=AnswerOutcome.DEGRADED,
            sources=[best.file_name] if best.file_name else []
        )
