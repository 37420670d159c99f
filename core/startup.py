from pathlib import Path

from poliseek.chat import AnswerOrchestrator
from poliseek.documents import DirectoryDocumentStore
from poliseek.llm import OllamaClient

def initialize_orchestrator(data_dir: Path, model: str, ollama_url: str,
                            max_documents: int, max_context_chars: int, timeout: float):
    if not data_dir.exists():
        print(f"Directory '{data_dir}' does not exist. Answers will have no documents to draw on.")

    store = DirectoryDocumentStore(data_dir)
    client = OllamaClient(model_name=model, ollama_url=ollama_url, timeout=timeout)
    orchestrator = AnswerOrchestrator(
        store,
        client,
        max_context_chars=max_context_chars,
        max_documents=max_documents,
        llm_timeout=timeout
    )
    return orchestrator, store
