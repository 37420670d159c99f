import sys
from pathlib import Path

import typer

from core.ollama import check_ollama, list_installed_models, stop_server
from core.startup import initialize_orchestrator
from poliseek.config import (
    DEFAULT_LLM_TIMEOUT,
    DEFAULT_MAX_CONTEXT_CHARS,
    DEFAULT_MAX_DOCUMENTS,
    DEFAULT_MODEL_NAME,
    DEFAULT_OLLAMA_URL,
    INPUT_DOCUMENTS_DIR
)
from poliseek.documents import DirectoryDocumentStore
from poliseek.models import Answer
from poliseek.utils import inspect_corpus, load_all_sections, print_inspection_results

app = typer.Typer(help="Ask questions about policy documents.")

HELP_TEXT = """
Available commands:
/help    - Show this help message
/sources - Show the sources used for the last answer
/exit    - Exit the assistant
"""

def print_answer(answer: Answer) -> None:
    print(f"\nAssistant: {answer.answer}")
    if answer.citations:
        print("\nCitations:")
        for citation in answer.citations:
            location = ""
            if citation.file_name:
                page = citation.position.start_page if citation.position else "?"
                location = f" -> {citation.file_name}, page {page}"
            print(f"  [{citation.id}] {citation.reference}{location}")

@app.command()
def ask(
    question: str = typer.Argument(..., help="Question about the policies"),
    data_dir: Path = typer.Option(INPUT_DOCUMENTS_DIR, help="Directory containing the policy documents"),
    model: str = typer.Option(DEFAULT_MODEL_NAME, help="Ollama model to use"),
    ollama_url: str = typer.Option(DEFAULT_OLLAMA_URL, help="URL of the Ollama API"),
    max_documents: int = typer.Option(DEFAULT_MAX_DOCUMENTS, help="Documents processed per question"),
    max_context_chars: int = typer.Option(DEFAULT_MAX_CONTEXT_CHARS, help="Context budget in characters"),
    timeout: float = typer.Option(DEFAULT_LLM_TIMEOUT, help="Seconds to wait for the model")
):
    """Answer a single question."""
    if not question.strip():
        print("Please provide a question.")
        raise typer.Exit(code=1)
    if not check_ollama(ollama_url):
        print("Continuing without a running model: answers will fall back to document excerpts.")

    orchestrator, _ = initialize_orchestrator(
        data_dir, model, ollama_url, max_documents, max_context_chars, timeout
    )
    print_answer(orchestrator.answer(question))

@app.command()
def chat(
    data_dir: Path = typer.Option(INPUT_DOCUMENTS_DIR, help="Directory containing the policy documents"),
    model: str = typer.Option(DEFAULT_MODEL_NAME, help="Ollama model to use"),
    ollama_url: str = typer.Option(DEFAULT_OLLAMA_URL, help="URL of the Ollama API"),
    max_documents: int = typer.Option(DEFAULT_MAX_DOCUMENTS, help="Documents processed per question"),
    max_context_chars: int = typer.Option(DEFAULT_MAX_CONTEXT_CHARS, help="Context budget in characters"),
    timeout: float = typer.Option(DEFAULT_LLM_TIMEOUT, help="Seconds to wait for the model")
):
    """Start an interactive policy assistant."""
    try:
        if not check_ollama(ollama_url):
            sys.exit(1)

        orchestrator, _ = initialize_orchestrator(
            data_dir, model, ollama_url, max_documents, max_context_chars, timeout
        )

        print("\n=== Welcome to the Policy Assistant! ===\n")
        print("Commands: /help /sources /exit")

        last_answer = None
        while True:
            query = input("\nYou: ").strip()
            if not query:
                continue

            if query == "/exit":
                stop_server()
                break
            if query == "/help":
                print(HELP_TEXT)
                continue
            if query == "/sources":
                sources = last_answer.sources if last_answer else []
                print(f"\nSources: {', '.join(sources) if sources else 'none'}")
                continue

            last_answer = orchestrator.answer(query)
            print_answer(last_answer)

    except KeyboardInterrupt:
        print("\nExiting...")
        stop_server()

@app.command()
def inspect(
    data_dir: Path = typer.Option(INPUT_DOCUMENTS_DIR, help="Directory containing the policy documents")
):
    """Show statistics about the extracted sections."""
    sections = load_all_sections(DirectoryDocumentStore(data_dir))
    print_inspection_results(inspect_corpus(sections))

@app.command()
def models(
    ollama_url: str = typer.Option(DEFAULT_OLLAMA_URL, help="URL of the Ollama API")
):
    """List the installed Ollama models."""
    if not check_ollama(ollama_url):
        sys.exit(1)
    installed = list_installed_models(ollama_url)
    if not installed:
        print("No models installed. Run 'ollama pull mistral' to install one.")
        return
    for name in installed:
        print(f"  • {name}")

if __name__ == "__main__":
    app()
