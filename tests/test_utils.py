"""
Test suite for corpus inspection utilities.
"""

from poliseek.exceptions import ExtractionError
from poliseek.utils import inspect_corpus, load_all_sections, print_inspection_results


def test_load_all_sections_should_skip_failing_documents(store_factory) -> None:
    store = store_factory({
        "handbook": ["Article 1: Scope\nApplies to all."],
        "broken": ExtractionError("No text extracted", "broken"),
    })

    sections = load_all_sections(store, show_progress=False)

    assert [s.title for s in sections] == ["Article 1: Scope"]
    assert sections[0].file_name == "handbook.pdf"


def test_inspect_corpus_should_summarise_sections(make_section) -> None:
    sections = [
        make_section(title="Article 1: Scope", content="abcd", article_number="1", section_id="1.1"),
        make_section(title="Notes", content="ab", file_name="notes.pdf"),
    ]

    stats = inspect_corpus(sections)

    assert stats["num_sections"] == 2
    assert stats["num_documents"] == 2
    assert stats["sections_per_document"] == {"handbook.pdf": 1, "notes.pdf": 1}
    assert stats["structured_sections"] == 1
    assert stats["articles"] == ["1"]
    assert stats["content_length_statistics"]["max"] == 4
    assert stats["content_length_statistics"]["mean"] == 3.0


def test_inspect_corpus_should_report_empty_corpus(capsys) -> None:
    stats = inspect_corpus([])

    print_inspection_results(stats)

    assert "error" in stats
    assert "No sections found" in capsys.readouterr().out
