"""
Test suite for section extraction from page text.
"""

from poliseek.documents import SectionExtractor

HANDBOOK_PAGE = (
    "Article I: General Provisions\n"
    "The handbook applies to all students.\n"
    "Section 1.1: Scope\n"
    "All campuses are covered.\n"
    "Article II: Conduct\n"
    "Section 2.1 - Dress Code\n"
    "Wear uniforms."
)


class TestStructuredSections:
    """Test suite for article, section and policy headings."""

    def test_should_extract_articles_and_sections_in_order(self) -> None:
        # Arrange
        extractor = SectionExtractor()

        # Act
        sections = extractor.extract([HANDBOOK_PAGE], document_id="doc-1", file_name="handbook.pdf")

        # Assert
        assert [s.title for s in sections] == [
            "Article I: General Provisions",
            "Section 1.1: Scope",
            "Article II: Conduct",
            "Section 2.1: Dress Code",
        ]
        assert [s.article_number for s in sections] == ["I", "I", "II", "II"]
        assert [s.section_id for s in sections] == [None, "1.1", None, "2.1"]

    def test_sections_should_carry_document_and_position(self) -> None:
        sections = SectionExtractor().extract([HANDBOOK_PAGE], document_id="doc-1", file_name="handbook.pdf")

        scope = sections[1]
        assert scope.document_id == "doc-1"
        assert scope.file_name == "handbook.pdf"
        assert scope.page_number == 1
        assert scope.position.start_offset == HANDBOOK_PAGE.index("Section 1.1")
        assert scope.content == "Section 1.1: Scope\nAll campuses are covered."

    def test_section_should_inherit_article_from_previous_page(self) -> None:
        pages = [HANDBOOK_PAGE, "Section 2.2: Footwear\nClosed shoes only."]

        sections = SectionExtractor().extract(pages)

        footwear = sections[-1]
        assert footwear.title == "Section 2.2: Footwear"
        assert footwear.article_number == "II"
        assert footwear.page_number == 2
        assert footwear.is_structured

    def test_should_extract_policy_with_title(self) -> None:
        page = "Policy 12\nTitle: Annual Leave\nStaff accrue leave monthly."

        sections = SectionExtractor().extract([page])

        assert len(sections) == 1
        assert sections[0].title == "Policy 12: Annual Leave"
        assert sections[0].section_id == "12"
        assert sections[0].article_number is None
        assert "Staff accrue leave monthly." in sections[0].content


class TestFallbackSections:
    """Test suite for pages without structured headings."""

    def test_should_split_on_generic_headings(self) -> None:
        page = "GENERAL INFORMATION\nThe office opens at nine.\nContact Details:\nCall the front desk."

        sections = SectionExtractor().extract([page])

        assert [s.title for s in sections] == ["GENERAL INFORMATION", "Contact Details"]
        assert sections[0].content == "GENERAL INFORMATION\nThe office opens at nine."

    def test_should_chunk_pages_without_headings(self) -> None:
        page = "lowercase paragraph one.\n\nanother lowercase paragraph."

        single = SectionExtractor().extract([page])
        split = SectionExtractor(chunk_size=30).extract([page])

        assert [s.title for s in single] == ["Page 1 - Part 1"]
        assert [s.title for s in split] == ["Page 1 - Part 1", "Page 1 - Part 2"]
        assert split[1].content == "another lowercase paragraph."

    def test_should_skip_empty_pages(self) -> None:
        sections = SectionExtractor().extract(["", "  \n", "lowercase text."])

        assert len(sections) == 1
        assert sections[0].page_number == 3


class TestSplitPages:
    """Test suite for splitting raw text into pages."""

    def test_should_split_on_page_markers(self) -> None:
        text = "--- PAGE 1 ---\nfirst\n--- PAGE 2 ---\nsecond"

        assert SectionExtractor.split_pages(text) == ["first\n", "second"]

    def test_should_split_on_form_feeds(self) -> None:
        assert SectionExtractor.split_pages("one\ftwo") == ["one", "two"]

    def test_plain_text_should_be_single_page(self) -> None:
        assert SectionExtractor.split_pages("just text") == ["just text"]
