"""
Test suite for system prompt construction.
"""

from poliseek.context.prompts import build_system_prompt


class TestSystemPrompt:
    """Test suite for the prompts handed to the generative model."""

    def test_context_prompt_should_restrict_to_context_and_require_citations(self) -> None:
        prompt = build_system_prompt("Article 3: Dress Code\nWear uniforms.\n\n")

        assert "Answer only from the given context" in prompt
        assert "[Type Number: Title]" in prompt
        assert "Wear uniforms." in prompt

    def test_empty_context_prompt_should_decline(self) -> None:
        prompt = build_system_prompt("")

        assert "No context is available" in prompt
        assert "confidently-wrong" in prompt
        assert "[Type Number: Title]" in prompt
        assert "Answer only from the given context" not in prompt

    def test_whitespace_context_should_count_as_empty(self) -> None:
        assert "No context is available" in build_system_prompt("  \n\n ")

    def test_context_should_be_truncated_at_paragraph(self) -> None:
        context = "first paragraph\n\n" + "x" * 100

        prompt = build_system_prompt(context, max_chars=50)

        assert "first paragraph" in prompt
        assert "x" * 100 not in prompt
