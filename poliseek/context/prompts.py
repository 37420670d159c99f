"""System prompts handed to the generative model."""

from ..config import ASSISTANT_NAME, DEFAULT_LLM_CONTEXT_CHARS
from .assembler import truncate_at_paragraph

CITATION_INSTRUCTION = (
    "Cite every policy you reference using the format [Type Number: Title], "
    "where Type is Article, Section or Policy, for example "
    "[Article 5: Student Conduct] or [Section 3.2: Attendance]."
)

CONTEXT_PROMPT = """You are {name}, an AI assistant for institutional policies and procedures.

Guidelines for your response:
1. Answer only from the given context. Do not use outside knowledge.
2. Keep your answer precise and factual, quoting the policy text where helpful.
3. {citation_instruction}
4. If several policies apply, mention all of them with their citations.
5. If the context does not answer the question, say so plainly instead of guessing.

Context from the policy documents:
{context}"""

NO_CONTEXT_PROMPT = """You are {name}, an AI assistant for institutional policies and procedures.

No context is available from the policy documents for this question.
Decline rather than give a confidently-wrong answer: tell the user that the
relevant policy documents are needed to answer accurately, and never guess
policy details.
{citation_instruction}"""


def build_system_prompt(context_text: str, max_chars: int = DEFAULT_LLM_CONTEXT_CHARS) -> str:
    """Build the system prompt for the given context.

    Args:
        context_text: Assembled context, possibly empty
        max_chars: Bound applied to the context at the model boundary

    Returns:
        System prompt text
    """
    if context_text and context_text.strip():
        return CONTEXT_PROMPT.format(
            name=ASSISTANT_NAME,
            citation_instruction=CITATION_INSTRUCTION,
            context=truncate_at_paragraph(context_text, max_chars)
        )
    return NO_CONTEXT_PROMPT.format(
        name=ASSISTANT_NAME,
        citation_instruction=CITATION_INSTRUCTION
    )
