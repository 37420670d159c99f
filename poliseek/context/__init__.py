"""Context package for assembling model context and prompts."""

from .assembler import AssembledContext, ContextAssembler, assemble, build_document_info
from .prompts import build_system_prompt

__all__ = [
    'AssembledContext',
    'ContextAssembler',
    'assemble',
    'build_document_info',
    'build_system_prompt'
]
