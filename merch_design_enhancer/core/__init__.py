"""Core business logic components."""

from .prompt_builder import PromptBuilder, DESIGN_PRESERVATION_CLAUSE

__all__ = [
    "PromptBuilder",
    "DESIGN_PRESERVATION_CLAUSE",
]
