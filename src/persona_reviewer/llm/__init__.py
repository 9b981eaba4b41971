"""
Prompt Composition

This module builds the persona and integrated review prompts sent to a
text-generation backend.
"""

from .prompts import PromptComposer, MAX_FILE_LIST, PROMPT_SEPARATOR

__all__ = ['PromptComposer', 'MAX_FILE_LIST', 'PROMPT_SEPARATOR']
