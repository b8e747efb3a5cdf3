"""
Completion client abstraction and implementations.

Components:
- BaseCompletionClient: Abstract base class (one attempt per call)
- OpenAICompletionClient: OpenAI-compatible /chat/completions client
- PromptBuilder: Builds the summary CompletionRequest from a transcript
- text_utils: Transcript truncation
- exceptions: CompletionError, classified by ErrorKind
"""

from summary_service.llm.base_client import BaseCompletionClient
from summary_service.llm.openai_client import OpenAICompletionClient
from summary_service.llm.prompt_builder import PromptBuilder
from summary_service.llm.exceptions import CompletionError

__all__ = [
    "BaseCompletionClient",
    "OpenAICompletionClient",
    "PromptBuilder",
    "CompletionError",
]
