"""
Text processing utilities for the LLM layer.

Trims long transcripts so the prompt stays within the model's context
window while ending on a complete sentence.
"""

import re


def truncate_at_sentence_boundary(text: str, max_chars: int) -> str:
    """
    Truncate text at the nearest sentence boundary before max_chars.

    Looks for sentence-ending punctuation (. ! ?) followed by whitespace or
    end of text. Falls back to the last word boundary when it is at least 80%
    of the way to max_chars, and to a hard cut otherwise.

    Examples:
        >>> truncate_at_sentence_boundary("Hello. World. Test.", 15)
        'Hello. World.'
        >>> truncate_at_sentence_boundary("No period here", 10)
        'No period'
    """
    if len(text) <= max_chars:
        return text

    truncated_segment = text[:max_chars]

    sentence_end_pattern = r'[.!?](?:\s|$)'
    matches = list(re.finditer(sentence_end_pattern, truncated_segment))

    if matches:
        cutoff = matches[-1].end()
        if truncated_segment[cutoff - 1:cutoff].isspace():
            cutoff -= 1
        return text[:cutoff]

    last_space = truncated_segment.rfind(' ')
    if last_space > max_chars * 0.8:
        return text[:last_space]

    return text[:max_chars]
