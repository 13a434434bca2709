"""Whitespace normalization for text extracted from Confluence HTML."""

import re
from typing import Optional

_LINE_BREAKS = re.compile(r'[\n\t]')
_MULTIPLE_SPACES = re.compile(r' {2,}')


def clean_text(text: Optional[str]) -> str:
    """
    Collapse whitespace in an extracted text run.

    Strips the ends, turns newlines and tabs into spaces and squeezes runs
    of spaces down to one. Normalizing twice gives the same result.

    Args:
        text: Raw text (None is treated as empty)

    Returns:
        Normalized single-line text
    """
    if not text:
        return ''

    text = text.strip()
    text = _LINE_BREAKS.sub(' ', text)
    return _MULTIPLE_SPACES.sub(' ', text)


__all__ = ['clean_text']
