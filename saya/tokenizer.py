"""
Span generation for dictionary lookup.

Japanese text has no spaces between words, so a word boundary cannot be
found without the dictionary. The tokenizer therefore emits every substring
up to a fixed length and leaves it to the lookup step to decide which ones
are real words.
"""

from dataclasses import dataclass
from typing import List

from saya.characters import normalize
from saya.settings import MAX_SPAN_LENGTH


@dataclass(frozen=True, slots=True)
class Span:
    """
    A candidate lookup unit.

    Attributes:
        surface: The substring as it appears in the normalized text
        normalized: The form used for dictionary lookup
        position: Start offset (in characters) in the normalized text
    """
    surface: str
    normalized: str
    position: int

    @property
    def end(self) -> int:
        """Offset one past the last character of the span."""
        return self.position + len(self.surface)

    def __len__(self) -> int:
        return len(self.surface)


def count_spans(length: int, max_length: int = MAX_SPAN_LENGTH) -> int:
    """Number of spans :func:`tokenize` produces for text of ``length`` characters."""
    return sum(min(max_length, length - i) for i in range(length))


def tokenize(text: str, max_length: int = MAX_SPAN_LENGTH) -> List[Span]:
    """
    Produce all candidate spans of the normalized text.

    For each start offset, substrings are emitted longest first, from
    ``min(max_length, remaining)`` characters down to one. A caller that only
    wants the longest dictionary match per offset can stop at the first hit.

    Args:
        text: Raw or normalized text.
        max_length: Longest span to emit.

    Returns:
        List of Span objects, ordered by start offset then decreasing length.

    Example:
        >>> [s.surface for s in tokenize("食べる", max_length=2)]
        ['食べ', '食', 'べる', 'べ', 'る']
    """
    normalized = normalize(text)
    n = len(normalized)
    spans = []

    for i in range(n):
        for length in range(min(max_length, n - i), 0, -1):
            surface = normalized[i:i + length]
            spans.append(Span(surface=surface, normalized=surface, position=i))

    return spans
