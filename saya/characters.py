"""
Character handling and text normalization for Saya.

Provides the normalizer applied to all captured text before tokenization
and a few character-class tests used to skip input with no Japanese in it.
"""

import re
import unicodedata

# ============================================================================
# Regular Expressions
# ============================================================================

KATAKANA_REGEX = r"[ァ-ヺヽヾー]"
HIRAGANA_REGEX = r"[ぁ-ゔゝゞー]"
KANJI_REGEX = r"[々ヶ〆一-龯]"
KANA_REGEX = f"({KATAKANA_REGEX}|{HIRAGANA_REGEX})"
WORD_REGEX = r"[々ヶ〆一-龯ァ-ヺヽヾぁ-ゔゝゞー〇]"

_KANA_WORD_PATTERN = re.compile(rf"^{KANA_REGEX}+$")
_KANJI_PATTERN = re.compile(KANJI_REGEX)
_WORD_PATTERN = re.compile(WORD_REGEX)

# Unicode White_Space characters other than U+0020
WHITESPACE_CHARS = frozenset(
    "\t\n\x0b\x0c\r\x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


# ============================================================================
# Character Testing Functions
# ============================================================================

def is_kana(word: str) -> bool:
    """Check if word consists entirely of kana (hiragana or katakana)."""
    return bool(word) and bool(_KANA_WORD_PATTERN.match(word))


def is_kanji(char: str) -> bool:
    """Check if a character is kanji."""
    return bool(_KANJI_PATTERN.match(char))


def contains_japanese(text: str) -> bool:
    """Check if text contains at least one kana or kanji character."""
    return bool(_WORD_PATTERN.search(text))


# ============================================================================
# Text Normalization
# ============================================================================

def strip_whitespace(text: str) -> str:
    """Remove every Unicode White_Space character except the ASCII space."""
    return ''.join(c for c in text if c not in WHITESPACE_CHARS)


def normalize(text: str) -> str:
    """
    Normalize captured text for lookup.

    Applies NFKC so full-width/half-width and compatibility variants fold to
    one form, then drops line breaks and other whitespace that OCR inserts
    in the middle of words. A literal space is kept so spacing inside
    mixed-script text survives.

    Args:
        text: Raw text from OCR, clipboard or websocket input.

    Returns:
        Normalized text. Empty input gives an empty string.

    Example:
        >>> normalize("ｶﾀｶﾅ\\n食べる")
        'カタカナ食べる'
    """
    if not text:
        return ""

    text = strip_whitespace(unicodedata.normalize('NFKC', text))
    # Dropping a line break can bring a base character next to a combining
    # mark, so run NFKC again.
    return unicodedata.normalize('NFKC', text)
