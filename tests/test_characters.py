"""
Tests for characters.py - normalization and character classes.
"""

import pytest

from saya.characters import (
    contains_japanese,
    is_kana,
    is_kanji,
    normalize,
    strip_whitespace,
)


class TestNormalize:
    """Tests for the captured-text normalizer."""

    def test_empty(self):
        """Empty input stays empty."""
        assert normalize("") == ""

    def test_halfwidth_katakana(self):
        """Half-width katakana folds to full-width."""
        assert normalize("ｶﾀｶﾅ") == "カタカナ"

    def test_fullwidth_ascii(self):
        """Full-width Latin letters and digits fold to ASCII."""
        assert normalize("ＡＢＣ１２３") == "ABC123"

    def test_removes_line_breaks(self):
        """OCR line breaks inside a word are dropped."""
        assert normalize("食べ\nる") == "食べる"
        assert normalize("食\r\nべる\t") == "食べる"

    def test_keeps_ascii_space(self):
        """A literal space survives."""
        assert normalize("日本 語") == "日本 語"

    def test_ideographic_space_becomes_space(self):
        """U+3000 folds to an ASCII space under NFKC."""
        assert normalize("日本　語") == "日本 語"

    def test_plain_text_unchanged(self):
        """Already-normal Japanese passes through."""
        assert normalize("本を読んでいる") == "本を読んでいる"

    @pytest.mark.parametrize("text", [
        "ｶﾀｶﾅ\n食べる",
        "ＡＢＣ　ｱｲｳ",
        "か\n\u3099",
        "㍿ ㌔",
        "",
        "  \t\n ",
    ])
    def test_idempotent(self, text):
        """Normalizing twice gives the same result as once."""
        once = normalize(text)
        assert normalize(once) == once

    def test_combining_mark_after_line_break(self):
        """A dakuten split from its base by a line break recombines."""
        assert normalize("か\n\u3099") == "が"


class TestStripWhitespace:
    """Tests for strip_whitespace."""

    def test_strips_everything_but_space(self):
        assert strip_whitespace("a\tb\nc d e") == "abc de"

    def test_unicode_line_separators(self):
        assert strip_whitespace("a\u2028b\x85c\u3000d") == "abcd"

    def test_information_separators_kept(self):
        """U+001C..U+001F are not Unicode White_Space."""
        assert strip_whitespace("a\x1cb\x1fc") == "a\x1cb\x1fc"
        assert normalize("a\x1cb") == "a\x1cb"


class TestCharacterClasses:
    """Tests for kana/kanji predicates."""

    def test_is_kana(self):
        assert is_kana("たべる")
        assert is_kana("カタカナ")
        assert not is_kana("食べる")
        assert not is_kana("")

    def test_is_kanji(self):
        assert is_kanji("食")
        assert not is_kanji("た")

    def test_contains_japanese(self):
        assert contains_japanese("hello 日本")
        assert contains_japanese("ひらがな")
        assert not contains_japanese("hello world 123")
        assert not contains_japanese("")
