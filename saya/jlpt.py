"""
JLPT (Japanese-Language Proficiency Test) vocabulary levels.
"""

from enum import IntEnum
from typing import List, Optional

from saya.tables import EnrichmentTable


class JlptLevel(IntEnum):
    """JLPT level, ordered by difficulty (N5 < N1)."""
    N5 = 1  # Beginner (~800 words)
    N4 = 2  # Elementary (~1500 words)
    N3 = 3  # Intermediate (~3750 words)
    N2 = 4  # Upper intermediate (~6000 words)
    N1 = 5  # Advanced (~10000 words)

    @classmethod
    def from_str(cls, text: str) -> Optional["JlptLevel"]:
        """Parse 'N5'..'N1' (case-insensitive)."""
        return cls.__members__.get(text.strip().upper())

    @property
    def number(self) -> int:
        """The number in the level name (5 for N5)."""
        return 6 - self.value

    def as_str(self) -> str:
        return self.name

    @property
    def description(self) -> str:
        return f"{self.name} ({_DESCRIPTIONS[self]})"

    def badge(self) -> str:
        return f"{_BADGE_COLORS[self]} {self.name}"


_DESCRIPTIONS = {
    JlptLevel.N5: "Beginner",
    JlptLevel.N4: "Elementary",
    JlptLevel.N3: "Intermediate",
    JlptLevel.N2: "Upper Intermediate",
    JlptLevel.N1: "Advanced",
}

_BADGE_COLORS = {
    JlptLevel.N5: "🟢",
    JlptLevel.N4: "🟡",
    JlptLevel.N3: "🟠",
    JlptLevel.N2: "🔴",
    JlptLevel.N1: "🟣",
}


_N5_WORDS = [
    "の", "に", "は", "を", "です", "ます", "でした", "ました",
    "日本", "人", "本", "先生", "学生", "学校", "時間", "今", "明日", "昨日",
    "食べる", "飲む", "見る", "聞く", "話す", "読む", "書く", "行く", "来る",
    "大きい", "小さい", "高い", "安い", "良い", "悪い", "新しい", "古い",
    "一", "二", "三", "四", "五", "六", "七", "八", "九", "十",
]

_N4_WORDS = [
    "考える", "思う", "分かる", "知る", "教える", "習う", "始める", "終わる",
    "働く", "勉強", "仕事", "会社", "時計", "電話", "手紙", "映画",
    "強い", "弱い", "優しい", "厳しい", "美しい", "汚い", "便利", "不便",
]

_N3_WORDS = [
    "経験", "研究", "発見", "意見", "説明", "計画", "準備", "確認",
    "複雑", "簡単", "正確", "曖昧", "適切", "不適切", "重要", "軽視",
]


def _default_levels():
    levels = {}
    for words, level in ((_N5_WORDS, JlptLevel.N5), (_N4_WORDS, JlptLevel.N4), (_N3_WORDS, JlptLevel.N3)):
        for word in words:
            levels[word] = level
    return levels


class JlptLevels(EnrichmentTable[JlptLevel]):
    """JLPT level provider. File format: ``word<TAB>N3``."""

    DEFAULTS = _default_levels()

    @staticmethod
    def parse_row(row: List[str]) -> Optional[JlptLevel]:
        return JlptLevel.from_str(row[1])

    def get_level(self, word: str) -> Optional[JlptLevel]:
        """Get JLPT level for a word."""
        return self.get(word)

    def get_level_str(self, word: str) -> Optional[str]:
        level = self.get_level(word)
        return level.as_str() if level else None

    def get_badge(self, word: str) -> Optional[str]:
        """Get the colored badge for a word, e.g. '🟢 N5'."""
        level = self.get_level(word)
        return level.badge() if level else None
