"""
Word frequency ranks.

Lower rank = more common. Ranks are bucketed into coarse levels and a
0-5 star rating for display.
"""

from enum import Enum
from typing import List, Optional

from saya.tables import EnrichmentTable


class FrequencyLevel(Enum):
    """Coarse frequency bucket."""
    VERY_COMMON = "Very Common"
    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    UNKNOWN = "Unknown"

    @property
    def label(self) -> str:
        return self.value

    @property
    def stars_text(self) -> str:
        return _LEVEL_STARS[self]


_LEVEL_STARS = {
    FrequencyLevel.VERY_COMMON: "★★★★★",
    FrequencyLevel.COMMON: "★★★★",
    FrequencyLevel.UNCOMMON: "★★★",
    FrequencyLevel.RARE: "★★",
    FrequencyLevel.UNKNOWN: "",
}

# (max rank, level), checked in order
LEVEL_THRESHOLDS = (
    (1000, FrequencyLevel.VERY_COMMON),
    (5000, FrequencyLevel.COMMON),
    (10000, FrequencyLevel.UNCOMMON),
)

# (max rank, stars), checked in order; anything ranked beyond gets 1 star
STAR_THRESHOLDS = (
    (500, 5),
    (2000, 4),
    (5000, 3),
    (10000, 2),
)

# Rank at which the percentile bottoms out
PERCENTILE_SCALE = 100000.0


# Top 100 most common words with approximate rankings
_COMMON_WORDS = [
    "の", "に", "は", "を", "た", "が", "で", "て", "と", "し",
    "れ", "さ", "ある", "いる", "も", "する", "から", "な", "こ", "として",
    "い", "や", "れる", "など", "なっ", "ない", "この", "ため", "その", "あっ",
    "よう", "また", "もの", "という", "あり", "まで", "られ", "なる", "へ", "か",
    "だ", "これ", "によって", "により", "おり", "より", "による", "ず", "なり", "られる",
    "において", "ば", "なかっ", "なく", "しかし", "について", "せ", "だっ", "その後", "できる",
    "それ", "う", "ので", "なお", "のみ", "でき", "日本", "思う", "それぞれ", "とき",
    "ほか", "行う", "考える", "示す", "用いる", "言う", "大きい", "多い", "新しい", "良い",
    "高い", "長い", "強い", "少ない", "古い", "見る", "来る", "持つ", "使う", "出る",
    "取る", "分かる", "行く", "入る", "作る", "聞く", "話す", "読む", "書く", "食べる",
]


class JapaneseFrequency(EnrichmentTable[int]):
    """
    Japanese word frequency provider.

    Example:
        >>> freq = JapaneseFrequency({"の": 1})
        >>> freq.get_stars("の")
        5
        >>> freq.get_stars("猫")
        0
    """

    DEFAULTS = {word: rank for rank, word in enumerate(_COMMON_WORDS, start=1)}

    @staticmethod
    def parse_row(row: List[str]) -> Optional[int]:
        rank = int(row[1])
        return rank if rank > 0 else None

    def get_rank(self, word: str) -> Optional[int]:
        """Get frequency rank for a word (lower = more common)."""
        return self.get(word)

    def get_level(self, word: str) -> FrequencyLevel:
        """Get the coarse frequency level for a word."""
        rank = self.get_rank(word)
        if rank is None:
            return FrequencyLevel.UNKNOWN
        for limit, level in LEVEL_THRESHOLDS:
            if rank <= limit:
                return level
        return FrequencyLevel.RARE

    def get_stars(self, word: str) -> int:
        """Get a 0-5 star rating (0 = not in the table)."""
        rank = self.get_rank(word)
        if rank is None:
            return 0
        for limit, stars in STAR_THRESHOLDS:
            if rank <= limit:
                return stars
        return 1

    def get_percentile(self, word: str) -> Optional[float]:
        """Frequency percentile, 0.0-100.0 (higher = more common)."""
        rank = self.get_rank(word)
        if rank is None:
            return None
        return 100.0 - min(rank / PERCENTILE_SCALE, 100.0)
