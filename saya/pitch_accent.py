"""
Pitch accent patterns.

A word's accent is stored as the mora after which pitch drops:
0 = heiban (flat), 1 = atamadaka (head-high), 2+ = nakadaka or odaka.
Telling mid-high from tail-high needs the word's mora count, which the
tables do not carry, so both are classified as NAKADAKA.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from saya.tables import EnrichmentTable

MAX_DROP_POSITION = 255


class PatternType(Enum):
    HEIBAN = "Heiban (Flat)"            # 平板型
    ATAMADAKA = "Atamadaka (Head-high)"  # 頭高型
    NAKADAKA = "Nakadaka (Mid-high)"     # 中高型
    ODAKA = "Odaka (Tail-high)"          # 尾高型, never produced by from_drop_position

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class PitchPattern:
    """
    Pitch accent of one word.

    Attributes:
        drop_position: Mora after which pitch drops (0 = no drop)
        pattern_type: Classified pattern
    """
    drop_position: int
    pattern_type: PatternType

    @classmethod
    def from_drop_position(cls, drop: int) -> "PitchPattern":
        if drop == 0:
            pattern_type = PatternType.HEIBAN
        elif drop == 1:
            pattern_type = PatternType.ATAMADAKA
        else:
            pattern_type = PatternType.NAKADAKA
        return cls(drop_position=drop, pattern_type=pattern_type)

    def to_notation(self) -> str:
        """Short notation for display: ◎ flat, ① head-high, ⓪N drop at N."""
        if self.pattern_type == PatternType.HEIBAN:
            return "◎"
        if self.pattern_type == PatternType.ATAMADAKA:
            return "①"
        if self.pattern_type == PatternType.ODAKA:
            return "⓪"
        return f"⓪{self.drop_position}"

    @property
    def type_name(self) -> str:
        return self.pattern_type.label


# (word, drop position)
_DEFAULT_PATTERNS = [
    ("日本", 0),
    ("東京", 0),
    ("学校", 0),
    ("先生", 3),
    ("学生", 0),
    ("時間", 0),
    ("本", 1),
    ("水", 0),
    ("山", 0),
    ("川", 0),
]


class JapanesePitchAccent(EnrichmentTable[PitchPattern]):
    """
    Japanese pitch accent provider.

    File format: ``word<TAB>drop`` or ``word<TAB>reading<TAB>drop``; the
    drop position is always the last column.
    """

    DEFAULTS = {word: PitchPattern.from_drop_position(drop) for word, drop in _DEFAULT_PATTERNS}

    @staticmethod
    def parse_row(row: List[str]) -> Optional[PitchPattern]:
        drop = int(row[-1])
        if not 0 <= drop <= MAX_DROP_POSITION:
            return None
        return PitchPattern.from_drop_position(drop)

    def get_pattern(self, word: str) -> Optional[PitchPattern]:
        """Get pitch accent pattern for a word."""
        return self.get(word)

    def get_notation(self, word: str) -> Optional[str]:
        """Get pitch accent notation string for a word."""
        pattern = self.get_pattern(word)
        return pattern.to_notation() if pattern else None
