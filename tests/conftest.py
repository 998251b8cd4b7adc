"""
Shared fixtures for saya tests.

Tests build small in-memory stores from jmdict-simplified style words, so
nothing here depends on the bundled dictionary file or the environment.
"""

import pytest

from saya.dictionary import DictionaryStore
from saya.frequency import JapaneseFrequency
from saya.jlpt import JlptLevel, JlptLevels
from saya.pitch_accent import JapanesePitchAccent, PitchPattern
from saya.processor import JapaneseProcessor


def make_word(word_id, kanji, kana, glosses, pos=("n",), lang="eng"):
    """Build one jmdict-simplified word dict."""
    return {
        "id": word_id,
        "kanji": [{"common": True, "text": k, "tags": []} for k in kanji],
        "kana": [{"common": True, "text": r, "tags": [], "appliesToKanji": ["*"]} for r in kana],
        "sense": [{
            "partOfSpeech": list(pos),
            "gloss": [{"lang": lang, "text": g} for g in glosses],
        }],
    }


SAMPLE_WORDS = [
    make_word("1358280", ["食べる"], ["たべる"], ["to eat"], pos=("v1", "vt")),
    make_word("1207590", ["書く"], ["かく"], ["to write"], pos=("v5k", "vt")),
    make_word("1467640", ["読む"], ["よむ"], ["to read"], pos=("v5m", "vt")),
    make_word("1547720", ["来る"], ["くる"], ["to come"], pos=("vk", "vi")),
    make_word("1157170", ["為る"], ["する"], ["to do"], pos=("vs-i",)),
    make_word("1279720", ["高い"], ["たかい"], ["high", "tall", "expensive"], pos=("adj-i",)),
    make_word("1522150", ["本"], ["ほん"], ["book"]),
    make_word("1582710", ["日本"], ["にほん", "にっぽん"], ["Japan"]),
    make_word("1469800", [], ["の"], ["indicates possessive"], pos=("prt",)),
]


@pytest.fixture
def sample_words():
    """Fresh copy of the sample word list."""
    return [dict(w) for w in SAMPLE_WORDS]


@pytest.fixture
def store(sample_words):
    """A small dictionary store."""
    return DictionaryStore.load({"words": sample_words})


@pytest.fixture
def taberu_store():
    """A store holding only 食べる."""
    return DictionaryStore.load({"words": [
        make_word("1358280", ["食べる"], ["たべる"], ["to eat"], pos=("v1",)),
    ]})


@pytest.fixture
def frequency():
    return JapaneseFrequency({"の": 1, "食べる": 100, "書く": 3000, "読む": 20000})


@pytest.fixture
def pitch_accent():
    return JapanesePitchAccent({
        "日本": PitchPattern.from_drop_position(0),
        "本": PitchPattern.from_drop_position(1),
        "食べる": PitchPattern.from_drop_position(2),
    })


@pytest.fixture
def jlpt():
    return JlptLevels({"食べる": JlptLevel.N5, "高い": JlptLevel.N5, "読む": JlptLevel.N5})


@pytest.fixture
def processor(store, frequency, pitch_accent, jlpt):
    """Processor over the sample store with small enrichment tables."""
    return JapaneseProcessor(store, frequency=frequency, pitch_accent=pitch_accent, jlpt=jlpt)


@pytest.fixture
def bare_processor(store):
    """Processor with no enrichment providers."""
    return JapaneseProcessor(store)
