"""
Tests for processor.py - lookup orchestration.
"""

import asyncio
import json
import time

import pytest

import saya
from saya.config import DictionaryConfig, EngineConfig, EnrichmentConfig
from saya.dictionary import DictionaryStore
from saya.errors import AnalysisTimeoutError
from saya.frequency import JapaneseFrequency
from saya.processor import JapaneseProcessor, ProcessorHolder, build_processor

from conftest import SAMPLE_WORDS, make_word


class TestLookup:
    """Tests for JapaneseProcessor.lookup."""

    def test_direct_hit(self, processor):
        results = processor.lookup("本")
        assert [r.term for r in results] == ["本"]
        assert results[0].readings == ["ほん"]
        assert results[0].definitions == ["book"]
        assert results[0].conjugation is None

    def test_reading_hit(self, processor):
        assert [r.term for r in processor.lookup("たべる")] == ["食べる"]

    def test_no_match(self, processor):
        assert processor.lookup("猫") == []
        assert processor.lookup("") == []

    def test_te_form_end_to_end(self, taberu_store):
        """A store holding only 食べる resolves 食べて through deconjugation."""
        processor = JapaneseProcessor(taberu_store)
        results = processor.lookup("食べて")
        assert len(results) == 1
        result = results[0]
        assert result.term == "食べる"
        assert result.definitions == ["to eat"]
        assert result.base_form == "食べる"
        assert "食べて" in result.metadata["conjugation"]
        assert "食べる" in result.metadata["conjugation"]

    def test_conjugation_label(self, processor):
        result = processor.lookup("食べて")[0]
        assert result.conjugation == "食べて → 食べる (ichidan verb, te-form)"

    def test_continuous(self, processor):
        results = processor.lookup("読んでいる")
        assert [r.term for r in results] == ["読む"]
        assert results[0].conjugation == "読んでいる → 読む (godan verb, te-form, continuous)"

    def test_adjective(self, processor):
        results = processor.lookup("高くない")
        assert [r.term for r in results] == ["高い"]
        assert results[0].base_form == "高い"

    def test_masu_form(self, processor):
        assert [r.term for r in processor.lookup("書きます")] == ["書く"]

    def test_every_resolving_candidate_kept(self, processor):
        """来て resolves through both the ichidan and the irregular rule."""
        results = processor.lookup("来て")
        assert [r.term for r in results] == ["来る", "来る"]
        assert results[0].conjugation.endswith("(ichidan verb, te-form)")
        assert results[1].conjugation.endswith("(irregular verb 来る, te-form)")

    def test_direct_hits_skip_deconjugation(self):
        """A span found directly is not also deconjugated."""
        store = DictionaryStore.load([
            make_word("1", ["見て"], ["みて"], ["look!"]),
            make_word("2", ["見る"], ["みる"], ["to see"]),
        ])
        results = JapaneseProcessor(store).lookup("見て")
        assert [r.entry_id for r in results] == ["1"]

    def test_span_input(self, processor):
        span = processor.tokenize("本")[0]
        assert [r.term for r in processor.lookup(span)] == ["本"]

    def test_string_input_is_normalized(self, processor):
        assert [r.term for r in processor.lookup("ﾀﾍﾞﾙ")] == []
        assert [r.term for r in processor.lookup("本\n")] == ["本"]


class TestEnrichment:
    """Tests for metadata attached during lookup."""

    def test_all_enrichment(self, processor):
        result = processor.lookup("食べる")[0]
        assert result.frequency_stars == 5
        assert result.pitch_accent == "⓪2"
        assert result.jlpt_level == "🟢 N5"

    def test_most_common_word(self, processor):
        assert processor.lookup("の")[0].frequency_stars == 5

    def test_absent_frequency_has_no_key(self, processor):
        """A word missing from the frequency table gets no frequency_stars key."""
        result = processor.lookup("本")[0]
        assert result.frequency_stars is None
        assert "frequency_stars" not in result.metadata
        assert result.metadata["pitch_accent"] == "①"

    def test_enrichment_uses_display_term(self, processor):
        """Deconjugated results are enriched for the base form."""
        result = processor.lookup("食べて")[0]
        assert result.frequency_stars == 5
        assert result.jlpt_level == "🟢 N5"

    def test_no_providers(self, bare_processor):
        result = bare_processor.lookup("食べる")[0]
        assert result.metadata == {}

    def test_zero_stars_never_set(self, store):
        processor = JapaneseProcessor(store, frequency=JapaneseFrequency())
        assert processor.lookup("食べる")[0].frequency_stars is None


class TestLookupMany:
    """Tests for parallel lookup."""

    def test_order_preserved(self, processor):
        results = processor.lookup_many(["食べて", "本", "猫", "高かった"], max_workers=3)
        assert [[r.term for r in rs] for rs in results] == [["食べる"], ["本"], [], ["高い"]]

    def test_single(self, processor):
        assert [[r.term for r in rs] for rs in processor.lookup_many(["本"])] == [["本"]]

    def test_empty(self, processor):
        assert processor.lookup_many([]) == []


class TestAnalyze:
    """Tests for JapaneseProcessor.analyze."""

    def test_display_rows(self, processor):
        rows = processor.analyze("食べて")
        assert len(rows) == 1
        row = rows[0]
        assert row.term == "食べる"
        assert row.reading == "たべる"
        assert row.definition == "to eat"
        assert row.frequency == "★★★★★"
        assert row.pitch_accent == "⓪2"
        assert row.jlpt_level == "🟢 N5"
        assert row.conjugation == "食べて → 食べる (ichidan verb, te-form)"

    def test_multiple_words(self, processor):
        rows = processor.analyze("本を読む")
        assert [r.term for r in rows] == ["本", "読む"]

    def test_no_japanese(self, processor):
        assert processor.analyze("hello world") == []
        assert processor.analyze("") == []

    def test_max_spans(self, processor):
        """Only the first max_spans spans are examined."""
        assert [r.term for r in processor.analyze("本を読む", max_spans=4)] == ["本"]

    def test_all_spans(self, processor):
        text = "本を読む" * 3
        rows = processor.analyze(text, max_spans=None)
        assert [r.term for r in rows].count("読む") == 3

    def test_longest_only(self, processor):
        assert [r.term for r in processor.analyze("日本")] == ["日本", "本"]
        assert [r.term for r in processor.analyze("日本", longest_only=True)] == ["日本"]

    def test_max_results_per_span(self):
        store = DictionaryStore.load([
            make_word(str(i), [k], ["かく"], [f"sense {i}"])
            for i, k in enumerate(["書く", "描く", "欠く", "掻く", "核", "格", "角"])
        ])
        processor = JapaneseProcessor(store)
        assert len(processor.analyze("かく")) == 5
        assert len(processor.analyze("かく", max_results_per_span=2)) == 2
        assert len(processor.analyze("かく", max_results_per_span=None)) == 7

    def test_multiple_readings_joined(self, processor):
        row = processor.analyze("日本", longest_only=True)[0]
        assert row.reading == "にほん, にっぽん"

    def test_definitions_joined(self, processor):
        row = processor.analyze("高い")[0]
        assert row.definition == "high; tall; expensive"


class TestLookupSpans:
    """Tests for JapaneseProcessor.lookup_spans."""

    def test_pairs(self, processor):
        matches = processor.lookup_spans("日本")
        assert [(span.surface, span.position) for span, _ in matches] == [("日本", 0), ("本", 1)]
        assert [r.term for r in matches[0][1]] == ["日本"]

    def test_longest_only(self, processor):
        matches = processor.lookup_spans("日本", longest_only=True)
        assert [span.surface for span, _ in matches] == ["日本"]

    def test_no_japanese(self, processor):
        assert processor.lookup_spans("hello") == []


class TestAnalyzeAsync:
    """Tests for the async wrapper."""

    def test_result(self, processor):
        rows = asyncio.run(processor.analyze_async("食べて"))
        assert [r.term for r in rows] == ["食べる"]

    def test_kwargs_passed_through(self, processor):
        rows = asyncio.run(processor.analyze_async("日本", longest_only=True))
        assert [r.term for r in rows] == ["日本"]

    def test_timeout(self, processor):
        def slow_analyze(text, **kwargs):
            time.sleep(0.5)
            return []

        processor.analyze = slow_analyze
        with pytest.raises(AnalysisTimeoutError) as exc_info:
            asyncio.run(processor.analyze_async("本", timeout=0.05))
        assert isinstance(exc_info.value.__cause__, asyncio.TimeoutError)


class TestBuildProcessor:
    """Tests for build_processor and ProcessorHolder."""

    @pytest.fixture
    def dictionary_file(self, tmp_path):
        path = tmp_path / "jmdict.json"
        path.write_text(json.dumps({"words": SAMPLE_WORDS}, ensure_ascii=False), encoding="utf-8")
        return path

    def test_default_enrichment(self, dictionary_file):
        config = EngineConfig(dictionary=DictionaryConfig(base_path=dictionary_file))
        processor = build_processor(config)
        assert len(processor.dictionary) == len(SAMPLE_WORDS)
        assert len(processor.frequency) == 100
        assert processor.jlpt.get_badge("食べる") == "🟢 N5"

    def test_enrichment_disabled(self, dictionary_file):
        config = EngineConfig(
            dictionary=DictionaryConfig(base_path=dictionary_file),
            enrichment=EnrichmentConfig(enabled=False),
        )
        processor = build_processor(config)
        assert processor.frequency is None
        assert processor.pitch_accent is None
        assert processor.jlpt is None
        assert processor.lookup("食べる")[0].metadata == {}

    def test_enrichment_files(self, dictionary_file, tmp_path):
        freq_path = tmp_path / "freq.tsv"
        freq_path.write_text("本\t42\n", encoding="utf-8")
        config = EngineConfig(
            dictionary=DictionaryConfig(base_path=dictionary_file),
            enrichment=EnrichmentConfig(frequency_path=freq_path),
        )
        processor = build_processor(config)
        assert len(processor.frequency) == 1
        assert processor.lookup("本")[0].frequency_stars == 5

    def test_missing_enrichment_file(self, dictionary_file, tmp_path):
        config = EngineConfig(
            dictionary=DictionaryConfig(base_path=dictionary_file),
            enrichment=EnrichmentConfig(jlpt_path=tmp_path / "missing.tsv"),
        )
        with pytest.raises(OSError):
            build_processor(config)

    def test_undecodable_enrichment_file(self, dictionary_file, tmp_path):
        freq_path = tmp_path / "freq.tsv"
        freq_path.write_bytes(b"\xff\xfe\xfa\t1\n")
        config = EngineConfig(
            dictionary=DictionaryConfig(base_path=dictionary_file),
            enrichment=EnrichmentConfig(frequency_path=freq_path),
        )
        with pytest.raises(UnicodeDecodeError):
            build_processor(config)

    def test_missing_dictionary_gives_empty_processor(self, tmp_path):
        config = EngineConfig(dictionary=DictionaryConfig(base_path=tmp_path / "missing.json"))
        processor = build_processor(config)
        assert len(processor.dictionary) == 0
        assert processor.analyze("食べて") == []

    def test_holder_replace(self, processor, bare_processor):
        holder = ProcessorHolder(processor)
        assert holder.current() is processor
        holder.replace(bare_processor)
        assert holder.current() is bare_processor

    def test_holder_reload(self, processor, dictionary_file, tmp_path):
        holder = ProcessorHolder(processor)
        extra = tmp_path / "user.json"
        extra.write_text(json.dumps([make_word("u1", ["猫"], ["ねこ"], ["cat"])]), encoding="utf-8")
        config = EngineConfig(dictionary=DictionaryConfig(
            base_path=dictionary_file, additional_paths=[extra],
        ))
        reloaded = holder.reload(config)
        assert holder.current() is reloaded
        assert [r.term for r in reloaded.lookup("ねこ")] == ["猫"]
        # The old snapshot is unaffected
        assert processor.lookup("ねこ") == []


class TestPackageFunctions:
    """Tests for the package-level convenience functions."""

    def test_lookup_text_with_bundled_dictionary(self):
        saya.reload(EngineConfig())
        rows = saya.lookup_text("食べて")
        assert [r.term for r in rows] == ["食べる"]
        assert rows[0].jlpt_level == "🟢 N5"
        assert saya.get_processor() is saya.get_processor()

    def test_warm_up(self):
        total, timings = saya.warm_up()
        assert total >= 0
        assert "total" in timings
