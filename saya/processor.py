"""
Lookup orchestration for Saya.

:class:`JapaneseProcessor` ties the pieces together: it normalizes and
tokenizes captured text, resolves each span in the dictionary, falls back
to deconjugation when a span is an inflected form, and attaches frequency,
pitch-accent and JLPT metadata.

A processor holds only immutable data, so ``lookup`` can be called from any
number of threads at once. Reloading the dictionary means building a new
processor; :class:`ProcessorHolder` publishes such snapshots.
"""

import asyncio
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Tuple, Union

from saya import settings
from saya.characters import contains_japanese, normalize
from saya.deconjugator import Deconjugator
from saya.dictionary import DictionaryStore, load_default_dictionary
from saya.errors import AnalysisTimeoutError
from saya.frequency import JapaneseFrequency
from saya.jlpt import JlptLevels
from saya.models import DisplayResult, LookupResult
from saya.pitch_accent import JapanesePitchAccent
from saya.tokenizer import Span, tokenize

logger = logging.getLogger(__name__)


class JapaneseProcessor:
    """
    Japanese lookup processor.

    Example:
        >>> processor = JapaneseProcessor(store)
        >>> [r.term for r in processor.lookup("食べて")]
        ['食べる']
    """

    language_code = "ja"

    def __init__(
        self,
        dictionary: DictionaryStore,
        frequency: Optional[JapaneseFrequency] = None,
        pitch_accent: Optional[JapanesePitchAccent] = None,
        jlpt: Optional[JlptLevels] = None,
        deconjugator: Optional[Deconjugator] = None,
        max_span_length: int = settings.MAX_SPAN_LENGTH,
    ):
        """
        Args:
            dictionary: Store used for all lookups.
            frequency: Frequency provider, or None to skip frequency stars.
            pitch_accent: Pitch-accent provider, or None to skip notation.
            jlpt: JLPT provider, or None to skip badges.
            deconjugator: Rule engine for inflected spans.
            max_span_length: Longest span the tokenizer emits.
        """
        self.dictionary = dictionary
        self.frequency = frequency
        self.pitch_accent = pitch_accent
        self.jlpt = jlpt
        self.deconjugator = deconjugator or Deconjugator()
        self.max_span_length = max_span_length

    # ------------------------------------------------------------------
    # Text processing
    # ------------------------------------------------------------------

    def normalize(self, text: str) -> str:
        return normalize(text)

    def tokenize(self, text: str) -> List[Span]:
        return tokenize(text, self.max_span_length)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup(self, span: Union[Span, str]) -> List[LookupResult]:
        """
        Look up one span.

        Direct dictionary hits are returned when there are any. Otherwise
        every deconjugation candidate whose base form exists in the
        dictionary produces a result carrying ``conjugation`` and
        ``base_form``. All results are enriched for their display term.

        Args:
            span: A Span from :meth:`tokenize`, or a string.

        Returns:
            List of results, direct hits before deconjugated hits. Empty if
            nothing matched, which is the normal outcome for most spans.
        """
        text = span.normalized if isinstance(span, Span) else normalize(span)
        if not text:
            return []

        results = [LookupResult.from_entry(e) for e in self.dictionary.lookup_exact(text)]

        if not results:
            for candidate in self.deconjugator.deconjugate(text):
                for entry in self.dictionary.lookup_exact(candidate.base_form):
                    result = LookupResult.from_entry(entry)
                    result.conjugation = (
                        f"{text} → {candidate.base_form} ({candidate.conjugation_type})"
                    )
                    result.base_form = candidate.base_form
                    results.append(result)

        for result in results:
            self._enrich(result)

        if results:
            logger.debug(f"Span {text!r}: {len(results)} results")
        return results

    def _enrich(self, result: LookupResult) -> None:
        """Attach enrichment for the result's display term, where known."""
        term = result.term
        if self.frequency is not None:
            stars = self.frequency.get_stars(term)
            if stars > 0:
                result.frequency_stars = stars
        if self.pitch_accent is not None:
            result.pitch_accent = self.pitch_accent.get_notation(term)
        if self.jlpt is not None:
            result.jlpt_level = self.jlpt.get_badge(term)

    def lookup_many(
        self,
        spans: Iterable[Union[Span, str]],
        max_workers: Optional[int] = None,
    ) -> List[List[LookupResult]]:
        """
        Look up many spans in parallel.

        Args:
            spans: Spans or strings.
            max_workers: Thread count (default: settings.MAX_WORKERS).

        Returns:
            One result list per input span, in input order.
        """
        spans = list(spans)
        if len(spans) < 2:
            return [self.lookup(s) for s in spans]
        with ThreadPoolExecutor(
            max_workers=max_workers or settings.MAX_WORKERS,
            thread_name_prefix="saya",
        ) as executor:
            return list(executor.map(self.lookup, spans))

    # ------------------------------------------------------------------
    # Text analysis
    # ------------------------------------------------------------------

    def lookup_spans(
        self,
        text: str,
        max_spans: Optional[int] = settings.MAX_SPANS,
        longest_only: bool = False,
    ) -> List[Tuple[Span, List[LookupResult]]]:
        """
        Tokenize text and look up its spans.

        Args:
            text: Raw captured text.
            max_spans: Spans to examine (None for all).
            longest_only: Keep only the longest matching span at each start
                offset and skip offsets it covers.

        Returns:
            List of (span, results) pairs for spans with at least one result,
            in span order.
        """
        if not contains_japanese(normalize(text)):
            logger.debug("No Japanese text in input")
            return []

        spans = self.tokenize(text)
        if max_spans is not None:
            spans = spans[:max_spans]

        matches = []
        covered_until = 0
        matched_offset = -1
        for span in spans:
            if longest_only and (span.position < covered_until or span.position == matched_offset):
                continue
            results = self.lookup(span)
            if not results:
                continue
            if longest_only:
                matched_offset = span.position
                covered_until = span.end
            matches.append((span, results))
        return matches

    def analyze(
        self,
        text: str,
        max_spans: Optional[int] = settings.MAX_SPANS,
        max_results_per_span: Optional[int] = settings.MAX_RESULTS_PER_SPAN,
        longest_only: bool = False,
    ) -> List[DisplayResult]:
        """
        Look up captured text and flatten the hits for display.

        Args:
            text: Raw captured text.
            max_spans: Spans to examine (None for all).
            max_results_per_span: Results kept per span (None for all).
            longest_only: See :meth:`lookup_spans`.

        Returns:
            List of DisplayResult rows, in span order.
        """
        display = []
        for _, results in self.lookup_spans(text, max_spans, longest_only):
            if max_results_per_span is not None:
                results = results[:max_results_per_span]
            display.extend(DisplayResult.from_lookup_result(r) for r in results)

        logger.debug(f"Total display results: {len(display)}")
        return display

    async def analyze_async(
        self,
        text: str,
        timeout: float = settings.ANALYSIS_TIMEOUT,
        **kwargs,
    ) -> List[DisplayResult]:
        """
        Run :meth:`analyze` in a worker thread.

        Raises:
            AnalysisTimeoutError: If analysis exceeds ``timeout`` seconds.
        """
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(None, lambda: self.analyze(text, **kwargs))
        try:
            return await asyncio.wait_for(future, timeout=timeout)
        except asyncio.TimeoutError as e:
            raise AnalysisTimeoutError(f"Analysis timed out after {timeout}s") from e


# ============================================================================
# Construction
# ============================================================================

def build_processor(config=None) -> JapaneseProcessor:
    """
    Build a processor from configuration.

    Dictionary load failures fall back to an empty store. With no
    enrichment file configured, the embedded default tables are used.

    Args:
        config: An :class:`saya.config.EngineConfig`. Defaults to the
            environment-driven configuration.

    Raises:
        OSError: If a configured enrichment file cannot be read.
        UnicodeDecodeError: If a configured enrichment file is not UTF-8.
    """
    from saya.config import EngineConfig

    if config is None:
        config = EngineConfig.from_env()

    dictionary = load_default_dictionary(config.dictionary)

    frequency = pitch_accent = jlpt = None
    enrichment = config.enrichment
    if enrichment.enabled:
        frequency = (JapaneseFrequency.load_from_file(enrichment.frequency_path)
                     if enrichment.frequency_path else JapaneseFrequency.with_defaults())
        pitch_accent = (JapanesePitchAccent.load_from_file(enrichment.pitch_accent_path)
                        if enrichment.pitch_accent_path else JapanesePitchAccent.with_defaults())
        jlpt = (JlptLevels.load_from_file(enrichment.jlpt_path)
                if enrichment.jlpt_path else JlptLevels.with_defaults())

    logger.info(
        f"Processor ready: {len(dictionary)} entries, "
        f"enrichment {'on' if enrichment.enabled else 'off'}"
    )
    return JapaneseProcessor(dictionary, frequency=frequency, pitch_accent=pitch_accent, jlpt=jlpt)


class ProcessorHolder:
    """
    Publishes processor snapshots.

    Readers call :meth:`current` and keep using what they got. A reload
    builds a complete new processor before swapping the reference, so a
    reader never sees a half-built dictionary and old snapshots stay valid.
    """

    def __init__(self, processor: Optional[JapaneseProcessor] = None):
        self._processor = processor
        self._lock = threading.Lock()

    def current(self) -> JapaneseProcessor:
        """Get the current processor, building one from the environment on first use."""
        processor = self._processor
        if processor is not None:
            return processor

        with self._lock:
            if self._processor is None:
                self._processor = build_processor()
            return self._processor

    def reload(self, config=None) -> JapaneseProcessor:
        """Build a new processor from ``config`` and publish it."""
        processor = build_processor(config)
        with self._lock:
            self._processor = processor
        return processor

    def replace(self, processor: JapaneseProcessor) -> None:
        """Publish an already-built processor."""
        with self._lock:
            self._processor = processor
