"""
Saya: Japanese vocabulary lookup engine.

Turns captured text (OCR, clipboard, websocket) into dictionary results:
normalizes it, generates candidate word spans, resolves them in JMdict,
reverses verb and adjective inflections, and adds frequency, pitch-accent
and JLPT metadata.

Basic Usage:
    import saya

    for row in saya.lookup_text("本を読んでいる"):
        print(f"{row.term} [{row.reading}]: {row.definition}")
"""

import time
from typing import List, Optional, Tuple

from saya.characters import normalize
from saya.config import DictionaryConfig, EngineConfig, EnrichmentConfig
from saya.deconjugator import DeconjugationResult, Deconjugator, deconjugate
from saya.dictionary import (
    DictionaryEntry,
    DictionaryStore,
    load_default_dictionary,
    load_dictionaries,
    load_dictionary_file,
)
from saya.errors import (
    AnalysisTimeoutError,
    ConfigError,
    DictionaryLoadError,
    DictionaryParseError,
    SayaError,
)
from saya.frequency import FrequencyLevel, JapaneseFrequency
from saya.jlpt import JlptLevel, JlptLevels
from saya.models import DisplayResult, FlashcardNote, LookupResult
from saya.pitch_accent import JapanesePitchAccent, PatternType, PitchPattern
from saya.processor import JapaneseProcessor, ProcessorHolder, build_processor
from saya.tokenizer import Span, tokenize

__version__ = "0.1.0"

# Shared processor snapshot used by the convenience functions below
_HOLDER = ProcessorHolder()


def get_processor() -> JapaneseProcessor:
    """Get the shared processor, building it from the environment on first use."""
    return _HOLDER.current()


def reload(config: Optional[EngineConfig] = None) -> JapaneseProcessor:
    """Rebuild the shared processor (e.g. after the dictionary paths changed)."""
    return _HOLDER.reload(config)


def warm_up(verbose: bool = False) -> Tuple[float, dict]:
    """
    Load the dictionary and enrichment tables ahead of the first lookup.

    Args:
        verbose: If True, print timing information.

    Returns:
        Tuple of (total_time_seconds, timing_details_dict)
    """
    timings = {}
    total_start = time.perf_counter()

    if verbose:
        print("Loading saya dictionary...")

    processor = get_processor()
    timings['processor'] = (time.perf_counter() - total_start) * 1000

    if verbose:
        print(f"  Dictionary:     {timings['processor']:>7.1f}ms ({len(processor.dictionary):,} entries)")

    total_time = time.perf_counter() - total_start
    timings['total'] = total_time * 1000

    if verbose:
        print(f"Total warm-up:    {timings['total']:>7.1f}ms")

    return total_time, timings


def lookup_text(text: str, **kwargs) -> List[DisplayResult]:
    """
    Look up captured text with the shared processor.

    Keyword arguments are passed to :meth:`JapaneseProcessor.analyze`.
    """
    return get_processor().analyze(text, **kwargs)


__all__ = [
    # Data classes
    "DictionaryEntry",
    "DeconjugationResult",
    "Span",
    "LookupResult",
    "DisplayResult",
    "FlashcardNote",
    "PitchPattern",
    "PatternType",
    "FrequencyLevel",
    "JlptLevel",
    # Components
    "DictionaryStore",
    "Deconjugator",
    "JapaneseFrequency",
    "JapanesePitchAccent",
    "JlptLevels",
    "JapaneseProcessor",
    "ProcessorHolder",
    # Configuration
    "EngineConfig",
    "DictionaryConfig",
    "EnrichmentConfig",
    # Functions
    "normalize",
    "tokenize",
    "deconjugate",
    "load_dictionary_file",
    "load_dictionaries",
    "load_default_dictionary",
    "build_processor",
    "get_processor",
    "reload",
    "warm_up",
    "lookup_text",
    # Exceptions
    "SayaError",
    "DictionaryLoadError",
    "DictionaryParseError",
    "ConfigError",
    "AnalysisTimeoutError",
    # Version
    "__version__",
]
