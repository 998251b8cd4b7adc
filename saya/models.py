"""
Pydantic models for lookup results.

These are what the engine hands to the rest of the application:
- LookupResult: one dictionary hit with its enrichment
- DisplayResult: a flattened row for the overlay GUI
- FlashcardNote: the fields forwarded to the flashcard tool

Usage:
    from saya.models import LookupResult

    results = processor.lookup(span)
    print(results[0].model_dump_json())
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from saya.dictionary import DictionaryEntry

READING_SEPARATOR = ", "
DEFINITION_SEPARATOR = "; "

# Optional fields exposed through LookupResult.metadata
METADATA_FIELDS = ("frequency_stars", "pitch_accent", "jlpt_level", "conjugation", "base_form")


class FlashcardNote(BaseModel):
    """Fields sent to the flashcard collaborator."""
    term: str = Field(..., description="Display headword")
    reading: str = Field("", description="Readings joined with ', '")
    definition: str = Field("", description="Definitions joined with '; '")


class LookupResult(BaseModel):
    """
    One dictionary hit for a span.

    Values are copied out of the dictionary entry; the result does not keep
    a reference to the store.
    """
    term: str = Field(..., description="Display headword")
    readings: List[str] = Field(default_factory=list, description="Kana readings")
    definitions: List[str] = Field(default_factory=list, description="Glosses")

    entry_id: Optional[str] = Field(None, description="Dictionary entry identifier")
    parts_of_speech: List[str] = Field(default_factory=list, description="Part-of-speech tags")

    # Enrichment
    frequency_stars: Optional[int] = Field(None, description="1-5 star frequency rating")
    pitch_accent: Optional[str] = Field(None, description="Pitch accent notation, e.g. '◎'")
    jlpt_level: Optional[str] = Field(None, description="JLPT badge, e.g. '🟢 N5'")

    # Deconjugation
    conjugation: Optional[str] = Field(None, description="'surface → base (type)' if deconjugated")
    base_form: Optional[str] = Field(None, description="Dictionary form if deconjugated")

    @classmethod
    def from_entry(cls, entry: DictionaryEntry) -> "LookupResult":
        """Create a LookupResult from a dictionary entry."""
        return cls(
            term=entry.headword,
            readings=list(entry.readings),
            definitions=list(entry.glosses),
            entry_id=entry.id,
            parts_of_speech=sorted(entry.parts_of_speech),
        )

    @property
    def is_conjugated(self) -> bool:
        return self.conjugation is not None

    @property
    def metadata(self) -> Dict[str, str]:
        """The populated optional fields as strings; absent fields have no key."""
        return {
            name: str(getattr(self, name))
            for name in METADATA_FIELDS
            if getattr(self, name) is not None
        }

    def to_flashcard(self) -> FlashcardNote:
        return FlashcardNote(
            term=self.term,
            reading=READING_SEPARATOR.join(self.readings),
            definition=DEFINITION_SEPARATOR.join(self.definitions),
        )


class DisplayResult(BaseModel):
    """Flattened result row for the overlay."""
    term: str
    reading: str = ""
    definition: str = ""
    frequency: Optional[str] = Field(None, description="Star string, e.g. '★★★★★'")
    pitch_accent: Optional[str] = None
    jlpt_level: Optional[str] = None
    conjugation: Optional[str] = None

    @classmethod
    def from_lookup_result(cls, result: LookupResult) -> "DisplayResult":
        return cls(
            term=result.term,
            reading=READING_SEPARATOR.join(result.readings),
            definition=DEFINITION_SEPARATOR.join(result.definitions),
            frequency="★" * result.frequency_stars if result.frequency_stars else None,
            pitch_accent=result.pitch_accent,
            jlpt_level=result.jlpt_level,
            conjugation=result.conjugation,
        )

    def to_flashcard(self) -> FlashcardNote:
        return FlashcardNote(term=self.term, reading=self.reading, definition=self.definition)
