"""
Dictionary store for Saya.

Parses JMdict data (jmdict-simplified JSON or the original JMdict XML) into
immutable entries and builds the exact-match indices used by lookup:
headword -> entries and reading -> entries.

A store is never modified after construction. Layering a supplemental
dictionary on top of the base one goes through :meth:`DictionaryStore.merge`,
which returns a new store and leaves both inputs untouched, so a store can be
shared between threads without locking.
"""

import gzip
import json
import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from saya.errors import DictionaryLoadError, DictionaryParseError
from saya.settings import TARGET_LANGUAGE

logger = logging.getLogger(__name__)

XML_LANG = '{http://www.w3.org/XML/1998/namespace}lang'

# JMdict frequency bands: nfXX marks the XX-th block of 500 words
NF_BAND_SIZE = 500
_NF_PATTERN = re.compile(r"^nf(\d{2})$")


# ============================================================================
# Entry Data Classes
# ============================================================================

@dataclass(frozen=True)
class DictionaryEntry:
    """
    A single dictionary entry.

    Attributes:
        id: Unique identifier (JMdict sequence number as a string)
        kanji: Kanji spellings, first is canonical
        readings: Kana readings
        glosses: Definitions in the target language
        parts_of_speech: Part-of-speech tags from all senses
        jlpt_level: JLPT level (1-5) if known
        frequency_rank: Approximate frequency rank if known (lower = more common)
    """
    id: str
    kanji: Tuple[str, ...] = ()
    readings: Tuple[str, ...] = ()
    glosses: Tuple[str, ...] = ()
    parts_of_speech: FrozenSet[str] = frozenset()
    jlpt_level: Optional[int] = None
    frequency_rank: Optional[int] = None

    @property
    def headword(self) -> str:
        """Display headword: first kanji spelling, else first reading."""
        if self.kanji:
            return self.kanji[0]
        if self.readings:
            return self.readings[0]
        return ""

    def keys(self) -> Tuple[str, ...]:
        """All strings this entry is indexed under."""
        return self.kanji + self.readings


@dataclass(frozen=True)
class DictionaryMetadata:
    """Summary information about a loaded dictionary."""
    name: str
    language: str
    entry_count: int


# ============================================================================
# Source Format (jmdict-simplified JSON)
# ============================================================================

class _SourceText(BaseModel):
    model_config = ConfigDict(extra='ignore')

    text: str


class _SourceGloss(BaseModel):
    model_config = ConfigDict(extra='ignore')

    lang: str = 'eng'
    text: str


class _SourceSense(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    part_of_speech: List[str] = Field(default_factory=list, alias='partOfSpeech')
    gloss: List[_SourceGloss] = Field(default_factory=list)


class _SourceWord(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: str
    kanji: List[_SourceText] = Field(default_factory=list)
    kana: List[_SourceText] = Field(default_factory=list)
    sense: List[_SourceSense] = Field(default_factory=list)

    @field_validator('id', mode='before')
    @classmethod
    def _id_to_str(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def to_entry(self, language: str) -> DictionaryEntry:
        glosses = []
        pos = set()
        for sense in self.sense:
            kept = [g.text for g in sense.gloss if g.lang == language and g.text]
            if kept:
                glosses.extend(kept)
                pos.update(sense.part_of_speech)
        return DictionaryEntry(
            id=self.id,
            kanji=tuple(k.text for k in self.kanji if k.text),
            readings=tuple(r.text for r in self.kana if r.text),
            glosses=tuple(glosses),
            parts_of_speech=frozenset(pos),
        )


def parse_jmdict_json(data: Any, language: str = TARGET_LANGUAGE) -> List[DictionaryEntry]:
    """
    Parse a jmdict-simplified document into entries.

    Args:
        data: Decoded JSON, either ``{"words": [...]}`` or a bare list of words.
        language: Gloss language to keep (e.g. 'eng').

    Returns:
        List of entries, including ones with no retained gloss.

    Raises:
        DictionaryParseError: If the document does not have the expected shape.
    """
    if isinstance(data, dict):
        if 'words' not in data:
            raise DictionaryParseError("Dictionary document has no 'words' list")
        words = data['words']
    else:
        words = data

    if not isinstance(words, list):
        raise DictionaryParseError(f"Expected a list of words, got {type(words).__name__}")

    entries = []
    for index, word in enumerate(words):
        try:
            parsed = _SourceWord.model_validate(word)
        except ValidationError as e:
            raise DictionaryParseError(f"Malformed dictionary word at index {index}: {e}") from e
        entries.append(parsed.to_entry(language))
    return entries


# ============================================================================
# Source Format (JMdict XML)
# ============================================================================

def _frequency_rank(priority_tags: Iterable[str]) -> Optional[int]:
    """Approximate rank from nfXX priority tags (first word of the band)."""
    ranks = []
    for tag in priority_tags:
        match = _NF_PATTERN.match(tag)
        if match:
            ranks.append((int(match.group(1)) - 1) * NF_BAND_SIZE + 1)
    return min(ranks) if ranks else None


def _parse_jmdict_entry(entry_elem: ET.Element, language: str) -> Optional[DictionaryEntry]:
    """Convert one <entry> element."""
    seq = (entry_elem.findtext('ent_seq') or '').strip()
    if not seq:
        return None

    kanji = []
    priority = []
    for k_ele in entry_elem.findall('k_ele'):
        keb = k_ele.findtext('keb', '')
        if keb:
            kanji.append(keb)
        priority.extend(p.text or '' for p in k_ele.findall('ke_pri'))

    readings = []
    for r_ele in entry_elem.findall('r_ele'):
        reb = r_ele.findtext('reb', '')
        if reb:
            readings.append(reb)
        priority.extend(p.text or '' for p in r_ele.findall('re_pri'))

    glosses = []
    pos = set()
    # <pos> applies to following senses until the next <pos> appears
    current_pos: List[str] = []
    for sense_elem in entry_elem.findall('sense'):
        sense_pos = [p.text for p in sense_elem.findall('pos') if p.text]
        if sense_pos:
            current_pos = sense_pos
        kept = [
            g.text for g in sense_elem.findall('gloss')
            if g.get(XML_LANG, 'eng') == language and g.text
        ]
        if kept:
            glosses.extend(kept)
            pos.update(current_pos)

    return DictionaryEntry(
        id=seq,
        kanji=tuple(kanji),
        readings=tuple(readings),
        glosses=tuple(glosses),
        parts_of_speech=frozenset(pos),
        frequency_rank=_frequency_rank(priority),
    )


def parse_jmdict_xml(source, language: str = TARGET_LANGUAGE) -> List[DictionaryEntry]:
    """
    Parse JMdict XML into entries.

    Args:
        source: File name or binary file object.
        language: Gloss language to keep.

    Returns:
        List of entries, including ones with no retained gloss.

    Raises:
        DictionaryParseError: If the XML is malformed.
    """
    entries = []
    try:
        # Use iterparse for memory efficiency
        for event, elem in ET.iterparse(source, events=('end',)):
            if elem.tag == 'entry':
                entry = _parse_jmdict_entry(elem, language)
                if entry is not None:
                    entries.append(entry)
                elem.clear()
    except ET.ParseError as e:
        raise DictionaryParseError(f"Malformed JMdict XML: {e}") from e
    return entries


# ============================================================================
# Dictionary Store
# ============================================================================

def _last_writer_wins(entries: Iterable[DictionaryEntry]) -> List[DictionaryEntry]:
    """Collapse entries sharing an id; a later entry replaces an earlier one in place."""
    positions: Dict[str, int] = {}
    result: List[DictionaryEntry] = []
    for entry in entries:
        pos = positions.get(entry.id)
        if pos is None:
            positions[entry.id] = len(result)
            result.append(entry)
        else:
            result[pos] = entry
    return result


class DictionaryStore:
    """
    Immutable in-memory dictionary with exact-match indices.

    Example:
        >>> store = DictionaryStore.load({"words": [...]})
        >>> [e.headword for e in store.lookup_exact("たべる")]
        ['食べる']
    """

    def __init__(
        self,
        entries: Iterable[DictionaryEntry] = (),
        name: str = "JMdict",
        language: str = TARGET_LANGUAGE,
    ):
        """
        Build a store and its indices.

        Entries without any gloss are dropped. Entries sharing an id keep the
        last one.
        """
        kept = [e for e in entries if e.glosses]
        self._entries: Tuple[DictionaryEntry, ...] = tuple(_last_writer_wins(kept))
        self.name = name
        self.language = language

        headword_index: Dict[str, List[int]] = {}
        reading_index: Dict[str, List[int]] = {}
        id_index: Dict[str, int] = {}
        for pos, entry in enumerate(self._entries):
            id_index[entry.id] = pos
            for kanji in entry.kanji:
                headword_index.setdefault(kanji, []).append(pos)
            for reading in entry.readings:
                reading_index.setdefault(reading, []).append(pos)

        self._headword_index: Dict[str, Tuple[int, ...]] = {
            k: tuple(v) for k, v in headword_index.items()
        }
        self._reading_index: Dict[str, Tuple[int, ...]] = {
            k: tuple(v) for k, v in reading_index.items()
        }
        self._id_index = id_index

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, data: Any, language: str = TARGET_LANGUAGE, name: str = "JMdict") -> "DictionaryStore":
        """
        Build a store from decoded jmdict-simplified data.

        Raises:
            DictionaryParseError: If the data is malformed. No partial store
                is returned.
        """
        entries = parse_jmdict_json(data, language)
        store = cls(entries, name=name, language=language)
        dropped = len(entries) - len(store)
        if dropped:
            logger.debug(f"Dropped {dropped} entries (no '{language}' glosses or duplicate ids)")
        return store

    @classmethod
    def from_entries(cls, entries: Iterable[DictionaryEntry], name: str = "JMdict") -> "DictionaryStore":
        """Build a store from already-constructed entries."""
        return cls(entries, name=name)

    @classmethod
    def empty(cls) -> "DictionaryStore":
        """A store with no entries; every lookup returns nothing."""
        return cls(())

    def merge(self, other: "DictionaryStore") -> "DictionaryStore":
        """
        Layer another store on top of this one.

        Entries in ``other`` replace entries here sharing the same id; new ids
        are appended. Both inputs are left untouched.

        Args:
            other: The overriding store (e.g. a user supplemental dictionary).

        Returns:
            A new store with rebuilt indices.
        """
        merged = DictionaryStore(
            self._entries + other._entries,
            name=self.name,
            language=self.language,
        )
        logger.info(
            f"Merged {len(other)} entries from {other.name} into {self.name} "
            f"({len(merged)} entries total)"
        )
        return merged

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def lookup_exact(self, term: str) -> List[DictionaryEntry]:
        """
        Find entries whose headword or reading is exactly ``term``.

        Headword hits come first, then reading hits; an entry matching both
        ways appears once.
        """
        positions = self._headword_index.get(term, ()) + self._reading_index.get(term, ())
        seen = set()
        results = []
        for pos in positions:
            if pos not in seen:
                seen.add(pos)
                results.append(self._entries[pos])
        return results

    def get_by_id(self, entry_id: str) -> Optional[DictionaryEntry]:
        """Get an entry by its identifier."""
        pos = self._id_index.get(entry_id)
        return self._entries[pos] if pos is not None else None

    @property
    def entries(self) -> Tuple[DictionaryEntry, ...]:
        return self._entries

    def metadata(self) -> DictionaryMetadata:
        return DictionaryMetadata(name=self.name, language=self.language, entry_count=len(self))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._id_index

    def __repr__(self) -> str:
        return f"DictionaryStore({self.name!r}, entries={len(self)})"


# ============================================================================
# File Loading
# ============================================================================

def is_gzip_file(path: Union[str, Path]) -> bool:
    """Check if a file is gzip compressed by reading magic bytes."""
    try:
        with open(path, 'rb') as f:
            return f.read(2) == b'\x1f\x8b'
    except OSError:
        return False


def _open_binary(path: Path):
    if path.suffix == '.gz' or is_gzip_file(path):
        return gzip.open(path, 'rb')
    return open(path, 'rb')


def _detect_format(path: Path) -> str:
    """Return 'json' or 'xml' from the file name, sniffing the content if needed."""
    name = path.name.lower()
    if name.endswith('.gz'):
        name = name[:-3]
    if name.endswith('.json'):
        return 'json'
    if name.endswith('.xml'):
        return 'xml'

    with _open_binary(path) as f:
        head = f.read(64).lstrip(b'\xef\xbb\xbf \t\r\n')
    return 'json' if head[:1] in (b'{', b'[') else 'xml'


def load_dictionary_file(path: Union[str, Path], language: str = TARGET_LANGUAGE) -> DictionaryStore:
    """
    Load a dictionary file.

    Supports jmdict-simplified JSON and JMdict XML, either plain or gzipped.

    Args:
        path: Path to the dictionary file.
        language: Gloss language to keep.

    Returns:
        A fully built store.

    Raises:
        DictionaryLoadError: If the file is missing or cannot be read/decoded.
        DictionaryParseError: If the content is malformed.
    """
    path = Path(path)
    if not path.exists():
        raise DictionaryLoadError(f"Dictionary not found at: {path}")

    logger.info(f"Loading dictionary from file: {path}")
    try:
        fmt = _detect_format(path)
        with _open_binary(path) as f:
            if fmt == 'json':
                data = json.load(f)
                store = DictionaryStore.load(data, language=language, name=path.name)
            else:
                store = DictionaryStore(parse_jmdict_xml(f, language), name=path.name, language=language)
    except DictionaryLoadError:
        raise
    except (OSError, EOFError, ValueError) as e:
        # ValueError covers JSONDecodeError and UnicodeDecodeError
        raise DictionaryLoadError(f"Cannot read dictionary {path}: {e}") from e

    logger.info(f"Loaded {len(store)} dictionary entries from {path}")
    return store


def load_dictionaries(paths: Sequence[Union[str, Path]], language: str = TARGET_LANGUAGE) -> DictionaryStore:
    """
    Load several dictionary files and merge them in order.

    Later files override earlier ones for entries sharing an id. If any file
    fails, the error propagates and nothing is returned.
    """
    store: Optional[DictionaryStore] = None
    for path in paths:
        loaded = load_dictionary_file(path, language)
        store = loaded if store is None else store.merge(loaded)
    return store if store is not None else DictionaryStore.empty()


def load_default_dictionary(config=None) -> DictionaryStore:
    """
    Load the configured base dictionary plus supplemental dictionaries.

    This is the engine's documented fallback point: on any load error a
    warning is logged and an empty store is returned, so the application
    keeps running with zero lookup results.

    Args:
        config: A :class:`saya.config.DictionaryConfig`. Defaults to the
            environment-driven configuration.
    """
    if config is None:
        from saya.config import EngineConfig
        config = EngineConfig.from_env().dictionary

    if not config.enabled:
        logger.info("Dictionary disabled by configuration")
        return DictionaryStore.empty()

    paths = [config.base_path, *config.additional_paths]
    try:
        return load_dictionaries(paths, language=config.language)
    except DictionaryLoadError as e:
        logger.warning(f"Falling back to an empty dictionary: {e}")
        return DictionaryStore.empty()
