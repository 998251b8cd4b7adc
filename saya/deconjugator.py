"""
Rule-based deconjugation of Japanese verbs and i-adjectives.

Maps an inflected surface string back to candidate dictionary forms. The
rules never consult the dictionary: a candidate is only a guess until the
caller confirms it with a second lookup, so every phonetically possible
base form is emitted and the dictionary decides which ones are real.

Rule families:
    te-form      食べて -> 食べる, 読んで -> 読む/読ぬ/読ぶ
    ta-form      書いた -> 書く (rewritten to te-form)
    masu-form    書きます -> 書く, 食べました -> 食べる
    continuous   食べている -> 食べる (stripped to te-form)
    negative     書かない -> 書く, 来なかった -> 来る
    i-adjective  高くない / 高かった / 高くて -> 高い

Confidence scores:
    1.0  irregular verb, exact form
    0.8  ichidan verb or i-adjective
    0.7  godan verb, one possible dictionary ending
    0.6  godan verb, several possible endings
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Tuple

# ============================================================================
# Result Type
# ============================================================================


@dataclass(frozen=True)
class DeconjugationResult:
    """
    A candidate dictionary form for an inflected word.

    Attributes:
        base_form: Candidate dictionary form
        conjugation_type: Human-readable label, e.g. 'godan verb, te-form'
        confidence: 0.0-1.0; see module docstring
    """
    base_form: str
    conjugation_type: str
    confidence: float


CONFIDENCE_IRREGULAR = 1.0
CONFIDENCE_ICHIDAN = 0.8
CONFIDENCE_ADJECTIVE = 0.8
CONFIDENCE_GODAN = 0.7
CONFIDENCE_GODAN_AMBIGUOUS = 0.6


# ============================================================================
# Godan (五段) Tables
# ============================================================================

# Maps: ending -> (a-row, i-row, u-row, e-row, o-row)
GODAN_STEMS = {
    'う': ('わ', 'い', 'う', 'え', 'お'),
    'く': ('か', 'き', 'く', 'け', 'こ'),
    'ぐ': ('が', 'ぎ', 'ぐ', 'げ', 'ご'),
    'す': ('さ', 'し', 'す', 'せ', 'そ'),
    'つ': ('た', 'ち', 'つ', 'て', 'と'),
    'ぬ': ('な', 'に', 'ぬ', 'ね', 'の'),
    'ぶ': ('ば', 'び', 'ぶ', 'べ', 'ぼ'),
    'む': ('ま', 'み', 'む', 'め', 'も'),
    'る': ('ら', 'り', 'る', 'れ', 'ろ'),
}

# Te-form / Ta-form sound changes for godan verbs
# Maps: ending -> (te-form suffix, ta-form suffix)
GODAN_TE_TA = {
    'う': ('って', 'った'),
    'く': ('いて', 'いた'),
    'ぐ': ('いで', 'いだ'),
    'す': ('して', 'した'),
    'つ': ('って', 'った'),
    'ぬ': ('んで', 'んだ'),
    'ぶ': ('んで', 'んだ'),
    'む': ('んで', 'んだ'),
    'る': ('って', 'った'),
}


def _invert_te_forms() -> Dict[str, Tuple[str, ...]]:
    """te-form suffix -> dictionary endings sharing it, e.g. 'んで' -> ('ぬ', 'ぶ', 'む')."""
    inverted: Dict[str, List[str]] = {}
    for ending, (te_suffix, _) in GODAN_TE_TA.items():
        inverted.setdefault(te_suffix, []).append(ending)
    return {suffix: tuple(endings) for suffix, endings in inverted.items()}


TE_FORM_ENDINGS = _invert_te_forms()

# i-row mora -> dictionary ending (書き -> 書く)
I_ROW_TO_ENDING = {stems[1]: ending for ending, stems in GODAN_STEMS.items()}

# a-row mora -> dictionary ending (書か -> 書く, 買わ -> 買う)
A_ROW_TO_ENDING = {stems[0]: ending for ending, stems in GODAN_STEMS.items()}


# ============================================================================
# Irregular Verbs
# ============================================================================

# Stems each irregular verb takes before the te, masu and negative suffixes
IRREGULAR_STEMS: Dict[str, Dict[str, Tuple[str, ...]]] = {
    'する': {'te': ('し',), 'masu': ('し',), 'negative': ('し',)},
    '来る': {'te': ('来', 'き'), 'masu': ('来', 'き'), 'negative': ('来', 'こ')},
    '行く': {'te': ('行っ',)},
}


# ============================================================================
# Suffix Tables
# ============================================================================

MASU_SUFFIXES = (
    ('ます', 'masu-form'),
    ('ました', 'masu-form past'),
    ('ません', 'masu-form negative'),
)

NEGATIVE_SUFFIXES = (
    ('ない', 'negative'),
    ('なかった', 'negative past'),
)

# Stripped down to the leading て/で, which is handed to the te-form rules
CONTINUOUS_SUFFIXES = ('ている', 'ていた', 'ています', 'でいる', 'でいた', 'でいます')

ADJECTIVE_SUFFIXES = (
    ('くない', 'negative'),
    ('かった', 'past'),
    ('くて', 'te-form'),
    ('くなかった', 'negative past'),
)

SUFFIX_LABELS = dict(MASU_SUFFIXES + NEGATIVE_SUFFIXES)


# ============================================================================
# Deconjugator
# ============================================================================

class Deconjugator:
    """
    Deconjugates Japanese verbs and i-adjectives.

    Stateless; one instance can be shared freely between threads.

    Example:
        >>> [r.base_form for r in Deconjugator().deconjugate("食べて")]
        ['食べる']
    """

    def deconjugate(self, word: str) -> List[DeconjugationResult]:
        """
        Get every candidate dictionary form for ``word``.

        Families are tried independently and their results concatenated, so
        one surface string may produce several candidates with different
        labels and confidences. An empty list means no rule applied.
        """
        results = []
        results.extend(self.deconjugate_te_form(word))
        results.extend(self.deconjugate_ta_form(word))
        results.extend(self.deconjugate_masu_form(word))
        results.extend(self.deconjugate_continuous(word))
        results.extend(self.deconjugate_negative(word))
        results.extend(self.deconjugate_i_adjective(word))
        return results

    def deconjugate_te_form(self, word: str, form: str = 'te-form') -> List[DeconjugationResult]:
        """Deconjugate て/で forms (書いて -> 書く, 食べて -> 食べる)."""
        results = []
        if len(word) < 2 or word[-1] not in ('て', 'で'):
            return results

        # Godan verbs: the sound change before て/で narrows the ending
        for suffix, endings in TE_FORM_ENDINGS.items():
            if word.endswith(suffix) and len(word) > len(suffix):
                prefix = word[:-len(suffix)]
                confidence = CONFIDENCE_GODAN if len(endings) == 1 else CONFIDENCE_GODAN_AMBIGUOUS
                for ending in endings:
                    results.append(DeconjugationResult(
                        prefix + ending, f"godan verb, {form}", confidence,
                    ))

        # Ichidan verbs (食べて -> 食べる)
        if word[-1] == 'て':
            results.append(DeconjugationResult(
                word[:-1] + 'る', f"ichidan verb, {form}", CONFIDENCE_ICHIDAN,
            ))

        results.extend(self._irregular(word, 'te', ('て',), form))
        return results

    def deconjugate_ta_form(self, word: str) -> List[DeconjugationResult]:
        """Deconjugate た/だ forms by rewriting them to て/で."""
        if len(word) < 2:
            return []
        if word[-1] == 'た':
            return self.deconjugate_te_form(word[:-1] + 'て', form='ta-form')
        if word[-1] == 'だ':
            return self.deconjugate_te_form(word[:-1] + 'で', form='ta-form')
        return []

    def deconjugate_masu_form(self, word: str) -> List[DeconjugationResult]:
        """Deconjugate polite forms (書きます -> 書く, 食べました -> 食べる)."""
        results = []
        for suffix, form in MASU_SUFFIXES:
            if not word.endswith(suffix) or len(word) == len(suffix):
                continue
            stem = word[:-len(suffix)]

            results.append(DeconjugationResult(
                stem + 'る', f"ichidan verb, {form}", CONFIDENCE_ICHIDAN,
            ))

            ending = I_ROW_TO_ENDING.get(stem[-1])
            if ending and len(stem) > 1:
                results.append(DeconjugationResult(
                    stem[:-1] + ending, f"godan verb, {form}", CONFIDENCE_GODAN,
                ))

        results.extend(self._irregular(word, 'masu', [s for s, _ in MASU_SUFFIXES], None))
        return results

    def deconjugate_continuous(self, word: str) -> List[DeconjugationResult]:
        """Deconjugate ている forms (食べている -> 食べる) via the te-form rules."""
        for suffix in CONTINUOUS_SUFFIXES:
            if word.endswith(suffix) and len(word) > len(suffix):
                te_form = word[:-len(suffix)] + suffix[0]
                return [
                    replace(r, conjugation_type=f"{r.conjugation_type}, continuous")
                    for r in self.deconjugate_te_form(te_form)
                ]
        return []

    def deconjugate_negative(self, word: str) -> List[DeconjugationResult]:
        """Deconjugate ない forms (書かない -> 書く, 食べない -> 食べる)."""
        results = []
        for suffix, form in NEGATIVE_SUFFIXES:
            if not word.endswith(suffix) or len(word) == len(suffix):
                continue
            stem = word[:-len(suffix)]

            ending = A_ROW_TO_ENDING.get(stem[-1])
            if ending and len(stem) > 1:
                results.append(DeconjugationResult(
                    stem[:-1] + ending, f"godan verb, {form}", CONFIDENCE_GODAN,
                ))

            results.append(DeconjugationResult(
                stem + 'る', f"ichidan verb, {form}", CONFIDENCE_ICHIDAN,
            ))

        results.extend(self._irregular(word, 'negative', [s for s, _ in NEGATIVE_SUFFIXES], None))
        return results

    def deconjugate_i_adjective(self, word: str) -> List[DeconjugationResult]:
        """Deconjugate i-adjective forms (高くない / 高かった / 高くて -> 高い)."""
        results = []
        for suffix, form in ADJECTIVE_SUFFIXES:
            if word.endswith(suffix) and len(word) > len(suffix):
                results.append(DeconjugationResult(
                    word[:-len(suffix)] + 'い', f"i-adjective, {form}", CONFIDENCE_ADJECTIVE,
                ))
        return results

    def _irregular(self, word: str, stem_kind: str, suffixes, form) -> List[DeconjugationResult]:
        """
        Match irregular verbs by exact form.

        Args:
            word: Surface form.
            stem_kind: Key into IRREGULAR_STEMS ('te', 'masu', 'negative').
            suffixes: Suffixes that may follow the stem.
            form: Label for the form; None uses the suffix's own label.
        """
        results = []
        for base, stems in IRREGULAR_STEMS.items():
            for stem in stems.get(stem_kind, ()):
                for suffix in suffixes:
                    if word == stem + suffix:
                        label = form or SUFFIX_LABELS.get(suffix, stem_kind)
                        results.append(DeconjugationResult(
                            base, f"irregular verb {base}, {label}", CONFIDENCE_IRREGULAR,
                        ))
        return results


_DECONJUGATOR = Deconjugator()


def deconjugate(word: str) -> List[DeconjugationResult]:
    """Deconjugate ``word`` with a shared :class:`Deconjugator`."""
    return _DECONJUGATOR.deconjugate(word)
