#!/usr/bin/env python3
"""
IPA Rendering and Parsing
=========================
Static lookup between phoneme feature bundles and IPA symbols.

The generator treats ``to_ipa`` as an opaque rendering function; any
callable taking a phoneme and returning a string can replace it.

Usage:
    from langgen.phonology.ipa import to_ipa, phoneme_from_ipa

    p = phoneme_from_ipa("tʰ")
    to_ipa(p)            # 'tʰ'
"""

from typing import Dict, List, Optional, Tuple

from .features import (
    ConsonantPlace as P,
    ConsonantManner as M,
    ConsonantCoarticulation,
    ConsonantNonPulmonic,
    ConsonantVoicing,
    ConsonantAspiration,
    ConsonantLaterality,
    ConsonantSibilance,
    ConsonantGemination,
    VowelHeight as H,
    VowelFrontness as F,
    VowelPhonation,
    VowelRounding,
    VowelNasality,
    VowelLength,
)
from .phoneme import Consonant, Vowel, WordBoundary, Phoneme


# =============================================================================
# Diacritics
# =============================================================================

TIE_BAR = "͡"
DENTAL_MARK = "̪"
DEVOICED_MARK = "̥"
CREAKY_MARK = "̰"
BREATHY_MARK = "̤"
NASAL_MARK = "̃"
EXTRA_SHORT_MARK = "̆"
LONG_MARK = "ː"

COARTICULATION_MARKS = {
    ConsonantCoarticulation.LABIAL: "ʷ",
    ConsonantCoarticulation.PALATAL: "ʲ",
    ConsonantCoarticulation.VELAR: "ˠ",
    ConsonantCoarticulation.PHARYNGEAL: "ˤ",
}

PHONATION_MARKS = {
    VowelPhonation.DEVOICED: DEVOICED_MARK,
    VowelPhonation.CREAKY: CREAKY_MARK,
    VowelPhonation.BREATHY: BREATHY_MARK,
}

IMPLOSIVE = ConsonantNonPulmonic.IMPLOSIVE
VELARIC = ConsonantNonPulmonic.VELARIC


# =============================================================================
# Consonant Table
# =============================================================================
# (symbol, manner, place, voiced, sibilant, lateral, non-pulmonic)

_CONSONANTS: List[Tuple[str, M, P, bool, bool, bool, Optional[ConsonantNonPulmonic]]] = [
    # Nasals
    ("m", M.NASAL, P.BILABIAL, True, False, False, None),
    ("n", M.NASAL, P.ALVEOLAR, True, False, False, None),
    ("ɳ", M.NASAL, P.RETROFLEX, True, False, False, None),
    ("ɲ", M.NASAL, P.PALATAL, True, False, False, None),
    ("ŋ", M.NASAL, P.VELAR, True, False, False, None),
    ("ɴ", M.NASAL, P.UVULAR, True, False, False, None),
    # Stops
    ("p", M.STOP, P.BILABIAL, False, False, False, None),
    ("b", M.STOP, P.BILABIAL, True, False, False, None),
    ("t", M.STOP, P.ALVEOLAR, False, False, False, None),
    ("d", M.STOP, P.ALVEOLAR, True, False, False, None),
    ("ʈ", M.STOP, P.RETROFLEX, False, False, False, None),
    ("ɖ", M.STOP, P.RETROFLEX, True, False, False, None),
    ("c", M.STOP, P.PALATAL, False, False, False, None),
    ("ɟ", M.STOP, P.PALATAL, True, False, False, None),
    ("k", M.STOP, P.VELAR, False, False, False, None),
    ("g", M.STOP, P.VELAR, True, False, False, None),
    ("q", M.STOP, P.UVULAR, False, False, False, None),
    ("ɢ", M.STOP, P.UVULAR, True, False, False, None),
    ("ʡ", M.STOP, P.PHARYNGEAL, False, False, False, None),
    ("ʔ", M.STOP, P.GLOTTAL, False, False, False, None),
    # Fricatives
    ("ɸ", M.FRICATIVE, P.BILABIAL, False, False, False, None),
    ("β", M.FRICATIVE, P.BILABIAL, True, False, False, None),
    ("f", M.FRICATIVE, P.LABIO_DENTAL, False, False, False, None),
    ("v", M.FRICATIVE, P.LABIO_DENTAL, True, False, False, None),
    ("θ", M.FRICATIVE, P.DENTAL, False, False, False, None),
    ("ð", M.FRICATIVE, P.DENTAL, True, False, False, None),
    ("s", M.FRICATIVE, P.ALVEOLAR, False, True, False, None),
    ("z", M.FRICATIVE, P.ALVEOLAR, True, True, False, None),
    ("ɬ", M.FRICATIVE, P.ALVEOLAR, False, False, True, None),
    ("ɮ", M.FRICATIVE, P.ALVEOLAR, True, False, True, None),
    ("ʃ", M.FRICATIVE, P.POST_ALVEOLAR, False, True, False, None),
    ("ʒ", M.FRICATIVE, P.POST_ALVEOLAR, True, True, False, None),
    ("ʂ", M.FRICATIVE, P.RETROFLEX, False, True, False, None),
    ("ʐ", M.FRICATIVE, P.RETROFLEX, True, True, False, None),
    ("ɕ", M.FRICATIVE, P.PALATAL, False, True, False, None),
    ("ʑ", M.FRICATIVE, P.PALATAL, True, True, False, None),
    ("ç", M.FRICATIVE, P.PALATAL, False, False, False, None),
    ("ʝ", M.FRICATIVE, P.PALATAL, True, False, False, None),
    ("x", M.FRICATIVE, P.VELAR, False, False, False, None),
    ("ɣ", M.FRICATIVE, P.VELAR, True, False, False, None),
    ("χ", M.FRICATIVE, P.UVULAR, False, False, False, None),
    ("ʁ", M.FRICATIVE, P.UVULAR, True, False, False, None),
    ("ħ", M.FRICATIVE, P.PHARYNGEAL, False, False, False, None),
    ("ʕ", M.FRICATIVE, P.PHARYNGEAL, True, False, False, None),
    ("h", M.FRICATIVE, P.GLOTTAL, False, False, False, None),
    ("ɦ", M.FRICATIVE, P.GLOTTAL, True, False, False, None),
    # Approximants (w is technically labio-velar)
    ("ʍ", M.APPROXIMANT, P.BILABIAL, False, False, False, None),
    ("w", M.APPROXIMANT, P.BILABIAL, True, False, False, None),
    ("ʋ", M.APPROXIMANT, P.LABIO_DENTAL, True, False, False, None),
    ("ɹ", M.APPROXIMANT, P.ALVEOLAR, True, False, False, None),
    ("l", M.APPROXIMANT, P.ALVEOLAR, True, False, True, None),
    ("ɻ", M.APPROXIMANT, P.RETROFLEX, True, False, False, None),
    ("ɭ", M.APPROXIMANT, P.RETROFLEX, True, False, True, None),
    ("j", M.APPROXIMANT, P.PALATAL, True, False, False, None),
    ("ʎ", M.APPROXIMANT, P.PALATAL, True, False, True, None),
    ("ɰ", M.APPROXIMANT, P.VELAR, True, False, False, None),
    ("ʟ", M.APPROXIMANT, P.VELAR, True, False, True, None),
    # Taps
    ("ⱱ", M.TAP, P.LABIO_DENTAL, True, False, False, None),
    ("ɾ", M.TAP, P.ALVEOLAR, True, False, False, None),
    ("ɺ", M.TAP, P.ALVEOLAR, True, False, True, None),
    ("ɽ", M.TAP, P.RETROFLEX, True, False, False, None),
    # Trills
    ("ʙ", M.TRILL, P.BILABIAL, True, False, False, None),
    ("r", M.TRILL, P.ALVEOLAR, True, False, False, None),
    ("ʀ", M.TRILL, P.UVULAR, True, False, False, None),
    ("ʢ", M.TRILL, P.PHARYNGEAL, True, False, False, None),
    # Implosives
    ("ɓ", M.STOP, P.BILABIAL, True, False, False, IMPLOSIVE),
    ("ɗ", M.STOP, P.ALVEOLAR, True, False, False, IMPLOSIVE),
    ("ᶑ", M.STOP, P.RETROFLEX, True, False, False, IMPLOSIVE),
    ("ʄ", M.STOP, P.PALATAL, True, False, False, IMPLOSIVE),
    ("ɠ", M.STOP, P.VELAR, True, False, False, IMPLOSIVE),
    ("ʛ", M.STOP, P.UVULAR, True, False, False, IMPLOSIVE),
    # Clicks
    ("ʘ", M.CLICK, P.BILABIAL, False, False, False, VELARIC),
    ("ǀ", M.CLICK, P.DENTAL, False, False, False, VELARIC),
    ("!", M.CLICK, P.ALVEOLAR, False, False, False, VELARIC),
    ("‼", M.CLICK, P.RETROFLEX, False, False, False, VELARIC),
    ("ǂ", M.CLICK, P.PALATAL, False, False, False, VELARIC),
    ("ǁ", M.CLICK, P.ALVEOLAR, False, False, True, VELARIC),
]

_CONSONANT_BY_SYMBOL = {row[0]: row for row in _CONSONANTS}
_CONSONANT_BY_SYMBOL["ɡ"] = ("ɡ",) + _CONSONANT_BY_SYMBOL["g"][1:]

_CONSONANT_BY_KEY: Dict[tuple, str] = {}
for _row in _CONSONANTS:
    _CONSONANT_BY_KEY.setdefault(_row[1:], _row[0])

# Places without their own symbol borrow a neighbour's
_PLACE_FALLBACK = {
    P.LABIO_DENTAL: P.BILABIAL,
    P.DENTAL: P.ALVEOLAR,
    P.POST_ALVEOLAR: P.ALVEOLAR,
    P.PHARYNGEAL: P.UVULAR,
    P.GLOTTAL: P.UVULAR,
}

# Stop half of an affricate
_AFFRICATE_STOP_PLACE = {
    P.LABIO_DENTAL: P.BILABIAL,
    P.DENTAL: P.ALVEOLAR,
    P.POST_ALVEOLAR: P.ALVEOLAR,
}


# =============================================================================
# Vowel Table
# =============================================================================
# (frontness, height) -> (unrounded, rounded)

_VOWEL_RENDER = {
    (F.FRONT, H.CLOSE): ("i", "y"),
    (F.FRONT, H.NEAR_CLOSE): ("ɪ", "ʏ"),
    (F.FRONT, H.CLOSE_MID): ("e", "ø"),
    (F.FRONT, H.MID): ("e", "ø"),
    (F.FRONT, H.OPEN_MID): ("ɛ", "œ"),
    (F.FRONT, H.NEAR_OPEN): ("æ", "œ"),
    (F.FRONT, H.OPEN): ("a", "ɶ"),
    (F.CENTRAL, H.CLOSE): ("ɨ", "ʉ"),
    (F.CENTRAL, H.NEAR_CLOSE): ("ɨ", "ʉ"),
    (F.CENTRAL, H.CLOSE_MID): ("ə", "ɵ"),
    (F.CENTRAL, H.MID): ("ə", "ɵ"),
    (F.CENTRAL, H.OPEN_MID): ("ə", "ɞ"),
    (F.CENTRAL, H.NEAR_OPEN): ("ɐ", "ɞ"),
    (F.CENTRAL, H.OPEN): ("ɐ", "ɞ"),
    (F.BACK, H.CLOSE): ("ɯ", "u"),
    (F.BACK, H.NEAR_CLOSE): ("ɯ", "ʊ"),
    (F.BACK, H.CLOSE_MID): ("ɤ", "o"),
    (F.BACK, H.MID): ("ɤ", "o"),
    (F.BACK, H.OPEN_MID): ("ʌ", "ɔ"),
    (F.BACK, H.NEAR_OPEN): ("ɑ", "ɒ"),
    (F.BACK, H.OPEN): ("ɑ", "ɒ"),
}

# symbol -> (frontness, height, rounded)
_VOWEL_PARSE = {
    "i": (F.FRONT, H.CLOSE, False),
    "y": (F.FRONT, H.CLOSE, True),
    "ɪ": (F.FRONT, H.NEAR_CLOSE, False),
    "ʏ": (F.FRONT, H.NEAR_CLOSE, True),
    "e": (F.FRONT, H.CLOSE_MID, False),
    "ø": (F.FRONT, H.CLOSE_MID, True),
    "ɛ": (F.FRONT, H.OPEN_MID, False),
    "œ": (F.FRONT, H.OPEN_MID, True),
    "æ": (F.FRONT, H.NEAR_OPEN, False),
    "a": (F.FRONT, H.OPEN, False),
    "ɶ": (F.FRONT, H.OPEN, True),
    "ɨ": (F.CENTRAL, H.CLOSE, False),
    "ʉ": (F.CENTRAL, H.CLOSE, True),
    "ɵ": (F.CENTRAL, H.CLOSE_MID, True),
    "ə": (F.CENTRAL, H.MID, False),
    "ɞ": (F.CENTRAL, H.OPEN_MID, True),
    "ɐ": (F.CENTRAL, H.NEAR_OPEN, False),
    "ɯ": (F.BACK, H.CLOSE, False),
    "u": (F.BACK, H.CLOSE, True),
    "ʊ": (F.BACK, H.NEAR_CLOSE, True),
    "ɤ": (F.BACK, H.CLOSE_MID, False),
    "o": (F.BACK, H.CLOSE_MID, True),
    "ʌ": (F.BACK, H.OPEN_MID, False),
    "ɔ": (F.BACK, H.OPEN_MID, True),
    "ɑ": (F.BACK, H.OPEN, False),
    "ɒ": (F.BACK, H.OPEN, True),
}


# =============================================================================
# Rendering
# =============================================================================

def to_ipa(phoneme: Phoneme) -> str:
    """Render a phoneme as IPA. Word boundaries render as an empty string."""
    if isinstance(phoneme, WordBoundary):
        return ""
    if isinstance(phoneme, Consonant):
        return _consonant_to_ipa(phoneme)
    if isinstance(phoneme, Vowel):
        return _vowel_to_ipa(phoneme)
    raise TypeError(f"Cannot render {phoneme!r} as IPA")


def _lookup_consonant(manner, place, voiced, sibilant, lateral, non_pulmonic) -> Optional[str]:
    """Find a base symbol, relaxing place, sibilance/laterality, then voicing."""
    places = [place]
    if place in _PLACE_FALLBACK:
        places.append(_PLACE_FALLBACK[place])

    for voice in (voiced, not voiced):
        for candidate_place in places:
            for sib, lat in ((sibilant, lateral), (False, lateral), (False, False)):
                symbol = _CONSONANT_BY_KEY.get(
                    (manner, candidate_place, voice, sib, lat, non_pulmonic)
                )
                if symbol is None:
                    continue
                if candidate_place != place and place == P.DENTAL:
                    symbol += DENTAL_MARK
                if voice != voiced and not voiced:
                    symbol += DEVOICED_MARK
                return symbol
    return None


def _consonant_to_ipa(c: Consonant) -> str:
    voiced = c.voicing in (ConsonantVoicing.VOICED, ConsonantVoicing.PREVOICED)
    sibilant = c.sibilance == ConsonantSibilance.SIBILANT
    lateral = c.laterality == ConsonantLaterality.LATERAL

    manner = c.manner
    non_pulmonic = None
    if c.non_pulmonic == VELARIC or manner == M.CLICK:
        manner, non_pulmonic = M.CLICK, VELARIC
    elif c.non_pulmonic == IMPLOSIVE:
        manner, non_pulmonic = M.STOP, IMPLOSIVE

    if manner == M.AFFRICATE:
        stop_place = _AFFRICATE_STOP_PLACE.get(c.place, c.place)
        if c.place == P.PALATAL and sibilant:
            stop_place = P.ALVEOLAR
        stop = _lookup_consonant(M.STOP, stop_place, voiced, False, False, None)
        fricative = _lookup_consonant(M.FRICATIVE, c.place, voiced, sibilant, lateral, None)
        if stop is None or fricative is None:
            representation = "C"
        else:
            representation = stop.replace(DENTAL_MARK, "") + TIE_BAR + fricative
    else:
        representation = _lookup_consonant(
            manner, c.place, voiced, sibilant, lateral, non_pulmonic
        ) or "C"

    representation += COARTICULATION_MARKS.get(c.coarticulation, "")
    if c.aspiration == ConsonantAspiration.ASPIRATED:
        representation += "ʰ"
    if c.gemination == ConsonantGemination.GEMINATE:
        representation += LONG_MARK
    if c.non_pulmonic == ConsonantNonPulmonic.EJECTIVE:
        representation += "ʼ"
    return representation


def _vowel_to_ipa(v: Vowel) -> str:
    pair = _VOWEL_RENDER.get((v.frontness, v.height))
    if pair is None:
        representation = "V"
    else:
        representation = pair[1] if v.rounding == VowelRounding.ROUNDED else pair[0]

    representation += PHONATION_MARKS.get(v.phonation, "")
    if v.nasality == VowelNasality.NASAL:
        representation += NASAL_MARK
    if v.length == VowelLength.LONG:
        representation += LONG_MARK
    elif v.length == VowelLength.EXTRA_LONG:
        representation += LONG_MARK * 2
    elif v.length == VowelLength.EXTRA_SHORT:
        representation += EXTRA_SHORT_MARK
    return representation


# =============================================================================
# Parsing
# =============================================================================

def is_ipa_vowel(s: str) -> bool:
    return bool(s) and s[0] in _VOWEL_PARSE


def is_ipa_consonant(s: str) -> bool:
    return bool(s) and s[0] in _CONSONANT_BY_SYMBOL


def vowel_from_ipa(s: str) -> Vowel:
    """Parse an IPA vowel: base symbol plus phonation, nasal and length marks."""
    if not is_ipa_vowel(s):
        raise ValueError(f'Failed to parse vowel string: "{s}"')

    frontness, height, rounded = _VOWEL_PARSE[s[0]]
    phonation = VowelPhonation.MODAL
    nasality = VowelNasality.ORAL
    length = VowelLength.SHORT
    long_marks = 0

    for char in s[1:]:
        if char == DEVOICED_MARK:
            phonation = VowelPhonation.DEVOICED
        elif char == CREAKY_MARK:
            phonation = VowelPhonation.CREAKY
        elif char == BREATHY_MARK:
            phonation = VowelPhonation.BREATHY
        elif char == NASAL_MARK:
            nasality = VowelNasality.NASAL
        elif char == LONG_MARK:
            long_marks += 1
        elif char == EXTRA_SHORT_MARK:
            length = VowelLength.EXTRA_SHORT
        else:
            raise ValueError(f'Unknown mark "{char}" in vowel string: "{s}"')

    if long_marks == 1:
        length = VowelLength.LONG
    elif long_marks > 1:
        length = VowelLength.EXTRA_LONG

    return Vowel(
        height=height,
        frontness=frontness,
        phonation=phonation,
        rounding=VowelRounding.ROUNDED if rounded else VowelRounding.UNROUNDED,
        nasality=nasality,
        length=length,
    )


def consonant_from_ipa(s: str) -> Consonant:
    """
    Parse an IPA consonant.

    The first character selects the base consonant. Following characters
    add aspiration, gemination, coarticulation, ejective release, dental
    place or devoicing; a fricative after the base makes an affricate.
    """
    if not is_ipa_consonant(s):
        raise ValueError(f'Failed to parse consonant string: "{s}"')

    _, manner, place, voiced, sibilant, lateral, non_pulmonic = _CONSONANT_BY_SYMBOL[s[0]]
    voicing = ConsonantVoicing.VOICED if voiced else ConsonantVoicing.UNVOICED
    aspiration = ConsonantAspiration.UNASPIRATED
    gemination = ConsonantGemination.SINGLETON
    coarticulation = ConsonantCoarticulation.NONE
    non_pulmonic = non_pulmonic or ConsonantNonPulmonic.PULMONIC

    coarticulations = {mark: kind for kind, mark in COARTICULATION_MARKS.items()}

    for char in s[1:]:
        if char == LONG_MARK:
            gemination = ConsonantGemination.GEMINATE
        elif char == "ʰ":
            aspiration = ConsonantAspiration.ASPIRATED
        elif char in coarticulations:
            coarticulation = coarticulations[char]
        elif char == "ʼ":
            non_pulmonic = ConsonantNonPulmonic.EJECTIVE
        elif char == DENTAL_MARK:
            place = P.DENTAL
        elif char == DEVOICED_MARK:
            voicing = ConsonantVoicing.UNVOICED
        elif char == TIE_BAR:
            continue
        elif char in _CONSONANT_BY_SYMBOL and _CONSONANT_BY_SYMBOL[char][1] == M.FRICATIVE:
            # Fricative release: the fricative decides place, sibilance and laterality
            _, _, place, _, sibilant, lateral, _ = _CONSONANT_BY_SYMBOL[char]
            manner = M.AFFRICATE
        else:
            raise ValueError(f'Unknown mark "{char}" in consonant string: "{s}"')

    return Consonant(
        place=place,
        manner=manner,
        coarticulation=coarticulation,
        non_pulmonic=non_pulmonic,
        voicing=voicing,
        aspiration=aspiration,
        laterality=ConsonantLaterality.LATERAL if lateral else ConsonantLaterality.CENTRAL,
        sibilance=ConsonantSibilance.SIBILANT if sibilant else ConsonantSibilance.NONSIBILANT,
        gemination=gemination,
    )


def phoneme_from_ipa(s: str) -> Phoneme:
    """Parse a single IPA phoneme, vowel or consonant."""
    s = (s or "").strip()
    if is_ipa_vowel(s):
        return vowel_from_ipa(s)
    if is_ipa_consonant(s):
        return consonant_from_ipa(s)
    raise ValueError(f'Unrecognised IPA phoneme: "{s}"')


__all__ = [
    'to_ipa',
    'is_ipa_vowel',
    'is_ipa_consonant',
    'vowel_from_ipa',
    'consonant_from_ipa',
    'phoneme_from_ipa',
]
