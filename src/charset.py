#!/usr/bin/env python3
# charset.py - Vietnamese tone (dấu thanh) and mark (dấu mũ/móc/trăng/gạch) tables

"""
Character classification for Vietnamese letters.

Every Vietnamese vowel can carry one letter-shape mark and one tone:

    base  + mark        + tone        = char
    'o'   + MARK_HORN   + TONE_ACUTE  = 'ớ'
    'a'   + MARK_HAT    + TONE_DOT    = 'ậ'
    'd'   + MARK_DASH   + TONE_NONE   = 'đ'

The lookup tables are generated once at import time from Unicode canonical
composition and are read-only afterwards. Characters outside the tables
(consonants, digits, punctuation) pass through every function unchanged.
"""

import logging
import unicodedata

logger = logging.getLogger(__name__)


# ============================================================================
# Tones (dấu thanh)
# ============================================================================

TONE_NONE = 0
TONE_GRAVE = 1   # huyền  à
TONE_ACUTE = 2   # sắc    á
TONE_HOOK = 3    # hỏi    ả
TONE_TILDE = 4   # ngã    ã
TONE_DOT = 5     # nặng   ạ

TONES = (TONE_NONE, TONE_GRAVE, TONE_ACUTE, TONE_HOOK, TONE_TILDE, TONE_DOT)

TONE_NAMES = {
    TONE_NONE: 'NONE',
    TONE_GRAVE: 'GRAVE',
    TONE_ACUTE: 'ACUTE',
    TONE_HOOK: 'HOOK',
    TONE_TILDE: 'TILDE',
    TONE_DOT: 'DOT',
}

_TONE_COMBINING = {
    TONE_GRAVE: '\u0300',
    TONE_ACUTE: '\u0301',
    TONE_HOOK: '\u0309',
    TONE_TILDE: '\u0303',
    TONE_DOT: '\u0323',
}


# ============================================================================
# Marks (dấu mũ, dấu trăng, dấu móc, gạch ngang)
# ============================================================================

MARK_NONE = 0
MARK_HAT = 1     # â ê ô
MARK_BREVE = 2   # ă
MARK_HORN = 3    # ơ ư
MARK_DASH = 4    # đ
MARK_RAW = 5     # revert to the plain letter

MARK_NAMES = {
    MARK_NONE: 'NONE',
    MARK_HAT: 'HAT',
    MARK_BREVE: 'BREVE',
    MARK_HORN: 'HORN',
    MARK_DASH: 'DASH',
    MARK_RAW: 'RAW',
}

_MARK_COMBINING = {
    MARK_HAT: '\u0302',
    MARK_BREVE: '\u0306',
    MARK_HORN: '\u031b',
}

# Marks each base letter can take
_VALID_MARKS = {
    'a': (MARK_NONE, MARK_HAT, MARK_BREVE),
    'e': (MARK_NONE, MARK_HAT),
    'i': (MARK_NONE,),
    'o': (MARK_NONE, MARK_HAT, MARK_HORN),
    'u': (MARK_NONE, MARK_HORN),
    'y': (MARK_NONE,),
    'd': (MARK_NONE, MARK_DASH),
}


# ============================================================================
# Lookup tables
# ============================================================================
# _CHAR_INFO:  char -> (base, mark, tone)   e.g. 'Ớ' -> ('O', MARK_HORN, TONE_ACUTE)
# _CHAR_TABLE: (base, mark, tone) -> char

def _compose(base, mark, tone):
    if mark == MARK_DASH:
        return 'Đ' if base.isupper() else 'đ'
    sequence = base + _MARK_COMBINING.get(mark, '') + _TONE_COMBINING.get(tone, '')
    return unicodedata.normalize('NFC', sequence)


def _build_tables():
    char_info = {}
    char_table = {}
    for letter, marks in _VALID_MARKS.items():
        tones = (TONE_NONE,) if letter == 'd' else TONES
        for base in (letter, letter.upper()):
            for mark in marks:
                for tone in tones:
                    char = _compose(base, mark, tone)
                    if len(char) != 1:
                        logger.warning(f'No precomposed form for {base!r} mark={mark} tone={tone}')
                        continue
                    char_info[char] = (base, mark, tone)
                    char_table[(base, mark, tone)] = char
    return char_info, char_table


_CHAR_INFO, _CHAR_TABLE = _build_tables()


# ============================================================================
# Queries
# ============================================================================

def is_vowel(char):
    """True for any Vietnamese vowel, whatever its case, mark or tone."""
    info = _CHAR_INFO.get(char)
    return info is not None and info[0].lower() != 'd'


def find_tone_from_char(char):
    info = _CHAR_INFO.get(char)
    return info[2] if info else TONE_NONE


def find_mark_from_char(char):
    info = _CHAR_INFO.get(char)
    return info[1] if info else MARK_NONE


def find_mark_diff(source, target):
    """
    Return the mark that turns ``source`` into ``target``.

    Case and tone are ignored on both sides, so ``find_mark_diff('U', 'ừ')``
    is MARK_HORN and ``find_mark_diff('a', 'a')`` is MARK_NONE. Returns None
    when the two characters do not share a base letter.
    """
    source_info = _CHAR_INFO.get(source.lower())
    target_info = _CHAR_INFO.get(target.lower())
    if source_info is None or target_info is None:
        return None
    if source_info[0] != target_info[0]:
        return None
    return target_info[1]


# ============================================================================
# Transformations
# ============================================================================

def add_tone_to_char(char, tone):
    """Replace the tone of ``char``; consonants and unknown tones leave it as is."""
    info = _CHAR_INFO.get(char)
    if info is None:
        return char
    base, mark, _ = info
    return _CHAR_TABLE.get((base, mark, tone), char)


def remove_tone_from_char(char):
    return add_tone_to_char(char, TONE_NONE)


def add_mark_to_char(char, mark):
    """
    Replace the mark of ``char`` while keeping its tone.

    MARK_NONE and MARK_RAW both remove the mark. A mark the base letter
    cannot take (a horn on 'a') leaves the character unchanged.
    """
    info = _CHAR_INFO.get(char)
    if info is None:
        return char
    base, _, tone = info
    if mark == MARK_RAW:
        mark = MARK_NONE
    return _CHAR_TABLE.get((base, mark, tone), char)


def remove_mark_from_char(char):
    return add_mark_to_char(char, MARK_NONE)


def strip_char(char):
    """Plain ASCII letter for a Vietnamese letter: 'ậ' -> 'a', 'Đ' -> 'D'."""
    info = _CHAR_INFO.get(char)
    return info[0] if info else char


def strip_tones(word):
    return ''.join(remove_tone_from_char(c) for c in word)


def strip_word(word):
    return ''.join(strip_char(c) for c in word)
