#!/usr/bin/env python3
"""
rules.py - Compiler for per-key transformation specs
Trình biên dịch luật gõ phím

================================================================================
OVERVIEW / Tổng quan
================================================================================

An input method (Telex, VNI, ...) is described as a table mapping each
trigger key to a short spec string. This module compiles one (key, spec)
pair into an ordered list of Rule records that the keystroke engine applies
to the word being typed.

Mỗi kiểu gõ là một bảng ánh xạ phím → chuỗi luật. Module này biên dịch
từng cặp (phím, luật) thành danh sách Rule theo thứ tự.

================================================================================
SPEC FORMAT / Cú pháp luật
================================================================================

TONE RULES / Luật dấu thanh:
────────────────────────────
A spec that is exactly one of the tone names:

    "XoaDauThanh"  -> TONE_NONE      "DauHoi"   -> TONE_HOOK
    "DauSac"       -> TONE_ACUTE     "DauNga"   -> TONE_TILDE
    "DauHuyen"     -> TONE_GRAVE     "DauNang"  -> TONE_DOT

MARK RULES / Luật dấu mũ, móc, trăng:
─────────────────────────────────────
Runs separated by "_", read as (from, to) pairs:

    "D_Đ"          d -> đ                      (one MarkTransformation)
    "UOA_ƯƠĂ"      u -> ư, o -> ơ, a -> ă      (three MarkTransformations)
    "_Ư"           insert Ư                    (Appending)
    "UOA_ƯƠĂ__Ư"   the three above, then insert ư when none applies
    "__ươ"         horn on u, followed by inserting ơ (nested append)

The mark of each pair is derived by diffing the "from" and "to" characters,
so one spec written in upper case covers both cases.

================================================================================
"""

import logging
from collections import namedtuple

import charset

logger = logging.getLogger(__name__)


# Effect types
APPENDING = 0
MARK_TRANSFORMATION = 1
TONE_TRANSFORMATION = 2

EFFECT_TYPE_NAMES = {
    APPENDING: 'Appending',
    MARK_TRANSFORMATION: 'MarkTransformation',
    TONE_TRANSFORMATION: 'ToneTransformation',
}

TONE_RULE_NAMES = {
    'XoaDauThanh': charset.TONE_NONE,
    'DauSac': charset.TONE_ACUTE,
    'DauHuyen': charset.TONE_GRAVE,
    'DauHoi': charset.TONE_HOOK,
    'DauNga': charset.TONE_TILDE,
    'DauNang': charset.TONE_DOT,
}

SEPARATOR = '_'
APPEND_SEPARATOR = SEPARATOR * 2


class Rule(namedtuple('Rule', ['key', 'effect_type', 'effect', 'target_char', 'result', 'appended_rules'])):
    """
    One compiled transformation.

    key:            trigger character
    effect_type:    APPENDING, MARK_TRANSFORMATION or TONE_TRANSFORMATION
    effect:         tone or mark code; 0 for APPENDING
    target_char:    lower-case base character the effect applies to, or the
                    literal character to insert for APPENDING
    result:         the "to" character as written in the layout (case kept)
    appended_rules: tuple of APPENDING rules applied right after this one
    """
    __slots__ = ()

    def __new__(cls, key, effect_type, effect=0, target_char='', result='', appended_rules=()):
        return super().__new__(cls, key, effect_type, effect, target_char, result, tuple(appended_rules))

    def get_tone(self):
        if self.effect_type == TONE_TRANSFORMATION:
            return self.effect
        return charset.TONE_NONE

    def get_mark(self):
        if self.effect_type == MARK_TRANSFORMATION:
            return self.effect
        return charset.MARK_NONE


def compile_tone_rule(key, spec):
    """
    Compile a tone-rule name into a single ToneTransformation rule.

    Returns an empty list for names outside TONE_RULE_NAMES.
    """
    tone = TONE_RULE_NAMES.get(spec) if isinstance(spec, str) else None
    if tone is None:
        logger.warning(f'Unknown tone rule for key "{key}": "{spec}"')
        return []
    return [Rule(key, TONE_TRANSFORMATION, tone)]


def _appending_rule(key, char, following=''):
    appended = [Rule(key, APPENDING, 0, c, c) for c in following]
    return Rule(key, APPENDING, 0, char, char, appended)


def _trailing_rule(key, run):
    # "__ươ": the first character re-marks a vowel, the rest are inserted after it
    first, following = run[0], run[1:]
    mark = charset.find_mark_from_char(first)
    if not following or mark == charset.MARK_NONE:
        return _appending_rule(key, first, following)
    appended = [Rule(key, APPENDING, 0, c, c) for c in following]
    return Rule(key, MARK_TRANSFORMATION, mark, charset.strip_char(first).lower(), first, appended)


def compile_mark_rule(key, spec):
    """
    Compile a "from_to" spec into Mark/Appending rules.

    Never raises: pairs whose mark cannot be derived are skipped, and a spec
    with no usable pair yields an empty list.

    Args:
        key: The trigger character.
        spec: The spec string, e.g. "UOA_ƯƠĂ__Ư".

    Returns:
        list: Rules in spec order.
    """
    rules = []
    if not isinstance(spec, str) or SEPARATOR not in spec:
        logger.warning(f'Unrecognized rule spec for key "{key}": "{spec}"')
        return rules

    body, doubled, tail = spec.partition(APPEND_SEPARATOR)
    segments = body.split(SEPARATOR) if body else []

    for i in range(0, len(segments) - 1, 2):
        source, target = segments[i], segments[i + 1]
        if not target:
            continue
        if not source:
            rules.extend(_appending_rule(key, c) for c in target)
            continue
        for source_char, target_char in zip(source, target):
            mark = charset.find_mark_diff(source_char, target_char)
            if mark is None:
                logger.warning(f'Cannot derive a mark from "{source_char}" to "{target_char}" (key "{key}")')
                continue
            rules.append(Rule(key, MARK_TRANSFORMATION, mark, source_char.lower(), target_char))

    if doubled:
        run = tail.split(SEPARATOR)[0]
        if run:
            # a trailing append after mark pairs follows their lower-cased targets
            if body:
                run = run.lower()
            rules.append(_trailing_rule(key, run))

    if not rules:
        logger.warning(f'Rule spec for key "{key}" produced no rules: "{spec}"')
    return rules


def compile_rule(key, spec):
    """Compile any spec, dispatching on whether it names a tone."""
    if not isinstance(spec, str):
        logger.warning(f'Rule spec for key "{key}" is not a string: {spec!r}')
        return []
    if spec in TONE_RULE_NAMES:
        return compile_tone_rule(key, spec)
    return compile_mark_rule(key, spec)
