#!/usr/bin/env python3
# input_method.py - Compiles a whole input method (kiểu gõ) definition into rules

import logging

import rules as rule_compiler
import util

logger = logging.getLogger(__name__)

DEFAULT_INPUT_METHOD = 'Telex'


class InputMethod:
    """
    A compiled input method such as Telex or VNI.

    The definition is a mapping of trigger key -> rule spec, e.g.
        {"s": "DauSac", "w": "UOA_ƯƠĂ__Ư", "d": "D_Đ"}

    Attributes:
        name: Input method name ("Telex", "VNI", ...)
        rules: All compiled rules, in definition order
        keys: Trigger keys, in definition order
        tone_keys: Keys that carry a tone rule
        appending_keys: Keys that carry a top-level Appending rule
        super_keys: Keys whose spec horns both u and o (e.g. Telex "w")
    """

    def __init__(self, name):
        self.name = name
        self.rules = []
        self.keys = []
        self.tone_keys = []
        self.appending_keys = []
        self.super_keys = []
        self._rules_by_key = {}

    def add_key(self, key, spec):
        compiled = rule_compiler.compile_rule(key, spec)
        self.rules.extend(compiled)
        self._rules_by_key.setdefault(key, []).extend(compiled)
        if key not in self.keys:
            self.keys.append(key)
        if 'uo' in spec.lower() and key not in self.super_keys:
            self.super_keys.append(key)
        for rule in compiled:
            if rule.effect_type == rule_compiler.TONE_TRANSFORMATION and key not in self.tone_keys:
                self.tone_keys.append(key)
            if rule.effect_type == rule_compiler.APPENDING and key not in self.appending_keys:
                self.appending_keys.append(key)

    def get_rules(self, key):
        """Rules triggered by ``key``; empty list when the key is not part of this method."""
        return list(self._rules_by_key.get(key, []))

    def is_tone_key(self, key):
        return key in self.tone_keys

    def __repr__(self):
        return f'InputMethod({self.name!r}, keys={"".join(self.keys)!r})'


def compile_input_method(name, definition):
    """
    Compile a key -> spec mapping into an InputMethod.

    Only the first character of each key string is used; empty keys and
    non-string specs are skipped with a warning.
    """
    im = InputMethod(name)
    for key_str, spec in (definition or {}).items():
        if not key_str or not isinstance(spec, str):
            logger.warning(f'Skipping invalid entry in input method "{name}": {key_str!r} -> {spec!r}')
            continue
        im.add_key(key_str[0], spec)
    logger.debug(f'Compiled input method "{name}": {len(im.keys)} keys, {len(im.rules)} rules')
    return im


def get_input_method_names(definitions=None):
    if definitions is None:
        definitions = util.get_input_method_data() or {}
    return list(definitions.keys())


def load_input_method(name, definitions=None):
    """
    Compile a named input method from the loaded definitions.

    Returns:
        InputMethod, or None when ``name`` is not defined.
    """
    if definitions is None:
        definitions = util.get_input_method_data() or {}
    if name not in definitions:
        logger.error(f'Input method "{name}" is not defined. Available: {", ".join(definitions)}')
        return None
    return compile_input_method(name, definitions[name])
