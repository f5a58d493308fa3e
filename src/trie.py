#!/usr/bin/env python3
"""
trie.py - Tone-insensitive word trie for spell checking and suggestions
Cây tiền tố không phân biệt dấu, dùng để kiểm tra chính tả và gợi ý từ

================================================================================
HOW IT WORKS / Cách hoạt động
================================================================================

Every inserted word is stored with its diacritics, and every character that
carries a tone or a mark also branches into its stripped forms:

    insert("tiếng")

    t ─ i ─ ế ─ n ─ g      literal path   (full, dictionary)
            ├ ê ─ n ─ g    tone removed   (full, alias)
            └ e ─ n ─ g    tone and mark removed (full, alias)

So "tieng" and "tiêng" are recognized while the user is still typing
diacritics, but only "tiếng" is a dictionary hit.

NODE FLAGS / Cờ của nút:
────────────────────────
    full:       a complete word or alias ends here
    dictionary: a word inserted as real vocabulary ends here
    entry:      a word passed to insert() ends here (never set for aliases)

Flags only ever go from False to True. The trie is built once and then read
without locks; TrieMatcher rebuilds and swaps the root to reload.

================================================================================
"""

import logging
import threading

import charset

logger = logging.getLogger(__name__)


FIND_RESULT_NOT_MATCH = 0
FIND_RESULT_MATCH_PREFIX = 1
FIND_RESULT_MATCH_FULL = 2

FIND_RESULT_NAMES = {
    FIND_RESULT_NOT_MATCH: 'NotMatch',
    FIND_RESULT_MATCH_PREFIX: 'MatchPrefix',
    FIND_RESULT_MATCH_FULL: 'MatchFull',
}


class TrieNode:
    __slots__ = ('full', 'dictionary', 'entry', 'children')

    def __init__(self):
        self.full = False
        self.dictionary = False
        self.entry = False
        self.children = {}

    def __repr__(self):
        return f'TrieNode(full={self.full}, dictionary={self.dictionary}, children={"".join(self.children)!r})'


def _char_variants(char):
    # the literal character first, then its tone-stripped and bare forms
    variants = [char]
    toneless = charset.remove_tone_from_char(char)
    if toneless not in variants:
        variants.append(toneless)
    bare = charset.remove_mark_from_char(toneless)
    if bare not in variants:
        variants.append(bare)
    return variants


def _insert(node, chars, dictionary, alias):
    char, rest = chars[0], chars[1:]
    for variant in _char_variants(char):
        is_alias = alias or variant != char
        child = node.children.get(variant)
        if child is None:
            child = TrieNode()
            node.children[variant] = child
        if rest:
            _insert(child, rest, dictionary, is_alias)
            continue
        child.full = True
        if not is_alias:
            child.entry = True
            if dictionary:
                child.dictionary = True


def insert(root, word, dictionary=False):
    """
    Insert ``word`` (lower-cased) together with all of its stripped aliases.

    Args:
        root: The trie root.
        word: The word to insert; empty words are ignored.
        dictionary: True if the word is real vocabulary.
    """
    if not word:
        return
    _insert(root, word.lower(), dictionary, False)


def find_node(root, prefix):
    """Return the node reached by ``prefix`` (case-folded), or None."""
    node = root
    for char in prefix.lower():
        node = node.children.get(char)
        if node is None:
            return None
    return node


def query(root, word, dictionary=False):
    """
    Match ``word`` against the trie.

    Returns:
        FIND_RESULT_MATCH_FULL if a complete word ends here (a dictionary
        entry when ``dictionary`` is set), FIND_RESULT_MATCH_PREFIX if the
        path exists but is not such a word, FIND_RESULT_NOT_MATCH otherwise.
    """
    node = find_node(root, word)
    if node is None:
        return FIND_RESULT_NOT_MATCH
    if node.full and (node.dictionary or not dictionary):
        return FIND_RESULT_MATCH_FULL
    return FIND_RESULT_MATCH_PREFIX


def autocomplete(root, prefix, include_aliases=False):
    """
    Collect the words stored under ``prefix``.

    By default only inserted spellings are returned; ``include_aliases``
    also returns the stripped alias spellings. Order is unspecified.

    Returns:
        set: Words starting with the case-folded ``prefix``.
    """
    prefix = prefix.lower()
    start = find_node(root, prefix)
    words = set()
    if start is None:
        return words
    stack = [(start, prefix)]
    while stack:
        node, path = stack.pop()
        if node.entry or (include_aliases and node.full):
            words.add(path)
        for char, child in node.children.items():
            stack.append((child, path + char))
    return words


def build_trie(words, dictionary=True):
    root = TrieNode()
    for word in words:
        insert(root, word, dictionary)
    return root


class TrieMatcher:
    """
    Holder for a dictionary trie that can be reloaded while being read.

    ``load()`` builds a new trie off to the side and swaps the reference, so
    a concurrent ``query()`` sees either the old trie or the new one.
    """

    def __init__(self, words=None, dictionary=True):
        self._lock = threading.Lock()
        self._root = TrieNode()
        self._word_count = 0
        self._ready = False
        if words is not None:
            self.load(words, dictionary)

    def load(self, words, dictionary=True):
        words = [w for w in words if w]
        root = build_trie(words, dictionary)
        with self._lock:
            self._root = root
            self._word_count = len(words)
            self._ready = True
        logger.info(f'TrieMatcher loaded {len(words)} words')

    def is_ready(self):
        with self._lock:
            return self._ready

    @property
    def word_count(self):
        with self._lock:
            return self._word_count

    def _current_root(self):
        with self._lock:
            return self._root

    def query(self, word, dictionary=False):
        return query(self._current_root(), word, dictionary)

    def autocomplete(self, prefix, include_aliases=False):
        return autocomplete(self._current_root(), prefix, include_aliases)

    def __contains__(self, word):
        return self.query(word, dictionary=True) == FIND_RESULT_MATCH_FULL
