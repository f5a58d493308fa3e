#!/usr/bin/env python3
# tests/test_charset.py - Unit tests for charset.py

import pytest
import os
import sys

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import charset
from charset import (
    TONE_NONE, TONE_GRAVE, TONE_ACUTE, TONE_HOOK, TONE_TILDE, TONE_DOT,
    MARK_NONE, MARK_HAT, MARK_BREVE, MARK_HORN, MARK_DASH, MARK_RAW,
)


class TestFindToneAndMark:
    """Test suite for find_tone_from_char() and find_mark_from_char()"""

    @pytest.mark.parametrize('char, tone', [
        ('a', TONE_NONE),
        ('à', TONE_GRAVE),
        ('á', TONE_ACUTE),
        ('ả', TONE_HOOK),
        ('ã', TONE_TILDE),
        ('ạ', TONE_DOT),
        ('Ự', TONE_DOT),
        ('ế', TONE_ACUTE),
    ])
    def test_tone(self, char, tone):
        """Test tone detection on plain and marked vowels"""
        assert charset.find_tone_from_char(char) == tone

    @pytest.mark.parametrize('char, mark', [
        ('a', MARK_NONE),
        ('â', MARK_HAT),
        ('ă', MARK_BREVE),
        ('ơ', MARK_HORN),
        ('Ư', MARK_HORN),
        ('đ', MARK_DASH),
        ('ậ', MARK_HAT),
    ])
    def test_mark(self, char, mark):
        """Test mark detection, independent of tone"""
        assert charset.find_mark_from_char(char) == mark

    def test_non_vietnamese_char(self):
        """Test that consonants and symbols report no tone and no mark"""
        for char in 'bx1_ ':
            assert charset.find_tone_from_char(char) == TONE_NONE
            assert charset.find_mark_from_char(char) == MARK_NONE

    def test_is_vowel(self):
        """Test vowel detection"""
        assert charset.is_vowel('a')
        assert charset.is_vowel('Ờ')
        assert charset.is_vowel('ỵ')
        assert not charset.is_vowel('d')
        assert not charset.is_vowel('đ')
        assert not charset.is_vowel('k')


class TestToneTransformation:
    """Test suite for add_tone_to_char() and remove_tone_from_char()"""

    def test_add_tone(self):
        """Test adding each tone to a plain vowel"""
        assert charset.add_tone_to_char('a', TONE_ACUTE) == 'á'
        assert charset.add_tone_to_char('a', TONE_GRAVE) == 'à'
        assert charset.add_tone_to_char('o', TONE_HOOK) == 'ỏ'
        assert charset.add_tone_to_char('u', TONE_TILDE) == 'ũ'
        assert charset.add_tone_to_char('y', TONE_DOT) == 'ỵ'

    def test_add_tone_keeps_mark_and_case(self):
        """Test that the mark and case survive a tone change"""
        assert charset.add_tone_to_char('ê', TONE_ACUTE) == 'ế'
        assert charset.add_tone_to_char('Ơ', TONE_DOT) == 'Ợ'
        assert charset.add_tone_to_char('ắ', TONE_GRAVE) == 'ằ'

    def test_remove_tone(self):
        """Test that removing the tone keeps the mark"""
        assert charset.remove_tone_from_char('ế') == 'ê'
        assert charset.remove_tone_from_char('Ự') == 'Ư'
        assert charset.remove_tone_from_char('a') == 'a'

    def test_consonant_unchanged(self):
        """Test that tones do not apply to consonants"""
        assert charset.add_tone_to_char('b', TONE_ACUTE) == 'b'
        assert charset.add_tone_to_char('đ', TONE_ACUTE) == 'đ'


class TestMarkTransformation:
    """Test suite for add_mark_to_char() and remove_mark_from_char()"""

    def test_add_mark(self):
        """Test adding marks to plain letters"""
        assert charset.add_mark_to_char('a', MARK_HAT) == 'â'
        assert charset.add_mark_to_char('a', MARK_BREVE) == 'ă'
        assert charset.add_mark_to_char('U', MARK_HORN) == 'Ư'
        assert charset.add_mark_to_char('d', MARK_DASH) == 'đ'
        assert charset.add_mark_to_char('D', MARK_DASH) == 'Đ'

    def test_add_mark_keeps_tone(self):
        """Test that the tone survives a mark change"""
        assert charset.add_mark_to_char('á', MARK_HAT) == 'ấ'
        assert charset.add_mark_to_char('ọ', MARK_HORN) == 'ợ'

    def test_invalid_mark_unchanged(self):
        """Test that a mark the letter cannot take leaves it unchanged"""
        assert charset.add_mark_to_char('a', MARK_HORN) == 'a'
        assert charset.add_mark_to_char('i', MARK_HAT) == 'i'

    def test_remove_mark(self):
        """Test that MARK_NONE and MARK_RAW both remove the mark"""
        assert charset.remove_mark_from_char('ấ') == 'á'
        assert charset.remove_mark_from_char('đ') == 'd'
        assert charset.add_mark_to_char('ư', MARK_RAW) == 'u'


class TestFindMarkDiff:
    """Test suite for find_mark_diff()"""

    def test_mark_between_pairs(self):
        """Test the mark derived between a base and a marked letter"""
        assert charset.find_mark_diff('D', 'Đ') == MARK_DASH
        assert charset.find_mark_diff('U', 'Ư') == MARK_HORN
        assert charset.find_mark_diff('a', 'Ă') == MARK_BREVE
        assert charset.find_mark_diff('o', 'ô') == MARK_HAT

    def test_tone_is_ignored(self):
        """Test that tones on either side do not affect the result"""
        assert charset.find_mark_diff('á', 'ầ') == MARK_HAT

    def test_same_letter(self):
        """Test that identical letters have no mark"""
        assert charset.find_mark_diff('a', 'A') == MARK_NONE

    def test_unrelated_letters(self):
        """Test that unrelated letters yield None"""
        assert charset.find_mark_diff('a', 'ơ') is None
        assert charset.find_mark_diff('x', 'Đ') is None


class TestStrip:
    """Test suite for strip_char(), strip_tones() and strip_word()"""

    def test_strip_char(self):
        assert charset.strip_char('ậ') == 'a'
        assert charset.strip_char('Đ') == 'D'
        assert charset.strip_char('k') == 'k'

    def test_strip_tones(self):
        """Test that only tones are removed"""
        assert charset.strip_tones('tiếng Việt') == 'tiêng Viêt'

    def test_strip_word(self):
        """Test that tones and marks are removed"""
        assert charset.strip_word('đường') == 'duong'
