"""
tests/test_hallucination.py
============================
Hallucination Filter Tests — Tounsi Relay

Test categories:
    1. Empty / whitespace transcripts
    2. Length threshold boundary (260 accepted, 261 rejected)
    3. Denylist matching (substring, case-insensitive, configurable)
    4. Minimum-length gate and combined classification

All tests are OFFLINE — pure functions only.
"""

import os
import sys
import unittest

# Ensure project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from tounsi_relay.config import DEFAULT_NOISE_PHRASES
from tounsi_relay.nlp.hallucination import (
    classify_transcript,
    is_likely_noise,
    is_too_short,
)
from tounsi_relay.schemas import IgnoreReason


class TestEmptyTranscripts(unittest.TestCase):

    def test_empty_string_is_noise(self):
        self.assertTrue(is_likely_noise(""))

    def test_whitespace_only_is_noise(self):
        self.assertTrue(is_likely_noise("   \n\t  "))

    def test_none_is_noise(self):
        self.assertTrue(is_likely_noise(None))

    def test_normal_sentence_is_not_noise(self):
        self.assertFalse(is_likely_noise("Was machst du?"))

    def test_arabic_script_is_not_noise(self):
        self.assertFalse(is_likely_noise("شنوة تعمل"))


class TestLengthThreshold(unittest.TestCase):

    def test_exactly_260_chars_accepted(self):
        self.assertFalse(is_likely_noise("a" * 260))

    def test_261_chars_rejected(self):
        self.assertTrue(is_likely_noise("a" * 261))

    def test_length_measured_after_trim(self):
        self.assertFalse(is_likely_noise("   " + "a" * 260 + "   "))

    def test_custom_threshold(self):
        self.assertFalse(is_likely_noise("abcde", max_chars=5))
        self.assertTrue(is_likely_noise("abcdef", max_chars=5))


class TestDenylist(unittest.TestCase):

    def test_exact_phrase(self):
        self.assertTrue(is_likely_noise("abonniert den kanal"))

    def test_case_insensitive(self):
        self.assertTrue(is_likely_noise("Abonniert den Kanal!"))
        self.assertTrue(is_likely_noise("Please SUBSCRIBE"))

    def test_substring_anywhere(self):
        self.assertTrue(is_likely_noise("Danke fürs Zuschauen, lasst ein Like da und tschüss"))
        self.assertTrue(is_likely_noise("unsubscribed"))

    def test_every_default_phrase_triggers(self):
        for phrase in DEFAULT_NOISE_PHRASES:
            with self.subTest(phrase=phrase):
                self.assertTrue(is_likely_noise(f"Hallo {phrase} zusammen"))

    def test_custom_phrases_replace_defaults(self):
        phrases = ("untertitel im auftrag",)
        self.assertTrue(is_likely_noise("Untertitel im Auftrag des ZDF", phrases=phrases))
        self.assertFalse(is_likely_noise("abonniert den kanal", phrases=phrases))

    def test_blank_phrase_never_matches(self):
        self.assertFalse(is_likely_noise("Guten Morgen", phrases=("",)))


class TestMinimumLengthGate(unittest.TestCase):

    def test_single_char_too_short(self):
        self.assertTrue(is_too_short("a"))
        self.assertTrue(is_too_short("  a  "))

    def test_two_chars_ok(self):
        self.assertFalse(is_too_short("ok"))

    def test_single_char_passes_noise_predicate(self):
        # The two gates are independent.
        self.assertFalse(is_likely_noise("a"))
        self.assertTrue(is_too_short("a"))


class TestClassifyTranscript(unittest.TestCase):

    def test_empty(self):
        self.assertEqual(classify_transcript(""), IgnoreReason.EMPTY_TRANSCRIPT)

    def test_noise(self):
        self.assertEqual(classify_transcript("folgt mir"), IgnoreReason.NOISE)
        self.assertEqual(classify_transcript("x" * 261), IgnoreReason.NOISE)

    def test_too_short(self):
        self.assertEqual(classify_transcript("a"), IgnoreReason.TOO_SHORT)

    def test_accepted(self):
        self.assertIsNone(classify_transcript("Aslema, chnowa ahwelek?"))

    def test_thresholds_forwarded(self):
        self.assertEqual(
            classify_transcript("abc", min_chars=4),
            IgnoreReason.TOO_SHORT,
        )
        self.assertEqual(
            classify_transcript("abcdef", max_chars=5),
            IgnoreReason.NOISE,
        )


if __name__ == "__main__":
    unittest.main()
