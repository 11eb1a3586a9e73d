"""
tounsi_relay/nlp/hallucination.py
==================================
Hallucination Filter — Tounsi Relay

Responsibility:
    - Decide DETERMINISTICALLY (no LLM) whether a Whisper transcript is
      likely a noise artifact rather than real speech
    - Apply the separate minimum-length gate used by the pipeline

Whisper fed with clicks, reverb or room noise tends to produce either
nothing, a very long run-on text, or stock YouTube phrases such as
"abonniert den Kanal". Those transcripts must never reach the translator
or the conversation context.

This module does NOT:
    - Call any external API
    - Modify the transcript
"""

import logging
from collections.abc import Iterable

from tounsi_relay.config import (
    DEFAULT_MAX_TRANSCRIPT_CHARS,
    DEFAULT_MIN_TRANSCRIPT_CHARS,
    DEFAULT_NOISE_PHRASES,
)
from tounsi_relay.schemas import IgnoreReason

logger = logging.getLogger("tounsi_relay.nlp.hallucination")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _clean(transcript: str | None) -> str:
    if transcript is None:
        return ""
    return str(transcript).strip()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def is_likely_noise(
    transcript: str | None,
    max_chars: int = DEFAULT_MAX_TRANSCRIPT_CHARS,
    phrases: Iterable[str] = DEFAULT_NOISE_PHRASES,
) -> bool:
    """
    Return True if the transcript looks like a transcription artifact.

    Rules (checked on the trimmed text):
        1. Empty → noise.
        2. Longer than ``max_chars`` → noise (exactly ``max_chars`` passes).
        3. Contains any denylist phrase, case-insensitively, anywhere
           in the text → noise.

    Never raises.
    """
    text = _clean(transcript)
    if not text:
        return True

    if len(text) > max_chars:
        return True

    lower = text.lower()
    return any(phrase and phrase.lower() in lower for phrase in phrases)


def is_too_short(
    transcript: str | None,
    min_chars: int = DEFAULT_MIN_TRANSCRIPT_CHARS,
) -> bool:
    """Minimum-length gate: True if the trimmed text has < ``min_chars``."""
    return len(_clean(transcript)) < min_chars


def classify_transcript(
    transcript: str | None,
    max_chars: int = DEFAULT_MAX_TRANSCRIPT_CHARS,
    min_chars: int = DEFAULT_MIN_TRANSCRIPT_CHARS,
    phrases: Iterable[str] = DEFAULT_NOISE_PHRASES,
) -> IgnoreReason | None:
    """
    Return why a transcript must be dropped, or None if it is usable.

    Combines ``is_likely_noise`` and ``is_too_short``; the reason is only
    used for logging.
    """
    text = _clean(transcript)
    if not text:
        return IgnoreReason.EMPTY_TRANSCRIPT

    if is_likely_noise(text, max_chars=max_chars, phrases=phrases):
        logger.info("Transcript rejected as noise (%d chars).", len(text))
        return IgnoreReason.NOISE

    if is_too_short(text, min_chars=min_chars):
        return IgnoreReason.TOO_SHORT

    return None
