"""
tounsi_relay/config.py
=======================
Runtime Settings — Tounsi Relay

Responsibility:
    - Read all tunables from environment variables (``.env`` is loaded by
      main.py before this module is used)
    - Provide one frozen Settings object that the service, the API layer
      and the OpenAI collaborators share

This module does NOT:
    - Create OpenAI clients
    - Validate the API key (checked lazily at call time)
"""

import os
from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_STT_MODEL = "whisper-1"
DEFAULT_TRANSLATION_MODEL = "gpt-4.1-mini"
DEFAULT_TEMPERATURE = 0.2
DEFAULT_CONTEXT_MAX_CHARS = 1200
DEFAULT_MAX_TRANSCRIPT_CHARS = 260
DEFAULT_MIN_TRANSCRIPT_CHARS = 2
DEFAULT_UPLOAD_DIR = "uploads"
DEFAULT_STATIC_DIR = "public"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000

# Typical Whisper hallucinations on background noise: YouTube-style
# "subscribe / like / follow" prompts.
DEFAULT_NOISE_PHRASES: tuple[str, ...] = (
    "abonniert den kanal",
    "abonniere den kanal",
    "subscribe",
    "like und abonnieren",
    "lasst ein like da",
    "folgt mir",
    "folgt uns",
    "klingel aktivieren",
)

NOISE_PHRASE_SEPARATOR = "|"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def parse_noise_phrases(raw: str | None) -> tuple[str, ...]:
    """
    Split a ``|``-separated phrase list into normalized denylist entries.

    Entries are lowercased and stripped; blanks are dropped. ``None`` or an
    empty string yields the default denylist.
    """
    if raw is None or not raw.strip():
        return DEFAULT_NOISE_PHRASES

    phrases = tuple(
        part.strip().lower()
        for part in raw.split(NOISE_PHRASE_SEPARATOR)
        if part.strip()
    )
    return phrases or DEFAULT_NOISE_PHRASES


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Settings:
    """All runtime tunables for one relay process."""

    openai_api_key: str | None = None
    stt_model: str = DEFAULT_STT_MODEL
    translation_model: str = DEFAULT_TRANSLATION_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    context_max_chars: int = DEFAULT_CONTEXT_MAX_CHARS
    max_transcript_chars: int = DEFAULT_MAX_TRANSCRIPT_CHARS
    min_transcript_chars: int = DEFAULT_MIN_TRANSCRIPT_CHARS
    noise_phrases: tuple[str, ...] = field(default=DEFAULT_NOISE_PHRASES)
    upload_dir: str = DEFAULT_UPLOAD_DIR
    static_dir: str = DEFAULT_STATIC_DIR
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build Settings from the process environment.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            stt_model=os.getenv("RELAY_STT_MODEL") or DEFAULT_STT_MODEL,
            translation_model=(
                os.getenv("RELAY_TRANSLATION_MODEL") or DEFAULT_TRANSLATION_MODEL
            ),
            temperature=_env_float("RELAY_TEMPERATURE", DEFAULT_TEMPERATURE),
            context_max_chars=_env_int(
                "RELAY_CONTEXT_MAX_CHARS", DEFAULT_CONTEXT_MAX_CHARS
            ),
            max_transcript_chars=_env_int(
                "RELAY_MAX_TRANSCRIPT_CHARS", DEFAULT_MAX_TRANSCRIPT_CHARS
            ),
            min_transcript_chars=_env_int(
                "RELAY_MIN_TRANSCRIPT_CHARS", DEFAULT_MIN_TRANSCRIPT_CHARS
            ),
            noise_phrases=parse_noise_phrases(os.getenv("RELAY_NOISE_PHRASES")),
            upload_dir=os.getenv("RELAY_UPLOAD_DIR") or DEFAULT_UPLOAD_DIR,
            static_dir=os.getenv("RELAY_STATIC_DIR") or DEFAULT_STATIC_DIR,
            host=os.getenv("HOST") or DEFAULT_HOST,
            port=_env_int("PORT", DEFAULT_PORT),
        )
