"""
tounsi_relay/pipeline.py
=========================
Relay Orchestrator — Tounsi Relay

Responsibility:
    Run one request through the relay:
        1. Transcribe the saved clip (Whisper, direction language hint)
        2. Drop noise / too-short transcripts         → Ignored
        3. Translate with the direction's context     → TranslationFields
        4. Drop all-empty translations                → Ignored
        5. Record the exchange in the context store
        6. Return Translated

    The two collaborator calls are synchronous SDK calls and run in a
    worker thread so the event loop keeps serving other requests.

This layer MUST NOT:
    - Touch the uploaded file beyond passing its path (cleanup belongs
      to the API layer)
    - Retry collaborator calls
"""

import asyncio
import logging
from typing import Protocol

from tounsi_relay.config import Settings
from tounsi_relay.nlp.context import ContextWindow, ConversationContext
from tounsi_relay.nlp.hallucination import classify_transcript
from tounsi_relay.nlp.prompts import stt_hint
from tounsi_relay.schemas import (
    Direction,
    IgnoreReason,
    Ignored,
    RelayResult,
    Translated,
    TranslationFields,
)

logger = logging.getLogger("tounsi_relay.pipeline")


# ---------------------------------------------------------------------------
# Collaborator capabilities
# ---------------------------------------------------------------------------


class Transcriber(Protocol):
    def transcribe(self, audio_path: str, language: str, prompt: str) -> str:
        ...


class Translator(Protocol):
    def translate(
        self,
        direction: Direction,
        transcript: str,
        context: ContextWindow,
    ) -> TranslationFields:
        ...


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class RelayService:
    """Long-lived relay; owns the conversation context for its process."""

    def __init__(
        self,
        settings: Settings,
        transcriber: Transcriber,
        translator: Translator,
        context: ConversationContext | None = None,
    ) -> None:
        self.settings = settings
        self.transcriber = transcriber
        self.translator = translator
        self.context = context or ConversationContext(settings.context_max_chars)

    def screen_transcript(self, transcript: str) -> IgnoreReason | None:
        return classify_transcript(
            transcript,
            max_chars=self.settings.max_transcript_chars,
            min_chars=self.settings.min_transcript_chars,
            phrases=self.settings.noise_phrases,
        )

    async def process(self, audio_path: str, direction: Direction) -> RelayResult:
        """
        Relay one saved audio clip.

        Args:
            audio_path: Path of the uploaded clip on disk.
            direction: Validated direction.

        Returns:
            Ignored or Translated.

        Raises:
            Exception: Any collaborator failure, unchanged.
        """
        hint = stt_hint(direction)

        raw_transcript = await asyncio.to_thread(
            self.transcriber.transcribe, audio_path, hint.language, hint.prompt
        )
        transcript = (raw_transcript or "").strip()
        logger.info("STT [%s]: %s", direction.value, transcript)

        reason = self.screen_transcript(transcript)
        if reason is not None:
            logger.info("Transcript ignored [%s]: %s", direction.value, reason.value)
            return Ignored(direction=direction, reason=reason)

        window = self.context.window(direction)
        fields = await asyncio.to_thread(
            self.translator.translate, direction, transcript, window
        )

        if fields.is_empty():
            logger.warning(
                "Translator returned no usable fields [%s] — ignoring.",
                direction.value,
            )
            return Ignored(direction=direction, reason=IgnoreReason.EMPTY_TRANSLATION)

        self.context.record_translation(direction, transcript, fields)

        logger.info("Translation complete [%s].", direction.value)
        return Translated(direction=direction, source_text=transcript, fields=fields)
