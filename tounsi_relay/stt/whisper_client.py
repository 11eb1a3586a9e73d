"""
tounsi_relay/stt/whisper_client.py
===================================
OpenAI Whisper STT Client — Tounsi Relay

Responsibility:
    - Transcribe one uploaded clip with the OpenAI Whisper API
    - Pass the direction's language hint and domain prompt
    - Return the plain transcript text

This module does NOT:
    - Filter hallucinations (see nlp/hallucination.py)
    - Convert or validate audio formats
    - Delete the uploaded file (owned by the API layer)
"""

import logging

from openai import OpenAI

from tounsi_relay.config import Settings

logger = logging.getLogger("tounsi_relay.stt.whisper")


class WhisperTranscriber:
    """Speech-to-text capability backed by OpenAI Whisper."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._client: OpenAI | None = None

    def _get_client(self) -> OpenAI:
        if self._client is None:
            if not self.settings.openai_api_key:
                raise RuntimeError("OPENAI_API_KEY environment variable is not set.")
            self._client = OpenAI(api_key=self.settings.openai_api_key)
        return self._client

    def transcribe(self, audio_path: str, language: str, prompt: str) -> str:
        """
        Transcribe an audio file.

        Args:
            audio_path: Path of the saved upload (WAV from the browser).
            language: ISO-639-1 hint ("ar" or "de").
            prompt: Domain prompt biasing Whisper.

        Returns:
            Transcript text, "" if Whisper returned nothing.

        Raises:
            RuntimeError: If the key is missing or the Whisper call fails.
        """
        client = self._get_client()

        try:
            with open(audio_path, "rb") as audio_file:
                response = client.audio.transcriptions.create(
                    model=self.settings.stt_model,
                    file=audio_file,
                    language=language,
                    prompt=prompt,
                )
        except Exception as exc:
            raise RuntimeError(f"Whisper transcription failed: {exc}") from exc

        text = getattr(response, "text", None) or ""
        logger.info("Whisper transcript (%s): %s", language, text.strip())
        return text
