# tounsi_relay/stt/__init__.py
# =============================
# Speech-to-Text Layer — Tounsi Relay
#
# One provider: OpenAI Whisper, called once per uploaded clip with the
# direction's language hint ("ar" | "de") and domain prompt.
#
# Public API:
#   WhisperTranscriber(settings).transcribe(audio_path, language, prompt) → str

from tounsi_relay.stt.whisper_client import WhisperTranscriber  # noqa: F401

__all__ = ["WhisperTranscriber"]
