# tounsi_relay/__init__.py
# =========================
# Tounsi Relay — live speech translation Tunisian Darija <-> German
#
# One endpoint (POST /audio): Whisper transcription, hallucination filter,
# context-aware OpenAI translation, structured JSON response.

__version__ = "1.0.0"
