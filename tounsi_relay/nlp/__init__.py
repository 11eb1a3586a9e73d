# tounsi_relay/nlp/__init__.py
# =============================
# Text Layer — Tounsi Relay
#
#   - hallucination.py: deterministic noise filter for Whisper transcripts
#   - context.py:       bounded per-direction conversation context
#   - prompts.py:       per-direction STT / chat prompt texts
#   - translator.py:    OpenAI chat translation + output parsing
