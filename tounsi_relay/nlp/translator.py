"""
tounsi_relay/nlp/translator.py
===============================
Translator — Tounsi Relay

Responsibility:
    - Send an accepted transcript plus the direction's context window to
      OpenAI chat completions
    - Parse the model's raw text into TranslationFields

Per the relay contract:
    - Malformed output is NOT an error: it degrades to an empty record,
      which the pipeline turns into an "ignored" response
    - No retries; provider failures propagate to the caller

This module does NOT:
    - Perform STT
    - Decide whether the transcript is noise
    - Update conversation context
"""

import json
import logging
from typing import Any

from openai import OpenAI

from tounsi_relay.config import Settings
from tounsi_relay.nlp.context import ContextWindow
from tounsi_relay.nlp.prompts import build_user_prompt, system_prompt
from tounsi_relay.schemas import (
    EMPTY_FIELDS,
    FIELD_NAMES,
    Direction,
    TranslationFields,
)

logger = logging.getLogger("tounsi_relay.nlp.translator")


# ---------------------------------------------------------------------------
# Response parser
# ---------------------------------------------------------------------------


def _strip_code_fences(raw: str) -> str:
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        # Remove opening fence (with optional language tag)
        first_newline = cleaned.find("\n")
        cleaned = cleaned[first_newline + 1:] if first_newline != -1 else ""
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def _field_text(value: Any) -> str:
    if not value:
        return ""
    return str(value).strip()


def parse_translation(raw: str | None) -> TranslationFields:
    """
    Parse the model output into TranslationFields.

    Accepts a bare JSON object, optionally wrapped in markdown fences.
    Anything else (invalid JSON, arrays, scalars) yields an all-empty
    record. Unknown keys are ignored; missing or falsy values become "".

    Never raises.
    """
    cleaned = _strip_code_fences(raw or "")

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.warning("Translation output is not valid JSON: %s", exc)
        return EMPTY_FIELDS

    if not isinstance(parsed, dict):
        logger.warning(
            "Expected JSON object from translator, got %s",
            type(parsed).__name__,
        )
        return EMPTY_FIELDS

    return TranslationFields(
        **{name: _field_text(parsed.get(name)) for name in FIELD_NAMES}
    )


# ---------------------------------------------------------------------------
# Collaborator
# ---------------------------------------------------------------------------


class OpenAITranslator:
    """Translation capability backed by OpenAI chat completions."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._client: OpenAI | None = None

    def _get_client(self) -> OpenAI:
        if self._client is None:
            if not self.settings.openai_api_key:
                raise RuntimeError("OPENAI_API_KEY environment variable is not set.")
            self._client = OpenAI(api_key=self.settings.openai_api_key)
        return self._client

    def translate(
        self,
        direction: Direction,
        transcript: str,
        context: ContextWindow,
    ) -> TranslationFields:
        """
        Translate one transcript.

        Args:
            direction: Active direction.
            transcript: Accepted transcript text.
            context: Immutable snapshot of the direction's buffers.

        Returns:
            Parsed TranslationFields (possibly all empty).

        Raises:
            RuntimeError: If OPENAI_API_KEY is not configured.
            openai.OpenAIError: If the API call fails.
        """
        client = self._get_client()

        response = client.chat.completions.create(
            model=self.settings.translation_model,
            temperature=self.settings.temperature,
            messages=[
                {"role": "system", "content": system_prompt(direction)},
                {
                    "role": "user",
                    "content": build_user_prompt(direction, transcript, context),
                },
            ],
        )

        raw_content = ""
        if response.choices:
            raw_content = (response.choices[0].message.content or "").strip()

        logger.debug("OpenAI raw translation response: %s", raw_content)

        return parse_translation(raw_content)
