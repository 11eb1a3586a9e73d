"""
tounsi_relay/nlp/context.py
============================
Conversation Context — Tounsi Relay

Responsibility:
    - Keep a bounded rolling window of recent utterances per direction
      and per role (source / target) — four independent buffers
    - Hand out immutable snapshots for prompt building
    - Record accepted translations

Buffers are trimmed from the front at an arbitrary character boundary,
so the oldest word or line may be cut in half.

The store is owned by one RelayService instance. There is no locking;
concurrent requests on the same direction may interleave their updates.

This module does NOT:
    - Format prompts (see prompts.py)
    - Persist anything across process restarts
"""

import logging
from dataclasses import dataclass

from tounsi_relay.config import DEFAULT_CONTEXT_MAX_CHARS
from tounsi_relay.schemas import Direction, TranslationFields

logger = logging.getLogger("tounsi_relay.nlp.context")

TARGET_JOINER = " / "


# ---------------------------------------------------------------------------
# Accumulator
# ---------------------------------------------------------------------------


def append_context(buffer: str, addition: str, cap: int) -> str:
    """
    Append ``addition`` to ``buffer`` on a new line and keep the newest
    ``cap`` characters.

    An empty ``addition`` returns ``buffer`` unchanged.
    """
    if not addition:
        return buffer

    combined = f"{buffer}\n{addition}".strip()
    if len(combined) > cap:
        return combined[len(combined) - cap:]
    return combined


def target_text_for(direction: Direction, fields: TranslationFields) -> str:
    """
    Return the text recorded in the target buffer for one translation.

    tn2de: the German translation.
    de2tn: Arabic script and romanization joined by " / " (empty parts
    skipped).
    """
    if direction is Direction.TN2DE:
        return fields.target_de
    return TARGET_JOINER.join(
        part for part in (fields.target_arabic, fields.target_latin) if part
    )


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ContextWindow:
    """Snapshot of one direction's buffers."""

    source: str = ""
    target: str = ""


class ConversationContext:
    """Per-direction source/target buffers for one service instance."""

    def __init__(self, max_chars: int = DEFAULT_CONTEXT_MAX_CHARS) -> None:
        if max_chars <= 0:
            raise ValueError(f"max_chars must be positive, got {max_chars}")
        self.max_chars = max_chars
        self._windows: dict[Direction, ContextWindow] = {
            direction: ContextWindow() for direction in Direction
        }

    def window(self, direction: Direction) -> ContextWindow:
        return self._windows[direction]

    def record(
        self,
        direction: Direction,
        source_text: str,
        target_text: str,
    ) -> ContextWindow:
        """
        Add one exchange to ``direction``'s buffers.

        The source buffer is always updated; the target buffer only when
        ``target_text`` is non-empty. The other direction is never touched.
        """
        current = self._windows[direction]
        updated = ContextWindow(
            source=append_context(current.source, source_text, self.max_chars),
            target=append_context(current.target, target_text, self.max_chars),
        )
        self._windows[direction] = updated

        logger.debug(
            "Context %s updated: source=%d chars, target=%d chars",
            direction.value,
            len(updated.source),
            len(updated.target),
        )
        return updated

    def record_translation(
        self,
        direction: Direction,
        transcript: str,
        fields: TranslationFields,
    ) -> ContextWindow:
        return self.record(direction, transcript, target_text_for(direction, fields))
