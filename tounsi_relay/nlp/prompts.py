"""
tounsi_relay/nlp/prompts.py
============================
Prompt Templates — Tounsi Relay

Per-direction texts sent to the two OpenAI collaborators:
    - Whisper language hint + domain prompt
    - Chat system role
    - Chat user prompt embedding the context window and the new transcript

The model is asked for a bare JSON object with exactly the four keys of
TranslationFields; keys that do not apply to a direction stay "".
"""

from dataclasses import dataclass

from tounsi_relay.nlp.context import ContextWindow
from tounsi_relay.schemas import Direction


@dataclass(frozen=True)
class SttHint:
    language: str
    prompt: str


_STT_HINTS: dict[Direction, SttHint] = {
    Direction.TN2DE: SttHint(
        language="ar",
        prompt=(
            "Tunesisch-Arabisch (Darija/Tounsi). Wenn nur Geräusch/Knacken/Hall "
            "oder unverständlich: gib leer zurück."
        ),
    ),
    Direction.DE2TN: SttHint(
        language="de",
        prompt=(
            "Deutsch (Umgangssprache). Wenn nur Geräusch/Knacken/Hall "
            "oder unverständlich: gib leer zurück."
        ),
    ),
}

_SYSTEM_PROMPTS: dict[Direction, str] = {
    Direction.TN2DE: (
        "Du bist ein präziser Live-Übersetzer für tunesische Darija ins Deutsche."
    ),
    Direction.DE2TN: (
        "Du bist ein präziser Live-Übersetzer von Deutsch nach tunesischer Darija."
    ),
}

_TASK_BLOCKS: dict[Direction, str] = {
    Direction.TN2DE: (
        "Aufgabe: Live-Übersetzung Tunesisch-Arabisch (Darija/Tounsi) -> Deutsch.\n"
        "\n"
        "Gib Output als reines JSON (ohne Markdown) mit keys:\n"
        "- source_latin  (Romanisierung der QUELLE)\n"
        "- target_de     (deutsche Übersetzung)\n"
        '- target_arabic ("" lassen)\n'
        '- target_latin  ("" lassen)\n'
        "\n"
        "Regeln:\n"
        '- Wenn der Text unklar/fragwürdig ist: alle Felder = "".\n'
        "- source_latin: gut lesbare Tounsi-Umschrift "
        "(z.B. chnowa, aalech, mouch, barcha).\n"
        "- target_de: kurz, natürlich, nutze Kontext."
    ),
    Direction.DE2TN: (
        "Aufgabe: Live-Übersetzung Deutsch -> Tunesische Darija (Tounsi).\n"
        "\n"
        "Gib Output als reines JSON (ohne Markdown) mit keys:\n"
        '- source_latin  ("" lassen)\n'
        "- target_arabic (Darija in arabischer Schrift, wenn möglich)\n"
        "- target_latin  (Romanisierung/Tounsi-Umschrift)\n"
        '- target_de     ("" lassen)\n'
        "\n"
        "Regeln:\n"
        '- Wenn der Text unklar/fragwürdig ist: alle Felder = "".\n'
        "- Natürlich, Alltagssprache in Tunesien.\n"
        "- Keine langen Erklärungen."
    ),
}


def stt_hint(direction: Direction) -> SttHint:
    return _STT_HINTS[direction]


def system_prompt(direction: Direction) -> str:
    return _SYSTEM_PROMPTS[direction]


def build_user_prompt(
    direction: Direction,
    transcript: str,
    context: ContextWindow,
) -> str:
    """
    Build the chat user message for one transcript.

    Args:
        direction: Active translation direction.
        transcript: Accepted, trimmed Whisper transcript.
        context: Snapshot of the direction's source/target buffers.

    Returns:
        Prompt text with task, output format, rules, both context
        sections and the new text.
    """
    return (
        f"{_TASK_BLOCKS[direction]}\n"
        "\n"
        "Kontext (Quelle, vorher):\n"
        f"{context.source}\n"
        "\n"
        "Kontext (Ziel, vorher):\n"
        f"{context.target}\n"
        "\n"
        "Neuer Text:\n"
        f"{transcript}"
    ).strip()
