# tounsi_relay/schemas/__init__.py
# =================================
# Data Types — Tounsi Relay
#
# Responsibility:
#   - Direction enum (the two supported language pairs)
#   - TranslationFields: the four-field record returned by the translator
#   - RelayResult: tagged union of Ignored | Translated
#   - Rendering of both variants to the locked response shape:
#       {direction, ignored, source_text, source_latin,
#        target_de, target_arabic, target_latin}

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


# ---------------------------------------------------------------------------
# Direction
# ---------------------------------------------------------------------------


class InvalidDirectionError(ValueError):
    """Raised when a request carries an unknown direction value."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Unknown direction: {value!r}")


class Direction(str, Enum):
    """Supported translation directions (wire values)."""

    TN2DE = "tn2de"  # Tunisian Darija -> German
    DE2TN = "de2tn"  # German -> Tunisian Darija

    @classmethod
    def parse(cls, value: Any) -> "Direction":
        """
        Resolve a raw form value to a Direction.

        Raises:
            InvalidDirectionError: If the value is not a known wire value.
        """
        text = "" if value is None else str(value)
        if text not in _VALID_DIRECTIONS:
            raise InvalidDirectionError(value)
        return cls(text)


DEFAULT_DIRECTION = Direction.TN2DE

_VALID_DIRECTIONS: set[str] = {member.value for member in Direction}


# ---------------------------------------------------------------------------
# Translation fields
# ---------------------------------------------------------------------------

FIELD_NAMES: tuple[str, ...] = (
    "source_latin",
    "target_de",
    "target_arabic",
    "target_latin",
)


@dataclass(frozen=True)
class TranslationFields:
    """Structured translator output. Every field may be empty."""

    source_latin: str = ""
    target_de: str = ""
    target_arabic: str = ""
    target_latin: str = ""

    def is_empty(self) -> bool:
        """True when no field carries any non-whitespace content."""
        return not "".join(
            getattr(self, name) for name in FIELD_NAMES
        ).strip()

    def as_dict(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in FIELD_NAMES}


EMPTY_FIELDS = TranslationFields()


# ---------------------------------------------------------------------------
# Relay result (tagged union)
# ---------------------------------------------------------------------------


class IgnoreReason(str, Enum):
    """Why a request produced no translation. Logged, never returned."""

    EMPTY_TRANSCRIPT = "empty_transcript"
    NOISE = "noise"
    TOO_SHORT = "too_short"
    EMPTY_TRANSLATION = "empty_translation"


@dataclass(frozen=True)
class Ignored:
    """Transcript or translation deemed unusable; payload is empty."""

    direction: Direction
    reason: IgnoreReason

    ignored: bool = field(default=True, init=False)

    def to_response(self) -> dict[str, Any]:
        return {
            "direction": self.direction.value,
            "ignored": True,
            "source_text": "",
            **EMPTY_FIELDS.as_dict(),
        }


@dataclass(frozen=True)
class Translated:
    """Accepted transcript with at least one populated translation field."""

    direction: Direction
    source_text: str
    fields: TranslationFields

    ignored: bool = field(default=False, init=False)

    def to_response(self) -> dict[str, Any]:
        return {
            "direction": self.direction.value,
            "ignored": False,
            "source_text": self.source_text,
            **self.fields.as_dict(),
        }


RelayResult = Union[Ignored, Translated]


__all__ = [
    "DEFAULT_DIRECTION",
    "Direction",
    "EMPTY_FIELDS",
    "FIELD_NAMES",
    "IgnoreReason",
    "Ignored",
    "InvalidDirectionError",
    "RelayResult",
    "TranslationFields",
    "Translated",
]
