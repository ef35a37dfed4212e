"""
Классификатор кодовых точек: письменность и эмодзи-свойства.

Defines the ``CodepointClassifier`` protocol consumed by both run detectors and two
implementations:

- ``UnicodeClassifier``: backed by the Unicode Character Database shipped with
  ``fontTools.unicodedata`` (Scripts.txt) and the ``regex`` module (emoji-data.txt
  binary properties).
- ``TableClassifier``: backed by explicit mappings, for synthetic test tables or for
  overriding individual codepoints.

Classification results never change for a given instance: build one classifier, then
share it between any number of ``RunSegmenter`` instances.

Example:
    >>> classifier = UnicodeClassifier()
    >>> classifier.script_of(ord("A"))
    <Script.LATIN: 'Latn'>
    >>> EmojiProperty.EMOJI_PRESENTATION in classifier.emoji_properties_of(0x1F600)
    True
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Final, Mapping, Optional, Protocol, runtime_checkable

import regex
from fontTools import unicodedata as ucd

from runsegmenter.exceptions import ConfigurationError
from runsegmenter.model.enums import EmojiProperty, Script

logger: Final = logging.getLogger(__name__)

# ==============================================================================
# FIXED SEQUENCE CODEPOINTS (UTS #51)
# ==============================================================================

MAX_CODEPOINT: Final[int] = 0x10FFFF

ZERO_WIDTH_JOINER: Final[int] = 0x200D
VARIATION_SELECTOR_TEXT: Final[int] = 0xFE0E
VARIATION_SELECTOR_EMOJI: Final[int] = 0xFE0F
COMBINING_ENCLOSING_KEYCAP: Final[int] = 0x20E3
COMBINING_ENCLOSING_CIRCLE_BACKSLASH: Final[int] = 0x20E0
REGIONAL_INDICATOR_FIRST: Final[int] = 0x1F1E6
REGIONAL_INDICATOR_LAST: Final[int] = 0x1F1FF
TAG_FIRST: Final[int] = 0xE0020
TAG_LAST: Final[int] = 0xE007E
CANCEL_TAG: Final[int] = 0xE007F
KEYCAP_BASES: Final[frozenset[int]] = frozenset(map(ord, "#*0123456789"))


def structural_properties(codepoint: int) -> EmojiProperty:
    """
    Flags for codepoints whose emoji role is fixed by UTS #51 rather than by data
    tables: joiner, variation selectors, regional indicators, tags and keycaps.
    """
    if codepoint == ZERO_WIDTH_JOINER:
        return EmojiProperty.ZERO_WIDTH_JOINER
    if codepoint == VARIATION_SELECTOR_EMOJI:
        return EmojiProperty.VARIATION_SELECTOR_EMOJI
    if codepoint == VARIATION_SELECTOR_TEXT:
        return EmojiProperty.VARIATION_SELECTOR_TEXT
    if codepoint in (COMBINING_ENCLOSING_KEYCAP, COMBINING_ENCLOSING_CIRCLE_BACKSLASH):
        return EmojiProperty.ENCLOSING_KEYCAP
    if REGIONAL_INDICATOR_FIRST <= codepoint <= REGIONAL_INDICATOR_LAST:
        return EmojiProperty.REGIONAL_INDICATOR
    if TAG_FIRST <= codepoint <= TAG_LAST:
        return EmojiProperty.TAG_CHARACTER
    if codepoint == CANCEL_TAG:
        return EmojiProperty.TAG_CANCEL
    if codepoint in KEYCAP_BASES:
        return EmojiProperty.KEYCAP_BASE
    return EmojiProperty.NONE


def is_valid_codepoint(codepoint: int) -> bool:
    """True for Unicode scalar values: [0, 0x10FFFF] without the surrogate block."""
    return 0 <= codepoint <= MAX_CODEPOINT and not 0xD800 <= codepoint <= 0xDFFF


# ==============================================================================
# PROTOCOL
# ==============================================================================


@runtime_checkable
class CodepointClassifier(Protocol):
    """
    Протокол классификатора кодовых точек.

    Both methods must be pure and deterministic, and must never raise for an
    integer argument: codepoints outside the tables (unassigned, surrogates, out of
    range) classify as ``Script.UNKNOWN`` with ``EmojiProperty.NONE``.
    """

    def script_of(self, codepoint: int) -> Script:
        ...

    def emoji_properties_of(self, codepoint: int) -> EmojiProperty:
        ...


# ==============================================================================
# UCD-BACKED CLASSIFIER
# ==============================================================================

_EMOJI: Final = regex.compile(r"\p{Emoji}")
_EMOJI_PRESENTATION: Final = regex.compile(r"\p{Emoji_Presentation}")
_EMOJI_MODIFIER: Final = regex.compile(r"\p{Emoji_Modifier}")
_EMOJI_MODIFIER_BASE: Final = regex.compile(r"\p{Emoji_Modifier_Base}")


class UnicodeClassifier:
    """
    Classifier over the Unicode Character Database snapshots bundled with
    ``fontTools`` (scripts) and ``regex`` (emoji properties).

    Results are memoized per instance; the cache only grows with distinct
    codepoints seen, which for real text stays small.
    """

    __slots__ = ("_scripts", "_emoji")

    def __init__(self) -> None:
        self._scripts: dict[int, Script] = {}
        self._emoji: dict[int, EmojiProperty] = {}

    def script_of(self, codepoint: int) -> Script:
        script = self._scripts.get(codepoint)
        if script is None:
            if is_valid_codepoint(codepoint):
                script = Script.from_code(ucd.script(chr(codepoint)))
            else:
                script = Script.UNKNOWN
            self._scripts[codepoint] = script
        return script

    def emoji_properties_of(self, codepoint: int) -> EmojiProperty:
        properties = self._emoji.get(codepoint)
        if properties is None:
            properties = self._lookup_emoji(codepoint)
            self._emoji[codepoint] = properties
        return properties

    @staticmethod
    def _lookup_emoji(codepoint: int) -> EmojiProperty:
        if not is_valid_codepoint(codepoint):
            return EmojiProperty.NONE

        char = chr(codepoint)
        properties = structural_properties(codepoint)
        if _EMOJI.match(char):
            properties |= EmojiProperty.EMOJI
            if _EMOJI_PRESENTATION.match(char):
                properties |= EmojiProperty.EMOJI_PRESENTATION
            else:
                properties |= EmojiProperty.TEXT_PRESENTATION
            if _EMOJI_MODIFIER_BASE.match(char):
                properties |= EmojiProperty.MODIFIER_BASE
            if _EMOJI_MODIFIER.match(char):
                properties |= EmojiProperty.MODIFIER
        return properties

    def __repr__(self) -> str:
        return f"UnicodeClassifier(cached={len(self._scripts) + len(self._emoji)})"


# ==============================================================================
# TABLE-BACKED CLASSIFIER
# ==============================================================================


class TableClassifier:
    """
    Classifier over explicit ``codepoint -> value`` tables.

    Codepoints missing from ``scripts`` resolve through ``fallback`` when one is
    given, otherwise to ``Script.UNKNOWN``; the same holds for ``emoji``, except
    that the structural UTS #51 codepoints (joiner, selectors, regional indicators,
    tags, keycaps) are always recognised unless ``structural=False``.

    Example:
        >>> classifier = TableClassifier(scripts={ord("a"): Script.LATIN})
        >>> classifier.script_of(ord("a")), classifier.script_of(ord("b"))
        (<Script.LATIN: 'Latn'>, <Script.UNKNOWN: 'Zzzz'>)
    """

    __slots__ = ("_scripts", "_emoji", "_fallback", "_structural")

    def __init__(
        self,
        scripts: Optional[Mapping[int, Script]] = None,
        emoji: Optional[Mapping[int, EmojiProperty]] = None,
        *,
        fallback: Optional[CodepointClassifier] = None,
        structural: bool = True,
    ) -> None:
        self._scripts: Mapping[int, Script] = MappingProxyType(dict(scripts or {}))
        self._emoji: Mapping[int, EmojiProperty] = MappingProxyType(dict(emoji or {}))
        self._fallback = fallback
        self._structural = structural

    @classmethod
    def from_ranges(
        cls,
        script_ranges: Mapping[tuple[int, int], Script],
        emoji: Optional[Mapping[int, EmojiProperty]] = None,
        **kwargs: object,
    ) -> "TableClassifier":
        """Expand inclusive ``(first, last)`` script ranges into a table."""
        scripts: dict[int, Script] = {}
        for (first, last), script in script_ranges.items():
            if first > last:
                raise ConfigurationError(f"Empty range {first:#x}..{last:#x}")
            for codepoint in range(first, last + 1):
                scripts[codepoint] = script
        return cls(scripts, emoji, **kwargs)  # type: ignore[arg-type]

    def script_of(self, codepoint: int) -> Script:
        script = self._scripts.get(codepoint)
        if script is not None:
            return script
        if self._fallback is not None:
            return self._fallback.script_of(codepoint)
        return Script.UNKNOWN

    def emoji_properties_of(self, codepoint: int) -> EmojiProperty:
        properties = self._emoji.get(codepoint)
        if properties is None:
            if self._fallback is not None:
                return self._fallback.emoji_properties_of(codepoint)
            properties = EmojiProperty.NONE
        if self._structural and is_valid_codepoint(codepoint):
            properties |= structural_properties(codepoint)
        return properties

    def __repr__(self) -> str:
        return f"TableClassifier(scripts={len(self._scripts)}, emoji={len(self._emoji)})"


__all__ = [
    "CodepointClassifier",
    "UnicodeClassifier",
    "TableClassifier",
    "structural_properties",
    "is_valid_codepoint",
    "MAX_CODEPOINT",
    "ZERO_WIDTH_JOINER",
    "VARIATION_SELECTOR_TEXT",
    "VARIATION_SELECTOR_EMOJI",
    "COMBINING_ENCLOSING_KEYCAP",
    "COMBINING_ENCLOSING_CIRCLE_BACKSLASH",
    "REGIONAL_INDICATOR_FIRST",
    "REGIONAL_INDICATOR_LAST",
    "TAG_FIRST",
    "TAG_LAST",
    "CANCEL_TAG",
    "KEYCAP_BASES",
]
