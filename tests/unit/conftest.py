"""
Shared fixtures: the real UCD-backed classifier and a small synthetic table.

The synthetic table keeps detector tests independent of the Unicode version shipped
with fontTools/regex.
"""

from typing import Iterator

import pytest

from runsegmenter.app_context import reset_app_context
from runsegmenter.config import FALLBACK_SCRIPT_ENV
from runsegmenter.model.enums import EmojiProperty, Script
from runsegmenter.unicode.classifier import TableClassifier, UnicodeClassifier

EMOJI = EmojiProperty.EMOJI | EmojiProperty.EMOJI_PRESENTATION
TEXT_EMOJI = EmojiProperty.EMOJI | EmojiProperty.TEXT_PRESENTATION

# Synthetic codepoints (real characters, synthetic classification)
GRINNING = 0x1F600  # emoji presentation
WOMAN = 0x1F469  # emoji presentation, modifier base
GIRL = 0x1F467
HEART = 0x2764  # text presentation
ORTHODOX_CROSS = 0x2626  # text presentation
BOUNCING_BALL = 0x26F9  # text presentation, modifier base
SKIN_TONE = 0x1F3FB
BLACK_FLAG = 0x1F3F4

SYNTHETIC_SCRIPTS = {
    **{ord(c): Script.LATIN for c in "abcdefghijklmnopqrstuvwxyz"},
    **{ord(c): Script.GREEK for c in "αβγδ"},
    **{ord(c): Script.ARABIC for c in "نص"},
    **{ord(c): Script.COMMON for c in " .,;?!+0123456789#*"},
    0x0301: Script.INHERITED,
}

SYNTHETIC_EMOJI = {
    GRINNING: EMOJI,
    GIRL: EMOJI,
    WOMAN: EMOJI | EmojiProperty.MODIFIER_BASE,
    HEART: TEXT_EMOJI,
    ORTHODOX_CROSS: TEXT_EMOJI,
    BOUNCING_BALL: TEXT_EMOJI | EmojiProperty.MODIFIER_BASE,
    SKIN_TONE: EMOJI | EmojiProperty.MODIFIER,
    BLACK_FLAG: EMOJI,
    **{ord(c): TEXT_EMOJI for c in "0123456789#*"},
}


@pytest.fixture(scope="session")
def ucd_classifier() -> UnicodeClassifier:
    return UnicodeClassifier()


@pytest.fixture(scope="session")
def synthetic_classifier() -> TableClassifier:
    return TableClassifier(SYNTHETIC_SCRIPTS, SYNTHETIC_EMOJI)


@pytest.fixture(autouse=True)
def isolated_context(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Every test starts with a fresh global context and no environment overrides."""
    monkeypatch.delenv(FALLBACK_SCRIPT_ENV, raising=False)
    reset_app_context()
    yield
    reset_app_context()
