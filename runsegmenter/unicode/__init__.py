"""Codepoint classification and the two run detectors (script, emoji presentation)."""

from runsegmenter.unicode.classifier import (
    CodepointClassifier,
    TableClassifier,
    UnicodeClassifier,
)
from runsegmenter.unicode.emoji_runs import EmojiRun, EmojiRunDetector, EmojiState, transition
from runsegmenter.unicode.script_runs import ScriptRun, ScriptRunDetector

__all__ = [
    "CodepointClassifier",
    "TableClassifier",
    "UnicodeClassifier",
    "EmojiRun",
    "EmojiRunDetector",
    "EmojiState",
    "transition",
    "ScriptRun",
    "ScriptRunDetector",
]
