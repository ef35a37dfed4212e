"""
Детектор границ письменности (Script Run Detector).

Finds the boundaries where the effective script of the text changes. Only determinate
scripts (anything but Common, Inherited and Unknown) can open a new run; weak
codepoints always join the run they follow. A leading weak stretch adopts the first
determinate script found ahead of it, or the configured fallback when there is none.

The detector is a lazy iterator of ``ScriptRun(end, script)`` values: run ``k`` is
computed only when requested and each codepoint is classified exactly once.
"""

import logging
from typing import Final, Iterator, NamedTuple, Optional, Sequence

from runsegmenter.model.enums import DEFAULT_FALLBACK_SCRIPT, Script
from runsegmenter.unicode.classifier import CodepointClassifier

logger: Final = logging.getLogger(__name__)


class ScriptRun(NamedTuple):
    """A script run ending (exclusively) at ``end``; it starts where the previous one ended."""

    end: int
    script: Script


class ScriptRunDetector:
    """
    Iterator over the script runs of ``codepoints``.

    Args:
        codepoints: Decoded input.
        classifier: Source of ``script_of``.
        fallback_script: Script of the run when the input has no determinate script.

    Example:
        >>> detector = ScriptRunDetector([ord(c) for c in "ab.γδ"], UnicodeClassifier())
        >>> list(detector)
        [ScriptRun(end=3, script=<Script.LATIN: 'Latn'>), ScriptRun(end=5, script=<Script.GREEK: 'Grek'>)]
    """

    __slots__ = ("_codepoints", "_classifier", "_fallback", "_position", "_pending")

    def __init__(
        self,
        codepoints: Sequence[int],
        classifier: CodepointClassifier,
        fallback_script: Script = DEFAULT_FALLBACK_SCRIPT,
    ) -> None:
        self._codepoints = codepoints
        self._classifier = classifier
        self._fallback = fallback_script
        self._position = 0
        # Determinate script already read at ``_position`` (start of the next run)
        self._pending: Optional[Script] = None

    @property
    def position(self) -> int:
        """End of the last run returned."""
        return self._position

    def __iter__(self) -> Iterator[ScriptRun]:
        return self

    def __next__(self) -> ScriptRun:
        codepoints = self._codepoints
        length = len(codepoints)
        index = self._position
        if index >= length:
            raise StopIteration

        script_of = self._classifier.script_of
        current = self._pending
        self._pending = None

        if current is None:
            # Only the very first run can start on a weak codepoint: every later run
            # starts on the determinate codepoint that closed its predecessor.
            while index < length:
                script = script_of(codepoints[index])
                index += 1
                if script.is_determinate:
                    current = script
                    break
            if current is None:
                logger.debug("No determinate script in input, using %s", self._fallback.name)
                self._position = length
                return ScriptRun(length, self._fallback)
        else:
            index += 1

        while index < length:
            script = script_of(codepoints[index])
            if script.is_determinate and script is not current:
                self._pending = script
                break
            index += 1

        self._position = index
        return ScriptRun(index, current)


def resolve_scripts(
    codepoints: Sequence[int],
    classifier: CodepointClassifier,
    fallback_script: Script = DEFAULT_FALLBACK_SCRIPT,
) -> list[Script]:
    """Resolved script of every codepoint, expanded from the detected runs."""
    resolved: list[Script] = []
    start = 0
    for run in ScriptRunDetector(codepoints, classifier, fallback_script):
        resolved.extend([run.script] * (run.end - start))
        start = run.end
    return resolved


__all__ = [
    "ScriptRun",
    "ScriptRunDetector",
    "resolve_scripts",
]
