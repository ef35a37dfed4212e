"""
Сегментатор прогонов (Run Segmenter): объединяет детекторы письменности и эмодзи.

Drives the script run detector and the emoji presentation detector in lockstep over
one input and emits the finest partition in which both the script and the
presentation style are constant.

The segmenter is a one-shot pull cursor: ``consume`` fills a caller-owned
``Segment`` and returns True, or returns False once the input is exhausted (and on
every call after that). The same cursor is exposed as a finite iterator.

Example:
    >>> segmenter = RunSegmenter("Abc.;?Xyz")
    >>> segment = Segment()
    >>> segmenter.consume(segment)
    True
    >>> segment
    Segment([0:9], script=Latin, style=TEXT)
    >>> segmenter.consume(segment)
    False
"""

import logging
from typing import Final, Iterator, Optional, Sequence, Union

from runsegmenter.app_context import get_app_context
from runsegmenter.config import SegmenterConfig
from runsegmenter.exceptions import InvalidInputError
from runsegmenter.model.enums import RunPresentationStyle, Script
from runsegmenter.model.segment import Segment
from runsegmenter.unicode.classifier import CodepointClassifier
from runsegmenter.unicode.emoji_runs import EmojiRun, EmojiRunDetector
from runsegmenter.unicode.script_runs import ScriptRun, ScriptRunDetector

logger: Final = logging.getLogger(__name__)

TextInput = Union[str, Sequence[int]]


def _as_codepoints(text: TextInput) -> tuple[int, ...]:
    if isinstance(text, str):
        return tuple(map(ord, text))
    if isinstance(text, (bytes, bytearray, memoryview)):
        raise InvalidInputError(
            "RunSegmenter expects decoded text (str or codepoints), got bytes; decode it first"
        )
    try:
        codepoints = tuple(text)
    except TypeError as exc:
        raise InvalidInputError(
            f"RunSegmenter expects str or a sequence of int, got {type(text).__name__}",
            cause=exc,
        ) from exc
    for position, codepoint in enumerate(codepoints):
        if not isinstance(codepoint, int) or isinstance(codepoint, bool):
            raise InvalidInputError(
                f"Codepoint at index {position} must be int, got {type(codepoint).__name__}"
            )
    return codepoints


class RunSegmenter:
    """
    Segments one input into runs of uniform script and presentation style.

    Args:
        text: Decoded input, a ``str`` or a sequence of integer codepoints. Integers
            that are not Unicode scalar values are accepted and classified as
            ``Script.UNKNOWN`` without emoji properties.
        classifier: Codepoint classifier; defaults to the shared classifier of the
            application context.
        config: Segmentation settings; defaults to the application context config.

    Raises:
        InvalidInputError: If ``text`` is not a str or a sequence of int.

    Instances are not thread-safe and cannot be rewound; build one per text.
    """

    __slots__ = (
        "_codepoints",
        "_position",
        "_scripts",
        "_emoji",
        "_script_run",
        "_emoji_run",
    )

    def __init__(
        self,
        text: TextInput,
        classifier: Optional[CodepointClassifier] = None,
        config: Optional[SegmenterConfig] = None,
    ) -> None:
        self._codepoints = _as_codepoints(text)
        if classifier is None or config is None:
            context = get_app_context()
            classifier = classifier if classifier is not None else context.classifier
            config = config if config is not None else context.config

        self._position = 0
        self._scripts = ScriptRunDetector(self._codepoints, classifier, config.fallback_script)
        self._emoji = EmojiRunDetector(self._codepoints, classifier)
        self._script_run: Optional[ScriptRun] = None
        self._emoji_run: Optional[EmojiRun] = None
        logger.debug("RunSegmenter created for %d codepoints", len(self._codepoints))

    @property
    def position(self) -> int:
        """Index where the next segment starts."""
        return self._position

    @property
    def text_length(self) -> int:
        return len(self._codepoints)

    @property
    def exhausted(self) -> bool:
        return self._position >= len(self._codepoints)

    def consume(self, segment: Segment) -> bool:
        """
        Advance to the next segment.

        Args:
            segment: Output record, overwritten in place on success.

        Returns:
            True if a segment was produced; False when the input is exhausted, in which
            case ``segment`` is left untouched. Exhaustion is permanent.
        """
        if self.exhausted:
            return False

        # Refresh whichever detector run the cursor has moved past
        if self._script_run is None or self._script_run.end <= self._position:
            self._script_run = next(self._scripts)
        if self._emoji_run is None or self._emoji_run.end <= self._position:
            self._emoji_run = next(self._emoji)

        end = min(self._script_run.end, self._emoji_run.end)
        segment.start = self._position
        segment.end = end
        segment.script = self._script_run.script
        segment.presentation_style = self._emoji_run.presentation_style

        self._position = end
        if self.exhausted:
            logger.debug("RunSegmenter exhausted at %d", end)
        return True

    def next_segment(self) -> Optional[Segment]:
        """Return the next segment as a new object, or None when exhausted."""
        segment = Segment()
        return segment if self.consume(segment) else None

    def __iter__(self) -> Iterator[Segment]:
        return self

    def __next__(self) -> Segment:
        segment = self.next_segment()
        if segment is None:
            raise StopIteration
        return segment

    def __repr__(self) -> str:
        return f"RunSegmenter(position={self._position}, length={len(self._codepoints)})"


def segment_text(
    text: TextInput,
    classifier: Optional[CodepointClassifier] = None,
    config: Optional[SegmenterConfig] = None,
) -> list[Segment]:
    """Segment ``text`` completely and return all segments in order."""
    return list(RunSegmenter(text, classifier, config))


def segment_runs(
    text: str,
    classifier: Optional[CodepointClassifier] = None,
    config: Optional[SegmenterConfig] = None,
) -> Iterator[tuple[str, Script, RunPresentationStyle]]:
    """Lazily yield ``(substring, script, presentation_style)`` for each segment of ``text``."""
    for segment in RunSegmenter(text, classifier, config):
        yield segment.text_of(text), segment.script, segment.presentation_style


__all__ = [
    "RunSegmenter",
    "TextInput",
    "segment_text",
    "segment_runs",
]
