"""
Модель сегмента (Segment): максимальный участок текста с единой письменностью и стилем.

Segment model representing one maximal run of codepoints that share a Unicode script
and a presentation style. Segments are produced one at a time by the run segmenter;
the helpers here validate, slice, copy and serialize them.

Module: runsegmenter/model/segment.py
Project: runsegmenter
"""

import logging
from dataclasses import dataclass
from typing import Any, Final, Iterable, Optional, Sequence, Union

from runsegmenter.exceptions import SegmentationInvariantError
from runsegmenter.model.enums import (
    DEFAULT_PRESENTATION_STYLE,
    DEFAULT_SCRIPT,
    RunPresentationStyle,
    Script,
)

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=False, slots=True)
class Segment:
    """
    Represents a contiguous range ``[start, end)`` of codepoints with uniform script
    and presentation style.

    Segments are mutable so a caller can keep one instance and let
    ``RunSegmenter.consume`` overwrite it on every advance. A freshly constructed
    Segment is the empty placeholder ``[0, 0)`` with ``Script.UNKNOWN`` / ``TEXT``.

    Attributes:
        start: Index of the first codepoint (inclusive).
        end: Index one past the last codepoint (exclusive).
        script: Resolved script of the whole range.
        presentation_style: Text or emoji presentation of the whole range.

    Example:
        >>> segment = Segment(0, 3, Script.LATIN, RunPresentationStyle.TEXT)
        >>> segment.text_of("abc!")
        'abc'
        >>> len(segment)
        3
    """

    start: int = 0
    end: int = 0
    script: Script = DEFAULT_SCRIPT
    presentation_style: RunPresentationStyle = DEFAULT_PRESENTATION_STYLE

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_emoji(self) -> bool:
        return self.presentation_style is RunPresentationStyle.EMOJI

    def validate(self, text_length: Optional[int] = None) -> None:
        """
        Validate an emitted segment.

        Args:
            text_length: Length of the segmented input; when given, ``end`` must not exceed it.

        Raises:
            SegmentationInvariantError: If the range is empty, negative or out of bounds.
            TypeError: If script or presentation style have incorrect types.
        """
        if not isinstance(self.script, Script):
            raise TypeError(f"script must be Script, got {type(self.script).__name__}")
        if not isinstance(self.presentation_style, RunPresentationStyle):
            raise TypeError(
                "presentation_style must be RunPresentationStyle, "
                f"got {type(self.presentation_style).__name__}"
            )
        if not (0 <= self.start < self.end):
            raise SegmentationInvariantError(
                f"Invalid segment range [{self.start}:{self.end}]"
            )
        if text_length is not None and self.end > text_length:
            raise SegmentationInvariantError(
                f"Segment [{self.start}:{self.end}] exceeds text length {text_length}"
            )

    def text_of(self, text: Union[str, Sequence[int]]) -> str:
        """Return the slice of ``text`` covered by this segment as a string."""
        part = text[self.start : self.end]
        if isinstance(part, str):
            return part
        return "".join(chr(cp) for cp in part)

    def assign(self, other: "Segment") -> None:
        """Overwrite all fields in place with those of ``other``."""
        self.start = other.start
        self.end = other.end
        self.script = other.script
        self.presentation_style = other.presentation_style

    def copy(self) -> "Segment":
        return Segment(self.start, self.end, self.script, self.presentation_style)

    def same_attributes(self, other: "Segment") -> bool:
        """True when both segments carry the same script and presentation style."""
        return (
            self.script is other.script and self.presentation_style is other.presentation_style
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start,
            "end": self.end,
            "script": self.script.value,
            "presentation_style": self.presentation_style.value,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Segment":
        """
        Build a Segment from ``to_dict`` output.

        Unknown script codes become ``Script.UNKNOWN``; a missing presentation style
        defaults to text.
        """
        return Segment(
            start=int(data.get("start", 0)),
            end=int(data.get("end", 0)),
            script=Script.from_code(str(data.get("script", DEFAULT_SCRIPT.value))),
            presentation_style=RunPresentationStyle(
                data.get("presentation_style", DEFAULT_PRESENTATION_STYLE.value)
            ),
        )

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return (
            f"Segment([{self.start}:{self.end}], script={self.script.long_name}, "
            f"style={self.presentation_style.name})"
        )


def check_segmentation(segments: Iterable[Segment], text_length: int) -> int:
    """
    Verify that ``segments`` form a gapless, non-overlapping, maximal partition.

    Args:
        segments: Segments in emission order.
        text_length: Length of the segmented input.

    Returns:
        The number of segments checked.

    Raises:
        SegmentationInvariantError: On the first violated invariant.
    """
    position = 0
    previous: Optional[Segment] = None
    count = 0

    for segment in segments:
        segment.validate(text_length)
        if segment.start != position:
            raise SegmentationInvariantError(
                f"Segment {count} starts at {segment.start}, expected {position}"
            )
        if previous is not None and previous.same_attributes(segment):
            raise SegmentationInvariantError(
                f"Segments {count - 1} and {count} share script and presentation style"
            )
        position = segment.end
        previous = segment
        count += 1

    if position != text_length:
        raise SegmentationInvariantError(
            f"Segments cover [0:{position}] but text length is {text_length}"
        )

    logger.debug(f"Checked {count} segments over {text_length} codepoints")
    return count


__all__ = [
    "Segment",
    "check_segmentation",
]
