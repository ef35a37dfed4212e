"""Data model of the run segmenter: enums and the Segment record."""

from runsegmenter.model.enums import EmojiProperty, RunPresentationStyle, Script
from runsegmenter.model.segment import Segment, check_segmentation

__all__ = [
    "EmojiProperty",
    "RunPresentationStyle",
    "Script",
    "Segment",
    "check_segmentation",
]
