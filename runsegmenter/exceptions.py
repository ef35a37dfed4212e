# -*- coding: utf-8 -*-
"""
RU: Иерархия исключений сегментатора. Сам движок не имеет восстанавливаемых ошибок:
любая кодовая точка поглощается каким-либо сегментом. Исключения описывают только
ошибки использования (конфигурация, неверный тип входных данных, нарушение инвариантов
при проверке результатов).

EN: Exception hierarchy for the run segmenter. The engine itself has no recoverable
error states: every codepoint is absorbed into some segment. These exceptions cover
misuse only (configuration, non-codepoint input, invariant checks on results).

Guidelines:
- Exhaustion is not an error: ``consume`` returns False, iteration stops.
- Narrow subclasses also derive from the matching built-in (ValueError / TypeError)
  so callers that do not know this package can still handle them.
"""

from __future__ import annotations

from typing import Optional


class RunSegmenterError(Exception):
    """Base exception for all run-segmentation failures."""

    def __init__(self, message: str = "", *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.__cause__ = cause


class ConfigurationError(RunSegmenterError, ValueError):
    """Raised on invalid configuration values (e.g., unknown fallback script)."""


class InvalidInputError(RunSegmenterError, TypeError):
    """Raised when the input is not a str or a sequence of integer codepoints."""


class SegmentationInvariantError(RunSegmenterError, ValueError):
    """Raised when a segment or a segment sequence violates partition invariants."""


__all__ = [
    "RunSegmenterError",
    "ConfigurationError",
    "InvalidInputError",
    "SegmentationInvariantError",
]
