"""
Пакет runsegmenter
==================

Run segmentation for text shaping: splits decoded Unicode text into maximal runs that
share one script and one presentation style (text glyphs vs. color emoji).

Этот пакет предоставляет:
    - Детектор границ письменности с наследованием для слабых символов
      (Common, Inherited, Unknown)
    - Конечный автомат для эмодзи-последовательностей (ZWJ, модификаторы тона кожи,
      флаги, теговые последовательности, keycap)
    - Последовательный курсор RunSegmenter.consume() и ленивый итератор сегментов
    - Классификатор на данных UCD (fontTools + regex) и табличный классификатор для тестов

Пример базового использования:
    >>> from runsegmenter import RunSegmenter, Segment, get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> segmenter = RunSegmenter("نص키스의")
    >>> segment = Segment()
    >>> while segmenter.consume(segment):
    ...     logger.info("run %s", segment)

Управление конфигурацией:
    >>> import os
    >>> os.environ['RUNSEGMENTER_LOG_LEVEL'] = 'DEBUG'
    >>> os.environ['RUNSEGMENTER_FALLBACK_SCRIPT'] = 'Latin'
    >>>
    >>> from runsegmenter import load_config
    >>> load_config().fallback_script
    <Script.LATIN: 'Latn'>

Лицензия: MIT
Python: 3.10+
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "runsegmenter developers"
__description__ = "Script and emoji presentation run segmentation for text shaping"
__license__ = "MIT"
__python_requires__ = ">=3.10"

# Компоненты семантической версии
VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

LOG_LEVEL_ENV = "RUNSEGMENTER_LOG_LEVEL"
LOG_FILE_ENV = "RUNSEGMENTER_LOG_FILE"

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Настраивает логгер пакета ``runsegmenter`` с:
    - Консольным обработчиком (stderr) для WARNING и выше
    - Ротирующим файловым обработчиком, если задана переменная RUNSEGMENTER_LOG_FILE
    - Форматом с временной меткой, уровнем, модулем и сообщением

    Уровень логирования задаётся переменной окружения RUNSEGMENTER_LOG_LEVEL
    (DEBUG, INFO, WARNING, ERROR, CRITICAL). Функция идемпотентна.
    """
    log_level_str = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    # Не дублируем конфигурацию при повторном вызове
    package_logger = logging.getLogger("runsegmenter")
    if package_logger.handlers:
        return

    package_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt=("[%(asctime)s] %(levelname)-8s " "[%(name)s.%(funcName)s:%(lineno)d] %(message)s"),
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Консольный обработчик (stderr) - WARNING и выше
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    # Файловый обработчик (ротирующий) - все уровни, только по запросу
    log_file = os.environ.get(LOG_FILE_ENV)
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_path,
                maxBytes=10 * 1024 * 1024,  # 10 МБ
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
        except OSError as e:
            package_logger.warning(
                f"Cannot initialise file logging: {e}. Logging to console only."
            )

    package_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер для указанного модуля в пространстве имён ``runsegmenter``.

    Аргументы:
        module_name: Имя модуля, обычно ``__name__``.

    Возвращает:
        Экземпляр logging.Logger с именем ``runsegmenter.<module_name>``; для
        ``__main__`` используется ``runsegmenter.main``.

    Пример:
        >>> logger = get_logger("my_pipeline")
        >>> logger.name
        'runsegmenter.my_pipeline'
    """
    if module_name == "runsegmenter" or module_name.startswith("runsegmenter."):
        return logging.getLogger(module_name)
    if module_name == "__main__":
        return logging.getLogger("runsegmenter.main")
    clean_name = module_name.lstrip(".")
    return logging.getLogger(f"runsegmenter.{clean_name}")


# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================

# Примечание: импорты размещены после утилит логирования, чтобы логирование
# было настроено первым.

from runsegmenter.app_context import SegmenterContext, get_app_context, reset_app_context
from runsegmenter.config import DEFAULT_CONFIG, SegmenterConfig, load_config
from runsegmenter.exceptions import (
    ConfigurationError,
    InvalidInputError,
    RunSegmenterError,
    SegmentationInvariantError,
)
from runsegmenter.model.enums import EmojiProperty, RunPresentationStyle, Script
from runsegmenter.model.segment import Segment, check_segmentation
from runsegmenter.segmenter import RunSegmenter, segment_runs, segment_text
from runsegmenter.unicode.classifier import (
    CodepointClassifier,
    TableClassifier,
    UnicodeClassifier,
)

__all__ = [
    # Метаданные версии
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Утилиты
    "get_logger",
    "load_config",
    # Движок
    "RunSegmenter",
    "segment_text",
    "segment_runs",
    # Модель
    "Segment",
    "check_segmentation",
    "Script",
    "RunPresentationStyle",
    "EmojiProperty",
    # Классификаторы
    "CodepointClassifier",
    "UnicodeClassifier",
    "TableClassifier",
    # Конфигурация и контекст
    "SegmenterConfig",
    "DEFAULT_CONFIG",
    "SegmenterContext",
    "get_app_context",
    "reset_app_context",
    # Исключения
    "RunSegmenterError",
    "ConfigurationError",
    "InvalidInputError",
    "SegmentationInvariantError",
]

# =============================================================================
# ИНИЦИАЛИЗАЦИЯ ПАКЕТА
# =============================================================================

_setup_logging()

_logger = get_logger(__name__)
_logger.debug(f"runsegmenter v{__version__} initialised")
