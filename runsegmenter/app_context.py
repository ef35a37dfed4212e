from typing import Optional
import threading

from runsegmenter.config import SegmenterConfig, load_config
from runsegmenter.unicode.classifier import CodepointClassifier, UnicodeClassifier


class SegmenterContext:
    """
    Shared defaults for run segmentation (singleton).
    Holds the process-wide codepoint classifier and configuration used by every
    RunSegmenter that is not given its own.
    """

    def __init__(
        self,
        classifier: Optional[CodepointClassifier] = None,
        config: Optional[SegmenterConfig] = None,
    ) -> None:
        # Classification tables are built once and shared by reference
        self.classifier: CodepointClassifier = (
            classifier if classifier is not None else UnicodeClassifier()
        )
        self.config: SegmenterConfig = config if config is not None else load_config()

    def replace_classifier(self, classifier: CodepointClassifier) -> None:
        """Swap the shared classifier (e.g. for synthetic tables in tests)."""
        if not isinstance(classifier, CodepointClassifier):
            raise TypeError("classifier must implement script_of and emoji_properties_of")
        self.classifier = classifier

    def replace_config(self, config: SegmenterConfig) -> None:
        if not isinstance(config, SegmenterConfig):
            raise TypeError("config must be SegmenterConfig")
        self.config = config


_ctx: Optional[SegmenterContext] = None
_ctx_lock = threading.Lock()


def get_app_context(
    classifier: Optional[CodepointClassifier] = None,
    config: Optional[SegmenterConfig] = None,
) -> SegmenterContext:
    """
    Returns the global segmentation context (singleton!). Arguments only take effect
    on the call that creates it.
    """
    global _ctx
    if _ctx is None:
        with _ctx_lock:
            if _ctx is None:
                _ctx = SegmenterContext(classifier=classifier, config=config)
    return _ctx


def reset_app_context() -> None:
    """Drop the global context; the next get_app_context() builds a fresh one."""
    global _ctx
    with _ctx_lock:
        _ctx = None
