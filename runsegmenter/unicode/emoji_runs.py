"""
Детектор стиля представления эмодзи (Emoji Presentation Detector).

Splits text into spans that render as plain text glyphs and spans that render as
color emoji. Composite sequences are recognised by an explicit finite-state machine:

- ``EmojiState`` enumerates what the open emoji cluster can still accept;
- ``transition(state, properties)`` is a pure function returning the next state, an
  ``Action`` for the driver and the resolved presentation of the open cluster;
- ``EmojiRunDetector`` drives the machine over the input, coalesces consecutive
  clusters of the same presentation and yields ``EmojiRun(end, presentation_style)``.

Recognised sequences (UTS #51):
    - default emoji presentation, and explicit U+FE0E / U+FE0F overrides;
    - modifier sequences (base + skin tone);
    - zero-width-joiner chains, a dangling joiner belongs to what follows it;
    - regional-indicator flag pairs, lone indicators stay text;
    - tag sequences terminated by U+E007F (subdivision flags);
    - keycap sequences (``#``, ``*``, ``0``-``9`` [+ U+FE0F] + U+20E3).

``HOLD`` marks codepoints whose membership is still undecided (a joiner waiting for
its right-hand element, tag characters waiting for the cancel tag). ``REWIND`` rejects
them: the cluster ends before the first held codepoint and scanning resumes there
from ``EmojiState.DEFAULT``. From that state held codepoints can never be held again,
so every codepoint is scanned at most twice.
"""

import logging
from enum import Enum, auto
from typing import Final, Iterator, NamedTuple, Optional, Sequence

from runsegmenter.model.enums import EmojiProperty, RunPresentationStyle
from runsegmenter.unicode.classifier import CodepointClassifier

logger: Final = logging.getLogger(__name__)

TEXT: Final = RunPresentationStyle.TEXT
EMOJI: Final = RunPresentationStyle.EMOJI


class EmojiState(Enum):
    """What the open cluster may still absorb."""

    DEFAULT = auto()  # nothing: the next codepoint starts a new cluster
    EMOJI_BASE = auto()  # emoji element: selector, joiner, tags, enclosing mark
    MODIFIER_BASE = auto()  # as EMOJI_BASE, plus a skin-tone modifier
    KEYCAP_BASE = auto()  # '#', '*', '0'-'9': selector or U+20E3
    KEYCAP_SELECTED = auto()  # keycap base + U+FE0F: U+20E3
    REGIONAL_INDICATOR = auto()  # lone indicator: second indicator or tags
    SEQUENCE = auto()  # complete emoji element: joiner only
    JOINED = auto()  # element right of a joiner
    JOINED_MODIFIER_BASE = auto()  # modifier base right of a joiner
    ZWJ_PENDING = auto()  # held joiner, needs a joinable element
    TAG_SEQUENCE = auto()  # held tags, needs more tags or the cancel tag


class Action(Enum):
    START = auto()  # codepoint opens a new cluster
    EXTEND = auto()  # codepoint (and anything held) joins the open cluster
    HOLD = auto()  # codepoint joins tentatively
    REWIND = auto()  # held codepoints rejected, codepoint not consumed


class Transition(NamedTuple):
    state: EmojiState
    action: Action
    # Presentation of the open cluster after this step; None keeps the current one
    presentation: Optional[RunPresentationStyle] = None


class EmojiRun(NamedTuple):
    """A presentation run ending (exclusively) at ``end``."""

    end: int
    presentation_style: RunPresentationStyle


_ELEMENT_STATES: Final = frozenset(
    {
        EmojiState.EMOJI_BASE,
        EmojiState.MODIFIER_BASE,
        EmojiState.KEYCAP_BASE,
        EmojiState.JOINED,
        EmojiState.JOINED_MODIFIER_BASE,
    }
)
_NOT_JOINABLE: Final = (
    EmojiProperty.KEYCAP_BASE | EmojiProperty.REGIONAL_INDICATOR | EmojiProperty.MODIFIER
)


def _default_presentation(properties: EmojiProperty) -> RunPresentationStyle:
    return EMOJI if EmojiProperty.EMOJI_PRESENTATION in properties else TEXT


def is_joinable(properties: EmojiProperty) -> bool:
    """True if the codepoint may follow a zero-width joiner inside an emoji sequence."""
    return EmojiProperty.EMOJI in properties and not properties & _NOT_JOINABLE


def start_transition(properties: EmojiProperty) -> Transition:
    """Transition for a codepoint that opens a new cluster."""
    if EmojiProperty.REGIONAL_INDICATOR in properties:
        return Transition(EmojiState.REGIONAL_INDICATOR, Action.START, TEXT)
    if EmojiProperty.MODIFIER_BASE in properties:
        return Transition(
            EmojiState.MODIFIER_BASE, Action.START, _default_presentation(properties)
        )
    if EmojiProperty.KEYCAP_BASE in properties:
        return Transition(EmojiState.KEYCAP_BASE, Action.START, TEXT)
    if EmojiProperty.EMOJI in properties:
        return Transition(EmojiState.EMOJI_BASE, Action.START, _default_presentation(properties))
    return Transition(EmojiState.DEFAULT, Action.START, TEXT)


def _element_transition(state: EmojiState, properties: EmojiProperty) -> Transition:
    joined = state in (EmojiState.JOINED, EmojiState.JOINED_MODIFIER_BASE)

    if EmojiProperty.VARIATION_SELECTOR_EMOJI in properties:
        if state is EmojiState.KEYCAP_BASE:
            return Transition(EmojiState.KEYCAP_SELECTED, Action.EXTEND, EMOJI)
        return Transition(EmojiState.SEQUENCE, Action.EXTEND, EMOJI)

    if EmojiProperty.VARIATION_SELECTOR_TEXT in properties:
        # Inside a joiner chain the sequence as a whole stays emoji
        if joined:
            return Transition(EmojiState.SEQUENCE, Action.EXTEND)
        return Transition(EmojiState.DEFAULT, Action.EXTEND, TEXT)

    if EmojiProperty.ENCLOSING_KEYCAP in properties:
        if state is EmojiState.KEYCAP_BASE:
            return Transition(EmojiState.DEFAULT, Action.EXTEND, EMOJI)
        return Transition(EmojiState.SEQUENCE, Action.EXTEND, EMOJI)

    if state is EmojiState.KEYCAP_BASE:
        return start_transition(properties)

    if EmojiProperty.MODIFIER in properties and state in (
        EmojiState.MODIFIER_BASE,
        EmojiState.JOINED_MODIFIER_BASE,
    ):
        return Transition(EmojiState.SEQUENCE, Action.EXTEND, EMOJI)

    if EmojiProperty.ZERO_WIDTH_JOINER in properties:
        return Transition(EmojiState.ZWJ_PENDING, Action.HOLD)

    if EmojiProperty.TAG_CHARACTER in properties:
        return Transition(EmojiState.TAG_SEQUENCE, Action.HOLD)

    return start_transition(properties)


def transition(state: EmojiState, properties: EmojiProperty) -> Transition:
    """
    Pure transition function of the emoji presentation recognizer.

    Args:
        state: State left by the previous codepoint.
        properties: Emoji properties of the current codepoint.

    Returns:
        The next state, the action for the driver and the presentation of the open
        cluster (None when unchanged).

    Example:
        >>> transition(EmojiState.MODIFIER_BASE, EmojiProperty.EMOJI | EmojiProperty.MODIFIER)
        Transition(state=<EmojiState.SEQUENCE: 7>, action=<Action.EXTEND: 2>, ...)
    """
    if state is EmojiState.DEFAULT:
        return start_transition(properties)

    if state in _ELEMENT_STATES:
        return _element_transition(state, properties)

    if state is EmojiState.KEYCAP_SELECTED:
        if EmojiProperty.ENCLOSING_KEYCAP in properties:
            return Transition(EmojiState.DEFAULT, Action.EXTEND, EMOJI)
        return start_transition(properties)

    if state is EmojiState.REGIONAL_INDICATOR:
        if EmojiProperty.REGIONAL_INDICATOR in properties:
            return Transition(EmojiState.SEQUENCE, Action.EXTEND, EMOJI)
        if EmojiProperty.TAG_CHARACTER in properties:
            return Transition(EmojiState.TAG_SEQUENCE, Action.HOLD)
        return start_transition(properties)

    if state is EmojiState.SEQUENCE:
        if EmojiProperty.ZERO_WIDTH_JOINER in properties:
            return Transition(EmojiState.ZWJ_PENDING, Action.HOLD)
        return start_transition(properties)

    if state is EmojiState.ZWJ_PENDING:
        if is_joinable(properties):
            if EmojiProperty.MODIFIER_BASE in properties:
                return Transition(EmojiState.JOINED_MODIFIER_BASE, Action.EXTEND, EMOJI)
            return Transition(EmojiState.JOINED, Action.EXTEND, EMOJI)
        return Transition(EmojiState.DEFAULT, Action.REWIND)

    if state is EmojiState.TAG_SEQUENCE:
        if EmojiProperty.TAG_CHARACTER in properties:
            return Transition(EmojiState.TAG_SEQUENCE, Action.HOLD)
        if EmojiProperty.TAG_CANCEL in properties:
            return Transition(EmojiState.SEQUENCE, Action.EXTEND, EMOJI)
        return Transition(EmojiState.DEFAULT, Action.REWIND)

    raise AssertionError(f"Unhandled emoji state: {state!r}")


class EmojiRunDetector:
    """
    Iterator over the presentation runs of ``codepoints``.

    Runs alternate strictly between TEXT and EMOJI; the last run ends at
    ``len(codepoints)``. Empty input yields nothing.
    """

    __slots__ = (
        "_codepoints",
        "_classifier",
        "_index",
        "_state",
        "_hold_start",
        "_cluster_start",
        "_cluster_style",
        "_run_style",
        "_ready",
        "_finished",
    )

    def __init__(self, codepoints: Sequence[int], classifier: CodepointClassifier) -> None:
        self._codepoints = codepoints
        self._classifier = classifier
        self._index = 0
        self._state = EmojiState.DEFAULT
        self._hold_start: Optional[int] = None
        self._cluster_start = 0
        self._cluster_style: Optional[RunPresentationStyle] = None
        self._run_style: Optional[RunPresentationStyle] = None
        self._ready: list[EmojiRun] = []
        self._finished = False

    @property
    def state(self) -> EmojiState:
        return self._state

    def __iter__(self) -> Iterator[EmojiRun]:
        return self

    def __next__(self) -> EmojiRun:
        while not self._ready:
            if self._finished:
                raise StopIteration
            self._step()
        return self._ready.pop(0)

    def _close_cluster(self) -> None:
        style = self._cluster_style
        if style is None:
            return
        if self._run_style is None:
            self._run_style = style
        elif style is not self._run_style:
            self._ready.append(EmojiRun(self._cluster_start, self._run_style))
            self._run_style = style

    def _rewind(self) -> None:
        assert self._hold_start is not None
        logger.debug(
            "Rejected held codepoints [%d:%d], resuming at %d",
            self._hold_start,
            self._index,
            self._hold_start,
        )
        self._index = self._hold_start
        self._hold_start = None
        self._state = EmojiState.DEFAULT

    def _step(self) -> None:
        index = self._index
        length = len(self._codepoints)

        if index >= length:
            if self._hold_start is not None:
                self._rewind()
                return
            self._close_cluster()
            if self._run_style is not None:
                self._ready.append(EmojiRun(length, self._run_style))
            self._finished = True
            return

        properties = self._classifier.emoji_properties_of(self._codepoints[index])
        step = transition(self._state, properties)

        if step.action is Action.REWIND:
            self._rewind()
            return

        if step.action is Action.START:
            self._close_cluster()
            self._cluster_start = index
            self._cluster_style = step.presentation
        elif step.action is Action.EXTEND:
            self._hold_start = None
            if step.presentation is not None:
                self._cluster_style = step.presentation
        elif self._hold_start is None:
            self._hold_start = index

        self._state = step.state
        self._index = index + 1


__all__ = [
    "EmojiState",
    "Action",
    "Transition",
    "EmojiRun",
    "EmojiRunDetector",
    "transition",
    "start_transition",
    "is_joinable",
]
