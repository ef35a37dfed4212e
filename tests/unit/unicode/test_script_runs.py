"""Tests for runsegmenter/unicode/script_runs.py (synthetic classification table)."""

from collections import Counter

import pytest

from runsegmenter.model.enums import EmojiProperty, Script
from runsegmenter.unicode.classifier import TableClassifier
from runsegmenter.unicode.script_runs import ScriptRun, ScriptRunDetector, resolve_scripts


def cps(text: str) -> list[int]:
    return [ord(c) for c in text]


class CountingClassifier:
    """Wraps a classifier and counts script lookups."""

    def __init__(self, inner: TableClassifier) -> None:
        self.inner = inner
        self.script_calls = 0

    def script_of(self, codepoint: int) -> Script:
        self.script_calls += 1
        return self.inner.script_of(codepoint)

    def emoji_properties_of(self, codepoint: int) -> EmojiProperty:
        return self.inner.emoji_properties_of(codepoint)


class TestScriptRunDetector:
    def test_empty_input(self, synthetic_classifier: TableClassifier) -> None:
        assert list(ScriptRunDetector([], synthetic_classifier)) == []

    def test_single_script(self, synthetic_classifier: TableClassifier) -> None:
        runs = list(ScriptRunDetector(cps("abc.;?xyz"), synthetic_classifier))
        assert runs == [ScriptRun(9, Script.LATIN)]

    def test_script_change(self, synthetic_classifier: TableClassifier) -> None:
        runs = list(ScriptRunDetector(cps("ab.αβ"), synthetic_classifier))
        assert runs == [ScriptRun(3, Script.LATIN), ScriptRun(5, Script.GREEK)]

    def test_weak_joins_preceding_run(self, synthetic_classifier: TableClassifier) -> None:
        # The period between the two words belongs to the Arabic run
        runs = list(ScriptRunDetector(cps("نص.ab"), synthetic_classifier))
        assert runs == [ScriptRun(3, Script.ARABIC), ScriptRun(5, Script.LATIN)]

    def test_leading_weak_adopts_first_determinate(
        self, synthetic_classifier: TableClassifier
    ) -> None:
        runs = list(ScriptRunDetector(cps(" .\u0301αβ a"), synthetic_classifier))
        assert runs == [ScriptRun(6, Script.GREEK), ScriptRun(7, Script.LATIN)]

    def test_alternating_scripts(self, synthetic_classifier: TableClassifier) -> None:
        runs = list(ScriptRunDetector(cps("aαbβ"), synthetic_classifier))
        assert [run.script for run in runs] == [
            Script.LATIN,
            Script.GREEK,
            Script.LATIN,
            Script.GREEK,
        ]
        assert [run.end for run in runs] == [1, 2, 3, 4]

    def test_all_weak_uses_fallback(self, synthetic_classifier: TableClassifier) -> None:
        assert list(ScriptRunDetector(cps(" .\u0301"), synthetic_classifier)) == [
            ScriptRun(3, Script.COMMON)
        ]

    def test_custom_fallback(self, synthetic_classifier: TableClassifier) -> None:
        detector = ScriptRunDetector(cps("..."), synthetic_classifier, Script.LATIN)
        assert list(detector) == [ScriptRun(3, Script.LATIN)]

    def test_fallback_ignored_when_determinate_present(
        self, synthetic_classifier: TableClassifier
    ) -> None:
        detector = ScriptRunDetector(cps("..α"), synthetic_classifier, Script.LATIN)
        assert list(detector) == [ScriptRun(3, Script.GREEK)]

    def test_unknown_codepoints_are_weak(self, synthetic_classifier: TableClassifier) -> None:
        # -1 and 0x110000 are not scalar values; 0x0E01 is missing from the table
        runs = list(ScriptRunDetector([ord("a"), -1, 0x0E01, 0x110000], synthetic_classifier))
        assert runs == [ScriptRun(4, Script.LATIN)]

    def test_lazy_position(self, synthetic_classifier: TableClassifier) -> None:
        detector = ScriptRunDetector(cps("abαβ"), synthetic_classifier)
        assert detector.position == 0
        assert next(detector) == ScriptRun(2, Script.LATIN)
        assert detector.position == 2
        assert next(detector) == ScriptRun(4, Script.GREEK)
        with pytest.raises(StopIteration):
            next(detector)
        # Exhaustion is sticky
        with pytest.raises(StopIteration):
            next(detector)

    @pytest.mark.parametrize("text", ["abc", "a.α.b.β", " ..نص\u0301ab ", "...", "αa"])
    def test_each_codepoint_classified_once(
        self, synthetic_classifier: TableClassifier, text: str
    ) -> None:
        counting = CountingClassifier(synthetic_classifier)
        list(ScriptRunDetector(cps(text), counting))
        assert counting.script_calls == len(text)

    def test_first_run_does_not_scan_whole_input(
        self, synthetic_classifier: TableClassifier
    ) -> None:
        counting = CountingClassifier(synthetic_classifier)
        detector = ScriptRunDetector(cps("ab" + "α" * 100), counting)
        next(detector)
        assert counting.script_calls == 3


class TestResolveScripts:
    def test_per_codepoint_scripts(self, synthetic_classifier: TableClassifier) -> None:
        resolved = resolve_scripts(cps(".ab αβ."), synthetic_classifier)
        assert resolved == [Script.LATIN] * 4 + [Script.GREEK] * 3

    def test_length_matches_input(self, synthetic_classifier: TableClassifier) -> None:
        text = "a.b;α?β!نص"
        assert len(resolve_scripts(cps(text), synthetic_classifier)) == len(text)

    def test_resolved_scripts_are_determinate_when_available(
        self, synthetic_classifier: TableClassifier
    ) -> None:
        resolved = resolve_scripts(cps(" a . α "), synthetic_classifier)
        assert Counter(resolved) == {Script.LATIN: 5, Script.GREEK: 2}

    def test_empty(self, synthetic_classifier: TableClassifier) -> None:
        assert resolve_scripts([], synthetic_classifier) == []
