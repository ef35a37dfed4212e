"""
Test suite for runsegmenter/segmenter.py

End-to-end segmentation over the real Unicode data (fontTools + regex), plus cursor
semantics, input validation and partition checks over a deterministic random corpus.
"""

import random
from typing import Optional

import pytest

from runsegmenter.config import SegmenterConfig
from runsegmenter.exceptions import InvalidInputError, RunSegmenterError
from runsegmenter.model.enums import EmojiProperty, RunPresentationStyle, Script
from runsegmenter.model.segment import Segment, check_segmentation
from runsegmenter.segmenter import RunSegmenter, segment_runs, segment_text
from runsegmenter.unicode.classifier import TableClassifier, UnicodeClassifier

TEXT = RunPresentationStyle.TEXT
EMOJI = RunPresentationStyle.EMOJI

Expected = list[tuple[str, Script, RunPresentationStyle]]


def check_runs(text: str, expected: Expected, classifier: UnicodeClassifier) -> None:
    assert "".join(part for part, _, _ in expected) == text
    assert list(segment_runs(text, classifier)) == expected
    check_segmentation(segment_text(text, classifier), len(text))


class TestReferenceTexts:
    """Mixed-script and emoji texts with known segmentations."""

    def test_latin_punctuation(self, ucd_classifier: UnicodeClassifier) -> None:
        check_runs("Abc.;?Xyz", [("Abc.;?Xyz", Script.LATIN, TEXT)], ucd_classifier)

    def test_one_space(self, ucd_classifier: UnicodeClassifier) -> None:
        check_runs(" ", [(" ", Script.COMMON, TEXT)], ucd_classifier)

    def test_arabic_hangul(self, ucd_classifier: UnicodeClassifier) -> None:
        check_runs(
            "نص키스의",
            [("نص", Script.ARABIC, TEXT), ("키스의", Script.HANGUL, TEXT)],
            ucd_classifier,
        )

    def test_japanese_hindi_emoji_mix(self, ucd_classifier: UnicodeClassifier) -> None:
        check_runs(
            "百家姓ऋषियों🌱🌲🌳🌴百家姓🌱🌲",
            [
                ("百家姓", Script.HAN, TEXT),
                ("ऋषियों", Script.DEVANAGARI, TEXT),
                ("🌱🌲🌳🌴", Script.DEVANAGARI, EMOJI),
                ("百家姓", Script.HAN, TEXT),
                ("🌱🌲", Script.HAN, EMOJI),
            ],
            ucd_classifier,
        )

    def test_combining_circle(self, ucd_classifier: UnicodeClassifier) -> None:
        text = "◌\u0301◌\u0300◌\u0308◌\u0302◌\u0304◌\u030a"
        check_runs(text, [(text, Script.COMMON, TEXT)], ucd_classifier)

    def test_technical_common_upright(self, ucd_classifier: UnicodeClassifier) -> None:
        check_runs("⌀⌁⌂", [("⌀⌁⌂", Script.COMMON, TEXT)], ucd_classifier)

    def test_punctuation_common_sideways(self, ucd_classifier: UnicodeClassifier) -> None:
        check_runs(".…¡", [(".…¡", Script.COMMON, TEXT)], ucd_classifier)

    def test_japanese_punctuation_mixed_inside_horizontal(
        self, ucd_classifier: UnicodeClassifier
    ) -> None:
        check_runs(
            "いろはに.…¡ほへと", [("いろはに.…¡ほへと", Script.HIRAGANA, TEXT)], ucd_classifier
        )

    def test_plus_sign_between_devanagari(self, ucd_classifier: UnicodeClassifier) -> None:
        check_runs("क+\u0947", [("क+\u0947", Script.DEVANAGARI, TEXT)], ucd_classifier)

    def test_emoji_zwj_sequences(self, ucd_classifier: UnicodeClassifier) -> None:
        family = "\U0001F469\u200d\U0001F469\u200d\U0001F467\u200d\U0001F466"
        kiss = "\U0001F469\u200d❤\ufe0f\u200d\U0001F48B\u200d\U0001F468"
        couple = "\U0001F469\u200d\U0001F469"
        check_runs(
            family + kiss + "abcd" + couple + "\u200d\u200defg",
            [
                (family + kiss, Script.LATIN, EMOJI),
                ("abcd", Script.LATIN, TEXT),
                (couple, Script.LATIN, EMOJI),
                ("\u200d\u200defg", Script.LATIN, TEXT),
            ],
            ucd_classifier,
        )

    def test_dingbats_misc_symbols_modifier(self, ucd_classifier: UnicodeClassifier) -> None:
        text = "⛹\U0001F3FB✍\U0001F3FB✊\U0001F3FC"
        check_runs(text, [(text, Script.COMMON, EMOJI)], ucd_classifier)

    def test_armenian_greek_case(self, ucd_classifier: UnicodeClassifier) -> None:
        check_runs(
            "աբգΑΒΓաբգ",
            [
                ("աբգ", Script.ARMENIAN, TEXT),
                ("ΑΒΓ", Script.GREEK, TEXT),
                ("աբգ", Script.ARMENIAN, TEXT),
            ],
            ucd_classifier,
        )

    def test_emoji_subdivision_flags(self, ucd_classifier: UnicodeClassifier) -> None:
        wales = "\U0001F3F4\U000E0067\U000E0062\U000E0077\U000E006C\U000E0073\U000E007F"
        scotland = "\U0001F3F4\U000E0067\U000E0062\U000E0073\U000E0063\U000E0074\U000E007F"
        england = "\U0001F3F4\U000E0067\U000E0062\U000E0065\U000E006E\U000E0067\U000E007F"
        text = wales + scotland + england
        check_runs(text, [(text, Script.COMMON, EMOJI)], ucd_classifier)

    def test_non_emoji_presentation_symbols(self, ucd_classifier: UnicodeClassifier) -> None:
        text = (
            "\u2626\u262a\u2638\u271d\u2721\u2627\u2628\u2629"
            "\u262b\u262c\u2670\u2671\u271f\u2720"
        )
        check_runs(text, [(text, Script.COMMON, TEXT)], ucd_classifier)

    def test_recently_encoded_script_opens_boundary(
        self, ucd_classifier: UnicodeClassifier
    ) -> None:
        check_runs(
            "abc\U00010940\U00010941def",
            [
                ("abc", Script.LATIN, TEXT),
                ("\U00010940\U00010941", Script.SIDETIC, TEXT),
                ("def", Script.LATIN, TEXT),
            ],
            ucd_classifier,
        )


class TestPresentationSequences:
    """Selectors, flags and keycaps over the real emoji data."""

    def test_flag_pair(self, ucd_classifier: UnicodeClassifier) -> None:
        flag = "\U0001F1E9\U0001F1EA"
        check_runs(flag, [(flag, Script.COMMON, EMOJI)], ucd_classifier)

    def test_lone_regional_indicator_is_text(self, ucd_classifier: UnicodeClassifier) -> None:
        check_runs("\U0001F1E9ab", [("\U0001F1E9ab", Script.LATIN, TEXT)], ucd_classifier)

    def test_keycap(self, ucd_classifier: UnicodeClassifier) -> None:
        check_runs(
            "a1\ufe0f\u20e3",
            [("a", Script.LATIN, TEXT), ("1\ufe0f\u20e3", Script.LATIN, EMOJI)],
            ucd_classifier,
        )

    def test_digits_stay_text(self, ucd_classifier: UnicodeClassifier) -> None:
        check_runs("abc 123", [("abc 123", Script.LATIN, TEXT)], ucd_classifier)

    def test_text_selector(self, ucd_classifier: UnicodeClassifier) -> None:
        text = "x\U0001F600\ufe0e"
        check_runs(text, [(text, Script.LATIN, TEXT)], ucd_classifier)

    def test_emoji_selector(self, ucd_classifier: UnicodeClassifier) -> None:
        check_runs(
            "x☦\ufe0f",
            [("x", Script.LATIN, TEXT), ("☦\ufe0f", Script.LATIN, EMOJI)],
            ucd_classifier,
        )


class TestConsume:
    """Cursor semantics of RunSegmenter.consume."""

    def test_empty_input_leaves_segment_untouched(self, ucd_classifier: UnicodeClassifier) -> None:
        segmenter = RunSegmenter("", ucd_classifier)
        segment = Segment(3, 9, Script.GREEK, EMOJI)
        assert segmenter.consume(segment) is False
        assert segment == Segment(3, 9, Script.GREEK, EMOJI)

    def test_exhaustion_is_sticky(self, ucd_classifier: UnicodeClassifier) -> None:
        segmenter = RunSegmenter("ab", ucd_classifier)
        segment = Segment()
        assert segmenter.consume(segment)
        assert segment == Segment(0, 2, Script.LATIN, TEXT)
        assert segmenter.exhausted
        for _ in range(3):
            assert segmenter.consume(segment) is False
        assert segment == Segment(0, 2, Script.LATIN, TEXT)

    def test_segment_reused_across_calls(self, ucd_classifier: UnicodeClassifier) -> None:
        segmenter = RunSegmenter("abγδ", ucd_classifier)
        segment = Segment()
        seen = []
        while segmenter.consume(segment):
            seen.append(segment.copy())
        assert seen == [Segment(0, 2, Script.LATIN, TEXT), Segment(2, 4, Script.GREEK, TEXT)]

    def test_position_and_length(self, ucd_classifier: UnicodeClassifier) -> None:
        segmenter = RunSegmenter("ab\U0001F600", ucd_classifier)
        assert segmenter.text_length == 3
        assert segmenter.position == 0
        assert not segmenter.exhausted
        segmenter.consume(Segment())
        assert segmenter.position == 2
        assert "position=2" in repr(segmenter)

    def test_next_segment_and_iteration(self, ucd_classifier: UnicodeClassifier) -> None:
        segmenter = RunSegmenter("a\U0001F600", ucd_classifier)
        assert segmenter.next_segment() == Segment(0, 1, Script.LATIN, TEXT)
        assert list(segmenter) == [Segment(1, 2, Script.LATIN, EMOJI)]
        assert segmenter.next_segment() is None

    def test_codepoint_sequence_input(self, ucd_classifier: UnicodeClassifier) -> None:
        codepoints = [ord(c) for c in "نص키스의"]
        assert segment_text(codepoints, ucd_classifier) == [
            Segment(0, 2, Script.ARABIC, TEXT),
            Segment(2, 5, Script.HANGUL, TEXT),
        ]

    def test_invalid_codepoints_are_absorbed(self, ucd_classifier: UnicodeClassifier) -> None:
        segments = segment_text([-1, 0xD800, 0x110000], ucd_classifier)
        assert segments == [Segment(0, 3, Script.COMMON, TEXT)]

    def test_lone_surrogate_in_str(self, ucd_classifier: UnicodeClassifier) -> None:
        segments = segment_text("ab\ud800c", ucd_classifier)
        assert segments == [Segment(0, 4, Script.LATIN, TEXT)]

    def test_independent_segmenters(self, ucd_classifier: UnicodeClassifier) -> None:
        first = RunSegmenter("abγ", ucd_classifier)
        second = RunSegmenter("abγ", ucd_classifier)
        assert first.next_segment() == second.next_segment()
        assert list(first) == list(second)


class TestConfiguration:
    """Fallback script and context defaults."""

    def test_fallback_script_for_weak_only_text(self, ucd_classifier: UnicodeClassifier) -> None:
        config = SegmenterConfig(fallback_script=Script.LATIN)
        assert segment_text("...", ucd_classifier, config) == [Segment(0, 3, Script.LATIN, TEXT)]

    def test_fallback_ignored_with_determinate_script(
        self, ucd_classifier: UnicodeClassifier
    ) -> None:
        config = SegmenterConfig(fallback_script=Script.LATIN)
        assert segment_text("..γ", ucd_classifier, config) == [Segment(0, 3, Script.GREEK, TEXT)]

    def test_defaults_from_app_context(self) -> None:
        assert segment_text("\U0001F600") == [Segment(0, 1, Script.COMMON, EMOJI)]

    def test_fallback_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RUNSEGMENTER_FALLBACK_SCRIPT", "Hira")
        assert segment_text("!!") == [Segment(0, 2, Script.HIRAGANA, TEXT)]

    def test_custom_classifier(self) -> None:
        classifier = TableClassifier(
            scripts={ord("x"): Script.GREEK},
            emoji={ord("y"): EmojiProperty.EMOJI | EmojiProperty.EMOJI_PRESENTATION},
        )
        assert segment_text("xy", classifier) == [
            Segment(0, 1, Script.GREEK, TEXT),
            Segment(1, 2, Script.GREEK, EMOJI),
        ]


class TestInvalidInput:
    @pytest.mark.parametrize("value", [b"abc", bytearray(b"abc"), memoryview(b"abc")])
    def test_bytes_rejected(self, value: object) -> None:
        with pytest.raises(InvalidInputError, match="decode it first"):
            RunSegmenter(value)  # type: ignore[arg-type]

    def test_non_iterable_rejected(self) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            RunSegmenter(42)  # type: ignore[arg-type]
        assert isinstance(exc_info.value.__cause__, TypeError)

    @pytest.mark.parametrize("value", [[65, "B"], [65, 1.5], [True, 66], [None]])
    def test_non_int_items_rejected(self, value: list) -> None:
        with pytest.raises(InvalidInputError, match="must be int"):
            RunSegmenter(value)

    def test_error_hierarchy(self) -> None:
        with pytest.raises(TypeError):
            RunSegmenter(b"x")  # type: ignore[arg-type]
        with pytest.raises(RunSegmenterError):
            RunSegmenter(b"x")  # type: ignore[arg-type]


class CountingClassifier:
    def __init__(self, inner: UnicodeClassifier) -> None:
        self.inner = inner
        self.script_calls = 0
        self.emoji_calls = 0

    def script_of(self, codepoint: int) -> Script:
        self.script_calls += 1
        return self.inner.script_of(codepoint)

    def emoji_properties_of(self, codepoint: int) -> EmojiProperty:
        self.emoji_calls += 1
        return self.inner.emoji_properties_of(codepoint)


# Alphabet for the random corpus: letters of several scripts, weak codepoints and
# every emoji sequence component
_ALPHABET = (
    "aZ.γΩ ب키百い\u0301\u200d\ufe0e\ufe0f\u20e3#1"
    "\U0001F600\U0001F469\U0001F466❤⛹\U0001F3FB"
    "\U0001F1E9\U0001F1EA\U0001F3F4\U000E0067\U000E007F"
)


def _random_text(rng: random.Random, length: int) -> str:
    return "".join(rng.choice(_ALPHABET) for _ in range(length))


class TestPartitionProperties:
    """Gapless, maximal, complete partitions over a deterministic random corpus."""

    @pytest.mark.parametrize("seed", range(25))
    def test_random_texts(self, ucd_classifier: UnicodeClassifier, seed: int) -> None:
        rng = random.Random(seed)
        text = _random_text(rng, rng.randint(1, 60))
        segments = segment_text(text, ucd_classifier)
        assert check_segmentation(segments, len(text)) == len(segments)

    @pytest.mark.parametrize("seed", range(5))
    def test_linear_classification(self, ucd_classifier: UnicodeClassifier, seed: int) -> None:
        rng = random.Random(1000 + seed)
        text = _random_text(rng, 500)
        counting = CountingClassifier(ucd_classifier)
        segment_text(text, counting)
        assert counting.script_calls == len(text)
        assert counting.emoji_calls <= 2 * len(text)

    def test_segments_reproduce_text(self, ucd_classifier: UnicodeClassifier) -> None:
        text = _random_text(random.Random(7), 200)
        assert "".join(part for part, _, _ in segment_runs(text, ucd_classifier)) == text

    @pytest.mark.parametrize("prefix_runs", [1, 2, 3])
    def test_prefix_is_stable(self, ucd_classifier: UnicodeClassifier, prefix_runs: int) -> None:
        # Taking only the first k segments gives the same result as a full pass
        text = "abγδ\U0001F600\U0001F600키스.."
        full = segment_text(text, ucd_classifier)
        segmenter = RunSegmenter(text, ucd_classifier)
        prefix: list[Optional[Segment]] = [segmenter.next_segment() for _ in range(prefix_runs)]
        assert prefix == full[:prefix_runs]
