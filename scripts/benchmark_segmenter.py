#!/usr/bin/env python3
"""Benchmark: run segmentation cost vs. input length (should grow linearly)."""

import sys
import time
from pathlib import Path

# Добавить корень проекта в PYTHONPATH
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from runsegmenter import RunSegmenter, Segment, UnicodeClassifier

SAMPLE = (
    "Abc.;?Xyz "
    "百家姓ऋषियों🌱🌲🌳🌴 "
    "\U0001F469\u200d\U0001F469\u200d\U0001F467\u200d\U0001F466abcd "
    "⛹🏻✍🏻✊🏼 "
    "نص키스의 "
    "\U0001F1E9\U0001F1EA "
)


def benchmark_length(repeat: int, classifier: UnicodeClassifier, rounds: int = 20) -> dict:
    """Benchmark full segmentation of SAMPLE repeated ``repeat`` times."""
    text = SAMPLE * repeat
    segment = Segment()

    times = []
    segments = 0
    for _ in range(rounds):
        start = time.perf_counter()
        segmenter = RunSegmenter(text, classifier)
        segments = 0
        while segmenter.consume(segment):
            segments += 1
        times.append((time.perf_counter() - start) * 1000)

    mean_ms = sum(times) / len(times)
    return {
        "codepoints": len(text),
        "segments": segments,
        "mean_ms": mean_ms,
        "us_per_codepoint": mean_ms * 1000 / len(text),
    }


def print_report() -> None:
    classifier = UnicodeClassifier()
    # Warm the classifier cache so the first row is not dominated by UCD lookups
    benchmark_length(1, classifier, rounds=1)

    print("=" * 70)
    print("RUN SEGMENTATION: COST VS. LENGTH")
    print("=" * 70)
    print(f"{'codepoints':>12} {'segments':>10} {'mean ms':>12} {'us/codepoint':>14}")

    results = [benchmark_length(repeat, classifier) for repeat in (1, 10, 100, 1000)]
    for row in results:
        print(
            f"{row['codepoints']:>12} {row['segments']:>10} "
            f"{row['mean_ms']:>12.3f} {row['us_per_codepoint']:>14.3f}"
        )

    print()
    first, last = results[1], results[-1]
    ratio = last["us_per_codepoint"] / first["us_per_codepoint"]
    if ratio < 2.0:
        print(f"   ✅ Per-codepoint cost stable across sizes ({ratio:.2f}x)")
    else:
        print(f"   ⚠\ufe0f  Per-codepoint cost grew {ratio:.2f}x with input size")


if __name__ == "__main__":
    print_report()
