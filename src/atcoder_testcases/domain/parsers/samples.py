"""Sample case extraction from a `#task-statement` element.

Problem statements have been published in several markup layouts over the
years. Each layout is described by a ``SamplePattern``; the patterns are
tried newest first and the first one that yields a valid, non-empty set of
samples wins.
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from bs4 import Tag
from loguru import logger

from atcoder_testcases.domain.models import FloatMatch, LinesMatch, Match

INTERACTIVE_MARKERS = ("インタラクティブ", "対話式の問題", "Interactive")
RELATIVE_ERROR_MARKERS = ("相対誤差", "relative error")
ABSOLUTE_ERROR_MARKERS = ("絶対誤差", "absolute error")

IN_JA = re.compile(r"\A[\s\n]*入力例\s*(\d{1,2})[.\n]*\Z")
OUT_JA = re.compile(r"\A[\s\n]*出力例\s*(\d{1,2})[.\n]*\Z")
IN_EN = re.compile(r"\ASample Input\s?([0-9]{1,2}).*\Z")
OUT_EN = re.compile(r"\ASample Output\s?([0-9]{1,2}).*\Z")

FLOATING_ERROR = re.compile(r"\A10\^\{(-?[0-9]{1,2})\}\Z")

_ZENKAKU_DIGITS = str.maketrans("０１２３４５６７８９", "0123456789")


def parse_zenkaku(text: str) -> int:
    """Parse an integer written in ASCII or full-width digits."""
    return int(text.translate(_ZENKAKU_DIGITS))


def is_valid_text(text: str) -> bool:
    """ASCII only, no whitespace but space and newline, no leading blank."""
    if text == "\n":
        return True
    if text.startswith((" ", "\n")):
        return False
    return all(c.isascii() and ((c in " \t\n\x0c\r") == (c in " \n")) for c in text)


def normalize_trailing_newline(text: str) -> str:
    if text and not text.endswith("\n"):
        return text + "\n"
    return text


@dataclass(frozen=True)
class SamplePattern:
    """One historical layout of sample headers and sample contents."""

    name: str
    header_selector: str
    content_selector: str
    input_label: re.Pattern
    output_label: re.Pattern

    def extract(self, task_statement: Tag) -> Optional[list[tuple[str, str]]]:
        """
        Pair up sample inputs and outputs laid out in this pattern.

        Returns None when the layout yields no samples or any sample text
        is invalid.
        """
        inputs: dict[int, str] = {}
        outputs: dict[int, str] = {}
        pending: Optional[tuple[bool, int]] = None

        selector = f"{self.header_selector}, {self.content_selector}"
        for element in task_statement.select(selector):
            if element.name == "h3":
                text = element.get_text()
                pending = None
                for is_input, label in ((True, self.input_label), (False, self.output_label)):
                    match = label.match(text)
                    if match:
                        try:
                            pending = (is_input, parse_zenkaku(match.group(1)))
                        except ValueError:
                            return None
                        break
            elif element.name in ("pre", "section"):
                if pending is not None:
                    is_input, number = pending
                    (inputs if is_input else outputs)[number] = element.get_text()
                pending = None

        samples = [
            (
                normalize_trailing_newline(inputs[number]),
                normalize_trailing_newline(outputs[number]),
            )
            for number in sorted(inputs)
            if number in outputs
        ]
        if not samples:
            return None
        if not all(is_valid_text(text) for sample in samples for text in sample):
            logger.debug(f"Pattern {self.name} matched samples with invalid text")
            return None
        return samples


SAMPLE_PATTERNS: tuple[SamplePattern, ...] = (
    # Current style (Japanese)
    SamplePattern(
        "current-ja",
        "span.lang > span.lang-ja > div.part > section > h3",
        "span.lang > span.lang-ja > div.part > section > pre",
        IN_JA,
        OUT_JA,
    ),
    # Current style (English)
    SamplePattern(
        "current-en",
        "span.lang > span.lang-en > div.part > section > h3",
        "span.lang > span.lang-en > div.part > section > pre",
        IN_EN,
        OUT_EN,
    ),
    # ARC019..ARC057, ABC007..ABC040, ATC001, ATC002
    SamplePattern(
        "part-section",
        "div.part > section > h3",
        "div.part > section > pre",
        IN_JA,
        OUT_JA,
    ),
    # ARC002..ARC018, ARC019/C, ABC001..ABC006
    SamplePattern(
        "part-header",
        "div.part > h3, pre",
        "div.part > section > pre",
        IN_JA,
        OUT_JA,
    ),
    # ARC001, dwacon2018-final/{A, B}
    SamplePattern("bare", "h3, pre", "section > pre", IN_JA, OUT_JA),
    # ARC046/D, ARC050, ARC052/{A, C}, ARC053, ARC055, ABC036, ABC041
    SamplePattern("section", "section > h3", "section > pre", IN_JA, OUT_JA),
    # ABC034
    SamplePattern(
        "lang-section",
        "span.lang > span.lang-ja > section > h3",
        "span.lang > span.lang-ja > section > pre",
        IN_JA,
        OUT_JA,
    ),
    # practice contest (Japanese)
    SamplePattern(
        "practice",
        "span.lang > span.lang-ja > div.part > h3",
        "span.lang > span.lang-ja > div.part > section > pre",
        IN_JA,
        OUT_JA,
    ),
)


@dataclass
class BatchSamples:
    match: Match
    samples: list[tuple[str, str]]


class InteractiveSamples:
    """Marker for interactive problems."""

    def __repr__(self) -> str:
        return "InteractiveSamples()"


Samples = Union[BatchSamples, InteractiveSamples]


def is_interactive(task_statement: Tag) -> bool:
    return any(
        marker in text
        for strong in task_statement.select("strong")
        for text in strong.strings
        for marker in INTERACTIVE_MARKERS
    )


def parse_floating_error(text: str) -> Optional[float]:
    match = FLOATING_ERROR.match(text)
    if not match:
        return None
    return float(f"1e{match.group(1)}")


def detect_match(task_statement: Tag) -> Match:
    """
    Decide how outputs are compared from the error bound stated in the text.
    """
    error = next(
        (
            error
            for var in task_statement.select("var")
            for text in var.strings
            if (error := parse_floating_error(text)) is not None
        ),
        None,
    )
    texts = list(task_statement.strings)
    relative = any(marker in text for text in texts for marker in RELATIVE_ERROR_MARKERS)
    absolute = any(marker in text for text in texts for marker in ABSOLUTE_ERROR_MARKERS)

    if error is None or not (relative or absolute):
        return LinesMatch()
    return FloatMatch(
        relative_error=error if relative else None,
        absolute_error=error if absolute else None,
    )


def extract_samples(
    task_statement: Tag,
    patterns: Sequence[SamplePattern] = SAMPLE_PATTERNS,
) -> Optional[Samples]:
    """
    Extract the samples of one problem, trying each layout in order.
    """
    if is_interactive(task_statement):
        return InteractiveSamples()

    match = detect_match(task_statement)
    for pattern in patterns:
        samples = pattern.extract(task_statement)
        if samples is not None:
            logger.debug(f"Extracted {len(samples)} sample(s) with pattern {pattern.name}")
            return BatchSamples(match=match, samples=samples)
    return None
