"""Parser for the printable task statements of a contest (`tasks_print`)."""

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Union

from bs4 import BeautifulSoup, Tag
from loguru import logger

from atcoder_testcases.domain.exceptions import BlockExtractionWarning
from atcoder_testcases.domain.models import (
    BatchTestCase,
    BatchTestSuite,
    InteractiveTestSuite,
    TestSuite,
    UnsubmittableTestSuite,
)

from .samples import BatchSamples, extract_samples

TITLE_PATTERN = re.compile(r"([A-Z0-9]+) - (.+)")
TIMELIMIT_PATTERN = re.compile(r"\A\D*([0-9]{1,9})(\.[0-9]{1,3})?\s*(m)?sec.*\Z")


def parse_timelimit(text: str) -> Optional[timedelta]:
    """
    Parse texts such as ``"Time Limit: 2 sec / Memory Limit: 1024 MB"``.

    Fractional digits are folded into the integer part, so ``"2.5sec"``
    becomes 2500 ms and ``"1.5msec"`` becomes 1 ms.
    """
    match = TIMELIMIT_PATTERN.match(text)
    if not match:
        return None

    integer, fraction, milli = match.groups()
    base, exponent = int(integer), 0
    if fraction:
        digits = len(fraction) - 1
        base = base * 10**digits + int(fraction[1:])
        exponent -= digits
    if not milli:
        exponent += 3

    if exponent < 0:
        milliseconds = base // 10**-exponent
    else:
        milliseconds = base * 10**exponent
    return timedelta(milliseconds=milliseconds)


@dataclass
class ExtractedTask:
    """A problem block found on the printable page.

    ``warning`` is set when the test suite could not be resolved; the block
    is then reported with an empty batch suite.
    """

    index: str
    display_name: str
    test_suite: TestSuite
    warning: Optional[BlockExtractionWarning] = None


class TasksPrintParser:
    """Extracts every problem block of a `tasks_print` page."""

    BLOCKS = '#main-container > div.row div[class="col-sm-12"]'

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    @classmethod
    def parse(cls, html: str) -> "TasksPrintParser":
        return cls(BeautifulSoup(html, "lxml"))

    def extract_tasks(self) -> list[Union[ExtractedTask, BlockExtractionWarning]]:
        """
        One entry per problem block, in page order.

        Blocks whose title cannot be read are returned as warnings.
        """
        results: list[Union[ExtractedTask, BlockExtractionWarning]] = []
        for block in self.soup.select(self.BLOCKS):
            try:
                index, display_name = self._extract_title(block)
            except BlockExtractionWarning as e:
                results.append(e)
                continue

            try:
                test_suite = self._extract_test_suite(block)
            except BlockExtractionWarning as e:
                warning = BlockExtractionWarning(f"{index}: {e}")
                logger.debug(f"Degrading {index} to an empty test suite: {e}")
                results.append(ExtractedTask(index, display_name, BatchTestSuite(), warning))
                continue

            results.append(ExtractedTask(index, display_name, test_suite))
        return results

    def _extract_title(self, block: Tag) -> tuple[str, str]:
        title = next(
            (text for span in block.select(":scope > span") for text in span.strings), None
        )
        if title is None:
            raise BlockExtractionWarning("Could not find the title")

        match = TITLE_PATTERN.search(title)
        if not match:
            raise BlockExtractionWarning(f"Could not parse the title: {str(title)!r}")
        return match.group(1), match.group(2)

    def _extract_test_suite(self, block: Tag) -> TestSuite:
        timelimits = [
            timelimit
            for p in block.select(":scope > p")
            for text in p.strings
            if (timelimit := parse_timelimit(text)) is not None
        ]
        if len(timelimits) != 1:
            raise BlockExtractionWarning("Could not extract the timelimit")
        timelimit = timelimits[0]

        # `tasks_print` holds one `#task-statement` per problem.
        statements = block.select(':scope > div[id="task-statement"]')
        samples = extract_samples(statements[0]) if len(statements) == 1 else None
        if samples is None:
            raise BlockExtractionWarning("Could not extract the sample cases")

        if timelimit == timedelta(0):
            return UnsubmittableTestSuite()
        if isinstance(samples, BatchSamples):
            return BatchTestSuite(
                timelimit=timelimit,
                match=samples.match,
                cases=[
                    BatchTestCase(name=f"sample{i}", input=input_, output=output)
                    for i, (input_, output) in enumerate(samples.samples, start=1)
                ],
            )
        return InteractiveTestSuite(timelimit=timelimit)
