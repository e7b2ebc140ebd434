"""Parsers for AtCoder URLs and HTML pages."""

from .contest_page import ContestPage
from .samples import SAMPLE_PATTERNS, SamplePattern, extract_samples
from .tasks_print import ExtractedTask, TasksPrintParser, parse_timelimit
from .url_parser import URLParser

__all__ = [
    "ContestPage",
    "ExtractedTask",
    "SAMPLE_PATTERNS",
    "SamplePattern",
    "TasksPrintParser",
    "URLParser",
    "extract_samples",
    "parse_timelimit",
]
