"""Parser for elements shared by AtCoder contest pages."""

from datetime import datetime, timezone

from bs4 import BeautifulSoup
from loguru import logger

from atcoder_testcases.domain.exceptions import ExtractionError
from atcoder_testcases.domain.models import ProblemIndex

from .url_parser import URLParser


class ContestPage:
    """A parsed HTML page of the judge site."""

    TIME_FORMAT = "%Y-%m-%d %H:%M:%S%z"
    REGISTRATION_LABELS = ("参加登録", "Register")
    TASKS_TABLE_ROWS = (
        "#main-container > div.row > div.col-sm-12 > div.panel > table.table > tbody > tr"
    )

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    @classmethod
    def parse(cls, html: str) -> "ContestPage":
        return cls(BeautifulSoup(html, "lxml"))

    def extract_title(self) -> str:
        """Text of the sole `<title>` element."""
        texts = [
            text for title in self.soup.select(":root > head > title") for text in title.strings
        ]
        if len(texts) != 1:
            raise ExtractionError("Could not find `<title>`")
        return str(texts[0])

    def extract_csrf_token(self) -> str:
        element = self.soup.select_one('[name="csrf_token"]')
        token = element.get("value") if element else None
        if not token:
            raise ExtractionError("could not find the CSRF token")
        return str(token)

    def extract_contest_duration(self) -> tuple[datetime, datetime]:
        """
        Start and end of the contest window, both in UTC.
        """
        texts = [next(time.strings, None) for time in self.soup.select("time")[:2]]
        if len(texts) != 2 or None in texts:
            raise ExtractionError("Could not find the contest duration")
        try:
            start, end = (datetime.strptime(str(text), self.TIME_FORMAT) for text in texts)
        except ValueError as e:
            raise ExtractionError("Could not find the contest duration") from e
        return start.astimezone(timezone.utc), end.astimezone(timezone.utc)

    def contains_registration_button(self) -> bool:
        box = self.soup.select_one("#main-container .insert-participant-box")
        if box is None:
            raise ExtractionError("Could not find the registration button")

        form = next(
            (form for form in box.select("form") if form.get("method") == "POST"),
            None,
        )
        if form is None:
            return False
        return any(text.strip() in self.REGISTRATION_LABELS for text in form.strings)

    def extract_task_indexes_and_urls(self) -> dict[ProblemIndex, str]:
        """
        Task index -> absolute task URL, in table order.
        """
        indexes_and_urls: dict[ProblemIndex, str] = {}
        for tr in self.soup.select(self.TASKS_TABLE_ROWS):
            a = tr.select_one("td.text-center > a")
            text = next(a.strings, None) if a else None
            href = a.get("href") if a else None
            if text is None or not href:
                raise ExtractionError("Could not extract task indexes and URLs")
            indexes_and_urls[ProblemIndex(text)] = URLParser.join(str(href))

        if not indexes_and_urls:
            raise ExtractionError("Could not extract task indexes and URLs")

        logger.debug(f"Found {len(indexes_and_urls)} task(s) in the task list")
        return indexes_and_urls
