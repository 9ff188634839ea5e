"""Fatal pipeline errors.

Item-level failures never raise: they become skipped ItemOutcome records.
Only session- and page-level failures below propagate out of a stream.
"""


class JobHuntError(Exception):
    """Base class for fatal search pipeline errors."""


class SearchSetupError(JobHuntError):
    """Search form submission did not yield a geo id or a result count."""


class PageLoadError(JobHuntError):
    """A results page failed to navigate or did not render its entries in time."""

    def __init__(self, start: int, expected: int, message: str = "") -> None:
        self.start = start
        self.expected = expected
        detail = f": {message}" if message else ""
        super().__init__(
            f"Results page at start={start} did not show {expected} entries{detail}",
        )
