"""Abstract base class for listing sources."""

from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator

from jobhunt.core.config import SearchCriteria
from jobhunt.core.schemas import MatchResult, SearchSession


class ListingSource(ABC):
    """Base class that every platform adapter must implement."""

    @property
    @abstractmethod
    def platform_id(self) -> str:
        """Unique identifier for this platform (e.g. 'linkedin')."""

    @property
    @abstractmethod
    def session(self) -> SearchSession | None:
        """Counters of the most recent stream, or None before the first pull."""

    @abstractmethod
    def stream(self, criteria: SearchCriteria) -> AsyncGenerator[MatchResult, None]:
        """Lazily yield listings matching ``criteria``, one page at a time."""
