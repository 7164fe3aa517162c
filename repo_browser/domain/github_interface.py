"""GitHub API interface (port) for fetching repository pages.

This is the anti-corruption layer that shields the domain from GitHub API specifics.
"""
from abc import ABC, abstractmethod
from repo_browser.domain.models import FetchResult


class IRepositoryFetcher(ABC):
    """Abstract interface for paged repository listing."""

    @abstractmethod
    async def fetch_page(self, username: str, page: int) -> FetchResult:
        """Fetch one page of a user's public repositories.

        Implementations never raise for HTTP or transport problems; those are
        reported as a ``FetchFailure``.

        Args:
            username: GitHub login, non-empty
            page: 1-based page number

        Returns:
            ``FetchSuccess`` with the page and whether another page follows,
            or ``FetchFailure`` describing what went wrong
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
