"""GitHub REST API client listing a user's repositories page by page."""
import asyncio
import logging
from typing import Any, List, Optional
from urllib.parse import quote
import aiohttp
from repo_browser.domain.github_interface import IRepositoryFetcher
from repo_browser.domain.models import (
    FetchFailure,
    FetchResult,
    FetchSuccess,
    HttpError,
    Repository,
    TransportError,
)


logger = logging.getLogger(__name__)

NEXT_RELATION = 'rel="next"'


class RepositoryDecodeError(ValueError):
    """Raised when a response body does not describe a list of repositories."""
    pass


def has_next_page(link_header: Optional[str]) -> bool:
    """Return True when a ``Link`` header advertises a following page."""
    return link_header is not None and NEXT_RELATION in link_header


def decode_repositories(payload: Any) -> List[Repository]:
    """Transform a decoded JSON body into Repository entities.

    A missing body decodes to an empty list. Unknown fields are ignored.

    Raises:
        RepositoryDecodeError: When the payload or one of its items has the
            wrong shape
    """
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise RepositoryDecodeError(
            f"expected a JSON array, got {type(payload).__name__}"
        )

    repositories = []
    for item in payload:
        if not isinstance(item, dict):
            raise RepositoryDecodeError(f"expected a JSON object, got {item!r}")
        repo_id = item.get("id")
        name = item.get("name")
        description = item.get("description")
        # bool is an int subclass
        if not isinstance(repo_id, int) or isinstance(repo_id, bool):
            raise RepositoryDecodeError(f"repository has no integer id: {item!r}")
        if not isinstance(name, str) or not name:
            raise RepositoryDecodeError(f"repository {repo_id} has no name")
        if description is not None and not isinstance(description, str):
            raise RepositoryDecodeError(
                f"repository {repo_id} has a non-string description"
            )
        repositories.append(
            Repository(id=repo_id, name=name, description=description)
        )
    return repositories


class GitHubRestClient(IRepositoryFetcher):
    """GitHub REST API client for the user repositories listing.

    Implements the IRepositoryFetcher port. Every call is a single request;
    retry policy belongs to the caller.
    """

    DEFAULT_BASE_URL = "https://api.github.com"
    PAGE_SIZE = 30
    USER_AGENT = "repo-browser"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """Initialize GitHub client.

        Args:
            base_url: API root, without the ``/users`` path
            timeout_seconds: Total timeout per request; None keeps the
                aiohttp default
            session: Shared session to use instead of creating one. A session
                passed in here is not closed by ``close()``.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._session = session
        self._owns_session = session is None

    async def _init_session(self) -> aiohttp.ClientSession:
        """Initialize the HTTP session (lazy initialization)."""
        if self._session is None:
            headers = {
                "Accept": "application/vnd.github+json",
                "User-Agent": self.USER_AGENT,
            }
            kwargs = {"headers": headers}
            if self._timeout_seconds is not None:
                kwargs["timeout"] = aiohttp.ClientTimeout(total=self._timeout_seconds)
            self._session = aiohttp.ClientSession(**kwargs)
        return self._session

    def repositories_url(self, username: str) -> str:
        return f"{self._base_url}/users/{quote(username, safe='')}/repos"

    async def fetch_page(self, username: str, page: int) -> FetchResult:
        """Fetch one page of a user's repositories.

        Args:
            username: GitHub login
            page: 1-based page number

        Returns:
            FetchSuccess with the decoded repositories and the ``Link`` header
            verdict, or FetchFailure carrying an HttpError or TransportError
        """
        url = self.repositories_url(username)
        params = {"page": str(page), "per_page": str(self.PAGE_SIZE)}
        logger.debug(f"GET {url} page={page}")

        try:
            session = await self._init_session()
            async with session.get(url, params=params) as response:
                if not 200 <= response.status < 300:
                    logger.warning(
                        f"Listing repositories of {username} (page {page}) "
                        f"failed with HTTP {response.status}"
                    )
                    return FetchFailure(
                        HttpError(response.status, response.reason or "")
                    )

                payload = await response.json(content_type=None)
                repositories = decode_repositories(payload)
                has_more = has_next_page(response.headers.get("Link"))

        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            reason = str(e) or type(e).__name__
            logger.warning(
                f"Listing repositories of {username} (page {page}) failed: {reason}"
            )
            return FetchFailure(TransportError(reason))

        logger.info(
            f"Fetched {len(repositories)} repositories of {username} "
            f"(page {page}, more: {has_more})"
        )
        return FetchSuccess(tuple(repositories), has_more)

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
