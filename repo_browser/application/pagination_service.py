"""Pagination service driving a repository browsing session."""
import asyncio
import logging
from dataclasses import replace
from typing import Set
from repo_browser.application.state_store import StateStore
from repo_browser.domain.github_interface import IRepositoryFetcher
from repo_browser.domain.models import FetchFailure, FetchResult, PaginationState


logger = logging.getLogger(__name__)

BLANK_USERNAME_MESSAGE = "Please enter a GitHub username."


class PaginationService:
    """Application service owning the state of one browsing session.

    Sequences fetches for a fresh search and for "load more" continuations and
    publishes every resulting PaginationState through ``states``. The fetcher
    may be shared between sessions; the service does not close it.
    """

    def __init__(self, fetcher: IRepositoryFetcher):
        """Initialize pagination service.

        Args:
            fetcher: Repository fetcher implementation
        """
        self._fetcher = fetcher
        self.states = StateStore()
        self._current_username = ""
        self._current_page = 1
        self._generation = 0
        self._tasks: Set[asyncio.Task] = set()

    @property
    def state(self) -> PaginationState:
        return self.states.value

    async def search(self, username: str) -> None:
        """Start a new search, discarding whatever the session showed before.

        A response belonging to an older search that arrives later is
        ignored.

        Args:
            username: GitHub login to list repositories for
        """
        username = username.strip()
        self._generation += 1
        generation = self._generation
        self._current_username = username
        self._current_page = 1

        if not username:
            self.states.set(PaginationState(error=BLANK_USERNAME_MESSAGE))
            return

        logger.info(f"Searching repositories of {username}")
        self.states.set(PaginationState(is_loading=True))

        result = await self._fetcher.fetch_page(username, 1)
        if generation != self._generation:
            logger.debug(f"Dropping stale search result for {username}")
            return

        if isinstance(result, FetchFailure):
            self._fail(result)
            return

        self.states.set(
            PaginationState(
                repositories=result.repositories,
                is_loading=False,
                error=None,
                has_more=result.has_more
            )
        )

    async def load_more(self) -> None:
        """Fetch the next page and append it to the current list.

        Does nothing while a fetch is in flight or once the last page has been
        reached. A failed attempt leaves the page counter where it was, so
        calling again retries the same page.
        """
        current = self.state
        if current.is_loading or not current.has_more:
            return

        generation = self._generation
        username = self._current_username
        page = self._current_page + 1
        self.states.set(replace(current, is_loading=True))

        logger.info(f"Loading page {page} of {username}")
        result = await self._fetcher.fetch_page(username, page)
        if generation != self._generation:
            logger.debug(f"Dropping stale page {page} of {username}")
            return

        if isinstance(result, FetchFailure):
            self._fail(result)
            return

        self._current_page = page
        self.states.set(
            PaginationState(
                repositories=self.state.repositories + result.repositories,
                is_loading=False,
                error=None,
                has_more=result.has_more
            )
        )

    def _fail(self, result: FetchFailure) -> None:
        self.states.set(replace(self.state, is_loading=False, error=result.message))

    def launch_search(self, username: str) -> asyncio.Task:
        """Schedule ``search`` without waiting for it. Needs a running loop."""
        return self._launch(self.search(username))

    def launch_load_more(self) -> asyncio.Task:
        """Schedule ``load_more`` without waiting for it. Needs a running loop."""
        return self._launch(self.load_more())

    def _launch(self, coro) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Background fetch failed", exc_info=error)

    async def close(self) -> None:
        """Cancel fetches still pending when the session ends."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
