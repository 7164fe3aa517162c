"""Main entry point for the repository browser.

Reads a GitHub username from the terminal, lists the user's public
repositories and loads further pages on request.
"""
import asyncio
import sys
import logging
from dotenv import load_dotenv
from repo_browser.config import Settings
from repo_browser.domain.models import PaginationState
from repo_browser.infrastructure.github_client import GitHubRestClient
from repo_browser.application.pagination_service import PaginationService

# Load environment variables from .env or env file
load_dotenv('.env') or load_dotenv('env')

logger = logging.getLogger(__name__)

PROMPT = "username, 'm' for more, 'q' to quit> "


def render(state: PaginationState, shown: int) -> int:
    """Print repositories not printed yet and the session status.

    Returns:
        Number of repositories printed so far
    """
    if shown > len(state.repositories):
        shown = 0

    for repo in state.repositories[shown:]:
        print(f"- {repo.name}")
        if repo.description:
            print(f"    {repo.description}")

    if state.error is not None:
        print(f"error: {state.error}")
    elif not state.repositories and not state.is_loading:
        print("no repositories to display. please enter a username.")
    elif state.has_more:
        print(f"({len(state.repositories)} shown, more available)")

    return len(state.repositories)


async def main() -> int:
    """Run the interactive browsing session."""
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    client = GitHubRestClient(
        base_url=settings.github_api_url,
        timeout_seconds=settings.request_timeout_seconds
    )
    service = PaginationService(client)
    loop = asyncio.get_running_loop()
    shown = 0

    try:
        while True:
            try:
                line = await loop.run_in_executor(None, input, PROMPT)
            except EOFError:
                break

            command = line.strip()
            if command in ("q", "quit"):
                break
            if command in ("m", "more"):
                if not service.state.has_more:
                    print("no more pages.")
                    continue
                await service.load_more()
            else:
                shown = 0
                await service.search(command)

            shown = render(service.state, shown)

    except KeyboardInterrupt:
        pass
    finally:
        await service.close()
        await client.close()

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
