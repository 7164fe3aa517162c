"""Domain models representing core business entities."""
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Repository:
    """Immutable summary of a public GitHub repository.

    Two repositories are equal when they share the same ``id``; name and
    description are not part of the identity.
    """
    id: int
    name: str = field(compare=False)
    description: Optional[str] = field(default=None, compare=False)


@dataclass(frozen=True)
class PaginationState:
    """Snapshot of one browsing session as seen by the presentation layer."""
    repositories: Tuple[Repository, ...] = ()
    is_loading: bool = False
    error: Optional[str] = None
    has_more: bool = False


class FetchError:
    """Base for the reasons a single page fetch can fail."""

    @property
    def message(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class HttpError(FetchError):
    """The server answered with a non-2xx status."""
    status_code: int
    status_message: str = ""

    @property
    def message(self) -> str:
        return f"error: {self.status_code} {self.status_message}".rstrip()


@dataclass(frozen=True)
class TransportError(FetchError):
    """The request never produced a usable response."""
    reason: str

    @property
    def message(self) -> str:
        return self.reason or "network error"


@dataclass(frozen=True)
class FetchSuccess:
    repositories: Tuple[Repository, ...]
    has_more: bool


@dataclass(frozen=True)
class FetchFailure:
    error: FetchError

    @property
    def message(self) -> str:
        return self.error.message


FetchResult = Union[FetchSuccess, FetchFailure]
