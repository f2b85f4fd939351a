"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Link


class LinkStoreBase(ABC):
    """Durable mapping from short code to target URL.

    Implementations must be safe for concurrent callers without any locking
    by the service layer: code uniqueness is enforced by the store itself and
    click increments are applied atomically.
    """

    @abstractmethod
    async def create(self, short_code: str, target_url: str) -> Link:
        """Insert a new link.

        Args:
            short_code: The short code to register
            target_url: The normalized target URL

        Returns:
            The persisted link, including its id and timestamps

        Raises:
            DuplicateCode: If short_code is already registered
            StoreUnavailable: If the store cannot be reached
        """
        pass

    @abstractmethod
    async def find_by_code(self, short_code: str) -> Link:
        """Look up a link by short code.

        Raises:
            NotFound: If no link is registered under short_code
            StoreUnavailable: If the store cannot be reached
        """
        pass

    @abstractmethod
    async def increment_clicks(self, short_code: str) -> None:
        """Atomically add one to the click counter of a link.

        Raises:
            NotFound: If no link is registered under short_code
            StoreUnavailable: If the store cannot be reached
        """
        pass

    @abstractmethod
    async def list_all(self, limit: Optional[int] = None) -> List[Link]:
        """List links ordered by clicks descending, ties broken by id.

        Args:
            limit: Optional maximum number of links to return
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True if the store is reachable."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release store resources."""
        pass
