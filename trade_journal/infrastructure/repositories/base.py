"""Base Repository: Abstract interface for journal storage.

Repositories own all file I/O for the journal:
- Load/save through a single get_all()/save_all() pair
- Cache the last loaded value until saved or cleared
- Raise RepositoryError on unreadable or malformed files
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """Abstract base class for repositories."""

    @abstractmethod
    def get_all(self) -> T:
        """Retrieve all data from the repository.

        Raises:
            RepositoryError: If data cannot be loaded
        """

    @abstractmethod
    def save_all(self, data: T) -> None:
        """Replace the stored data.

        Raises:
            RepositoryError: If data cannot be written
        """

    @abstractmethod
    def clear_cache(self) -> None:
        """Clear any cached data."""


class RepositoryError(Exception):
    """Exception raised when repository operations fail."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(f"{message}" + (f" (path: {path})" if path else ""))
