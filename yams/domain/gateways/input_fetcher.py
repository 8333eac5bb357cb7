"""
Domain Gateway - Input Fetcher

Interface for reading the observations a tick feeds to its models from the
external, read-only data store.
"""

from abc import ABC, abstractmethod

from yams.domain.entities.dataset import Dataset, TimeRange


class IInputFetcher(ABC):
    """Interface for input dataset retrieval."""

    @abstractmethod
    async def fetch(self, window: TimeRange) -> Dataset:
        """
        Retrieve every observation inside ``window``.

        Args:
            window: Closed time range to read

        Returns:
            The dataset, sorted by timestamp (possibly empty)

        Raises:
            FetchFailure: When the data store cannot be read
        """
        pass
