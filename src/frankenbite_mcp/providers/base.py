"""Abstract base for transcript providers."""

from abc import ABC, abstractmethod


class TranscriptProvider(ABC):
    @abstractmethod
    async def get_timecoded_text(self, source: str, language: str = "en") -> str:
        """Fetch a transcript and render it as timecoded text."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Clean up resources."""
        ...
