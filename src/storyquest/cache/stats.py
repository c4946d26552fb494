"""Cache statistics model."""

from __future__ import annotations

from pydantic import BaseModel

NO_ENTRIES = "None"
SCAN_ERROR = "Error"

_KB = 1024
_MB = 1024 * 1024


class CacheStats(BaseModel):
    """Snapshot of what the content cache holds."""

    total_stories: int = 0
    total_images: int = 0
    cache_size: str = "0 KB"
    oldest_entry: str = NO_ENTRIES
    newest_entry: str = NO_ENTRIES

    @classmethod
    def error(cls) -> CacheStats:
        """The record reported when the store scan itself fails."""
        return cls(oldest_entry=SCAN_ERROR, newest_entry=SCAN_ERROR)

    @property
    def total_entries(self) -> int:
        return self.total_stories + self.total_images

    @property
    def is_empty(self) -> bool:
        return self.total_entries == 0


def format_size(size: int) -> str:
    """Render a character count as KB, switching to MB above 1 MB."""
    if size > _MB:
        return f"{size / _MB:.2f} MB"
    return f"{size / _KB:.2f} KB"
