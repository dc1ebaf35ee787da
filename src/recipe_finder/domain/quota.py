"""Domain models for remote API usage."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class ApiUsageStats:
    """Daily remote API call counter."""

    day: date | None
    count: int
    limit: int
    last_reset: datetime | None

    @property
    def remaining(self) -> int:
        """Calls left for the day."""
        return max(self.limit - self.count, 0)
