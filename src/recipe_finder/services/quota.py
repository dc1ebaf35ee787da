"""Daily quota tracking for the remote recipe API."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from recipe_finder.domain.quota import ApiUsageStats

_logger = logging.getLogger(__name__)


class UsageStatsRepository(Protocol):
    """Persistence interface for the singleton usage counter."""

    def get_stats(self) -> ApiUsageStats | None:
        """Return the stored usage stats, if any."""

    def save_stats(self, stats: ApiUsageStats) -> None:
        """Replace the stored usage stats."""


class QuotaTracker(Protocol):
    """Decides whether the remote API may be called."""

    def allow_remote_call(self) -> bool:
        """Return True when a remote call fits in today's quota."""

    def record_remote_call(self) -> None:
        """Count one remote call against today's quota."""


@dataclass
class StoreQuotaTracker(QuotaTracker):
    """Quota tracker persisted in the store.

    Check and increment are separate read-then-write round trips, so
    concurrent callers may drift the count.
    """

    repository: UsageStatsRepository
    daily_limit: int = 150
    timezone_name: str = "UTC"

    def allow_remote_call(self) -> bool:
        """Reset on a new day, then compare the count with the limit."""
        try:
            stats = self.repository.get_stats()
            today = self._today()
            if stats is None or stats.day != today:
                limit = stats.limit if stats is not None else self.daily_limit
                self.repository.save_stats(
                    ApiUsageStats(
                        day=today,
                        count=0,
                        limit=limit,
                        last_reset=datetime.now(tz=UTC),
                    )
                )
                _logger.info("API usage counter reset for %s", today.isoformat())
                return True
            return stats.count < stats.limit
        except Exception:
            _logger.exception("Failed to check API usage, using cache only")
            return False

    def record_remote_call(self) -> None:
        """Increment the stored counter."""
        try:
            stats = self.repository.get_stats()
            if stats is None:
                stats = ApiUsageStats(
                    day=self._today(),
                    count=0,
                    limit=self.daily_limit,
                    last_reset=datetime.now(tz=UTC),
                )
            self.repository.save_stats(replace(stats, count=stats.count + 1))
        except Exception:
            _logger.exception("Failed to record API usage")

    def usage(self) -> ApiUsageStats:
        """Return current usage, or an empty counter when the store fails."""
        try:
            stats = self.repository.get_stats()
        except Exception:
            _logger.exception("Failed to read API usage")
            stats = None
        if stats is None:
            return ApiUsageStats(
                day=None, count=0, limit=self.daily_limit, last_reset=None
            )
        return stats

    def _today(self) -> date:
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date()
