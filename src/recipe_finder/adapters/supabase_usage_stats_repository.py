"""Supabase repository for the remote API usage counter."""

from dataclasses import dataclass
from datetime import date, datetime

from supabase import Client

from recipe_finder.domain.quota import ApiUsageStats
from recipe_finder.services.quota import UsageStatsRepository

_STATS_ROW_ID = 1


@dataclass
class SupabaseUsageStatsRepository(UsageStatsRepository):
    """Keeps the usage counter in a single row."""

    client: Client

    def get_stats(self) -> ApiUsageStats | None:
        """Return the counter row, if present."""
        response = (
            self.client.table("api_usage_stats")
            .select("day, call_count, daily_limit, last_reset")
            .eq("id", _STATS_ROW_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def save_stats(self, stats: ApiUsageStats) -> None:
        """Replace the counter row."""
        self.client.table("api_usage_stats").upsert(
            {
                "id": _STATS_ROW_ID,
                "day": stats.day.isoformat() if stats.day else None,
                "call_count": stats.count,
                "daily_limit": stats.limit,
                "last_reset": stats.last_reset.isoformat()
                if stats.last_reset
                else None,
            }
        ).execute()


def _parse_row(row: dict[str, object]) -> ApiUsageStats:
    day_raw = row.get("day")
    reset_raw = row.get("last_reset")
    return ApiUsageStats(
        day=(
            date.fromisoformat(day_raw)
            if isinstance(day_raw, str) and day_raw
            else None
        ),
        count=int(row.get("call_count") or 0),
        limit=int(row.get("daily_limit") or 0),
        last_reset=(
            datetime.fromisoformat(reset_raw)
            if isinstance(reset_raw, str) and reset_raw
            else None
        ),
    )
