"""Documentation-quality stats collection and snapshot persistence."""

from .collector import ApiStatsCollector, collect_api_stats
from .constants import CATEGORIES, CATEGORY_KEYS, Category
from .snapshot import IssueEntry, SnapshotError, StatsSnapshot, load_snapshot, write_snapshot

__all__ = [
    "ApiStatsCollector",
    "CATEGORIES",
    "CATEGORY_KEYS",
    "Category",
    "IssueEntry",
    "SnapshotError",
    "StatsSnapshot",
    "collect_api_stats",
    "load_snapshot",
    "write_snapshot",
]
