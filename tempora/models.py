"""
Data models for the application.
"""
from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Optional

SOURCE_USER = "user"


@dataclass
class Event:
    """A moment recorded by the user."""
    title: str
    date: str
    description: str = ""
    source: str = SOURCE_USER
    id: Optional[int] = None
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        """Build from a row or a serialized blob entry (``createdAt`` key)."""
        return cls(
            id=data.get("id"),
            title=data["title"],
            description=data.get("description") or "",
            date=data["date"],
            source=data.get("source") or SOURCE_USER,
            created_at=data.get("createdAt"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the persisted column names."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "source": self.source,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class HistoricalEvent:
    """An almanac entry. Negative years are BCE."""
    year: int
    title: str
    description: str


class DateCount(NamedTuple):
    date: str
    count: int


@dataclass
class StatsSnapshot:
    """Aggregate metrics computed over all stored events."""
    total: int = 0
    days_with_events: int = 0
    oldest_date: Optional[str] = None
    newest_date: Optional[str] = None
    current_streak: int = 0
    longest_streak: int = 0
    this_week: int = 0
    this_month: int = 0
    this_year: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "daysWithEvents": self.days_with_events,
            "oldestDate": self.oldest_date,
            "newestDate": self.newest_date,
            "currentStreak": self.current_streak,
            "longestStreak": self.longest_streak,
            "thisWeek": self.this_week,
            "thisMonth": self.this_month,
            "thisYear": self.this_year,
        }
