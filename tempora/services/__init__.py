"""Business logic services."""
from .stats_service import StatsService, compute_stats
from .search_service import SearchService, SearchResults
from .moments_service import DayGroup, MomentsService, group_by_date
from .notification_service import NotificationService, build_history_message
from .daily_scheduler import DailyNotificationScheduler, next_fire_time

__all__ = [
    'StatsService', 'compute_stats', 'SearchService', 'SearchResults',
    'DayGroup', 'MomentsService', 'group_by_date',
    'NotificationService', 'build_history_message',
    'DailyNotificationScheduler', 'next_fire_time',
]
