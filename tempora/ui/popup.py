"""Today popup window."""
import datetime
import html
from functools import partial
from typing import List, Optional
from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QTabWidget,
    QLineEdit, QListWidget, QListWidgetItem
)
from PyQt5.QtGui import QShowEvent
from PyQt5.QtCore import Qt, QEvent
from .. import almanac
from ..db.event_repository import EventRepository
from ..models import Event, StatsSnapshot
from ..services.moments_service import DayGroup, MomentsService
from ..services.search_service import SearchResults, SearchService
from ..services.stats_service import StatsService
from .async_bridge import AsyncBridge


def _format_year(year: int) -> str:
    return f"{-year} BC" if year < 0 else str(year)


class TodayPopup(QWidget):
    """
    Tray-anchored window with tabs for the selected day (history and
    moments), every moment grouped by day, statistics and search.

    All store access goes through the bridge; widgets are filled in from
    the result callbacks.
    """

    def __init__(self, bridge: AsyncBridge, repository: EventRepository,
                 stats_service: StatsService, search_service: SearchService) -> None:
        super().__init__()
        self.bridge = bridge
        self.repository = repository
        self.stats_service = stats_service
        self.search_service = search_service
        self.moments_service = MomentsService(repository)
        self.date = datetime.date.today()

        self.setWindowTitle("Tempora")
        self.setWindowFlags(
            Qt.Popup |  # pyright: ignore[reportAttributeAccessIssue,reportUnknownArgumentType,reportUnknownMemberType]
            Qt.FramelessWindowHint  # pyright: ignore[reportUnknownArgumentType,reportAttributeAccessIssue,reportUnknownMemberType]
        )
        self.setMinimumWidth(340)
        self.setMaximumWidth(480)
        self.setMaximumHeight(640)

        self.main_layout = QVBoxLayout()
        self.main_layout.setContentsMargins(8, 8, 8, 8)
        self.setLayout(self.main_layout)

        self.tab_widget = QTabWidget()
        self.main_layout.addWidget(self.tab_widget)

        self.create_day_tab()
        self.create_all_tab()
        self.create_stats_tab()
        self.create_search_tab()

    def create_day_tab(self) -> None:
        """Create the day tab: navigation, almanac entries and moments."""
        day_tab = QWidget()
        day_layout = QVBoxLayout()
        day_layout.setContentsMargins(5, 10, 5, 5)
        day_tab.setLayout(day_layout)

        date_layout = QHBoxLayout()
        self.prev_button = QPushButton("< Prev")
        self.prev_button.clicked.connect(self.prev_day)
        self.date_label = QLabel()
        self.date_label.setAlignment(Qt.AlignCenter)  # pyright: ignore[reportAttributeAccessIssue, reportUnknownArgumentType, reportUnknownMemberType]
        self.next_button = QPushButton("Next >")
        self.next_button.clicked.connect(self.next_day)
        date_layout.addWidget(self.prev_button)
        date_layout.addWidget(self.date_label)
        date_layout.addWidget(self.next_button)
        day_layout.addLayout(date_layout)

        day_layout.addSpacing(10)
        day_layout.addWidget(QLabel("<b>On this day:</b>"))
        self.history_label = QLabel()
        self.history_label.setWordWrap(True)
        day_layout.addWidget(self.history_label)

        day_layout.addSpacing(10)
        day_layout.addWidget(QLabel("<b>Your moments:</b>"))
        self.moments_list = QListWidget()
        day_layout.addWidget(self.moments_list)

        self.tab_widget.addTab(day_tab, "Day")

    def create_all_tab(self) -> None:
        """Create the tab listing every moment under its day."""
        all_tab = QWidget()
        all_layout = QVBoxLayout()
        all_layout.setContentsMargins(5, 10, 5, 5)
        all_tab.setLayout(all_layout)

        self.all_list = QListWidget()
        self.all_list.itemActivated.connect(self.open_day)  # pyright: ignore[reportUnknownMemberType]
        all_layout.addWidget(self.all_list)

        self.tab_widget.addTab(all_tab, "All")

    def create_stats_tab(self) -> None:
        """Create the statistics tab."""
        stats_tab = QWidget()
        stats_layout = QVBoxLayout()
        stats_layout.setContentsMargins(5, 10, 5, 5)
        stats_tab.setLayout(stats_layout)

        self.stats_label = QLabel("Loading...")
        self.stats_label.setWordWrap(True)
        stats_layout.addWidget(self.stats_label)
        stats_layout.addStretch()

        self.tab_widget.addTab(stats_tab, "Stats")

    def create_search_tab(self) -> None:
        """Create the search tab."""
        search_tab = QWidget()
        search_layout = QVBoxLayout()
        search_layout.setContentsMargins(5, 10, 5, 5)
        search_tab.setLayout(search_layout)

        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search moments and history")
        self.search_edit.returnPressed.connect(self.run_search)  # pyright: ignore[reportUnknownMemberType]
        search_layout.addWidget(self.search_edit)

        self.search_label = QLabel()
        self.search_label.setWordWrap(True)
        search_layout.addWidget(self.search_label)
        search_layout.addStretch()

        self.tab_widget.addTab(search_tab, "Search")

    def refresh(self) -> None:
        """Reload the selected day, the moment overview and the statistics."""
        day = self.date.isoformat()
        self.date_label.setText(f"<b>{day}</b>")

        entries = almanac.lookup_for_display(self.date)
        if entries:
            self.history_label.setText("<br>".join(
                f"<b>{_format_year(e.year)}</b> {html.escape(e.title)}"
                f"<br><small>{html.escape(e.description)}</small>"
                for e in entries
            ))
        else:
            self.history_label.setText("<i>No historical events for this day.</i>")

        self.bridge.submit(self.repository.list_by_date(day), self._show_moments)
        self.bridge.submit(self.moments_service.grouped(), self._show_all)
        self.bridge.submit(self.stats_service.compute_stats(), self._show_stats)

    def _show_moments(self, events: List[Event]) -> None:
        self.moments_list.clear()
        if not events:
            self.moments_list.addItem("No moments yet.")
            return
        for event in events:
            item = QListWidgetItem(self.moments_list)
            row = QWidget()
            row_layout = QHBoxLayout()
            row_layout.setContentsMargins(2, 2, 2, 2)
            row.setLayout(row_layout)

            text = f"<b>{html.escape(event.title)}</b>"
            if event.description:
                text += f"<br><small>{html.escape(event.description)}</small>"
            label = QLabel(text)
            label.setWordWrap(True)
            row_layout.addWidget(label, 1)

            delete_button = QPushButton("Delete")
            delete_button.clicked.connect(partial(self.delete_moment, event.id))
            row_layout.addWidget(delete_button)

            item.setSizeHint(row.sizeHint())
            self.moments_list.setItemWidget(item, row)

    def _show_all(self, groups: List[DayGroup]) -> None:
        self.all_list.clear()
        if not groups:
            self.all_list.addItem("No moments yet.")
            return
        for group in groups:
            header = QListWidgetItem(f"{group.date}  ({group.count})")
            font = header.font()
            font.setBold(True)
            header.setFont(font)
            header.setData(Qt.UserRole, group.date)  # pyright: ignore[reportAttributeAccessIssue, reportUnknownArgumentType, reportUnknownMemberType]
            self.all_list.addItem(header)
            for event in group.moments:
                item = QListWidgetItem(f"    {event.title}")
                item.setData(Qt.UserRole, group.date)  # pyright: ignore[reportAttributeAccessIssue, reportUnknownArgumentType, reportUnknownMemberType]
                self.all_list.addItem(item)

    def open_day(self, item: QListWidgetItem) -> None:
        """Jump to the day tab for the activated row's date."""
        day = item.data(Qt.UserRole)  # pyright: ignore[reportAttributeAccessIssue, reportUnknownArgumentType, reportUnknownMemberType]
        if not day:
            return
        try:
            self.date = datetime.date.fromisoformat(day)
        except ValueError:
            return
        self.tab_widget.setCurrentIndex(0)
        self.refresh()

    def _show_stats(self, stats: StatsSnapshot) -> None:
        if stats.total == 0:
            self.stats_label.setText("Start adding moments to see your statistics!")
            return
        lines = [
            f"Total moments: <b>{stats.total}</b>",
            f"Days with moments: <b>{stats.days_with_events}</b>",
            f"Current streak: <b>{stats.current_streak}</b> days",
            f"Longest streak: <b>{stats.longest_streak}</b> days",
            f"This week / month / year: <b>{stats.this_week}</b> / "
            f"<b>{stats.this_month}</b> / <b>{stats.this_year}</b>",
            f"Oldest moment: <b>{stats.oldest_date}</b>",
            f"Most recent moment: <b>{stats.newest_date}</b>",
        ]
        self.stats_label.setText("<br>".join(lines))

    def delete_moment(self, event_id: Optional[int], checked: bool = False) -> None:
        """Delete a moment and refresh."""
        if event_id is None:
            return
        self.bridge.submit(self.repository.delete_by_id(event_id), lambda _: self.refresh())

    def run_search(self) -> None:
        """Search moments and history for the typed text."""
        query = self.search_edit.text()
        if not query.strip():
            self.search_label.clear()
            return
        self.bridge.submit(self.search_service.search(query), self._show_search)

    def _show_search(self, results: SearchResults) -> None:
        if results.is_empty():
            self.search_label.setText("<i>No results.</i>")
            return
        lines: List[str] = []
        if results.moments:
            lines.append(f"<b>Your moments ({len(results.moments)})</b>")
            lines += [f"{e.date} {html.escape(e.title)}" for e in results.moments]
        if results.history:
            lines.append(f"<b>History ({len(results.history)})</b>")
            lines += [f"{key} {_format_year(e.year)} {html.escape(e.title)}" for key, e in results.history]
        self.search_label.setText("<br>".join(lines))

    def prev_day(self) -> None:
        """Navigate to previous day."""
        self.date -= datetime.timedelta(days=1)
        self.refresh()

    def next_day(self) -> None:
        """Navigate to next day."""
        self.date += datetime.timedelta(days=1)
        self.refresh()

    def showEvent(self, a0: QShowEvent | None) -> None:
        """Reset to today and refresh when shown."""
        self.date = datetime.date.today()
        self.refresh()
        super().showEvent(a0)

    def event(self, a0: QEvent | None) -> bool:
        """Hide when focus is lost, like a native tray popup."""
        if a0 is not None and a0.type() == QEvent.WindowDeactivate:  # pyright: ignore[reportUnknownMemberType, reportAttributeAccessIssue]
            self.hide()
        return super().event(a0)
