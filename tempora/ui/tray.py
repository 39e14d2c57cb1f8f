"""System tray application."""
import datetime
from typing import Optional
from PyQt5.QtWidgets import QSystemTrayIcon, QMenu, QAction, QApplication, QMessageBox
from PyQt5.QtGui import QIcon, QCursor
from ..config import Config
from ..db.event_repository import EventRepository
from ..services.daily_scheduler import DailyNotificationScheduler
from ..services.search_service import SearchService
from ..services.stats_service import StatsService
from .async_bridge import AsyncBridge
from .popup import TodayPopup
from .moment_dialog import MomentDialog
from .config_dialog import ConfigDialog

ICON_NORMAL = "x-office-calendar"


class TrayApp:
    """
    Tray icon and menu. Opens the today popup on click and keeps the
    daily notification in line with the user settings.
    """

    def __init__(self, bridge: AsyncBridge, repository: EventRepository,
                 stats_service: StatsService, search_service: SearchService,
                 scheduler: DailyNotificationScheduler, config: Config) -> None:
        self.bridge = bridge
        self.repository = repository
        self.scheduler = scheduler
        self.config = config
        self.popup = TodayPopup(bridge, repository, stats_service, search_service)

        self.tray_icon = QSystemTrayIcon(QIcon.fromTheme(ICON_NORMAL))
        self.tray_icon.setToolTip("Tempora")

        self.create_context_menu()
        self.tray_icon.activated.connect(self.on_tray_activated)  # pyright: ignore[reportGeneralTypeIssues]

        self.apply_notification_settings()
        self.tray_icon.show()

    def create_context_menu(self) -> None:
        """Create the context menu."""
        self.menu = QMenu()

        today_action: QAction = self.menu.addAction("Today...")  # pyright: ignore[reportUnknownMemberType, reportAssignmentType]
        today_action.triggered.connect(self.show_popup)

        add_action: QAction = self.menu.addAction("Add Moment...")  # pyright: ignore[reportUnknownMemberType, reportAssignmentType]
        add_action.triggered.connect(self.add_moment)
        self.menu.addSeparator()

        test_action: QAction = self.menu.addAction("Send Test Notification")  # pyright: ignore[reportUnknownMemberType, reportAssignmentType]
        test_action.triggered.connect(self.send_test_notification)

        settings_action: QAction = self.menu.addAction("Settings...")  # pyright: ignore[reportUnknownMemberType, reportAssignmentType]
        settings_action.triggered.connect(self.open_settings)
        self.menu.addSeparator()

        exit_action: QAction = self.menu.addAction("Exit")  # type: ignore[reportUnknownMemberType, reportAssignmentType]
        exit_action.triggered.connect(self.quit_app)

        self.tray_icon.setContextMenu(self.menu)

    def show_popup(self) -> None:
        """Show the today popup window."""
        self.popup.show()
        self.popup.activateWindow()

    def on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        """Handle tray icon activation."""
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            if self.popup.isVisible():
                self.popup.hide()
            else:
                self.show_popup()
        elif reason == QSystemTrayIcon.ActivationReason.Context:
            self.menu.popup(QCursor.pos())

    def add_moment(self, checked: bool = False, date: Optional[datetime.date] = None) -> None:
        """Ask for a moment and store it."""
        dialog = MomentDialog(date or self.popup.date)
        if not dialog.exec_():
            return
        title, description, day = dialog.values()
        self.bridge.submit(
            self.repository.create(title, description, day),
            lambda _: self.on_moment_saved(title),
            self.on_store_error,
        )

    def on_moment_saved(self, title: str) -> None:
        self.tray_icon.showMessage("Moment saved", title, QIcon.fromTheme(ICON_NORMAL), 3000)
        if self.popup.isVisible():
            self.popup.refresh()

    def on_store_error(self, error: BaseException) -> None:
        QMessageBox.warning(None, "Tempora", f"Could not save the moment:\n{error}")

    def send_test_notification(self) -> None:
        """Send today's notification now, falling back to a tray balloon."""
        if not self.scheduler.send_test_notification():
            self.tray_icon.showMessage("Tempora", "Test notification (desktop notifications unavailable)",
                                       QIcon.fromTheme(ICON_NORMAL), 5000)

    def apply_notification_settings(self) -> None:
        """Arm or cancel the daily notification from the current settings."""
        if self.config.notifications_enabled:
            self.scheduler.schedule(self.config.notification_hour, self.config.notification_minute)
        else:
            self.scheduler.cancel_all()

    def open_settings(self) -> None:
        """Open settings dialog."""
        dialog = ConfigDialog(self.config)
        if dialog.exec_():
            self.config.reload()
            self.apply_notification_settings()

    def quit_app(self) -> None:
        """Quit the application."""
        self.scheduler.cancel_all()
        self.tray_icon.hide()
        app_instance = QApplication.instance()
        if app_instance:
            app_instance.quit()
