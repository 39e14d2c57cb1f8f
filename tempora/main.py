#!/usr/bin/env python3
"""
Main entrypoint: builds the store and services, then starts the tray UI.
"""
import logging
import sys
from dataclasses import dataclass
from typing import Optional
from .config import BACKEND, Config, settings
from .db import EventRepository, select_backend
from .errors import StoreUnavailableError
from .logging_setup import setup_logging
from .services import DailyNotificationScheduler, NotificationService, SearchService, StatsService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Everything the front end talks to, built once per process."""
    repository: EventRepository
    stats_service: StatsService
    search_service: SearchService
    scheduler: DailyNotificationScheduler
    config: Config


def build_app_context(backend_kind: str = BACKEND, config: Optional[Config] = None) -> AppContext:
    """Select the backend and wire the services around one repository."""
    repository = EventRepository(select_backend(backend_kind))
    return AppContext(
        repository=repository,
        stats_service=StatsService(repository),
        search_service=SearchService(repository),
        scheduler=DailyNotificationScheduler(NotificationService()),
        config=config or settings,
    )


def main() -> int:
    setup_logging()
    context = build_app_context()

    from PyQt5.QtWidgets import QApplication
    from .ui import AsyncBridge, TrayApp

    app = QApplication(sys.argv)
    # Keep the tray alive when the popup or a dialog closes
    app.setQuitOnLastWindowClosed(False)

    bridge = AsyncBridge()
    bridge.start()
    try:
        bridge.run_blocking(context.repository.initialize())
    except StoreUnavailableError as e:
        logger.error("Event store unavailable: %s", e)
        bridge.stop()
        return 1

    tray = TrayApp(bridge, context.repository, context.stats_service,
                   context.search_service, context.scheduler, context.config)
    try:
        return app.exec_()
    finally:
        tray.scheduler.cancel_all()
        bridge.stop()


if __name__ == "__main__":
    sys.exit(main())
