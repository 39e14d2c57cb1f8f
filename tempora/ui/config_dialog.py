"""Configuration dialog for user settings."""
from PyQt5.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QCheckBox, QTimeEdit,
    QDialogButtonBox, QLabel, QWidget
)
from PyQt5.QtCore import Qt, QTime
from typing import Optional
from ..config import Config


class ConfigDialog(QDialog):
    """Dialog for the daily notification settings."""

    def __init__(self, config: Config, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.config = config
        self.setWindowTitle("Tempora Settings")
        self.setWindowFlags(self.windowFlags() & ~Qt.WindowContextHelpButtonHint)  # pyright: ignore[reportUnknownMemberType, reportAttributeAccessIssue, reportUnknownArgumentType]
        self.setMinimumWidth(350)

        layout = QVBoxLayout()
        self.setLayout(layout)

        form = QFormLayout()

        self.enabled_check = QCheckBox("Daily notification")
        self.enabled_check.setChecked(config.notifications_enabled)
        form.addRow("Notify:", self.enabled_check)

        notify_help = QLabel("Get a daily reminder of what happened on this day in history")
        notify_help.setStyleSheet("color: gray; font-size: 10px;")
        form.addRow("", notify_help)

        self.time_edit = QTimeEdit(QTime(config.notification_hour, config.notification_minute))
        self.time_edit.setDisplayFormat("HH:mm")
        self.time_edit.setEnabled(config.notifications_enabled)
        self.enabled_check.toggled.connect(self.time_edit.setEnabled)  # pyright: ignore[reportUnknownMemberType]
        form.addRow("At:", self.time_edit)

        layout.addLayout(form)
        layout.addSpacing(20)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel  # pyright: ignore[reportArgumentType, reportCallIssue]
        )
        buttons.accepted.connect(self.save_and_close)  # pyright: ignore[reportUnknownMemberType]
        buttons.rejected.connect(self.reject)  # pyright: ignore[reportUnknownMemberType]
        layout.addWidget(buttons)

    def save_and_close(self) -> None:
        """Save settings and close dialog."""
        time = self.time_edit.time()
        self.config.notifications_enabled = self.enabled_check.isChecked()
        self.config.notification_hour = time.hour()
        self.config.notification_minute = time.minute()
        self.config.save()
        self.accept()
