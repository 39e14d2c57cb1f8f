"""Dialog for recording a new moment."""
import datetime
from typing import Optional, Tuple
from PyQt5.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QPlainTextEdit,
    QDateEdit, QDialogButtonBox, QWidget, QPushButton
)
from PyQt5.QtCore import Qt, QDate


class MomentDialog(QDialog):
    """Title, optional description and date of a moment."""

    def __init__(self, date: Optional[datetime.date] = None,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("New Moment")
        self.setWindowFlags(self.windowFlags() & ~Qt.WindowContextHelpButtonHint)  # pyright: ignore[reportUnknownMemberType, reportAttributeAccessIssue, reportUnknownArgumentType]
        self.setMinimumWidth(360)

        layout = QVBoxLayout()
        self.setLayout(layout)
        form = QFormLayout()

        self.title_edit = QLineEdit()
        self.title_edit.setPlaceholderText("What happened?")
        form.addRow("Title:", self.title_edit)

        self.description_edit = QPlainTextEdit()
        self.description_edit.setPlaceholderText("Details (optional)")
        self.description_edit.setMaximumHeight(100)
        form.addRow("Description:", self.description_edit)

        day = date or datetime.date.today()
        self.date_edit = QDateEdit(QDate(day.year, day.month, day.day))
        self.date_edit.setCalendarPopup(True)
        self.date_edit.setDisplayFormat("yyyy-MM-dd")
        form.addRow("Date:", self.date_edit)

        layout.addLayout(form)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel  # pyright: ignore[reportArgumentType, reportCallIssue]
        )
        buttons.accepted.connect(self.accept)  # pyright: ignore[reportUnknownMemberType]
        buttons.rejected.connect(self.reject)  # pyright: ignore[reportUnknownMemberType]
        layout.addWidget(buttons)

        # Blank titles never reach the store
        self.ok_button: QPushButton = buttons.button(QDialogButtonBox.StandardButton.Ok)  # pyright: ignore[reportAssignmentType]
        self.ok_button.setEnabled(False)
        self.title_edit.textChanged.connect(self._update_ok)  # pyright: ignore[reportUnknownMemberType]

    def _update_ok(self, text: str) -> None:
        self.ok_button.setEnabled(bool(text.strip()))

    def values(self) -> Tuple[str, str, str]:
        """Trimmed (title, description, YYYY-MM-DD date)."""
        return (
            self.title_edit.text().strip(),
            self.description_edit.toPlainText().strip(),
            self.date_edit.date().toString("yyyy-MM-dd"),
        )
