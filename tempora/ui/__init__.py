"""UI components."""
from .async_bridge import AsyncBridge
from .tray import TrayApp
from .popup import TodayPopup
from .moment_dialog import MomentDialog
from .config_dialog import ConfigDialog

__all__ = ['AsyncBridge', 'TrayApp', 'TodayPopup', 'MomentDialog', 'ConfigDialog']
