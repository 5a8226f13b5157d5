"""
Presentation layer: view protocol, console view and the UI binder.
"""

from timesheet_vault.ui.binder import UIBinder
from timesheet_vault.ui.view import ConsoleView, StatusClass, TimesheetView

__all__ = ["ConsoleView", "StatusClass", "TimesheetView", "UIBinder"]
