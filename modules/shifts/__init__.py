"""
Shifts Module.

Shift creation and editing.
"""

from modules.shifts.shifts_module import ShiftsModule

__all__ = ["ShiftsModule"]
