"""Shift services."""

from modules.shifts.services.shift_service import ShiftService

__all__ = ["ShiftService"]
