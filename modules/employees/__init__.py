"""
Employees Module.

Employee directory listing.
"""

from modules.employees.employees_module import EmployeesModule

__all__ = ["EmployeesModule"]
