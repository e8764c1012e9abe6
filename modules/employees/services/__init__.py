"""Employee services."""

from modules.employees.services.directory import EMPLOYEE_SORT_KEYS, EMPLOYEES_ENDPOINT, EmployeeDirectory

__all__ = ["EMPLOYEE_SORT_KEYS", "EMPLOYEES_ENDPOINT", "EmployeeDirectory"]
