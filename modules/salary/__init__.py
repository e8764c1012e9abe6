"""
Salary Module.

Monthly salary sheet listing with spreadsheet and bank-letter exports.
"""

from modules.salary.salary_module import SalaryModule

__all__ = ["SalaryModule"]
