"""
Conftest for Salary Module Tests.

Provides settings, a mocked API client and sample salary rows.
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from core.config import ConsoleSettings
from core.notifications import Notifier
from modules.salary.schemas import SalaryRow


@pytest.fixture
def salary_settings(tmp_path):
    """Settings isolated from any local .env file."""
    return ConsoleSettings(_env_file=None, export_dir=str(tmp_path / "exports"))


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def mock_api():
    api = MagicMock()
    api.get = AsyncMock(return_value={"data": [], "total": 0, "totalPages": 1})
    return api


@pytest.fixture
def salary_rows():
    return [
        SalaryRow.model_validate({
            "name": "Rahim Uddin",
            "email": "rahim@example.com",
            "accountNumber": 2781100099001,
            "salary": 15000,
            "perDaySalary": 500,
            "present": 26,
            "absent": 4,
            "total": "13000.005",
        }),
        SalaryRow(
            name="",
            email="karim@example.com",
            account_number="",
            salary=Decimal("87000"),
            per_day_salary=Decimal("2900"),
            total=Decimal("87000"),
        ),
    ]
