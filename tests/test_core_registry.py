"""
Unit Tests for core.registry module.

Tests ModuleRegistry and ModuleLoader classes.
"""

from unittest.mock import MagicMock

import pytest

from core.interface import IAppModule
from core.registry import ModuleLoader, ModuleRegistry
from core.roles import Role

FEATURE_PACKAGES = ["modules.employees", "modules.leave", "modules.salary", "modules.shifts"]


class TestModuleRegistry:
    """Tests for ModuleRegistry class."""

    def test_instances_are_independent(self, mock_module):
        first, second = ModuleRegistry(), ModuleRegistry()
        first.register(mock_module)
        assert second.get_module_names() == []

    def test_register_module(self, mock_module):
        """Test register() adds module to registry."""
        registry = ModuleRegistry()

        assert registry.register(mock_module) is True
        assert registry.get_module("sample") is mock_module
        assert registry.get_all_modules() == [mock_module]

    def test_register_duplicate(self, mock_module):
        registry = ModuleRegistry()
        registry.register(mock_module)
        assert registry.register(mock_module) is False

    def test_register_calls_on_entry_with_context(self, mock_module, app_context):
        registry = ModuleRegistry(app_context)
        registry.register(mock_module)
        assert mock_module.entered_with is app_context

    def test_register_without_context_defers_on_entry(self, mock_module):
        ModuleRegistry().register(mock_module)
        assert mock_module.entered_with is None

    def test_failing_on_entry_is_logged(self, app_context):
        module = MagicMock(spec=IAppModule)
        module.get_module_name.return_value = "broken"
        module.on_entry.side_effect = RuntimeError("boom")

        registry = ModuleRegistry(app_context)

        assert registry.register(module) is True
        assert registry.get_module_names() == ["broken"]

    def test_unregister_calls_on_shutdown(self, mock_module):
        registry = ModuleRegistry()
        registry.register(mock_module)

        assert registry.unregister("sample") is True
        assert mock_module.shut_down is True
        assert registry.unregister("sample") is False

    def test_menu_for_role(self, mock_module):
        registry = ModuleRegistry()
        registry.register(mock_module)

        assert registry.get_menu_for_role(Role.ADMIN) == [
            {"label": "sample", "route": "/sample", "command": None}
        ]
        assert registry.get_menu_for_role(Role.EMPLOYEE) == []

    def test_shutdown_all(self, mock_module):
        registry = ModuleRegistry()
        registry.register(mock_module)
        registry.shutdown_all()
        assert registry.get_module_names() == []
        assert mock_module.shut_down


class TestModuleLoader:
    """Tests for ModuleLoader."""

    def test_load_feature_packages(self, app_context):
        registry = ModuleRegistry(app_context)

        count = ModuleLoader(registry).load_packages(FEATURE_PACKAGES)

        assert count == 4
        assert registry.get_module_names() == ["employees", "leave", "salary", "shifts"]

    def test_staff_menu(self, app_context):
        registry = ModuleRegistry(app_context)
        ModuleLoader(registry).load_packages(FEATURE_PACKAGES)

        labels = [item["label"] for item in registry.get_menu_for_role(Role.HR_ADMIN)]

        assert labels == ["Employees", "Applied Leave", "Salary Sheet", "Shifts"]
        assert registry.get_menu_for_role(Role.CLIENT) == []

    def test_missing_package_is_skipped(self):
        registry = ModuleRegistry()
        assert ModuleLoader(registry).load_packages(["modules.does_not_exist"]) == 0

    @pytest.mark.parametrize("package", ["core.roles"])
    def test_package_without_modules(self, package):
        assert ModuleLoader(ModuleRegistry()).load_packages([package]) == 0
