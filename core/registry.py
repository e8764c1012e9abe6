"""
Module Registry - Feature module registration and role-based menus.
Implements Open/Closed Principle (OCP) for extensibility.
"""
import importlib
import logging
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Type

from core.interface import IAppModule
from core.roles import Role

if TYPE_CHECKING:
    from core.app_context import AppContext


class ModuleRegistry:
    """
    Registry for managing feature modules.

    One registry belongs to one AppContext; it is passed around explicitly
    instead of living in module-level state.
    """

    def __init__(self, context: Optional["AppContext"] = None) -> None:
        self._modules: Dict[str, IAppModule] = {}
        self._logger = logging.getLogger(__name__)
        self._context = context

    def set_context(self, context: "AppContext") -> None:
        """Set the application context for module initialization."""
        self._context = context

    def register(self, module: IAppModule) -> bool:
        """
        Register a module with the registry.

        Args:
            module: The module instance to register

        Returns:
            bool: True if registration successful, False otherwise
        """
        module_name = module.get_module_name()

        if module_name in self._modules:
            self._logger.warning(f"Module '{module_name}' already registered. Skipping.")
            return False

        self._modules[module_name] = module
        self._logger.info(f"Module '{module_name}' registered successfully.")

        if self._context:
            try:
                module.on_entry(self._context)
            except Exception as e:
                self._logger.error(f"Failed to initialize module '{module_name}': {e}")

        return True

    def register_class(self, module_class: Type[IAppModule]) -> bool:
        """
        Register a module by its class (instantiates automatically).

        Returns:
            bool: True if registration successful, False otherwise
        """
        try:
            module_instance = module_class()
        except Exception as e:
            self._logger.error(f"Failed to instantiate module class: {e}")
            return False
        return self.register(module_instance)

    def unregister(self, module_name: str) -> bool:
        """
        Unregister a module from the registry.

        Returns:
            bool: True if unregistration successful, False otherwise
        """
        if module_name not in self._modules:
            self._logger.warning(f"Module '{module_name}' not found in registry.")
            return False

        module = self._modules[module_name]
        try:
            module.on_shutdown()
        except Exception as e:
            self._logger.error(f"Error during module '{module_name}' shutdown: {e}")

        del self._modules[module_name]
        self._logger.info(f"Module '{module_name}' unregistered.")
        return True

    def get_module(self, module_name: str) -> Optional[IAppModule]:
        return self._modules.get(module_name)

    def get_all_modules(self) -> List[IAppModule]:
        """Get all registered modules."""
        return list(self._modules.values())

    def get_module_names(self) -> List[str]:
        """Get names of all registered modules."""
        return list(self._modules.keys())

    def get_menu_for_role(self, role: Role) -> List[dict]:
        """Get menu configurations of the modules a role may open, in registration order."""
        configs = []
        for module in self._modules.values():
            if not module.is_visible_to(role):
                continue
            try:
                config = module.get_menu_config()
            except Exception as e:
                self._logger.error(f"Error getting menu config from module: {e}")
                continue
            if config:
                configs.append(config)
        return configs

    def shutdown_all(self) -> None:
        """Shutdown all registered modules."""
        for module_name in list(self._modules.keys()):
            self.unregister(module_name)
        self._logger.info("All modules shut down.")


class ModuleLoader:
    """
    Loader that imports feature packages and registers their IAppModule classes.
    """

    def __init__(self, registry: ModuleRegistry) -> None:
        self._registry = registry
        self._logger = logging.getLogger(__name__)

    def load_packages(self, package_names: Iterable[str]) -> int:
        """
        Import each package and register every IAppModule subclass it exports.

        Args:
            package_names: Dotted package names (e.g. "modules.leave")

        Returns:
            int: Number of modules loaded
        """
        loaded_count = 0

        for package_name in package_names:
            try:
                package = importlib.import_module(package_name)
            except ImportError as e:
                self._logger.error(f"Error loading package module '{package_name}': {e}")
                continue

            for attr_name in dir(package):
                attr = getattr(package, attr_name)
                if (isinstance(attr, type) and
                        issubclass(attr, IAppModule) and
                        attr is not IAppModule):
                    if self._registry.register_class(attr):
                        loaded_count += 1
                        self._logger.info(f"Loaded package module: {package_name}")

        return loaded_count
