import importlib
import pkgutil
from typing import Dict, Type, Any, Optional
import logging
from .widget_base import SiteWidget


class WidgetRegistry:
    def __init__(self, plugin_package: Optional[str] = "masjid_widgets.plugins"):
        self.widgets: Dict[str, Type[SiteWidget]] = {}
        self.logger = logging.getLogger(__name__)
        if plugin_package:
            self.discover_plugins(plugin_package)

    def discover_plugins(self, plugin_package: str = "masjid_widgets.plugins") -> None:
        """Discover and register all widget plugins in the specified package"""
        package = importlib.import_module(plugin_package)
        self.logger.info(f"Discovering plugins in package: {plugin_package}")

        for _, name, is_pkg in pkgutil.iter_modules(package.__path__):
            if is_pkg:
                try:
                    module = importlib.import_module(f"{plugin_package}.{name}")
                    self.logger.debug(f"Found plugin module: {name}")
                    if hasattr(module, "register_widgets"):
                        module.register_widgets(self)
                        self.logger.info(f"Registered widgets from plugin: {name}")
                except Exception as e:
                    self.logger.error(f"Error loading plugin {name}: {e}")
                    self.logger.exception(e)

    def register_widget(self, widget_class: Type[SiteWidget]) -> None:
        """Register a new widget class"""
        self.logger.debug(f"Registering widget: {widget_class.name}")
        self.widgets[widget_class.name] = widget_class

    def create_widget(self, app, name: str, config: Optional[Dict[str, Any]]) -> Optional[SiteWidget]:
        """Create an instance of a registered widget unless it is disabled in config"""
        if name not in self.widgets:
            self.logger.warning(f"Widget '{name}' not found")
            return None

        config = config or {}
        if not config.get("enable", True):
            self.logger.info(f"Widget '{name}' disabled")
            return None

        return self.widgets[name](app, config)
