#!/usr/bin/env python3
"""
Plugin loader for dynamic command discovery and loading
Scans the commands package, instantiates each command and maps its keywords
"""

import importlib
import inspect
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .commands.base_command import BaseCommand


class PluginLoader:
    """Handles dynamic loading and discovery of command plugins"""

    def __init__(self, bot, commands_dir: str = None):
        self.bot = bot
        self.logger = bot.logger
        self.commands_dir = commands_dir or os.path.join(os.path.dirname(__file__), 'commands')
        self.loaded_plugins: Dict[str, BaseCommand] = {}
        self.plugin_metadata: Dict[str, Dict[str, Any]] = {}
        self.keyword_mappings: Dict[str, str] = {}  # keyword -> plugin_name

    def discover_plugins(self) -> List[str]:
        """Discover all Python files in the commands directory that could be plugins"""
        plugin_files = []
        commands_path = Path(self.commands_dir)

        if not commands_path.exists():
            self.logger.error(f"Commands directory does not exist: {self.commands_dir}")
            return plugin_files

        for file_path in sorted(commands_path.glob("*.py")):
            if file_path.name not in ["__init__.py", "base_command.py"]:
                plugin_files.append(file_path.stem)

        self.logger.info(f"Discovered {len(plugin_files)} potential plugin files: {plugin_files}")
        return plugin_files

    def load_plugin(self, plugin_name: str) -> Optional[BaseCommand]:
        """Load a single plugin by module name"""
        try:
            module_path = f"{__package__}.commands.{plugin_name}"
            if module_path in sys.modules:
                module = sys.modules[module_path]
            else:
                module = importlib.import_module(module_path)

            # One command class per module
            command_class = None
            for _, obj in inspect.getmembers(module, inspect.isclass):
                if (issubclass(obj, BaseCommand) and
                        obj is not BaseCommand and
                        obj.__module__ == module_path):
                    command_class = obj
                    break

            if not command_class:
                self.logger.warning(f"No valid command class found in {plugin_name}")
                return None

            plugin_instance = command_class(self.bot)
            if not plugin_instance.name:
                plugin_instance.name = command_class.__name__.lower().replace('command', '')

            self.logger.info(f"Successfully loaded plugin: {plugin_instance.name} from {plugin_name}")
            return plugin_instance

        except Exception as e:
            self.logger.error(f"Failed to load plugin {plugin_name}: {e}")
            return None

    def load_all_plugins(self) -> Dict[str, BaseCommand]:
        """Load all discovered plugins"""
        loaded_plugins = {}
        for plugin_file in self.discover_plugins():
            plugin_instance = self.load_plugin(plugin_file)
            if not plugin_instance:
                continue

            metadata = plugin_instance.get_metadata()
            for issue in self.validate_plugin(plugin_instance):
                self.logger.warning(f"Plugin {metadata['name']}: {issue}")

            loaded_plugins[metadata['name']] = plugin_instance
            self.plugin_metadata[metadata['name']] = metadata
            self._build_keyword_mappings(metadata['name'], metadata)

        self.loaded_plugins = loaded_plugins
        self.logger.info(f"Loaded {len(loaded_plugins)} plugins: {list(loaded_plugins.keys())}")
        return loaded_plugins

    def _build_keyword_mappings(self, plugin_name: str, metadata: Dict[str, Any]):
        for keyword in metadata.get('keywords', []):
            self.keyword_mappings[keyword.lower()] = plugin_name

    def get_plugin_by_keyword(self, keyword: str) -> Optional[BaseCommand]:
        """Get a plugin instance by exact (case-insensitive) keyword"""
        plugin_name = self.keyword_mappings.get(keyword.lower())
        if plugin_name:
            return self.loaded_plugins.get(plugin_name)
        return None

    def get_plugin_by_name(self, name: str) -> Optional[BaseCommand]:
        return self.loaded_plugins.get(name)

    def validate_plugin(self, plugin_instance: BaseCommand) -> List[str]:
        """Validate a plugin instance and return any issues"""
        issues = []
        metadata = plugin_instance.get_metadata()

        if not metadata.get('description'):
            issues.append("Plugin missing 'description' metadata")

        if not metadata.get('keywords'):
            issues.append("Plugin has no keywords")

        for keyword in metadata.get('keywords', []):
            existing_plugin = self.keyword_mappings.get(keyword.lower())
            if existing_plugin and existing_plugin != metadata['name']:
                issues.append(f"Keyword '{keyword}' conflicts with plugin '{existing_plugin}'")

        return issues
