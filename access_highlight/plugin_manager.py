"""
Plugin Manager for Access IRC

Handles plugin discovery, loading, and hook execution.
"""

import sys
import importlib.util
from pathlib import Path
from typing import Optional, Dict, Any, List, Callable

import pluggy

from .plugin_specs import AccessIRCHookSpec


class PluginContext:
    """
    Context object passed to plugins providing safe access to application APIs.

    This is the main interface plugins use to interact with Access IRC.
    """

    def __init__(self, plugin_manager: 'PluginManager'):
        self._pm = plugin_manager

    # =========================================================================
    # UI Operations
    # =========================================================================

    def add_system_message(self, server: str, target: str, message: str) -> None:
        """Add a system message to a channel/PM buffer.

        Args:
            server: Server name
            target: Channel or PM target
            message: Message to display
        """
        self._pm.output(message)

    # =========================================================================
    # Configuration
    # =========================================================================

    def get_option(self, key: str, default: Any = None) -> Any:
        """Get a configuration value.

        Args:
            key: Config key (dot-separated for nested, e.g., 'look.highlight')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        if not self._pm.config_manager:
            return default
        return self._pm.config_manager.get_option(key, default)

    def set_option(self, key: str, value: Any) -> bool:
        """Set and save a configuration value.

        Args:
            key: Config key (dot-separated for nested)
            value: New value

        Returns:
            True if the value was saved
        """
        if not self._pm.config_manager:
            return False
        return self._pm.config_manager.set_option(key, value)


class PluginManager:
    """
    Manages plugin discovery, loading, and hook execution.
    """

    def __init__(self, output: Callable[[str], None] = print):
        """
        Args:
            output: Callable that displays system messages to the user
        """
        self.output = output
        self.plugins_dir: Optional[Path] = None
        self.loaded_plugins: Dict[str, Any] = {}
        self.config_manager = None

        self.pm = pluggy.PluginManager("access_irc")
        self.pm.add_hookspecs(AccessIRCHookSpec)
        self.ctx = PluginContext(self)

    def set_managers(self, config_manager) -> None:
        """Set references to application managers.

        Args:
            config_manager: ConfigManager instance
        """
        self.config_manager = config_manager
        if config_manager:
            self.plugins_dir = config_manager.get_plugins_directory()

    def register_plugin(self, plugin: Any, name: str) -> bool:
        """Register an already-instantiated plugin.

        Args:
            plugin: Plugin object with @hookimpl methods
            name: Plugin name

        Returns:
            True if registered
        """
        if name in self.loaded_plugins:
            print(f"Plugin {name} already loaded")
            return False

        self.pm.register(plugin, name=name)
        self.loaded_plugins[name] = {
            'module': sys.modules.get(type(plugin).__module__),
            'instance': plugin,
            'file': None
        }
        return True

    def load_builtin_plugins(self) -> int:
        """Register the plugins shipped with this package.

        Returns:
            Number of plugins registered
        """
        from .highlight_plugin import Plugin as HighlightPlugin

        loaded = 0
        if self.register_plugin(HighlightPlugin(), "highlight"):
            loaded += 1
        return loaded

    def discover_and_load_plugins(self) -> int:
        """Discover and load all plugins from the plugins directory.

        Returns:
            Number of plugins loaded
        """
        if not self.plugins_dir:
            return 0

        # Create plugins directory if it doesn't exist
        self.plugins_dir.mkdir(parents=True, exist_ok=True)

        loaded = 0

        # Load Python files from plugins directory
        for plugin_file in sorted(self.plugins_dir.glob("*.py")):
            if plugin_file.name.startswith("_"):
                continue

            try:
                if self._load_plugin_file(plugin_file):
                    loaded += 1
            except Exception as e:
                print(f"Error loading plugin {plugin_file.name}: {e}")

        # Load plugin packages (directories with __init__.py)
        for plugin_dir in sorted(self.plugins_dir.iterdir()):
            if plugin_dir.is_dir() and (plugin_dir / "__init__.py").exists():
                if plugin_dir.name.startswith("_"):
                    continue

                try:
                    if self._load_plugin_file(plugin_dir / "__init__.py", plugin_dir.name):
                        loaded += 1
                except Exception as e:
                    print(f"Error loading plugin package {plugin_dir.name}: {e}")

        return loaded

    def _load_plugin_file(self, plugin_file: Path, plugin_name: Optional[str] = None) -> bool:
        """Load a single plugin file.

        Args:
            plugin_file: Path to plugin .py file
            plugin_name: Name to register under (defaults to the file stem)

        Returns:
            True if loaded successfully
        """
        plugin_name = plugin_name or plugin_file.stem

        if plugin_name in self.loaded_plugins:
            print(f"Plugin {plugin_name} already loaded")
            return False

        spec = importlib.util.spec_from_file_location(
            f"access_irc_plugin_{plugin_name}",
            plugin_file
        )
        if spec is None or spec.loader is None:
            return False

        module = importlib.util.module_from_spec(spec)
        sys.modules[spec.name] = module

        try:
            spec.loader.exec_module(module)
        except Exception as e:
            print(f"Error executing plugin {plugin_name}: {e}")
            del sys.modules[spec.name]
            return False

        # Check for a Plugin class
        if hasattr(module, 'Plugin'):
            try:
                plugin_instance = module.Plugin()
            except Exception as e:
                print(f"Error instantiating Plugin class in {plugin_name}: {e}")
                del sys.modules[spec.name]
                return False
        # Check for a setup function that returns a plugin instance
        elif hasattr(module, 'setup'):
            try:
                plugin_instance = module.setup(self.ctx)
            except Exception as e:
                print(f"Error in setup() for {plugin_name}: {e}")
                del sys.modules[spec.name]
                return False
        else:
            # Use the module itself as a plugin (for simple scripts)
            plugin_instance = module

        self.pm.register(plugin_instance, name=plugin_name)
        self.loaded_plugins[plugin_name] = {
            'module': module,
            'instance': plugin_instance,
            'file': plugin_file
        }

        print(f"Loaded plugin: {plugin_name}")
        return True

    def unload_plugin(self, plugin_name: str) -> bool:
        """Unload a plugin.

        Args:
            plugin_name: Name of plugin to unload

        Returns:
            True if unloaded successfully
        """
        if plugin_name not in self.loaded_plugins:
            return False

        self.pm.unregister(name=plugin_name)

        module_name = f"access_irc_plugin_{plugin_name}"
        if module_name in sys.modules:
            del sys.modules[module_name]

        del self.loaded_plugins[plugin_name]
        print(f"Unloaded plugin: {plugin_name}")
        return True

    def reload_plugin(self, plugin_name: str) -> bool:
        """Reload a plugin from its file.

        Built-in plugins have no file and cannot be reloaded.

        Args:
            plugin_name: Name of plugin to reload

        Returns:
            True if reloaded successfully
        """
        if plugin_name not in self.loaded_plugins:
            return False

        plugin_file = self.loaded_plugins[plugin_name]['file']
        if plugin_file is None:
            return False

        self.unload_plugin(plugin_name)
        return self._load_plugin_file(plugin_file, plugin_name)

    def get_loaded_plugins(self) -> List[str]:
        """Get list of loaded plugin names."""
        return list(self.loaded_plugins.keys())

    # =========================================================================
    # Hook Callers
    # =========================================================================

    def call_startup(self) -> None:
        """Call on_startup hooks."""
        try:
            self.pm.hook.on_startup(ctx=self.ctx)
        except Exception as e:
            print(f"Plugin error in on_startup: {e}")

    def call_shutdown(self) -> None:
        """Call on_shutdown hooks."""
        try:
            self.pm.hook.on_shutdown(ctx=self.ctx)
        except Exception as e:
            print(f"Plugin error in on_shutdown: {e}")

    def call_command(self, server: str, target: str, command: str, args: str) -> bool:
        """Call on_command hooks.

        Returns:
            True if a plugin handled the command
        """
        try:
            result = self.pm.hook.on_command(
                ctx=self.ctx, server=server, target=target,
                command=command, args=args
            )
            return result is True
        except Exception as e:
            print(f"Plugin error in on_command: {e}")
        return False

    def call_complete(self, command: str, args: str) -> List[str]:
        """Call on_complete hooks.

        Returns:
            Completion candidates (empty if no plugin knows the command)
        """
        try:
            result = self.pm.hook.on_complete(ctx=self.ctx, command=command, args=args)
            return list(result) if result else []
        except Exception as e:
            print(f"Plugin error in on_complete: {e}")
        return []

    def describe_commands(self) -> Dict[str, Dict[str, str]]:
        """Collect command descriptions from all plugins.

        Returns:
            dict mapping command name to its description dict
        """
        commands: Dict[str, Dict[str, str]] = {}
        try:
            for described in self.pm.hook.describe_commands(ctx=self.ctx):
                if isinstance(described, dict):
                    commands.update(described)
        except Exception as e:
            print(f"Plugin error in describe_commands: {e}")
        return commands
