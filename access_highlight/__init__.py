"""
Access IRC Highlight - highlight list management for Access IRC
"""

__version__ = "0.1.0"
__author__ = "Access IRC Contributors"
__license__ = "MIT"

from .config_manager import ConfigManager
from .highlight import Action, Command, HighlightEditor, parse_command
from .plugin_manager import PluginManager, PluginContext

__all__ = [
    "ConfigManager",
    "Action",
    "Command",
    "HighlightEditor",
    "parse_command",
    "PluginManager",
    "PluginContext",
]
