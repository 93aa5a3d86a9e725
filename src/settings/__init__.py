"""Phase settings provider backed by a TOML file."""

from .parser import SettingsError, load_settings_file, parse_settings
from .store import SettingsStore
from .watcher import SettingsFileWatcher

__all__ = [
    "SettingsError",
    "SettingsFileWatcher",
    "SettingsStore",
    "load_settings_file",
    "parse_settings",
]
