from .store import JsonSettingsStore, SettingNotFoundError, SettingsStore

__all__ = ["JsonSettingsStore", "SettingNotFoundError", "SettingsStore"]
