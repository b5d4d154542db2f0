from componenthost.core.settings.paths import SettingsFsPaths
from componenthost.core.settings.store import SettingsFile, SettingsStore

__all__ = ["SettingsFsPaths", "SettingsFile", "SettingsStore"]
