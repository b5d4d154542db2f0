from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class SettingsFsPaths:
    root: str = "."

    @property
    def config_dir(self) -> str:
        return os.path.join(self.root, "config")

    @property
    def backups_dir(self) -> str:
        return os.path.join(self.config_dir, "backups")

    @property
    def last_known_good_dir(self) -> str:
        return os.path.join(self.backups_dir, "last_known_good")

    @property
    def logs_dir(self) -> str:
        return os.path.join(self.root, "logs")

    # Files
    @property
    def settings(self) -> str:
        return os.path.join(self.config_dir, "settings.json")

    @property
    def audit_log(self) -> str:
        return os.path.join(self.logs_dir, "component_events.jsonl")
