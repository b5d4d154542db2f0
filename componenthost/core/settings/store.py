from __future__ import annotations

"""
Settings store: the single persistence boundary for user components.

The store keeps an insertion-ordered mapping of name -> UserComponentRecord.
Callers mutate records in place and call commit() once per logical change.
Without filesystem paths the store is purely in-memory.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from componenthost.core.components.models import UserComponentRecord
from componenthost.core.errors import SettingsStoreError
from componenthost.core.settings.io import (
    atomic_write_json,
    read_json_file,
    recover_from_corrupt,
    snapshot_last_known_good,
)
from componenthost.core.settings.paths import SettingsFsPaths


class SettingsFile(BaseModel):
    """
    Stored in config/settings.json.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: int = Field(default=1, ge=1, le=10)
    user_components: Dict[str, UserComponentRecord] = Field(default_factory=dict)


class SettingsStore:
    def __init__(self, *, fs: Optional[SettingsFsPaths] = None, logger: Any = None, max_backups: int = 10):
        self.fs = fs
        self.logger = logger
        self.max_backups = int(max_backups)
        self._file = SettingsFile()

    @property
    def user_components(self) -> Dict[str, UserComponentRecord]:
        return self._file.user_components

    @property
    def persistent(self) -> bool:
        return self.fs is not None

    def load(self) -> "SettingsStore":
        if self.fs is None:
            return self
        rr = read_json_file(self.fs.settings)
        data: Dict[str, Any] = rr.data
        if not rr.ok and rr.error != "missing":
            data, recovered = recover_from_corrupt(
                self.fs.settings,
                self.fs.backups_dir,
                self.fs.last_known_good_dir,
                max_backups=self.max_backups,
            )
            if self.logger:
                self.logger.warning(f"settings.json unreadable ({rr.error}); recovered_from_last_known_good={recovered}")
        try:
            self._file = SettingsFile.model_validate(data)
        except ValidationError as e:
            raise SettingsStoreError("Settings file failed validation.", path=self.fs.settings, error=str(e)[:300]) from e
        return self

    def commit(self) -> None:
        if self.fs is None:
            return
        raw = self._file.model_dump(mode="json")
        atomic_write_json(self.fs.settings, raw, self.fs.backups_dir, max_backups=self.max_backups)
        snapshot_last_known_good(self.fs.settings, self.fs.last_known_good_dir)

    def export(self) -> Dict[str, Any]:
        return self._file.model_dump(mode="json")
