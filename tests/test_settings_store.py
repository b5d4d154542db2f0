from __future__ import annotations

import json
import os

import pytest

from componenthost.core.components.models import ComponentSettings, UserComponentRecord, UserMetadata
from componenthost.core.errors import SettingsStoreError
from componenthost.core.settings import SettingsFsPaths, SettingsStore


def _rec(name: str, **opts) -> UserComponentRecord:
    return UserComponentRecord(
        code="{}",
        metadata=UserMetadata(name=name),
        settings=ComponentSettings(options=opts),
    )


def test_missing_file_loads_empty(settings_fs):
    store = SettingsStore(fs=settings_fs).load()
    assert store.user_components == {}
    assert not os.path.exists(settings_fs.settings)


def test_in_memory_store_never_touches_disk(tmp_path):
    store = SettingsStore()
    store.user_components["a"] = _rec("a")
    store.commit()
    assert store.persistent is False
    assert os.listdir(tmp_path) == []


def test_commit_roundtrip_preserves_insertion_order(settings_fs):
    store = SettingsStore(fs=settings_fs).load()
    for name in ("zeta", "alpha", "mid"):
        store.user_components[name] = _rec(name, k=[1, 2])
    store.commit()

    again = SettingsStore(fs=settings_fs).load()
    assert list(again.user_components.keys()) == ["zeta", "alpha", "mid"]
    assert again.user_components["alpha"].settings.options == {"k": [1, 2]}


def test_commit_writes_last_known_good_and_prewrite_backup(settings_fs):
    store = SettingsStore(fs=settings_fs).load()
    store.user_components["a"] = _rec("a")
    store.commit()
    store.user_components["b"] = _rec("b")
    store.commit()

    assert os.path.exists(os.path.join(settings_fs.last_known_good_dir, "settings.json"))
    backups = os.listdir(settings_fs.backups_dir)
    assert any(b.startswith("settings.json.") and "prewrite" in b for b in backups)


def test_corrupt_file_recovers_from_last_known_good(settings_fs):
    store = SettingsStore(fs=settings_fs).load()
    store.user_components["a"] = _rec("a")
    store.commit()

    with open(settings_fs.settings, "w", encoding="utf-8") as f:
        f.write("{not json")

    recovered = SettingsStore(fs=settings_fs).load()
    assert list(recovered.user_components.keys()) == ["a"]
    assert any("corrupt" in b for b in os.listdir(settings_fs.backups_dir))


def test_corrupt_file_without_backup_starts_empty(settings_fs):
    os.makedirs(settings_fs.config_dir, exist_ok=True)
    with open(settings_fs.settings, "w", encoding="utf-8") as f:
        f.write("[]")
    assert SettingsStore(fs=settings_fs).load().user_components == {}


def test_schema_violation_raises(settings_fs):
    os.makedirs(settings_fs.config_dir, exist_ok=True)
    with open(settings_fs.settings, "w", encoding="utf-8") as f:
        json.dump({"schema_version": 1, "user_components": {"a": {"code": "{}"}}}, f)
    with pytest.raises(SettingsStoreError):
        SettingsStore(fs=settings_fs).load()


def test_export_is_json_safe(tmp_path):
    store = SettingsStore(fs=SettingsFsPaths(str(tmp_path)))
    store.user_components["a"] = _rec("a", when="now")
    out = store.export()
    json.dumps(out)
    assert out["user_components"]["a"]["metadata"]["name"] == "a"


def test_backups_are_capped_per_file(settings_fs):
    store = SettingsStore(fs=settings_fs, max_backups=2).load()
    for i in range(5):
        store.user_components[f"c{i}"] = _rec(f"c{i}")
        store.commit()
    stashes = [b for b in os.listdir(settings_fs.backups_dir) if b.startswith("settings.json.")]
    assert 1 <= len(stashes) <= 2
