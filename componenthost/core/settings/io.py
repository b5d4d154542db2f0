"""
Disk primitives for the settings file: read, atomic write, backups, recovery.

Keys are written in insertion order. The order of user components is
meaningful for name lookups, so nothing here sorts.
"""

from __future__ import annotations

import json
import os
import shutil
import tempfile
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ReadResult:
    ok: bool
    data: Dict[str, Any]
    error: Optional[str] = None


def read_json_file(path: str) -> ReadResult:
    try:
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
    except FileNotFoundError:
        return ReadResult(ok=False, data={}, error="missing")
    except json.JSONDecodeError as e:
        return ReadResult(ok=False, data={}, error=f"corrupt_json:{e}")
    except OSError as e:
        return ReadResult(ok=False, data={}, error=str(e))
    if not isinstance(obj, dict):
        return ReadResult(ok=False, data={}, error="not_object")
    return ReadResult(ok=True, data=obj)


def stash_file(path: str, backups_dir: str, *, reason: str, max_backups: int = 10, move: bool = False) -> Optional[str]:
    """
    Copy (or move) `path` to backups/<name>.<ts>.<reason>.json and keep only the
    newest `max_backups` stashes of that file.
    """
    if not os.path.exists(path):
        return None
    os.makedirs(backups_dir, exist_ok=True)
    base = os.path.basename(path)
    out = os.path.join(backups_dir, f"{base}.{time.strftime('%Y%m%d_%H%M%S', time.gmtime())}.{reason}.json")
    try:
        if move:
            shutil.move(path, out)
        else:
            shutil.copy2(path, out)
    except OSError:
        return None

    stashes = sorted(
        (os.path.join(backups_dir, f) for f in os.listdir(backups_dir) if f.startswith(base + ".")),
        key=os.path.getmtime,
        reverse=True,
    )
    for old in stashes[max_backups:]:
        try:
            os.remove(old)
        except OSError:
            pass
    return out


def atomic_write_json(path: str, data: Dict[str, Any], backups_dir: str, *, max_backups: int = 10) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    stash_file(path, backups_dir, reason="prewrite", max_backups=max_backups)
    fd, tmp = tempfile.mkstemp(prefix=".tmp_", suffix=".json", dir=os.path.dirname(path) or ".")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.write("\n")
        os.replace(tmp, path)
    finally:
        if os.path.exists(tmp):
            os.remove(tmp)


def recover_from_corrupt(path: str, backups_dir: str, last_known_good_dir: str, *, max_backups: int = 10) -> Tuple[Dict[str, Any], bool]:
    """
    Move the unreadable file aside as *.corrupt.json, then restore the last
    known good copy if there is one. Returns (data, recovered).
    """
    stash_file(path, backups_dir, reason="corrupt", max_backups=max_backups, move=True)
    rr = read_json_file(os.path.join(last_known_good_dir, os.path.basename(path)))
    if not rr.ok:
        return {}, False
    atomic_write_json(path, rr.data, backups_dir, max_backups=max_backups)
    return rr.data, True


def snapshot_last_known_good(path: str, last_known_good_dir: str) -> None:
    if not os.path.isfile(path):
        return
    os.makedirs(last_known_good_dir, exist_ok=True)
    try:
        shutil.copy2(path, os.path.join(last_known_good_dir, os.path.basename(path)))
    except OSError:
        pass
