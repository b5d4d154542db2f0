from __future__ import annotations

import threading
from typing import Any, Dict, List


class StyleInjector:
    """In-process table of named style rules applied by the host."""

    def __init__(self, *, logger: Any = None) -> None:
        self.logger = logger
        self._lock = threading.Lock()
        self._styles: Dict[str, str] = {}

    def add(self, name: str, style: str) -> None:
        name = str(name or "").strip()
        if not name:
            raise ValueError("style name required")
        with self._lock:
            self._styles[name] = str(style or "")

    def remove(self, name: str) -> None:
        # removing an unknown style is a no-op
        with self._lock:
            self._styles.pop(str(name), None)

    def get(self, name: str) -> str | None:
        with self._lock:
            return self._styles.get(name)

    def names(self) -> List[str]:
        with self._lock:
            return list(self._styles.keys())
