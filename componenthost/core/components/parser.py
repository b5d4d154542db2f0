from __future__ import annotations

"""
Default input parser for submitted component code.

Component code is accepted as a JSON manifest. Nothing in it is imported or
executed here: `entry`, `reload` and `unload` are stored as strings on the
runtime capabilities and resolved (if ever) by the host loader.
"""

import json
from typing import Any, Dict, Optional, Tuple

from componenthost.core.components.models import ComponentMetadata


def validate_component_dict(raw: Dict[str, Any]) -> Tuple[Optional[ComponentMetadata], str]:
    try:
        return ComponentMetadata.model_validate(raw), ""
    except Exception as e:  # noqa: BLE001
        return None, str(e)[:300]


class JsonComponentParser:
    def __init__(self, *, logger: Any = None) -> None:
        self.logger = logger

    def parse(self, code: str) -> Optional[ComponentMetadata]:
        """Returns None for anything that is not a valid component manifest."""
        if not isinstance(code, str) or not code.strip():
            return None
        try:
            raw = json.loads(code)
        except (json.JSONDecodeError, RecursionError):
            return None
        if not isinstance(raw, dict):
            return None
        component, err = validate_component_dict(raw)
        if component is None and self.logger:
            self.logger.info(f"Rejected component code: {err}")
        return component
