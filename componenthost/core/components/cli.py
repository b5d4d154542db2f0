from __future__ import annotations

"""
CLI rendering helpers for component commands.

Stable, testable rendering surface for registry state. Component code is never
printed.
"""

from typing import Any, Dict, List

from componenthost.core.errors import NotFoundError


def components_list_lines(*, registry: Any) -> List[str]:
    """
    Render `list` output lines.
    Columns: name | display_name | enabled | active
    """
    lines = ["name | display_name | enabled | active"]
    for name, rec in registry.list_user_components():
        enabled = str(bool(rec.settings.enabled)).lower()
        active = str(bool(registry.is_active(name))).lower()
        lines.append(f"{name} | {rec.metadata.display_name} | {enabled} | {active}")
    return lines


def component_show_payload(*, registry: Any, name_or_display_name: str) -> Dict[str, Any]:
    found = registry.find_record(name_or_display_name)
    if found is None:
        raise NotFoundError(name_or_display_name)
    name, rec = found
    return {
        "name": name,
        "active": bool(registry.is_active(name)),
        "metadata": rec.metadata.model_dump(mode="json"),
        "settings": rec.settings.model_dump(mode="json"),
    }
