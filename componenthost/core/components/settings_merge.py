from __future__ import annotations

"""
Settings reconciliation for component updates.

When a component is re-installed with a new option schema, the stored settings
must gain any newly declared options without losing what the user already
customized. This is done in two passes:

1. defaults_deep: recursive default-fill. Existing values always win; missing
   keys (and missing list positions) are filled from the fresh defaults.
2. array override: every existing option that held a list is forced back to
   that exact list, so a schema change can never splice default items into a
   user-edited list.
"""

import copy
from typing import Any, Dict

from componenthost.core.components.models import ComponentSettings, UserMetadata


def component_to_settings(metadata: UserMetadata) -> ComponentSettings:
    """Fresh default settings for a component schema."""
    options: Dict[str, Any] = {}
    for name, option in (metadata.options or {}).items():
        options[name] = copy.deepcopy(option.default_value)
    return ComponentSettings(enabled=bool(metadata.enabled_by_default), options=options)


def defaults_deep(target: Any, defaults: Any) -> Any:
    """
    Return `target` with holes filled from `defaults`.

    Dicts are merged key by key, lists position by position. A value present in
    `target` is never replaced, including None.
    """
    if isinstance(target, dict) and isinstance(defaults, dict):
        out: Dict[str, Any] = {}
        for k, v in target.items():
            out[k] = defaults_deep(v, defaults[k]) if k in defaults else copy.deepcopy(v)
        for k, v in defaults.items():
            if k not in target:
                out[k] = copy.deepcopy(v)
        return out
    if isinstance(target, list) and isinstance(defaults, list):
        merged = [defaults_deep(v, defaults[i]) if i < len(defaults) else copy.deepcopy(v) for i, v in enumerate(target)]
        merged.extend(copy.deepcopy(defaults[len(target):]))
        return merged
    return copy.deepcopy(target)


def merge_settings(existing: ComponentSettings, fresh: ComponentSettings) -> ComponentSettings:
    merged = defaults_deep(existing.model_dump(), fresh.model_dump())

    # lists the user already holds are authoritative
    for name, value in (existing.options or {}).items():
        if isinstance(value, list):
            merged["options"][name] = copy.deepcopy(value)

    return ComponentSettings.model_validate(merged)


def assign_settings(target: ComponentSettings, source: ComponentSettings) -> None:
    """Overwrite `target` in place with the values of `source`."""
    target.enabled = bool(source.enabled)
    target.options.clear()
    target.options.update(copy.deepcopy(source.options))
