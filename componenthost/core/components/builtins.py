from __future__ import annotations

from typing import Iterable, List, Optional

from componenthost.core.components.models import ComponentMetadata


DEFAULT_BUILTIN_COMPONENTS = (
    {"name": "settingsPanel", "displayName": "Settings Panel", "description": "Host settings and component manager."},
    {"name": "styleManager", "displayName": "Style Manager", "description": "Applies component styles."},
    {"name": "launchBar", "displayName": "Launch Bar", "description": "Quick search and command launcher."},
)


class BuiltInComponents:
    """Fixed set of components shipped with the host."""

    def __init__(self, components: Optional[Iterable[ComponentMetadata]] = None) -> None:
        if components is None:
            components = [ComponentMetadata.model_validate(c) for c in DEFAULT_BUILTIN_COMPONENTS]
        self._components: List[ComponentMetadata] = list(components)

    def list(self) -> List[ComponentMetadata]:
        return list(self._components)

    def names(self) -> set[str]:
        return {c.name for c in self._components}
