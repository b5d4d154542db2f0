from __future__ import annotations

"""
ComponentRegistry: install / update / uninstall / toggle for user components.

WHY THIS FILE EXISTS:
This is the single public API for user component lifecycle operations. It keeps
three pieces of state consistent:
- the persisted settings record per user component (SettingsStore)
- the in-memory active component list
- the name index over that list

Install and uninstall only stage changes; the host picks them up on its next
reload. Errors are raised at the point of detection and never caught here.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from componenthost.core.components.index import ActiveComponents, find_record
from componenthost.core.components.models import (
    ComponentMetadata,
    OperationResult,
    UserComponentRecord,
)
from componenthost.core.components.redaction import redact_component_payload
from componenthost.core.components.settings_merge import assign_settings, component_to_settings, merge_settings
from componenthost.core.errors import InvalidInputError, NameCollisionError, NotFoundError


class ComponentRegistry:
    def __init__(
        self,
        *,
        store: Any,
        parser: Any,
        builtins: Any,
        style_injector: Any = None,
        active: Optional[Iterable[ComponentMetadata]] = None,
        activate_builtins: bool = False,
        event_logger: Any = None,
        logger: Any = None,
    ):
        self.store = store
        self.parser = parser
        self.builtins = builtins
        self.style_injector = style_injector
        self.event_logger = event_logger
        self.logger = logger
        seed: List[ComponentMetadata] = list(builtins.list()) if activate_builtins else []
        self._active = ActiveComponents(seed + list(active or []))

    # ---- helpers ----
    def _emit(self, trace_id: str, event_type: str, payload: Dict[str, Any]) -> None:
        if self.event_logger is None:
            return
        try:
            self.event_logger.log(trace_id, event_type, redact_component_payload(payload))
        except Exception as e:  # noqa: BLE001
            if self.logger:
                self.logger.warning(f"Component audit write failed: {e}")

    def _lookup(self, name_or_display_name: str) -> Tuple[str, UserComponentRecord]:
        found = find_record(self.store.user_components, name_or_display_name)
        if found is None:
            raise NotFoundError(name_or_display_name)
        return found

    def _remove_styles(self, component: ComponentMetadata) -> Tuple[int, int]:
        removed = failed = 0
        if self.style_injector is None:
            return removed, failed
        for style in component.instant_styles or []:
            try:
                self.style_injector.remove(style.name)
                removed += 1
            except Exception as e:  # noqa: BLE001
                failed += 1
                if self.logger:
                    self.logger.warning(f"Failed to remove style '{style.name}' of component '{component.name}': {e}")
        return removed, failed

    # ---- read-only ----
    @property
    def active(self) -> ActiveComponents:
        return self._active

    def get(self, name: str) -> Optional[ComponentMetadata]:
        return self._active.get(name)

    def is_active(self, name: str) -> bool:
        return name in self._active

    def find_record(self, name_or_display_name: str) -> Optional[Tuple[str, UserComponentRecord]]:
        return find_record(self.store.user_components, name_or_display_name)

    def list_user_components(self) -> List[Tuple[str, UserComponentRecord]]:
        return list(self.store.user_components.items())

    # ---- lifecycle ----
    def install(self, code: str, *, trace_id: str = "components") -> OperationResult:
        component = self.parser.parse(code)
        if component is None:
            raise InvalidInputError()
        if any(b.name == component.name for b in self.builtins.list()):
            raise NameCollisionError(component.name)

        user_metadata = component.user_metadata()
        records: Dict[str, UserComponentRecord] = self.store.user_components
        existing = records.get(component.name)

        if existing is not None:
            merged = merge_settings(existing.settings, component_to_settings(user_metadata))
            prev_code, prev_metadata = existing.code, existing.metadata
            prev_settings = existing.settings.model_copy(deep=True)
            existing.code = code
            existing.metadata = user_metadata
            # same settings object: holders of a reference see the merge
            assign_settings(existing.settings, merged)
            try:
                self.store.commit()
            except Exception:
                existing.code = prev_code
                existing.metadata = prev_metadata
                assign_settings(existing.settings, prev_settings)
                raise
            if self.logger:
                self.logger.info(f"Component updated: {component.name}")
            self._emit(trace_id, "component.updated", {"name": component.name, "version": component.version, "action": "update"})
            return OperationResult(
                metadata=component,
                message=f"Updated component '{component.display_name}', reload required.",
            )

        records[component.name] = UserComponentRecord(
            code=code,
            metadata=user_metadata,
            settings=component_to_settings(user_metadata),
        )
        added = component.name not in self._active
        if added:
            self._active.add(component)
        try:
            self.store.commit()
        except Exception:
            del records[component.name]
            if added:
                self._active.remove(component.name)
            raise
        if self.logger:
            self.logger.info(f"Component installed: {component.name}")
        self._emit(trace_id, "component.installed", {"name": component.name, "version": component.version, "action": "install"})
        return OperationResult(
            metadata=component,
            message=f"Installed component '{component.display_name}', reload required.",
        )

    def uninstall(self, name_or_display_name: str, *, trace_id: str = "components") -> OperationResult:
        name, rec = self._lookup(name_or_display_name)

        loaded = self._active.get(name)
        removed = failed = 0
        if loaded is not None:
            removed, failed = self._remove_styles(loaded)
            # anything still holding this settings object must see it disabled
            rec.settings.enabled = False
            self._active.remove(name)

        del self.store.user_components[name]
        self.store.commit()
        if self.logger:
            self.logger.info(f"Component uninstalled: {name}")
        self._emit(
            trace_id,
            "component.uninstalled",
            {"name": name, "active": loaded is not None, "styles_removed": removed, "styles_failed": failed, "action": "uninstall"},
        )
        return OperationResult(
            metadata=rec.metadata,
            message=f"Uninstalled component '{rec.metadata.display_name}', reload required.",
        )

    def toggle(self, name_or_display_name: str, *, trace_id: str = "components") -> str:
        name, rec = self._lookup(name_or_display_name)
        rec.settings.enabled = not rec.settings.enabled
        enabled = rec.settings.enabled
        try:
            self.store.commit()
        except Exception:
            rec.settings.enabled = not enabled
            raise
        if self.logger:
            self.logger.info(f"Component {'enabled' if enabled else 'disabled'}: {name}")
        self._emit(trace_id, "component.toggled", {"name": name, "enabled": enabled, "action": "toggle"})
        state = "enabled" if enabled else "disabled"
        return f"Component '{rec.metadata.display_name}' {state}, a reload may be required."
