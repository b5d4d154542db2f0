from __future__ import annotations

from componenthost.core.components.models import ComponentMetadata, ComponentSettings
from componenthost.core.components.settings_merge import component_to_settings, defaults_deep, merge_settings


def test_component_to_settings_uses_declared_defaults():
    meta = ComponentMetadata.model_validate(
        {
            "name": "clock",
            "options": {
                "format": "24h",
                "color": {"defaultValue": "red", "displayName": "Color"},
                "zones": ["UTC"],
            },
        }
    )
    s = component_to_settings(meta)
    assert s.enabled is True
    assert s.options == {"format": "24h", "color": "red", "zones": ["UTC"]}


def test_component_to_settings_copies_mutable_defaults():
    meta = ComponentMetadata.model_validate({"name": "clock", "options": {"zones": ["UTC"]}})
    s = component_to_settings(meta)
    s.options["zones"].append("CET")
    assert meta.options["zones"].default_value == ["UTC"]


def test_defaults_deep_existing_values_win():
    out = defaults_deep({"a": 1, "b": None, "c": {"x": 1}}, {"a": 2, "b": 3, "c": {"x": 2, "y": 3}, "d": 4})
    assert out == {"a": 1, "b": None, "c": {"x": 1, "y": 3}, "d": 4}


def test_defaults_deep_fills_lists_by_position():
    assert defaults_deep([1, 2], [9, 9, 9, 9]) == [1, 2, 9, 9]
    assert defaults_deep([{"a": 1}], [{"a": 2, "b": 2}]) == [{"a": 1, "b": 2}]


def test_merge_settings_restores_existing_arrays():
    existing = ComponentSettings(enabled=False, options={"tags": ["a", "b"], "mode": "x"})
    fresh = ComponentSettings(enabled=True, options={"tags": ["c", "d", "e"], "mode": "y", "extra": [1]})

    merged = merge_settings(existing, fresh)

    assert merged.enabled is False
    assert merged.options == {"tags": ["a", "b"], "mode": "x", "extra": [1]}


def test_merge_settings_does_not_alias_inputs():
    existing = ComponentSettings(options={"tags": ["a"]})
    fresh = ComponentSettings(options={"nested": {"k": [1]}})

    merged = merge_settings(existing, fresh)
    merged.options["tags"].append("z")
    merged.options["nested"]["k"].append(2)

    assert existing.options["tags"] == ["a"]
    assert fresh.options["nested"] == {"k": [1]}


def test_merge_settings_array_replaced_by_scalar_default_keeps_array():
    existing = ComponentSettings(options={"filter": ["spam"]})
    fresh = ComponentSettings(options={"filter": "none"})
    assert merge_settings(existing, fresh).options["filter"] == ["spam"]
