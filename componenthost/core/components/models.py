from __future__ import annotations

"""
Component contract models (declared metadata + persisted user records).

Parsed component metadata carries two kinds of fields: presentation/config
fields that are safe to persist (UserMetadata) and execution-time capabilities
(RuntimeCapabilities) that only ever live on the in-memory active entry.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


RUNTIME_ONLY_FIELDS: Tuple[str, ...] = (
    "entry",
    "widget",
    "instant_styles",
    "reload",
    "unload",
    "plugin",
    "url_include",
    "url_exclude",
)

_NAME_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9._-]{0,127}")


def _contract_config() -> ConfigDict:
    # component code is written in camelCase and may declare keys unknown here;
    # persisted records use snake_case
    return ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)


class ComponentOption(BaseModel):
    model_config = _contract_config()

    default_value: Any = None
    display_name: str = Field(default="", max_length=80)

    @model_validator(mode="before")
    @classmethod
    def _bare_value_shorthand(cls, v: Any) -> Any:
        if isinstance(v, ComponentOption):
            return v
        if isinstance(v, dict) and ("default_value" in v or "defaultValue" in v):
            return v
        return {"default_value": v}


class InstantStyle(BaseModel):
    model_config = _contract_config()

    name: str = Field(min_length=1)
    style: str = ""


class RuntimeCapabilities(BaseModel):
    """Execution-time capability fields. Never serialized into settings."""

    model_config = _contract_config()

    entry: Optional[str] = None  # entrypoint reference; never imported here
    widget: Optional[Dict[str, Any]] = None
    instant_styles: List[InstantStyle] = Field(default_factory=list)
    reload: Optional[str] = None
    unload: Optional[str] = None
    plugin: Optional[Dict[str, Any]] = None
    url_include: List[str] = Field(default_factory=list)
    url_exclude: List[str] = Field(default_factory=list)


class UserMetadata(BaseModel):
    """Persistable subset of component metadata."""

    model_config = _contract_config()

    name: str = Field(min_length=1)
    display_name: str = Field(default="", max_length=80)
    description: str = Field(default="", max_length=500)
    author: Union[str, Dict[str, Any]] = ""
    version: str = "0.1.0"
    tags: List[str] = Field(default_factory=list)
    enabled_by_default: bool = True
    options: Dict[str, ComponentOption] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def _name_safe(cls, v: str) -> str:
        v = str(v or "").strip()
        if not _NAME_RE.fullmatch(v):
            raise ValueError("name contains invalid characters")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def _norm_tags(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        if isinstance(v, list):
            return [str(x) for x in v if str(x or "").strip()]
        return v

    @model_validator(mode="after")
    def _display_name_fallback(self) -> "UserMetadata":
        if not self.display_name.strip():
            self.display_name = self.name
        return self


class ComponentMetadata(UserMetadata, RuntimeCapabilities):
    """Full parsed metadata as declared by component code."""

    model_config = _contract_config()

    def user_metadata(self) -> UserMetadata:
        return UserMetadata.model_validate(self.model_dump(exclude=set(RUNTIME_ONLY_FIELDS)))

    def capabilities(self) -> RuntimeCapabilities:
        return RuntimeCapabilities.model_validate(self.model_dump(include=set(RUNTIME_ONLY_FIELDS)))


class ComponentSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    options: Dict[str, Any] = Field(default_factory=dict)


class UserComponentRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: str
    metadata: UserMetadata
    settings: ComponentSettings = Field(default_factory=ComponentSettings)


@dataclass(frozen=True)
class OperationResult:
    metadata: UserMetadata
    message: str
