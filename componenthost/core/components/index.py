from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from componenthost.core.components.models import ComponentMetadata, UserComponentRecord


class ActiveComponents:
    """
    Ordered list of loaded components plus a name index over the same entries.

    The list and the index are only ever mutated together inside this class, so
    a name is in the index exactly when its component is in the list.
    """

    def __init__(self, components: Optional[Iterable[ComponentMetadata]] = None) -> None:
        self._items: List[ComponentMetadata] = []
        self._by_name: Dict[str, ComponentMetadata] = {}
        for component in components or []:
            self.add(component)

    def add(self, component: ComponentMetadata) -> None:
        if component.name in self._by_name:
            raise ValueError(f"component '{component.name}' is already active")
        self._items.append(component)
        self._by_name[component.name] = component

    def remove(self, name: str) -> Optional[ComponentMetadata]:
        component = self._by_name.get(name)
        if component is None:
            return None
        self._items = [c for c in self._items if c.name != name]
        del self._by_name[name]
        return component

    def get(self, name: str) -> Optional[ComponentMetadata]:
        return self._by_name.get(name)

    def names(self) -> List[str]:
        return [c.name for c in self._items]

    def index_names(self) -> List[str]:
        return list(self._by_name.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[ComponentMetadata]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


def find_record(
    records: Mapping[str, UserComponentRecord], name_or_display_name: str
) -> Optional[Tuple[str, UserComponentRecord]]:
    """First record (in stored order) whose name or display name matches."""
    for name, rec in records.items():
        if name == name_or_display_name or rec.metadata.display_name == name_or_display_name:
            return name, rec
    return None
