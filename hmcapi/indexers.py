"""Field indexes over stored objects."""

from __future__ import annotations

from typing import Any, Callable

from hmcapi.managedcluster import ManagedCluster
from hmcapi.meta import TEMPLATE_KEY, VERSION_KEY
from hmcapi.release import Release

Extractor = Callable[[Any], "list[str] | None"]


def extract_template_name(obj: Any) -> list[str] | None:
    """Index values of a ManagedCluster's template reference; None for other objects."""
    if not isinstance(obj, ManagedCluster):
        return None
    return [obj.spec.template]


def extract_release_version(obj: Any) -> list[str] | None:
    """Index values of a Release's version; None for other objects."""
    if not isinstance(obj, Release):
        return None
    return [obj.spec.version]


class FieldIndexer:
    """Keeps extractor functions per object class and field."""

    def __init__(self) -> None:
        self._indexes: dict[tuple[type, str], Extractor] = {}

    def index_field(self, cls: type, field: str, extractor: Extractor) -> None:
        key = (cls, field)
        if key in self._indexes:
            raise ValueError(f"indexer conflict: {field!r} is already indexed for {cls.__name__}")
        self._indexes[key] = extractor

    def matches(self, obj: Any, field: str, value: str) -> bool:
        """Return whether the object's indexed values for the field include the value."""
        try:
            extractor = self._indexes[(type(obj), field)]
        except KeyError:
            raise KeyError(f"field {field!r} is not indexed for {type(obj).__name__}") from None
        return value in (extractor(obj) or [])


def setup_indexers(indexer: FieldIndexer) -> None:
    """Register the ManagedCluster template index and the Release version index."""
    indexer.index_field(ManagedCluster, TEMPLATE_KEY, extract_template_name)
    indexer.index_field(Release, VERSION_KEY, extract_release_version)