"""
annotations.py - Declarative overrides applied to people, places, sources and the tree.

Annotations are maintained by hand outside the source data (for example to
give someone a nickname or to correct a place name) and are applied at the
start of every generation run. Each entity kind has a fixed set of fields,
each bound to a setter; annotating a field that is not registered is rejected
when the annotation is recorded, not when it is applied.

Two operations are supported:
    - replace: overwrite a field with a single value
    - add: append a value to a list field such as tags

Module: family_graph.annotations
"""
from __future__ import annotations

__all__ = [
    'FieldSetter',
    'FieldRegistry',
    'default_field_registry',
    'EntityAnnotations',
    'Annotations',
    'load_annotations',
    'save_annotations',
    'parse_latlong',
]

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple, Union

from geopy.point import Point

from .errors import ConfigurationError, StoreError, UnknownFieldError
from .gender import Gender

if TYPE_CHECKING:
    from .person import Person
    from .place import Place
    from .source import Source
    from .tree import Tree

logger = logging.getLogger(__name__)

STORE_NAME = "annotations"

KIND_PERSON = "person"
KIND_PLACE = "place"
KIND_SOURCE = "source"
KIND_TREE = "tree"
KINDS = (KIND_PERSON, KIND_PLACE, KIND_SOURCE, KIND_TREE)

TREE_ID = "tree"

Setter = Callable[[Any, str], None]


def parse_latlong(value: str) -> Tuple[float, float]:
    """
    Parse a coordinate string such as "51.5074, -0.1278" or "51 30 26 N 0 7 39 W".

    Raises:
        ConfigurationError: If the string is not a valid coordinate pair.
    """
    if not value or not value.strip():
        raise ConfigurationError("empty coordinate string")
    try:
        point = Point(value)
    except ValueError as e:
        raise ConfigurationError(f"unparseable coordinate string {value!r}: {e}") from e
    return point.latitude, point.longitude


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "yes", "1", "y")


def _store_value(kind: str, field_name: str, value: Any) -> str:
    """Annotation values are strings; JSON booleans and numbers are converted."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ValueError(f"{kind} field {field_name!r} must have a string value, not {value!r}")


def _append_unique(items: List[str], value: str) -> None:
    if value not in items:
        items.append(value)


def _set_latlong(place: 'Place', value: str) -> None:
    place.latitude, place.longitude = parse_latlong(value)


@dataclass(frozen=True)
class FieldSetter:
    """
    Setters for one annotatable field.

    Attributes:
        replace: Called with (entity, value) to overwrite the field, None if unsupported.
        add: Called with (entity, value) to append to the field, None if unsupported.
        validate: Called with the value when the annotation is recorded.
    """
    replace: Optional[Setter] = None
    add: Optional[Setter] = None
    validate: Optional[Callable[[str], Any]] = None


class FieldRegistry:
    """Table of annotatable fields per entity kind, built once at startup."""

    def __init__(self, fields: Dict[str, Dict[str, FieldSetter]]):
        unknown = set(fields) - set(KINDS)
        if unknown:
            raise ConfigurationError(f"unknown annotation kinds: {sorted(unknown)}")
        self._fields: Dict[str, Dict[str, FieldSetter]] = {k: dict(fields.get(k, {})) for k in KINDS}

    def fields(self, kind: str) -> Dict[str, FieldSetter]:
        if kind not in self._fields:
            raise UnknownFieldError(kind, "", "any")
        return self._fields[kind]

    def setter(self, kind: str, field_name: str, operation: str) -> Setter:
        """
        Look up the setter for a field operation.

        Raises:
            UnknownFieldError: If the kind, field or operation is not registered.
        """
        fs = self.fields(kind).get(field_name.lower())
        fn = getattr(fs, operation, None) if fs else None
        if fn is None:
            raise UnknownFieldError(kind, field_name, operation)
        return fn

    def validate(self, kind: str, field_name: str, value: str) -> None:
        fs = self.fields(kind).get(field_name.lower())
        if fs is not None and fs.validate is not None:
            fs.validate(value)


def default_field_registry() -> FieldRegistry:
    """The standard set of annotatable fields."""
    return FieldRegistry({
        KIND_PERSON: {
            'nickname': FieldSetter(replace=lambda p, v: setattr(p, 'nickname', v)),
            'olb': FieldSetter(replace=lambda p, v: setattr(p, 'olb', v)),
            'gender': FieldSetter(replace=lambda p, v: setattr(p, 'gender', Gender.from_value(v))),
            'redacted': FieldSetter(replace=lambda p, v: setattr(p, 'redacted', _parse_bool(v))),
            'primary_occupation': FieldSetter(replace=lambda p, v: setattr(p, 'primary_occupation', v)),
            'tags': FieldSetter(add=lambda p, v: _append_unique(p.tags, v)),
            'links': FieldSetter(add=lambda p, v: _append_unique(p.links, v)),
        },
        KIND_PLACE: {
            'preferred_name': FieldSetter(replace=lambda p, v: setattr(p, 'preferred_name', v)),
            'latlong': FieldSetter(replace=_set_latlong, validate=parse_latlong),
            'tags': FieldSetter(add=lambda p, v: _append_unique(p.tags, v)),
        },
        KIND_SOURCE: {
            'title': FieldSetter(replace=lambda s, v: setattr(s, 'title', v)),
            'search_link': FieldSetter(replace=lambda s, v: setattr(s, 'search_link', v)),
        },
        KIND_TREE: {
            'key_person': FieldSetter(replace=lambda t, v: t.set_key_person_by_id(v)),
            'name': FieldSetter(replace=lambda t, v: setattr(t, 'name', v)),
            'description': FieldSetter(replace=lambda t, v: setattr(t, 'description', v)),
        },
    })


@dataclass
class EntityAnnotations:
    comment: str = ""
    replace: Dict[str, str] = field(default_factory=dict)
    add: Dict[str, List[str]] = field(default_factory=dict)

    def as_dict(self, id: str) -> Dict[str, Any]:
        d: Dict[str, Any] = {'id': id}
        if self.comment:
            d['comment'] = self.comment
        if self.replace:
            d['replace'] = dict(sorted(self.replace.items()))
        if self.add:
            d['add'] = {k: list(v) for k, v in sorted(self.add.items())}
        return d


class Annotations:
    """
    Recorded overrides, grouped by entity kind and id.

    Attributes:
        registry (FieldRegistry): Fields that may be annotated.
        entries (Dict[str, Dict[str, EntityAnnotations]]): kind -> id -> annotations.
    """

    def __init__(self, registry: Optional[FieldRegistry] = None):
        self.registry = registry or default_field_registry()
        self.entries: Dict[str, Dict[str, EntityAnnotations]] = {k: {} for k in KINDS}

    def __len__(self) -> int:
        return sum(len(v) for v in self.entries.values())

    def _entry(self, kind: str, id: str, comment: str) -> EntityAnnotations:
        entry = self.entries[kind].setdefault(id, EntityAnnotations())
        if comment:
            entry.comment = comment
        return entry

    def replace(self, kind: str, id: str, field_name: str, value: str, comment: str = "") -> None:
        """
        Record an overwrite of a field.

        Raises:
            UnknownFieldError: If the field does not support replace for this kind.
            ConfigurationError: If the value is invalid for the field.
        """
        self.registry.setter(kind, field_name, 'replace')
        self.registry.validate(kind, field_name, value)
        self._entry(kind, id, comment).replace[field_name.lower()] = value

    def add(self, kind: str, id: str, field_name: str, value: str, comment: str = "") -> None:
        """
        Record a value to append to a list field.

        Raises:
            UnknownFieldError: If the field does not support add for this kind.
            ConfigurationError: If the value is invalid for the field.
        """
        self.registry.setter(kind, field_name, 'add')
        self.registry.validate(kind, field_name, value)
        values = self._entry(kind, id, comment).add.setdefault(field_name.lower(), [])
        if value not in values:
            values.append(value)

    def _apply(self, kind: str, id: str, obj: Any) -> bool:
        entry = self.entries[kind].get(id)
        if entry is None:
            return False
        for field_name, value in sorted(entry.replace.items()):
            self.registry.setter(kind, field_name, 'replace')(obj, value)
        for field_name, values in sorted(entry.add.items()):
            setter = self.registry.setter(kind, field_name, 'add')
            for value in values:
                setter(obj, value)
        logger.debug(f"Applied {kind} annotations to {id}")
        return True

    def apply_person(self, person: 'Person') -> bool:
        return self._apply(KIND_PERSON, person.id, person)

    def apply_place(self, place: 'Place') -> bool:
        return self._apply(KIND_PLACE, place.id, place)

    def apply_source(self, source: 'Source') -> bool:
        return self._apply(KIND_SOURCE, source.id, source)

    def apply_tree(self, tree: 'Tree') -> bool:
        return self._apply(KIND_TREE, TREE_ID, tree)

    def to_dict(self) -> Dict[str, Any]:
        return {
            kind: [entries[id].as_dict(id) for id in sorted(entries)]
            for kind, entries in self.entries.items()
            if entries
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any], registry: Optional[FieldRegistry] = None) -> 'Annotations':
        """
        Build annotations from the persisted form.

        Raises:
            ValueError: If the document does not have the expected shape.
            UnknownFieldError: If it refers to an unregistered field.
        """
        if not isinstance(d, dict):
            raise ValueError("annotations document must be an object")
        a = cls(registry=registry)
        for kind, items in d.items():
            if kind not in KINDS:
                raise UnknownFieldError(kind, "", "any")
            for item in items or []:
                if not isinstance(item, dict) or 'id' not in item:
                    raise ValueError(f"malformed {kind} annotation: {item!r}")
                id = item['id']
                comment = item.get('comment', '')
                a._entry(kind, id, comment)
                replace = item.get('replace') or {}
                add = item.get('add') or {}
                if not isinstance(replace, dict) or not isinstance(add, dict):
                    raise ValueError(f"malformed {kind} annotation for {id!r}")
                for field_name, value in replace.items():
                    a.replace(kind, id, field_name, _store_value(kind, field_name, value))
                for field_name, values in add.items():
                    if not isinstance(values, list):
                        values = [values]
                    for value in values:
                        a.add(kind, id, field_name, _store_value(kind, field_name, value))
        return a


def load_annotations(path: Optional[Union[str, Path]], registry: Optional[FieldRegistry] = None) -> Annotations:
    """
    Read annotations from a JSON file.

    A missing file (or no path) yields empty annotations.

    Raises:
        StoreError: If the file exists but cannot be read or parsed.
        ConfigurationError: If it annotates an unknown field or has an invalid value.
    """
    if not path or not os.path.exists(path):
        logger.info(f'No annotations file found: {path}')
        return Annotations(registry=registry)
    logger.info(f'Reading annotations: {path}')
    try:
        with open(path, 'r', encoding='utf-8') as f:
            doc = json.load(f)
    except (OSError, ValueError) as e:
        raise StoreError(STORE_NAME, f"read failed: {e}", path) from e
    try:
        return Annotations.from_dict(doc, registry=registry)
    except ValueError as e:
        raise StoreError(STORE_NAME, f"invalid document: {e}", path) from e


def save_annotations(path: Optional[Union[str, Path]], annotations: Annotations) -> None:
    """
    Write annotations as JSON, grouped by kind and sorted by id.

    Raises:
        StoreError: If the file cannot be written.
    """
    if not path:
        return
    logger.info(f'Writing annotations: {path}')
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(annotations.to_dict(), f, indent=2, sort_keys=True)
    except OSError as e:
        raise StoreError(STORE_NAME, f"write failed: {e}", path) from e
