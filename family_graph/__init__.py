"""family_graph package: Builds a de-duplicated, enriched family graph from genealogical records."""

from family_graph.errors import (
    ConfigurationError,
    FamilyGraphError,
    IdentityError,
    InvalidPlaceNameError,
    StoreError,
    UnknownFieldError,
)
from family_graph.identifier import new_id
from family_graph.dates import Date, parse_date, UNKNOWN_DATE
from family_graph.gender import Gender
from family_graph.enrichment.model import Anomaly, Fact, Inference, Occupation
from family_graph.place import Place, PlaceKind, unknown_place
from family_graph.person import Person, unknown_person
from family_graph.life_event import EventKind, TimelineEvent
from family_graph.source import GeneralCitation, Source
from family_graph.family import Family, FamilyBond, FamilyEndReason
from family_graph.relation import Relation
from family_graph.identity_map import IdentityMap, load_identity_map, save_identity_map
from family_graph.gazetteer import Gazetteer, GazetteerPlace, load_gazetteer, save_gazetteer
from family_graph.annotations import Annotations, default_field_registry, load_annotations, save_annotations
from family_graph.surnames import SurnameGroups, load_surname_groups
from family_graph.tree import Tree
from family_graph.loader import Loader, load_tree, load_tree_from_dir, save_stores
from family_graph.relationship import label_relations

__all__ = [
    "Annotations",
    "Anomaly",
    "ConfigurationError",
    "Date",
    "EventKind",
    "Fact",
    "Family",
    "FamilyBond",
    "FamilyEndReason",
    "FamilyGraphError",
    "Gazetteer",
    "GazetteerPlace",
    "Gender",
    "GeneralCitation",
    "IdentityError",
    "IdentityMap",
    "Inference",
    "InvalidPlaceNameError",
    "Loader",
    "Occupation",
    "Person",
    "Place",
    "PlaceKind",
    "Relation",
    "Source",
    "StoreError",
    "SurnameGroups",
    "TimelineEvent",
    "Tree",
    "UNKNOWN_DATE",
    "UnknownFieldError",
    "default_field_registry",
    "label_relations",
    "load_annotations",
    "load_gazetteer",
    "load_identity_map",
    "load_surname_groups",
    "load_tree",
    "load_tree_from_dir",
    "new_id",
    "parse_date",
    "save_annotations",
    "save_gazetteer",
    "save_identity_map",
    "save_stores",
    "unknown_place",
    "unknown_person",
]
