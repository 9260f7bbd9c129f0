"""
tree.py - The family graph: people, families, places and sources keyed by canonical id.

A Tree is populated by a loader through find-or-create operations and then
enriched in place by ``generate()``. Entities are created lazily on first
reference and never removed; a fresh generation starts from a freshly loaded
tree.

Module: family_graph.tree
"""
from __future__ import annotations

__all__ = ['Tree']

import logging
from collections import Counter
from typing import TYPE_CHECKING, Dict, List, Optional

from .annotations import Annotations
from .errors import InvalidPlaceNameError
from .enrichment.model import ANOMALY_PLACE
from .family import Family
from .gazetteer import Gazetteer, GazetteerPlace
from .identifier import new_id
from .identity_map import IdentityMap
from .life_event import BirthEvent
from .person import UNKNOWN_NAME, Person
from .place import Place, PlaceKind, unknown_place
from .source import Source
from .dates import UNKNOWN_DATE

if TYPE_CHECKING:
    from .enrichment.config import GenerationConfig
    from .enrichment.pipeline import GenerationResult
    from .surnames import SurnameGroups

logger = logging.getLogger(__name__)

UNKNOWN_ID = "unknown"
UNITED_KINGDOM = "United Kingdom"


class Tree:
    """
    Container for the whole family graph.

    Attributes:
        identity_map (IdentityMap): Resolves scoped ids to canonical ids.
        gazetteer (Gazetteer): Resolves place names to place ids.
        annotations (Annotations): Overrides applied at the start of generation.
        people (Dict[str, Person]): Canonical id -> person.
        sources (Dict[str, Source]): Canonical id -> source.
        places (Dict[str, Place]): Gazetteer id -> place.
        families (Dict[str, Family]): Family id -> family.
        key_person (Optional[Person]): Person relations are measured from.
        name (str): Name of the tree.
        description (str): Free-text description of the tree.
        place_similarity_threshold (int): Score above which a new place name is
            reported as a probable duplicate spelling of a known one.
        surname_groups (Optional[SurnameGroups]): Variant spellings used by surname metrics.
    """

    def __init__(
        self,
        identity_map: Optional[IdentityMap] = None,
        gazetteer: Optional[Gazetteer] = None,
        annotations: Optional[Annotations] = None,
        place_similarity_threshold: int = 92,
        surname_groups: Optional['SurnameGroups'] = None,
    ):
        self.identity_map = identity_map if identity_map is not None else IdentityMap()
        self.gazetteer = gazetteer if gazetteer is not None else Gazetteer()
        self.annotations = annotations if annotations is not None else Annotations()
        self.place_similarity_threshold = place_similarity_threshold
        self.surname_groups = surname_groups
        self.people: Dict[str, Person] = {}
        self.sources: Dict[str, Source] = {}
        self.places: Dict[str, Place] = {}
        self.families: Dict[str, Family] = {}
        self.key_person: Optional[Person] = None
        self.name: str = ""
        self.description: str = ""

    def __repr__(self) -> str:
        return f"Tree(people={len(self.people)}, families={len(self.families)}, places={len(self.places)})"

    # ------------------------------------------------------------------
    # Find-or-create
    # ------------------------------------------------------------------

    def find_person(self, scope: str, local_id: str) -> Person:
        """
        Return the person for a scoped id, creating them on first reference.

        A new person's best birth-like event is an unknown-dated placeholder birth.
        """
        id = self.identity_map.resolve(scope, local_id)
        person = self.people.get(id)
        if person is None:
            person = Person(id)
            person.best_birthlike_event = BirthEvent(principal=person, date=UNKNOWN_DATE)
            self.people[id] = person
        return person

    def get_person(self, id: str) -> Optional[Person]:
        return self.people.get(self.identity_map.canonical(id))

    def find_source(self, scope: str, local_id: str) -> Source:
        id = self.identity_map.resolve(scope, local_id)
        source = self.sources.get(id)
        if source is None:
            source = Source(id)
            self.sources[id] = source
        return source

    def find_place_unstructured(self, name: str) -> Place:
        """
        Return the place for a free-text name, creating it and its parents if needed.

        A name the gazetteer rejects gives the unknown place; the error is not
        propagated.

        Args:
            name (str): Place name ordered from most to least specific.

        Returns:
            Place: The place, or the unknown place sentinel.
        """
        try:
            gp = self.gazetteer.match_place(name)
        except InvalidPlaceNameError as e:
            logger.debug(f"Using unknown place: {e}")
            return unknown_place()

        is_new = gp.id not in self.places
        place = self._place_from_gazetteer(gp, name)
        if is_new:
            self._check_similar_names(place, name)
        return place

    def _place_from_gazetteer(self, gp: GazetteerPlace, original: str) -> Place:
        place = self.places.get(gp.id)
        if place is not None:
            return place

        place = Place(gp.id, gp.name, kind=gp.kind)
        place.original_text = original
        if gp.parent_id:
            try:
                parent_gp = self.gazetteer.lookup_place(gp.parent_id)
            except KeyError:
                logger.warning(f"Parent id {gp.parent_id} of place {gp.id} not found in gazetteer")
            else:
                parent = self._place_from_gazetteer(parent_gp, parent_gp.name)
                place.parent = parent
                place.preferred_full_name = f"{gp.name}, {parent.preferred_full_name}"
                place.preferred_unique_name = f"{gp.name}, {parent.preferred_unique_name}"
        place.country_name = self._country_name(place)
        self.places[gp.id] = place
        logger.debug(f"Adding place {place.id}: {place.preferred_full_name} (country {place.country_name!r})")
        return place

    def _country_name(self, place: Place) -> str:
        node: Optional[Place] = place
        while node is not None:
            if node.kind is PlaceKind.COUNTRY:
                return self.gazetteer.country_names.country_name(node.preferred_name) or node.preferred_name
            if node.kind is PlaceKind.UK_NATION:
                return UNITED_KINGDOM
            node = node.parent
        return ""

    def _check_similar_names(self, place: Place, name: str) -> None:
        for match, score in self.gazetteer.similar_names(name, threshold=self.place_similarity_threshold):
            if match == place.preferred_full_name.lower():
                continue
            place.add_anomaly(
                ANOMALY_PLACE,
                f"place name may be a duplicate spelling of {match!r}",
                context=f"similarity {score:.0f}",
            )

    @staticmethod
    def family_id(father: Person, mother: Person) -> str:
        """Family id for an ordered (father, mother) pair."""
        father_id = UNKNOWN_ID if father.is_unknown() else father.id
        mother_id = UNKNOWN_ID if mother.is_unknown() else mother.id
        return new_id("family", father_id, mother_id)

    def find_family(self, father: Person, mother: Person) -> Family:
        """
        Return the family of a father and mother, creating it on first reference.

        The pair is ordered: find_family(a, b) and find_family(b, a) are different families.
        """
        id = self.family_id(father, mother)
        family = self.families.get(id)
        if family is None:
            family = Family(id, father=father, mother=mother)
            self.families[id] = family
            for parent in (father, mother):
                if not parent.is_unknown():
                    parent.families.append(family)
        return family

    def find_family_one_parent(self, parent: Person, child: Person) -> Family:
        """
        Return the family of a child with a single known parent.

        A male parent is placed as father, any other parent as mother.
        """
        id = new_id("familyoneparent", parent.id, child.id)
        family = self.families.get(id)
        if family is None:
            if parent.gender.is_male():
                family = Family(id, father=parent)
            else:
                family = Family(id, mother=parent)
            self.families[id] = family
            parent.families.append(family)
        return family

    # ------------------------------------------------------------------
    # Key person
    # ------------------------------------------------------------------

    def set_key_person(self, person: Optional[Person]) -> None:
        self.key_person = person

    def set_key_person_by_id(self, id: str) -> None:
        person = self.get_person(id)
        if person is None:
            logger.warning(f"Key person {id} not found in tree")
            return
        self.set_key_person(person)

    # ------------------------------------------------------------------
    # Sorted accessors
    # ------------------------------------------------------------------

    def list_people(self) -> List[Person]:
        return [self.people[id] for id in sorted(self.people)]

    def list_families(self) -> List[Family]:
        return [self.families[id] for id in sorted(self.families)]

    def list_places(self) -> List[Place]:
        return [self.places[id] for id in sorted(self.places)]

    def list_sources(self) -> List[Source]:
        return [self.sources[id] for id in sorted(self.sources)]

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate(self, redact_living: bool, config: Optional['GenerationConfig'] = None,
                 app_hooks=None) -> 'GenerationResult':
        """
        Run the generation pipeline over this tree.

        Args:
            redact_living (bool): Redact possibly living and recently deceased people.
            config (Optional[GenerationConfig]): Pipeline configuration, packaged defaults if None.
            app_hooks: Optional progress reporting hooks.

        Returns:
            GenerationResult: Summary of the run.
        """
        from .enrichment.config import GenerationConfig
        from .enrichment.defaults import get_default_rules
        from .enrichment.pipeline import GenerationPipeline

        config = config or GenerationConfig()
        pipeline = GenerationPipeline(config, get_default_rules(config), app_hooks=app_hooks)
        return pipeline.run(self, redact_living=redact_living)

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def number_of_people(self) -> int:
        return len(self.people)

    def direct_ancestors(self) -> List[Person]:
        """Key person's ancestors, as labelled by the last generation."""
        return [
            p for p in self.list_people()
            if p.relation_to_key_person is not None
            and p.relation_to_key_person.is_direct_ancestor()
            and not p.relation_to_key_person.is_self()
        ]

    def number_of_direct_ancestors(self) -> int:
        return len(self.direct_ancestors())

    def oldest_people(self, limit: int = 5) -> List[Person]:
        """People with the greatest known age at death, oldest first."""
        aged = [p for p in self.list_people() if not p.redacted and p.age_at_death() is not None]
        aged.sort(key=lambda p: -p.age_at_death())
        return aged[:limit]

    def greatest_number_of_children(self, limit: int = 5) -> List[Person]:
        parents = [p for p in self.list_people() if p.children]
        parents.sort(key=lambda p: -len(p.children))
        return parents[:limit]

    def ancestor_surname_distribution(self, surname_groups: Optional['SurnameGroups'] = None) -> Dict[str, int]:
        """
        Count the key person's ancestors by surname.

        Args:
            surname_groups (Optional[SurnameGroups]): Groups variant spellings under one
                surname, the tree's own groups if None.

        Returns:
            Dict[str, int]: Canonical surname -> number of ancestors, most common first.
        """
        if surname_groups is None:
            surname_groups = self.surname_groups
        counts: Counter = Counter()
        for person in self.direct_ancestors():
            if person.redacted or not person.family_name or person.family_name == UNKNOWN_NAME:
                continue
            name = person.family_name
            if surname_groups is not None:
                name = surname_groups.canonical_surname(name)
            counts[name] += 1
        return dict(counts.most_common())
