"""
relationship.py - Label every reachable person with their relation to the key person.

Two breadth-first phases:
    - Ascend from the key person through fathers and mothers, giving each
      ancestor a direct-ancestor relation and collecting the roots (people
      with no known parents).
    - Descend from the key person and each root through children and
      spouses. Children extend the relation of the person being expanded;
      spouses receive a relation by marriage and are not expanded further.

A relation, once assigned, is never replaced. People already holding a
relation (such as ancestors on the path) are still expanded once so their
other descendants are reached.

Module: family_graph.relationship
"""
from __future__ import annotations

__all__ = ['label_relations']

import logging
from collections import deque
from typing import Deque, List, Set

from .person import Person
from .relation import Relation

logger = logging.getLogger(__name__)


def _assign(person: Person, relation: Relation, labelled: List[Person]) -> bool:
    if person.is_unknown() or person.relation_to_key_person is not None:
        return False
    person.relation_to_key_person = relation
    labelled.append(person)
    return True


def _ascend(key_person: Person, labelled: List[Person]) -> List[Person]:
    roots: List[Person] = []
    queue: Deque[Person] = deque([key_person])
    seen: Set[str] = {key_person.id}
    while queue:
        person = queue.popleft()
        parents = [p for p in (person.father, person.mother) if not p.is_unknown()]
        if not parents:
            roots.append(person)
            continue
        for parent in parents:
            if parent.id in seen:
                continue
            seen.add(parent.id)
            _assign(parent, person.relation_to_key_person.extend_to_parent(parent), labelled)
            queue.append(parent)
    return roots


def _descend(start: List[Person], labelled: List[Person]) -> None:
    queue: Deque[Person] = deque(start)
    expanded: Set[str] = set()
    while queue:
        person = queue.popleft()
        if person.id in expanded:
            continue
        expanded.add(person.id)
        relation = person.relation_to_key_person
        if relation is None:
            continue

        for child in person.children:
            if child.is_unknown():
                continue
            _assign(child, relation.extend_to_child(child), labelled)
            if child.id not in expanded:
                queue.append(child)

        for spouse in person.spouses:
            if spouse.is_unknown():
                continue
            _assign(spouse, relation.extend_to_spouse(spouse), labelled)


def label_relations(key_person: Person) -> List[Person]:
    """
    Set ``relation_to_key_person`` on everyone reachable from the key person.

    The key person is also marked to keep their name if redacted.

    Args:
        key_person (Person): Person all relations are measured from.

    Returns:
        List[Person]: People labelled by this call, in the order they were labelled.
    """
    labelled: List[Person] = []
    if key_person.is_unknown():
        logger.warning("Key person is unknown, not labelling relations")
        return labelled

    key_person.redaction_keeps_name = True
    _assign(key_person, Relation.self_relation(key_person), labelled)

    roots = _ascend(key_person, labelled)
    logger.debug(f"Relationship labelling found {len(roots)} root ancestors")
    _descend([key_person] + roots, labelled)

    logger.info(f"Labelled {len(labelled)} people with their relation to {key_person.full_name}")
    return labelled
