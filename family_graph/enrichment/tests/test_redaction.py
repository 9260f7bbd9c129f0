"""
Tests for redaction of living and recently deceased people.
"""
from __future__ import annotations

from family_graph.enrichment.redaction import (
    REDACTED_NAME,
    REDACTED_VITAL_YEARS,
    redact_personal_details,
    redact_with_descendants,
    should_redact,
)
from family_graph.gender import Gender
from family_graph.life_event import EventKind
from family_graph.person import unknown_person


def _link(parent, *children):
    parent.children.extend(children)


class TestShouldRedact:
    """Tests for should_redact."""

    def test_possibly_alive(self, make_person):
        person = make_person("P", "Peter Smith", Gender.MALE, birth="1990")
        person.possibly_alive = True
        assert should_redact(person, 2024)

    def test_recent_death(self, make_person):
        person = make_person("P", "Peter Smith", Gender.MALE, death="2010")
        person.best_deathlike_event = person.timeline[0]
        assert should_redact(person, 2024)
        assert not should_redact(person, 2024, recent_death_years=10)

    def test_old_death(self, make_person):
        person = make_person("P", "Peter Smith", Gender.MALE, death="1950")
        person.best_deathlike_event = person.timeline[0]
        assert not should_redact(person, 2024)

    def test_bounded_death_not_counted(self, make_person):
        """Years since death are only known for year, about and precise dates."""
        person = make_person("P", "Peter Smith", Gender.MALE, death="BEF 2020")
        person.best_deathlike_event = person.timeline[0]
        assert not should_redact(person, 2024)

    def test_unknown_person_never_redacted(self):
        assert not should_redact(unknown_person(), 2024)


class TestRedactPersonalDetails:
    """Tests for clearing one person's details."""

    def test_fields_cleared(self, make_person):
        person = make_person("P", "Peter Smith", Gender.MALE, birth="1990")
        person.nickname = "Pete"
        person.tags.append("soldier")
        person.links.append("https://example.org/peter")
        person.primary_occupation = "baker"

        redact_personal_details(person)

        assert person.redacted
        assert person.full_name == REDACTED_NAME
        assert person.given_name == REDACTED_NAME
        assert person.nickname == ""
        assert person.gender is Gender.UNKNOWN
        assert person.tags == []
        assert person.links == []
        assert person.timeline == []
        assert person.primary_occupation == ""
        assert person.vital_years == REDACTED_VITAL_YEARS
        assert person.best_birthlike_event.kind is EventKind.BIRTH
        assert person.best_birthlike_event.date.is_unknown()
        assert person.best_deathlike_event is None
        assert person.families == []

    def test_keeps_name_when_flagged(self, make_person):
        person = make_person("P", "Peter Smith", Gender.MALE, birth="1990")
        person.redaction_keeps_name = True
        redact_personal_details(person)

        assert person.full_name == "Peter Smith"
        assert person.redacted
        assert person.vital_years == REDACTED_VITAL_YEARS


class TestRedactionCascade:
    """Redacting a person redacts every descendant."""

    def test_two_generations_of_descendants(self, make_person):
        """Descendants with long past deaths are redacted too."""
        grandparent = make_person("A", "Alice Smith", Gender.FEMALE, birth="1930")
        child = make_person("B", "Bert Smith", Gender.MALE, birth="1850", death="1900")
        grandchild = make_person("C", "Cyril Smith", Gender.MALE, birth="1880", death="1910")
        _link(grandparent, child)
        _link(child, grandchild)

        redacted = redact_with_descendants(grandparent)

        assert [p.id for p in redacted] == [grandparent.id, child.id, grandchild.id]
        for person in (grandparent, child, grandchild):
            assert person.redacted
            assert person.full_name == REDACTED_NAME
            assert person.timeline == []

    def test_shared_descendant_redacted_once(self, make_person):
        """Pedigree collapse does not redact or visit anyone twice."""
        top = make_person("T", "Tom Smith", Gender.MALE)
        left = make_person("L", "Lucy Smith", Gender.FEMALE)
        right = make_person("R", "Roy Smith", Gender.MALE)
        bottom = make_person("B", "Bob Smith", Gender.MALE)
        _link(top, left, right)
        _link(left, bottom)
        _link(right, bottom)

        redacted = redact_with_descendants(top)
        assert sorted(p.id for p in redacted) == sorted(p.id for p in (top, left, right, bottom))

    def test_ancestors_untouched(self, make_person):
        parent = make_person("P", "Paul Smith", Gender.MALE, birth="1900", death="1970")
        child = make_person("C", "Carl Smith", Gender.MALE, birth="1990", father=parent)
        _link(parent, child)

        redact_with_descendants(child)
        assert not parent.redacted
        assert parent.full_name == "Paul Smith"
