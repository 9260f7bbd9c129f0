import pytest

from family_graph.dates import parse_date
from family_graph.enrichment.model import ANOMALY_NAME, Inference
from family_graph.life_event import BirthEvent, DeathEvent
from family_graph.person import UNKNOWN_NAME, Person, unknown_person


def test_person_init():
    p = Person("I1")
    assert p.id == "I1"
    assert p.full_name == UNKNOWN_NAME
    assert p.father.is_unknown()
    assert p.mother.is_unknown()
    assert p.timeline == []
    assert not p.redacted


def test_unknown_person_is_shared():
    assert unknown_person() is unknown_person()
    assert unknown_person().is_unknown()
    assert unknown_person().father is unknown_person()


def test_same_as():
    assert Person("I1").same_as(Person("I1"))
    assert not Person("I1").same_as(Person("I2"))
    assert not Person("I1").same_as(None)
    assert not unknown_person().same_as(unknown_person())


@pytest.mark.parametrize(
    "born,died,age",
    [
        ("1893", "1970", 77),
        ("ABT 1850", "BEF 1900", 50),
        ("12 MAR 1901", "3 JAN 1950", 49),
        ("1900", "", None),
        ("", "1950", None),
    ]
)
def test_age_at_death(born, died, age):
    p = Person("I1")
    p.best_birthlike_event = BirthEvent(principal=p, date=parse_date(born))
    p.best_deathlike_event = DeathEvent(principal=p, date=parse_date(died))
    assert p.age_at_death() == age


def test_no_best_events():
    p = Person("I1")
    assert p.birth_year() is None
    assert p.death_year() is None


def test_anomalies_and_inferences():
    p = Person("I1")
    p.add_anomaly(ANOMALY_NAME, "given name is missing")
    p.add_inference(Inference(type="Year of birth", value="1900", reason="test"))
    assert p.anomalies[0].text == "given name is missing"
    assert len(p.inferences) == 1
