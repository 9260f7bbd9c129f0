import pytest

from family_graph.gender import Gender
from family_graph.tree import Tree


@pytest.fixture
def tree():
    return Tree()


@pytest.fixture
def person(tree):
    """Create a person with a name, gender and optionally parents, linking parent and child both ways."""
    def _person(local_id, full_name=None, gender=Gender.UNKNOWN, father=None, mother=None):
        p = tree.find_person("test", local_id)
        p.full_name = full_name or local_id
        p.gender = gender
        for parent, attr in ((father, 'father'), (mother, 'mother')):
            if parent is not None:
                setattr(p, attr, parent)
                parent.children.append(p)
        return p
    return _person


@pytest.fixture
def wed():
    """Record two people as each other's spouse."""
    def _wed(a, b):
        a.spouses.append(b)
        b.spouses.append(a)
    return _wed
