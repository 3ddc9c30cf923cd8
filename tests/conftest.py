import pytest

from famtree.models import Gender, Person


def _person(pid: str, **fields) -> Person:
    return Person(id=pid, name=fields.pop("name", pid), **fields)


@pytest.fixture()
def make_person():
    """Factory for persons whose name defaults to their id."""
    return _person


@pytest.fixture()
def couple_with_child() -> list[Person]:
    # A --spouse-- B, C is their child
    return [
        _person("A", gender=Gender.MALE, spouse_id="B"),
        _person("B", gender=Gender.FEMALE, spouse_id="A"),
        _person("C", gender=Gender.MALE, father_id="A", mother_id="B"),
    ]


@pytest.fixture()
def three_generations() -> list[Person]:
    # g1 + g2 -> p1, p2; p1 married to s1 (no parents) -> c1, c2; p2 single
    return [
        _person("g1", gender=Gender.MALE, spouse_id="g2", birth_date="1940-05-15", death_date="2010-03-20"),
        _person("g2", gender=Gender.FEMALE, birth_date="1945-08-22"),
        _person("p1", gender=Gender.MALE, father_id="g1", mother_id="g2", spouse_id="s1", birth_date="1965-02-10"),
        _person("p2", gender=Gender.FEMALE, father_id="g1", mother_id="g2", birth_date="1968-11-03"),
        _person("s1", gender=Gender.FEMALE, birth_date="1967-07-01"),
        _person("c1", gender=Gender.MALE, father_id="p1", mother_id="s1", birth_date="1990-01-01"),
        _person("c2", gender=Gender.FEMALE, father_id="p1", mother_id="s1", birth_date="1993-06-15"),
    ]
