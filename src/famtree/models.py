"""Data classes for family tree entities."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class Status(str, Enum):
    ALIVE = "alive"
    DECEASED = "deceased"


class ConnectorKind(str, Enum):
    PARENT_CHILD = "parent-child"
    SPOUSE = "spouse"


@dataclass(frozen=True)
class Person:
    id: str
    name: str = ""
    gender: Gender | None = None
    father_id: str | None = None
    mother_id: str | None = None
    spouse_id: str | None = None
    birth_date: str | None = None  # ISO format YYYY-MM-DD or None
    death_date: str | None = None  # ISO format YYYY-MM-DD or None

    @property
    def is_deceased(self) -> bool:
        return self.death_date is not None

    @property
    def status(self) -> Status:
        return Status.DECEASED if self.is_deceased else Status.ALIVE

    def age(self, today: date | None = None) -> int | None:
        """
        Age in whole years, measured up to the death date for deceased persons.

        Returns None when the birth date is unknown.
        """
        if not self.birth_date:
            return None

        birth = date.fromisoformat(self.birth_date)
        end = date.fromisoformat(self.death_date) if self.death_date else (today or date.today())

        years = end.year - birth.year
        if (end.month, end.day) < (birth.month, birth.day):
            years -= 1
        return years


@dataclass(frozen=True)
class TreeNode:
    """A person plus the relationships derived while building the graph."""

    person: Person
    children: tuple[str, ...] = ()
    spouses: tuple[str, ...] = ()
    level: int = 0

    @property
    def id(self) -> str:
        return self.person.id


@dataclass(frozen=True)
class FamilyGraph:
    nodes: dict[str, TreeNode] = field(default_factory=dict)
    root_ids: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, person_id: object) -> bool:
        return person_id in self.nodes

    def person(self, person_id: str) -> Person:
        return self.nodes[person_id].person

    def father_of(self, person_id: str) -> str | None:
        father_id = self.nodes[person_id].person.father_id
        return father_id if father_id in self.nodes else None

    def mother_of(self, person_id: str) -> str | None:
        mother_id = self.nodes[person_id].person.mother_id
        return mother_id if mother_id in self.nodes else None

    def parents_of(self, person_id: str) -> list[str]:
        """Resolved parent ids, father first; dangling links are left out."""
        parents = []
        for parent_id in (self.father_of(person_id), self.mother_of(person_id)):
            if parent_id is not None and parent_id not in parents:
                parents.append(parent_id)
        return parents


@dataclass(frozen=True)
class LayoutPosition:
    person_id: str
    x: float  # centre of the node footprint
    y: float


@dataclass(frozen=True)
class Connector:
    from_id: str
    to_id: str
    kind: ConnectorKind
    points: tuple[tuple[float, float], ...] = ()
    co_parent_id: str | None = None  # set when a child hangs from a couple


@dataclass(frozen=True)
class Relations:
    person: Person
    father: Person | None
    mother: Person | None
    spouse: Person | None
    children: tuple[Person, ...] = ()
    siblings: tuple[Person, ...] = ()
