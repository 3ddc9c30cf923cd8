"""Person sources feeding the tree pipeline."""

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from famtree.models import Person
from famtree.parsing import load_persons_json, parse_gedcom, persons_from_gedcom


class PersonRepository(Protocol):
    def list_persons(self) -> list[Person]:
        """Return the complete, materialized list of person records."""
        ...


class InMemoryPersonRepository:
    def __init__(self, persons: Iterable[Person] = ()):
        self._persons = list(persons)

    def list_persons(self) -> list[Person]:
        return list(self._persons)

    def replace_all(self, persons: Iterable[Person]) -> None:
        self._persons = list(persons)


class JsonPersonRepository:
    def __init__(self, path: Path):
        self.path = Path(path)

    def list_persons(self) -> list[Person]:
        return load_persons_json(self.path)


class GedcomPersonRepository:
    def __init__(self, path: Path):
        self.path = Path(path)

    def list_persons(self) -> list[Person]:
        return persons_from_gedcom(parse_gedcom(self.path))


def repository_for(path: Path) -> PersonRepository:
    """Pick a file-backed repository from the file extension (.json or .ged)."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        return JsonPersonRepository(path)
    if suffix in (".ged", ".gedcom"):
        return GedcomPersonRepository(path)
    raise ValueError(f"Unsupported input format: {path.name} (expected .json or .ged)")
