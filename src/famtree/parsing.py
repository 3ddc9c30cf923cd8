"""Person record parsing: JSON member records, GEDCOM files and date handling."""

from collections.abc import Mapping
from datetime import date
import json
from pathlib import Path
import re

from ged4py import GedcomReader

from famtree.models import Gender, Person


class RecordError(ValueError):
    """A person record that cannot be turned into a ``Person``."""


MONTH_MAP = {
    "JAN": 1, "JANUARY": 1,
    "FEB": 2, "FEBRUARY": 2,
    "MAR": 3, "MARCH": 3,
    "APR": 4, "APRIL": 4,
    "MAY": 5,
    "JUN": 6, "JUNE": 6,
    "JUL": 7, "JULY": 7,
    "AUG": 8, "AUGUST": 8,
    "SEP": 9, "SEPT": 9, "SEPTEMBER": 9,
    "OCT": 10, "OCTOBER": 10,
    "NOV": 11, "NOVEMBER": 11,
    "DEC": 12, "DECEMBER": 12,
}

GENDER_MAP = {
    "male": Gender.MALE,
    "m": Gender.MALE,
    "female": Gender.FEMALE,
    "f": Gender.FEMALE,
}

_QUALIFIERS = re.compile(
    r"^(ABT\.?|ABOUT|BEF\.?|BEFORE|AFT\.?|AFTER|EST\.?|CAL\.?|FROM|TO|BET\.?|AND|CIRCA|CA\.?|AROUND):?\s*",
    re.IGNORECASE,
)

# (pattern, order of the captured groups); "M" is numeric month, "N" a month name
_DATE_PATTERNS = [
    (re.compile(r"^(\d{4})-(\d{2})-(\d{2})$"), "YMD"),  # 1839-08-29, 1746-00-00
    (re.compile(r"^(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{4})$"), "DNY"),  # 25 NOV 1954, 02 May1838
    (re.compile(r"^([A-Za-z]+)\.?,?\s*(\d{4})$"), "NY"),  # NOV 1954, May, 1837
    (re.compile(r"^(\d{4})$"), "Y"),  # 1698
    (re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$"), "MDY"),  # 01-27-1920, 1/15/1957
    (re.compile(r"^(\d{1,2})\s+(\d{1,2})\s+(\d{4})$"), "MDY"),  # 04 05 1911
    (re.compile(r"^([A-Za-z]+)\.?\s*(\d{1,2}),?\s*(\d{4})$"), "NDY"),  # April 17, 1850
]


def parse_date_string(date_str: str | None) -> str | None:
    """
    Parse a free-form genealogy date into ISO format (YYYY-MM-DD).

    Qualifiers such as ABT or BEF are dropped, and a missing day or month
    becomes 01. Returns None if the date cannot be parsed or names a day
    that does not exist, such as 31 FEB.
    """
    if not date_str:
        return None

    s = date_str.strip().strip("()").rstrip("?")
    s = _QUALIFIERS.sub("", s).strip()
    if not s:
        return None

    for pattern, order in _DATE_PATTERNS:
        match = pattern.match(s)
        if not match:
            continue

        year, month, day = 0, 1, 1
        for part, value in zip(order, match.groups()):
            if part == "Y":
                year = int(value)
            elif part == "M":
                month = int(value)
            elif part == "N":
                month = MONTH_MAP.get(value.upper().rstrip("."), 0)
            else:
                day = int(value)

        if order == "YMD":
            # "00" month/day placeholders
            month = month or 1
            day = day or 1
        try:
            parsed = date(year, month, day)
        except ValueError:
            continue
        return parsed.isoformat()

    return None


def _field(record: Mapping, *names: str):
    for name in names:
        if name in record:
            return record[name]
    return None


def _optional_id(record: Mapping, *names: str) -> str | None:
    value = _field(record, *names)
    if value is None or value == "":
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise RecordError(f"{names[0]} must be a string, got {value!r}")
    return str(value)


def _optional_date(record: Mapping, *names: str) -> str | None:
    value = _field(record, *names)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise RecordError(f"{names[0]} must be an ISO date string, got {value!r}")
    try:
        # timestamps like 2024-01-01T00:00:00Z keep only the date
        return date.fromisoformat(value[:10]).isoformat()
    except ValueError as e:
        raise RecordError(f"{names[0]} is not an ISO date: {value!r}") from e


def person_from_record(record: Mapping) -> Person:
    """
    Convert one member record (snake_case or camelCase keys) into a ``Person``.

    Raises RecordError for a missing id, an unknown gender or a malformed date.
    """
    if not isinstance(record, Mapping):
        raise RecordError(f"Person record must be an object, got {type(record).__name__}")

    person_id = _optional_id(record, "id")
    if person_id is None:
        raise RecordError(f"Person record has no id: {dict(record)!r}")

    gender_value = _field(record, "gender", "sex")
    gender = None
    if gender_value not in (None, ""):
        gender = GENDER_MAP.get(str(gender_value).strip().lower())
        if gender is None:
            raise RecordError(f"Unknown gender {gender_value!r} for person {person_id}")

    name = _field(record, "full_name", "fullName", "name") or ""

    return Person(
        id=person_id,
        name=str(name),
        gender=gender,
        father_id=_optional_id(record, "father_id", "fatherId"),
        mother_id=_optional_id(record, "mother_id", "motherId"),
        spouse_id=_optional_id(record, "spouse_id", "spouseId"),
        birth_date=_optional_date(record, "birth_date", "birthDate"),
        death_date=_optional_date(record, "death_date", "deathDate"),
    )


def load_persons_json(filepath: Path) -> list[Person]:
    """Read a JSON file holding a list of member records or {"members": [...]}."""
    data = json.loads(Path(filepath).read_text(encoding="utf-8"))
    if isinstance(data, Mapping):
        data = data.get("members")
    if not isinstance(data, list):
        raise RecordError(f"{filepath}: expected a list of member records")
    return [person_from_record(record) for record in data]


# ============================================================================
# GEDCOM
# ============================================================================


def parse_gedcom(filepath: Path) -> GedcomReader:
    """Parse a GEDCOM file and return the reader object."""
    return GedcomReader(str(filepath))


def xref_to_id(xref_id: str) -> str:
    """Turn a GEDCOM xref like '@I_347421849@' into the person id 'I_347421849'."""
    person_id = xref_id.strip().strip("@")
    if not person_id:
        raise RecordError(f"Empty GEDCOM xref: {xref_id!r}")
    return person_id


def extract_name(indi) -> str:
    """Extract the full display name from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return ""

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_rec.value, tuple):
        return " ".join(p for p in name_rec.value if p)

    return str(name_rec.value).replace("/", "").strip()


def extract_event_date(indi, tag: str) -> str | None:
    """ISO date of an event tag (BIRT, DEAT), or None when absent or unparseable."""
    event = indi.sub_tag(tag)
    if event is None:
        return None
    date_rec = event.sub_tag("DATE")
    if date_rec is None or not date_rec.value:
        return None
    # ged4py may return DateValue objects
    return parse_date_string(str(date_rec.value))


def extract_gender(indi) -> Gender | None:
    sex_rec = indi.sub_tag("SEX")
    if sex_rec is None or not sex_rec.value:
        return None
    return GENDER_MAP.get(str(sex_rec.value).strip().lower())


def _family_member(fam, tag: str) -> str | None:
    rec = fam.sub_tag(tag)
    return xref_to_id(rec.xref_id) if rec is not None and rec.xref_id else None


def persons_from_gedcom(reader: GedcomReader) -> list[Person]:
    """
    Extract persons from parsed GEDCOM data.

    A child's father and mother come from the first family listing them as
    CHIL; a person's spouse is the partner in the first family where they are
    HUSB or WIFE.
    """
    individuals: dict[str, dict] = {}

    # First pass: extract all individuals
    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            continue
        individuals[xref_to_id(rec.xref_id)] = {
            "name": extract_name(rec),
            "gender": extract_gender(rec),
            "birth_date": extract_event_date(rec, "BIRT"),
            "death_date": extract_event_date(rec, "DEAT"),
            "father_id": None,
            "mother_id": None,
            "spouse_id": None,
        }

    # Second pass: family records give parents and spouses
    for fam in reader.records0("FAM"):
        husb_id = _family_member(fam, "HUSB")
        wife_id = _family_member(fam, "WIFE")

        if husb_id and wife_id:
            for person_id, partner_id in ((husb_id, wife_id), (wife_id, husb_id)):
                fields = individuals.get(person_id)
                if fields is not None and fields["spouse_id"] is None:
                    fields["spouse_id"] = partner_id

        for child in fam.sub_tags("CHIL"):
            if not child.xref_id:
                continue
            fields = individuals.get(xref_to_id(child.xref_id))
            if fields is None or fields["father_id"] or fields["mother_id"]:
                continue
            fields["father_id"] = husb_id
            fields["mother_id"] = wife_id

    return [Person(id=person_id, **fields) for person_id, fields in individuals.items()]
