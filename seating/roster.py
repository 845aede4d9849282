"""
Roster Ingestion

Parses free-text rosters ("name,gender" per line) into Person records and
handles the two reserved name tokens used as layout directives during a
sequential import.
"""

import math
import re
import uuid
from typing import Callable, List, Optional, Sequence

from .models import Gender, Person

DEFAULT_DISABLE_TOKEN = "锁"
DEFAULT_EMPTY_TOKEN = "空"

MALE_TOKENS = {"m", "male", "boy", "man", "男", "男生"}
FEMALE_TOKENS = {"f", "female", "girl", "woman", "女", "女生"}

# ASCII or full-width comma
_FIELD_SEPARATOR = re.compile(r"[,，]")


def normalize_gender(raw: Optional[str]) -> Gender:
    """Map a free-text gender token to a Gender, falling back to UNKNOWN"""
    token = (raw or "").strip().lower()
    if token in MALE_TOKENS:
        return Gender.MALE
    if token in FEMALE_TOKENS:
        return Gender.FEMALE
    return Gender.UNKNOWN


def _new_person_id() -> str:
    return uuid.uuid4().hex[:12]


def parse_roster(text: str, id_factory: Callable[[], str] = _new_person_id) -> List[Person]:
    """
    Parse roster text into people.

    Blank lines and lines with an empty name are skipped. A missing gender
    column yields Gender.UNKNOWN with an empty raw token.

    Args:
        text: Roster text, one "name,gender" entry per line
        id_factory: Callable producing a unique id per person

    Returns:
        People in input order
    """
    people = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue

        parts = _FIELD_SEPARATOR.split(stripped)
        name = parts[0].strip()
        raw_gender = parts[1].strip() if len(parts) > 1 else ""
        if not name:
            continue

        people.append(Person(
            id=id_factory(),
            name=name,
            gender=normalize_gender(raw_gender),
            raw_gender=raw_gender,
        ))
    return people


def load_roster(path: str, encoding: str = "utf-8-sig") -> List[Person]:
    """Read and parse a roster file (a leading BOM is tolerated)"""
    with open(path, "r", encoding=encoding) as f:
        return parse_roster(f.read())


def is_directive(person: Person,
                 disable_token: str = DEFAULT_DISABLE_TOKEN,
                 empty_token: str = DEFAULT_EMPTY_TOKEN) -> bool:
    return person.name in (disable_token, empty_token)


def strip_directives(roster: Sequence[Person],
                     disable_token: str = DEFAULT_DISABLE_TOKEN,
                     empty_token: str = DEFAULT_EMPTY_TOKEN) -> List[Person]:
    """Roster without layout directive entries"""
    return [p for p in roster if not is_directive(p, disable_token, empty_token)]


def rows_needed(entry_count: int, rows: int, cols: int) -> int:
    """
    Row count large enough to give every imported entry a seat.

    Columns are never changed; rows only grow.
    """
    if entry_count <= rows * cols * 2:
        return rows
    required_desks = math.ceil(entry_count / 2)
    return math.ceil(required_desks / cols)
