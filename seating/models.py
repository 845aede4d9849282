"""
Seating Data Model

Core data structures shared by the allocators, mutation handlers and view
builder: people, grid configuration, the three-map seat state and the
derived desk/seat views.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Set


class SeatingError(Exception):
    """Base class for seating engine errors"""
    pass


class CapacityError(SeatingError):
    """Raised when a displaced person has nowhere to go and dropping is refused"""
    pass


class Gender(Enum):
    """Normalized gender of a person"""
    MALE = "Male"
    FEMALE = "Female"
    UNKNOWN = "Unknown"


class NoVacancyPolicy(Enum):
    """What toggle-disable does when the displaced occupant has no free seat"""
    DROP = "drop"
    REFUSE = "refuse"


@dataclass(frozen=True)
class Person:
    """A roster entry. Immutable once imported."""
    id: str
    name: str
    gender: Gender = Gender.UNKNOWN
    raw_gender: str = ""


@dataclass(frozen=True)
class SeatingConfig:
    """
    Grid dimensions and pairing policy.

    Attributes:
        rows: Number of desk rows (>= 1)
        cols: Number of desk columns (>= 1)
        allow_mixed_gender: Pair leftover singles regardless of gender
        ignore_gender: Prefer mixed-gender pairs outright
    """
    rows: int = 6
    cols: int = 5
    allow_mixed_gender: bool = False
    ignore_gender: bool = False

    def __post_init__(self):
        if self.rows < 1 or self.cols < 1:
            raise ValueError(f"Grid must be at least 1x1, got {self.rows}x{self.cols}")

    @property
    def seat_count(self) -> int:
        return self.rows * self.cols * 2

    @property
    def strict_separation(self) -> bool:
        """Same-gender policy with mixed leftovers disallowed"""
        return not self.ignore_gender and not self.allow_mixed_gender

    def resized(self, rows: int, cols: int) -> "SeatingConfig":
        """Copy with new dimensions, clamped to a minimum of 1"""
        return replace(self, rows=max(1, int(rows)), cols=max(1, int(cols)))


@dataclass
class SeatState:
    """
    Source of truth for the room, keyed by seat id.

    Attributes:
        disabled: Seats that cannot hold anyone
        locked: Seat id -> person pinned there across reshuffles
        current: Seat id -> occupant (None when empty)
    """
    disabled: Set[str] = field(default_factory=set)
    locked: Dict[str, Person] = field(default_factory=dict)
    current: Dict[str, Optional[Person]] = field(default_factory=dict)

    def copy(self) -> "SeatState":
        return SeatState(
            disabled=set(self.disabled),
            locked=dict(self.locked),
            current=dict(self.current),
        )

    def occupant(self, seat: str) -> Optional[Person]:
        return self.current.get(seat)

    def is_free(self, seat: str) -> bool:
        """Enabled, unlocked and empty"""
        return (seat not in self.disabled
                and seat not in self.locked
                and self.current.get(seat) is None)

    def seated_people(self) -> List[Person]:
        return [p for p in self.current.values() if p is not None]

    def find(self, person_id: str) -> Optional[str]:
        """Seat id currently holding a person, if any"""
        for seat, person in self.current.items():
            if person is not None and person.id == person_id:
                return seat
        return None


@dataclass(frozen=True)
class SeatView:
    id: str
    occupant: Optional[Person]
    disabled: bool
    locked: bool


@dataclass(frozen=True)
class DeskView:
    """Render-ready desk. Row and col are one-based for display."""
    id: str
    row: int
    col: int
    left: SeatView
    right: SeatView

    @property
    def seats(self) -> List[SeatView]:
        return [self.left, self.right]


@dataclass
class AllocationResult:
    """Outcome of an allocator run or mutation"""
    state: SeatState
    notes: List[str] = field(default_factory=list)
    unseated: List[Person] = field(default_factory=list)

    def add_note(self, note: str):
        """Add a diagnostic note"""
        self.notes.append(note)
