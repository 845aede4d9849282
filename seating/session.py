"""
Seating Session

Owns the roster, grid configuration, seat state and random generator of
one room and exposes the top-level operations. Every operation runs to
completion and replaces the session's SeatState as a whole.
"""

from typing import List, Optional, Sequence

import numpy as np

from .allocator import DeskAllocator, allocate_sequential, find_unseated
from .exporter import SeatingExport, SeatingExporter
from .geometry import is_in_grid
from .models import AllocationResult, DeskView, NoVacancyPolicy, Person, SeatingConfig, SeatState
from .mutations import MutationResult, swap, toggle_disable, toggle_lock
from .roster import DEFAULT_DISABLE_TOKEN, DEFAULT_EMPTY_TOKEN, rows_needed, strip_directives
from .view import build_desks


class SeatingSession:
    """One room: roster + config + seat state"""

    def __init__(self,
                 config: SeatingConfig,
                 roster: Optional[Sequence[Person]] = None,
                 state: Optional[SeatState] = None,
                 rng: Optional[np.random.Generator] = None,
                 no_vacancy_policy: NoVacancyPolicy = NoVacancyPolicy.DROP,
                 disable_token: str = DEFAULT_DISABLE_TOKEN,
                 empty_token: str = DEFAULT_EMPTY_TOKEN,
                 exporter: Optional[SeatingExporter] = None):
        self.config = config
        self.roster: List[Person] = list(roster or [])
        self.state = state if state is not None else SeatState()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.no_vacancy_policy = no_vacancy_policy
        self.disable_token = disable_token
        self.empty_token = empty_token
        self.exporter = exporter if exporter is not None else SeatingExporter(
            disable_token=disable_token, empty_token=empty_token
        )
        self.notes: List[str] = []

    def _record(self, result):
        self.state = result.state
        self.notes.extend(result.notes)
        return result

    def shuffle(self) -> AllocationResult:
        """Randomized re-layout honoring locks and disabled seats"""
        allocator = DeskAllocator(self.config, self.rng)
        return self._record(allocator.allocate(self.roster, self.state))

    def ensure_layout(self) -> Optional[AllocationResult]:
        """
        Shuffle once if people are loaded but no layout exists yet.

        A layout whose seats were all emptied by later edits is kept.
        """
        if self.roster and not self.state.current:
            return self.shuffle()
        return None

    def import_roster(self, entries: Sequence[Person]) -> AllocationResult:
        """
        Replace the roster and lay it out in input order.

        Rows grow when the entries (directives included) do not fit.
        Disabled seats and locks are reset from the directives.
        """
        rows = rows_needed(len(entries), self.config.rows, self.config.cols)
        if rows != self.config.rows:
            self.notes.append(f"Grid grown from {self.config.rows} to {rows} rows")
            self.config = self.config.resized(rows, self.config.cols)

        result = allocate_sequential(entries, self.config, self.disable_token, self.empty_token)
        self.roster = strip_directives(entries, self.disable_token, self.empty_token)
        return self._record(result)

    def resize(self, rows: int, cols: int) -> SeatingConfig:
        """Change grid dimensions without moving anyone"""
        self.config = self.config.resized(rows, cols)
        return self.config

    def toggle_disable(self, seat: str) -> MutationResult:
        return self._record(toggle_disable(self.state, seat, self.config, self.no_vacancy_policy))

    def toggle_lock(self, seat: str) -> MutationResult:
        return self._record(toggle_lock(self.state, seat))

    def swap(self, source: str, target: str) -> MutationResult:
        return self._record(swap(self.state, source, target))

    def desks(self) -> List[DeskView]:
        return build_desks(self.state, self.config)

    def unseated(self) -> List[Person]:
        """Roster members with no seat inside the visible grid"""
        visible = {seat: person for seat, person in self.state.current.items()
                   if is_in_grid(seat, self.config.rows, self.config.cols)}
        return find_unseated(self.roster, visible)

    def export(self) -> SeatingExport:
        return self.exporter.create_export(self.desks())

    def export_records(self) -> List[str]:
        return self.exporter.export_lines(self.export())
