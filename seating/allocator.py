"""
Seat Allocators

DeskAllocator produces a fresh randomized layout that honors locked and
disabled seats and the pairing policy. allocate_sequential places an
imported roster strictly in input order, interpreting layout directive
tokens on the way.
"""

from typing import Dict, List, Optional, Sequence

import numpy as np

from .geometry import desk_seats, enumerate_desks, enumerate_seats, seat_at_index
from .models import AllocationResult, Gender, Person, SeatingConfig, SeatState
from .pairing import PairingQueues, build_pairing_queues
from .roster import DEFAULT_DISABLE_TOKEN, DEFAULT_EMPTY_TOKEN


def find_unseated(roster: Sequence[Person], assignments: Dict[str, Optional[Person]]) -> List[Person]:
    """People from the roster that hold no seat in the assignment map"""
    seated_ids = {p.id for p in assignments.values() if p is not None}
    return [p for p in roster if p.id not in seated_ids]


class DeskAllocator:
    """
    Greedy desk-major allocation over pre-shuffled pairing queues.

    Strict separation covers desks the allocator fills on both sides. A desk
    with one open slot takes the next single without looking at the gender
    of a locked neighbour, so a locked person may end up beside someone of
    the other known gender.
    """

    def __init__(self, config: SeatingConfig, rng: Optional[np.random.Generator] = None):
        """
        Initialize allocator

        Args:
            config: Grid dimensions and pairing policy
            rng: Random number generator (fresh unseeded generator if omitted)
        """
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng()

    def allocate(self, roster: Sequence[Person], state: SeatState) -> AllocationResult:
        """
        Produce a new layout for the roster.

        Locked seats keep their occupants, disabled seats stay empty and
        every other seat in the grid is filled desk by desk.

        Args:
            roster: Everyone who should be seated
            state: Current seat state (read only)

        Returns:
            AllocationResult whose state carries the new current map
        """
        assignments: Dict[str, Optional[Person]] = dict(state.locked)
        open_desks = self._collect_open_desks(state, assignments)

        locked_ids = {p.id for p in state.locked.values()}
        available = [p for p in roster if p.id not in locked_ids]
        queues = build_pairing_queues(available, self.config, self.rng)

        result = AllocationResult(state=SeatState(
            disabled=set(state.disabled),
            locked=dict(state.locked),
            current=assignments,
        ))

        for slots in open_desks:
            self._fill_desk(slots, queues, assignments, result)

        result.unseated = find_unseated(roster, assignments)
        if result.unseated:
            result.add_note(f"{len(result.unseated)} of {len(roster)} people could not be seated")
        return result

    def _collect_open_desks(self, state: SeatState, assignments: Dict[str, Optional[Person]]) -> List[List[str]]:
        """Open slots per desk in traversal order; desks with none are omitted"""
        open_desks = []
        for _, _, desk in enumerate_desks(self.config.rows, self.config.cols):
            slots = []
            for seat in desk_seats(desk):
                if seat in state.disabled:
                    assignments[seat] = None
                    continue
                if seat in assignments:
                    continue
                slots.append(seat)
            if slots:
                open_desks.append(slots)
        return open_desks

    def _fill_desk(self,
                   slots: List[str],
                   queues: PairingQueues,
                   assignments: Dict[str, Optional[Person]],
                   result: AllocationResult):
        if len(slots) == 2:
            self._fill_double(slots, queues, assignments, result)
        else:
            self._fill_single(slots[0], queues, assignments, result)

    def _fill_double(self, slots, queues, assignments, result):
        left, right = slots

        if queues.pairs:
            first, second = queues.pairs.pop()
            assignments[left] = first
            assignments[right] = second
            return

        if len(queues.singles) >= 2:
            first = queues.singles.pop()
            second = queues.singles.pop()
            if self.config.strict_separation and _genders_conflict(first, second):
                # Cannot share a desk; second waits for the next one
                assignments[left] = first
                assignments[right] = None
                queues.singles.append(second)
                result.add_note(f"Separated {first.name} and {second.name} at {left}")
            else:
                assignments[left] = first
                assignments[right] = second
            return

        assignments[left] = queues.singles.pop() if queues.singles else None
        assignments[right] = None

    def _fill_single(self, slot, queues, assignments, result):
        if queues.singles:
            assignments[slot] = queues.singles.pop()
        elif queues.pairs:
            first, second = queues.pairs.pop()
            assignments[slot] = first
            queues.singles.append(second)
            result.add_note(f"Split pair {first.name}/{second.name} at {slot}")
        else:
            assignments[slot] = None


def _genders_conflict(first: Person, second: Person) -> bool:
    """Two different known genders"""
    return (first.gender != second.gender
            and first.gender != Gender.UNKNOWN
            and second.gender != Gender.UNKNOWN)


def allocate_sequential(roster: Sequence[Person],
                        config: SeatingConfig,
                        disable_token: str = DEFAULT_DISABLE_TOKEN,
                        empty_token: str = DEFAULT_EMPTY_TOKEN) -> AllocationResult:
    """
    Place an imported roster strictly in input order.

    Existing disabled and locked seats are discarded. A roster entry named
    disable_token disables the seat at its own position in the input list;
    an entry named empty_token leaves the next seat empty without disabling
    it. No randomness and no gender-aware pairing are involved.

    Args:
        roster: Imported entries, directive tokens included
        config: Grid configuration
        disable_token: Name marking a pre-disabled seat
        empty_token: Name marking a deliberately empty seat

    Returns:
        AllocationResult with a fresh SeatState (no locks)
    """
    disabled = set()
    assignments: Dict[str, Optional[Person]] = {}

    for index, person in enumerate(roster):
        if person.name == disable_token:
            seat = seat_at_index(index, config.cols)
            disabled.add(seat)
            assignments[seat] = None

    to_place = [p for p in roster if p.name != disable_token]
    cursor = 0

    for seat in enumerate_seats(config.rows, config.cols):
        if seat in disabled:
            assignments[seat] = None
            continue
        if cursor < len(to_place) and to_place[cursor].name == empty_token:
            assignments[seat] = None
            cursor += 1
            continue
        if cursor < len(to_place):
            assignments[seat] = to_place[cursor]
            cursor += 1
        else:
            assignments[seat] = None

    result = AllocationResult(state=SeatState(disabled=disabled, locked={}, current=assignments))

    people = [p for p in roster if p.name not in (disable_token, empty_token)]
    result.unseated = find_unseated(people, assignments)
    if result.unseated:
        result.add_note(f"{len(result.unseated)} of {len(people)} people could not be seated")
    return result
