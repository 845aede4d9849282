"""
Incremental Mutation Handlers

Toggle-disable, toggle-lock and swap operate on a live seat state without
re-running an allocator. Each handler returns a new SeatState and leaves
its input untouched.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .geometry import enumerate_seats, parse_seat_id
from .models import CapacityError, NoVacancyPolicy, Person, SeatingConfig, SeatState


@dataclass
class MutationResult:
    """
    Outcome of a mutation.

    Attributes:
        state: The replacement seat state
        notes: Human-readable description of side effects
        displaced_to: Seat a displaced occupant was moved to, if any
        dropped: Person removed from the layout for lack of a free seat
    """
    state: SeatState
    notes: List[str] = field(default_factory=list)
    displaced_to: Optional[str] = None
    dropped: Optional[Person] = None

    def add_note(self, note: str):
        self.notes.append(note)


def first_free_seat(state: SeatState, config: SeatingConfig, exclude: Optional[str] = None) -> Optional[str]:
    """First enabled, unlocked, empty seat in traversal order"""
    for seat in enumerate_seats(config.rows, config.cols):
        if seat != exclude and state.is_free(seat):
            return seat
    return None


def toggle_disable(state: SeatState,
                   seat: str,
                   config: SeatingConfig,
                   policy: NoVacancyPolicy = NoVacancyPolicy.DROP) -> MutationResult:
    """
    Flip a seat between enabled and disabled.

    Disabling an occupied seat moves its occupant to the first free seat;
    with no free seat the occupant is dropped (DROP) or the toggle is
    refused with CapacityError (REFUSE). Re-enabling never fills the seat.

    Args:
        state: Current seat state
        seat: Seat id to toggle
        config: Grid configuration (defines the search order)
        policy: Behavior when the occupant cannot be rehoused

    Returns:
        MutationResult with the new state

    Raises:
        CapacityError: Under REFUSE when no free seat exists
        ValueError: If seat is not a valid seat id
    """
    parse_seat_id(seat)
    new_state = state.copy()
    result = MutationResult(state=new_state)

    if seat in new_state.disabled:
        new_state.disabled.discard(seat)
        result.add_note(f"Enabled {seat}")
        return result

    new_state.disabled.add(seat)
    new_state.locked.pop(seat, None)
    result.add_note(f"Disabled {seat}")

    occupant = new_state.current.get(seat)
    if seat in new_state.current:
        new_state.current[seat] = None
    if occupant is None:
        return result

    target = first_free_seat(new_state, config, exclude=seat)
    if target is None:
        if policy == NoVacancyPolicy.REFUSE:
            raise CapacityError(f"No free seat for {occupant.name} displaced from {seat}")
        result.dropped = occupant
        result.add_note(f"No free seat for {occupant.name}; removed from layout")
        return result

    new_state.current[target] = occupant
    result.displaced_to = target
    result.add_note(f"Moved {occupant.name} from {seat} to {target}")
    return result


def toggle_lock(state: SeatState, seat: str) -> MutationResult:
    """Lock the current occupant of a seat in place, or release an existing lock"""
    parse_seat_id(seat)
    new_state = state.copy()
    result = MutationResult(state=new_state)

    if seat in new_state.locked:
        person = new_state.locked.pop(seat)
        result.add_note(f"Unlocked {person.name} at {seat}")
        return result

    occupant = new_state.current.get(seat)
    if occupant is None:
        result.add_note(f"{seat} is empty; nothing to lock")
        return result

    new_state.locked[seat] = occupant
    result.add_note(f"Locked {occupant.name} at {seat}")
    return result


def swap(state: SeatState, source: str, target: str) -> MutationResult:
    """
    Exchange the occupants of two seats.

    Swapping with an empty seat moves the occupant. Any lock on either
    seat is released; locks bind a seat to a person and do not travel.
    A swap touching a disabled seat is rejected and leaves the layout
    unchanged.
    """
    parse_seat_id(source)
    parse_seat_id(target)
    new_state = state.copy()
    result = MutationResult(state=new_state)

    if source == target:
        return result

    blocked = [seat for seat in (source, target) if seat in new_state.disabled]
    if blocked:
        result.add_note(f"Swap rejected: {', '.join(blocked)} is disabled")
        return result

    source_person = new_state.current.get(source)
    target_person = new_state.current.get(target)
    new_state.current[target] = source_person
    new_state.current[source] = target_person
    result.add_note(f"Swapped {source} <-> {target}")

    if source in new_state.locked or target in new_state.locked:
        new_state.locked.pop(source, None)
        new_state.locked.pop(target, None)
        result.add_note(f"Released locks on {source} and {target}")

    return result
