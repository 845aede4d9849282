"""
Seating Metrics and Reporting System

Summarizes a layout: roster composition, who is seated, constraint
counts and how many desks mix genders.
"""

from collections import Counter
from typing import Any, Dict, List, Sequence

from .allocator import find_unseated
from .geometry import is_in_grid
from .models import DeskView, Gender, Person, SeatingConfig, SeatState
from .view import build_desks


class SeatingMetrics:
    """Metrics calculator for a seating layout"""

    def __init__(self, config: SeatingConfig):
        self.config = config

    def analyze_seating(self, roster: Sequence[Person], state: SeatState) -> Dict[str, Any]:
        """
        Analysis of the current layout

        Returns:
            Dictionary containing roster, occupancy and desk metrics
        """
        desks = build_desks(state, self.config)
        visible = {seat: person for seat, person in state.current.items()
                   if is_in_grid(seat, self.config.rows, self.config.cols)}
        unseated = find_unseated(roster, visible)

        return {
            'roster': self._roster_composition(roster),
            'occupancy': self._occupancy(desks, roster, unseated),
            'desks': self._desk_composition(desks),
            'unseated': [p.name for p in unseated],
        }

    def _roster_composition(self, roster: Sequence[Person]) -> Dict[str, int]:
        counts = Counter(p.gender for p in roster)
        return {
            'total': len(roster),
            'male': counts[Gender.MALE],
            'female': counts[Gender.FEMALE],
            'unknown': counts[Gender.UNKNOWN],
        }

    def _occupancy(self, desks: List[DeskView], roster: Sequence[Person], unseated: List[Person]) -> Dict[str, Any]:
        seats = [seat for desk in desks for seat in desk.seats]
        disabled = sum(1 for s in seats if s.disabled)
        occupied = sum(1 for s in seats if s.occupant is not None)
        usable = len(seats) - disabled

        return {
            'seat_count': len(seats),
            'disabled_seats': disabled,
            'locked_seats': sum(1 for s in seats if s.locked),
            'occupied_seats': occupied,
            'empty_seats': usable - occupied,
            'seated_people': len(roster) - len(unseated),
            'unseated_people': len(unseated),
            'occupancy_rate': occupied / usable if usable else 0.0,
        }

    def _desk_composition(self, desks: List[DeskView]) -> Dict[str, int]:
        full = half = empty = mixed = 0
        for desk in desks:
            people = [s.occupant for s in desk.seats if s.occupant is not None]
            if len(people) == 2:
                full += 1
                if is_mixed_pair(people[0], people[1]):
                    mixed += 1
            elif len(people) == 1:
                half += 1
            else:
                empty += 1
        return {
            'full_desks': full,
            'half_desks': half,
            'empty_desks': empty,
            'mixed_gender_desks': mixed,
        }


def is_mixed_pair(first: Person, second: Person) -> bool:
    """Both genders known and different"""
    return (Gender.UNKNOWN not in (first.gender, second.gender)
            and first.gender != second.gender)


def print_seating_report(metrics: Dict[str, Any], detailed: bool = True) -> str:
    """Generate a human-readable seating report"""
    lines = []
    lines.append("=" * 60)
    lines.append("SEATING REPORT")
    lines.append("=" * 60)

    roster = metrics['roster']
    lines.append(f"Roster: {roster['total']} people "
                 f"(male {roster['male']}, female {roster['female']}, unknown {roster['unknown']})")
    lines.append("")

    occupancy = metrics['occupancy']
    lines.append("OCCUPANCY:")
    lines.append(f"  Seats: {occupancy['seat_count']} "
                 f"(disabled {occupancy['disabled_seats']}, locked {occupancy['locked_seats']})")
    lines.append(f"  Occupied: {occupancy['occupied_seats']}, empty: {occupancy['empty_seats']}")
    lines.append(f"  Occupancy rate: {occupancy['occupancy_rate']:.3f}")
    lines.append("")

    if detailed:
        desks = metrics['desks']
        lines.append("DESKS:")
        lines.append(f"  Full: {desks['full_desks']}, half: {desks['half_desks']}, empty: {desks['empty_desks']}")
        lines.append(f"  Mixed-gender desks: {desks['mixed_gender_desks']}")
        lines.append("")

    if metrics['unseated']:
        lines.append(f"UNSEATED ({len(metrics['unseated'])}):")
        for name in metrics['unseated']:
            lines.append(f"  - {name}")
    else:
        lines.append("Everyone is seated")

    lines.append("=" * 60)
    return "\n".join(lines)
