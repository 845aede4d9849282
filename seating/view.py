"""
View Builder

Pure projection of the seat state into desk/seat views for rendering and
export. Never allocates and never mutates its inputs.
"""

from typing import List

from .geometry import desk_seats, enumerate_desks
from .models import DeskView, SeatingConfig, SeatState, SeatView


def build_seat_view(state: SeatState, seat: str) -> SeatView:
    return SeatView(
        id=seat,
        occupant=state.current.get(seat),
        disabled=seat in state.disabled,
        locked=seat in state.locked,
    )


def build_desks(state: SeatState, config: SeatingConfig) -> List[DeskView]:
    """Desk views for every desk in the grid, in traversal order"""
    desks = []
    for row, col, desk in enumerate_desks(config.rows, config.cols):
        left, right = desk_seats(desk)
        desks.append(DeskView(
            id=desk,
            row=row + 1,
            col=col + 1,
            left=build_seat_view(state, left),
            right=build_seat_view(state, right),
        ))
    return desks
