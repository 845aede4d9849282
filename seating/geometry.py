"""
Desk and Seat Addressing

Pure functions mapping a rows x cols grid of two-seat desks to string
identifiers and back. The traversal order defined here (row-major, then
left-before-right) is shared by every allocator and mutation handler.
"""

import re
from enum import Enum
from typing import Iterator, List, Tuple


class Side(Enum):
    """Seat position on a desk"""
    LEFT = "L"
    RIGHT = "R"


SEATS_PER_DESK = 2

_SEAT_ID_PATTERN = re.compile(r"^desk-(\d+)-(\d+)-([LR])$")


def desk_id(row: int, col: int) -> str:
    """Identifier for the desk at zero-based (row, col)"""
    return f"desk-{row}-{col}"


def seat_id(desk: str, side: Side) -> str:
    """Identifier for one side of a desk"""
    return f"{desk}-{side.value}"


def desk_seats(desk: str) -> Tuple[str, str]:
    """Left and right seat ids of a desk"""
    return seat_id(desk, Side.LEFT), seat_id(desk, Side.RIGHT)


def enumerate_desks(rows: int, cols: int) -> Iterator[Tuple[int, int, str]]:
    """Yield (row, col, desk_id) in row-major order"""
    for r in range(max(0, rows)):
        for c in range(max(0, cols)):
            yield r, c, desk_id(r, c)


def enumerate_seats(rows: int, cols: int) -> List[str]:
    """All seat ids in traversal order"""
    seats = []
    for _, _, desk in enumerate_desks(rows, cols):
        seats.extend(desk_seats(desk))
    return seats


def seat_at_index(index: int, cols: int) -> str:
    """
    Seat id at a position in traversal order.

    Args:
        index: Zero-based position in the traversal
        cols: Number of desk columns in the grid

    Returns:
        Seat id of the index-th seat
    """
    if index < 0:
        raise ValueError(f"Seat index must be non-negative, got {index}")
    if cols < 1:
        raise ValueError(f"Column count must be positive, got {cols}")

    seats_per_row = cols * SEATS_PER_DESK
    row = index // seats_per_row
    col = (index % seats_per_row) // SEATS_PER_DESK
    side = Side.LEFT if index % SEATS_PER_DESK == 0 else Side.RIGHT
    return seat_id(desk_id(row, col), side)


def parse_seat_id(seat: str) -> Tuple[int, int, Side]:
    """Inverse of seat_id(desk_id(row, col), side)"""
    match = _SEAT_ID_PATTERN.match(seat)
    if match is None:
        raise ValueError(f"Invalid seat id: {seat!r}")
    row, col, side = match.groups()
    return int(row), int(col), Side(side)


def partner_seat(seat: str) -> str:
    """The other seat on the same desk"""
    row, col, side = parse_seat_id(seat)
    other = Side.RIGHT if side == Side.LEFT else Side.LEFT
    return seat_id(desk_id(row, col), other)


def is_in_grid(seat: str, rows: int, cols: int) -> bool:
    """Check whether a seat id addresses a seat inside the grid"""
    try:
        row, col, _ = parse_seat_id(seat)
    except ValueError:
        return False
    return 0 <= row < rows and 0 <= col < cols
