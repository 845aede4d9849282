"""
Classroom Seating - Desk Allocation Engine

Assigns a roster to two-seat desks on a rectangular grid under disabled
seats, locked occupants and a gender pairing policy, and supports
incremental edits to a live layout.
"""

__version__ = "1.0.0"
__author__ = "Classroom Seating Team"

from .models import (
    AllocationResult,
    CapacityError,
    DeskView,
    Gender,
    NoVacancyPolicy,
    Person,
    SeatingConfig,
    SeatingError,
    SeatState,
    SeatView,
)
from .geometry import Side, desk_id, seat_id, enumerate_seats, parse_seat_id
from .pairing import PairingQueues, build_pairing_queues
from .allocator import DeskAllocator, allocate_sequential
from .mutations import MutationResult, swap, toggle_disable, toggle_lock
from .view import build_desks
from .roster import normalize_gender, parse_roster, strip_directives
from .exporter import SeatingExporter, create_seating_file
from .session import SeatingSession
from .metrics import SeatingMetrics, print_seating_report
from .config_loader import ConfigurationError, create_session_from_config, load_config

__all__ = [
    'AllocationResult',
    'CapacityError',
    'DeskView',
    'Gender',
    'NoVacancyPolicy',
    'Person',
    'SeatingConfig',
    'SeatingError',
    'SeatState',
    'SeatView',
    'Side',
    'desk_id',
    'seat_id',
    'enumerate_seats',
    'parse_seat_id',
    'PairingQueues',
    'build_pairing_queues',
    'DeskAllocator',
    'allocate_sequential',
    'MutationResult',
    'swap',
    'toggle_disable',
    'toggle_lock',
    'build_desks',
    'normalize_gender',
    'parse_roster',
    'strip_directives',
    'SeatingExporter',
    'create_seating_file',
    'SeatingSession',
    'SeatingMetrics',
    'print_seating_report',
    'ConfigurationError',
    'create_session_from_config',
    'load_config',
]
