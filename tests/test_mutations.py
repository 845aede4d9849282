"""
Tests for toggle-disable, toggle-lock and swap
"""

import unittest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from seating.geometry import enumerate_seats
from seating.models import CapacityError, Gender, NoVacancyPolicy, Person, SeatingConfig, SeatState
from seating.mutations import first_free_seat, swap, toggle_disable, toggle_lock


def person(name):
    return Person(id=name, name=name, gender=Gender.UNKNOWN)


def full_state(config, names):
    """Fill every seat in traversal order"""
    people = [person(n) for n in names]
    return SeatState(current=dict(zip(enumerate_seats(config.rows, config.cols), people)))


class TestToggleDisable(unittest.TestCase):

    def setUp(self):
        self.config = SeatingConfig(rows=1, cols=2)
        self.bob = person("Bob")
        self.state = SeatState(current={
            "desk-0-0-L": person("Ann"),
            "desk-0-0-R": self.bob,
            "desk-0-1-L": None,
            "desk-0-1-R": person("Cy"),
        })

    def test_occupant_moves_to_first_free_seat(self):
        result = toggle_disable(self.state, "desk-0-0-R", self.config)

        self.assertIn("desk-0-0-R", result.state.disabled)
        self.assertIsNone(result.state.current.get("desk-0-0-R"))
        self.assertEqual(result.state.current["desk-0-1-L"], self.bob)
        self.assertEqual(result.displaced_to, "desk-0-1-L")
        self.assertIsNone(result.dropped)

    def test_empty_seat_just_disabled(self):
        result = toggle_disable(self.state, "desk-0-1-L", self.config)

        self.assertEqual(result.state.disabled, {"desk-0-1-L"})
        self.assertEqual(result.state.seated_people(), self.state.seated_people())

    def test_no_vacancy_drops_occupant(self):
        state = full_state(SeatingConfig(rows=1, cols=1), ["Bob", "Ann"])
        result = toggle_disable(state, "desk-0-0-L", SeatingConfig(rows=1, cols=1))

        self.assertIn("desk-0-0-L", result.state.disabled)
        self.assertNotIn("Bob", [p.name for p in result.state.seated_people()])
        self.assertEqual(result.dropped.name, "Bob")

    def test_no_vacancy_refused(self):
        config = SeatingConfig(rows=1, cols=1)
        state = full_state(config, ["Bob", "Ann"])

        with self.assertRaises(CapacityError):
            toggle_disable(state, "desk-0-0-L", config, NoVacancyPolicy.REFUSE)
        self.assertEqual(state.disabled, set())
        self.assertEqual(state.current["desk-0-0-L"].name, "Bob")

    def test_free_seat_must_be_enabled_and_unlocked(self):
        config = SeatingConfig(rows=1, cols=2)
        state = SeatState(
            disabled={"desk-0-0-R"},
            current={"desk-0-0-L": self.bob, "desk-0-1-L": None, "desk-0-1-R": None},
        )
        result = toggle_disable(state, "desk-0-0-L", config)
        self.assertEqual(result.displaced_to, "desk-0-1-L")

    def test_disabling_releases_lock(self):
        state = self.state.copy()
        state.locked["desk-0-0-R"] = self.bob
        result = toggle_disable(state, "desk-0-0-R", self.config)

        self.assertNotIn("desk-0-0-R", result.state.locked)

    def test_reenable_does_not_repopulate(self):
        disabled = toggle_disable(self.state, "desk-0-0-R", self.config).state
        enabled = toggle_disable(disabled, "desk-0-0-R", self.config).state

        self.assertNotIn("desk-0-0-R", enabled.disabled)
        self.assertIsNone(enabled.current.get("desk-0-0-R"))
        self.assertEqual(enabled.current["desk-0-1-L"], self.bob)

    def test_input_state_untouched(self):
        snapshot = self.state.copy()
        toggle_disable(self.state, "desk-0-0-R", self.config)
        self.assertEqual(self.state, snapshot)

    def test_invalid_seat_id(self):
        with self.assertRaises(ValueError):
            toggle_disable(self.state, "desk-0", self.config)

    def test_first_free_seat_none_when_full(self):
        config = SeatingConfig(rows=1, cols=1)
        self.assertIsNone(first_free_seat(full_state(config, ["A", "B"]), config))


class TestToggleLock(unittest.TestCase):

    def setUp(self):
        self.ann = person("Ann")
        self.state = SeatState(current={"desk-0-0-L": self.ann, "desk-0-0-R": None})

    def test_lock_and_unlock(self):
        locked = toggle_lock(self.state, "desk-0-0-L").state
        self.assertEqual(locked.locked, {"desk-0-0-L": self.ann})

        unlocked = toggle_lock(locked, "desk-0-0-L").state
        self.assertEqual(unlocked.locked, {})
        self.assertEqual(unlocked.current, self.state.current)

    def test_empty_seat_cannot_be_locked(self):
        result = toggle_lock(self.state, "desk-0-0-R")
        self.assertEqual(result.state.locked, {})
        self.assertEqual(len(result.notes), 1)


class TestSwap(unittest.TestCase):

    def setUp(self):
        self.ann, self.bob = person("Ann"), person("Bob")
        self.state = SeatState(current={
            "desk-0-0-L": self.ann,
            "desk-0-0-R": None,
            "desk-0-1-L": self.bob,
        })

    def test_swap_occupants(self):
        result = swap(self.state, "desk-0-0-L", "desk-0-1-L")
        self.assertEqual(result.state.current["desk-0-0-L"], self.bob)
        self.assertEqual(result.state.current["desk-0-1-L"], self.ann)

    def test_swap_with_empty_seat_moves(self):
        result = swap(self.state, "desk-0-0-L", "desk-0-0-R")
        self.assertIsNone(result.state.current["desk-0-0-L"])
        self.assertEqual(result.state.current["desk-0-0-R"], self.ann)

    def test_swap_twice_restores_occupants(self):
        once = swap(self.state, "desk-0-0-L", "desk-0-1-L").state
        twice = swap(once, "desk-0-0-L", "desk-0-1-L").state
        self.assertEqual(twice.current, self.state.current)

    def test_swap_same_seat_is_noop(self):
        result = swap(self.state, "desk-0-0-L", "desk-0-0-L")
        self.assertEqual(result.state, self.state)
        self.assertEqual(result.notes, [])

    def test_swap_releases_locks_on_both_seats(self):
        state = self.state.copy()
        state.locked["desk-0-0-L"] = self.ann
        state.locked["desk-0-1-L"] = self.bob

        once = swap(state, "desk-0-0-L", "desk-0-1-L").state
        self.assertEqual(once.locked, {})

        twice = swap(once, "desk-0-0-L", "desk-0-1-L").state
        self.assertEqual(twice.current, state.current)
        self.assertEqual(twice.locked, {})

    def test_swap_keeps_unrelated_locks(self):
        state = self.state.copy()
        state.locked["desk-0-1-L"] = self.bob
        state.current["desk-1-0-L"] = person("Cy")
        state.locked["desk-1-0-L"] = state.current["desk-1-0-L"]

        result = swap(state, "desk-0-0-L", "desk-0-1-L")
        self.assertEqual(set(result.state.locked), {"desk-1-0-L"})

    def test_swap_into_disabled_seat_is_rejected(self):
        state = self.state.copy()
        state.disabled.add("desk-0-0-R")

        result = swap(state, "desk-0-0-L", "desk-0-0-R")
        self.assertEqual(result.state, state)
        self.assertIsNone(result.state.current["desk-0-0-R"])
        self.assertTrue(any("rejected" in note for note in result.notes))

    def test_swap_out_of_disabled_seat_is_rejected(self):
        state = self.state.copy()
        state.disabled.add("desk-0-0-R")

        result = swap(state, "desk-0-0-R", "desk-0-1-L")
        self.assertEqual(result.state, state)
        self.assertEqual(result.state.current["desk-0-1-L"], self.bob)

    def test_disabled_seats_stay_empty_across_swaps(self):
        config = SeatingConfig(rows=2, cols=2)
        state = full_state(config, ["A", "B", "C", "D", "E", "F"])
        state = toggle_disable(state, "desk-0-1-L", config).state
        state = toggle_disable(state, "desk-1-0-R", config).state
        seats = sorted(state.current)

        for source in seats:
            for target in seats:
                after = swap(state, source, target).state
                for seat in after.disabled:
                    self.assertIsNone(after.current.get(seat))
                state = after


if __name__ == '__main__':
    unittest.main()
