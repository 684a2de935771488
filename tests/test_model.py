import unittest
from datetime import time

from dockyard.base_model.timeslot import Timeslot
from dockyard.base_model.dock import Dock
from dockyard.base_model.truck import Truck
from dockyard.base_model.solution import Solution
from dockyard.base_model.score import HardSoftScore
from dockyard.base_model.capacity_grouping import CapacityGrouping


class TestFacts(unittest.TestCase):

    def test_timeslot_start_must_be_before_end(self):
        with self.assertRaises(ValueError):
            Timeslot(time(9, 0), time(8, 0))
        with self.assertRaises(ValueError):
            Timeslot(time(9, 0), time(9, 0))

    def test_timeslot_identity_is_by_value(self):
        self.assertEqual(Timeslot(time(8, 0), time(9, 0)), Timeslot(time(8, 0), time(9, 0)))
        self.assertEqual(len({Timeslot(time(8, 0), time(9, 0)), Timeslot(time(8, 0), time(9, 0))}), 1)

    def test_dock_capacity_must_be_non_negative(self):
        with self.assertRaises(ValueError):
            Dock("A", -1)
        self.assertEqual(Dock("A", 0).capacity, 0)

    def test_truck_capacity_must_be_positive(self):
        with self.assertRaises(ValueError):
            Truck(truck_id=1, name="T0", capacity=0)

    def test_trucks_are_distinct_entities(self):
        truck_a = Truck(truck_id=1, name="T10", capacity=10)
        truck_b = Truck(truck_id=1, name="T10", capacity=10)
        self.assertNotEqual(truck_a, truck_b)
        self.assertFalse(truck_a.is_planned)
        self.assertEqual(truck_a.assignment, (None, None))


class TestSolution(unittest.TestCase):

    def setUp(self):
        self.slot1 = Timeslot(time(8, 0), time(9, 0))
        self.slot2 = Timeslot(time(9, 0), time(10, 0))
        self.dock_a = Dock("A", 40)
        self.dock_b = Dock("B", 20)
        self.truck1 = Truck(truck_id=1, name="T10", capacity=10)
        self.truck2 = Truck(truck_id=2, name="T15", capacity=15)
        self.solution = Solution([self.slot1, self.slot2], [self.dock_a, self.dock_b], [self.truck1, self.truck2])

    def test_duplicate_facts_are_rejected(self):
        with self.assertRaises(ValueError):
            Solution([self.slot1, Timeslot(time(8, 0), time(9, 0))], [self.dock_a], [])
        with self.assertRaises(ValueError):
            Solution([self.slot1], [self.dock_a, Dock("A", 10)], [])
        with self.assertRaises(ValueError):
            Solution([self.slot1], [self.dock_a], [Truck(1, "X", 1), Truck(1, "Y", 2)])

    def test_all_trucks_start_unplanned(self):
        self.assertEqual(self.solution.n_unplanned, 2)
        self.assertEqual(self.solution.get_planned_trucks(), [])

    def test_assign_keeps_indexes_in_sync(self):
        self.solution.assign(self.truck1, self.slot1, self.dock_a)
        self.solution.assign(self.truck2, self.slot1, self.dock_a)

        self.assertEqual(self.solution.trucks_per_cell[(self.slot1, self.dock_a)], 2)
        self.assertEqual(self.solution.load_per_dock[self.dock_a], 25)
        self.assertEqual(self.solution.load_per_cell[(self.slot1, self.dock_a)], 25)
        self.assertEqual(self.solution.n_unplanned, 0)

        self.solution.assign(self.truck2, self.slot2, self.dock_b)
        self.assertEqual(self.solution.trucks_per_cell[(self.slot1, self.dock_a)], 1)
        self.assertEqual(self.solution.load_per_dock[self.dock_a], 10)
        self.assertEqual(self.solution.load_per_dock[self.dock_b], 15)

        self.solution.unassign(self.truck1)
        self.assertEqual(self.solution.load_per_dock[self.dock_a], 0)
        self.assertEqual(self.solution.n_unplanned, 1)
        self.assertEqual(self.solution.get_unplanned_trucks(), [self.truck1])

    def test_half_assigned_truck_is_unplanned(self):
        self.solution.assign(self.truck1, self.slot1, None)
        self.assertFalse(self.truck1.is_planned)
        self.assertEqual(self.solution.n_unplanned, 2)
        self.assertEqual(sum(self.solution.trucks_per_cell.values()), 0)

    def test_assign_rejects_foreign_facts(self):
        with self.assertRaises(ValueError):
            self.solution.assign(self.truck1, Timeslot(time(20, 0), time(21, 0)), self.dock_a)
        with self.assertRaises(ValueError):
            self.solution.assign(self.truck1, self.slot1, Dock("Z", 100))

    def test_rebuild_indexes_after_direct_field_edits(self):
        self.truck1.timeslot = self.slot2
        self.truck1.dock = self.dock_b
        self.solution.rebuild_indexes()
        self.assertEqual(self.solution.trucks_per_cell[(self.slot2, self.dock_b)], 1)
        self.assertEqual(self.solution.n_unplanned, 1)

    def test_trucks_are_kept_by_identity(self):
        self.assertIs(self.solution.get_truck(1), self.truck1)
        with self.assertRaises(ValueError):
            self.solution.get_truck(99)

    def test_empty_problem(self):
        self.assertTrue(Solution([], [self.dock_a], []).is_empty_problem())
        self.assertTrue(Solution([self.slot1], [], []).is_empty_problem())
        self.assertFalse(self.solution.is_empty_problem())


class TestScore(unittest.TestCase):

    def test_hard_dominates_soft(self):
        self.assertLess(HardSoftScore(0, 100), HardSoftScore(1, 0))
        self.assertLess(HardSoftScore(2, 3), HardSoftScore(2, 4))
        self.assertEqual(min(HardSoftScore(1, 0), HardSoftScore(0, 5), HardSoftScore(0, 7)), HardSoftScore(0, 5))

    def test_arithmetic(self):
        self.assertEqual(HardSoftScore(3, 2) + HardSoftScore(-1, 4), HardSoftScore(2, 6))
        self.assertEqual(HardSoftScore(3, 2) - HardSoftScore(3, 2), HardSoftScore.ZERO)
        self.assertEqual(-HardSoftScore(1, -2), HardSoftScore(-1, 2))

    def test_feasibility(self):
        self.assertTrue(HardSoftScore(0, 12).is_feasible)
        self.assertFalse(HardSoftScore(1, 0).is_feasible)

    def test_string_form_and_parse(self):
        self.assertEqual(str(HardSoftScore(2, -3)), "2hard/-3soft")
        self.assertEqual(HardSoftScore.parse("2hard/-3soft"), HardSoftScore(2, -3))
        with self.assertRaises(ValueError):
            HardSoftScore.parse("2/3")

    def test_to_scalar(self):
        self.assertEqual(HardSoftScore(2, 7).to_scalar(100), 207)


class TestCapacityGrouping(unittest.TestCase):

    def test_from_string(self):
        self.assertEqual(CapacityGrouping.from_string("DOCK"), CapacityGrouping.DOCK)
        self.assertEqual(CapacityGrouping.from_string("timeslot_dock"), CapacityGrouping.TIMESLOT_DOCK)
        with self.assertRaises(ValueError):
            CapacityGrouping.from_string("room")


if __name__ == '__main__':
    unittest.main()
