import unittest

from dockyard.base_model.capacity_grouping import CapacityGrouping
from dockyard.construction.first_fit import first_fit_decreasing, add_truck_to_solution
from dockyard.local_search.rules_engine import calculate_full_score
from dockyard.util.data_generator import generate_demo_data, generate_test_data


class TestFirstFitDecreasing(unittest.TestCase):

    def setUp(self):
        self.solution = generate_demo_data()

    def test_demo_yard_per_cell_capacity(self):
        self.solution.capacity_grouping = CapacityGrouping.TIMESLOT_DOCK
        n_placed = first_fit_decreasing(self.solution)

        self.assertEqual(n_placed, 9)
        self.assertEqual(calculate_full_score(self.solution).hard, 0)
        # biggest trucks first, each into the first cell it fits
        cells = {truck.name: (str(truck.timeslot), truck.dock.name)
                 for truck in self.solution.get_planned_trucks()}
        self.assertEqual(cells["T40"], ("08:00:00", "DocYard-A-40"))
        self.assertEqual(cells["T30"], ("09:00:00", "DocYard-A-40"))
        self.assertEqual(cells["T20"], ("08:00:00", "DocYard-B-20"))
        self.assertEqual(sorted(t.name for t in self.solution.get_unplanned_trucks()), ["T11", "T12"])

    def test_demo_yard_per_dock_capacity_stays_feasible(self):
        first_fit_decreasing(self.solution)
        self.assertEqual(calculate_full_score(self.solution).hard, 0)
        self.assertEqual(sorted(t.name for t in self.solution.get_planned_trucks()), ["T10", "T20", "T40"])

    def test_without_unassigned_every_truck_is_placed(self):
        n_placed = first_fit_decreasing(self.solution, allow_unassigned=False)
        self.assertEqual(n_placed, len(self.solution.trucks))
        self.assertEqual(self.solution.get_unplanned_trucks(), [])

    def test_planned_trucks_are_left_alone(self):
        truck = self.solution.trucks[0]
        self.solution.assign(truck, self.solution.timeslots[2], self.solution.docks[2])
        first_fit_decreasing(self.solution)
        self.assertEqual(truck.assignment, (self.solution.timeslots[2], self.solution.docks[2]))

    def test_no_cells(self):
        solution = generate_test_data(n_trucks=4, n_timeslots=0, n_docks=2)
        self.assertFalse(add_truck_to_solution(solution, solution.trucks[0], allow_unassigned=False))
        self.assertEqual(first_fit_decreasing(solution), 0)


if __name__ == '__main__':
    unittest.main()
