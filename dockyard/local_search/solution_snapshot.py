from dockyard.base_model.solution import Solution
from dockyard.base_model.score import HardSoftScore


class SolutionSnapshot:
    def __init__(self, solution: Solution, score: HardSoftScore = None):
        self.score = score

        # Store assignments as (truck_id, timeslot index, dock index), indexes are None when unassigned
        timeslot_index = {timeslot: i for i, timeslot in enumerate(solution.timeslots)}
        dock_index = {dock: i for i, dock in enumerate(solution.docks)}
        self.assignments = []
        for truck in solution.trucks:
            self.assignments.append((
                truck.truck_id,
                timeslot_index[truck.timeslot] if truck.timeslot is not None else None,
                dock_index[truck.dock] if truck.dock is not None else None,
            ))

    def restore_solution(self, solution: Solution) -> Solution:
        """Write the stored assignments back onto the trucks of the given solution, in place"""
        for truck_id, timeslot_i, dock_i in self.assignments:
            truck = solution.get_truck(truck_id)
            timeslot = solution.timeslots[timeslot_i] if timeslot_i is not None else None
            dock = solution.docks[dock_i] if dock_i is not None else None
            solution.assign(truck, timeslot, dock)

        solution.score = self.score
        return solution
