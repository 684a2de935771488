from collections import defaultdict

from dockyard.base_model.solution import Solution
from dockyard.local_search.rules_engine import calculate_constraint_totals

CELL_WIDTH = 10


def render(solution: Solution) -> str:
    """
    Table of the solution: one row per timeslot, one column per dock, truck names in the cells.
    Unassigned trucks are listed below the table.
    """
    trucks_by_cell = defaultdict(list)
    for truck in solution.trucks:
        if truck.is_planned:
            trucks_by_cell[(truck.timeslot, truck.dock)].append(truck)

    separator = "|" + ("-" * (CELL_WIDTH + 2) + "|") * (len(solution.docks) + 1)
    lines = []
    lines.append("| " + " " * CELL_WIDTH + " | "
                 + " | ".join(f"{dock.name:<{CELL_WIDTH}}" for dock in solution.docks) + " |")
    lines.append(separator)

    for timeslot in solution.timeslots:
        cells = []
        for dock in solution.docks:
            names = ",".join(truck.name for truck in trucks_by_cell[(timeslot, dock)])
            cells.append(f"{names:<{CELL_WIDTH}}")
        lines.append(f"| {str(timeslot):<{CELL_WIDTH}} | " + " | ".join(cells) + " |")
        lines.append(separator)

    unassigned_trucks = solution.get_unplanned_trucks()
    if unassigned_trucks:
        lines.append("")
        lines.append("Unassigned trucks")
        for truck in unassigned_trucks:
            lines.append(f"  {truck.name} - {truck.capacity}")

    return "\n".join(lines)


def render_score_summary(solution: Solution) -> str:
    lines = [f"Score: {solution.score}"]
    for constraint_name, score in calculate_constraint_totals(solution).items():
        lines.append(f"  {constraint_name}: {score}")
    return "\n".join(lines)


def visualize(solution: Solution):
    print(render(solution))
    print()
    print(render_score_summary(solution))
