import json
from datetime import time
from pathlib import Path
from typing import Any, Dict

from dockyard.base_model.timeslot import Timeslot
from dockyard.base_model.dock import Dock
from dockyard.base_model.truck import Truck
from dockyard.base_model.solution import Solution
from dockyard.config import SolverConfig


def _parse_time(value: str) -> time:
    try:
        return time.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid time of day: {value!r}, expected HH:MM")


def parse_data(data: Dict[str, Any]) -> Dict:
    """
    Parse an already loaded JSON document into a problem and its solver config.

    Returns:
        Dictionary with the unsolved "solution" and the "config" (None if the document has no config block)
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object at the top level, got {type(data).__name__}")
    timeslots = [Timeslot(_parse_time(slot["start"]), _parse_time(slot["end"])) for slot in data.get("timeslots", [])]
    docks = [Dock(dock["name"], int(dock["capacity"])) for dock in data.get("docks", [])]

    trucks = []
    for i, truck in enumerate(data.get("trucks", [])):
        trucks.append(Truck(
            truck_id=truck.get("id", i),
            name=truck["name"],
            capacity=int(truck["capacity"]),
        ))

    config = SolverConfig.from_dict(data["config"]) if "config" in data else None

    return {
        "solution": Solution(timeslots, docks, trucks),
        "config": config,
    }


def parse_input(input_path: Path) -> Dict:
    """
    Parse the input JSON file into a problem and its solver config.

    Args:
        input_path: Path to the input JSON file
    """
    with open(input_path, 'r') as f:
        data = json.load(f)
    return parse_data(data)


def _format_time(value) -> str:
    return value.strftime("%H:%M") if isinstance(value, time) else str(value)


def solution_to_json(solution: Solution) -> Dict:
    """JSON document of the solution: the problem facts plus each truck's assignment and the score"""
    return {
        "timeslots": [{"start": _format_time(t.start), "end": _format_time(t.end)} for t in solution.timeslots],
        "docks": [{"name": d.name, "capacity": d.capacity} for d in solution.docks],
        "trucks": [
            {
                "id": truck.truck_id,
                "name": truck.name,
                "capacity": truck.capacity,
                "timeslot": _format_time(truck.timeslot.start) if truck.timeslot is not None else None,
                "dock": truck.dock.name if truck.dock is not None else None,
            }
            for truck in solution.trucks
        ],
        "score": str(solution.score) if solution.score is not None else None,
        "unplanned": [truck.truck_id for truck in solution.get_unplanned_trucks()],
    }


def write_output(solution: Solution, output_path: Path) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w') as f:
        json.dump(solution_to_json(solution), f, indent=2)
