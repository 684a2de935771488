import argparse
import logging
import sys
from pathlib import Path

from dockyard.config import SolverConfig, AcceptanceType
from dockyard.base_model.capacity_grouping import CapacityGrouping
from dockyard.solver import solve
from dockyard.util.parser import parse_input, write_output
from dockyard.util.data_generator import generate_demo_data
from dockyard.util.schedule_visualizer import visualize

logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Dock Yard Scheduler')

    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument('--input', type=str, help='Path to input JSON file')
    group.add_argument('--demo', action='store_true', help='Solve the 3 timeslot, 3 dock, 11 truck demo yard')

    parser.add_argument('--time', type=float, help='Time budget in seconds (default: 10, or the input file config)')
    parser.add_argument('--seed', type=int, help='Random seed')
    parser.add_argument('--iterations', type=int, help='Iteration cap')
    parser.add_argument('--acceptance', type=str, choices=[a.value for a in AcceptanceType],
                        help='Acceptance policy of the local search')
    parser.add_argument('--capacity-grouping', type=str, choices=[g.value for g in CapacityGrouping],
                        help='Sum truck capacities per dock or per (timeslot, dock)')
    parser.add_argument('--workers', type=int, help='Number of independent parallel solver runs')

    parser.add_argument('--output', type=str, help='Path to output JSON file')
    parser.add_argument('--log', type=str, help='Path to log file for local search output')
    parser.add_argument('--verbose', action='store_true', help='Log debug output')

    return parser.parse_args(argv)


def build_config(args, base_config: SolverConfig = None) -> SolverConfig:
    """Command line flags override the input file config, which overrides the defaults"""
    config = base_config or SolverConfig()
    overrides = {}
    if args.time is not None:
        overrides["time_budget"] = args.time
    if args.seed is not None:
        overrides["random_seed"] = args.seed
    if args.iterations is not None:
        overrides["iteration_cap"] = args.iterations
    if args.acceptance is not None:
        overrides["acceptance"] = AcceptanceType.from_string(args.acceptance)
    if args.capacity_grouping is not None:
        overrides["capacity_grouping"] = CapacityGrouping.from_string(args.capacity_grouping)
    if args.workers is not None:
        overrides["n_workers"] = args.workers
    return config.with_overrides(**overrides) if overrides else config


def main(argv=None):
    """Main entry point for the scheduler."""
    args = parse_arguments(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        if args.input:
            input_path = Path(args.input)
            if not input_path.exists():
                logger.error(f"Input file {args.input} not found")
                return 1
            parsed_data = parse_input(input_path)
            problem = parsed_data["solution"]
            config = build_config(args, parsed_data["config"])
        else:
            problem = generate_demo_data()
            config = build_config(args)

        result = solve(problem, config, log_file_path=args.log)
        visualize(result.solution)

        if args.output:
            write_output(result.solution, Path(args.output))
            logger.info(f"Solution written to {args.output}")

        return 0

    except Exception as e:
        logger.exception(f"Error: {str(e)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
