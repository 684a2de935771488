"""
Local search optimization module for dock yard planning.
Includes the search driver, acceptance policies, moves and the rules engine.
"""

from dockyard.local_search.driver import local_search, run_local_search, LocalSearchResult
from dockyard.local_search.move import Move, ReassignMove, SwapMove, UndoToken
from dockyard.local_search.move_generator import generate_random_move, iter_all_moves, reassign_neighborhood_size, swap_neighborhood_size
from dockyard.local_search.rules_engine import calculate_full_score, calculate_delta_score, calculate_constraint_totals

__all__ = [
    'local_search',
    'run_local_search',
    'LocalSearchResult',
    'Move',
    'ReassignMove',
    'SwapMove',
    'UndoToken',
    'generate_random_move',
    'iter_all_moves',
    'reassign_neighborhood_size',
    'swap_neighborhood_size',
    'calculate_full_score',
    'calculate_delta_score',
    'calculate_constraint_totals',
]
