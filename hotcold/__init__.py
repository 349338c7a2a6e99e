"""
Hot/Cold Solver
===============

Finds a hidden word when each guess is only answered with "closer",
"farther" or "same" (by edit distance) relative to the previous guess.
"""

__version__ = "1.0.0"

from .distance import DistanceIndex, DistanceIndexBuilder, build_index, edit_distance
from .protocol import Verdict, Ordinal, Solved, Exhausted, parse_reply
from .solver import EliminationSolver, GameResult, pick_next_guess, filter_candidates
from .oracle import LocalOracle, benchmark, print_results
from .runner import hunt, is_flag
