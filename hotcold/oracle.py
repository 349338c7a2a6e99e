"""
Offline Oracle and Benchmark
============================

LocalOracle answers guesses truthfully from the distance index, which lets
the solver be played, traced and benchmarked without the remote server.
"""

import logging
import random
import time
from collections import Counter
from typing import Dict, List, Optional

from .distance import DistanceIndex
from .protocol import Exhausted, OracleReply, Ordinal, Solved, Verdict
from .solver import EliminationSolver

logger = logging.getLogger(__name__)


class LocalOracle:
    """
    In-process stand-in for the remote oracle.

    Args:
        index: distance index over the corpus
        target: hidden word (must be in the corpus)
        max_guesses: exhaustion limit; None means unlimited
        start_distance: what the first guess is compared against
        payload: success payload, defaults to "flag{<target>}"
    """

    def __init__(self, index: DistanceIndex, target: str, max_guesses: Optional[int] = None,
                 start_distance: int = 0, payload: Optional[str] = None):
        index.index_of(target)
        self.index = index
        self.target = target
        self.max_guesses = max_guesses
        self.payload = payload if payload is not None else "flag{%s}" % target
        self.previous_distance = start_distance
        self.guesses: List[str] = []

    def submit_guess(self, word: str) -> OracleReply:
        if self.max_guesses is not None and len(self.guesses) >= self.max_guesses:
            return Exhausted()
        self.guesses.append(word)

        if word == self.target:
            return Solved(self.payload)

        d = self.index.distance(word, self.target)
        verdict = Verdict.compare(d, self.previous_distance)
        self.previous_distance = d
        return Ordinal(verdict)


# ============================================================================
# BENCHMARK
# ============================================================================

def benchmark(index: DistanceIndex, targets: Optional[List[str]] = None,
              rng: Optional[random.Random] = None, max_guesses: Optional[int] = None,
              verbose: bool = False) -> Dict:
    """
    Play one offline game per target.

    Args:
        index: distance index
        targets: hidden words to play (default: whole corpus)
        rng: random source for first guesses
        max_guesses: per-game limit; unsolved games count as failures
        verbose: log progress every 500 games

    Returns:
        Dict with results
    """
    if targets is None:
        targets = list(index.words)
    rng = rng or random.Random()

    results = []
    dist = Counter()
    failures = []

    start = time.time()
    for i, word in enumerate(targets):
        if verbose and i % 500 == 0:
            elapsed = time.time() - start
            rate = (i + 1) / elapsed if elapsed > 0 else 0
            avg = sum(results) / len(results) if results else 0
            logger.info("[%d/%d] %.1f w/s, avg=%.4f", i, len(targets), rate, avg)

        oracle = LocalOracle(index, word, max_guesses=max_guesses)
        game = EliminationSolver(index, oracle, rng=rng).play_game()
        if game.solved:
            results.append(game.rounds)
            dist[game.rounds] += 1
        else:
            failures.append(word)

    elapsed = time.time() - start

    return {
        'total': len(targets),
        'average': sum(results) / len(results) if results else 0.0,
        'worst': max(results) if results else 0,
        'distribution': dict(sorted(dist.items())),
        'failures': len(failures),
        'failed_words': failures[:20],
        'time': elapsed,
        'rate': len(targets) / elapsed if elapsed > 0 else 0.0,
    }


def print_results(results: Dict):
    """Pretty print benchmark results."""
    print("\n" + "=" * 50)
    print("BENCHMARK RESULTS")
    print("=" * 50)
    print(f"Games played: {results['total']}")
    print(f"Average guesses: {results['average']:.4f}")
    print(f"Worst game: {results['worst']} guesses")
    if results['total']:
        print(f"Failures: {results['failures']} ({100*results['failures']/results['total']:.2f}%)")
    print(f"Time: {results['time']:.1f}s ({results['rate']:.1f} games/sec)")
    print("\nDistribution:")
    for n, count in results['distribution'].items():
        pct = 100 * count / results['total']
        bar = "█" * int(pct / 2)
        print(f"  {n:3d}: {count:5d} ({pct:5.2f}%) {bar}")
    if results['failed_words']:
        print(f"\nUnsolved: {results['failed_words']}")
    print("=" * 50)
