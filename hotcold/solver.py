"""
Elimination Solver
==================

Plays one game against an oracle that only says whether each guess is
closer to, farther from, or as far from the hidden word as the previous one.

Algorithm:
- First guess: uniformly random (nothing is known yet).
- Next guess: for each candidate g, bucket every candidate w by comparing
  d(w, g) with d(w, previous_guess). The score of g is its largest bucket;
  pick the first g with the smallest score (minimax).
- Filter: keep exactly the candidates w for which comparing d(w, guess) with
  d(w, previous_guess) reproduces the oracle's verdict.

Candidates are an int32 array of corpus positions into the DistanceIndex.
"""

import enum
import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
from numba import jit, prange

from .distance import DistanceIndex
from .errors import NoCandidatesRemain
from .protocol import Exhausted, OracleReply, Ordinal, Solved, Verdict

logger = logging.getLogger(__name__)


# ============================================================================
# NUMBA-ACCELERATED SCORING / FILTERING
# ============================================================================

@jit(nopython=True, parallel=True, cache=True)
def worst_bucket_sizes(matrix: np.ndarray, candidates: np.ndarray, previous: int) -> np.ndarray:
    """
    Worst-case surviving pool size for every candidate guess.

    Args:
        matrix: (n, n) distance matrix
        candidates: corpus positions still in play
        previous: corpus position of the previous guess

    Returns:
        Array with one score per entry of `candidates`
    """
    n = candidates.shape[0]
    scores = np.zeros(n, dtype=np.int64)
    prev_row = matrix[previous]

    for k in prange(n):
        row = matrix[candidates[k]]
        closer = 0
        same = 0
        farther = 0
        for m in range(n):
            w = candidates[m]
            curr = row[w]
            prev = prev_row[w]
            if curr < prev:
                closer += 1
            elif curr > prev:
                farther += 1
            else:
                same += 1

        worst = closer
        if same > worst:
            worst = same
        if farther > worst:
            worst = farther
        scores[k] = worst

    return scores


@jit(nopython=True, cache=True)
def consistent_mask(guess_row: np.ndarray, previous_row: np.ndarray,
                    candidates: np.ndarray, verdict: int) -> np.ndarray:
    """
    Mark the candidates whose distances reproduce `verdict`.

    `previous_row` is any vector of previous distances indexed by corpus
    position, normally the previous guess's matrix row.
    """
    n = candidates.shape[0]
    mask = np.zeros(n, dtype=np.bool_)
    for k in range(n):
        w = candidates[k]
        curr = guess_row[w]
        prev = previous_row[w]
        if curr < prev:
            sign = -1
        elif curr > prev:
            sign = 1
        else:
            sign = 0
        mask[k] = sign == verdict
    return mask


# ============================================================================
# PURE SELECTION FUNCTIONS
# ============================================================================

def pick_first_guess(index: DistanceIndex, candidates: np.ndarray,
                     rng: Optional[random.Random] = None) -> str:
    """Uniformly random candidate."""
    if len(candidates) == 0:
        raise NoCandidatesRemain("Cannot pick a guess from an empty candidate set")
    rng = rng or random.Random()
    return index.words[candidates[rng.randrange(len(candidates))]]


def worst_case_scores(index: DistanceIndex, candidates: np.ndarray,
                      previous_guess: str) -> np.ndarray:
    return worst_bucket_sizes(index.matrix, candidates, index.index_of(previous_guess))


def pick_next_guess(index: DistanceIndex, candidates: np.ndarray, previous_guess: str) -> str:
    """
    Minimax guess: the candidate whose largest feedback bucket is smallest.

    Ties go to the earliest candidate in corpus order.
    """
    if len(candidates) == 0:
        raise NoCandidatesRemain("Cannot pick a guess from an empty candidate set")
    scores = worst_case_scores(index, candidates, previous_guess)
    return index.words[candidates[int(np.argmin(scores))]]


def filter_candidates(index: DistanceIndex, candidates: np.ndarray, guess: str,
                      previous_guess: Optional[str], verdict: Verdict) -> np.ndarray:
    """
    Candidates consistent with `verdict` for `guess` relative to `previous_guess`.

    With no previous guess nothing can be compared, so the set is returned
    unchanged.
    """
    if previous_guess is None:
        return candidates
    mask = consistent_mask(index.row(guess), index.row(previous_guess),
                           candidates, int(verdict))
    return candidates[mask]


# ============================================================================
# GAME STATE
# ============================================================================

class SolverState(enum.Enum):
    AWAITING_FIRST_GUESS = "awaiting_first_guess"
    AWAITING_FEEDBACK = "awaiting_feedback"
    FILTERING = "filtering"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


@dataclass
class GameResult:
    payload: Optional[str]
    guesses: List[str] = field(default_factory=list)
    candidate_counts: List[int] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return self.payload is not None

    @property
    def rounds(self) -> int:
        return len(self.guesses)


class EliminationSolver:
    """
    One game against one oracle session.

    A fresh instance starts with the whole corpus as candidates; nothing is
    shared between games except the read-only DistanceIndex.

    Args:
        index: prebuilt distance index
        session: anything with submit_guess(word) -> OracleReply
        rng: source for the random first guess (seed it for reproducibility)
        first_guess: force the opening word instead of picking at random
    """

    def __init__(self, index: DistanceIndex, session, rng: Optional[random.Random] = None,
                 first_guess: Optional[str] = None):
        self.index = index
        self.session = session
        self.rng = rng or random.Random()
        if first_guess is not None:
            index.index_of(first_guess)
        self.first_guess = first_guess

        self._candidates = np.arange(len(index), dtype=np.int32)
        self.previous_guess: Optional[str] = None
        self.state = SolverState.AWAITING_FIRST_GUESS
        self.payload: Optional[str] = None
        self.history: List[tuple] = []  # (guess, reply, candidates left)

    @property
    def candidates(self) -> List[str]:
        return self.index.words_at(self._candidates)

    @property
    def candidate_indices(self) -> np.ndarray:
        return self._candidates

    @property
    def finished(self) -> bool:
        return self.state in (SolverState.SOLVED, SolverState.EXHAUSTED)

    def pick_guess(self) -> str:
        if self.previous_guess is None:
            if self.first_guess is not None:
                return self.first_guess
            return pick_first_guess(self.index, self._candidates, self.rng)
        return pick_next_guess(self.index, self._candidates, self.previous_guess)

    def filter(self, guess: str, verdict: Verdict) -> None:
        """Apply one verdict and make `guess` the new previous guess."""
        self.state = SolverState.FILTERING
        remaining = filter_candidates(self.index, self._candidates, guess,
                                      self.previous_guess, verdict)
        if len(remaining) == 0:
            raise NoCandidatesRemain(
                f"No candidates consistent with {verdict.name} for {guess!r} "
                f"after {self.previous_guess!r}")
        self._candidates = remaining
        self.previous_guess = guess

    def play_round(self) -> OracleReply:
        """Make one guess, wait for the reply and update the game state."""
        if self.finished:
            raise RuntimeError(f"Game already finished ({self.state.value})")

        guess = self.pick_guess()
        self.state = SolverState.AWAITING_FEEDBACK
        reply = self.session.submit_guess(guess)

        if isinstance(reply, Ordinal):
            self.filter(guess, reply.verdict)
        elif isinstance(reply, Solved):
            self.payload = reply.payload
            self.state = SolverState.SOLVED
        elif isinstance(reply, Exhausted):
            self.state = SolverState.EXHAUSTED
        else:
            raise TypeError(f"Session returned a non-reply object: {reply!r}")

        self.history.append((guess, reply, len(self._candidates)))
        logger.debug("guess=%s reply=%s candidates=%d", guess, reply, len(self._candidates))
        return reply

    def play_game(self) -> GameResult:
        """Play rounds until the oracle reports success or exhaustion."""
        if len(self._candidates) == 0:
            logger.warning("Empty corpus, nothing to guess")
            self.state = SolverState.EXHAUSTED
            return GameResult(payload=None)

        while not self.finished:
            self.play_round()

        return GameResult(
            payload=self.payload,
            guesses=[g for g, _, _ in self.history],
            candidate_counts=[c for _, _, c in self.history],
        )
