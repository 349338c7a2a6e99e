"""
Outer loop: keep connecting and playing games until a flag shows up.

Each session starts games with a fresh candidate set; nothing survives a
dropped connection.
"""

import logging
import random
import time
from typing import Callable, Optional

from . import config
from .distance import DistanceIndex
from .errors import ConnectionLost, NoCandidatesRemain, ProtocolError
from .solver import EliminationSolver

logger = logging.getLogger(__name__)


def is_flag(payload: Optional[str], suffix: str = "}") -> bool:
    return payload is not None and payload.endswith(suffix)


def hunt(index: DistanceIndex, connect: Callable, rng: Optional[random.Random] = None,
         flag_suffix: Optional[str] = None, max_sessions: Optional[int] = None,
         retry_delay: Optional[float] = None, sleep: Callable[[float], None] = time.sleep) -> Optional[str]:
    """
    Play games across sessions until a success payload ends with `flag_suffix`.

    Args:
        index: shared distance index
        connect: zero-argument factory returning a session with
            submit_guess() and close()
        rng: random source for first guesses
        flag_suffix: marker that identifies the terminal payload
        max_sessions: give up after this many sessions (None = forever)
        retry_delay: seconds to wait before reconnecting after a failure
        sleep: injectable for tests

    Returns:
        The flag, or None if max_sessions ran out first
    """
    if len(index) == 0:
        raise ValueError("Cannot hunt with an empty corpus")
    rng = rng or random.Random()
    flag_suffix = config.FLAG_SUFFIX if flag_suffix is None else flag_suffix
    retry_delay = config.RETRY_DELAY if retry_delay is None else retry_delay

    sessions = 0
    while max_sessions is None or sessions < max_sessions:
        sessions += 1
        try:
            session = connect()
        except ConnectionLost as e:
            logger.warning("Session %d: %s", sessions, e)
            sleep(retry_delay)
            continue

        try:
            games = 0
            while True:
                games += 1
                result = EliminationSolver(index, session, rng=rng).play_game()
                if not result.solved:
                    logger.info("Session %d game %d: out of guesses after %d rounds",
                                sessions, games, result.rounds)
                    break
                logger.info("Session %d game %d: solved in %d rounds -> %s",
                            sessions, games, result.rounds, result.payload)
                if is_flag(result.payload, flag_suffix):
                    return result.payload
        except (ConnectionLost, NoCandidatesRemain, ProtocolError) as e:
            logger.warning("Session %d aborted: %s", sessions, e)
            sleep(retry_delay)
        finally:
            session.close()

    logger.error("Gave up after %d sessions", sessions)
    return None
