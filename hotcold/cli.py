"""
Command line entry point.

    hotcold play                 hunt the remote oracle for a flag
    hotcold bench [--sample K]   offline benchmark over the corpus
    hotcold trace WORD           verbose offline game against WORD
"""

import argparse
import functools
import logging
import random
import sys

from . import config
from .corpus import load_words
from .distance import build_index
from .oracle import LocalOracle, benchmark, print_results
from .protocol import Ordinal, format_reply
from .runner import hunt
from .session import Session
from .solver import EliminationSolver


def _cmd_play(args, index) -> int:
    connect = functools.partial(Session, args.host, args.port, args.timeout)
    rng = random.Random(args.seed)
    flag = hunt(index, connect, rng=rng, flag_suffix=args.flag_suffix,
                max_sessions=args.max_sessions, retry_delay=args.retry_delay)
    if flag is None:
        print("No flag found")
        return 1
    print(f"Found flag: {flag}")
    return 0


def _cmd_bench(args, index) -> int:
    rng = random.Random(args.seed)
    targets = list(index.words)
    if args.sample and args.sample < len(targets):
        targets = rng.sample(targets, args.sample)
    results = benchmark(index, targets, rng=rng, max_guesses=args.max_guesses, verbose=True)
    print_results(results)
    return 0


def _cmd_trace(args, index) -> int:
    oracle = LocalOracle(index, args.target, max_guesses=args.max_guesses)
    solver = EliminationSolver(index, oracle, rng=random.Random(args.seed),
                               first_guess=args.first_guess)

    print(f"\n=== Tracing game for: {args.target} ===\n")
    turn = 0
    while not solver.finished:
        turn += 1
        before = len(solver.candidate_indices)
        reply = solver.play_round()
        guess = solver.history[-1][0]
        after = len(solver.candidate_indices)
        label = reply.verdict.name.lower() if isinstance(reply, Ordinal) else type(reply).__name__
        print(f"Turn {turn}: {guess} -> {format_reply(reply) or '-'} {label} ({before} -> {after} candidates)")
        if isinstance(reply, Ordinal) and after <= 10:
            print(f"        remaining: {solver.candidates}")

    if solver.payload is not None:
        print(f"\nSolved in {turn} guesses: {solver.payload}")
        return 0
    print(f"\nOut of guesses after {turn} rounds")
    return 1


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="hotcold",
                                 description="Edit-distance hot/cold guessing solver")
    ap.add_argument("--words", default=config.WORDS_PATH, help="word list, one per line")
    ap.add_argument("--seed", type=int, default=None, help="RNG seed for first guesses")
    ap.add_argument("--log-level", default=config.LOG_LEVEL,
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = ap.add_subparsers(dest="command", required=True)

    play = sub.add_parser("play", help="play the remote oracle until a flag is found")
    play.add_argument("--host", default=config.HOST)
    play.add_argument("--port", type=int, default=config.PORT)
    play.add_argument("--timeout", type=float, default=config.TIMEOUT)
    play.add_argument("--retry-delay", type=float, default=config.RETRY_DELAY)
    play.add_argument("--flag-suffix", default=config.FLAG_SUFFIX)
    play.add_argument("--max-sessions", type=int, default=None)
    play.set_defaults(func=_cmd_play)

    bench = sub.add_parser("bench", help="offline benchmark")
    bench.add_argument("--sample", type=int, default=None, help="play only K random targets")
    bench.add_argument("--max-guesses", type=int, default=None)
    bench.set_defaults(func=_cmd_bench)

    trace = sub.add_parser("trace", help="verbose offline game against one target")
    trace.add_argument("target")
    trace.add_argument("--first-guess", default=None)
    trace.add_argument("--max-guesses", type=int, default=None)
    trace.set_defaults(func=_cmd_trace)

    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    words = load_words(args.words)
    index = build_index(words)

    if args.command == "trace":
        for w in filter(None, (args.target, args.first_guess)):
            if w not in index:
                print(f"Word not in corpus: {w}", file=sys.stderr)
                return 2
    return args.func(args, index)
