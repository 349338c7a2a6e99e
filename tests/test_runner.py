import pytest

from hotcold.distance import build_index
from hotcold.errors import ConnectionLost, ProtocolError
from hotcold.protocol import Exhausted, Ordinal, Solved, Verdict
from hotcold.runner import hunt, is_flag


def test_is_flag():
    assert is_flag("flag{test}")
    assert not is_flag("flag{test")
    assert not is_flag(None)
    assert is_flag("done!", suffix="!")


def test_hunt_reconnects_and_stops_on_flag(small_index, scripted):
    sessions = [
        scripted([Ordinal(Verdict.SAME), ProtocolError("junk")]),
        scripted([Solved("warmup"), Exhausted()]),
        scripted([Ordinal(Verdict.CLOSER), Solved("flag{test}")]),
    ]
    opened = list(sessions)
    sleeps = []

    flag = hunt(small_index, lambda: opened.pop(0), sleep=sleeps.append, retry_delay=0.5)

    assert flag == "flag{test}"
    assert opened == []
    assert sleeps == [0.5]
    assert all(s.closed for s in sessions)
    # the warmup session played two games, one guess each
    assert len(sessions[1].guesses) == 2


def test_hunt_gives_up_after_max_sessions(small_index, scripted):
    connects = []

    def connect():
        connects.append(1)
        return scripted([Exhausted()])

    assert hunt(small_index, connect, max_sessions=3, sleep=lambda _: None) is None
    assert len(connects) == 3


def test_hunt_retries_failed_connects(small_index, scripted):
    attempts = []

    def connect():
        attempts.append(1)
        if len(attempts) < 3:
            raise ConnectionLost("down")
        return scripted([Solved("flag{late}")])

    assert hunt(small_index, connect, sleep=lambda _: None) == "flag{late}"
    assert len(attempts) == 3


def test_hunt_custom_suffix(small_index, scripted):
    s = scripted([Solved("flag{nope}"), Solved("CTF!")])
    assert hunt(small_index, lambda: s, flag_suffix="!", max_sessions=1) == "CTF!"


def test_hunt_empty_corpus():
    with pytest.raises(ValueError):
        hunt(build_index([]), lambda: None)
