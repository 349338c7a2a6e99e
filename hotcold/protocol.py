"""
Oracle replies
==============

Every guess gets exactly one reply from the oracle:

- Ordinal(verdict): how the guess compares to the previous guess
- Solved(payload):  the guess was the hidden word
- Exhausted():      no guesses remain

Wire format (UTF-8 text, first character decides):
    🥵  closer     🥶  farther     😐  same
    🥳 <payload>   success
    (empty)        the peer closed the stream, i.e. out of guesses
"""

import enum
from dataclasses import dataclass
from typing import Union

from .errors import ProtocolError


class Verdict(enum.IntEnum):
    """Sign of distance(target, guess) - distance(target, previous_guess)."""
    CLOSER = -1
    SAME = 0
    FARTHER = 1

    @classmethod
    def compare(cls, current: int, previous: int) -> "Verdict":
        if current < previous:
            return cls.CLOSER
        if current > previous:
            return cls.FARTHER
        return cls.SAME


@dataclass(frozen=True)
class Ordinal:
    verdict: Verdict


@dataclass(frozen=True)
class Solved:
    payload: str


@dataclass(frozen=True)
class Exhausted:
    pass


OracleReply = Union[Ordinal, Solved, Exhausted]


# ============================================================================
# WIRE FORMAT
# ============================================================================

HOT = "\U0001F975"      # 🥵
COLD = "\U0001F976"     # 🥶
NEUTRAL = "\U0001F610"  # 😐
PARTY = "\U0001F973"    # 🥳

_MARKERS = {
    HOT: Verdict.CLOSER,
    COLD: Verdict.FARTHER,
    NEUTRAL: Verdict.SAME,
}


def parse_reply(resp: str) -> OracleReply:
    """
    Interpret one raw reply.

    Raises:
        ProtocolError: unknown marker, or a success marker without a payload
    """
    if not resp:
        return Exhausted()

    marker = resp[0]
    if marker in _MARKERS:
        return Ordinal(_MARKERS[marker])
    if marker == PARTY:
        _, sep, payload = resp.partition(" ")
        payload = payload.strip()
        if not sep or not payload:
            raise ProtocolError(f"Success marker without payload: {resp!r}")
        return Solved(payload)

    raise ProtocolError(f"Unrecognized reply: {resp!r}")


def decode_reply(data: bytes) -> OracleReply:
    """Decode raw bytes from the wire and parse them."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ProtocolError(f"Reply is not valid UTF-8: {data!r}") from e
    return parse_reply(text)


def format_reply(reply: OracleReply) -> str:
    """Render a reply in wire format (used by the offline oracle's traces)."""
    if isinstance(reply, Ordinal):
        marker = {v: k for k, v in _MARKERS.items()}[reply.verdict]
        return marker
    if isinstance(reply, Solved):
        return f"{PARTY} {reply.payload}"
    return ""
