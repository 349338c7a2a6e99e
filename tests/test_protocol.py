import pytest

from hotcold.errors import ProtocolError
from hotcold.protocol import (
    Exhausted,
    Ordinal,
    Solved,
    Verdict,
    decode_reply,
    format_reply,
    parse_reply,
)


@pytest.mark.parametrize("resp,expected", [
    ("🥵", Ordinal(Verdict.CLOSER)),
    ("🥵 warmer\n", Ordinal(Verdict.CLOSER)),
    ("🥶\n", Ordinal(Verdict.FARTHER)),
    ("😐\n", Ordinal(Verdict.SAME)),
    ("🥳 flag{test}\n", Solved("flag{test}")),
    ("🥳 flag{two words}", Solved("flag{two words}")),
    ("", Exhausted()),
])
def test_parse_reply(resp, expected):
    assert parse_reply(resp) == expected


@pytest.mark.parametrize("resp", ["?", "hello", "🥳", "🥳   \n", "\n🥵"])
def test_parse_reply_rejects_garbage(resp):
    with pytest.raises(ProtocolError):
        parse_reply(resp)


def test_decode_reply():
    assert decode_reply("🥶\n".encode("utf-8")) == Ordinal(Verdict.FARTHER)
    assert decode_reply(b"") == Exhausted()
    with pytest.raises(ProtocolError):
        decode_reply(b"\xf0\x9f")


def test_verdict_compare():
    assert Verdict.compare(1, 2) is Verdict.CLOSER
    assert Verdict.compare(2, 2) is Verdict.SAME
    assert Verdict.compare(3, 2) is Verdict.FARTHER


@pytest.mark.parametrize("reply", [
    Ordinal(Verdict.CLOSER), Ordinal(Verdict.SAME), Ordinal(Verdict.FARTHER), Solved("flag{x}"),
])
def test_format_reply_is_parseable(reply):
    assert parse_reply(format_reply(reply)) == reply
