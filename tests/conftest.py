import pytest

from hotcold.distance import build_index

WORDS = ["cat", "cot", "dog", "dot", "cart", "card", "dart", "cog", "coat", "boat", "bat", "at"]


class ScriptedSession:
    """Returns canned replies (or raises canned exceptions) in order."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.guesses = []
        self.closed = False

    def submit_guess(self, word):
        self.guesses.append(word)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def close(self):
        self.closed = True


@pytest.fixture
def scripted():
    return ScriptedSession


@pytest.fixture(scope="session")
def small_index():
    return build_index(["cat", "cot", "dog", "dot"])


@pytest.fixture(scope="session")
def index():
    return build_index(WORDS)
