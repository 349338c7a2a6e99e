"""Exception types raised by the hot/cold solver."""


class HotColdError(Exception):
    """Base class for every error raised by this package."""


class ProtocolError(HotColdError):
    """The oracle sent a reply that matches none of the known shapes."""


class ConnectionLost(HotColdError):
    """Transport-level failure talking to the oracle."""


class NoCandidatesRemain(HotColdError):
    """Filtering removed every candidate, so the feedback was inconsistent."""


class UnknownWordError(HotColdError, KeyError):
    """A word was looked up that is not part of the indexed corpus."""
