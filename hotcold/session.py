"""TCP session with the remote oracle: one line out, one reply back."""

import logging
import socket
from typing import Optional

from . import config
from .errors import ConnectionLost
from .protocol import OracleReply, decode_reply

logger = logging.getLogger(__name__)


class Session:
    """
    Blocking connection to the oracle.

    Args:
        host: oracle host name or address
        port: oracle TCP port
        timeout: socket timeout in seconds
        recv_bytes: maximum size of one reply
    """

    def __init__(self, host: Optional[str] = None, port: Optional[int] = None,
                 timeout: Optional[float] = None, recv_bytes: Optional[int] = None):
        self.host = host or config.HOST
        self.port = port or config.PORT
        self.timeout = config.TIMEOUT if timeout is None else timeout
        self.recv_bytes = recv_bytes or config.RECV_BYTES

        logger.info("Connecting to %s:%d", self.host, self.port)
        try:
            self.sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except OSError as e:
            raise ConnectionLost(f"Could not connect to {self.host}:{self.port}: {e}") from e

    def submit_guess(self, word: str) -> OracleReply:
        """Send one guess and block until its reply arrives."""
        try:
            self.sock.sendall((word + "\n").encode("utf-8"))
            data = self.sock.recv(self.recv_bytes)
        except OSError as e:
            raise ConnectionLost(f"Lost connection while guessing {word!r}: {e}") from e
        return decode_reply(data)

    def close(self) -> None:
        try:
            self.sock.close()
        except OSError:
            logger.debug("Error while closing socket", exc_info=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
