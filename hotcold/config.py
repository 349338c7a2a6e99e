"""Centralised runtime configuration loaded from environment variables."""

import os

HOST: str = os.getenv("HOTCOLD_HOST", "157.245.28.90")
PORT: int = int(os.getenv("HOTCOLD_PORT", "12000"))

WORDS_PATH: str = os.getenv("HOTCOLD_WORDS", "words.txt")

# Socket timeout in seconds and the size of a single reply read
TIMEOUT: float = float(os.getenv("HOTCOLD_TIMEOUT", "30"))
RECV_BYTES: int = int(os.getenv("HOTCOLD_RECV_BYTES", "1024"))

RETRY_DELAY: float = float(os.getenv("HOTCOLD_RETRY_DELAY", "1.0"))
FLAG_SUFFIX: str = os.getenv("HOTCOLD_FLAG_SUFFIX", "}")

LOG_LEVEL: str = os.getenv("HOTCOLD_LOG_LEVEL", "INFO").upper()
