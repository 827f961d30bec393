"""
Fixtures compartidos: pool fake en memoria.
"""
from typing import Dict, List, Set, Tuple

import pytest

from sio_emitter.emitter import Emitter


class FakePool:
    """
    ChannelPool en memoria.

    Registra cada PUBLISH; los canales en `failing` lanzan ConnectionError.
    """

    def __init__(self, failing: Set[str] = None, receivers: Dict[str, int] = None):
        self.published: List[Tuple[str, bytes]] = []
        self.failing = set(failing or ())
        self.receivers = dict(receivers or {})
        self.closed = False
        self.attempts: List[str] = []

    def publish(self, channel: str, payload: bytes) -> int:
        self.attempts.append(channel)
        if channel in self.failing:
            raise ConnectionError(f"connection refused for {channel}")
        self.published.append((channel, payload))
        return self.receivers.get(channel, 1)

    def ping(self) -> bool:
        return not self.closed

    def close(self) -> None:
        self.closed = True

    @property
    def channels(self) -> List[str]:
        return [channel for channel, _ in self.published]


@pytest.fixture
def pool():
    return FakePool()


@pytest.fixture
def emitter(pool):
    return Emitter(pool=pool, key="socket.io")
