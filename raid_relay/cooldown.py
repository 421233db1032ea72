"""Per-party cooldown that suppresses duplicate raid reports.

Every member of a party runs the mod, so one completion arrives as several
near-simultaneous reports. The first one within the window is relayed; the
rest are rejected.

Decisions for the same key are serialized by a striped lock: a fixed pool of
locks, one picked per key by hash. Different keys only contend when they land
on the same stripe, which over-serializes but never lets two reports for one
key through together.
"""

import math
import threading
import time
import zlib
from typing import Callable

from raid_relay.models import RaidPartyKey


def stable_hash(key: RaidPartyKey) -> int:
    # hash() of a str is salted per process; crc32 keeps stripes reproducible.
    return zlib.crc32(f"{key.raid_name}\x00{key.first_player}".encode("utf-8"))


class CooldownGate:
    def __init__(
        self,
        window: float = 60.0,
        stripes: int = 32,
        clock: Callable[[], float] = time.monotonic,
        hasher: Callable[[RaidPartyKey], int] = stable_hash,
    ):
        if not math.isfinite(window) or window < 0:
            raise ValueError("window must be a finite, non-negative number")
        if stripes < 1:
            raise ValueError("stripes must be at least 1")
        self._window = window
        self._locks = [threading.Lock() for _ in range(stripes)]
        self._clock = clock
        self._hasher = hasher
        self._store: dict[RaidPartyKey, float] = {}  # key -> last admitted at

    @property
    def window(self) -> float:
        return self._window

    def lock_for(self, key: RaidPartyKey) -> threading.Lock:
        return self._locks[self._hasher(key) % len(self._locks)]

    def admit(self, key: RaidPartyKey) -> bool:
        """Return True and start a new window if the key is not cooling down.

        A report exactly ``window`` seconds after the last admitted one is
        still rejected.
        """
        with self.lock_for(key):
            now = self._clock()
            previous = self._store.get(key)
            if previous is not None and now - previous <= self._window:
                return False
            self._store[key] = now
            return True

    def last_admitted(self, key: RaidPartyKey) -> float | None:
        return self._store.get(key)

    @property
    def size(self) -> int:
        return len(self._store)
