from __future__ import annotations

import threading


def normalize_symbol(symbol: str) -> str:
    return str(symbol).strip().upper()


class LikeRegistry:
    """In-memory symbol -> liker identities map. Sets only ever grow."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._likes: dict[str, set[str]] = {}
        self.registered_likes = 0
        self.duplicate_likes = 0

    def register_like(self, symbol: str, identity: str) -> bool:
        key = normalize_symbol(symbol)
        with self._lock:
            likers = self._likes.setdefault(key, set())
            if identity in likers:
                self.duplicate_likes += 1
                return False
            likers.add(identity)
            self.registered_likes += 1
            return True

    def count(self, symbol: str) -> int:
        key = normalize_symbol(symbol)
        with self._lock:
            return len(self._likes.get(key, ()))

    def metrics(self) -> dict[str, int]:
        with self._lock:
            return {
                "liked_symbols": sum(1 for likers in self._likes.values() if likers),
                "total_likes": sum(len(likers) for likers in self._likes.values()),
                "registered_likes": self.registered_likes,
                "duplicate_likes": self.duplicate_likes,
            }
