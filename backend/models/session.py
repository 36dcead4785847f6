from dataclasses import dataclass
from typing import Any


@dataclass
class HandshakeSession:
    offer: Any                     # parsed JSON body, stored verbatim
    created_at: int                # ms since epoch, set once
    answer: Any = None             # set by a later answer submit; last write wins

    def is_expired(self, now_ms: int, ttl_seconds: int) -> bool:
        if not self.created_at:
            return True
        return now_ms - self.created_at > ttl_seconds * 1000


DEFAULT_SESSION_TTL_SECONDS = 600  # records older than this are swept on next access
