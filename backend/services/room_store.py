"""In-memory offer/answer store, one RoomStore per room slug."""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

from models import HandshakeSession
from services.settings import get_session_ttl_seconds

logger = logging.getLogger(__name__)

Clock = Callable[[], int]
KeyFactory = Callable[[], str]


class RoomStoreError(Exception):
    """Base class for failures surfaced to room API callers."""


class InvalidOffer(RoomStoreError):
    def __init__(self) -> None:
        super().__init__("invalid offer")


class SessionNotFound(RoomStoreError):
    """No live record for the key: never created, or already swept."""

    def __init__(self, key: str | None) -> None:
        super().__init__(f"no session for key {key!r}")
        self.key = key


def now_ms() -> int:
    return int(time.time() * 1000)


def new_session_key() -> str:
    # uuid4 draws from os.urandom, same shape as crypto.randomUUID() on the clients.
    return str(uuid.uuid4())


def is_present(value: Any) -> bool:
    """
    Presence check matching the browser clients' truthiness.

    null, false, 0, NaN and "" count as absent; empty objects and arrays
    count as present.
    """
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0 and value == value
    if isinstance(value, str):
        return value != ""
    return True


class RoomStore:
    """
    Session map for a single room.

    The store does no locking of its own. Callers go through
    ``RoomRegistry.open`` which holds ``lock`` for the whole request, so
    every method here is a plain synchronous update of ``_sessions``.
    """

    def __init__(
        self,
        slug: str,
        *,
        ttl_seconds: int,
        clock: Clock = now_ms,
        key_factory: KeyFactory = new_session_key,
    ) -> None:
        self.slug = slug
        self.lock = asyncio.Lock()
        self._ttl = ttl_seconds
        self._clock = clock
        self._key_factory = key_factory
        self._sessions: dict[str, HandshakeSession] = {}

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, key: object) -> bool:
        return key in self._sessions

    def gc(self) -> None:
        """Drop every record older than the TTL (or with no creation time)."""
        now = self._clock()
        expired = [k for k, s in self._sessions.items() if s.is_expired(now, self._ttl)]
        for k in expired:
            del self._sessions[k]
        if expired:
            logger.debug(
                "[room_store] GC room=%r removed=%d remaining=%d",
                self.slug,
                len(expired),
                len(self._sessions),
            )

    def create_offer(self, offer: Any, key: str | None = None) -> str:
        """
        Store ``offer`` under ``key`` (a fresh random key when not given) and
        return the key. An existing record under the same key is replaced,
        dropping its answer.
        """
        if not is_present(offer):
            logger.info("[room_store] Rejected offer room=%r: missing or empty body", self.slug)
            raise InvalidOffer()
        key = key or self._key_factory()
        replaced = key in self._sessions
        self._sessions[key] = HandshakeSession(offer=offer, created_at=self._clock())
        logger.info(
            "[room_store] Offer stored room=%r key=%s replaced=%s sessions=%d",
            self.slug,
            key,
            replaced,
            len(self._sessions),
        )
        return key

    def submit_answer(self, key: str | None, answer: Any) -> None:
        session = self._sessions.get(key) if key else None
        if session is None or not is_present(session.offer):
            logger.info("[room_store] Answer for unknown key room=%r key=%s", self.slug, key)
            raise SessionNotFound(key)
        session.answer = answer
        logger.info("[room_store] Answer stored room=%r key=%s", self.slug, key)

    def read_session(self, key: str | None) -> dict[str, Any]:
        session = self._sessions.get(key) if key else None
        if session is None:
            raise SessionNotFound(key)
        return {
            "offer": session.offer,
            "answer": session.answer if is_present(session.answer) else None,
        }


class RoomRegistry:
    """
    Keyed registry of RoomStore instances, created on first reference.

    Each room has its own lock, so requests for one slug run one at a time
    while different slugs never wait on each other. A room is dropped once it
    is empty and no request holds or waits for it, so there is never more than
    one store per slug.
    """

    def __init__(
        self,
        *,
        ttl_seconds: int | None = None,
        clock: Clock = now_ms,
        key_factory: KeyFactory = new_session_key,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._key_factory = key_factory
        self._rooms: dict[str, RoomStore] = {}
        self._refs: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, slug: object) -> bool:
        return slug in self._rooms

    def get(self, slug: str) -> RoomStore | None:
        return self._rooms.get(slug)

    def _get_or_create(self, slug: str) -> RoomStore:
        room = self._rooms.get(slug)
        if room is None:
            ttl = self._ttl_seconds or get_session_ttl_seconds()
            room = RoomStore(
                slug,
                ttl_seconds=ttl,
                clock=self._clock,
                key_factory=self._key_factory,
            )
            self._rooms[slug] = room
            logger.debug("[room_store] Room created slug=%r ttl=%ds rooms=%d", slug, ttl, len(self._rooms))
        return room

    @asynccontextmanager
    async def open(self, slug: str) -> AsyncIterator[RoomStore]:
        """
        Hold the room for ``slug`` for the duration of the block.

        Expired records have already been swept when the block starts.
        """
        room = self._get_or_create(slug)
        self._refs[slug] = self._refs.get(slug, 0) + 1
        try:
            async with room.lock:
                room.gc()
                yield room
        finally:
            self._refs[slug] -= 1
            if not self._refs[slug]:
                del self._refs[slug]
                if not len(room) and self._rooms.get(slug) is room:
                    del self._rooms[slug]
                    logger.debug("[room_store] Room dropped slug=%r rooms=%d", slug, len(self._rooms))

    def clear(self) -> None:
        self._rooms.clear()
        self._refs.clear()


# Process-wide registry used by the room routes.
rooms = RoomRegistry()
