from .session import DEFAULT_SESSION_TTL_SECONDS, HandshakeSession

__all__ = [
    "HandshakeSession",
    "DEFAULT_SESSION_TTL_SECONDS",
]
