from models import DEFAULT_SESSION_TTL_SECONDS, HandshakeSession


def test_handshake_session_defaults() -> None:
    session = HandshakeSession(offer={"type": "offer", "sdp": "v=0"}, created_at=1_000)
    assert session.answer is None
    assert session.created_at == 1_000
    assert DEFAULT_SESSION_TTL_SECONDS == 600


def test_handshake_session_expiry_boundary() -> None:
    session = HandshakeSession(offer={"sdp": "v=0"}, created_at=10_000)
    assert not session.is_expired(10_000 + 600_000, 600)
    assert session.is_expired(10_000 + 600_001, 600)


def test_handshake_session_without_created_at_is_expired() -> None:
    session = HandshakeSession(offer={"sdp": "v=0"}, created_at=0)
    assert session.is_expired(1, 600)
