from unittest.mock import patch

from services.settings import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    get_host,
    get_log_level,
    get_port,
    get_session_ttl_seconds,
)


def test_session_ttl_default() -> None:
    with patch.dict("os.environ", {"SESSION_TTL_SECONDS": ""}, clear=False):
        assert get_session_ttl_seconds() == 600


def test_session_ttl_from_env() -> None:
    with patch.dict("os.environ", {"SESSION_TTL_SECONDS": " 120 "}, clear=False):
        assert get_session_ttl_seconds() == 120


def test_session_ttl_invalid_falls_back_to_default() -> None:
    with patch.dict("os.environ", {"SESSION_TTL_SECONDS": "ten minutes"}, clear=False):
        assert get_session_ttl_seconds() == 600
    with patch.dict("os.environ", {"SESSION_TTL_SECONDS": "-5"}, clear=False):
        assert get_session_ttl_seconds() == 600


def test_host_port_and_log_level() -> None:
    with patch.dict("os.environ", {"HOST": "", "PORT": "", "LOG_LEVEL": ""}, clear=False):
        assert get_host() == DEFAULT_HOST
        assert get_port() == DEFAULT_PORT
        assert get_log_level() == "INFO"
    with patch.dict("os.environ", {"HOST": "127.0.0.1", "PORT": "9000", "LOG_LEVEL": "debug"}, clear=False):
        assert get_host() == "127.0.0.1"
        assert get_port() == 9000
        assert get_log_level() == "DEBUG"
