"""
test_errors.py - FrontendError 테스트
"""

import pytest

from src.domain.errors import ErrorCodes, FrontendError


class TestFrontendError:

    def test_message_includes_code_and_context(self):
        err = FrontendError(ErrorCodes.LISTENER_INVALID_PORT, port="abc")

        assert err.code == "LISTENER_INVALID_PORT"
        assert str(err) == "[LISTENER_INVALID_PORT] port='abc'"

    def test_message_without_context(self):
        err = FrontendError(ErrorCodes.SERVER_CRASHED)
        assert str(err) == "[SERVER_CRASHED]"

    def test_to_dict(self):
        err = FrontendError(ErrorCodes.SHUTDOWN_TIMEOUT, timeout=5.0)
        assert err.to_dict() == {"code": "SHUTDOWN_TIMEOUT", "timeout": 5.0}

    def test_is_raisable(self):
        with pytest.raises(FrontendError) as exc_info:
            raise FrontendError(ErrorCodes.CONFIG_INVALID, field="x")

        assert exc_info.value.context == {"field": "x"}
