"""
에러 분류 시스템 테스트

에러 계층과 카테고리 지정 테스트.
"""

import pytest

from lib.errors import (
    ConfigError,
    ConfigLoadError,
    ConfigReloadError,
    CyclicReferenceError,
    ErrorCategory,
    MailDeliveryError,
    SupportError,
)


class TestErrorCategory:
    """에러 카테고리 테스트"""

    def test_load_error_not_retryable(self):
        """최초 로드 실패는 재시도 불가"""
        error = ConfigLoadError("missing", path="/etc/app.properties")

        assert error.category == ErrorCategory.NON_RETRYABLE
        assert error.path == "/etc/app.properties"

    def test_reload_error_retryable(self):
        """리로드 실패는 재시도 가능 (파일 교체 중 등)"""
        error = ConfigReloadError("locked")

        assert error.category == ErrorCategory.RETRYABLE
        assert error.path == ""

    def test_mail_error_default_retryable(self):
        assert MailDeliveryError("timeout").category == ErrorCategory.RETRYABLE

    def test_mail_error_explicit_category(self):
        error = MailDeliveryError("no recipients", ErrorCategory.NON_RETRYABLE)

        assert error.category == ErrorCategory.NON_RETRYABLE

    def test_base_error_unknown(self):
        assert SupportError("?").category == ErrorCategory.UNKNOWN

    def test_category_is_str(self):
        assert ErrorCategory.RETRYABLE == "retryable"


class TestCyclicReferenceError:
    """순환 참조 에러 테스트"""

    def test_chain_in_message(self):
        error = CyclicReferenceError(["a", "b", "a"])

        assert str(error) == "순환 또는 너무 깊은 변수 참조: a -> b -> a"
        assert error.chain == ["a", "b", "a"]
        assert error.category == ErrorCategory.NON_RETRYABLE

    def test_chain_copied(self):
        chain = ["a", "b"]
        error = CyclicReferenceError(chain)
        chain.append("c")

        assert error.chain == ["a", "b"]


class TestHierarchy:
    """에러 계층 테스트"""

    @pytest.mark.parametrize(
        "error",
        [
            ConfigLoadError("x"),
            ConfigReloadError("x"),
            CyclicReferenceError(["x"]),
        ],
    )
    def test_config_errors(self, error):
        assert isinstance(error, ConfigError)
        assert isinstance(error, SupportError)

    def test_mail_error_not_config_error(self):
        error = MailDeliveryError("x")

        assert isinstance(error, SupportError)
        assert not isinstance(error, ConfigError)
