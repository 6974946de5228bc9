"""
에러 분류 시스템

설정 로드/리로드, 변수 치환, 메일 발송 에러를 하나의 계층으로 묶습니다.
호출자는 category 로 복구 가능 여부를 판단할 수 있습니다.
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """에러 카테고리"""

    RETRYABLE = "retryable"  # 파일 잠금, 네트워크 등 일시적 장애
    NON_RETRYABLE = "non_retryable"  # 잘못된 설정, 순환 참조
    UNKNOWN = "unknown"


class SupportError(Exception):
    """유틸리티 기본 에러"""

    def __init__(
        self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN
    ):
        super().__init__(message)
        self.category = category


class ConfigError(SupportError):
    """설정 관련 에러"""


class ConfigLoadError(ConfigError):
    """최초 로드 실패 (파일 없음, 파싱 오류)"""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message, ErrorCategory.NON_RETRYABLE)
        self.path = path


class ConfigReloadError(ConfigError):
    """리로드 실패 - 이전 설정값은 유지됨"""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message, ErrorCategory.RETRYABLE)
        self.path = path


class CyclicReferenceError(ConfigError):
    """{{변수}} 순환 참조 또는 치환 깊이 초과"""

    def __init__(self, chain: list[str]):
        super().__init__(
            "순환 또는 너무 깊은 변수 참조: " + " -> ".join(chain),
            ErrorCategory.NON_RETRYABLE,
        )
        self.chain = list(chain)


class MailDeliveryError(SupportError):
    """메일 발송 실패"""

    def __init__(
        self, message: str, category: ErrorCategory = ErrorCategory.RETRYABLE
    ):
        super().__init__(message, category)
