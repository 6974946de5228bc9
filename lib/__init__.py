"""
공통 라이브러리

DB 커넥션 풀 구성, SMTP 메일 발송, 에러 분류, 설정 모델 제공.
"""

from .db import DB
from .errors import (
    ConfigError,
    ConfigLoadError,
    ConfigReloadError,
    CyclicReferenceError,
    ErrorCategory,
    MailDeliveryError,
    SupportError,
)
from .mailer import Mailer, parse_recipients
from .types import ConnectionSettings, MailSettings, PoolSettings

__all__ = [
    # DB
    "DB",
    # Mailer
    "Mailer",
    "parse_recipients",
    # Errors
    "ErrorCategory",
    "SupportError",
    "ConfigError",
    "ConfigLoadError",
    "ConfigReloadError",
    "CyclicReferenceError",
    "MailDeliveryError",
    # Types
    "ConnectionSettings",
    "MailSettings",
    "PoolSettings",
]
