"""
공용 타입 정의

Config 에서 접두사(prefix) 단위로 읽어 들이는 DB/메일 설정 모델.
"""

from typing import Any

from pydantic import BaseModel, Field, SecretStr, ValidationError

from .errors import ConfigError

TRUE_VALUES = ("true", "1", "yes", "on")


def is_true(value: str) -> bool:
    return value.strip().lower() in TRUE_VALUES


def parse_int(value: str, default: int | None, key: str) -> int | None:
    """정수 설정값 변환 (빈 값은 default)

    Raises:
        ConfigError: 숫자가 아닌 경우
    """
    value = value.strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"정수 설정값이 아님: {key}={value!r}") from e


class ConnectionSettings(BaseModel):
    """DB 접속 정보 (prefix.type, prefix.driver, ...)"""

    type: str = Field(..., description="DB 종류 (postgresql, mysql, sqlite ...)")
    driver: str = Field(default="", description="DBAPI 드라이버 (psycopg2, pymysql ...)")
    user: str = ""
    password: SecretStr = SecretStr("")
    host: str = ""
    name: str = Field(default="", description="데이터베이스 이름 (sqlite는 파일 경로)")

    @property
    def drivername(self) -> str:
        """SQLAlchemy drivername (type+driver)"""
        return f"{self.type}+{self.driver}" if self.driver else self.type


class PoolSettings(BaseModel):
    """커넥션 풀 설정

    기본값은 기존 운영 환경의 풀 설정을 그대로 따릅니다.
    """

    initial_size: int = Field(default=10, ge=0, description="유지할 커넥션 수")
    max_active: int = Field(default=100, ge=1, description="최대 커넥션 수")
    max_wait_ms: int = Field(default=10_000, ge=0, description="커넥션 대기 시간 (ms)")
    validation_interval_ms: int = Field(
        default=30_000, ge=0, description="커넥션 재검증/교체 주기 (ms)"
    )
    test_on_borrow: bool = Field(default=True, description="대여 시 커넥션 검증")
    auto_commit: bool = True

    @classmethod
    def from_values(cls, values: dict[str, str], prefix: str = "pool") -> "PoolSettings":
        """설정 문자열에서 생성 (빈 값은 기본값 사용)

        Raises:
            ConfigError: 숫자가 아니거나 범위를 벗어난 값
        """
        defaults = cls()

        def number(key: str, default: int) -> int:
            return parse_int(values.get(key, ""), default, f"{prefix}.{key}")

        try:
            return cls(
                initial_size=number("initial", defaults.initial_size),
                max_active=number("max_active", defaults.max_active),
                max_wait_ms=number("max_wait", defaults.max_wait_ms),
                validation_interval_ms=number(
                    "validation_interval", defaults.validation_interval_ms
                ),
            )
        except ValidationError as e:
            raise ConfigError(f"잘못된 풀 설정: {prefix}.* - {e}") from e

    def engine_options(self) -> dict[str, Any]:
        """QueuePool 계열 create_engine 옵션"""
        return {
            "pool_size": self.initial_size,
            "max_overflow": max(self.max_active - self.initial_size, 0),
            "pool_timeout": self.max_wait_ms / 1000,
            "pool_recycle": self.validation_interval_ms // 1000,
        }


class MailSettings(BaseModel):
    """SMTP 설정 (prefix.host, prefix.port, ...)"""

    host: str = ""
    port: str = ""
    user: str = ""
    password: SecretStr = SecretStr("")
    admin: str = ""
    debug: str = ""
    active: str = ""
    tls_enable: str = ""
    ssl_enable: str = ""
    context: str = ""

    @property
    def is_active(self) -> bool:
        """발송 활성화 여부 (정확히 "true" 일 때만)"""
        return self.active == "true"

    @property
    def port_number(self) -> int | None:
        return parse_int(self.port, None, "port")

    @property
    def start_tls(self) -> bool:
        """STARTTLS 사용 여부 (ssl.enable 이 함께 켜져 있으면 SMTPS 우선)"""
        return is_true(self.tls_enable) and not self.use_tls

    @property
    def use_tls(self) -> bool:
        return is_true(self.ssl_enable)

    @property
    def debug_enabled(self) -> bool:
        return is_true(self.debug)
