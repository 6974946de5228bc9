"""
SMTP 메일 발송

Config 의 접두사(prefix) 설정으로 메일을 보냅니다.

    prefix.host =
    prefix.port =
    prefix.user =
    prefix.pass =
    prefix.admin =
    prefix.debug = 0 (off) or 1 (on)
    prefix.active = true 일 때만 실제 발송
    prefix.tls.enable = STARTTLS 사용 여부
    prefix.ssl.enable = SMTPS(암묵적 TLS) 사용 여부
    prefix.context =

설정값은 생성 시 한 번만 읽습니다. tls.enable 과 ssl.enable 이 모두 켜져 있으면
SMTPS(ssl.enable) 를 사용합니다.
"""

import logging
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import TYPE_CHECKING

import aiosmtplib

from .errors import ErrorCategory, MailDeliveryError
from .types import MailSettings, parse_int

if TYPE_CHECKING:
    from config import Config

logger = logging.getLogger(__name__)

DEFAULT_FROM_DISPLAY = "SAGE"
DEFAULT_TIMEOUT = 30.0


class Mailer:
    """SMTP 메일 발송기"""

    def __init__(self, config: "Config", prefix: str, timeout: float = DEFAULT_TIMEOUT):
        """
        Args:
            config: 설정 저장소
            prefix: 설정 키 접두사 (예: "smtp" → smtp.host, smtp.port ...)
            timeout: SMTP 타임아웃 (초)

        Raises:
            ConfigError: prefix.port 가 숫자가 아닌 경우
        """
        self.config = config
        self.prefix = prefix
        self.timeout = timeout

        value = config.get_value
        self._settings = MailSettings(
            host=value(f"{prefix}.host"),
            debug=value(f"{prefix}.debug"),
            active=value(f"{prefix}.active"),
            port=value(f"{prefix}.port"),
            user=value(f"{prefix}.user"),
            password=value(f"{prefix}.pass"),
            admin=value(f"{prefix}.admin"),
            tls_enable=value(f"{prefix}.tls.enable"),
            ssl_enable=value(f"{prefix}.ssl.enable"),
            context=value(f"{prefix}.context"),
        )

        s = self._settings
        # 잘못된 포트는 발송 시점이 아닌 생성 시점에 보고
        parse_int(s.port, None, f"{prefix}.port")
        if s.debug_enabled:
            # SMTP 대화 내용 로깅
            logging.getLogger("aiosmtplib").setLevel(logging.DEBUG)
        logger.info(f"[Mailer] 메일 설정: {s.user}@{s.host}:{s.port}")

    @property
    def settings(self) -> MailSettings:
        return self._settings

    @property
    def context(self) -> str:
        return self._settings.context

    @property
    def admin_email(self) -> str:
        return self._settings.admin

    async def send_mail(
        self,
        to: str,
        subject: str,
        message: str,
        from_addr: str | None = None,
        from_display: str = DEFAULT_FROM_DISPLAY,
    ) -> bool:
        """HTML 메일 발송

        Args:
            to: 수신자 (쉼표 구분)
            subject: 제목
            message: HTML 본문
            from_addr: 발신 주소 (기본값: SMTP 계정)
            from_display: 발신자 표시 이름

        Returns:
            실제 발송 여부 (active 가 아니면 False)

        Raises:
            MailDeliveryError: 수신자가 없거나 SMTP 발송 실패
        """
        s = self._settings
        if not s.is_active:
            logger.debug(f"[Mailer] 비활성화 상태 - 발송 생략: {subject}")
            return False

        recipients = parse_recipients(to)
        if not recipients:
            raise MailDeliveryError(
                f"수신자 없음: {to!r}", ErrorCategory.NON_RETRYABLE
            )

        msg = MIMEText(message, "html", "utf-8")
        msg["From"] = formataddr((from_display, from_addr or s.user))
        msg["To"] = ", ".join(recipients)
        msg["Subject"] = subject

        logger.debug(f"[Mailer] 수신자 목록: {recipients}")

        password = s.password.get_secret_value()
        try:
            await aiosmtplib.send(
                msg,
                recipients=recipients,
                hostname=s.host,
                port=s.port_number,
                username=s.user or None,
                password=password or None,
                start_tls=s.start_tls,
                use_tls=s.use_tls,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"[Mailer] 메일 발송 실패: {s.host}:{s.port} - {e}")
            raise MailDeliveryError(f"메일 발송 실패: {e}") from e

        logger.debug("[Mailer] 메일 발송 완료")
        return True


def parse_recipients(to: str) -> list[str]:
    """쉼표 구분 수신자 문자열 → 주소 목록"""
    return [address.strip() for address in to.split(",") if address.strip()]
