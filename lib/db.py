"""
DB 커넥션 풀 구성

Config 의 접두사(prefix) 설정으로 SQLAlchemy Engine(커넥션 풀)을 만듭니다.

    prefix.type = mysql
    prefix.driver = pymysql
    prefix.user = root
    prefix.pass =
    prefix.host = localhost
    prefix.name = database_name

풀 크기 등은 prefix.pool.* 로 덮어쓸 수 있습니다.
(initial, max_active, max_wait(ms), validation_interval(ms))

여러 DB 를 쓰려면 접두사를 달리하여 DB 인스턴스를 여러 개 만듭니다.
설정 파일이 바뀌면 Engine 을 다시 만들고 이전 풀은 정리합니다.
"""

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import URL, Engine, create_engine
from sqlalchemy.pool import QueuePool

from .errors import ConfigError
from .types import ConnectionSettings, PoolSettings

if TYPE_CHECKING:
    from config import Config

logger = logging.getLogger(__name__)

POOL_KEYS = ("initial", "max_active", "max_wait", "validation_interval")


class DB:
    """Config 기반 데이터 소스"""

    def __init__(
        self, config: "Config", prefix: str, pool: PoolSettings | None = None
    ):
        """
        Args:
            config: 설정 저장소
            prefix: 설정 키 접두사 (예: "db" → db.host, db.name ...)
            pool: 풀 설정 (None이면 prefix.pool.* 또는 기본값)
        """
        self.config = config
        self.prefix = prefix
        self._pool_override = pool
        self._engine: Engine | None = None
        self._pool_settings: PoolSettings | None = None

        self._build_data_source()
        config.notify_on_change(self.update)

    @property
    def data_source(self) -> Engine:
        """현재 Engine"""
        return self._engine

    @property
    def pool_settings(self) -> PoolSettings:
        return self._pool_settings

    @property
    def url(self) -> URL:
        return self._engine.url

    def update(self, source: Any) -> None:
        """설정 변경 시 데이터 소스 재구성"""
        logger.info(f"[DB] 설정 변경 감지 - 데이터 소스 재구성: {self.prefix}")
        previous = self._engine
        self._build_data_source()
        if previous is not None:
            previous.dispose()

    def dispose(self) -> None:
        """커넥션 풀 정리"""
        if self._engine is not None:
            self._engine.dispose()
            logger.info(f"[DB] 커넥션 풀 정리: {self.prefix}")

    def connection_settings(self) -> ConnectionSettings:
        """접두사 설정에서 접속 정보 조회"""
        value = self.config.get_value
        return ConnectionSettings(
            type=value(f"{self.prefix}.type"),
            driver=value(f"{self.prefix}.driver"),
            user=value(f"{self.prefix}.user"),
            password=value(f"{self.prefix}.pass"),
            host=value(f"{self.prefix}.host"),
            name=value(f"{self.prefix}.name"),
        )

    def _read_pool_settings(self) -> PoolSettings:
        if self._pool_override is not None:
            return self._pool_override
        return PoolSettings.from_values(
            {key: self.config.get_value(f"{self.prefix}.pool.{key}") for key in POOL_KEYS},
            prefix=f"{self.prefix}.pool",
        )

    def _build_data_source(self) -> None:
        """Engine 생성

        create_engine 은 커넥션을 바로 열지 않으므로 DB 서버가 없어도 생성됩니다.
        """
        settings = self.connection_settings()
        if not settings.type:
            raise ConfigError(f"DB 종류 설정 없음: {self.prefix}.type")
        pool = self._read_pool_settings()

        host, port = split_host(settings.host)
        url = URL.create(
            settings.drivername,
            username=settings.user or None,
            password=settings.password.get_secret_value() or None,
            host=host,
            port=port,
            database=settings.name or None,
        )
        logger.info(f"[DB] 연결 대상: {url.render_as_string(hide_password=True)}")

        options: dict[str, Any] = {"pool_pre_ping": pool.test_on_borrow}
        if pool.auto_commit:
            options["isolation_level"] = "AUTOCOMMIT"

        # 풀 크기 옵션은 QueuePool 을 쓰는 dialect 에만 적용
        pool_class = url.get_dialect().get_pool_class(url)
        if issubclass(pool_class, QueuePool):
            options.update(pool.engine_options())
        else:
            logger.debug(f"[DB] 풀 옵션 생략: {pool_class.__name__}")

        self._engine = create_engine(url, **options)
        self._pool_settings = pool


def split_host(host: str) -> tuple[str | None, int | None]:
    """host:port 분리 (포트가 없으면 None)"""
    if not host:
        return None, None
    name, sep, port = host.rpartition(":")
    if sep and port.isdigit():
        return name, int(port)
    return host, None
