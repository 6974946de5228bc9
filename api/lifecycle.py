"""
애플리케이션 라이프사이클 훅

웹 앱이 (재)배포될 때 애플리케이션 초기화를, 종료될 때 리소스 정리를
호출합니다. 애플리케이션 싱글톤(Config, DB, Mailer 등)의 생성/정리에 사용합니다.

애플리케이션 객체는 다음 두 메서드를 구현해야 합니다:

    * bootstrap() -> bool  - 실패 시 False
    * shutdown() -> bool   - 리소스 정리 실패 시 False

사용법:
    ```python
    class MyApplication:
        def bootstrap(self) -> bool:
            self.config = Config("app.properties")
            self.db = DB(self.config, "db")
            return True

        def shutdown(self) -> bool:
            self.db.dispose()
            return True

    app = create_app(application=MyApplication())
    ```
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Protocol, runtime_checkable

from fastapi import FastAPI

logger = logging.getLogger(__name__)


@runtime_checkable
class Application(Protocol):
    """라이프사이클 대상 애플리케이션"""

    def bootstrap(self) -> bool: ...

    def shutdown(self) -> bool: ...


class ContextListener:
    """컨텍스트 시작/종료 시 애플리케이션 초기화/정리 호출"""

    def __init__(self, application: Application):
        """
        Args:
            application: bootstrap()/shutdown() 을 구현한 애플리케이션 객체
        """
        if not isinstance(application, Application):
            raise TypeError(
                f"{type(application).__name__} 는 bootstrap() 과 shutdown() 을 "
                f"구현해야 합니다"
            )
        self.application = application
        self.initialized: bool | None = None

    @property
    def app_name(self) -> str:
        return type(self.application).__name__

    def context_initialized(self, state: Any) -> bool:
        """컨텍스트 시작

        bootstrap() 결과를 state.init 에 기록합니다. 실패해도 서버 시작은 계속됩니다.

        Args:
            state: 결과를 기록할 객체 (FastAPI app.state)

        Returns:
            bootstrap 성공 여부
        """
        logger.info(f"[Lifecycle] 컨텍스트 시작: {self.app_name}")

        try:
            status = bool(self.application.bootstrap())
        except Exception as e:
            logger.error(
                f"[Lifecycle] {self.app_name}.bootstrap() 호출 실패: {e}",
                exc_info=True,
            )
            status = False

        logger.info(f"[Lifecycle] 부트스트랩 결과: {status}")
        self.initialized = status
        state.init = status
        return status

    def context_destroyed(self) -> bool:
        """컨텍스트 종료

        초기화를 시도한 경우에만 shutdown() 을 호출합니다.

        Returns:
            shutdown 성공 여부 (호출하지 않았으면 False)
        """
        if self.initialized is None:
            return False

        logger.info(f"[Lifecycle] 애플리케이션 리소스 정리: {self.app_name}")
        try:
            status = bool(self.application.shutdown())
        except Exception as e:
            logger.error(
                f"[Lifecycle] {self.app_name}.shutdown() 호출 실패: {e}",
                exc_info=True,
            )
            return False

        if not status:
            logger.warning(f"[Lifecycle] {self.app_name}.shutdown() 실패 반환")
        return status

    @asynccontextmanager
    async def lifespan(self, app: FastAPI) -> AsyncGenerator[None, None]:
        """FastAPI lifespan 어댑터"""
        self.context_initialized(app.state)
        try:
            yield
        finally:
            self.context_destroyed()
