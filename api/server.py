"""
FastAPI 앱 정의 및 라우터 통합

애플리케이션 객체를 받아 시작/종료 시 bootstrap()/shutdown() 을 호출하는
호스트 앱을 만듭니다.

scripts/run_server.py 가 쓰는 uvicorn 팩토리 create_app_from_env() 는 설정 파일만
등록합니다. 라이프사이클 대상이 있는 호스트는 자체 팩토리에서
create_app_from_env(application=MyApplication()) 또는 create_app() 을 호출합니다.
"""

import logging
from contextlib import asynccontextmanager, nullcontext
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config import Config
from lib.errors import ConfigLoadError

from .dependencies import get_config_store, get_settings, set_config_store
from .lifecycle import Application, ContextListener
from .routes import config_router, health_router

logger = logging.getLogger(__name__)


def create_app(
    application: Application | None = None,
    config: Config | None = None,
    title: str = "Application Support API",
    version: str = "1.0.0",
    debug: bool = False,
) -> FastAPI:
    """FastAPI 앱 생성

    Args:
        application: 라이프사이클 대상 (bootstrap/shutdown 구현)
        config: 헬스체크/리로드 API 에 노출할 Config
            (None이고 application.config 가 Config 면 bootstrap 후 그것을 사용)
        title: API 제목
        version: API 버전
        debug: 디버그 모드

    Returns:
        FastAPI 앱 인스턴스
    """
    settings = get_settings()
    listener = ContextListener(application) if application is not None else None

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """앱 라이프사이클 관리

        시작 시:
            - Config 등록
            - application.bootstrap() 호출, 결과를 app.state.init 에 기록

        종료 시:
            - application.shutdown() 호출
            - Config 등록 해제
        """
        app.state.init = None
        if config is not None:
            set_config_store(config)

        hook = listener.lifespan(app) if listener else nullcontext()
        try:
            async with hook:
                if get_config_store() is None:
                    store = getattr(application, "config", None)
                    if isinstance(store, Config):
                        set_config_store(store)
                        logger.info(f"[Server] Config 등록: {store.property_file}")
                yield
        finally:
            set_config_store(None)

        logger.info("[Server] 서버 종료")

    app = FastAPI(
        title=title,
        version=version,
        debug=debug or settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    if application is not None:
        app.state.application = application

    # 라우터 등록
    app.include_router(health_router)  # /health
    app.include_router(config_router)  # /api/v1/config

    # 글로벌 예외 핸들러
    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """글로벌 예외 핸들러"""
        logger.exception(f"[Server] 처리되지 않은 예외: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "Internal server error",
                "details": str(exc) if settings.debug else None,
            },
        )

    return app


def create_app_from_env(application: Application | None = None) -> FastAPI:
    """환경변수 설정으로 앱 생성 (uvicorn factory 용)

    CONFIG_PATH 의 설정 파일을 로드합니다. 파일이 없으면 설정 기능 없이 시작합니다.

    Args:
        application: 라이프사이클 대상 (None이면 설정 API 만 제공)
    """
    settings = get_settings()

    config = None
    try:
        config = Config(
            settings.config_path, refresh_delay=settings.config_refresh_delay
        )
    except ConfigLoadError as e:
        logger.warning(f"[Server] 설정 로드 실패 - 설정 기능 비활성화: {e}")

    return create_app(application=application, config=config)
