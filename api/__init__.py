"""
애플리케이션 호스트 API 모듈

FastAPI 앱의 lifespan 으로 애플리케이션 초기화/정리를 호출합니다.
"""

from .lifecycle import Application, ContextListener
from .server import create_app, create_app_from_env

__all__ = ["Application", "ContextListener", "create_app", "create_app_from_env"]
