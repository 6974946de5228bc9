"""
FastAPI 의존성 주입 모듈

Config 저장소, 환경 설정, API Key 인증 의존성을 관리합니다.
"""

import os

from fastapi import Depends, Request

from config import Config

from .middleware.auth import APIKeyAuth, get_api_key_auth


# ============================================================================
# API Key 인증 의존성
# ============================================================================
async def verify_api_key(
    request: Request,
    auth: APIKeyAuth = Depends(get_api_key_auth),
) -> str:
    """API Key 검증 의존성"""
    return await auth(request)


# ============================================================================
# Config 의존성
# ============================================================================
_config_store: Config | None = None


def set_config_store(store: Config | None) -> None:
    """Config 설정 (앱 시작 시 호출)

    Args:
        store: Config 인스턴스 (None이면 해제)
    """
    global _config_store
    _config_store = store


def get_config_store() -> Config | None:
    """Config 의존성

    Returns:
        Config 인스턴스 또는 None
    """
    return _config_store


# ============================================================================
# 환경 설정 의존성
# ============================================================================
class Settings:
    """앱 설정 클래스"""

    def __init__(self):
        self.env = os.getenv("ENV", "dev")
        self.debug = self.env == "dev"

        # API 서버 설정
        self.api_host = os.getenv("API_HOST", "0.0.0.0")
        self.api_port = int(os.getenv("API_PORT", "8000"))

        # 설정 파일
        self.config_path = os.getenv("CONFIG_PATH", "app.properties")
        self.config_refresh_delay = float(os.getenv("CONFIG_REFRESH_DELAY", "0"))


_settings: Settings | None = None


def get_settings() -> Settings:
    """앱 설정 의존성 (싱글톤)"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """설정 싱글톤 초기화 (환경변수 재로드용)"""
    global _settings
    _settings = None
